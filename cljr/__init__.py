"""cljr - Clojure namespace refactoring for the terminal."""

__version__ = "0.1.0"
