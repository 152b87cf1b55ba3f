"""Clojure namespace and project conventions."""
