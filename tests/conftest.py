"""Pytest fixtures for cljr tests."""

from __future__ import annotations

from pathlib import Path

import pytest


class MockSettingsStore:
    """Mock settings store for testing."""

    def __init__(self, settings: dict | None = None):
        self.settings = settings or {}

    def load_all(self) -> dict:
        return self.settings

    def save_all(self, settings: dict) -> None:
        self.settings = settings


@pytest.fixture
def settings_store() -> MockSettingsStore:
    return MockSettingsStore()


@pytest.fixture
def clojure_project(tmp_path: Path) -> Path:
    """A small Leiningen project with a library and a test namespace."""
    root = tmp_path / "my-app"
    (root / "src" / "my_app").mkdir(parents=True)
    (root / "test" / "my_app").mkdir(parents=True)
    (root / "project.clj").write_text(
        '(defproject my-app "0.1.0"\n'
        '  :dependencies [[org.clojure/clojure "1.5.1"]])\n',
        encoding="utf-8",
    )
    (root / "src" / "my_app" / "core.clj").write_text(
        "(ns my-app.core)\n\n(defn greet [] \"hi\")\n",
        encoding="utf-8",
    )
    (root / "src" / "my_app" / "util.clj").write_text(
        "(ns my-app.util\n  (:require [my-app.core :as core]))\n\n(defn hello [] (core/greet))\n",
        encoding="utf-8",
    )
    (root / "test" / "my_app" / "core_test.clj").write_text(
        "(ns my-app.core-test\n  (:use my-app.core\n        clojure.test))\n",
        encoding="utf-8",
    )
    return root
