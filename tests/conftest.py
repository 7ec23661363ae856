"""
Shared pytest fixtures for the lint-todo test suite.

Provides fixtures built on LintTodoTestFactory: real source files and a
real .lint-todo ledger under tmp_path, with a fixed "today".

Usage in tests:
    def test_something(todo_factory):
        todo_factory.record_todos("a.css")
        ledger = todo_factory.ledger()
        # ... test against the recorded todos
"""

import pytest
from tests.factories import LintTodoTestFactory


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the runner's environment from leaking into formatter settings."""
    for name in (
        "UPDATE_TODO", "INCLUDE_TODO", "TODO_DAYS_TO_WARN", "TODO_DAYS_TO_ERROR",
        "NO_CLEAN_TODO", "CLEAN_TODO", "COMPACT_TODO", "FORMAT_TODO_AS",
        "STYLELINT_TODO_DIR", "CI", "CONTINUOUS_INTEGRATION", "BUILD_NUMBER",
        "RUN_ID", "LINT_TODO_SYMBOLS", "LINT_TODO_COLOR", "LINT_TODO_DEBUG",
        "LINT_TODO_ASCII_ONLY", "LINT_TODO_UNICODE", "NO_COLOR", "FORCE_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def todo_factory(tmp_path):
    """
    Create an empty LintTodoTestFactory.

    Example:
        def test_update(todo_factory):
            output = todo_factory.format(todo_factory.hex_results("a.css"), update_todo=True)
            assert "1 todos created" in output
    """
    return LintTodoTestFactory(tmp_path)


@pytest.fixture
def recorded(todo_factory):
    """
    Factory whose ledger already holds a todo for a.css and b.css.

    Example:
        def test_stable(recorded):
            results = recorded.hex_results("a.css", "b.css")
            assert recorded.format(results) == ""
    """
    todo_factory.record_todos("a.css", "b.css")
    return todo_factory
