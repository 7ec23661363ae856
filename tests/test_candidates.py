"""
Tests for build_maybe_todos -- Candidate records from a lint run
"""

from datetime import date

from lint_todo.core.diagnostics import Diagnostic, Result, Severity
from lint_todo.ledger import TodoConfig, build_range
from lint_todo.todos import DEFAULT_ENGINE, build_maybe_todos


CREATED = date(2026, 3, 2)


class TestCandidateSelection:
    """Which diagnostics become candidates."""

    def test_only_errors(self, todo_factory):
        """Warnings, todos and off diagnostics are not candidates."""
        result = todo_factory.result("a.css", [
            todo_factory.error(),
            todo_factory.error(line=1, column=1, rule="a", severity=Severity.WARNING),
            todo_factory.error(line=1, column=2, rule="b", severity=Severity.TODO),
            todo_factory.error(line=1, column=3, rule="c", severity=Severity.OFF),
        ])

        candidates = build_maybe_todos(todo_factory.tmp_path, [result], created=CREATED)

        assert [c.rule_id for c in candidates] == ["color-no-hex"]

    def test_empty_results(self, todo_factory):
        """Results without diagnostics produce nothing."""
        result = todo_factory.result("a.css")
        assert build_maybe_todos(todo_factory.tmp_path, [result]) == set()

    def test_duplicates_collapse(self, todo_factory):
        """Equivalent errors yield a single candidate."""
        result = todo_factory.result("a.css", [todo_factory.error(), todo_factory.error()])

        candidates = build_maybe_todos(todo_factory.tmp_path, [result], created=CREATED)

        assert len(candidates) == 1

    def test_input_not_mutated(self, todo_factory):
        """Building candidates leaves the results untouched."""
        diagnostic = todo_factory.error()
        result = todo_factory.result("a.css", [diagnostic])

        build_maybe_todos(todo_factory.tmp_path, [result], created=CREATED)

        assert diagnostic.severity == Severity.ERROR
        assert result.diagnostics == [diagnostic]


class TestCandidateFields:
    """Contents of a candidate record."""

    def test_identity_fields(self, todo_factory):
        """Engine, relative path, rule and range come from the diagnostic."""
        diagnostic = todo_factory.error()
        result = todo_factory.result("src/a.css", [diagnostic])

        (candidate,) = build_maybe_todos(todo_factory.tmp_path, [result], created=CREATED)

        assert candidate.engine == DEFAULT_ENGINE
        assert candidate.file_path == "src/a.css"
        assert candidate.rule_id == "color-no-hex"
        assert candidate.range == build_range(2, 10, 2, 10)
        assert candidate.original_diagnostic is diagnostic

    def test_missing_rule_is_empty(self, todo_factory):
        """A diagnostic without a rule gets an empty rule id."""
        result = todo_factory.result("a.css", [Diagnostic(line=1, column=1, text="Broken")])

        (candidate,) = build_maybe_todos(todo_factory.tmp_path, [result], created=CREATED)

        assert candidate.rule_id == ""

    def test_source_snippet(self, todo_factory):
        """The source text covered by the range is captured."""
        diagnostic = todo_factory.error(line=2, column=3)
        diagnostic.end_line = 2
        diagnostic.end_column = 14
        result = todo_factory.result("a.css", [diagnostic])

        (candidate,) = build_maybe_todos(todo_factory.tmp_path, [result], created=CREATED)

        assert candidate.source == "color: #fff"

    def test_custom_engine(self, todo_factory):
        """The engine can be overridden."""
        result = todo_factory.result("a.css", [todo_factory.error()])

        (candidate,) = build_maybe_todos(todo_factory.tmp_path, [result], engine="other", created=CREATED)

        assert candidate.engine == "other"

    def test_decay_dates(self, todo_factory):
        """Decay dates come from the rule's configured days."""
        config = TodoConfig.from_dict({
            "days_to_decay": {"warn": 10, "error": 20},
            "days_to_decay_by_rule": {"color-no-hex": {"warn": 1}},
        })
        results = [todo_factory.result("a.css", [
            todo_factory.error(),
            todo_factory.error(line=1, column=1, rule="block-no-empty"),
        ])]

        candidates = {c.rule_id: c for c in build_maybe_todos(todo_factory.tmp_path, results, config, created=CREATED)}

        assert candidates["color-no-hex"].warn_date == date(2026, 3, 3)
        assert candidates["color-no-hex"].error_date is None
        assert candidates["block-no-empty"].warn_date == date(2026, 3, 12)
        assert candidates["block-no-empty"].error_date == date(2026, 3, 22)
