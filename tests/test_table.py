"""
Tests for TableRenderer -- Per-file diagnostic tables
"""

from lint_todo.core.diagnostics import Diagnostic, Severity
from lint_todo.output import TableRenderer, clean_message, sort_diagnostics
from lint_todo.presentation.colors import Palette
from lint_todo.presentation.symbols import ASCII, UNICODE


def _diag(line=1, column=1, text="Problem", rule="rule-a", severity=Severity.ERROR):
    return Diagnostic(line=line, column=column, text=text, rule=rule, severity=severity)


class TestCleanMessage:
    """Message text shown in the table."""

    def test_strips_rule_suffix(self):
        """A trailing " (rule)" is dropped."""
        assert clean_message("Unexpected hex color (color-no-hex)", "color-no-hex") == "Unexpected hex color"

    def test_strips_trailing_period(self):
        """A trailing period is dropped."""
        assert clean_message("Expected a newline.", "rule") == "Expected a newline"

    def test_collapses_control_characters(self):
        """Runs of control characters become one space."""
        assert clean_message("Bad\x01\x02value", None) == "Bad value"

    def test_keeps_other_parentheses(self):
        """Only the matching rule suffix is removed."""
        assert clean_message("Expected (foo)", "bar") == "Expected (foo)"


class TestSortDiagnostics:
    """Row order."""

    def test_positionless_then_line_then_column(self):
        """File-level diagnostics first, then by position."""
        a, b, c, d = _diag(3, 1), _diag(1, 5), _diag(1, 2), _diag(0, 0)

        assert sort_diagnostics([a, b, c, d]) == [d, c, b, a]


class TestRenderFile:
    """Table layout."""

    def test_columns_align(self, tmp_path):
        """Position, symbol, message and rule line up across rows."""
        renderer = TableRenderer(UNICODE, cwd=str(tmp_path))

        output = renderer.render_file(str(tmp_path / "a.css"), [
            _diag(12, 3, "Long message here", "rule-long"),
            _diag(2, 10, "Short", "r", Severity.WARNING),
        ])

        assert output.splitlines() == [
            "a.css",
            "  2:10  ⚠  Short              r",
            " 12:3   ✖  Long message here  rule-long",
        ]

    def test_positionless_row(self, tmp_path):
        """Rows without a position leave the position column blank."""
        renderer = TableRenderer(ASCII, cwd=str(tmp_path))

        output = renderer.render_file(str(tmp_path / "a.css"), [_diag(0, 0, "File problem", "invalid")])

        assert output.splitlines()[1] == "      x  File problem  invalid"

    def test_relative_header(self, tmp_path):
        """Headers are relative to cwd with forward slashes."""
        renderer = TableRenderer(UNICODE, cwd=str(tmp_path))

        output = renderer.render_file(str(tmp_path / "src" / "a.css"), [_diag()])

        assert output.splitlines()[0] == "src/a.css"

    def test_pseudo_source_underlined(self, tmp_path):
        """<input>-style sources are underlined when colors are on."""
        renderer = TableRenderer(UNICODE, palette=Palette(enabled=True), cwd=str(tmp_path))

        header = renderer.render_file("<input css 1>", [_diag()]).splitlines()[0]

        assert header == "\x1b[4m<input css 1>\x1b[0m"

    def test_no_source_has_no_header(self, tmp_path):
        """Without a source only the rows are rendered."""
        renderer = TableRenderer(UNICODE, cwd=str(tmp_path))

        output = renderer.render_file(None, [_diag()])

        assert output == " 1:1  ✖  Problem  rule-a"


class TestWrapping:
    """Message wrapping against the available width."""

    LONG = "word " * 20 + "end"

    def test_no_width_never_wraps(self, tmp_path):
        """Without a width each diagnostic is one row."""
        renderer = TableRenderer(UNICODE, cwd=str(tmp_path))

        output = renderer.render_file(str(tmp_path / "a.css"), [_diag(text=self.LONG * 2)])

        assert len(output.splitlines()) == 2

    def test_fits_without_wrapping(self, tmp_path):
        """Rows that fit the width are left alone."""
        renderer = TableRenderer(UNICODE, width=200, cwd=str(tmp_path))

        output = renderer.render_file(str(tmp_path / "a.css"), [_diag(text=self.LONG)])

        assert len(output.splitlines()) == 2

    def test_wraps_to_width(self, tmp_path):
        """Too-wide messages wrap so rows fit the minimum width."""
        renderer = TableRenderer(UNICODE, width=40, cwd=str(tmp_path))

        output = renderer.render_file(str(tmp_path / "a.css"), [_diag(text=self.LONG * 2, rule="some-rule")])

        rows = output.splitlines()[1:]
        assert len(rows) > 1
        assert all(len(row) <= 80 for row in rows)
        assert rows[0].endswith("some-rule")
