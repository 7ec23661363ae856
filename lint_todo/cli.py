"""
CLI -- Format a stylelint JSON report with todo support

Usage:
    stylelint "**/*.css" --formatter json | lint-todo
    UPDATE_TODO=1 lint-todo report.json
    lint-todo --fix report.json

Behaviour is driven by the same environment variables as the formatter
(UPDATE_TODO, INCLUDE_TODO, CLEAN_TODO, NO_CLEAN_TODO, COMPACT_TODO,
FORMAT_TODO_AS, TODO_DAYS_TO_WARN, TODO_DAYS_TO_ERROR, STYLELINT_TODO_DIR).

Exit codes:
    0  no errors remain
    1  configuration or input error
    2  errors remain after todo reconciliation
"""

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import List, Optional

import orjson

from . import __version__
from .config import ConfigManager, TodoSettings, get_base_dir
from .core.diagnostics import LinterReturn, results_from_data
from .exceptions import LintTodoError
from .formatter import TodoFormatter
from .ledger import TodoLedger
from .output import PrintOptions
from .presentation.colors import Palette, color_enabled
from .presentation.symbols import get_symbols, safe_print


EXIT_OK = 0
EXIT_FATAL = 1
EXIT_ERRORED = 2


def _configure_logging():
    if os.environ.get("LINT_TODO_DEBUG", "").lower() in ("1", "true", "yes"):
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _read_report(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _display_options(base_dir: Path) -> PrintOptions:
    """Symbols, colors and wrap width for terminal output."""
    display = ConfigManager(base_dir).load().display
    width = shutil.get_terminal_size().columns if sys.stdout.isatty() else None
    return PrintOptions(
        symbols=get_symbols(display.symbols),
        palette=Palette(enabled=color_enabled(display.color)),
        width=width,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lint-todo",
        description="Format stylelint results, turning known errors into todos",
    )
    parser.add_argument(
        'report',
        nargs='?',
        default='-',
        help='stylelint JSON report (default: read from stdin)'
    )
    parser.add_argument(
        '--fix',
        action='store_true',
        help='Delete todos whose errors no longer reproduce'
    )
    parser.add_argument(
        '--project', '-p',
        default=None,
        help='Directory holding .lint-todo (default: STYLELINT_TODO_DIR or current)'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'lint-todo {__version__}'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the lint-todo CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging()

    base_dir = Path(args.project).resolve() if args.project else get_base_dir()

    try:
        results = results_from_data(orjson.loads(_read_report(args.report)))
    except (OSError, ValueError, LintTodoError) as e:
        safe_print(f"Error: Could not read lint report: {e}", file=sys.stderr)
        return EXIT_FATAL

    linter_return = LinterReturn(cwd=os.getcwd())
    todo_formatter = TodoFormatter(
        ledger=TodoLedger(base_dir),
        settings=TodoSettings.from_env(fix=args.fix),
        display=_display_options(base_dir),
    )

    try:
        output = todo_formatter.format(results, linter_return)
    except LintTodoError as e:
        safe_print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FATAL

    if output:
        safe_print(output, end="" if output.endswith("\n") else "\n")

    return EXIT_ERRORED if linter_return.errored else EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
