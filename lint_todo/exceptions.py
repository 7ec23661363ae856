"""
Exceptions -- Fatal error taxonomy for the todo formatter

Every error raised here aborts the whole invocation before any output
is written. Ledger I/O errors are not wrapped: they propagate as the
OSError the storage layer raised. Undecodable storage lines raise
LedgerCorruptError.
"""


class LintTodoError(Exception):
    """Base class for fatal formatter errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TodoConfigError(LintTodoError):
    """
    Raised for invalid or contradictory todo configuration.

    Covers conflicting config sources, decay thresholds where warn is not
    below error, and day overrides used without update mode.
    """


class UnknownSeverityError(LintTodoError):
    """Raised when a ledger severity code or diagnostic severity is not recognized."""

    def __init__(self, value):
        self.value = value
        super().__init__(f'Unknown severity: "{value}"')


class UnknownFormatError(LintTodoError):
    """Raised when FORMAT_TODO_AS names no built-in or importable format."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"You must use a valid FORMAT_TODO_AS: {name} or a function")


class LedgerCorruptError(LintTodoError):
    """Raised when a storage file line cannot be decoded into a record operation."""

    def __init__(self, path, line: int):
        self.path = path
        self.line = line
        super().__init__(f"Could not read line {line} of {path}; fix or delete the line and rerun")
