"""
Symbols -- Visual vocabulary for diagnostic severities

Progressive enhancement: Unicode when supported, ASCII fallback.
Configurable via the display.symbols setting or LINT_TODO_SYMBOLS.

Also provides safe output utilities:
- safe_print(): Encoding-safe printing of report text
- sanitize_control_chars(): Strip terminal control characters from messages
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Safe Output Utilities
# =============================================================================

# Unicode to ASCII replacements used when the output stream cannot encode
UNICODE_TO_ASCII = {
    '✖': 'x',
    '⚠': '!',
    'ℹ': 'i',
    '⏾': '-',
    '✔': 'ok',
    '…': '...',
    '–': '-',
    '—': '--',
    '•': '*',
}


def sanitize_control_chars(text: str) -> str:
    """
    Remove control characters that could manipulate terminal display.

    Preserves: newlines (\\n), tabs (\\t), carriage returns (\\r)

    Args:
        text: Raw text from a lint message or config file

    Returns:
        Sanitized text safe for display
    """
    if not text:
        return text

    result = []
    for char in text:
        code = ord(char)
        if code >= 32 or code in (9, 10, 13):
            result.append(char)
    return ''.join(result)


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print with graceful encoding fallback.

    Handles UnicodeEncodeError by replacing unencodable characters
    with ASCII equivalents or '?' as last resort.

    Args:
        text: Text to print (may contain any Unicode)
        end: String appended after text (default: newline)
        file: Output stream (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        safe_text = text
        for unicode_char, ascii_equiv in UNICODE_TO_ASCII.items():
            safe_text = safe_text.replace(unicode_char, ascii_equiv)

        try:
            print(safe_text, end=end, file=file)
        except UnicodeEncodeError:
            encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
            encoded = safe_text.encode(encoding, errors='replace')
            print(encoded.decode(encoding), end=end, file=file)


# =============================================================================
# Symbol Sets
# =============================================================================

@dataclass(frozen=True)
class SymbolSet:
    """Complete set of symbols for severities and report markers."""
    # Severities
    error: str
    warning: str
    todo: str
    off: str

    # Report markers
    success: str
    ellipsis: str

    def for_severity(self, severity: str) -> str:
        """Symbol for a severity value; unknown severities print as themselves."""
        return getattr(self, severity) if severity in SEVERITY_ATTRS else severity


SEVERITY_ATTRS = ('error', 'warning', 'todo', 'off')


UNICODE = SymbolSet(
    error='✖',
    warning='⚠',
    todo='ℹ',
    off='⏾',
    success='✔',
    ellipsis='…',
)

ASCII = SymbolSet(
    error='x',
    warning='!',
    todo='i',
    off='-',
    success='ok',
    ellipsis='...',
)


def supports_unicode() -> bool:
    """
    Check if environment likely supports Unicode output.

    Conservative: defaults to ASCII if uncertain.
    """
    if os.environ.get('LINT_TODO_ASCII_ONLY', '').lower() in ('1', 'true', 'yes'):
        return False
    if os.environ.get('LINT_TODO_UNICODE', '').lower() in ('1', 'true', 'yes'):
        return True

    stdout_encoding = getattr(sys.stdout, 'encoding', None)
    if stdout_encoding:
        encoding_lower = stdout_encoding.lower().replace('-', '').replace('_', '')
        if encoding_lower.startswith('utf'):
            return True
        if encoding_lower.startswith('cp') or encoding_lower in ('ascii', 'latin1', 'iso88591'):
            return False

    lang = os.environ.get('LANG', '').lower()
    lc_all = os.environ.get('LC_ALL', '').lower()
    if 'utf-8' in lang or 'utf8' in lang or 'utf-8' in lc_all or 'utf8' in lc_all:
        return True

    if os.environ.get('WT_SESSION') or os.environ.get('TERM_PROGRAM') in ('vscode', 'iTerm.app', 'Apple_Terminal'):
        return True

    return False


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get appropriate symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)

    Returns:
        Appropriate SymbolSet for the environment
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
