"""
Colors -- Terminal coloring for report text

Thin layer over termcolor. A disabled Palette returns text unchanged,
so width calculations can always run on plain text first.
"""

import os
import sys
from typing import List, Optional

from termcolor import colored


SEVERITY_COLORS = {
    'error': 'red',
    'warning': 'yellow',
    'todo': 'cyan',
    'off': 'green',
}

VALID_COLOR_MODES = ('auto', 'always', 'never')


def color_enabled(mode: str = 'auto', stream=None) -> bool:
    """
    Decide whether to emit ANSI colors.

    Args:
        mode: "always" | "never" | "auto"
        stream: Stream the report goes to (default: sys.stdout)

    Returns:
        True if colors should be emitted
    """
    if mode == 'always':
        return True
    if mode == 'never':
        return False
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


class Palette:
    """Applies colors when enabled, passes text through otherwise."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def paint(self, text: str, color: Optional[str] = None, attrs: Optional[List[str]] = None) -> str:
        if not self.enabled or not text:
            return text
        return colored(text, color, attrs=attrs, force_color=True)

    def dim(self, text: str) -> str:
        return self.paint(text, attrs=['dark'])

    def underline(self, text: str) -> str:
        return self.paint(text, attrs=['underline'])

    def severity(self, text: str, severity: str) -> str:
        return self.paint(text, SEVERITY_COLORS.get(severity))
