"""Presentation helpers: symbols, safe printing and colors."""

from .symbols import (
    SymbolSet,
    UNICODE,
    ASCII,
    get_symbols,
    supports_unicode,
    safe_print,
    sanitize_control_chars,
)
from .colors import Palette, color_enabled, SEVERITY_COLORS, VALID_COLOR_MODES

__all__ = [
    'SymbolSet', 'UNICODE', 'ASCII', 'get_symbols', 'supports_unicode',
    'safe_print', 'sanitize_control_chars',
    'Palette', 'color_enabled', 'SEVERITY_COLORS', 'VALID_COLOR_MODES',
]
