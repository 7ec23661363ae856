"""
JsonRenderer -- Stylelint-shaped JSON for piping to other tools
"""

from typing import List

import orjson

from .base import BaseRenderer
from ..core.diagnostics import Result


class JsonRenderer(BaseRenderer):
    """
    Render results as the JSON array stylelint's own json formatter emits.

    Useful for:
    - Piping to jq or other tools
    - Feeding editors and CI annotators
    """

    def __init__(self, *args, compact: bool = True, **kwargs):
        """
        Initialize JSON renderer.

        Args:
            compact: If True, output single line (no indentation)
            *args, **kwargs: Passed to BaseRenderer
        """
        super().__init__(*args, **kwargs)
        self.compact = compact

    def render(self, results: List[Result]) -> str:
        option = 0 if self.compact else orjson.OPT_INDENT_2
        return orjson.dumps([result.to_dict() for result in results], option=option).decode()
