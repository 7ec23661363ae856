"""
SarifRenderer -- SARIF 2.1.0 log for code scanning uploads

One run, one result per diagnostic. Rules are listed once each in the
driver, in first-seen order. Results without a source path carry no
locations.
"""

from typing import Any, Dict, List, Optional

import orjson

from .base import BaseRenderer
from ..core.diagnostics import Diagnostic, Result, Severity


SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
SARIF_VERSION = "2.1.0"
TOOL_NAME = "stylelint"
TOOL_URI = "https://stylelint.io"

SARIF_LEVELS = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.TODO: "note",
}


class SarifRenderer(BaseRenderer):
    """Render results as a SARIF log."""

    def render(self, results: List[Result]) -> str:
        rule_ids: List[str] = []
        sarif_results = []

        for result in results:
            uri = self.display_path(result.source) if result.source else None
            for diagnostic in result.diagnostics:
                level = SARIF_LEVELS.get(diagnostic.severity)
                if level is None:
                    continue
                rule_id = diagnostic.rule or ""
                if rule_id and rule_id not in rule_ids:
                    rule_ids.append(rule_id)
                sarif_results.append(self._result(diagnostic, level, uri))

        log = {
            "$schema": SARIF_SCHEMA,
            "version": SARIF_VERSION,
            "runs": [{
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "informationUri": TOOL_URI,
                        "rules": [{"id": rule_id} for rule_id in rule_ids],
                    }
                },
                "results": sarif_results,
            }],
        }
        return orjson.dumps(log, option=orjson.OPT_INDENT_2).decode()

    def _result(self, diagnostic: Diagnostic, level: str, uri: Optional[str]) -> Dict[str, Any]:
        entry = {
            "level": level,
            "message": {"text": diagnostic.text},
        }
        if diagnostic.rule:
            entry["ruleId"] = diagnostic.rule
        if uri is None:
            return entry

        location: Dict[str, Any] = {"artifactLocation": {"uri": uri}}
        if diagnostic.has_position:
            region = {"startLine": diagnostic.line, "startColumn": max(1, diagnostic.column)}
            if diagnostic.end_line:
                region["endLine"] = diagnostic.end_line
            if diagnostic.end_column:
                region["endColumn"] = diagnostic.end_column
            location["region"] = region

        entry["locations"] = [{"physicalLocation": location}]
        return entry
