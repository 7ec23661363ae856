"""
Todo configuration -- Decay schedules for todo records

Sources (exactly one may hold todo configuration):
  1. .lint-todorc.yaml in the base directory
  2. [tool.lint-todo] in the base directory's pyproject.toml

Either source may be flat or keyed by engine:

    days_to_decay:
      warn: 30
      error: 60
    days_to_decay_by_rule:
      color-no-hex:
        warn: 5

    # or, per engine
    stylelint:
      days_to_decay: {warn: 30, error: 60}

Day overrides from the run settings (TODO_DAYS_TO_WARN / TODO_DAYS_TO_ERROR)
replace the configured days_to_decay.
"""

import tomllib
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Dict, Any, Mapping

import yaml

from ..exceptions import TodoConfigError


RC_FILE = ".lint-todorc.yaml"
PYPROJECT_FILE = "pyproject.toml"
PYPROJECT_SECTION = "lint-todo"

# Keys of .lint-todorc.yaml that belong to display preferences, not todo config
NON_TODO_KEYS = ("display",)


@dataclass(frozen=True)
class DaysToDecay:
    """Day counts after which a todo escalates to warning / error."""
    warn: Optional[int] = None
    error: Optional[int] = None

    @property
    def is_configured(self) -> bool:
        return self.warn is not None or self.error is not None

    def validate(self) -> Optional[str]:
        """Validate thresholds. Returns error message or None if valid."""
        for name, value in (("warn", self.warn), ("error", self.error)):
            if value is not None and value < 0:
                return f"The `{name}` value ({value}) must not be negative."
        if self.warn is not None and self.error is not None and self.warn >= self.error:
            return (
                "The provided todo configuration contains invalid values. "
                f"The `warn` value ({self.warn}) must be less than the `error` value ({self.error})."
            )
        return None

    def warn_date(self, created: date) -> Optional[date]:
        return created + timedelta(days=self.warn) if self.warn is not None else None

    def error_date(self, created: date) -> Optional[date]:
        return created + timedelta(days=self.error) if self.error is not None else None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DaysToDecay":
        data = data or {}
        return cls(
            warn=_as_days(data.get("warn"), "warn"),
            error=_as_days(data.get("error"), "error"),
        )


@dataclass(frozen=True)
class TodoConfig:
    """Per-engine decay configuration."""
    days_to_decay: DaysToDecay = field(default_factory=DaysToDecay)
    days_to_decay_by_rule: Dict[str, DaysToDecay] = field(default_factory=dict)

    def days_for_rule(self, rule_id: str) -> DaysToDecay:
        """Rule-specific days if configured, otherwise the engine default."""
        return self.days_to_decay_by_rule.get(rule_id, self.days_to_decay)

    def validate(self) -> Optional[str]:
        error = self.days_to_decay.validate()
        if error:
            return error
        for rule_id, days in self.days_to_decay_by_rule.items():
            error = days.validate()
            if error:
                return f"{error} (rule `{rule_id}`)"
        return None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TodoConfig":
        data = data or {}
        by_rule = data.get("days_to_decay_by_rule") or {}
        return cls(
            days_to_decay=DaysToDecay.from_dict(data.get("days_to_decay")),
            days_to_decay_by_rule={
                str(rule): DaysToDecay.from_dict(days) for rule, days in by_rule.items()
            },
        )


@dataclass(frozen=True)
class ConfigValidation:
    is_valid: bool
    message: str = ""


# =============================================================================
# Loading
# =============================================================================

def _as_days(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise TodoConfigError(f"The `{name}` value must be a whole number of days, got {value!r}.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise TodoConfigError(
            f"The `{name}` value must be a whole number of days, got {value!r}."
        ) from None


def _read_rc(base_dir: Path) -> Dict[str, Any]:
    path = base_dir / RC_FILE
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise TodoConfigError(f"Could not parse {RC_FILE}: {e}") from e
    if not isinstance(data, dict):
        raise TodoConfigError(f"{RC_FILE} must contain a mapping")
    return {k: v for k, v in data.items() if k not in NON_TODO_KEYS}


def _read_pyproject(base_dir: Path) -> Dict[str, Any]:
    path = base_dir / PYPROJECT_FILE
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise TodoConfigError(f"Could not parse {PYPROJECT_FILE}: {e}") from e
    section = data.get("tool", {}).get(PYPROJECT_SECTION) or {}
    return dict(section)


def validate_config(base_dir) -> ConfigValidation:
    """
    Check that todo configuration lives in at most one source.

    Args:
        base_dir: Directory holding the config files

    Returns:
        ConfigValidation with is_valid False and a message on conflict
    """
    base_dir = Path(base_dir)
    if _read_rc(base_dir) and _read_pyproject(base_dir):
        return ConfigValidation(
            is_valid=False,
            message=(
                f"You cannot have todo configurations in both {PYPROJECT_FILE} and {RC_FILE}. "
                f"Please move the configuration from the {PYPROJECT_FILE} to the {RC_FILE}"
            ),
        )
    return ConfigValidation(is_valid=True)


def load_raw_config(base_dir) -> Dict[str, Any]:
    base_dir = Path(base_dir)
    return _read_rc(base_dir) or _read_pyproject(base_dir)


def get_todo_config(
    base_dir,
    engine: str,
    days_to_warn: Optional[str] = None,
    days_to_error: Optional[str] = None
) -> TodoConfig:
    """
    Load the todo configuration for an engine.

    Engine-keyed sections win over the flat top level. Day overrides
    replace the configured engine-wide days.

    Args:
        base_dir: Directory holding the config files
        engine: Engine whose section is used when present
        days_to_warn: Override for days_to_decay.warn
        days_to_error: Override for days_to_decay.error

    Raises:
        TodoConfigError: On unparseable files, non-integer days, or warn >= error
    """
    raw = load_raw_config(base_dir)

    section = raw.get(engine) if isinstance(raw.get(engine), dict) else raw
    config = TodoConfig.from_dict(section)

    if days_to_warn or days_to_error:
        days = config.days_to_decay
        config = TodoConfig(
            days_to_decay=DaysToDecay(
                warn=_as_days(days_to_warn, "warn") if days_to_warn else days.warn,
                error=_as_days(days_to_error, "error") if days_to_error else days.error,
            ),
            days_to_decay_by_rule=config.days_to_decay_by_rule,
        )

    error = config.validate()
    if error:
        raise TodoConfigError(error)
    return config
