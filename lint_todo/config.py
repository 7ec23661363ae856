"""
Configuration -- Run settings and display preferences

Two kinds of settings:

  TodoSettings   per-invocation switches read from the environment
                 (UPDATE_TODO, INCLUDE_TODO, CLEAN_TODO, ...) plus --fix
  DisplayConfig  how the report looks, layered from:
                   1. Environment (LINT_TODO_SYMBOLS, LINT_TODO_COLOR)
                   2. Project config (.lint-todorc.yaml, `display:` section)
                   3. User config (~/.lint-todo/config.yaml, `display:` section)
                   4. Defaults

Todo decay configuration is the ledger's concern (see ledger.config).
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, Mapping

import yaml

from .ledger.config import RC_FILE
from .presentation.colors import VALID_COLOR_MODES


logger = logging.getLogger(__name__)

# Environment markers set by common CI providers
CI_ENV_VARS = ("CI", "CONTINUOUS_INTEGRATION", "BUILD_NUMBER", "RUN_ID")

BASE_DIR_ENV = "STYLELINT_TODO_DIR"

VALID_SYMBOLS = ("unicode", "ascii", "auto")


def is_ci(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when running under a CI provider."""
    environ = os.environ if environ is None else environ
    for name in CI_ENV_VARS:
        value = environ.get(name)
        if value and value.lower() != "false":
            return True
    return False


def get_base_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Directory holding the ledger and todo config (STYLELINT_TODO_DIR or cwd)."""
    environ = os.environ if environ is None else environ
    base_dir = environ.get(BASE_DIR_ENV)
    return Path(base_dir).resolve() if base_dir else Path.cwd()


@dataclass
class TodoSettings:
    """
    Switches controlling one formatter invocation.

    Attributes:
        update_todo: Write new todos and drop stale ones (UPDATE_TODO=1)
        include_todo: Show and count todo diagnostics (INCLUDE_TODO=1)
        days_to_warn: Raw TODO_DAYS_TO_WARN value, if set
        days_to_error: Raw TODO_DAYS_TO_ERROR value, if set
        no_clean_todo: Report stale todos instead of deleting them (NO_CLEAN_TODO)
        clean_todo: Force cleanup even in CI (CLEAN_TODO=1)
        compact_todo: Only compact the storage file (COMPACT_TODO)
        format_todo_as: Alternate output format (FORMAT_TODO_AS)
        fix: --fix was passed to the linter
        ci: Running under CI
    """
    update_todo: bool = False
    include_todo: bool = False
    days_to_warn: Optional[str] = None
    days_to_error: Optional[str] = None
    no_clean_todo: bool = False
    clean_todo: bool = False
    compact_todo: bool = False
    format_todo_as: Optional[str] = None
    fix: bool = False
    ci: bool = False

    @property
    def should_clean_todos(self) -> bool:
        """Delete stale todos rather than report them."""
        if self.fix or self.clean_todo:
            return True
        return not self.no_clean_todo and not self.ci

    def validate(self) -> Optional[str]:
        """Validate settings. Returns error message or None if valid."""
        if (self.days_to_warn or self.days_to_error) and not self.update_todo:
            return (
                "Using `TODO_DAYS_TO_WARN` or `TODO_DAYS_TO_ERROR` is only valid "
                "when the `UPDATE_TODO` environment variable is being used."
            )
        return None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, fix: bool = False) -> "TodoSettings":
        """Read settings from environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            update_todo=environ.get("UPDATE_TODO") == "1",
            include_todo=environ.get("INCLUDE_TODO") == "1",
            days_to_warn=environ.get("TODO_DAYS_TO_WARN") or None,
            days_to_error=environ.get("TODO_DAYS_TO_ERROR") or None,
            no_clean_todo=bool(environ.get("NO_CLEAN_TODO")),
            clean_todo=environ.get("CLEAN_TODO") == "1",
            compact_todo=bool(environ.get("COMPACT_TODO")),
            format_todo_as=environ.get("FORMAT_TODO_AS") or None,
            fix=fix,
            ci=is_ci(environ),
        )


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    color: str = "auto"    # "always" | "never" | "auto"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.symbols not in VALID_SYMBOLS:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(VALID_SYMBOLS)}"
        if self.color not in VALID_COLOR_MODES:
            return f"Unknown color setting '{self.color}'. Valid: {', '.join(VALID_COLOR_MODES)}"
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"symbols": self.symbols, "color": self.color}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DisplayConfig":
        return cls(
            symbols=data.get("symbols", "auto"),
            color=data.get("color", "auto"),
        )


@dataclass
class Config:
    """Application configuration."""
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {"display": self.display.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        return cls(display=DisplayConfig.from_dict(data.get("display") or {}))


class ConfigManager:
    """
    Loads display configuration.

    Hierarchy:
      1. Environment (LINT_TODO_SYMBOLS, LINT_TODO_COLOR)
      2. Project config (.lint-todorc.yaml)
      3. User config (~/.lint-todo/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".lint-todo"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        user_config_path: Optional[Path] = None
    ):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.environ = os.environ if environ is None else environ
        self._user_config_path = Path(user_config_path) if user_config_path else None
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / RC_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path or self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read_display(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read_display(self.project_config_path))

        # Layer 3: Environment overrides
        if self.environ.get("LINT_TODO_SYMBOLS"):
            config_data.setdefault("display", {})["symbols"] = self.environ["LINT_TODO_SYMBOLS"]
        if self.environ.get("LINT_TODO_COLOR"):
            config_data.setdefault("display", {})["color"] = self.environ["LINT_TODO_COLOR"]

        config = Config.from_dict(config_data)
        error = config.display.validate()
        if error:
            logger.warning("Ignoring display config: %s", error)
            config = Config()

        self._config = config
        return self._config

    def _read_display(self, path: Path) -> Dict[str, Any]:
        """`display:` section of a YAML file, {} when absent or malformed."""
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return {}
        if not isinstance(data, dict) or not isinstance(data.get("display"), dict):
            return {}
        return {"display": data["display"]}

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result
