"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``KPI_MAP_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Scoring weights and preflight rule constants are deliberately NOT part of
the configuration; they live in ``recommendations/`` as module constants.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from kpi_decision_map.catalog.options import require_known_choice
from kpi_decision_map.models.selection import SelectionInput

# ── Sub-config models ─────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class OutputConfig(BaseModel):
    """Report export and one-pager settings."""

    model_config = ConfigDict(frozen=True)

    export_dir: str = "data/outputs"
    one_pager_max_notes: int = 4

    @field_validator("one_pager_max_notes")
    @classmethod
    def validate_max_notes(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"one_pager_max_notes must be >= 1, got {v}.")
        return v


class DefaultsConfig(BaseModel):
    """The reset-to-defaults selection bundle.

    Every id is checked against the option catalogs so a typo in
    ``default.toml`` fails at load time instead of silently scoring zero.
    """

    model_config = ConfigDict(frozen=True)

    intents: list[str] = ["strategic"]
    audiences: list[str] = ["execs"]
    latencies: list[str] = ["monthly"]
    maturity: Optional[str] = "daily"
    scope: Optional[str] = "function"
    interaction: Optional[str] = "minimal"
    indicators: Optional[str] = "balanced"

    @field_validator("maturity", "scope", "interaction", "indicators", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        # TOML has no null; an empty string leaves the modifier unset.
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_known_choices(self) -> "DefaultsConfig":
        for group, choice_id in self.to_selection().iter_choices():
            require_known_choice(group, choice_id)
        return self

    def to_selection(self) -> SelectionInput:
        """Build the ``SelectionInput`` this bundle describes."""
        return SelectionInput(
            intents=frozenset(self.intents),
            audiences=frozenset(self.audiences),
            latencies=frozenset(self.latencies),
            maturity=self.maturity,
            scope=self.scope,
            interaction=self.interaction,
            indicators=self.indicators,
        )


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    CLI commands and the dashboard receive an ``AppConfig`` instance.
    It is constructed by ``load_config()`` which merges TOML + .env.
    """

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    output: OutputConfig = OutputConfig()
    defaults: DefaultsConfig = DefaultsConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation
            (including unknown ids in ``[defaults]``).
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply KPI_MAP_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply KPI_MAP_* env vars to the raw config dict.

    Supported overrides:
      KPI_MAP_LOG_LEVEL   → raw["logging"]["level"]
      KPI_MAP_OUTPUT_DIR  → raw["output"]["export_dir"]
      KPI_MAP_DEBUG       → raw["debug"]
    """
    if log_level := os.environ.get("KPI_MAP_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("KPI_MAP_OUTPUT_DIR"):
        raw.setdefault("output", {})["export_dir"] = output_dir

    if debug := os.environ.get("KPI_MAP_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        output=OutputConfig(**raw.get("output", {})),
        defaults=DefaultsConfig(**raw.get("defaults", {})),
        debug=raw.get("debug", False),
    )


