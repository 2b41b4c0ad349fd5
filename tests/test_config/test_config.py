"""
Tests for kpi_decision_map/config.py: load_config() and the config models.

Covers:
  - Committed config/default.toml loads and matches the reset bundle
  - Explicit TOML path; missing file raises FileNotFoundError
  - local.toml next to the config is deep-merged on top
  - KPI_MAP_* environment overrides
  - Validation: bad log level, one_pager_max_notes < 1, unknown default ids
  - Empty strings in [defaults] leave modifiers unset
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from kpi_decision_map.config import (
    AppConfig,
    DefaultsConfig,
    LoggingConfig,
    OutputConfig,
    _deep_merge,
    load_config,
)
from kpi_decision_map.models.selection import SelectionInput

_ENV_VARS = ("KPI_MAP_LOG_LEVEL", "KPI_MAP_OUTPUT_DIR", "KPI_MAP_DEBUG")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


# ── Loading ───────────────────────────────────────────────────────────────────


class TestLoadConfig:
    def test_committed_default_toml(self):
        cfg = load_config()
        assert isinstance(cfg, AppConfig)
        assert cfg.logging.level == "INFO"
        assert cfg.output.one_pager_max_notes == 4
        assert cfg.defaults == DefaultsConfig()

    def test_explicit_path(self, tmp_path):
        path = _write(
            tmp_path / "cfg.toml",
            'debug = true\n[logging]\nlevel = "debug"\n[output]\nexport_dir = "out"\n',
        )
        cfg = load_config(path)
        assert cfg.debug is True
        assert cfg.logging.level == "DEBUG"
        assert cfg.output.export_dir == "out"
        # Missing [defaults] falls back to the model defaults
        assert cfg.defaults.intents == ["strategic"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.toml")

    def test_local_toml_merged(self, tmp_path):
        path = _write(tmp_path / "cfg.toml", '[logging]\nlevel = "INFO"\njson_format = false\n')
        _write(tmp_path / "local.toml", "[logging]\njson_format = true\n")
        cfg = load_config(path)
        assert cfg.logging.json_format is True
        assert cfg.logging.level == "INFO"

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = _write(tmp_path / "cfg.toml", "")
        monkeypatch.setenv("KPI_MAP_LOG_LEVEL", "warning")
        monkeypatch.setenv("KPI_MAP_OUTPUT_DIR", "/tmp/reports")
        monkeypatch.setenv("KPI_MAP_DEBUG", "yes")
        cfg = load_config(path)
        assert cfg.logging.level == "WARNING"
        assert cfg.output.export_dir == "/tmp/reports"
        assert cfg.debug is True

    def test_unknown_default_id_fails(self, tmp_path):
        path = _write(tmp_path / "cfg.toml", '[defaults]\nintents = ["bogus"]\n')
        with pytest.raises(ValidationError, match="Unknown intent choice 'bogus'"):
            load_config(path)

    def test_blank_modifier_is_unset(self, tmp_path):
        path = _write(tmp_path / "cfg.toml", '[defaults]\nmaturity = ""\n')
        assert load_config(path).defaults.to_selection().maturity is None


# ── Models ────────────────────────────────────────────────────────────────────


class TestModels:
    def test_log_level_validated(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_max_notes_validated(self):
        with pytest.raises(ValidationError, match="one_pager_max_notes"):
            OutputConfig(one_pager_max_notes=0)

    def test_defaults_bundle(self):
        assert DefaultsConfig().to_selection() == SelectionInput(
            intents={"strategic"},
            audiences={"execs"},
            latencies={"monthly"},
            maturity="daily",
            scope="function",
            interaction="minimal",
            indicators="balanced",
        )

    def test_defaults_unknown_scope(self):
        with pytest.raises(ValidationError, match="scope"):
            DefaultsConfig(scope="galaxy")

    def test_empty_defaults_allowed(self):
        cfg = DefaultsConfig(
            intents=[], audiences=[], latencies=[],
            maturity=None, scope=None, interaction=None, indicators=None,
        )
        assert cfg.to_selection() == SelectionInput.cleared()

    def test_frozen(self):
        with pytest.raises(ValidationError):
            AppConfig().debug = True  # type: ignore[misc]


def test_deep_merge_nested():
    merged = _deep_merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "c": 4})
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
