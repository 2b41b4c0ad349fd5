"""
KPI Decision Map — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build and validate a ``SelectionInput``.
  4. Execute action (evaluate, format, export).
  5. Report result to stdout.

Install and run::

    pip install -e .
    kpi-map --help
    kpi-map options
    kpi-map recommend
    kpi-map recommend --preset empty --intent operational --latency rt --maturity daily
    kpi-map recommend --one-pager
    kpi-map export --output-dir data/outputs
    kpi-map validate-config
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="kpi-map",
    help="KPI Decision Map — recommend a dashboard archetype from reporting needs.",
    add_completion=False,
)

_PRESETS = ("defaults", "empty")
_UNSET_TOKENS = frozenset({"none", "unset", ""})


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from kpi_decision_map.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from kpi_decision_map.utils.logging import configure_logging
    configure_logging(config.logging)


def _single(value: str) -> Optional[str]:
    return None if value.strip().lower() in _UNSET_TOKENS else value.strip()


def _build_selection_or_exit(
    config,
    preset:      str,
    intent:      Optional[list[str]],
    audience:    Optional[list[str]],
    latency:     Optional[list[str]],
    maturity:    Optional[str],
    scope:       Optional[str],
    interaction: Optional[str],
    indicators:  Optional[str],
):
    """Start from a preset, apply CLI overrides, and validate every id.

    Multi-select flags replace the preset's set for that group; single-choice
    flags replace the preset value (``none`` clears it).
    """
    from kpi_decision_map.catalog.options import validate_selection
    from kpi_decision_map.models.selection import SelectionInput

    if preset not in _PRESETS:
        typer.echo(
            f"[ERROR] Unknown preset '{preset}'. Use one of: {', '.join(_PRESETS)}.",
            err=True,
        )
        raise typer.Exit(code=1)

    base = config.defaults.to_selection() if preset == "defaults" else SelectionInput.cleared()

    changes: dict = {}
    if intent:
        changes["intents"] = frozenset(intent)
    if audience:
        changes["audiences"] = frozenset(audience)
    if latency:
        changes["latencies"] = frozenset(latency)
    for field_name, value in (
        ("maturity", maturity),
        ("scope", scope),
        ("interaction", interaction),
        ("indicators", indicators),
    ):
        if value is not None:
            changes[field_name] = _single(value)

    selection = base.with_changes(**changes) if changes else base

    errors = validate_selection(selection)
    if errors:
        typer.echo(f"[ERROR] {len(errors)} unknown choice(s):", err=True)
        for msg in errors:
            typer.echo(f"  {msg}", err=True)
        typer.echo("Run 'kpi-map options' to list valid ids.", err=True)
        raise typer.Exit(code=1)

    return selection


# ── Shared option declarations ────────────────────────────────────────────────

_PRESET_OPT = typer.Option(
    "defaults", "--preset", help="Starting selection: 'defaults' or 'empty'."
)
_INTENT_OPT = typer.Option(
    None, "--intent", "-i", help="Intent id (repeatable). Replaces the preset's intents."
)
_AUDIENCE_OPT = typer.Option(
    None, "--audience", "-a", help="Audience id (repeatable). Replaces the preset's audiences."
)
_LATENCY_OPT = typer.Option(
    None, "--latency", "-l", help="Latency id (repeatable). Replaces the preset's latencies."
)
_MATURITY_OPT = typer.Option(
    None, "--maturity", help="Data maturity id, or 'none' to unset."
)
_SCOPE_OPT = typer.Option(
    None, "--scope", help="Scope id, or 'none' to unset."
)
_INTERACTION_OPT = typer.Option(
    None, "--interaction", help="Interaction id, or 'none' to unset."
)
_INDICATORS_OPT = typer.Option(
    None, "--indicators", help="Indicator mix id, or 'none' to unset."
)
_CONFIG_OPT = typer.Option(
    None, "--config", help="Path to TOML config file."
)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("options")
def options() -> None:
    """List every question group with its choice ids, labels and votes."""
    from kpi_decision_map.reporting.formatters import format_option_catalog

    typer.echo(format_option_catalog())


@app.command("recommend")
def recommend(
    preset: str = _PRESET_OPT,
    intent: Optional[list[str]] = _INTENT_OPT,
    audience: Optional[list[str]] = _AUDIENCE_OPT,
    latency: Optional[list[str]] = _LATENCY_OPT,
    maturity: Optional[str] = _MATURITY_OPT,
    scope: Optional[str] = _SCOPE_OPT,
    interaction: Optional[str] = _INTERACTION_OPT,
    indicators: Optional[str] = _INDICATORS_OPT,
    one_pager: bool = typer.Option(
        False,
        "--one-pager",
        help="Print the condensed one-page summary instead of the full view.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON (for scripting).",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Evaluate a selection and print the recommended dashboard archetype.

    \b
    Examples:
      kpi-map recommend
      kpi-map recommend --preset empty -i analytical -a analysts --interaction rich
      kpi-map recommend -l rt --maturity daily --one-pager
    """
    from kpi_decision_map.recommendations.engine import evaluate
    from kpi_decision_map.reporting.export import build_recommendation_report
    from kpi_decision_map.reporting.formatters import format_one_pager, format_recommendation

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    selection = _build_selection_or_exit(
        config, preset, intent, audience, latency, maturity, scope, interaction, indicators
    )
    rec = evaluate(selection)

    if as_json:
        typer.echo(json.dumps(build_recommendation_report(selection, rec), indent=2, ensure_ascii=False))
    elif one_pager:
        typer.echo(
            format_one_pager(
                selection, rec, max_notes=config.output.one_pager_max_notes
            )
        )
    else:
        typer.echo(format_recommendation(rec))


@app.command("export")
def export(
    preset: str = _PRESET_OPT,
    intent: Optional[list[str]] = _INTENT_OPT,
    audience: Optional[list[str]] = _AUDIENCE_OPT,
    latency: Optional[list[str]] = _LATENCY_OPT,
    maturity: Optional[str] = _MATURITY_OPT,
    scope: Optional[str] = _SCOPE_OPT,
    interaction: Optional[str] = _INTERACTION_OPT,
    indicators: Optional[str] = _INDICATORS_OPT,
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Directory for the report files. Defaults to config output.export_dir.",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Evaluate a selection and write JSON + CSV reports.

    \b
    Files written:
      recommendation_{date}.json  — selection, full result, archetype metadata
      recommendation_{date}.csv   — one row per ranked archetype
    """
    from kpi_decision_map.recommendations.engine import evaluate
    from kpi_decision_map.reporting.export import (
        CSV_FIELDNAMES,
        build_recommendation_report,
        export_to_csv,
        export_to_json,
        flatten_recommendation_for_export,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    selection = _build_selection_or_exit(
        config, preset, intent, audience, latency, maturity, scope, interaction, indicators
    )
    rec = evaluate(selection)
    report = build_recommendation_report(selection, rec)

    out_dir = Path(output_dir or config.output.export_dir)
    stem = f"recommendation_{date.today().isoformat()}"

    try:
        json_path = export_to_json(report, out_dir / f"{stem}.json")
        csv_path = export_to_csv(
            flatten_recommendation_for_export(report),
            out_dir / f"{stem}.csv",
            fieldnames=CSV_FIELDNAMES,
        )
    except OSError as exc:
        typer.echo(f"[ERROR] Export failed: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"  Primary:    {rec.primary.archetype.value} ({rec.confidence.value})")
    typer.echo(f"  JSON:       {json_path}")
    typer.echo(f"  CSV:        {csv_path}")
    typer.echo("[OK] Report exported.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    defaults = config.defaults

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Export dir:       {config.output.export_dir}")
    typer.echo(f"  One-pager notes:  {config.output.one_pager_max_notes}")
    typer.echo(
        f"  Default inputs:   intents={defaults.intents} audiences={defaults.audiences} "
        f"latencies={defaults.latencies}"
    )
    typer.echo(
        f"  Default preflight:maturity={defaults.maturity} scope={defaults.scope} "
        f"interaction={defaults.interaction} indicators={defaults.indicators}"
    )
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
