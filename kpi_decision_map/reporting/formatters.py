"""
ASCII terminal formatters for the CLI.

All formatters accept a ``Recommendation`` (and, for the one-pager, the
``SelectionInput`` that produced it) and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Views
-----
``format_recommendation()`` — the full view: archetype card, confidence,
score by type, hybrid suggestion and every preflight note.

``format_one_pager()`` — the condensed printable view: inputs and preflight
snapshot as labels, the recommendation block, and at most ``max_notes``
notes::

    === KPI Decision Map — One-Pager ===
      Inputs → Preflight → Recommendation (with confidence & hybrid fallback)
      Generated: 2026-10-19

    Inputs
      Core Questions: Track strategy and outcomes versus targets
      ...
"""

from __future__ import annotations

from datetime import date

from kpi_decision_map.catalog.archetype_meta import meta_for
from kpi_decision_map.catalog.options import CATALOGS, label_for, labels_for
from kpi_decision_map.models.recommendation import Recommendation
from kpi_decision_map.models.selection import SelectionInput
from kpi_decision_map.taxonomy.archetype_taxonomy import MULTI_SELECT_GROUPS, ChoiceGroup

EMPTY_INPUT = "—"
NOT_SELECTED = "Not selected"
DEFAULT_MAX_NOTES = 4

_GROUP_HEADINGS: dict[ChoiceGroup, str] = {
    ChoiceGroup.INTENT:      "Core Questions",
    ChoiceGroup.AUDIENCE:    "Audience",
    ChoiceGroup.LATENCY:     "Latency",
    ChoiceGroup.MATURITY:    "Data maturity",
    ChoiceGroup.SCOPE:       "Scope",
    ChoiceGroup.INTERACTION: "Interaction",
    ChoiceGroup.INDICATORS:  "Indicator mix",
}


# ── Shared blocks ─────────────────────────────────────────────────────────────


def format_confidence_line(rec: Recommendation) -> str:
    """Return ``"Confidence: High (margin 4)"``."""
    return f"Confidence: {rec.confidence.value} (margin {rec.margin})"


def format_hybrid_line(rec: Recommendation) -> str | None:
    """Return ``"Hybrid: A + B — note"``, or ``None`` when no hybrid applies."""
    if rec.hybrid is None:
        return None
    return f"Hybrid: {rec.hybrid.display_pair} — {rec.hybrid.note}"


def format_score_table(rec: Recommendation) -> str:
    """Return the score-by-type block in canonical order."""
    width = max(len(a.value) for a in rec.scores)
    lines = ["  Score by type:"]
    for archetype, score in rec.scores.items():
        marker = "*" if archetype == rec.primary.archetype else " "
        lines.append(f"   {marker} {archetype.value:<{width}}  {score:>4}")
    return "\n".join(lines)


# ── Full view ─────────────────────────────────────────────────────────────────


def format_recommendation(rec: Recommendation) -> str:
    """Format the full recommendation view.

    Args:
        rec: Engine output.

    Returns:
        Multi-line string.
    """
    meta = meta_for(rec.primary.archetype)

    lines: list[str] = []
    lines.append("")
    lines.append("=== Recommendation ===")
    lines.append(f"  {meta.title}")
    lines.append(f"  {meta.blurb}")
    lines.append(f"  [{'] ['.join(meta.chips)}]")
    lines.append("")
    lines.append(f"  {format_confidence_line(rec)}")
    lines.append(format_score_table(rec))

    hybrid = format_hybrid_line(rec)
    if hybrid is not None:
        lines.append("")
        lines.append(f"  {hybrid}")

    if rec.notes:
        lines.append("")
        lines.append("  Preflight notes:")
        for note in rec.notes:
            lines.append(f"    - {note}")

    return "\n".join(lines)


# ── One-pager ─────────────────────────────────────────────────────────────────


def format_one_pager(
    selection:    SelectionInput,
    rec:          Recommendation,
    generated_on: date | None = None,
    max_notes:    int = DEFAULT_MAX_NOTES,
) -> str:
    """Format the condensed, printable one-page summary.

    Args:
        selection:    The selection ``rec`` was derived from.
        rec:          Engine output.
        generated_on: Date stamp for the header. Defaults to today.
        max_notes:    Maximum notes shown (extra notes are dropped).

    Returns:
        Multi-line string.
    """
    if generated_on is None:
        generated_on = date.today()

    def _multi(group: ChoiceGroup, ids: frozenset[str]) -> str:
        return ", ".join(labels_for(group, ids)) or EMPTY_INPUT

    def _single(group: ChoiceGroup, choice_id: str | None) -> str:
        return label_for(group, choice_id) or NOT_SELECTED

    meta = meta_for(rec.primary.archetype)

    lines: list[str] = []
    lines.append("")
    lines.append("=== KPI Decision Map — One-Pager ===")
    lines.append("  Inputs → Preflight → Recommendation (with confidence & hybrid fallback)")
    lines.append(f"  Generated: {generated_on.isoformat()}")

    lines.append("")
    lines.append("Inputs")
    lines.append(f"  Core Questions: {_multi(ChoiceGroup.INTENT, selection.intents)}")
    lines.append(f"  Audience:       {_multi(ChoiceGroup.AUDIENCE, selection.audiences)}")
    lines.append(f"  Latency:        {_multi(ChoiceGroup.LATENCY, selection.latencies)}")

    lines.append("")
    lines.append("Preflight snapshot")
    lines.append(f"  Data maturity:  {_single(ChoiceGroup.MATURITY, selection.maturity)}")
    lines.append(f"  Scope:          {_single(ChoiceGroup.SCOPE, selection.scope)}")
    lines.append(f"  Interaction:    {_single(ChoiceGroup.INTERACTION, selection.interaction)}")
    lines.append(f"  Indicator mix:  {_single(ChoiceGroup.INDICATORS, selection.indicators)}")

    lines.append("")
    lines.append("Recommendation")
    lines.append(f"  {meta.title}")
    lines.append(f"  {meta.blurb}")
    lines.append(f"  {' | '.join(meta.chips)}")
    lines.append(f"  {format_confidence_line(rec)}")
    hybrid = format_hybrid_line(rec)
    if hybrid is not None:
        lines.append(f"  {hybrid}")

    if rec.notes:
        lines.append("")
        lines.append("Notes & cautions")
        for note in rec.notes[:max_notes]:
            lines.append(f"  - {note}")

    return "\n".join(lines)


# ── Option catalog listing ────────────────────────────────────────────────────


def format_option_catalog() -> str:
    """List every question group with its ids, labels and votes."""
    lines: list[str] = []
    for group, options in CATALOGS.items():
        lines.append("")
        multi = " (multi)" if group in MULTI_SELECT_GROUPS else ""
        lines.append(f"[{group.value}] {_GROUP_HEADINGS[group]}{multi}")
        width = max(len(opt.id) for opt in options)
        for opt in options:
            votes = ", ".join(f"{a.value} {v:+d}" for a, v in opt.votes.items())
            suffix = f"  ({votes})" if votes else ""
            lines.append(f"  {opt.id:<{width}}  {opt.label}{suffix}")
    return "\n".join(lines)
