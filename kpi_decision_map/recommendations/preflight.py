"""
Preflight gates and nudges applied on top of the base vote tally.

The preflight answers (data maturity, scope, interaction, indicator mix)
never vote directly.  Instead they gate archetypes the organization cannot
support yet, nudge towards archetypes that fit its scope, and raise advisory
notes.

Rules (evaluated in this order — note order is part of the output)
------------------------------------------------------------------
1. ``realtime_mismatch``  — latency includes ``rt`` and maturity is not
                            ``streaming`` (unset counts as not streaming):
                            Operational -3, Tactical -1.
2. ``manual_data``        — maturity is ``manual``: Operational -4, Tactical -2.
3. ``scope``              — ``enterprise``: Strategic +2;
                            else ``process``: Operational +2.
4. ``rich_interaction``   — interaction is ``rich``: Analytical +2.
5. ``leading_signals``    — operational intent with ``lagging`` indicators:
                            advisory note only, no score change.

Score deltas are plain sums, so rule order only affects the notes sequence.

Raising vs returning
--------------------
``run_preflight_rules()`` never raises.  An unset modifier is ``None`` and
cannot equal any trigger value, so it never fires a rule by coincidence.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from kpi_decision_map.models.selection import SelectionInput
from kpi_decision_map.recommendations.scorer import ScoreVector, add_votes
from kpi_decision_map.taxonomy.archetype_taxonomy import (
    Archetype,
    DataMaturity,
    IndicatorMix,
    IntentChoice,
    InteractionChoice,
    LatencyChoice,
    ScopeChoice,
)

NOTE_REALTIME_MISMATCH = (
    "Data maturity cannot meet real-time: -3 Operational, -1 Tactical. "
    "Consider phased approach."
)
NOTE_MANUAL_DATA       = "Manual data: penalized Operational/Tactical."
NOTE_ENTERPRISE_SCOPE  = "Enterprise scope → +2 Strategic."
NOTE_PROCESS_SCOPE     = "Single process (SLAs) → +2 Operational."
NOTE_RICH_INTERACTION  = "Rich first view → +2 Analytical."
NOTE_LEADING_SIGNALS   = "Operational with lagging indicators → add leading signals."


# ── Result types ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PreflightAdjustment:
    """One fired rule.

    Attributes:
        rule:   Rule name (see module docstring).
        deltas: Score change per archetype; empty for advisory-only rules.
        note:   Advisory text appended to the recommendation notes.
    """

    rule:   str
    deltas: Mapping[Archetype, int]
    note:   str


@dataclass(frozen=True)
class PreflightResult:
    """Outcome of running every preflight rule for one selection.

    Attributes:
        checks:      Dict of rule name -> bool (True = rule fired).
        adjustments: Fired rules in evaluation order.
    """

    checks:      dict[str, bool]
    adjustments: tuple[PreflightAdjustment, ...] = field(default=())

    @property
    def notes(self) -> tuple[str, ...]:
        return tuple(adj.note for adj in self.adjustments)

    @property
    def fired(self) -> tuple[str, ...]:
        """Names of the checks that fired, in evaluation order."""
        return tuple(name for name, hit in self.checks.items() if hit)


def _adjustment(rule: str, note: str, **deltas: int) -> PreflightAdjustment:
    return PreflightAdjustment(
        rule=rule,
        deltas=MappingProxyType({Archetype(k): v for k, v in deltas.items()}),
        note=note,
    )


# ── Public functions ──────────────────────────────────────────────────────────


def run_preflight_rules(selection: SelectionInput) -> PreflightResult:
    """Evaluate every preflight rule against ``selection``.

    Args:
        selection: The current user answers.

    Returns:
        PreflightResult listing which rules fired and their adjustments.
    """
    checks:      dict[str, bool]           = {}
    adjustments: list[PreflightAdjustment] = []

    # ── Rule 1: realtime_mismatch ─────────────────────────────────────────
    wants_realtime = LatencyChoice.REAL_TIME in selection.latencies
    checks["realtime_mismatch"] = wants_realtime and selection.maturity != DataMaturity.STREAMING
    if checks["realtime_mismatch"]:
        adjustments.append(
            _adjustment("realtime_mismatch", NOTE_REALTIME_MISMATCH, Operational=-3, Tactical=-1)
        )

    # ── Rule 2: manual_data ───────────────────────────────────────────────
    checks["manual_data"] = selection.maturity == DataMaturity.MANUAL
    if checks["manual_data"]:
        adjustments.append(
            _adjustment("manual_data", NOTE_MANUAL_DATA, Operational=-4, Tactical=-2)
        )

    # ── Rule 3: scope (enterprise wins over process) ──────────────────────
    checks["scope"] = selection.scope in (ScopeChoice.ENTERPRISE, ScopeChoice.PROCESS)
    if selection.scope == ScopeChoice.ENTERPRISE:
        adjustments.append(_adjustment("scope", NOTE_ENTERPRISE_SCOPE, Strategic=2))
    elif selection.scope == ScopeChoice.PROCESS:
        adjustments.append(_adjustment("scope", NOTE_PROCESS_SCOPE, Operational=2))

    # ── Rule 4: rich_interaction ──────────────────────────────────────────
    checks["rich_interaction"] = selection.interaction == InteractionChoice.RICH
    if checks["rich_interaction"]:
        adjustments.append(
            _adjustment("rich_interaction", NOTE_RICH_INTERACTION, Analytical=2)
        )

    # ── Rule 5: leading_signals (advisory only) ───────────────────────────
    checks["leading_signals"] = (
        IntentChoice.OPERATIONAL in selection.intents
        and selection.indicators == IndicatorMix.LAGGING
    )
    if checks["leading_signals"]:
        adjustments.append(_adjustment("leading_signals", NOTE_LEADING_SIGNALS))

    return PreflightResult(checks=checks, adjustments=tuple(adjustments))


def apply_preflight(scores: ScoreVector, result: PreflightResult) -> None:
    """Add every fired rule's deltas into ``scores`` in place."""
    for adj in result.adjustments:
        add_votes(scores, adj.deltas)
