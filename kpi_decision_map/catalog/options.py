"""
Option catalogs: every selectable choice with its label and vote vector.

Each catalog is an immutable tuple of ``ChoiceOption`` records, declared in
the order the questions are presented.  Only the three multi-select groups
(intent, audience, latency) carry votes; the four preflight groups are
label-only and drive the gating rules in ``recommendations.preflight``.

Vote tables
-----------
    intent    operational → Operational 3      audience  execs     → Strategic 2
              strategic   → Strategic 3                  managers  → Tactical 2
              tactical    → Tactical 3                   frontline → Operational 2
              analytical  → Analytical 3                 analysts  → Analytical 2

    latency   rt      → Operational 2
              daily   → Tactical 1, Operational 1
              weekly  → Tactical 1, Strategic 1
              monthly → Strategic 2

Lookups never raise for an unknown id — ``find_votes()`` returns an empty
mapping so stale identifiers contribute nothing.  Callers that *want* a hard
failure (the CLI, config loading) use ``require_known_choice()`` instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from kpi_decision_map.taxonomy.archetype_taxonomy import Archetype, ChoiceGroup

if TYPE_CHECKING:
    from kpi_decision_map.models.selection import SelectionInput

_NO_VOTES: Mapping[Archetype, int] = MappingProxyType({})


# ── Custom exceptions ─────────────────────────────────────────────────────────


class UnknownChoiceError(ValueError):
    """Raised when a choice id is not defined in its group's catalog.

    Attributes:
        group:     The question group that was searched.
        choice_id: The identifier that was not found.
    """

    def __init__(self, group: ChoiceGroup, choice_id: str) -> None:
        self.group     = group
        self.choice_id = choice_id
        known = ", ".join(option_ids(group))
        super().__init__(
            f"Unknown {group.value} choice '{choice_id}'.  Expected one of: {known}."
        )


# ── Catalog entry ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ChoiceOption:
    """One selectable answer.

    Attributes:
        id:    Stable identifier stored in ``SelectionInput``.
        label: Human-readable text shown by the presentation shells.
        votes: Partial weight vector over archetypes (empty for preflight groups).
    """

    id:    str
    label: str
    votes: Mapping[Archetype, int]


def _option(id: str, label: str, **votes: int) -> ChoiceOption:
    return ChoiceOption(
        id=id,
        label=label,
        votes=MappingProxyType({Archetype(k): v for k, v in votes.items()}),
    )


# ── Core decision inputs (multi-select) ──────────────────────────────────────

INTENT_OPTIONS: tuple[ChoiceOption, ...] = (
    _option("operational", "Monitor live process health and act quickly", Operational=3),
    _option("strategic", "Track strategy and outcomes versus targets", Strategic=3),
    _option("tactical", "Manage near-term initiatives within a function", Tactical=3),
    _option("analytical", "Diagnose causes, explore patterns and cohorts", Analytical=3),
)

AUDIENCE_OPTIONS: tuple[ChoiceOption, ...] = (
    _option("execs", "Executives and VPs", Strategic=2),
    _option("managers", "Middle managers / program owners", Tactical=2),
    _option("frontline", "Front-line operators / duty managers", Operational=2),
    _option("analysts", "Analysts / decision support", Analytical=2),
)

LATENCY_OPTIONS: tuple[ChoiceOption, ...] = (
    _option("rt", "Real-time or hourly (alerts)", Operational=2),
    _option("daily", "Daily to weekly", Tactical=1, Operational=1),
    _option("weekly", "Weekly to monthly", Tactical=1, Strategic=1),
    _option("monthly", "Monthly or quarterly", Strategic=2),
)

# ── Preflight modifiers (single choice) ──────────────────────────────────────

DATA_MATURITY_OPTIONS: tuple[ChoiceOption, ...] = (
    _option("streaming", "Streaming/near-real-time"),
    _option("daily", "Daily batch"),
    _option("manual", "Manual / ad-hoc"),
)

SCOPE_OPTIONS: tuple[ChoiceOption, ...] = (
    _option("process", "Single process (SLAs)"),
    _option("function", "Single function / program"),
    _option("enterprise", "Cross-functional / enterprise"),
)

INTERACTION_OPTIONS: tuple[ChoiceOption, ...] = (
    _option("minimal", "Minimal first view (summary tiles)"),
    _option("rich", "Rich drill-downs in first view"),
)

INDICATOR_MIX_OPTIONS: tuple[ChoiceOption, ...] = (
    _option("leading", "Mostly leading"),
    _option("balanced", "Balanced leading/lagging"),
    _option("lagging", "Mostly lagging"),
)

CATALOGS: Mapping[ChoiceGroup, tuple[ChoiceOption, ...]] = MappingProxyType(
    {
        ChoiceGroup.INTENT:      INTENT_OPTIONS,
        ChoiceGroup.AUDIENCE:    AUDIENCE_OPTIONS,
        ChoiceGroup.LATENCY:     LATENCY_OPTIONS,
        ChoiceGroup.MATURITY:    DATA_MATURITY_OPTIONS,
        ChoiceGroup.SCOPE:       SCOPE_OPTIONS,
        ChoiceGroup.INTERACTION: INTERACTION_OPTIONS,
        ChoiceGroup.INDICATORS:  INDICATOR_MIX_OPTIONS,
    }
)

_INDEX: Mapping[tuple[ChoiceGroup, str], ChoiceOption] = MappingProxyType(
    {(group, opt.id): opt for group, opts in CATALOGS.items() for opt in opts}
)


# ── Lookups ───────────────────────────────────────────────────────────────────


def find_option(group: ChoiceGroup, choice_id: str | None) -> ChoiceOption | None:
    """Return the catalog entry for ``choice_id`` or ``None`` if absent."""
    if choice_id is None:
        return None
    return _INDEX.get((group, choice_id))


def find_votes(group: ChoiceGroup, choice_id: str) -> Mapping[Archetype, int]:
    """Return the vote vector for ``choice_id``; empty when unknown or label-only."""
    option = find_option(group, choice_id)
    return option.votes if option is not None else _NO_VOTES


def option_ids(group: ChoiceGroup) -> list[str]:
    """Return the ids of ``group`` in catalog order."""
    return [opt.id for opt in CATALOGS[group]]


def label_for(group: ChoiceGroup, choice_id: str | None) -> str | None:
    """Return the label for a single choice, or ``None`` when unset/unknown."""
    option = find_option(group, choice_id)
    return option.label if option is not None else None


def labels_for(group: ChoiceGroup, choice_ids: Iterable[str]) -> list[str]:
    """Return labels for the chosen ids in catalog order.

    Unknown ids are dropped rather than raising, so a stale selection still
    renders.
    """
    chosen = set(choice_ids)
    return [opt.label for opt in CATALOGS[group] if opt.id in chosen]


def require_known_choice(group: ChoiceGroup, choice_id: str) -> str:
    """Return ``choice_id`` unchanged if it exists in ``group``.

    Raises:
        UnknownChoiceError: If the id is not in the catalog.
    """
    if find_option(group, choice_id) is None:
        raise UnknownChoiceError(group, choice_id)
    return choice_id


def validate_selection(selection: "SelectionInput") -> list[str]:
    """Return one error message per unknown id in ``selection``.

    An empty list means every id is catalog-defined.  The engine itself
    tolerates unknown ids; this check is for shells that build selections
    from free-form input.
    """
    errors: list[str] = []
    for group, value in selection.iter_choices():
        try:
            require_known_choice(group, value)
        except UnknownChoiceError as exc:
            errors.append(str(exc))
    return errors
