"""
Dashboard archetype taxonomy and option-group identifiers.

Hierarchy: ``Archetype`` (the four recommendable dashboard types) and
``ChoiceGroup`` (the seven question groups a user answers).

``CANONICAL_ORDER`` is the integrity contract for ranking:
  - Every ``Archetype`` appears exactly once.
  - Declaration order is the tie-break order — equal scores never reorder.

The per-group id enums (``IntentChoice``, ``DataMaturity``, ...) name the
identifiers the option catalogs expose.  ``SelectionInput`` stores plain
strings, so these enums are a convenience for callers and tests, not a
validation layer.

Run ``tests/test_taxonomy/test_archetype_taxonomy.py`` to verify this contract.

This module has NO imports from any other ``kpi_decision_map`` package.
"""

from enum import StrEnum


class Archetype(StrEnum):
    """Dashboard archetype the engine can recommend."""

    STRATEGIC = "Strategic"
    """Outcomes vs. objectives for leaders; monthly/quarterly cadence."""

    OPERATIONAL = "Operational"
    """Live process health; SLAs, exceptions, alerts."""

    TACTICAL = "Tactical"
    """Initiatives and programs steered over weeks to months."""

    ANALYTICAL = "Analytical"
    """Diagnosis and discovery; drill-downs, segmentation, cohorts."""


class ConfidenceLevel(StrEnum):
    """Confidence label derived from the primary/secondary score margin."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ChoiceGroup(StrEnum):
    """Question group a choice identifier belongs to."""

    INTENT = "intent"
    AUDIENCE = "audience"
    LATENCY = "latency"
    MATURITY = "maturity"
    SCOPE = "scope"
    INTERACTION = "interaction"
    INDICATORS = "indicators"


# ── Choice identifiers ────────────────────────────────────────────────────────

class IntentChoice(StrEnum):
    OPERATIONAL = "operational"
    STRATEGIC = "strategic"
    TACTICAL = "tactical"
    ANALYTICAL = "analytical"


class AudienceChoice(StrEnum):
    EXECS = "execs"
    MANAGERS = "managers"
    FRONTLINE = "frontline"
    ANALYSTS = "analysts"


class LatencyChoice(StrEnum):
    REAL_TIME = "rt"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class DataMaturity(StrEnum):
    STREAMING = "streaming"
    DAILY = "daily"
    MANUAL = "manual"


class ScopeChoice(StrEnum):
    PROCESS = "process"
    FUNCTION = "function"
    ENTERPRISE = "enterprise"


class InteractionChoice(StrEnum):
    MINIMAL = "minimal"
    RICH = "rich"


class IndicatorMix(StrEnum):
    LEADING = "leading"
    BALANCED = "balanced"
    LAGGING = "lagging"


# ── Integrity contract ────────────────────────────────────────────────────────

CANONICAL_ORDER: tuple[Archetype, ...] = (
    Archetype.STRATEGIC,
    Archetype.OPERATIONAL,
    Archetype.TACTICAL,
    Archetype.ANALYTICAL,
)

MULTI_SELECT_GROUPS: frozenset[ChoiceGroup] = frozenset(
    {ChoiceGroup.INTENT, ChoiceGroup.AUDIENCE, ChoiceGroup.LATENCY}
)
