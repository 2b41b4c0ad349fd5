"""
Selection input model.

``SelectionInput`` is the complete decision state a presentation shell hands
to the engine: three multi-select answer sets and four optional preflight
modifiers.  It is frozen — a shell builds a fresh instance on every change
(``with_changes()``) and re-runs ``evaluate()`` on it.

Identifiers are plain strings.  Validation against the option catalogs is the
shell's job (see ``catalog.options.validate_selection``); the engine treats
unknown ids as zero-vote no-ops.

``SelectionInput.cleared()`` backs the reset-to-empty button.  The
reset-to-defaults bundle lives in configuration
(``config.DefaultsConfig.to_selection()``) so it has a single source.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from kpi_decision_map.taxonomy.archetype_taxonomy import ChoiceGroup


class SelectionInput(BaseModel):
    """User answers for one evaluation.

    Attributes:
        intents:     Chosen intent ids (multi-select).
        audiences:   Chosen audience ids (multi-select).
        latencies:   Chosen latency ids (multi-select).
        maturity:    Data maturity id, or ``None`` when unset.
        scope:       Organizational scope id, or ``None`` when unset.
        interaction: First-view interaction id, or ``None`` when unset.
        indicators:  Indicator mix id, or ``None`` when unset.
    """

    model_config = ConfigDict(frozen=True)

    intents: frozenset[str] = frozenset()
    audiences: frozenset[str] = frozenset()
    latencies: frozenset[str] = frozenset()
    maturity: Optional[str] = None
    scope: Optional[str] = None
    interaction: Optional[str] = None
    indicators: Optional[str] = None

    @field_validator("maturity", "scope", "interaction", "indicators", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # ── Reset bundle ──────────────────────────────────────────────────────────

    @classmethod
    def cleared(cls) -> "SelectionInput":
        """Return the reset-to-empty bundle."""
        return cls()

    # ── Helpers ───────────────────────────────────────────────────────────────

    def with_changes(self, **changes: Any) -> "SelectionInput":
        """Return a new validated selection with ``changes`` applied."""
        return SelectionInput(**{**self.model_dump(), **changes})

    def iter_choices(self) -> Iterator[tuple[ChoiceGroup, str]]:
        """Yield ``(group, id)`` for every chosen id, multi-select ids sorted."""
        for group, values in (
            (ChoiceGroup.INTENT, self.intents),
            (ChoiceGroup.AUDIENCE, self.audiences),
            (ChoiceGroup.LATENCY, self.latencies),
        ):
            for value in sorted(values):
                yield group, value
        for group, single in (
            (ChoiceGroup.MATURITY, self.maturity),
            (ChoiceGroup.SCOPE, self.scope),
            (ChoiceGroup.INTERACTION, self.interaction),
            (ChoiceGroup.INDICATORS, self.indicators),
        ):
            if single is not None:
                yield group, single
