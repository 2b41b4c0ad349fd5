"""
Recommendation output models.

``Recommendation`` is the full result of one ``evaluate()`` call: the
ranking, the top two entries, margin, confidence, an optional hybrid
suggestion and the ordered preflight notes.  The final score vector is
derived from the ranking (``Recommendation.scores``) so there is one copy of
every score.

All models are frozen and hold only immutable values (tuples, frozen
models), so a recommendation is hashable and cannot drift out of step with
its own margin after validation.  Two evaluations of the same selection
compare equal field by field.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from kpi_decision_map.taxonomy.archetype_taxonomy import (
    CANONICAL_ORDER,
    Archetype,
    ConfidenceLevel,
)


class RankedArchetype(BaseModel):
    """One ``(archetype, score)`` entry of the ranking."""

    model_config = ConfigDict(frozen=True)

    archetype: Archetype
    score: int


class HybridSuggestion(BaseModel):
    """Suggested combination of the top two archetypes.

    Attributes:
        pair:         ``(primary, secondary)`` in rank order.
        display_pair: ``"<Primary> + <Secondary>"``, e.g. ``"Strategic + Tactical"``.
        note:         Canned explanation for this pair, or the generic fallback.
    """

    model_config = ConfigDict(frozen=True)

    pair: tuple[Archetype, Archetype]
    display_pair: str
    note: str


class Recommendation(BaseModel):
    """Engine output for one selection.

    Attributes:
        ranking:    Every archetype sorted by score descending; ties keep
                    canonical order.
        primary:    First ranking entry.
        secondary:  Second ranking entry.
        margin:     ``primary.score - secondary.score`` (never negative).
        confidence: ``High`` (margin >= 3), ``Medium`` (== 2) or ``Low``.
        hybrid:     Present only when ``margin <= 1``.
        notes:      Preflight advisory strings in rule-evaluation order.

    ``scores`` (read-only, canonical order) is included when dumping.
    """

    model_config = ConfigDict(frozen=True)

    ranking: tuple[RankedArchetype, ...]
    primary: RankedArchetype
    secondary: RankedArchetype
    margin: int
    confidence: ConfidenceLevel
    hybrid: Optional[HybridSuggestion] = None
    notes: tuple[str, ...] = ()

    @model_validator(mode="after")
    def validate_consistency(self) -> "Recommendation":
        ranked = [entry.archetype for entry in self.ranking]
        if len(ranked) != len(CANONICAL_ORDER) or set(ranked) != set(CANONICAL_ORDER):
            raise ValueError("ranking must contain every archetype exactly once.")
        if any(a.score < b.score for a, b in zip(self.ranking, self.ranking[1:])):
            raise ValueError("ranking must be sorted by score descending.")
        if (self.primary, self.secondary) != self.ranking[:2]:
            raise ValueError("primary and secondary must be the first two ranking entries.")
        if self.margin != self.primary.score - self.secondary.score:
            raise ValueError(
                f"margin ({self.margin}) must equal primary.score - secondary.score "
                f"({self.primary.score} - {self.secondary.score})."
            )
        if (self.hybrid is not None) != (self.margin <= 1):
            raise ValueError("hybrid must be present if and only if margin <= 1.")
        return self

    @model_serializer(mode="wrap")
    def _dump_with_scores(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        if info.mode_is_json():
            scores = {archetype.value: score for archetype, score in self.scores.items()}
        else:
            scores = dict(self.scores)
        return {"scores": scores, **data}

    @property
    def scores(self) -> Mapping[Archetype, int]:
        """Final score per archetype in canonical order."""
        by_archetype = {entry.archetype: entry.score for entry in self.ranking}
        return MappingProxyType({a: by_archetype[a] for a in CANONICAL_ORDER})

    @property
    def primary_archetype(self) -> Archetype:
        return self.primary.archetype
