"""
Recommendation ranker: orders the final score vector, derives margin and
confidence, and proposes a hybrid when the top two are too close to call.

Usage flow
----------
1. rank_scores(scores)            -> tuple[RankedArchetype, ...]
2. determine_confidence(margin)   -> ConfidenceLevel
3. suggest_hybrid(primary, secondary, margin) -> HybridSuggestion | None

Tie-break
---------
Sorting is stable over ``CANONICAL_ORDER`` (Strategic, Operational, Tactical,
Analytical), so equal scores never reorder.

Hybrid notes
------------
Keyed by the pair of archetype names sorted alphabetically.  The table holds
four entries, but the Strategic/Analytical key is not in sorted order, so it
never matches: Analytical + Operational, Analytical + Strategic and
Operational + Strategic all get the generic fallback.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from kpi_decision_map.models.recommendation import HybridSuggestion, RankedArchetype
from kpi_decision_map.recommendations.scorer import ScoreVector
from kpi_decision_map.taxonomy.archetype_taxonomy import (
    CANONICAL_ORDER,
    Archetype,
    ConfidenceLevel,
)

HIGH_CONFIDENCE_MARGIN   = 3
MEDIUM_CONFIDENCE_MARGIN = 2
HYBRID_MAX_MARGIN        = 1

HYBRID_FALLBACK_NOTE = "Combine strengths of top two."

HYBRID_NOTES: Mapping[tuple[Archetype, Archetype], str] = MappingProxyType(
    {
        (Archetype.ANALYTICAL, Archetype.TACTICAL):
            "Analytical for diagnosis + Tactical for delivery.",
        (Archetype.OPERATIONAL, Archetype.TACTICAL):
            "Operational wallboard + Tactical weekly steering.",
        # Unsorted key: never matched.
        (Archetype.STRATEGIC, Archetype.ANALYTICAL):
            "Strategic overview + Analytical deep dives.",
        (Archetype.STRATEGIC, Archetype.TACTICAL):
            "Strategic overview + Tactical initiatives (default hybrid).",
    }
)


def rank_scores(scores: ScoreVector) -> tuple[RankedArchetype, ...]:
    """Return every archetype sorted by score descending.

    Archetypes missing from ``scores`` rank with a score of 0.
    """
    entries = [
        RankedArchetype(archetype=archetype, score=scores.get(archetype, 0))
        for archetype in CANONICAL_ORDER
    ]
    return tuple(sorted(entries, key=lambda entry: -entry.score))


def determine_confidence(margin: int) -> ConfidenceLevel:
    """Map the primary/secondary margin to a confidence label.

    Rules:
        margin >= 3  → High
        margin == 2  → Medium
        otherwise    → Low
    """
    if margin >= HIGH_CONFIDENCE_MARGIN:
        return ConfidenceLevel.HIGH
    if margin == MEDIUM_CONFIDENCE_MARGIN:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def hybrid_note(first: Archetype, second: Archetype) -> str:
    """Return the canned note for an unordered archetype pair."""
    key = tuple(sorted((first, second)))
    return HYBRID_NOTES.get(key, HYBRID_FALLBACK_NOTE)


def suggest_hybrid(
    primary:   RankedArchetype,
    secondary: RankedArchetype,
    margin:    int,
) -> HybridSuggestion | None:
    """Propose combining the top two archetypes when ``margin <= 1``.

    Returns:
        HybridSuggestion in rank order, or ``None`` when the lead is decisive.
    """
    if margin > HYBRID_MAX_MARGIN:
        return None
    a, b = primary.archetype, secondary.archetype
    return HybridSuggestion(
        pair=(a, b),
        display_pair=f"{a.value} + {b.value}",
        note=hybrid_note(a, b),
    )
