"""
Recommendation engine entry point.

``evaluate(selection)`` runs the full pipeline in one synchronous pass:

    compute_base_scores → run_preflight_rules → apply_preflight
        → rank_scores → determine_confidence → suggest_hybrid

It is a total function: every ``SelectionInput`` (including the empty one
and one holding stale ids) yields a complete ``Recommendation``.  No state
survives between calls; the only shared data are the read-only catalogs.
"""

from __future__ import annotations

import logging

from kpi_decision_map.models.recommendation import Recommendation
from kpi_decision_map.models.selection import SelectionInput
from kpi_decision_map.recommendations.preflight import apply_preflight, run_preflight_rules
from kpi_decision_map.recommendations.ranker import (
    determine_confidence,
    rank_scores,
    suggest_hybrid,
)
from kpi_decision_map.recommendations.scorer import compute_base_scores

logger = logging.getLogger(__name__)


def evaluate(selection: SelectionInput) -> Recommendation:
    """Recommend a dashboard archetype for ``selection``.

    Args:
        selection: The current user answers.

    Returns:
        Recommendation with scores, ranking, confidence, hybrid and notes.
    """
    scores    = compute_base_scores(selection)
    preflight = run_preflight_rules(selection)
    apply_preflight(scores, preflight)

    ranking = rank_scores(scores)
    primary, secondary = ranking[0], ranking[1]
    margin = primary.score - secondary.score

    rec = Recommendation(
        ranking=ranking,
        primary=primary,
        secondary=secondary,
        margin=margin,
        confidence=determine_confidence(margin),
        hybrid=suggest_hybrid(primary, secondary, margin),
        notes=preflight.notes,
    )

    logger.debug(
        "Evaluated selection",
        extra={
            "primary": primary.archetype.value,
            "secondary": secondary.archetype.value,
            "margin": margin,
            "confidence": rec.confidence.value,
            "fired_rules": list(preflight.fired),
        },
    )
    return rec
