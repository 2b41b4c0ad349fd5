"""
Base vote tally: converts the three multi-select answer sets into a raw
score per archetype.

Score formula
-------------
    score[a] = (
        sum(intent_votes[a])   * 2    # core intent carries double weight
        + sum(audience_votes[a]) * 1
        + sum(latency_votes[a])  * 1
    )

The 2/1/1 multipliers are part of the output contract — changing them
changes every recommendation.  Preflight gates and nudges are applied
afterwards by ``recommendations.preflight``.

Unknown ids look up an empty vote vector and contribute nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from kpi_decision_map.catalog.options import find_votes
from kpi_decision_map.models.selection import SelectionInput
from kpi_decision_map.taxonomy.archetype_taxonomy import (
    CANONICAL_ORDER,
    Archetype,
    ChoiceGroup,
)

INTENT_WEIGHT   = 2
AUDIENCE_WEIGHT = 1
LATENCY_WEIGHT  = 1

ScoreVector = dict[Archetype, int]


def empty_scores() -> ScoreVector:
    """Return a zeroed score vector holding every archetype in canonical order."""
    return {archetype: 0 for archetype in CANONICAL_ORDER}


def add_votes(scores: ScoreVector, votes: Mapping[Archetype, int], weight: int = 1) -> None:
    """Add ``votes * weight`` into ``scores`` in place."""
    for archetype, value in votes.items():
        scores[archetype] += value * weight


def tally_group(
    scores:     ScoreVector,
    group:      ChoiceGroup,
    choice_ids: Iterable[str],
    weight:     int,
) -> None:
    """Add the weighted votes of every chosen id in ``group``."""
    for choice_id in choice_ids:
        add_votes(scores, find_votes(group, choice_id), weight)


def compute_base_scores(selection: SelectionInput) -> ScoreVector:
    """Compute the vote tally for ``selection`` before preflight adjustments.

    Args:
        selection: The current user answers.

    Returns:
        Score vector with all four archetypes present.
    """
    scores = empty_scores()
    tally_group(scores, ChoiceGroup.INTENT, selection.intents, INTENT_WEIGHT)
    tally_group(scores, ChoiceGroup.AUDIENCE, selection.audiences, AUDIENCE_WEIGHT)
    tally_group(scores, ChoiceGroup.LATENCY, selection.latencies, LATENCY_WEIGHT)
    return scores
