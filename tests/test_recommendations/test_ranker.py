"""
Tests for kpi_decision_map/recommendations/ranker.py.

What we test
------------
rank_scores():
  - Sorted by score descending.
  - Ties keep canonical order (Strategic, Operational, Tactical, Analytical).
  - Missing archetypes rank with score 0.

determine_confidence():
  - High for margin >= 3, Medium for exactly 2, Low otherwise.

suggest_hybrid() / hybrid_note():
  - None when margin > 1.
  - Pair in rank order with "<A> + <B>" display text.
  - Canned notes for the three reachable pairs, in either order.
  - Fallback note for the other three pairs, Strategic + Analytical included.
"""

from __future__ import annotations

import pytest

from kpi_decision_map.models.recommendation import RankedArchetype
from kpi_decision_map.recommendations.ranker import (
    HYBRID_FALLBACK_NOTE,
    HYBRID_NOTES,
    determine_confidence,
    hybrid_note,
    rank_scores,
    suggest_hybrid,
)
from kpi_decision_map.taxonomy.archetype_taxonomy import Archetype, ConfidenceLevel

S, O, T, A = (
    Archetype.STRATEGIC,
    Archetype.OPERATIONAL,
    Archetype.TACTICAL,
    Archetype.ANALYTICAL,
)


def _order(scores) -> list[Archetype]:
    return [entry.archetype for entry in rank_scores(scores)]


# ── rank_scores ────────────────────────────────────────────────────────────────

class TestRankScores:
    def test_descending(self):
        assert _order({S: 1, O: 5, T: 3, A: 4}) == [O, A, T, S]

    def test_all_tied_keeps_canonical_order(self):
        assert _order({S: 0, O: 0, T: 0, A: 0}) == [S, O, T, A]

    def test_partial_tie_is_stable(self):
        # A and T tie; Tactical comes first canonically
        assert _order({S: 0, O: -1, T: 6, A: 6}) == [T, A, S, O]

    def test_negative_scores(self):
        assert _order({S: 2, O: 1, T: -3, A: 2}) == [S, A, O, T]

    def test_missing_archetype_scores_zero(self):
        ranking = rank_scores({S: -1})
        assert [e.archetype for e in ranking] == [O, T, A, S]
        assert ranking[-1].score == -1

    def test_returns_ranked_entries(self):
        ranking = rank_scores({S: 3, O: 0, T: 0, A: 0})
        assert ranking[0] == RankedArchetype(archetype=S, score=3)
        assert len(ranking) == 4


# ── determine_confidence ─────────────────────────────────────────────────────────

class TestDetermineConfidence:
    @pytest.mark.parametrize(
        "margin, expected",
        [
            (0, ConfidenceLevel.LOW),
            (1, ConfidenceLevel.LOW),
            (2, ConfidenceLevel.MEDIUM),
            (3, ConfidenceLevel.HIGH),
            (10, ConfidenceLevel.HIGH),
        ],
    )
    def test_thresholds(self, margin, expected):
        assert determine_confidence(margin) is expected


# ── Hybrid ─────────────────────────────────────────────────────────────────────

class TestHybrid:
    def _entries(self, a: Archetype, b: Archetype, margin: int):
        return (
            RankedArchetype(archetype=a, score=margin),
            RankedArchetype(archetype=b, score=0),
        )

    def test_none_when_decisive(self):
        primary, secondary = self._entries(S, T, 2)
        assert suggest_hybrid(primary, secondary, 2) is None

    @pytest.mark.parametrize("margin", [0, 1])
    def test_present_when_close(self, margin):
        primary, secondary = self._entries(T, S, margin)
        hybrid = suggest_hybrid(primary, secondary, margin)
        assert hybrid is not None
        assert hybrid.pair == (T, S)
        assert hybrid.display_pair == "Tactical + Strategic"
        assert hybrid.note == "Strategic overview + Tactical initiatives (default hybrid)."

    def test_table_keeps_four_entries(self):
        assert len(HYBRID_NOTES) == 4

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (A, T, "Analytical for diagnosis + Tactical for delivery."),
            (O, T, "Operational wallboard + Tactical weekly steering."),
            (S, T, "Strategic overview + Tactical initiatives (default hybrid)."),
        ],
    )
    def test_canned_notes_ignore_order(self, a, b, expected):
        assert hybrid_note(a, b) == expected
        assert hybrid_note(b, a) == expected

    @pytest.mark.parametrize("a, b", [(A, O), (O, S), (S, A)])
    def test_uncovered_pairs_fall_back(self, a, b):
        assert hybrid_note(a, b) == HYBRID_FALLBACK_NOTE
        assert hybrid_note(b, a) == HYBRID_FALLBACK_NOTE
