"""
Recommendation engine: turns a SelectionInput into a ranked dashboard
archetype recommendation with confidence, hybrid suggestion and notes.

Modules
-------
scorer    : compute_base_scores() — weighted vote tally (intent x2,
            audience x1, latency x1).  Pure functions.
preflight : run_preflight_rules() + apply_preflight() — ordered gates,
            nudges and advisory notes.
ranker    : rank_scores() + determine_confidence() + suggest_hybrid().
engine    : evaluate() — the one-pass entry point.
"""

from kpi_decision_map.recommendations.engine import evaluate

__all__ = ["evaluate"]
