"""
Tests for kpi_decision_map/reporting/formatters.py.

What we test
------------
format_recommendation():
  - Title, blurb, chips and confidence line for the primary archetype.
  - Score table marks the primary and lists all four types.
  - Hybrid line only when margin <= 1.
  - Preflight notes listed in order.

format_one_pager():
  - Header with the injected date.
  - Inputs shown as labels; empty groups show a dash, unset modifiers
    show "Not selected".
  - Notes truncated to max_notes.

format_option_catalog():
  - Every group heading and every id appear; votes rendered with sign.
"""

from __future__ import annotations

from datetime import date

from kpi_decision_map.recommendations import evaluate
from kpi_decision_map.recommendations.preflight import (
    NOTE_LEADING_SIGNALS,
    NOTE_MANUAL_DATA,
    NOTE_REALTIME_MISMATCH,
)
from kpi_decision_map.reporting.formatters import (
    EMPTY_INPUT,
    NOT_SELECTED,
    format_confidence_line,
    format_hybrid_line,
    format_one_pager,
    format_option_catalog,
    format_recommendation,
    format_score_table,
)


# ── Shared blocks ─────────────────────────────────────────────────────────────

class TestSharedBlocks:
    def test_confidence_line(self, default_selection):
        assert format_confidence_line(evaluate(default_selection)) == "Confidence: High (margin 10)"

    def test_hybrid_line_none_when_decisive(self, default_selection):
        assert format_hybrid_line(evaluate(default_selection)) is None

    def test_hybrid_line(self, empty_selection):
        line = format_hybrid_line(evaluate(empty_selection))
        assert line == "Hybrid: Strategic + Operational — Combine strengths of top two."

    def test_score_table_marks_primary(self, default_selection):
        table = format_score_table(evaluate(default_selection)).splitlines()
        assert table[0].strip() == "Score by type:"
        assert len(table) == 5
        assert "* Strategic" in table[1]
        assert table[1].rstrip().endswith("10")
        assert "*" not in "".join(table[2:])


# ── Full view ─────────────────────────────────────────────────────────────────

class TestFormatRecommendation:
    def test_card(self, default_selection):
        out = format_recommendation(evaluate(default_selection))
        assert "=== Recommendation ===" in out
        assert "Strategic Dashboard" in out
        assert "[Exec view] [Objectives] [M/Q cadence]" in out
        assert "Confidence: High (margin 10)" in out
        assert "Hybrid:" not in out
        assert "Preflight notes:" not in out

    def test_notes_in_order(self, all_rules_selection):
        out = format_recommendation(evaluate(all_rules_selection))
        assert "Preflight notes:" in out
        assert out.index(NOTE_REALTIME_MISMATCH) < out.index(NOTE_MANUAL_DATA)
        assert out.index(NOTE_MANUAL_DATA) < out.index(NOTE_LEADING_SIGNALS)

    def test_hybrid_shown(self, all_rules_selection):
        out = format_recommendation(evaluate(all_rules_selection))
        assert "Hybrid: Strategic + Analytical — Combine strengths of top two." in out


# ── One-pager ─────────────────────────────────────────────────────────────────

class TestFormatOnePager:
    def test_header_and_date(self, default_selection):
        out = format_one_pager(
            default_selection, evaluate(default_selection), generated_on=date(2026, 1, 5)
        )
        assert "=== KPI Decision Map — One-Pager ===" in out
        assert "Generated: 2026-01-05" in out

    def test_inputs_as_labels(self, default_selection):
        out = format_one_pager(default_selection, evaluate(default_selection))
        assert "Core Questions: Track strategy and outcomes versus targets" in out
        assert "Audience:       Executives and VPs" in out
        assert "Latency:        Monthly or quarterly" in out
        assert "Data maturity:  Daily batch" in out
        assert "Scope:          Single function / program" in out
        assert "Exec view | Objectives | M/Q cadence" in out

    def test_multi_labels_in_catalog_order(self, make_selection):
        sel = make_selection(latencies={"monthly", "rt"})
        out = format_one_pager(sel, evaluate(sel))
        assert "Latency:        Real-time or hourly (alerts), Monthly or quarterly" in out

    def test_empty_selection_placeholders(self, empty_selection):
        out = format_one_pager(empty_selection, evaluate(empty_selection))
        assert f"Core Questions: {EMPTY_INPUT}" in out
        assert f"Scope:          {NOT_SELECTED}" in out
        assert "Notes & cautions" not in out
        assert "Hybrid: Strategic + Operational" in out

    def test_notes_truncated(self, all_rules_selection):
        rec = evaluate(all_rules_selection)
        out = format_one_pager(all_rules_selection, rec)
        assert "Notes & cautions" in out
        assert out.count("\n  - ") == 4
        assert NOTE_LEADING_SIGNALS not in out

    def test_custom_max_notes(self, all_rules_selection):
        rec = evaluate(all_rules_selection)
        out = format_one_pager(all_rules_selection, rec, max_notes=1)
        assert out.count("\n  - ") == 1
        assert NOTE_REALTIME_MISMATCH in out
        assert NOTE_MANUAL_DATA not in out


# ── Option catalog ────────────────────────────────────────────────────────────

class TestFormatOptionCatalog:
    def test_lists_every_group(self):
        out = format_option_catalog()
        for heading in (
            "[intent] Core Questions (multi)",
            "[audience] Audience (multi)",
            "[latency] Latency (multi)",
            "[maturity] Data maturity",
            "[scope] Scope",
            "[interaction] Interaction",
            "[indicators] Indicator mix",
        ):
            assert heading in out
        assert out.count("(multi)") == 3

    def test_votes_rendered_with_sign(self):
        out = format_option_catalog()
        assert "(Tactical +1, Operational +1)" in out
        assert "(Strategic +3)" in out

    def test_modifiers_have_no_votes(self):
        line = next(
            l for l in format_option_catalog().splitlines() if "Manual / ad-hoc" in l
        )
        assert "(" not in line
