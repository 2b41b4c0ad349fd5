"""
KPI Decision Map — Streamlit Dashboard
======================================

Optional interactive UI over the recommendation engine.  Every widget
change rebuilds the ``SelectionInput`` and calls ``evaluate()`` again; there
is no caching because an evaluation is a handful of dict additions.

Layout
------
  1. Core Questions / Audience / Latency — multi-select checkboxes.
  2. Preflight & Guardrails — four single-choice radios.
  3. Recommendation card — title, blurb, chips, confidence, score by type,
     hybrid suggestion and preflight notes.
  4. One-pager preview — the condensed printable summary (toggle).

Sidebar buttons "Reset to defaults" and "Clear all" replace the whole
selection; they do not touch the engine.

Usage
-----
    pip install -e ".[dashboard]"
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="KPI Decision Map",
    layout="wide",
    initial_sidebar_state="expanded",
)

from kpi_decision_map.catalog.archetype_meta import meta_for
from kpi_decision_map.catalog.options import CATALOGS
from kpi_decision_map.config import load_config
from kpi_decision_map.models.selection import SelectionInput
from kpi_decision_map.recommendations.engine import evaluate
from kpi_decision_map.reporting.formatters import format_one_pager
from kpi_decision_map.taxonomy.archetype_taxonomy import ChoiceGroup
from kpi_decision_map.utils.logging import configure_logging

_CONFIG = load_config()
configure_logging(_CONFIG.logging)

_MULTI_FIELDS = {
    ChoiceGroup.INTENT:   "intents",
    ChoiceGroup.AUDIENCE: "audiences",
    ChoiceGroup.LATENCY:  "latencies",
}
_SINGLE_FIELDS = {
    ChoiceGroup.MATURITY:    ("maturity", "Data maturity"),
    ChoiceGroup.SCOPE:       ("scope", "Scope"),
    ChoiceGroup.INTERACTION: ("interaction", "Interaction"),
    ChoiceGroup.INDICATORS:  ("indicators", "Indicator mix"),
}


# ── Session state helpers ─────────────────────────────────────────────────────

def _load_into_session(selection: SelectionInput) -> None:
    """Overwrite every widget key from ``selection`` (wholesale replace)."""
    for group, field_name in _MULTI_FIELDS.items():
        chosen = getattr(selection, field_name)
        for opt in CATALOGS[group]:
            st.session_state[f"{group.value}-{opt.id}"] = opt.id in chosen
    for group, (field_name, _) in _SINGLE_FIELDS.items():
        st.session_state[group.value] = getattr(selection, field_name)


def _selection_from_session() -> SelectionInput:
    values: dict = {}
    for group, field_name in _MULTI_FIELDS.items():
        values[field_name] = frozenset(
            opt.id for opt in CATALOGS[group]
            if st.session_state.get(f"{group.value}-{opt.id}", False)
        )
    for group, (field_name, _) in _SINGLE_FIELDS.items():
        values[field_name] = st.session_state.get(group.value)
    return SelectionInput(**values)


if "initialized" not in st.session_state:
    _load_into_session(_CONFIG.defaults.to_selection())
    st.session_state["initialized"] = True


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("KPI Decision Map")
    st.caption("Answer three inputs → run preflight → get the recommended dashboard type")
    st.divider()

    if st.button("Reset to defaults"):
        _load_into_session(_CONFIG.defaults.to_selection())
        st.rerun()

    if st.button("Clear all"):
        _load_into_session(SelectionInput.cleared())
        st.rerun()

    show_one_pager = st.toggle("One-pager preview", value=False)


# ── Inputs ────────────────────────────────────────────────────────────────────

st.header("Decision Flow")

col_intent, col_audience, col_latency = st.columns(3)
for col, group, title in (
    (col_intent, ChoiceGroup.INTENT, "1. Core Questions (multi)"),
    (col_audience, ChoiceGroup.AUDIENCE, "2. Audience (multi)"),
    (col_latency, ChoiceGroup.LATENCY, "3. Latency (multi)"),
):
    with col:
        st.subheader(title)
        for opt in CATALOGS[group]:
            st.checkbox(opt.label, key=f"{group.value}-{opt.id}")

st.subheader("4. Preflight & Guardrails")
preflight_cols = st.columns(4)
for col, (group, (_, heading)) in zip(preflight_cols, _SINGLE_FIELDS.items()):
    with col:
        opts = CATALOGS[group]
        labels = {opt.id: opt.label for opt in opts}
        st.radio(
            heading,
            options=[opt.id for opt in opts],
            format_func=labels.get,
            index=None,
            key=group.value,
        )
st.caption("Checks feasibility, scope fit, and discovery needs. Warns on lagging-only Ops.")


# ── Recommendation ────────────────────────────────────────────────────────────

selection = _selection_from_session()
rec = evaluate(selection)
meta = meta_for(rec.primary.archetype)

st.divider()
with st.container(border=True):
    left, right = st.columns([2, 1])
    with left:
        st.caption("RECOMMENDATION")
        st.markdown(
            f"<h3 style='color: {meta.color}'>{meta.title}</h3>",
            unsafe_allow_html=True,
        )
        st.write(meta.blurb)
        st.markdown(" ".join(f"`{chip}`" for chip in meta.chips))
    with right:
        st.metric("Confidence", rec.confidence.value, f"margin {rec.margin}", delta_color="off")

    score_cols = st.columns(len(rec.scores))
    for col, (archetype, score) in zip(score_cols, rec.scores.items()):
        col.metric(archetype.value, score)

    if rec.hybrid is not None:
        st.info(f"**Hybrid: {rec.hybrid.display_pair}**  \n{rec.hybrid.note}")

    if rec.notes:
        st.markdown("**Preflight notes**")
        for note in rec.notes:
            st.markdown(f"- {note}")


# ── One-pager preview ─────────────────────────────────────────────────────────

if show_one_pager:
    st.divider()
    st.code(
        format_one_pager(selection, rec, max_notes=_CONFIG.output.one_pager_max_notes),
        language=None,
    )
