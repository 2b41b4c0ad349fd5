"""
Shared pytest fixtures for the KPI Decision Map test suite.

Provides:
  - ``empty_selection`` / ``default_selection``: the two reset bundles.
  - ``make_selection``: factory for ad-hoc selections from keyword args.
  - ``all_rules_selection``: a selection that fires every preflight rule.
  - ``restore_root_logging``: snapshot/restore of root logger handlers for
    tests that call ``configure_logging``.
"""

from __future__ import annotations

import logging
from typing import Callable, Generator

import pytest

from kpi_decision_map.config import DefaultsConfig
from kpi_decision_map.models.selection import SelectionInput


# ── Selection fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def empty_selection() -> SelectionInput:
    """Everything empty or unset."""
    return SelectionInput.cleared()


@pytest.fixture
def default_selection() -> SelectionInput:
    """The reset-to-defaults bundle from ``DefaultsConfig``."""
    return DefaultsConfig().to_selection()


@pytest.fixture
def make_selection() -> Callable[..., SelectionInput]:
    """Build a ``SelectionInput`` from keyword args; unspecified fields stay empty."""
    def _make(**kwargs) -> SelectionInput:
        return SelectionInput(**kwargs)
    return _make


@pytest.fixture
def all_rules_selection() -> SelectionInput:
    """Fires all five preflight rules.

    Expected scores: Strategic 2, Operational 1, Tactical -3, Analytical 2.
    """
    return SelectionInput(
        intents={"operational"},
        latencies={"rt"},
        maturity="manual",
        scope="enterprise",
        interaction="rich",
        indicators="lagging",
    )


# ── Logging isolation ─────────────────────────────────────────────────────────

@pytest.fixture
def restore_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
