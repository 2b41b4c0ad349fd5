"""
Archetype display metadata: title, blurb, tag chips and accent colour.

Consumed only by the presentation shells (formatters, export, dashboard).
The scoring path never reads this module.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from kpi_decision_map.taxonomy.archetype_taxonomy import Archetype


@dataclass(frozen=True)
class ArchetypeMeta:
    """Display metadata for one archetype.

    Attributes:
        title:  Card heading, e.g. ``"Strategic Dashboard"``.
        blurb:  One-sentence description of what the dashboard is for.
        chips:  Short tag list shown under the description.
        color:  Accent colour (hex) for the dashboard card title and exports.
    """

    title: str
    blurb: str
    chips: tuple[str, ...]
    color: str


ARCHETYPE_META: Mapping[Archetype, ArchetypeMeta] = MappingProxyType(
    {
        Archetype.STRATEGIC: ArchetypeMeta(
            title="Strategic Dashboard",
            blurb=(
                "Tracks outcomes vs. objectives for leaders; curated KPIs, "
                "trends, variance (monthly/quarterly)."
            ),
            chips=("Exec view", "Objectives", "M/Q cadence"),
            color="#41196C",
        ),
        Archetype.OPERATIONAL: ArchetypeMeta(
            title="Operational Dashboard",
            blurb=(
                "Monitors live/near-real-time process health; SLAs, "
                "exceptions, queues, alerts."
            ),
            chips=("Real-time", "SLAs", "Exceptions"),
            color="#CD0A85",
        ),
        Archetype.TACTICAL: ArchetypeMeta(
            title="Tactical Dashboard",
            blurb=(
                "Steers initiatives/campaigns over weeks-months; owners, "
                "milestones, target progress."
            ),
            chips=("Programs", "Weekly", "Milestones"),
            color="#CAFA02",
        ),
        Archetype.ANALYTICAL: ArchetypeMeta(
            title="Analytical Dashboard",
            blurb="Supports diagnosis and discovery; drill-downs, segmentation, comparisons.",
            chips=("Exploration", "Drill-downs", "Cohorts"),
            color="#3C1765",
        ),
    }
)


def meta_for(archetype: Archetype) -> ArchetypeMeta:
    """Return display metadata for ``archetype``."""
    return ARCHETYPE_META[archetype]
