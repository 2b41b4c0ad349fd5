"""
Export helpers for sharing a recommendation outside the terminal.

All ``export_*`` functions write to disk and return the written ``Path``.
They accept generic ``dict`` / ``list[dict]`` data to stay decoupled from
the model classes.

``build_recommendation_report()`` produces the nested JSON document;
``flatten_recommendation_for_export()`` turns it into one flat row per
ranked archetype so the CSV loads in Excel or pandas without unpivoting.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from kpi_decision_map.catalog.archetype_meta import meta_for
from kpi_decision_map.models.recommendation import Recommendation
from kpi_decision_map.models.selection import SelectionInput
from kpi_decision_map.taxonomy.archetype_taxonomy import Archetype

logger = logging.getLogger(__name__)

CSV_FIELDNAMES: list[str] = [
    "generated_at", "rank", "archetype", "title", "score",
    "is_primary", "margin", "confidence", "hybrid_pair", "hybrid_note", "notes",
]


def build_recommendation_report(
    selection:    SelectionInput,
    rec:          Recommendation,
    generated_at: datetime | None = None,
) -> dict:
    """Assemble a JSON-ready report for one evaluation.

    Multi-select ids are sorted so two reports for the same selection are
    byte-identical apart from ``generated_at``.

    Args:
        selection:    The selection ``rec`` was derived from.
        rec:          Engine output.
        generated_at: Timestamp for provenance. Defaults to now (UTC).

    Returns:
        Dict with ``generated_at``, ``selection``, ``recommendation`` and
        ``primary_meta`` keys.
    """
    if generated_at is None:
        generated_at = datetime.now(tz=timezone.utc)

    meta = meta_for(rec.primary.archetype)
    selection_dict = selection.model_dump(mode="json")
    for key in ("intents", "audiences", "latencies"):
        selection_dict[key] = sorted(selection_dict[key])

    return {
        "generated_at": generated_at.isoformat(),
        "selection": selection_dict,
        "recommendation": rec.model_dump(mode="json"),
        "primary_meta": {
            "title": meta.title,
            "blurb": meta.blurb,
            "chips": list(meta.chips),
            "color": meta.color,
        },
    }


def flatten_recommendation_for_export(report: dict) -> list[dict]:
    """Flatten a report dict into one row per ranked archetype.

    Each row carries the report-level fields (margin, confidence, hybrid,
    notes joined with ``" | "``) so any single row is self-describing.

    Args:
        report: Output of ``build_recommendation_report()``.

    Returns:
        List of flat row dicts in rank order.
    """
    rec     = report.get("recommendation", {})
    hybrid  = rec.get("hybrid") or {}
    primary = (rec.get("primary") or {}).get("archetype")
    notes   = " | ".join(rec.get("notes", []))

    rows: list[dict] = []
    for rank, entry in enumerate(rec.get("ranking", []), start=1):
        archetype = entry.get("archetype", "")
        rows.append(
            {
                "generated_at": report.get("generated_at", ""),
                "rank":         rank,
                "archetype":    archetype,
                "title":        _title_for(archetype),
                "score":        entry.get("score", ""),
                "is_primary":   archetype == primary,
                "margin":       rec.get("margin", ""),
                "confidence":   rec.get("confidence", ""),
                "hybrid_pair":  hybrid.get("display_pair", ""),
                "hybrid_note":  hybrid.get("note", ""),
                "notes":        notes,
            }
        )
    return rows


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    logger.info("CSV written: %s (%d rows)", path, len(records))
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str, ensure_ascii=False), encoding="utf-8")
    logger.info("JSON written: %s", path)
    return path


# ── Helper ────────────────────────────────────────────────────────────────────

def _title_for(archetype: str) -> str:
    try:
        return meta_for(Archetype(archetype)).title
    except ValueError:
        return ""
