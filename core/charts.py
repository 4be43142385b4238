from __future__ import annotations

from typing import Any, Dict, List, Sequence

import altair as alt
import pandas as pd

from core.config import ALL_CATEGORIES
from core.models import STATUS_ORDER, CategorySummary

alt.data_transformers.disable_max_rows()

STATUS_COLORS = ["#10b981", "#f87171", "#6b7280"]
STATUS_LABELS = [s.value for s in STATUS_ORDER]

_ROW_BUCKETS = {
    "exposedKeywords": STATUS_ORDER[0].value,
    "notExposedKeywords": STATUS_ORDER[1].value,
    "noUrlKeywords": STATUS_ORDER[2].value,
}


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def _status_color() -> alt.Color:
    return alt.Color(
        "name:N",
        title="Exposure Status",
        sort=STATUS_LABELS,
        scale=alt.Scale(domain=STATUS_LABELS, range=STATUS_COLORS),
    )


def exposure_status_chart(summary: CategorySummary) -> Dict[str, Any]:
    source = pd.DataFrame([b.to_dict() for b in summary.exposure_stats_data], columns=["name", "value"])
    source["order"] = range(len(source))
    chart = (
        alt.Chart(source)
        .mark_arc()
        .encode(
            theta=alt.Theta("value:Q"),
            color=_status_color(),
            order=alt.Order("order:Q"),
            tooltip=["name", "value"],
        )
    )
    return to_vega_spec(chart)


def category_comparison_chart(rows: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    records: List[Dict[str, Any]] = []
    for row in rows:
        if row.get("category") == ALL_CATEGORIES:
            continue
        for col, label in _ROW_BUCKETS.items():
            records.append({"category": row["name"], "name": label, "value": int(row.get(col, 0) or 0)})

    source = pd.DataFrame(records, columns=["category", "name", "value"])
    chart = (
        alt.Chart(source)
        .mark_bar()
        .encode(
            x=alt.X("category:N", title="Category", sort=None),
            xOffset=alt.XOffset("name:N", sort=STATUS_LABELS),
            y=alt.Y("value:Q", title="Keywords"),
            color=_status_color(),
            tooltip=["category", "name", "value"],
        )
    )
    return to_vega_spec(chart)
