from __future__ import annotations

from typing import Any, Dict

from core.charts import category_comparison_chart, exposure_status_chart
from core.config import DashboardConfig
from core.models import AggregatedDataset
from core.selection import select
from core.summary import category_summary_rows


def compute_summary(dataset: AggregatedDataset, config: DashboardConfig, category: str) -> Dict[str, Any]:
    selection = select(dataset, category, config)
    rows = category_summary_rows(dataset, config)

    payload = selection.to_dict()
    payload["failedCategories"] = dataset.failed_categories
    payload["categoryTable"] = rows
    payload["charts"] = {
        "exposure_status": exposure_status_chart(selection.summary),
        "category_comparison": category_comparison_chart(rows),
    }
    return payload
