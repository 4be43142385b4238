from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.config import DashboardConfig
from core.filters import ListViewParams
from core.list_view import view_with_params
from core.models import AggregatedDataset
from core.selection import select


def compute_keyword_list(
    dataset: AggregatedDataset,
    config: DashboardConfig,
    category: str,
    params: ListViewParams,
) -> Dict[str, Any]:
    selection = select(dataset, category, config)
    result = view_with_params(selection.keywords_data, params)

    payload = result.to_dict()
    payload["category"] = selection.category
    payload["params"] = asdict(params)
    return payload
