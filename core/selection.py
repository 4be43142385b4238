from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.config import ALL_CATEGORIES, DashboardConfig
from core.models import AggregatedDataset, CategorySummary, KeywordRecord


@dataclass(frozen=True)
class ViewSelection:
    category: str
    keywords_data: Tuple[KeywordRecord, ...]
    summary: CategorySummary
    timestamp: Optional[str] = None
    timestamps: Optional[Dict[str, Optional[str]]] = None
    categories: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "category": self.category,
            "summary": self.summary.to_dict(),
            "categories": self.categories,
        }
        if self.category == ALL_CATEGORIES:
            payload["timestamps"] = self.timestamps
        else:
            payload["timestamp"] = self.timestamp
        return payload


def select(dataset: AggregatedDataset, active_category: str, config: DashboardConfig) -> ViewSelection:
    """Pick the precomputed slice for ``active_category``.

    An unconfigured category raises ``KeyError``.
    """
    categories = config.category_list()
    if active_category == ALL_CATEGORIES:
        return ViewSelection(
            category=ALL_CATEGORIES,
            keywords_data=dataset.all_keywords_data,
            summary=dataset.all_summary,
            timestamps=dataset.timestamps,
            categories=categories,
        )

    data = dataset.category_data[active_category]
    return ViewSelection(
        category=active_category,
        keywords_data=data.keywords_data,
        summary=data.summary,
        timestamp=dataset.timestamps.get(active_category),
        categories=categories,
    )
