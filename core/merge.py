from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from core.config import DashboardConfig
from core.models import AggregatedDataset, CategoryData, KeywordRecord, SnapshotOutcome
from core.normalize import normalize
from core.summary import summarize

logger = logging.getLogger(__name__)


def merge(per_category_raw: Mapping[str, Optional[SnapshotOutcome]], config: DashboardConfig) -> AggregatedDataset:
    """Build the combined dataset from every configured category's outcome.

    Categories are processed in configured order. A missing or failed outcome
    contributes no records and no timestamp; it never stops the others.
    """
    all_keywords: List[KeywordRecord] = []
    timestamps: Dict[str, Optional[str]] = {}
    category_data: Dict[str, CategoryData] = {}
    failed: Dict[str, bool] = {}

    for cat in config.categories:
        outcome = per_category_raw.get(cat.id)
        if outcome is None or outcome.error:
            results: list = []
            timestamps[cat.id] = None
            failed[cat.id] = True
        else:
            results = (outcome.data or {}).get("results") or []
            timestamps[cat.id] = outcome.timestamp
            failed[cat.id] = False

        keywords_data = tuple(normalize(cat.id, results))
        all_keywords.extend(keywords_data)
        category_data[cat.id] = CategoryData(keywords_data=keywords_data, summary=summarize(keywords_data))

    all_keywords_data = tuple(all_keywords)
    dataset = AggregatedDataset(
        timestamps=timestamps,
        all_keywords_data=all_keywords_data,
        category_data=category_data,
        all_summary=summarize(all_keywords_data),
        failed=failed,
    )
    logger.info(
        "Merged %d keywords across %d categories (%d failed)",
        len(all_keywords_data),
        len(config.categories),
        len(dataset.failed_categories),
    )
    return dataset
