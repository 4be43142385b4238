from __future__ import annotations

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Sequence

from core.config import ALL_CATEGORIES, DashboardConfig
from core.models import (
    STATUS_ORDER,
    AggregatedDataset,
    CategorySummary,
    ExposureStatus,
    KeywordRecord,
    StatBucket,
)


def round_half_up(value: float, ndigits: int = 0) -> float:
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def exposure_success_rate(exposed: int, with_urls: int) -> int:
    if with_urls <= 0:
        return 0
    return int(round_half_up(exposed / with_urls * 100))


def summarize(records: Sequence[KeywordRecord]) -> CategorySummary:
    counts = Counter(r.exposure_status for r in records)
    keywords_with_urls = sum(1 for r in records if r.total_urls > 0)
    exposed = counts.get(ExposureStatus.EXPOSED, 0)

    return CategorySummary(
        total_keywords=len(records),
        keywords_with_urls=keywords_with_urls,
        exposed_keywords=exposed,
        not_exposed_keywords=counts.get(ExposureStatus.NOT_EXPOSED, 0),
        no_url_keywords=counts.get(ExposureStatus.NO_URLS, 0),
        exposure_success_rate=exposure_success_rate(exposed, keywords_with_urls),
        exposure_stats_data=tuple(StatBucket(name=s.value, value=counts.get(s, 0)) for s in STATUS_ORDER),
    )


def _summary_row(category: str, name: str, summary: CategorySummary) -> Dict[str, Any]:
    row = {"category": category, "name": name}
    row.update({k: v for k, v in summary.to_dict().items() if k != "exposureStatsData"})
    return row


def category_summary_rows(dataset: AggregatedDataset, config: DashboardConfig) -> List[Dict[str, Any]]:
    """One comparison row per configured category, then a combined row."""
    rows: List[Dict[str, Any]] = []
    for cat in config.categories:
        row = _summary_row(cat.id, cat.name, dataset.category_data[cat.id].summary)
        row["timestamp"] = dataset.timestamps.get(cat.id)
        row["failed"] = bool(dataset.failed.get(cat.id, False))
        rows.append(row)

    total = _summary_row(ALL_CATEGORIES, "All", dataset.all_summary)
    total["timestamp"] = None
    total["failed"] = bool(dataset.failed_categories)
    rows.append(total)
    return rows
