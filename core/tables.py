from __future__ import annotations

from typing import Any, Dict, Sequence

import pandas as pd

from core.models import KeywordRecord


KEYWORD_COLUMNS = ["keyword", "category", "totalUrls", "exposureStatus", "hasExposedUrl", "exposedUrls", "urls"]

SUMMARY_COLUMNS = [
    "category",
    "name",
    "timestamp",
    "failed",
    "totalKeywords",
    "keywordsWithUrls",
    "exposedKeywords",
    "notExposedKeywords",
    "noUrlKeywords",
    "exposureSuccessRate",
]


def keywords_frame(records: Sequence[KeywordRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        rows.append(
            {
                "keyword": r.keyword,
                "category": r.category,
                "totalUrls": r.total_urls,
                "exposureStatus": r.exposure_status.value,
                "hasExposedUrl": r.has_exposed_url,
                "exposedUrls": "\n".join(str(u.url) for u in r.urls if u.is_exposed),
                "urls": "\n".join(str(u.url) for u in r.urls),
            }
        )
    return pd.DataFrame(rows, columns=KEYWORD_COLUMNS)


def category_summary_frame(rows: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(list(rows), columns=SUMMARY_COLUMNS)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")
