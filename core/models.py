from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ExposureStatus(str, Enum):
    EXPOSED = "Exposed"
    NOT_EXPOSED = "Not Exposed"
    NO_URLS = "No URLs"


# Chart and summary consumers rely on this order.
STATUS_ORDER: Tuple[ExposureStatus, ...] = (
    ExposureStatus.EXPOSED,
    ExposureStatus.NOT_EXPOSED,
    ExposureStatus.NO_URLS,
)

STATUS_TONES: Dict[ExposureStatus, str] = {
    ExposureStatus.EXPOSED: "positive",
    ExposureStatus.NOT_EXPOSED: "negative",
    ExposureStatus.NO_URLS: "neutral",
}

# Ascending status sort: no URLs, then not exposed, then exposed.
STATUS_SORT_RANK: Dict[ExposureStatus, int] = {
    ExposureStatus.NO_URLS: 0,
    ExposureStatus.NOT_EXPOSED: 1,
    ExposureStatus.EXPOSED: 2,
}


@dataclass(frozen=True)
class UrlRecord:
    url: Any
    is_exposed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "isExposed": self.is_exposed}


@dataclass(frozen=True)
class KeywordRecord:
    keyword: Any
    category: str
    total_urls: int
    exposure_status: ExposureStatus
    has_exposed_url: bool
    urls: Tuple[UrlRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "category": self.category,
            "totalUrls": self.total_urls,
            "exposureStatus": self.exposure_status.value,
            "hasExposedUrl": self.has_exposed_url,
            "urls": [u.to_dict() for u in self.urls],
        }


@dataclass(frozen=True)
class StatBucket:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class CategorySummary:
    total_keywords: int = 0
    keywords_with_urls: int = 0
    exposed_keywords: int = 0
    not_exposed_keywords: int = 0
    no_url_keywords: int = 0
    exposure_success_rate: int = 0
    exposure_stats_data: Tuple[StatBucket, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalKeywords": self.total_keywords,
            "keywordsWithUrls": self.keywords_with_urls,
            "exposedKeywords": self.exposed_keywords,
            "notExposedKeywords": self.not_exposed_keywords,
            "noUrlKeywords": self.no_url_keywords,
            "exposureSuccessRate": self.exposure_success_rate,
            "exposureStatsData": [b.to_dict() for b in self.exposure_stats_data],
        }


@dataclass(frozen=True)
class SnapshotOutcome:
    """Result of one fetch attempt for one category."""

    category: str
    data: Dict[str, Any] = field(default_factory=lambda: {"results": []})
    timestamp: Optional[str] = None
    error: bool = False

    @classmethod
    def from_document(cls, category: str, document: Dict[str, Any]) -> "SnapshotOutcome":
        return cls(category=category, data=document, timestamp=document.get("timestamp") or None, error=False)

    @classmethod
    def failure(cls, category: str) -> "SnapshotOutcome":
        return cls(category=category, data={"results": []}, timestamp=None, error=True)


@dataclass(frozen=True)
class CategoryData:
    keywords_data: Tuple[KeywordRecord, ...]
    summary: CategorySummary


@dataclass(frozen=True)
class AggregatedDataset:
    timestamps: Dict[str, Optional[str]]
    all_keywords_data: Tuple[KeywordRecord, ...]
    category_data: Dict[str, CategoryData]
    all_summary: CategorySummary
    failed: Dict[str, bool] = field(default_factory=dict)

    @property
    def failed_categories(self) -> List[str]:
        return [cid for cid, flag in self.failed.items() if flag]
