from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from core.models import ExposureStatus, KeywordRecord, UrlRecord


def classify_exposure(has_exposed_url: bool, total_urls: int) -> ExposureStatus:
    if has_exposed_url:
        return ExposureStatus.EXPOSED
    if total_urls == 0:
        return ExposureStatus.NO_URLS
    return ExposureStatus.NOT_EXPOSED


def _url_record(raw: Any) -> UrlRecord:
    if not isinstance(raw, Mapping):
        return UrlRecord(url=raw, is_exposed=False)
    return UrlRecord(url=raw.get("url"), is_exposed=bool(raw.get("is_exposed", False)))


def normalize_result(category_id: str, raw: Mapping[str, Any]) -> KeywordRecord:
    """Turn one raw ``{keyword, urls}`` result into a KeywordRecord.

    The keyword is kept verbatim (no trimming or case folding) and a missing
    ``urls`` list is read as empty.
    """
    urls = tuple(_url_record(u) for u in (raw.get("urls") or []))
    has_exposed_url = any(u.is_exposed for u in urls)
    return KeywordRecord(
        keyword=raw.get("keyword"),
        category=category_id,
        total_urls=len(urls),
        exposure_status=classify_exposure(has_exposed_url, len(urls)),
        has_exposed_url=has_exposed_url,
        urls=urls,
    )


def normalize(category_id: str, raw_results: Optional[Iterable[Mapping[str, Any]]]) -> List[KeywordRecord]:
    return [normalize_result(category_id, raw if isinstance(raw, Mapping) else {}) for raw in (raw_results or [])]
