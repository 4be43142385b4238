from __future__ import annotations

import locale
import math
import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

from core.filters import ListViewParams
from core.models import STATUS_SORT_RANK, STATUS_TONES, KeywordRecord


def _text(value: Any) -> str:
    return "" if value is None else str(value)


CODEPOINT_LOCALES = {"C", "POSIX"}


def configure_collation(name: str = "") -> str:
    """Set LC_COLLATE (from the environment when ``name`` is empty); returns the active locale."""
    try:
        return locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        return locale.setlocale(locale.LC_COLLATE)


def _has_collating_locale() -> bool:
    current = locale.setlocale(locale.LC_COLLATE) or "C"
    return current.split(".")[0] not in CODEPOINT_LOCALES


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped).casefold()


def collation_key(value: Any) -> Tuple[str, str]:
    # C/POSIX collation is plain codepoint order; fold case and accents instead.
    text = _text(value)
    if _has_collating_locale():
        return locale.strxfrm(text), text
    return _fold(text), text


SORT_KEY_FUNCS: Dict[str, Callable[[KeywordRecord], Any]] = {
    "keyword": lambda r: collation_key(r.keyword),
    "totalUrls": lambda r: r.total_urls,
    "exposureStatus": lambda r: STATUS_SORT_RANK[r.exposure_status],
}


@dataclass(frozen=True)
class ListViewResult:
    page_items: Tuple[KeywordRecord, ...]
    total_matching: int
    page_count: int
    page: int
    page_size: int

    def to_dict(self) -> Dict[str, Any]:
        items = []
        for record in self.page_items:
            item = record.to_dict()
            item["statusTone"] = STATUS_TONES[record.exposure_status]
            items.append(item)
        return {
            "pageItems": items,
            "totalMatching": self.total_matching,
            "pageCount": self.page_count,
            "page": self.page,
            "pageSize": self.page_size,
        }


def filter_records(records: Sequence[KeywordRecord], filter_text: str) -> List[KeywordRecord]:
    query = (filter_text or "").lower()
    if not query:
        return list(records)
    return [r for r in records if query in _text(r.keyword).lower()]


def sort_records(records: Sequence[KeywordRecord], sort_by: str, sort_direction: str) -> List[KeywordRecord]:
    # sorted() is stable in both directions, so ties keep their filtered order.
    key = SORT_KEY_FUNCS[sort_by]
    return sorted(records, key=key, reverse=(sort_direction == "desc"))


def paginate(records: Sequence[KeywordRecord], page: int, page_size: int) -> Tuple[List[KeywordRecord], int]:
    page_count = math.ceil(len(records) / page_size)
    start = (page - 1) * page_size
    return list(records[start:start + page_size]), page_count


def view(
    records: Sequence[KeywordRecord],
    filter_text: str = "",
    sort_by: str = "keyword",
    sort_direction: str = "asc",
    page: int = 1,
    page_size: int = 10,
) -> ListViewResult:
    matching = sort_records(filter_records(records, filter_text), sort_by, sort_direction)
    page_items, page_count = paginate(matching, page, page_size)
    return ListViewResult(
        page_items=tuple(page_items),
        total_matching=len(matching),
        page_count=page_count,
        page=page,
        page_size=page_size,
    )


def view_with_params(records: Sequence[KeywordRecord], params: ListViewParams) -> ListViewResult:
    return view(
        records,
        filter_text=params.filter_text,
        sort_by=params.sort_by,
        sort_direction=params.sort_direction,
        page=params.page,
        page_size=params.page_size,
    )
