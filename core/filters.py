from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional


SORT_KEYS = ("keyword", "totalUrls", "exposureStatus")
SORT_DIRECTIONS = ("asc", "desc")

DEFAULT_SORT_BY = "keyword"
DEFAULT_SORT_DIRECTION = "asc"
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class ListViewParams:
    filter_text: str = ""
    sort_by: str = DEFAULT_SORT_BY
    sort_direction: str = DEFAULT_SORT_DIRECTION
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


def _as_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except Exception:
        return default


def normalize_view_params(raw: Optional[Mapping[str, Any]]) -> ListViewParams:
    raw = raw or {}

    filter_text = raw.get("filter_text", raw.get("q"))
    filter_text = "" if filter_text is None else str(filter_text)

    sort_by = raw.get("sort_by") or DEFAULT_SORT_BY
    if sort_by not in SORT_KEYS:
        sort_by = DEFAULT_SORT_BY

    sort_direction = str(raw.get("sort_direction") or DEFAULT_SORT_DIRECTION).lower()
    if sort_direction not in SORT_DIRECTIONS:
        sort_direction = DEFAULT_SORT_DIRECTION

    return ListViewParams(
        filter_text=filter_text,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page=_as_int(raw.get("page"), 1),
        page_size=_as_int(raw.get("page_size"), DEFAULT_PAGE_SIZE),
    )


def toggle_sort(params: ListViewParams, column: str) -> ListViewParams:
    """Column-header click: flip direction on the active column, else sort the new one ascending."""
    if column == params.sort_by:
        direction = "desc" if params.sort_direction == "asc" else "asc"
        return replace(params, sort_direction=direction)
    return replace(params, sort_by=column, sort_direction="asc", page=1)
