from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class ListViewParamsModel(BaseModel):
    category: str = "all"
    filter_text: str = ""
    sort_by: Literal["keyword", "totalUrls", "exposureStatus"] = "keyword"
    sort_direction: Literal["asc", "desc"] = "asc"
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)


class CategoryModel(BaseModel):
    id: str
    name: str


class MetaCategoriesResponse(BaseModel):
    categories: List[CategoryModel]
