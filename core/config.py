from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


ALL_CATEGORIES = "all"

CATEGORIES_FILE_ENV = "EXPOSURE_CATEGORIES_FILE"
DATA_BASE_URL_ENV = "EXPOSURE_DATA_BASE_URL"
DATA_DIR_ENV = "EXPOSURE_DATA_DIR"


class ConfigError(Exception):
    """Raised when the category configuration is missing or unusable."""


@dataclass(frozen=True)
class CategoryConfig:
    id: str
    name: str
    data_file: str


@dataclass(frozen=True)
class DashboardConfig:
    categories: Tuple[CategoryConfig, ...] = field(default_factory=tuple)
    base_url: Optional[str] = None
    data_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.categories:
            raise ConfigError("No categories configured")
        seen = set()
        for cat in self.categories:
            if cat.id == ALL_CATEGORIES:
                raise ConfigError(f"Category id {ALL_CATEGORIES!r} is reserved")
            if cat.id in seen:
                raise ConfigError(f"Duplicate category id: {cat.id}")
            seen.add(cat.id)

    @property
    def category_ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self.categories)

    def get(self, category_id: str) -> CategoryConfig:
        for cat in self.categories:
            if cat.id == category_id:
                return cat
        raise KeyError(category_id)

    def category_list(self) -> list[Dict[str, str]]:
        return [{"id": c.id, "name": c.name} for c in self.categories]


DEFAULT_CATEGORIES: Tuple[CategoryConfig, ...] = (
    CategoryConfig(id="cancer", name="암", data_file="/data/latest_results_cancer.json"),
    CategoryConfig(id="diabetes", name="당뇨", data_file="/data/latest_results_diabetes.json"),
    CategoryConfig(id="cosmetics", name="갱년기", data_file="/data/latest_results_cream.json"),
)


def _category_from_entry(category_id: Any, entry: Mapping[str, Any]) -> CategoryConfig:
    if not isinstance(entry, Mapping):
        raise ConfigError(f"Category entry for {category_id!r} must be an object")
    cid = str(category_id or entry.get("id") or "").strip()
    name = entry.get("name")
    data_file = entry.get("dataFile", entry.get("data_file"))
    if not cid:
        raise ConfigError("Category entry is missing an id")
    if not name or not data_file:
        raise ConfigError(f"Category {cid!r} needs both 'name' and 'dataFile'")
    return CategoryConfig(id=cid, name=str(name), data_file=str(data_file))


def parse_categories(raw: Any) -> Tuple[CategoryConfig, ...]:
    """Build the ordered category tuple from a decoded JSON document.

    Accepts either a list of ``{id, name, dataFile}`` objects or a mapping of
    ``id -> {name, dataFile}``; mapping order is kept as category order.
    """
    entries: Iterable[CategoryConfig]
    if isinstance(raw, Mapping):
        entries = [_category_from_entry(cid, entry) for cid, entry in raw.items()]
    elif isinstance(raw, list):
        entries = [_category_from_entry(None, entry) for entry in raw]
    else:
        raise ConfigError("Categories document must be a list or an object")
    return tuple(entries)


def load_categories_file(path: Path) -> Tuple[CategoryConfig, ...]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Could not read categories file {path}: {exc}") from exc
    return parse_categories(raw)


def load_config(env: Optional[Mapping[str, str]] = None) -> DashboardConfig:
    env = os.environ if env is None else env

    categories_file = (env.get(CATEGORIES_FILE_ENV) or "").strip()
    categories = load_categories_file(Path(categories_file)) if categories_file else DEFAULT_CATEGORIES

    base_url = (env.get(DATA_BASE_URL_ENV) or "").strip() or None
    data_dir_raw = (env.get(DATA_DIR_ENV) or "").strip()
    data_dir = Path(data_dir_raw) if data_dir_raw else None

    return DashboardConfig(categories=categories, base_url=base_url, data_dir=data_dir)
