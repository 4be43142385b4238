"""Snapshot sources: where each category's raw JSON document comes from.

Every source makes exactly one attempt per category and reports failure as a
``SnapshotOutcome`` with ``error=True`` instead of raising, so a single bad
category never blocks the rest of a load cycle.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import httpx

from core.config import CategoryConfig, ConfigError, DashboardConfig
from core.models import SnapshotOutcome

logger = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    async def fetch(self, category: CategoryConfig) -> SnapshotOutcome:
        ...


def _outcome_from_payload(category: CategoryConfig, payload: Any) -> SnapshotOutcome:
    if not isinstance(payload, dict):
        logger.error("Snapshot for %s is not a JSON object", category.name)
        return SnapshotOutcome.failure(category.id)
    return SnapshotOutcome.from_document(category.id, payload)


class HttpSnapshotSource:
    """Fetch snapshots over HTTP, resolving each data file against ``base_url``."""

    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._client = client

    def url_for(self, category: CategoryConfig) -> str:
        if category.data_file.startswith(("http://", "https://")):
            return category.data_file
        return f"{self.base_url}/{category.data_file.lstrip('/')}"

    async def _get(self, client: httpx.AsyncClient, category: CategoryConfig) -> SnapshotOutcome:
        response = await client.get(self.url_for(category))
        if not response.is_success:
            logger.warning("Could not load data for category %s: HTTP %s", category.name, response.status_code)
            return SnapshotOutcome.failure(category.id)
        return _outcome_from_payload(category, response.json())

    async def fetch(self, category: CategoryConfig) -> SnapshotOutcome:
        try:
            if self._client is not None:
                return await self._get(self._client, category)
            async with httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0)) as client:
                return await self._get(client, category)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error loading data for %s: %s", category.name, exc)
            return SnapshotOutcome.failure(category.id)


class FileSnapshotSource:
    """Read snapshots from disk; data file locators are resolved under ``data_dir``."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, category: CategoryConfig) -> Path:
        return self.data_dir / category.data_file.lstrip("/")

    async def fetch(self, category: CategoryConfig) -> SnapshotOutcome:
        path = self.path_for(category)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
            payload = json.loads(text)
        except (OSError, ValueError) as exc:
            logger.error("Error loading data for %s from %s: %s", category.name, path, exc)
            return SnapshotOutcome.failure(category.id)
        return _outcome_from_payload(category, payload)


def source_from_config(config: DashboardConfig) -> SnapshotSource:
    if config.base_url:
        return HttpSnapshotSource(config.base_url)
    if config.data_dir is not None:
        return FileSnapshotSource(config.data_dir)
    raise ConfigError("Neither a data base URL nor a data directory is configured")


async def fetch_all(source: SnapshotSource, config: DashboardConfig) -> Dict[str, SnapshotOutcome]:
    """Fetch every category concurrently and wait for all of them to settle."""
    tasks = [source.fetch(cat) for cat in config.categories]
    settled: List[Any] = await asyncio.gather(*tasks, return_exceptions=True)

    outcomes: Dict[str, SnapshotOutcome] = {}
    for cat, result in zip(config.categories, settled):
        if isinstance(result, BaseException):
            if isinstance(result, asyncio.CancelledError):
                raise result
            logger.error("Unexpected error fetching %s: %s", cat.name, result)
            result = SnapshotOutcome.failure(cat.id)
        outcomes[cat.id] = result
    return outcomes
