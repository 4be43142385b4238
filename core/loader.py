from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from core.config import DashboardConfig
from core.merge import merge
from core.models import AggregatedDataset
from core.sources import SnapshotSource, fetch_all

logger = logging.getLogger(__name__)


class DashboardLoader:
    """Owns the current dataset and runs load cycles.

    Each call to ``load`` takes a new generation number. When a cycle finishes
    it is applied only if no newer cycle started in the meantime; older results
    are dropped on arrival.

    ``reload`` runs a cycle as a task so concurrent callers of
    ``current_dataset`` can join it instead of starting their own.
    """

    def __init__(self, config: DashboardConfig, source: SnapshotSource):
        self.config = config
        self.source = source
        self.dataset: Optional[AggregatedDataset] = None
        self.loading = False
        self.error: Optional[str] = None
        self.generation = 0
        self._inflight: Optional[asyncio.Task] = None

    @property
    def failed_categories(self) -> List[str]:
        if self.dataset is None:
            return []
        return self.dataset.failed_categories

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def reload(self) -> asyncio.Task:
        self._inflight = asyncio.ensure_future(self.load())
        return self._inflight

    async def current_dataset(self) -> Optional[AggregatedDataset]:
        """Return the applied dataset, waiting for the newest cycle if none is applied yet.

        Returns ``None`` only when the newest cycle ended in a total failure.
        """
        while self.dataset is None and self.error is None:
            task = self._inflight
            if task is None or task.done():
                task = self.reload()
            await asyncio.shield(task)
        return self.dataset

    async def load(self) -> Optional[AggregatedDataset]:
        self.generation += 1
        generation = self.generation
        self.loading = True

        try:
            outcomes = await fetch_all(self.source, self.config)
            dataset = merge(outcomes, self.config)
        except Exception as exc:
            if not self.is_current(generation):
                logger.debug("Discarding failed load cycle %d (current is %d)", generation, self.generation)
                return None
            logger.exception("Data load failed")
            self.dataset = None
            self.error = f"Failed to load data: {exc}"
            self.loading = False
            return None

        if not self.is_current(generation):
            logger.debug("Discarding stale load cycle %d (current is %d)", generation, self.generation)
            return None

        self.dataset = dataset
        self.error = None
        self.loading = False
        logger.info("Load cycle %d applied", generation)
        return dataset
