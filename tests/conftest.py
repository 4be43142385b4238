"""Shared fixtures: a synthetic two-category configuration and in-memory sources."""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

import pytest

from core.config import CategoryConfig, DashboardConfig
from core.models import SnapshotOutcome


CANCER_DOC = {
    "timestamp": "2025-03-01 09:00:00",
    "results": [
        {"keyword": "lung cancer", "urls": [{"url": "https://a.example/1", "is_exposed": True}]},
        {"keyword": "cancer diet", "urls": [{"url": "https://a.example/2", "is_exposed": False}]},
        {"keyword": "cancer clinic", "urls": []},
    ],
}

DIABETES_DOC = {
    "timestamp": "2025-03-01 10:00:00",
    "results": [
        {
            "keyword": "insulin",
            "urls": [
                {"url": "https://b.example/1", "is_exposed": False},
                {"url": "https://b.example/2", "is_exposed": True},
            ],
        },
        {"keyword": "blood sugar"},
    ],
}


@pytest.fixture
def config() -> DashboardConfig:
    return DashboardConfig(
        categories=(
            CategoryConfig(id="cancer", name="Cancer", data_file="/data/cancer.json"),
            CategoryConfig(id="diabetes", name="Diabetes", data_file="/data/diabetes.json"),
        ),
        data_dir=None,
        base_url="http://snapshots.test",
    )


@pytest.fixture
def outcomes() -> Dict[str, SnapshotOutcome]:
    return {
        "cancer": SnapshotOutcome.from_document("cancer", CANCER_DOC),
        "diabetes": SnapshotOutcome.from_document("diabetes", DIABETES_DOC),
    }


class StaticSource:
    """In-memory source; a category mapped to None reports a failure."""

    def __init__(self, documents: Dict[str, Optional[dict]], gate: Optional[asyncio.Event] = None):
        self.documents = documents
        self.gate = gate
        self.calls = []

    async def fetch(self, category):
        self.calls.append(category.id)
        if self.gate is not None:
            await self.gate.wait()
        doc = self.documents.get(category.id)
        if doc is None:
            return SnapshotOutcome.failure(category.id)
        return SnapshotOutcome.from_document(category.id, doc)
