import asyncio

import pytest

from core.loader import DashboardLoader

from tests.conftest import CANCER_DOC, DIABETES_DOC, StaticSource


@pytest.mark.asyncio
async def test_load_applies_dataset(config):
    loader = DashboardLoader(config, StaticSource({"cancer": CANCER_DOC, "diabetes": DIABETES_DOC}))

    dataset = await loader.load()

    assert dataset is not None
    assert loader.dataset is dataset
    assert loader.loading is False
    assert loader.error is None
    assert loader.generation == 1
    assert dataset.all_summary.total_keywords == 5


@pytest.mark.asyncio
async def test_partial_failure_is_flagged_not_raised(config):
    loader = DashboardLoader(config, StaticSource({"cancer": None, "diabetes": DIABETES_DOC}))

    dataset = await loader.load()

    assert loader.error is None
    assert loader.failed_categories == ["cancer"]
    assert dataset.category_data["cancer"].keywords_data == ()
    assert dataset.timestamps["cancer"] is None
    assert dataset.all_summary.total_keywords == 2


@pytest.mark.asyncio
async def test_stale_cycle_is_discarded(config):
    gate = asyncio.Event()
    slow = StaticSource({"cancer": CANCER_DOC, "diabetes": DIABETES_DOC}, gate=gate)
    loader = DashboardLoader(config, slow)

    first = asyncio.create_task(loader.load())
    await asyncio.sleep(0)

    # Second cycle starts before the first resolves and uses different data.
    loader.source = StaticSource({"cancer": None, "diabetes": DIABETES_DOC})
    second = await loader.load()

    gate.set()
    stale = await first

    assert stale is None
    assert loader.generation == 2
    assert loader.dataset is second
    assert loader.failed_categories == ["cancer"]
    assert loader.loading is False


@pytest.mark.asyncio
async def test_unexpected_merge_failure_sets_single_error(config, monkeypatch):
    from core import loader as loader_module

    def explode(outcomes, cfg):
        raise ValueError("corrupt state")

    monkeypatch.setattr(loader_module, "merge", explode)
    loader = DashboardLoader(config, StaticSource({"cancer": CANCER_DOC, "diabetes": DIABETES_DOC}))

    assert await loader.load() is None
    assert loader.dataset is None
    assert loader.error == "Failed to load data: corrupt state"
    assert loader.loading is False


@pytest.mark.asyncio
async def test_reload_replaces_dataset_wholesale(config):
    loader = DashboardLoader(config, StaticSource({"cancer": CANCER_DOC, "diabetes": DIABETES_DOC}))
    first = await loader.load()
    loader.source = StaticSource({"cancer": CANCER_DOC, "diabetes": None})
    second = await loader.load()

    assert second is not first
    assert loader.dataset is second
    assert first.all_summary.total_keywords == 5
    assert second.all_summary.total_keywords == 3


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_cycle(config):
    gate = asyncio.Event()
    source = StaticSource({"cancer": CANCER_DOC, "diabetes": DIABETES_DOC}, gate=gate)
    loader = DashboardLoader(config, source)

    waiters = asyncio.gather(loader.current_dataset(), loader.current_dataset())
    await asyncio.sleep(0)
    gate.set()
    first, second = await waiters

    assert first is second is loader.dataset
    assert loader.generation == 1
    assert sorted(source.calls) == ["cancer", "diabetes"]


@pytest.mark.asyncio
async def test_waiter_follows_newer_cycle_when_its_own_goes_stale(config):
    gate = asyncio.Event()
    loader = DashboardLoader(config, StaticSource({"cancer": CANCER_DOC, "diabetes": DIABETES_DOC}, gate=gate))

    waiter = asyncio.create_task(loader.current_dataset())
    for _ in range(3):
        await asyncio.sleep(0)

    loader.source = StaticSource({"cancer": None, "diabetes": DIABETES_DOC})
    newer = await loader.reload()
    gate.set()

    assert await waiter is newer
    assert loader.generation == 2
    assert loader.failed_categories == ["cancer"]


@pytest.mark.asyncio
async def test_current_dataset_returns_none_after_total_failure(config, monkeypatch):
    from core import loader as loader_module

    def explode(outcomes, cfg):
        raise ValueError("corrupt state")

    monkeypatch.setattr(loader_module, "merge", explode)
    loader = DashboardLoader(config, StaticSource({"cancer": CANCER_DOC, "diabetes": DIABETES_DOC}))

    assert await loader.current_dataset() is None
    assert loader.error == "Failed to load data: corrupt state"
