import pytest

from core.merge import merge
from core.selection import select


def test_select_all(config, outcomes):
    dataset = merge(outcomes, config)
    sel = select(dataset, "all", config)

    assert sel.keywords_data is dataset.all_keywords_data
    assert sel.summary is dataset.all_summary
    assert sel.timestamps == dataset.timestamps
    assert sel.categories == [{"id": "cancer", "name": "Cancer"}, {"id": "diabetes", "name": "Diabetes"}]

    payload = sel.to_dict()
    assert "timestamps" in payload and "timestamp" not in payload


def test_select_single_category(config, outcomes):
    dataset = merge(outcomes, config)
    sel = select(dataset, "diabetes", config)

    assert sel.keywords_data is dataset.category_data["diabetes"].keywords_data
    assert sel.summary is dataset.category_data["diabetes"].summary
    assert sel.timestamp == "2025-03-01 10:00:00"
    assert sel.to_dict()["timestamp"] == "2025-03-01 10:00:00"


def test_select_unknown_category_raises(config, outcomes):
    dataset = merge(outcomes, config)
    with pytest.raises(KeyError):
        select(dataset, "cosmetics", config)
