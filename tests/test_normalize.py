from core.models import ExposureStatus
from core.normalize import classify_exposure, normalize


def test_exposed_keyword_scenario():
    records = normalize("c1", [{"keyword": "a", "urls": [{"url": "u1", "is_exposed": True}]}])

    assert len(records) == 1
    rec = records[0]
    assert rec.keyword == "a"
    assert rec.category == "c1"
    assert rec.total_urls == 1
    assert rec.has_exposed_url is True
    assert rec.exposure_status == ExposureStatus.EXPOSED
    assert rec.urls[0].url == "u1"
    assert rec.urls[0].is_exposed is True


def test_empty_urls_is_no_urls():
    rec = normalize("c1", [{"keyword": "b", "urls": []}])[0]
    assert rec.exposure_status == ExposureStatus.NO_URLS
    assert rec.total_urls == 0
    assert rec.has_exposed_url is False


def test_missing_urls_defaults_to_empty():
    rec = normalize("c1", [{"keyword": "b"}])[0]
    assert rec.urls == ()
    assert rec.exposure_status == ExposureStatus.NO_URLS


def test_urls_without_exposure_are_not_exposed():
    rec = normalize(
        "c1",
        [{"keyword": "k", "urls": [{"url": "u1", "is_exposed": False}, {"url": "u2", "is_exposed": False}]}],
    )[0]
    assert rec.exposure_status == ExposureStatus.NOT_EXPOSED
    assert rec.total_urls == 2


def test_exposure_detected_regardless_of_position():
    first = normalize("c", [{"keyword": "k", "urls": [{"url": "x", "is_exposed": True}, {"url": "y", "is_exposed": False}]}])[0]
    last = normalize("c", [{"keyword": "k", "urls": [{"url": "y", "is_exposed": False}, {"url": "x", "is_exposed": True}]}])[0]
    assert first.exposure_status == last.exposure_status == ExposureStatus.EXPOSED


def test_keyword_kept_verbatim_and_url_order_preserved():
    rec = normalize(
        "c",
        [{"keyword": "  Mixed Case  ", "urls": [{"url": "u2", "is_exposed": False}, {"url": "u1", "is_exposed": False}]}],
    )[0]
    assert rec.keyword == "  Mixed Case  "
    assert [u.url for u in rec.urls] == ["u2", "u1"]


def test_missing_keyword_passes_through():
    records = normalize("c", [{"urls": []}, {"keyword": "", "urls": []}])
    assert [r.keyword for r in records] == [None, ""]


def test_invariants_hold_for_mixed_input():
    raw = [
        {"keyword": "a", "urls": [{"url": "1", "is_exposed": True}]},
        {"keyword": "b", "urls": [{"url": "1", "is_exposed": False}]},
        {"keyword": "c", "urls": []},
        {"keyword": "d", "urls": None},
        {"keyword": "e", "urls": [{"url": "1"}, {"url": "2", "is_exposed": True}]},
    ]
    for rec in normalize("c", raw):
        assert rec.total_urls == len(rec.urls)
        assert (rec.exposure_status == ExposureStatus.EXPOSED) == rec.has_exposed_url
        assert (rec.exposure_status == ExposureStatus.NO_URLS) == (rec.total_urls == 0)


def test_normalize_handles_absent_results():
    assert normalize("c", None) == []
    assert normalize("c", []) == []


def test_classify_exposure_rules():
    assert classify_exposure(True, 3) == ExposureStatus.EXPOSED
    assert classify_exposure(False, 0) == ExposureStatus.NO_URLS
    assert classify_exposure(False, 2) == ExposureStatus.NOT_EXPOSED
