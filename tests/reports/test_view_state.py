from src.hrms_client.hrms_client.core.enums import ViewState
from src.hrms_client.hrms_client.reports.view_state import ReportView, ReportViewCache


def test_load_cycle_moves_between_loading_and_loaded():
    view = ReportView()
    assert view.state == ViewState.LOADING

    ticket = view.begin_load()
    assert view.complete(ticket, {"n": 1}) is True

    assert view.state == ViewState.LOADED
    assert view.data == {"n": 1}
    assert view.seq == ticket


def test_older_result_arriving_late_is_discarded():
    view = ReportView()
    first = view.begin_load()
    second = view.begin_load()

    assert view.complete(second, "new") is True
    assert view.complete(first, "old") is False

    assert view.data == "new"
    assert view.state == ViewState.LOADED


def test_stays_loading_while_newer_fetch_is_outstanding():
    view = ReportView()
    first = view.begin_load()
    view.begin_load()

    view.complete(first, "first")

    assert view.data == "first"
    assert view.state == ViewState.LOADING


def test_failure_keeps_last_good_data_and_leaves_notice():
    view = ReportView()
    ok = view.begin_load()
    view.complete(ok, [1, 2])

    bad = view.begin_load()
    view.fail(bad, "Network down")

    assert view.state == ViewState.LOADED
    assert view.data == [1, 2]
    assert view.pop_notice() == "Network down"
    assert view.pop_notice() is None


def test_stale_failure_is_ignored():
    view = ReportView()
    old = view.begin_load()
    new = view.begin_load()
    view.complete(new, "fresh")

    assert view.fail(old, "late error") is False
    assert view.notice is None


def test_cache_returns_same_view_per_key_and_evicts_oldest():
    cache = ReportViewCache(maxsize=2)
    a = cache.get(("tok", "EMP001"))
    cache.get(("tok", "EMP002"))

    assert cache.get(("tok", "EMP001")) is a
    cache.get(("tok", "EMP003"))

    assert len(cache) == 2
    assert cache.get(("tok", "EMP001")) is a
    assert cache.get(("tok", "EMP002")).data is None


def test_cache_discards_one_session():
    cache = ReportViewCache()
    cache.get(("tok-a", "EMP001"))
    cache.get(("tok-a", "EMP002"))
    kept = cache.get(("tok-b", "EMP001"))

    cache.discard_if(lambda key: key[0] == "tok-a")

    assert len(cache) == 1
    assert cache.get(("tok-b", "EMP001")) is kept
