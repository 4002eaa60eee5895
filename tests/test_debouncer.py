import asyncio

from features.common.services.debouncer import Debouncer
from features.locations.services.location_store import POPULAR_LOCATIONS
from features.locations.services.search_controller import SearchController
from tests.conftest import VENICE_BEACH, VENICE_ITALY

DELAY = 0.02

async def settle():
    await asyncio.sleep(DELAY * 5)

async def test_only_latest_action_runs():
    debouncer = Debouncer(DELAY)
    calls = []

    for value in ["v", "ve", "ven"]:
        async def action(value=value):
            calls.append(value)
        debouncer.debounce(action)

    assert debouncer.pending is True
    await settle()

    assert calls == ["ven"]
    assert debouncer.pending is False

async def test_cancel_drops_pending_action():
    debouncer = Debouncer(DELAY)
    calls = []

    async def action():
        calls.append("run")

    debouncer.debounce(action)
    debouncer.cancel()
    await settle()

    assert calls == []
    assert debouncer.pending is False

async def test_action_errors_are_logged(caplog):
    debouncer = Debouncer(DELAY)

    async def action():
        raise RuntimeError("geocoder exploded")

    debouncer.debounce(action)
    await settle()

    assert "geocoder exploded" in caplog.text

async def test_fired_action_is_not_cancelled_by_new_request():
    debouncer = Debouncer(DELAY)
    started = asyncio.Event()
    release = asyncio.Event()
    finished = []

    async def slow():
        started.set()
        await release.wait()
        finished.append("slow")

    async def fast():
        finished.append("fast")

    debouncer.debounce(slow)
    await started.wait()
    debouncer.debounce(fast)
    release.set()
    await settle()

    assert sorted(finished) == ["fast", "slow"]

async def test_shutdown_cancels_running_actions():
    debouncer = Debouncer(DELAY)
    started = asyncio.Event()

    async def forever():
        started.set()
        await asyncio.Event().wait()

    debouncer.debounce(forever)
    await started.wait()
    assert debouncer.in_flight == 1

    await debouncer.shutdown()

    assert debouncer.in_flight == 0

async def test_search_controller_debounces_typing(store, geocoder):
    controller = SearchController(store, Debouncer(DELAY))

    controller.update_query("ven")
    controller.update_query("venice")
    assert store.search_results == POPULAR_LOCATIONS
    await settle()

    assert geocoder.forward_calls == ["venice"]
    assert store.search_results == [VENICE_ITALY, VENICE_BEACH]

async def test_search_controller_empty_text_resets_immediately(store, geocoder):
    controller = SearchController(store, Debouncer(DELAY))
    await controller.submit_query("venice")

    controller.update_query("venice beach")
    controller.update_query("")
    await settle()

    assert store.search_results == POPULAR_LOCATIONS
    assert geocoder.forward_calls == ["venice"]

async def test_search_controller_submit_runs_now(store, geocoder):
    controller = SearchController(store, Debouncer(DELAY))

    controller.update_query("venice")
    results = await controller.submit_query()
    await settle()

    assert results == [VENICE_ITALY, VENICE_BEACH]
    assert geocoder.forward_calls == ["venice"]

async def test_search_controller_clear(store, geocoder):
    controller = SearchController(store, Debouncer(DELAY))

    controller.update_query("venice")
    controller.clear()
    await settle()

    assert controller.query == ""
    assert store.search_results == []
    assert geocoder.forward_calls == []
