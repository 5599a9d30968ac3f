"""Paginated refresh controller: freshness, clamping and failure handling."""

import asyncio

import pytest

from lumina_console.errors import FetchError, TransportError
from lumina_console.models.fetch import FetchMode, FetchOutcome
from lumina_console.notifications import NotificationKind, NotificationScheduler
from lumina_console.refresh import PageState, RefreshController

from conftest import FakeFetcher, PageServer, make_page


class FakeSession:
    def __init__(self, authenticated: bool = True):
        self.is_authenticated = authenticated


def test_total_pages_rounds_up():
    assert PageState(page_size=10, total_records=25).total_pages == 3
    assert PageState(page_size=10, total_records=30).total_pages == 3
    assert PageState(page_size=10, total_records=0).total_pages == 0
    assert PageState(page_size=0, total_records=5).total_pages == 0


class TestFreshness:
    @pytest.mark.asyncio
    async def test_older_response_arriving_late_is_discarded(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)

        slow = asyncio.create_task(controller.fetch_page(1, 10, FetchMode.BACKGROUND))
        await asyncio.sleep(0)
        fast = asyncio.create_task(controller.fetch_page(2, 10, FetchMode.FOREGROUND))
        await asyncio.sleep(0)
        assert controller.state.generation == 2

        fetcher.resolve(1, make_page(2, 10, 25, tag="new-"))
        assert await fast == FetchOutcome.APPLIED
        fetcher.resolve(0, make_page(1, 10, 25, tag="old-"))
        assert await slow == FetchOutcome.DISCARDED

        assert controller.state.current_page == 2
        assert [r.id for r in controller.state.records][0] == "new-10"

    @pytest.mark.asyncio
    async def test_older_response_arriving_first_is_still_discarded(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)

        first = asyncio.create_task(controller.fetch_page(1, 10))
        await asyncio.sleep(0)
        second = asyncio.create_task(controller.fetch_page(3, 10))
        await asyncio.sleep(0)

        fetcher.resolve(0, make_page(1, 10, 25, tag="old-"))
        assert await first == FetchOutcome.DISCARDED
        assert controller.state.records == []

        fetcher.resolve(1, make_page(3, 10, 25, tag="new-"))
        assert await second == FetchOutcome.APPLIED
        assert controller.state.current_page == 3
        assert len(controller.state.records) == 5

    @pytest.mark.asyncio
    async def test_generation_counts_initiations_not_completions(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)
        tasks = [asyncio.create_task(controller.fetch_page(1, 10)) for _ in range(3)]
        await asyncio.sleep(0)
        assert controller.state.generation == 3
        for i in range(3):
            fetcher.resolve(i, make_page(1, 10, 5))
        assert await asyncio.gather(*tasks) == [FetchOutcome.DISCARDED, FetchOutcome.DISCARDED, FetchOutcome.APPLIED]
        assert controller.state.generation == 3


class TestPagination:
    @pytest.mark.asyncio
    async def test_change_page_out_of_range_is_noop(self):
        server = PageServer(total=25)
        controller = RefreshController(server)
        await controller.fetch_page(2, 10)
        before = controller.state.model_copy(deep=True)

        assert await controller.change_page(0) == FetchOutcome.SKIPPED
        assert await controller.change_page(controller.state.total_pages + 1) == FetchOutcome.SKIPPED

        assert controller.state == before
        assert server.calls == [(2, 10)]

    @pytest.mark.asyncio
    async def test_end_to_end_page_four_of_three(self):
        server = PageServer(total=25)
        controller = RefreshController(server, page_size=10)
        await controller.fetch_page(1, 10)
        assert controller.state.total_pages == 3

        assert await controller.change_page(3) == FetchOutcome.APPLIED
        assert await controller.change_page(4) == FetchOutcome.SKIPPED
        assert controller.state.current_page == 3
        assert server.calls == [(1, 10), (3, 10)]

    @pytest.mark.asyncio
    async def test_change_page_before_first_load_is_noop(self):
        server = PageServer(total=25)
        controller = RefreshController(server)
        assert await controller.change_page(1) == FetchOutcome.SKIPPED
        assert server.calls == []

    @pytest.mark.asyncio
    async def test_page_size_change_resets_to_first_page(self):
        server = PageServer(total=95)
        controller = RefreshController(server)
        await controller.fetch_page(4, 10)
        assert controller.state.current_page == 4

        assert await controller.change_page_size(50) == FetchOutcome.APPLIED
        assert controller.state.current_page == 1
        assert controller.state.page_size == 50
        assert controller.state.total_pages == 2
        assert server.calls[-1] == (1, 50)

    @pytest.mark.asyncio
    async def test_non_positive_page_size_is_ignored(self):
        server = PageServer(total=25)
        controller = RefreshController(server)
        assert await controller.change_page_size(0) == FetchOutcome.SKIPPED
        assert server.calls == []

    @pytest.mark.asyncio
    async def test_manual_refresh_reloads_current_page(self):
        server = PageServer(total=25)
        controller = RefreshController(server)
        await controller.fetch_page(2, 20)
        await controller.manual_refresh()
        assert server.calls == [(2, 20), (2, 20)]

    @pytest.mark.asyncio
    async def test_current_page_clamped_when_records_shrink(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)
        task = asyncio.create_task(controller.fetch_page(3, 10))
        await asyncio.sleep(0)
        # server still echoes page 3, but only one page of records remains
        fetcher.resolve(0, make_page(3, 10, 25).model_copy(update={"total": 8}))
        await task
        assert controller.state.current_page == 1

    @pytest.mark.asyncio
    async def test_fetch_page_ignores_invalid_page_or_size(self):
        server = PageServer(total=25)
        controller = RefreshController(server)

        assert await controller.fetch_page(0, 10) == FetchOutcome.SKIPPED
        assert await controller.fetch_page(1, 0) == FetchOutcome.SKIPPED
        assert await controller.fetch_page(1, -5) == FetchOutcome.SKIPPED

        assert server.calls == []
        assert controller.state.generation == 0

    @pytest.mark.asyncio
    async def test_zero_size_reply_falls_back_to_requested_size(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)
        task = asyncio.create_task(controller.fetch_page(1, 10))
        await asyncio.sleep(0)
        fetcher.resolve(0, make_page(1, 10, 5).model_copy(update={"size": 0}))

        assert await task == FetchOutcome.APPLIED
        assert controller.state.page_size == 10
        assert controller.state.total_pages == 1


class TestLoadingAndFailures:
    @pytest.mark.asyncio
    async def test_foreground_toggles_indicator_background_does_not(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)

        background = asyncio.create_task(controller.fetch_page(1, 10, FetchMode.BACKGROUND))
        await asyncio.sleep(0)
        assert not controller.loading

        foreground = asyncio.create_task(controller.fetch_page(1, 10, FetchMode.FOREGROUND))
        await asyncio.sleep(0)
        assert controller.loading

        fetcher.resolve(1, make_page(1, 10, 5))
        await foreground
        assert not controller.loading
        fetcher.resolve(0, make_page(1, 10, 5))
        await background

    @pytest.mark.asyncio
    async def test_indicator_stays_on_while_any_foreground_fetch_is_pending(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)
        a = asyncio.create_task(controller.fetch_page(1, 10))
        b = asyncio.create_task(controller.fetch_page(2, 10))
        await asyncio.sleep(0)

        fetcher.resolve(0, make_page(1, 10, 25))
        await a
        assert controller.loading
        fetcher.resolve(1, make_page(2, 10, 25))
        await b
        assert not controller.loading

    @pytest.mark.asyncio
    async def test_foreground_failure_keeps_data_and_notifies(self):
        fetcher = FakeFetcher()
        notifier = NotificationScheduler()
        controller = RefreshController(fetcher, notifier=notifier)

        task = asyncio.create_task(controller.fetch_page(1, 10))
        await asyncio.sleep(0)
        fetcher.resolve(0, make_page(1, 10, 25))
        await task
        good = controller.state.model_copy(deep=True)

        task = asyncio.create_task(controller.manual_refresh())
        await asyncio.sleep(0)
        assert controller.loading
        fetcher.fail(1, FetchError("Database unavailable"))
        assert await task == FetchOutcome.FAILED

        assert not controller.loading
        assert controller.state.records == good.records
        assert controller.state.total_records == good.total_records
        assert [(n.kind, n.text) for n in notifier.active] == [(NotificationKind.ERROR, "Database unavailable")]
        notifier.close()

    @pytest.mark.asyncio
    async def test_background_failure_is_silent(self):
        fetcher = FakeFetcher()
        notifier = NotificationScheduler()
        controller = RefreshController(fetcher, notifier=notifier)

        task = asyncio.create_task(controller.fetch_page(1, 10, FetchMode.BACKGROUND))
        await asyncio.sleep(0)
        fetcher.fail(0, TransportError("connection reset"))

        assert await task == FetchOutcome.FAILED
        assert notifier.active == []

    @pytest.mark.asyncio
    async def test_superseded_failure_is_discarded_without_notification(self):
        fetcher = FakeFetcher()
        notifier = NotificationScheduler()
        controller = RefreshController(fetcher, notifier=notifier)

        old = asyncio.create_task(controller.fetch_page(1, 10))
        await asyncio.sleep(0)
        new = asyncio.create_task(controller.fetch_page(1, 10))
        await asyncio.sleep(0)
        fetcher.resolve(1, make_page(1, 10, 5))
        await new
        fetcher.fail(0, FetchError("late failure"))

        assert await old == FetchOutcome.DISCARDED
        assert notifier.active == []


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_unauthenticated_session_gates_fetches(self):
        server = PageServer(total=25)
        controller = RefreshController(server, session=FakeSession(authenticated=False))
        assert await controller.fetch_page(1, 10) == FetchOutcome.SKIPPED
        assert server.calls == []
        assert controller.state.generation == 0

    @pytest.mark.asyncio
    async def test_close_makes_in_flight_completion_inert(self):
        fetcher = FakeFetcher()
        controller = RefreshController(fetcher)
        task = asyncio.create_task(controller.fetch_page(1, 10))
        await asyncio.sleep(0)

        controller.close()
        fetcher.resolve(0, make_page(1, 10, 25))

        assert await task == FetchOutcome.DISCARDED
        assert controller.state.records == []
        assert await controller.manual_refresh() == FetchOutcome.SKIPPED
