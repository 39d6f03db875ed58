"""Tests for TableState: page loading, stale responses and the selection flow."""

import anyio
import pytest
from anyio import wait_all_tasks_blocked

from pageselect.core.selection_state import SelectionMode
from pageselect.dashboard.state import TableState
from pageselect.service.artworks import FetchError, parse_page

from fake_api import PAGE_SIZE, make_payload, page_ids


class GatedService:
    """Fake service whose responses are released by the test, per page."""

    def __init__(self):
        self.gates: dict[int, anyio.Event] = {}
        self.failures: dict[int, str] = {}

    def gate(self, page: int) -> anyio.Event:
        return self.gates.setdefault(page, anyio.Event())

    async def fetch_page(self, page: int):
        await self.gate(page).wait()
        if page in self.failures:
            raise FetchError(self.failures[page], page=page)
        return parse_page(make_payload(page))


class FailingService:
    async def fetch_page(self, page: int):
        raise FetchError("HTTP error! status: 500", page=page, status_code=500)


@pytest.fixture
def state(artwork_service):
    return TableState(service=artwork_service)


@pytest.mark.anyio
class TestPageLoading:
    async def test_load_first_page(self, state):
        await state.load_page(1)
        assert state.loaded_page == 1
        assert state.record_ids == page_ids(1)
        assert len(state.records) == PAGE_SIZE
        assert state.pagination.total == 120
        assert state.loading is False
        assert state.error is None

    async def test_page_replaced_not_cached(self, state, api_requests):
        await state.load_page(1)
        await state.load_page(2)
        await state.load_page(1)
        assert state.record_ids == page_ids(1)
        assert len(api_requests) == 3

    async def test_navigation(self, state):
        await state.first_page()
        await state.next_page()
        assert state.current_page == 2
        await state.last_page()
        assert state.current_page == 10
        await state.next_page()
        assert state.current_page == 10
        await state.previous_page()
        assert state.current_page == 9
        assert state.record_ids == page_ids(9)

    async def test_previous_on_first_page_stays(self, state):
        await state.load_page(1)
        await state.previous_page()
        assert state.current_page == 1

    async def test_fetch_error_sets_message(self):
        state = TableState(service=FailingService())
        await state.load_page(3)
        assert state.error == "HTTP error! status: 500"
        assert state.loading is False
        assert state.record_ids == []
        assert state.loaded_page is None
        assert state.records.empty

    async def test_error_cleared_on_next_load(self, artwork_service):
        state = TableState(service=FailingService())
        await state.load_page(1)
        state.service = artwork_service
        await state.load_page(1)
        assert state.error is None
        assert state.record_ids == page_ids(1)

    async def test_stale_response_discarded(self):
        service = GatedService()
        state = TableState(service=service)
        async with anyio.create_task_group() as tg:
            tg.start_soon(state.load_page, 2)
            await wait_all_tasks_blocked()
            tg.start_soon(state.load_page, 3)
            await wait_all_tasks_blocked()
            assert state.loading is True
            service.gate(3).set()
            await wait_all_tasks_blocked()
            service.gate(2).set()
        assert state.current_page == 3
        assert state.loaded_page == 3
        assert state.record_ids == page_ids(3)
        assert state.loading is False

    async def test_stale_error_discarded(self):
        service = GatedService()
        service.failures[2] = "HTTP error! status: 502"
        state = TableState(service=service)
        async with anyio.create_task_group() as tg:
            tg.start_soon(state.load_page, 2)
            await wait_all_tasks_blocked()
            tg.start_soon(state.load_page, 3)
            await wait_all_tasks_blocked()
            service.gate(3).set()
            await wait_all_tasks_blocked()
            service.gate(2).set()
        assert state.error is None
        assert state.record_ids == page_ids(3)

    async def test_edits_ignored_while_loading(self):
        service = GatedService()
        state = TableState(service=service)
        service.gate(1).set()
        await state.load_page(1)
        async with anyio.create_task_group() as tg:
            tg.start_soon(state.load_page, 2)
            await wait_all_tasks_blocked()
            state.on_table_selection([0, 1])
            assert state.selected_count == 0
            service.gate(2).set()
        assert state.selected_count == 0


@pytest.mark.anyio
class TestSelectionFlow:
    async def test_direct_selection_across_pages(self, state):
        await state.load_page(1)
        state.on_table_selection([0, 2])
        assert state.selected_count == 2
        assert state.selected_indices == [0, 2]

        await state.load_page(2)
        assert state.selected_indices == []
        state.on_table_selection([5])
        assert state.selected_count == 3

        await state.load_page(1)
        assert state.selected_indices == [0, 2]
        state.on_table_selection([2])
        assert state.selected_count == 2

    async def test_bulk_selection_scenarios(self, state):
        await state.load_page(1)
        assert state.custom_select(100) is None
        assert state.selection.mode is SelectionMode.BULK
        assert state.selected_count == 100
        assert state.selected_indices == list(range(PAGE_SIZE))

        state.on_table_selection(list(range(1, PAGE_SIZE)))
        assert state.selected_count == 99
        assert state.selected_indices == list(range(1, PAGE_SIZE))

        state.on_table_selection(list(range(PAGE_SIZE)))
        assert state.selected_count == 100

        await state.load_page(9)
        assert state.selected_indices == [0, 1, 2, 3]
        state.on_table_selection([0, 1, 2, 3, 7])
        assert state.selected_count == 101
        assert state.selection.included == frozenset([page_ids(9)[7]])

    async def test_custom_select_clamps_to_total(self, state):
        await state.load_page(1)
        message = state.custom_select(500)
        assert message == "Only 120 rows available. Selecting all 120 rows."
        assert state.status_text == message
        assert state.selected_count == 120

        await state.load_page(10)
        assert state.selected_indices == list(range(PAGE_SIZE))

    @pytest.mark.parametrize("count", [None, 0, -3])
    async def test_custom_select_rejects_invalid(self, state, count):
        await state.load_page(1)
        state.on_table_selection([4])
        message = state.custom_select(count)
        assert message == "Please enter a valid positive number"
        assert state.selected_count == 1
        assert state.selection.mode is SelectionMode.DIRECT

    async def test_custom_select_resets_earlier_picks(self, state):
        await state.load_page(2)
        state.on_table_selection([0, 1, 2])
        state.custom_select(5)
        assert state.selected_count == 5
        assert state.selected_indices == []

    async def test_clear_selection(self, state):
        await state.load_page(1)
        state.custom_select(500)
        state.clear_selection()
        assert state.selected_count == 0
        assert state.selected_indices == []
        assert state.status_text == ""
        assert state.selection.mode is SelectionMode.DIRECT

    async def test_projection_does_not_echo_back(self, state):
        await state.load_page(1)
        state.custom_select(100)
        # Re-reporting the projected indices is a no-op
        state.on_table_selection(state.selected_indices)
        assert state.selection.excluded == frozenset()
        assert state.selected_count == 100


class TestBeforeFirstLoad:
    def test_selection_ignored_without_page(self, artwork_service):
        state = TableState(service=artwork_service)
        state.on_table_selection([0])
        assert state.selected_count == 0

    def test_custom_select_without_total(self, artwork_service):
        state = TableState(service=artwork_service)
        message = state.custom_select(10)
        assert message == "Only 0 rows available. Selecting all 0 rows."
        assert state.selected_count == 0

    def test_default_rows_per_page(self, artwork_service):
        state = TableState(service=artwork_service)
        assert state.rows_per_page == 12
        assert state.tracker.page_size == 12
