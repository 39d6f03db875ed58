"""TableState: reactive state for the paginated artwork table."""

from __future__ import annotations

import logging

import param
import pandas as pd

from ..core.pagination import Pagination
from ..core.selection_state import SelectionState
from ..core.tracker import SelectionTracker
from ..core.validation import InvalidBulkCount
from ..service.artworks import ARTWORK_FIELDS, ArtworkService, FetchError

logger = logging.getLogger(__name__)

ROWS_PER_PAGE = 12
MAX_CUSTOM_SELECT = 200_000


class TableState(param.Parameterized):
    """Centralized reactive state for the artwork table.

    Holds exactly one page of records at a time. Selection lives in a
    SelectionTracker keyed by record ID; the table's checked rows are
    re-derived from it every time a page arrives or the selection changes.
    """

    # --- Navigation ---
    current_page = param.Integer(default=1, bounds=(1, None))
    rows_per_page = param.Integer(default=ROWS_PER_PAGE, bounds=(1, None), constant=True)

    # --- Page data (replaced on every fetch, never cached) ---
    records = param.DataFrame(default=None, allow_None=True)
    pagination = param.ClassSelector(class_=Pagination, default=None, allow_None=True)
    loading = param.Boolean(default=False)
    error = param.String(default=None, allow_None=True)

    # --- Selection (derived from the tracker) ---
    selected_indices = param.List(default=[])
    selected_count = param.Integer(default=0)

    # --- Status text ---
    status_text = param.String(default="")

    def __init__(self, service: ArtworkService | None = None, **params):
        super().__init__(**params)
        self.service = service or ArtworkService(limit=self.rows_per_page)
        self.tracker = SelectionTracker(self.rows_per_page)
        self.tracker.on_change(self._on_selection_changed)
        self._record_ids: list = []
        self._loaded_page: int | None = None
        self._request_seq = 0
        self._syncing = False  # Guard flag: suppresses table->state callbacks

    @property
    def record_ids(self) -> list:
        """IDs of the page currently displayed, in display order."""
        return list(self._record_ids)

    @property
    def loaded_page(self) -> int | None:
        return self._loaded_page

    @property
    def selection(self) -> SelectionState:
        return self.tracker.state

    @property
    def total_records(self) -> int:
        return self.pagination.total if self.pagination is not None else 0

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages if self.pagination is not None else 0

    # ------------------------------------------------------------------
    # Page loading
    # ------------------------------------------------------------------

    async def load_page(self, page: int) -> None:
        """Fetch ``page`` and make it the displayed page.

        Only the most recently issued request is applied; a response that
        arrives after a newer request was made is discarded.
        """
        self._request_seq += 1
        request = self._request_seq
        self.current_page = page
        self.loading = True
        self.error = None

        try:
            result = await self.service.fetch_page(page)
        except FetchError as e:
            if request != self._request_seq:
                logger.debug("Discarding stale error for page %d", page)
                return
            self._record_ids = []
            self._loaded_page = None
            self.records = pd.DataFrame(columns=list(ARTWORK_FIELDS))
            self.selected_indices = []
            self.error = e.message
            self.loading = False
            return

        if request != self._request_seq:
            logger.debug("Discarding stale response for page %d", page)
            return

        if result.pagination.limit != self.rows_per_page:
            logger.warning(
                "Server page size %d differs from table page size %d",
                result.pagination.limit, self.rows_per_page,
            )

        self._record_ids = result.record_ids
        self._loaded_page = page
        self._syncing = True
        try:
            self.param.update(
                pagination=result.pagination,
                records=result.to_frame(),
                selected_indices=self._projected_indices(),
            )
        finally:
            self._syncing = False
        self.loading = False

    async def next_page(self) -> None:
        if self.current_page < self.total_pages:
            await self.load_page(self.current_page + 1)

    async def previous_page(self) -> None:
        if self.current_page > 1:
            await self.load_page(self.current_page - 1)

    async def first_page(self) -> None:
        await self.load_page(1)

    async def last_page(self) -> None:
        if self.total_pages:
            await self.load_page(self.total_pages)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def on_table_selection(self, indices: list[int]) -> None:
        """Merge the table's checked row indices for the displayed page."""
        if self._syncing or self.loading or self._loaded_page is None:
            return
        checked = [self._record_ids[i] for i in indices]
        self.tracker.apply_page_edit(self._loaded_page, self._record_ids, checked)

    def custom_select(self, count: int | None) -> str | None:
        """Select the first ``count`` records.

        Returns a message for the user when the request was rejected or
        clamped to the available total, else None.
        """
        if count is None:
            return self._report("Please enter a valid positive number")
        total = self.total_records
        try:
            self.tracker.declare_bulk_selection(count, total_records=total)
        except InvalidBulkCount:
            return self._report("Please enter a valid positive number")
        if count > total:
            return self._report(
                f"Only {total} rows available. Selecting all {total} rows."
            )
        return self._report(None)

    def clear_selection(self) -> None:
        self.tracker.clear()
        self.status_text = ""

    def _report(self, message: str | None) -> str | None:
        self.status_text = message or ""
        return message

    def _on_selection_changed(self, state: SelectionState) -> None:
        self.selected_count = state.total_selected
        self._project()

    def _projected_indices(self) -> list[int]:
        if self._loaded_page is None:
            return []
        return self.tracker.selected_indices(self._record_ids, self._loaded_page)

    def _project(self) -> None:
        """Push the tracker's view of the displayed page to ``selected_indices``."""
        self._syncing = True
        try:
            self.selected_indices = self._projected_indices()
        finally:
            self._syncing = False
