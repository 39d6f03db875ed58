"""SelectionTracker: owns the SelectionState and notifies registered callbacks."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Iterable, Sequence

from .selection_state import SelectionState
from .validation import clamp_bulk_count, validate_page

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[SelectionState], Any]


class SelectionTracker:
    """Holds the current selection for a paginated table.

    The tracker knows only record IDs and the page size; records and the
    remote total are supplied by the caller on each interaction. All
    operations are synchronous and run to completion.
    """

    def __init__(self, page_size: int) -> None:
        _, self._page_size = validate_page(1, page_size)
        self._state = SelectionState.empty()
        self._callbacks: list[SelectionCallback] = []

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def state(self) -> SelectionState:
        return self._state

    def project_page(self, record_ids: Sequence[Hashable], page: int) -> set:
        """IDs on ``page`` that should render as checked."""
        return self._state.project_page(record_ids, page, self._page_size)

    def selected_indices(self, record_ids: Sequence[Hashable], page: int) -> list[int]:
        """Local row indices on ``page`` that should render as checked."""
        return self._state.selected_indices(record_ids, page, self._page_size)

    def apply_page_edit(
        self,
        page: int,
        record_ids: Sequence[Hashable],
        checked_ids: Iterable[Hashable],
    ) -> SelectionState:
        """Merge the checked IDs reported for the full page ``record_ids``."""
        new_state = self._state.apply_page_edit(
            page, self._page_size, record_ids, checked_ids,
        )
        self._set_state(new_state)
        return new_state

    def declare_bulk_selection(
        self, count: int, total_records: int | None = None,
    ) -> SelectionState:
        """Select the first ``count`` records, discarding earlier edits.

        When ``total_records`` is known the count is clamped to it here;
        otherwise the caller must pass an already clamped count.
        """
        if total_records is not None:
            count, clamped = clamp_bulk_count(count, total_records)
            if clamped:
                logger.info("Bulk count clamped to %d available records", count)
            if count == 0:
                return self.clear()
        self._set_state(SelectionState.bulk(count))
        return self._state

    def clear(self) -> SelectionState:
        """Reset to the initial empty DIRECT state."""
        self._set_state(SelectionState.empty())
        return self._state

    def total_selected_count(self) -> int:
        return self._state.total_selected

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(new_state)."""
        self._callbacks.append(callback)

    def _set_state(self, state: SelectionState) -> None:
        if state == self._state:
            return
        self._state = state
        logger.debug("Selection changed: %r", state)
        for cb in self._callbacks:
            cb(state)

    def __repr__(self) -> str:
        return (
            f"SelectionTracker(page_size={self._page_size}, "
            f"selected={self.total_selected_count()})"
        )
