"""SelectionState: the selection over a paginated collection.

Tracks which records are selected without ever holding more than one
page of records. A "select the first N" intent is stored as the implicit
range [0, N) over global position plus two bounded exception sets, so
memory grows with the number of edits, never with N.

Immutable: every operation returns a new SelectionState.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Sequence

from .pagination import page_positions
from .validation import (
    validate_bulk_count,
    validate_checked_ids,
    validate_page,
    validate_page_ids,
)


def _sorted_ids(ids: frozenset) -> list:
    try:
        return sorted(ids)
    except TypeError:
        # Mixed ID types have no natural order
        return sorted(ids, key=repr)


class SelectionMode(enum.Enum):
    DIRECT = "direct"
    BULK = "bulk"


@dataclass(frozen=True)
class SelectionState:
    """Selection over a collection too large to materialize.

    DIRECT mode: a record is selected iff its ID is in ``included``.

    BULK mode: a record at global position < ``bulk_count`` is selected
    unless its ID is in ``excluded``; a record at or beyond
    ``bulk_count`` is selected iff its ID is in ``included``.

    ``excluded`` only ever holds IDs seen inside the range and
    ``included`` (in BULK mode) only IDs seen outside it, so
    ``total_selected`` never goes negative.
    """

    mode: SelectionMode = SelectionMode.DIRECT
    bulk_count: int | None = None
    included: frozenset = field(default_factory=frozenset)
    excluded: frozenset = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> SelectionState:
        """Initial state: DIRECT mode, nothing selected."""
        return cls()

    @classmethod
    def bulk(cls, count: int) -> SelectionState:
        """Select the first ``count`` records by global position.

        Discards every earlier selection and exception. The caller must
        have clamped ``count`` to the collection size.
        """
        count = validate_bulk_count(count)
        return cls(mode=SelectionMode.BULK, bulk_count=count)

    @property
    def is_bulk(self) -> bool:
        return self.mode is SelectionMode.BULK

    @property
    def total_selected(self) -> int:
        """Number of selected records across all pages, in O(1)."""
        if self.is_bulk:
            return self.bulk_count - len(self.excluded) + len(self.included)
        return len(self.included)

    def in_range(self, position: int) -> bool:
        """Whether a global position falls inside the bulk range."""
        return self.is_bulk and position < self.bulk_count

    def is_selected(self, record_id: Hashable, position: int) -> bool:
        """Selection status of one record at a given global position."""
        if self.in_range(position):
            return record_id not in self.excluded
        return record_id in self.included

    def project_page(
        self,
        record_ids: Sequence[Hashable],
        page: int,
        page_size: int,
    ) -> set:
        """Return the IDs on this page that are currently selected.

        ``record_ids`` is the page in display order; local index i sits at
        global position ``(page - 1) * page_size + i``. Reads nothing
        outside the page. O(page_size).
        """
        return {
            record_ids[i]
            for i in self.selected_indices(record_ids, page, page_size)
        }

    def selected_indices(
        self,
        record_ids: Sequence[Hashable],
        page: int,
        page_size: int,
    ) -> list[int]:
        """Local indices of the selected records on this page, ascending."""
        page, page_size = validate_page(page, page_size)
        ids = validate_page_ids(record_ids, page_size)
        positions = page_positions(page, page_size, len(ids))
        return [
            i for i, (rid, pos) in enumerate(zip(ids, positions.tolist()))
            if self.is_selected(rid, pos)
        ]

    def apply_page_edit(
        self,
        page: int,
        page_size: int,
        record_ids: Sequence[Hashable],
        checked_ids: Iterable[Hashable],
    ) -> SelectionState:
        """Merge the user's checkbox state for one page.

        ``record_ids`` must be the full identifier list of the displayed
        page: a record missing from ``checked_ids`` is read as unchecked,
        which is the only way to drop a stale membership for this page.
        ``checked_ids`` must be a subset of ``record_ids``.

        Never changes the mode. Applying the same edit twice yields the
        same state as applying it once.
        """
        page, page_size = validate_page(page, page_size)
        ids = validate_page_ids(record_ids, page_size)
        checked = validate_checked_ids(checked_ids, ids)

        if not self.is_bulk:
            included = (self.included - frozenset(ids)) | checked
            return SelectionState(included=included)

        included = set(self.included)
        excluded = set(self.excluded)
        positions = page_positions(page, page_size, len(ids)).tolist()
        for rid, pos in zip(ids, positions):
            by_range = pos < self.bulk_count
            is_checked = rid in checked
            if by_range and not is_checked:
                excluded.add(rid)
            elif by_range and is_checked:
                excluded.discard(rid)
            elif is_checked:
                included.add(rid)
            else:
                included.discard(rid)

        return SelectionState(
            mode=SelectionMode.BULK,
            bulk_count=self.bulk_count,
            included=frozenset(included),
            excluded=frozenset(excluded),
        )

    def to_dict(self) -> dict:
        """Serialize for JSON display."""
        return {
            "mode": self.mode.value,
            "bulk_count": self.bulk_count,
            "included": _sorted_ids(self.included),
            "excluded": _sorted_ids(self.excluded),
            "total_selected": self.total_selected,
        }

    def __repr__(self) -> str:
        if self.is_bulk:
            return (
                f"SelectionState(bulk={self.bulk_count}, "
                f"included={len(self.included)}, excluded={len(self.excluded)})"
            )
        return f"SelectionState(direct, included={len(self.included)})"
