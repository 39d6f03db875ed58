"""ArtworkTablePane: Tabulator view of the current page with remote pagination."""

from __future__ import annotations

import pandas as pd
import panel as pn

from ..core.pagination import page_window
from ..display_utils import format_records, prettify_name
from ..service.artworks import ARTWORK_FIELDS
from .state import TableState

_COLUMN_WIDTHS = {
    "title": 220,
    "place_of_origin": 150,
    "artist_display": 220,
    "inscriptions": 220,
    "date_start": 100,
    "date_end": 100,
}

_TITLES = {name: prettify_name(name) for name in ARTWORK_FIELDS}
_TITLES["date_start"] = "Start Date"
_TITLES["date_end"] = "End Date"
_TITLES["artist_display"] = "Artist"

_ERROR_CSS = """
:host {
  text-align: center;
  padding: 32px;
  color: #d93025;
}
"""


class ArtworkTablePane:
    """Builds the table and its paginator, and keeps both in sync with TableState.

    The Tabulator holds only the page the state is displaying. Its
    ``selection`` is written from ``state.selected_indices`` and user
    edits are forwarded to ``state.on_table_selection``.
    """

    def __init__(self, state: TableState) -> None:
        self.state = state
        self._syncing = False  # Guard flag: suppresses widget->state callbacks
        self._build_widgets()
        self._wire_bindings()

    def _build_widgets(self) -> None:
        self.table = pn.widgets.Tabulator(
            format_records(self.state.records)
            if self.state.records is not None
            else pd.DataFrame(columns=list(ARTWORK_FIELDS)),
            selectable="checkbox",
            show_index=False,
            disabled=True,
            pagination=None,
            hidden_columns=["id"],
            titles=_TITLES,
            widths=_COLUMN_WIDTHS,
            sizing_mode="stretch_width",
            min_height=400,
        )

        self.first_button = pn.widgets.Button(name="«", width=40)
        self.prev_button = pn.widgets.Button(name="‹", width=40)
        self.next_button = pn.widgets.Button(name="›", width=40)
        self.last_button = pn.widgets.Button(name="»", width=40)
        self.page_links = pn.Row(margin=0)
        self.page_report = pn.pane.Markdown(
            "", styles={"color": "#6b7280", "font-size": "12px"},
        )

        self.error_view = pn.pane.Markdown(
            "", stylesheets=[_ERROR_CSS], visible=False, sizing_mode="stretch_width",
        )

    def _wire_bindings(self) -> None:
        s = self.state

        self.table.param.watch(self._on_table_selection, "selection")
        s.param.watch(self._sync_table, ["records", "selected_indices"])
        s.param.watch(self._sync_loading, "loading")
        s.param.watch(self._sync_error, "error")
        s.param.watch(self._sync_paginator, ["pagination", "current_page", "loading"])

        self.first_button.on_click(self._on_first)
        self.prev_button.on_click(self._on_prev)
        self.next_button.on_click(self._on_next)
        self.last_button.on_click(self._on_last)

        self._sync_paginator()

    # --- widget -> state ---

    def _on_table_selection(self, event) -> None:
        if self._syncing:
            return
        self.state.on_table_selection(list(event.new))

    async def _on_first(self, event) -> None:
        await self.state.first_page()

    async def _on_prev(self, event) -> None:
        await self.state.previous_page()

    async def _on_next(self, event) -> None:
        await self.state.next_page()

    async def _on_last(self, event) -> None:
        await self.state.last_page()

    async def _on_page_link(self, page: int) -> None:
        if page != self.state.current_page:
            await self.state.load_page(page)

    # --- state -> widget ---

    def _sync_table(self, *events) -> None:
        s = self.state
        self._syncing = True
        try:
            if any(e.name == "records" for e in events) and s.records is not None:
                self.table.value = format_records(s.records)
            self.table.selection = list(s.selected_indices)
        finally:
            self._syncing = False

    def _sync_loading(self, event) -> None:
        self.table.loading = event.new

    def _sync_error(self, event) -> None:
        message = event.new
        if message:
            self.error_view.object = f"### Error Loading Artworks\n\n{message}"
        self.error_view.visible = bool(message)
        self.table.visible = not message

    def _sync_paginator(self, *events) -> None:
        s = self.state
        page, pages = s.current_page, s.total_pages
        busy = s.loading
        self.first_button.disabled = busy or page <= 1
        self.prev_button.disabled = busy or page <= 1
        self.next_button.disabled = busy or page >= pages
        self.last_button.disabled = busy or page >= pages
        self._sync_page_links(page, pages, busy)
        self.page_report.object = s.pagination.report() if s.pagination is not None else ""

    def _sync_page_links(self, page: int, pages: int, busy: bool) -> None:
        self.page_links.objects = [
            self._page_link(n, current=n == page, busy=busy)
            for n in page_window(page, pages)
        ]

    def _page_link(self, n: int, current: bool, busy: bool) -> pn.widgets.Button:
        button = pn.widgets.Button(
            name=str(n),
            button_type="primary" if current else "default",
            disabled=busy or current,
            width=40,
        )

        async def _on_click(event):
            await self._on_page_link(n)

        button.on_click(_on_click)
        return button

    def build_panel(self) -> pn.Column:
        paginator = pn.Row(
            self.page_report,
            pn.layout.HSpacer(),
            self.first_button,
            self.prev_button,
            self.page_links,
            self.next_button,
            self.last_button,
            sizing_mode="stretch_width",
        )
        return pn.Column(
            self.error_view,
            self.table,
            paginator,
            sizing_mode="stretch_width",
        )
