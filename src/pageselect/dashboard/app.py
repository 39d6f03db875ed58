"""DashboardApp: assembles the Panel template and serves the artwork table."""

from __future__ import annotations

import panel as pn

from ..service.artworks import API_BASE_URL, ArtworkService
from .selection_panel import SelectionHeader
from .state import ROWS_PER_PAGE, TableState
from .table_pane import ArtworkTablePane

# ---------------------------------------------------------------------------
# Custom CSS
# ---------------------------------------------------------------------------

_DASHBOARD_CSS = """
:root, :host {
  --design-primary-color: #1a73e8;
  --design-primary-text-color: #ffffff;
  --design-secondary-color: #1557b0;
  --panel-primary-color: #1a73e8;
  --mdc-theme-primary: #1a73e8;
}

/* ---- Pill buttons ---- */
.bk-btn-primary {
  border-radius: 24px !important;
  background-color: #1a73e8 !important;
  border-color: #1a73e8 !important;
  color: #ffffff !important;
  text-transform: none !important;
}
.bk-btn-primary:hover {
  background-color: #1557b0 !important;
  border-color: #1557b0 !important;
}

/* ---- Outlined danger button (Clear Selection) ---- */
.bk-btn-danger {
  border-radius: 24px !important;
  background-color: transparent !important;
  border: 1px solid #d93025 !important;
  color: #d93025 !important;
  font-size: 11px !important;
  text-transform: none !important;
}

/* ---- Compact header ---- */
.mdc-top-app-bar {
  background: #fafafa !important;
  box-shadow: none !important;
  border-bottom: 1px solid #f0f0f0 !important;
}
.mdc-top-app-bar__title {
  font-size: 14px !important;
  font-weight: 500 !important;
  color: #202124 !important;
}
"""


class DashboardApp:
    """Paginated artwork table with cross-page row selection.

    Each browser session gets its own TableState (one page of records
    and one selection); the first page is fetched when the session loads.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        rows_per_page: int = ROWS_PER_PAGE,
    ) -> None:
        pn.extension("tabulator", sizing_mode="stretch_width")

        pn.config.raw_css.append(_DASHBOARD_CSS)
        pn.config.loading_color = "#1a73e8"

        self.base_url = base_url
        self.rows_per_page = rows_per_page

    def create_state(self) -> TableState:
        service = ArtworkService(base_url=self.base_url, limit=self.rows_per_page)
        return TableState(service=service, rows_per_page=self.rows_per_page)

    def _build_template(self) -> pn.template.MaterialTemplate:
        """Build one session's layout and schedule its first page load."""
        state = self.create_state()
        header = SelectionHeader(state)
        table_pane = ArtworkTablePane(state)

        template = pn.template.MaterialTemplate(
            title="Artworks",
            header_background="#fafafa",
            header_color="#202124",
        )
        template.main.append(
            pn.Column(
                header.build_panel(),
                table_pane.build_panel(),
                sizing_mode="stretch_width",
            )
        )

        async def _load_first_page():
            await state.load_page(1)

        pn.state.onload(_load_first_page)
        return template

    def serve(self, port: int = 0, show: bool = True, **kwargs) -> None:
        """Start the Panel server and optionally open the browser.

        Parameters
        ----------
        port : int
            Port number. 0 = auto-assign.
        show : bool
            Whether to open the browser automatically.
        **kwargs
            Additional keyword arguments passed to pn.serve().
        """
        pn.serve(
            self._build_template,
            port=port or 0,
            show=show,
            title="Artwork Explorer",
            **kwargs,
        )
