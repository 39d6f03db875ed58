"""pageselect: row selection over server-paginated tables without holding more than one page."""

from ._version import __version__
from .core.pagination import Pagination, global_position
from .core.selection_state import SelectionMode, SelectionState
from .core.tracker import SelectionTracker
from .core.validation import InvalidBulkCount
from .service.artworks import Artwork, ArtworkService, FetchError, PageResult


def explore(base_url=None, rows_per_page=12, port=0, show=True):
    """Launch the artwork table dashboard in a browser.

    Parameters
    ----------
    base_url : str, optional
        Artworks endpoint. Defaults to the Art Institute of Chicago API.
    rows_per_page : int
        Records fetched and displayed per page.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    """
    from .dashboard.app import DashboardApp
    from .service.artworks import API_BASE_URL

    app = DashboardApp(base_url=base_url or API_BASE_URL, rows_per_page=rows_per_page)
    app.serve(port=port, show=show)


def main():
    """Console entry point: serve the dashboard on an auto-assigned port."""
    import logging

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    explore()


__all__ = [
    "__version__",
    "Artwork",
    "ArtworkService",
    "FetchError",
    "InvalidBulkCount",
    "PageResult",
    "Pagination",
    "SelectionMode",
    "SelectionState",
    "SelectionTracker",
    "explore",
    "global_position",
]
