"""Launch the pageselect dashboard against the Art Institute of Chicago API."""

import logging

import pageselect as ps

logging.basicConfig(level=logging.INFO)

print("Launching dashboard...")

ps.explore(rows_per_page=12)
