"""Display utilities for record columns and values."""

import pandas as pd

_ACRONYMS = {"id", "url", "api"}

MISSING_TEXT = "N/A"


def prettify_name(name: str) -> str:
    """Convert snake_case names to Title Case with smart acronyms.

    Examples::

        prettify_name("place_of_origin")  # -> "Place Of Origin"
        prettify_name("artist_id")        # -> "Artist ID"
    """
    words = name.replace("_", " ").split()
    return " ".join(
        w.upper() if w.lower() in _ACRONYMS else w.capitalize()
        for w in words
    )


def format_records(frame: pd.DataFrame) -> pd.DataFrame:
    """Return a display copy of a page: missing text fields become 'N/A'."""
    text_cols = [
        c for c in frame.columns
        if pd.api.types.is_object_dtype(frame[c]) or pd.api.types.is_string_dtype(frame[c])
    ]
    return frame.fillna({c: MISSING_TEXT for c in text_cols})
