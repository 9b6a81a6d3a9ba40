from enum import Enum


class SourceKind(str, Enum):
    CSV = "csv"  # Published spreadsheet export
    SCRAPE = "scrape"  # Direct HTML scrape
    RELAY = "relay"  # Scrape served through the relay endpoint


class BoardMessage(str, Enum):
    """User-visible fallback messages shown when a refresh pass fails."""

    MISSING_COLUMNS = "Missing columns in sheet"
    LOAD_ERROR = "Error loading data"
