# standings_board/scrapers/factory.py
from typing import Optional

import httpx

from standings_board.models.enums import SourceKind
from .base_scraper import BaseScraper
from .relay_client import RelayStandingsClient
from .sheet_csv_scraper import SheetCsvScraper
from .warrennolan_scraper import WarrenNolanScraper

SCRAPERS = {
    SourceKind.CSV: SheetCsvScraper,
    SourceKind.SCRAPE: WarrenNolanScraper,
    SourceKind.RELAY: RelayStandingsClient,
}


def create_scraper(
    source: SourceKind, client: Optional[httpx.AsyncClient] = None
) -> BaseScraper:
    """Builds the scraper for the configured data source."""
    return SCRAPERS[SourceKind(source)](client=client)
