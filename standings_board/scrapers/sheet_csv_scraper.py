# standings_board/scrapers/sheet_csv_scraper.py
from typing import List, Optional

from loguru import logger

from standings_board.config.settings import settings
from standings_board.models.enums import SourceKind
from standings_board.models.standing import TeamStanding
from standings_board.utils.misc_utils import cache_busted_url
from .base_scraper import BaseScraper

# Published sheets are cached aggressively by Google; ask for a fresh copy.
NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}


class SheetCsvScraper(BaseScraper):
    """Reads standings from a published spreadsheet CSV export."""

    source: SourceKind = SourceKind.CSV
    label: str = "Sheet export"

    def __init__(self, *args, csv_url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.csv_url = csv_url or settings.sheet_csv_url

    async def fetch_standings(self) -> List[TeamStanding]:
        url = cache_busted_url(self.csv_url)
        logger.info(f"Fetching standings CSV from {self.csv_url}")
        response = await self._get(url, headers=NO_STORE_HEADERS)
        return self.normalizer.normalize_csv_text(response.text)
