# standings_board/scrapers/warrennolan_scraper.py

from typing import List, Optional

from loguru import logger

from standings_board.config.settings import settings
from standings_board.models.enums import SourceKind
from standings_board.models.standing import TeamStanding
from standings_board.normalization.normalizer import NormalizationError
from standings_board.utils.html_utils import extract_table_rows, find_standings_table
from .base_scraper import BaseScraper


class WarrenNolanScraper(BaseScraper):
    """Scrapes the conference standings table from WarrenNolan.com."""

    source: SourceKind = SourceKind.SCRAPE
    label: str = "WarrenNolan"

    def __init__(self, *args, page_url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.page_url = page_url or settings.scrape_url

    async def fetch_standings(self) -> List[TeamStanding]:
        logger.info(f"Fetching standings page from {self.page_url}")
        response = await self._get(self.page_url)
        return self.parse_html(response.text)

    def parse_html(self, html: str) -> List[TeamStanding]:
        """Extracts standings from the page markup.

        Raises:
            NormalizationError: No standings table, or a table with no usable rows.
        """
        table = find_standings_table(html)
        if table is None:
            raise NormalizationError("Could not find standings table")

        rows = extract_table_rows(table)
        standings = self.normalizer.normalize_scraped_rows(rows)
        if not standings:
            raise NormalizationError("No standings data found")

        logger.info(f"Parsed {len(standings)} teams from {self.label}")
        return standings
