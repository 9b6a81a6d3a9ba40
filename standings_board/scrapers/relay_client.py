# standings_board/scrapers/relay_client.py
from typing import Any, List, Optional

from loguru import logger
from pydantic import ValidationError

from standings_board.config.settings import settings
from standings_board.models.enums import SourceKind
from standings_board.models.standing import TeamStanding
from standings_board.normalization.normalizer import NormalizationError
from .base_scraper import BaseScraper


class RelayStandingsClient(BaseScraper):
    """Reads already-normalized standings from the scrape relay."""

    source: SourceKind = SourceKind.RELAY
    label: str = "Relay"

    def __init__(self, *args, relay_url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.relay_url = relay_url or settings.relay_url

    async def fetch_standings(self) -> List[TeamStanding]:
        logger.info(f"Fetching standings from relay {self.relay_url}")
        response = await self._get(self.relay_url)
        try:
            payload = response.json()
        except ValueError as e:
            raise NormalizationError(f"Relay returned invalid JSON: {e}") from e
        return self.parse_payload(payload)

    def parse_payload(self, payload: Any) -> List[TeamStanding]:
        if not isinstance(payload, dict) or not isinstance(payload.get("standings"), list):
            raise NormalizationError("Relay payload has no standings list")

        standings: List[TeamStanding] = []
        for index, item in enumerate(payload["standings"]):
            try:
                standing = TeamStanding.model_validate(item)
            except ValidationError as e:
                logger.warning(f"Skipping invalid relay entry #{index}: {e}")
                continue
            if not standing.conference_record:
                # Scraped rows always carry one; anything else is a foreign shape
                logger.warning(f"Skipping relay entry #{index} without a conference record")
                continue
            # Priority team is a local preference, not the relay's
            standings.append(
                standing.model_copy(
                    update={
                        "is_priority_entity": standing.team
                        == self.normalizer.priority_team,
                        "source_order": index,
                    }
                )
            )

        if not standings:
            raise NormalizationError("No standings data found")
        return standings
