"""Scrape relay: serves the scraped standings as JSON with permissive CORS.

Browsers cannot fetch the standings page cross-origin, so this endpoint
scrapes it server-side and hands back ``{"standings": [...]}``. Each request
is independent; nothing is shared between requests.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from loguru import logger

from standings_board.config.settings import settings
from standings_board.presentation.presenter import to_json_payload
from standings_board.scrapers.base_scraper import BaseScraper
from standings_board.scrapers.warrennolan_scraper import WarrenNolanScraper

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Max-Age": "86400",
}

ScraperFactory = Callable[[], BaseScraper]


def create_app(
    scraper_factory: ScraperFactory = WarrenNolanScraper,
    cache_max_age: Optional[int] = None,
) -> FastAPI:
    """Builds the relay application.

    Args:
        scraper_factory: Called once per request to get a fresh scraper.
        cache_max_age: Cache-Control max-age for successful responses,
            defaults to the ``relay_cache_max_age`` setting.
    """
    max_age = settings.relay_cache_max_age if cache_max_age is None else cache_max_age
    app = FastAPI(title="Standings Relay", docs_url=None, redoc_url=None)

    @app.options("/")
    async def preflight() -> Response:
        return Response(status_code=200, headers=PREFLIGHT_HEADERS)

    @app.get("/")
    async def standings() -> JSONResponse:
        scraper = scraper_factory()
        try:
            teams = await scraper.fetch_standings()
            logger.info(f"Relay serving {len(teams)} teams")
            return JSONResponse(
                {"standings": to_json_payload(teams)},
                headers={
                    "Access-Control-Allow-Origin": "*",
                    "Cache-Control": f"public, max-age={max_age}",
                },
            )
        except Exception as e:
            logger.exception(f"Relay failed to scrape standings: {e}")
            return JSONResponse(
                {
                    "error": str(e),
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
                status_code=500,
                headers={"Access-Control-Allow-Origin": "*"},
            )
        finally:
            await scraper.close()

    return app
