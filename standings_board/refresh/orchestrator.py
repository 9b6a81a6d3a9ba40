import asyncio
from datetime import datetime
from typing import Awaitable, Callable, Optional, Set

from loguru import logger

from standings_board.models.enums import BoardMessage
from standings_board.normalization.normalizer import MissingColumnsError
from standings_board.presentation.presenter import build_display_rows
from standings_board.presentation.targets import RenderTarget
from standings_board.ranking.ranker import StandingsRanker
from standings_board.scrapers.base_scraper import BaseScraper

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[None]]


class RefreshOrchestrator:
    """Runs fetch -> rank -> render once at startup and then on a fixed interval.

    The render target, clock and sleep are injected so the schedule can be
    driven without real timers or a real display.
    """

    def __init__(
        self,
        scraper: BaseScraper,
        target: RenderTarget,
        ranker: Optional[StandingsRanker] = None,
        interval_seconds: float = 15 * 60,
        clock: Clock = datetime.now,
        sleep: Sleep = asyncio.sleep,
        allow_overlap: bool = False,
    ):
        self.scraper = scraper
        self.target = target
        self.ranker = ranker or StandingsRanker()
        self.interval_seconds = interval_seconds
        self.clock = clock
        self.sleep = sleep
        self.allow_overlap = allow_overlap
        self._in_flight: Set[asyncio.Task] = set()

    async def run_once(self) -> bool:
        """Runs a single refresh pass. Returns True when the board was updated."""
        logger.info(f"Starting refresh pass ({self.scraper.source.value})...")
        try:
            standings = await self.scraper.fetch_standings()
            ranked = self.ranker.rank(standings)
            self.target.show_rows(build_display_rows(ranked))
            self.target.set_timestamp(self.clock())
        except MissingColumnsError as e:
            logger.error(f"Sheet is missing columns {e.missing}; headers: {e.headers}")
            self.target.show_message(BoardMessage.MISSING_COLUMNS.value)
            return False
        except Exception as e:
            logger.exception(f"Error loading standings: {e}")
            self.target.show_message(BoardMessage.LOAD_ERROR.value)
            return False

        logger.success(f"Board refreshed with {len(ranked)} teams.")
        return True

    def _launch(self) -> Optional[asyncio.Task]:
        running = [task for task in self._in_flight if not task.done()]
        if running and not self.allow_overlap:
            logger.warning("Previous refresh still running; skipping this tick.")
            return None
        task = asyncio.create_task(self.run_once())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def run_forever(self, max_cycles: Optional[int] = None) -> None:
        """Refreshes immediately and then every ``interval_seconds``.

        Failed passes never stop the schedule. ``max_cycles`` bounds the
        number of ticks; in-flight passes are awaited before returning.
        """
        cycles = 0
        try:
            while max_cycles is None or cycles < max_cycles:
                if cycles:
                    await self.sleep(self.interval_seconds)
                self._launch()
                cycles += 1
                # Let the new pass start before the next sleep
                await asyncio.sleep(0)
        finally:
            if self._in_flight:
                await asyncio.gather(*self._in_flight, return_exceptions=True)
