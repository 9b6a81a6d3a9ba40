import asyncio
from datetime import datetime

from standings_board.models.enums import BoardMessage, SourceKind
from standings_board.normalization.normalizer import MissingColumnsError
from standings_board.presentation.targets import MemoryRenderTarget
from standings_board.refresh.orchestrator import RefreshOrchestrator
from standings_board.scrapers.base_scraper import BaseScraper, ScraperError

NOW = datetime(2026, 1, 20, 21, 0, 0)


class ScriptedScraper(BaseScraper):
    """Returns (or raises) the next scripted result on every fetch."""

    source = SourceKind.CSV

    def __init__(self, results, gate=None):
        self.results = list(results)
        self.gate = gate
        self.calls = 0

    async def fetch_standings(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        result = self.results[min(self.calls, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self):
        pass


class RecordingTarget(MemoryRenderTarget):
    def __init__(self):
        super().__init__()
        self.history = []

    def show_rows(self, rows):
        super().show_rows(rows)
        self.history.append([r.team for r in rows])

    def show_message(self, message):
        super().show_message(message)
        self.history.append(message)


def board(standing_factory):
    return [
        standing_factory("IOWA", conference=(4, 10), overall=(14, 14)),
        standing_factory("PURDUE", conference=(9, 5), overall=(20, 8)),
    ]


def make_orchestrator(scraper, target, sleeps=None, **kwargs):
    async def fake_sleep(seconds):
        if sleeps is not None:
            sleeps.append(seconds)

    return RefreshOrchestrator(
        scraper, target, clock=lambda: NOW, sleep=fake_sleep, **kwargs
    )


def test_run_once_renders_ranked_board(standing_factory):
    target = MemoryRenderTarget()
    orchestrator = make_orchestrator(ScriptedScraper([board(standing_factory)]), target)

    assert asyncio.run(orchestrator.run_once()) is True
    assert [(r.position, r.team) for r in target.rows] == [(1, "PURDUE"), (2, "IOWA")]
    assert target.updated == NOW
    assert target.message is None


def test_missing_columns_message():
    target = MemoryRenderTarget()
    error = MissingColumnsError(["WINS"], ["TEAM", "CONF", "OVR", "LOSSES"])
    orchestrator = make_orchestrator(ScriptedScraper([error]), target)

    assert asyncio.run(orchestrator.run_once()) is False
    assert target.message == BoardMessage.MISSING_COLUMNS.value
    assert target.rows == []
    assert target.updated is None


def test_fetch_failure_message():
    target = MemoryRenderTarget()
    orchestrator = make_orchestrator(ScriptedScraper([ScraperError("timeout")]), target)

    assert asyncio.run(orchestrator.run_once()) is False
    assert target.message == "Error loading data"


def test_schedule_survives_failed_cycles(standing_factory):
    target = RecordingTarget()
    sleeps = []
    scraper = ScriptedScraper(
        [ScraperError("down"), MissingColumnsError(["TEAM"], []), board(standing_factory)]
    )
    orchestrator = make_orchestrator(scraper, target, sleeps=sleeps, interval_seconds=900)

    asyncio.run(orchestrator.run_forever(max_cycles=3))

    assert scraper.calls == 3
    assert sleeps == [900, 900]
    assert target.history == [
        "Error loading data",
        "Missing columns in sheet",
        ["PURDUE", "IOWA"],
    ]
    assert target.updated == NOW


def _run_with_gate(standing_factory, allow_overlap):
    async def scenario():
        gate = asyncio.Event()
        scraper = ScriptedScraper([board(standing_factory)], gate=gate)
        ticks = []

        async def fake_sleep(seconds):
            ticks.append(seconds)
            if len(ticks) == 2:
                gate.set()

        orchestrator = RefreshOrchestrator(
            scraper,
            MemoryRenderTarget(),
            clock=lambda: NOW,
            sleep=fake_sleep,
            allow_overlap=allow_overlap,
        )
        await orchestrator.run_forever(max_cycles=3)
        return scraper.calls, orchestrator.target

    return asyncio.run(scenario())


def test_in_flight_pass_blocks_new_ticks(standing_factory):
    calls, target = _run_with_gate(standing_factory, allow_overlap=False)
    assert calls == 1
    assert target.renders == 1


def test_overlapping_passes_when_allowed(standing_factory):
    calls, target = _run_with_gate(standing_factory, allow_overlap=True)
    assert calls == 3
    assert target.renders == 3
    assert [r.team for r in target.rows] == ["PURDUE", "IOWA"]
