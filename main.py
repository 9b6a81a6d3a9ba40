import sys
import asyncio
from typing import List, Optional

import click

# --- Settings/Logging ---
from standings_board.logging.setup import setup_logging
from standings_board.config.settings import settings

setup_logging()

from loguru import logger

# --- End Settings/Logging ---

from standings_board.models.enums import SourceKind
from standings_board.presentation.targets import (
    ConsoleRenderTarget,
    HtmlFileRenderTarget,
    JsonFileRenderTarget,
    MultiRenderTarget,
    RenderTarget,
)
from standings_board.refresh.orchestrator import RefreshOrchestrator
from standings_board.scrapers.factory import create_scraper


def build_target(html_path: Optional[str], json_path: Optional[str]) -> RenderTarget:
    targets: List[RenderTarget] = [ConsoleRenderTarget()]
    if html_path:
        targets.append(
            HtmlFileRenderTarget(
                html_path, refresh_seconds=int(settings.refresh_interval_seconds)
            )
        )
    if json_path:
        targets.append(JsonFileRenderTarget(json_path))
    return MultiRenderTarget(targets)


async def run_board(source: SourceKind, once: bool, html_path, json_path) -> None:
    """Runs the standings board until interrupted (or a single pass with --once)."""
    logger.info(f"Starting standings board (source: {source.value})")
    scraper = create_scraper(source)
    orchestrator = RefreshOrchestrator(
        scraper,
        build_target(html_path, json_path),
        interval_seconds=settings.refresh_interval_seconds,
    )
    try:
        if once:
            await orchestrator.run_once()
        else:
            await orchestrator.run_forever()
    finally:
        await scraper.close()


@click.group()
def cli() -> None:
    """Conference standings board and scrape relay."""


@cli.command()
@click.option(
    "--source",
    type=click.Choice([kind.value for kind in SourceKind]),
    default=None,
    help="Data source (defaults to the SOURCE setting).",
)
@click.option("--once", is_flag=True, help="Refresh a single time and exit.")
@click.option("--html", "html_path", default=None, help="Also write the board as HTML.")
@click.option("--json", "json_path", default=None, help="Also write the board as JSON.")
def board(source, once, html_path, json_path) -> None:
    """Show the standings board, refreshing on a fixed interval."""
    asyncio.run(
        run_board(
            SourceKind(source) if source else settings.source,
            once,
            html_path or settings.html_output_path,
            json_path or settings.json_output_path,
        )
    )


@cli.command()
@click.option("--host", default=None, help="Bind host (defaults to RELAY_HOST).")
@click.option("--port", type=int, default=None, help="Bind port (defaults to RELAY_PORT).")
def relay(host, port) -> None:
    """Serve the scrape relay endpoint."""
    import uvicorn

    from standings_board.relay.app import create_app

    uvicorn.run(
        create_app(),
        host=host or settings.relay_host,
        port=port or settings.relay_port,
        log_config=None,
    )


if __name__ == "__main__":
    try:
        cli()
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
