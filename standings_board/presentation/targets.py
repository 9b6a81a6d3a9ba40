from datetime import datetime
from html import escape
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

from loguru import logger
from rich.console import Console
from rich.markup import escape as escape_markup
from rich.panel import Panel
from rich.table import Table

from standings_board.models.display import DisplayRow
from standings_board.utils.io_utils import write_atomic_json, write_atomic_text

TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


def format_updated(when: datetime) -> str:
    return f"Updated {when.strftime(TIMESTAMP_FORMAT)}"


class RenderTarget(Protocol):
    """Output surface replaced wholesale on every refresh pass."""

    def show_rows(self, rows: Sequence[DisplayRow]) -> None: ...

    def show_message(self, message: str) -> None: ...

    def set_timestamp(self, when: datetime) -> None: ...


class MemoryRenderTarget:
    """Keeps the latest board state in memory."""

    def __init__(self) -> None:
        self.rows: List[DisplayRow] = []
        self.message: Optional[str] = None
        self.updated: Optional[datetime] = None
        self.renders = 0

    def show_rows(self, rows: Sequence[DisplayRow]) -> None:
        self.rows = list(rows)
        self.message = None
        self.renders += 1

    def show_message(self, message: str) -> None:
        self.rows = []
        self.message = message
        self.renders += 1

    def set_timestamp(self, when: datetime) -> None:
        self.updated = when


class ConsoleRenderTarget:
    """Prints the board to the terminal with rich."""

    def __init__(self, console: Optional[Console] = None, title: str = "Conference Standings"):
        self.console = console or Console()
        self.title = title
        self._rows: List[DisplayRow] = []

    def show_rows(self, rows: Sequence[DisplayRow]) -> None:
        self._rows = list(rows)

    def show_message(self, message: str) -> None:
        self._rows = []
        self.console.print(Panel(message, title=self.title, border_style="red"))

    def set_timestamp(self, when: datetime) -> None:
        table = Table(title=self.title, caption=format_updated(when))
        table.add_column("#", justify="right")
        table.add_column("Team")
        table.add_column("Conf", justify="center")
        table.add_column("Ovr", justify="center")
        for row in self._rows:
            badge = f"[dim]{row.poll_rank_badge}[/dim] " if row.poll_rank_badge else ""
            table.add_row(
                f"{row.position}.",
                f"{badge}{escape_markup(row.team)}",
                row.conference_record,
                row.overall_record,
                style="bold red" if row.highlight else None,
            )
        self.console.print(table)


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta http-equiv="refresh" content="{refresh}">
  <title>{title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; background: #111; color: #fff; }}
    .row {{ display: flex; gap: 16px; font-size: 28px; padding: 4px 0; }}
    .row.priority {{ background: #c5050c; }}
    .rank {{ width: 48px; text-align: right; }}
    .team-cell {{ flex: 1; }}
    .ap-rank {{ font-size: 18px; opacity: 0.7; margin-right: 6px; }}
    .conf, .ovr {{ width: 90px; text-align: center; }}
    .message {{ padding-top: 20px; font-size: 24px; opacity: 0.7; }}
  </style>
</head>
<body>
  <div id="table">
{body}
  </div>
  <div id="timestamp">{timestamp}</div>
</body>
</html>
"""


def render_row_html(row: DisplayRow) -> str:
    classes = "row priority" if row.highlight else "row"
    badge = (
        f'<span class="ap-rank">{row.poll_rank_badge}</span>'
        if row.poll_rank_badge is not None
        else ""
    )
    return (
        f'    <div class="{classes}">'
        f'<div class="rank">{row.position}.</div>'
        f'<div class="team-cell">{badge}<span class="team-name">{escape(row.team)}</span></div>'
        f'<div class="conf">{escape(row.conference_record)}</div>'
        f'<div class="ovr">{escape(row.overall_record)}</div>'
        f"</div>"
    )


class HtmlFileRenderTarget:
    """Writes the board as a static HTML page that reloads itself."""

    def __init__(
        self,
        path: Union[str, Path],
        title: str = "Conference Standings",
        refresh_seconds: int = 900,
    ):
        self.path = Path(path)
        self.title = title
        self.refresh_seconds = refresh_seconds
        self._body = ""
        self._timestamp = ""

    def show_rows(self, rows: Sequence[DisplayRow]) -> None:
        self._body = "\n".join(render_row_html(row) for row in rows)
        self._write()

    def show_message(self, message: str) -> None:
        self._body = f'    <div class="message">{escape(message)}</div>'
        self._write()

    def set_timestamp(self, when: datetime) -> None:
        self._timestamp = format_updated(when)
        self._write()

    def _write(self) -> None:
        page = PAGE_TEMPLATE.format(
            refresh=self.refresh_seconds,
            title=escape(self.title),
            body=self._body,
            timestamp=self._timestamp,
        )
        write_atomic_text(self.path, page)
        logger.debug(f"Wrote board HTML to {self.path}")


class JsonFileRenderTarget:
    """Writes the board rows as JSON for other consumers."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._rows: List[DisplayRow] = []

    def show_rows(self, rows: Sequence[DisplayRow]) -> None:
        self._rows = list(rows)

    def show_message(self, message: str) -> None:
        self._rows = []
        write_atomic_json(self.path, {"message": message})

    def set_timestamp(self, when: datetime) -> None:
        write_atomic_json(
            self.path,
            {
                "standings": [row.model_dump(mode="json") for row in self._rows],
                "updated": when.isoformat(),
            },
        )
        logger.debug(f"Wrote board JSON to {self.path}")


class MultiRenderTarget:
    """Fans every render call out to several targets."""

    def __init__(self, targets: Sequence[RenderTarget]):
        self.targets = list(targets)

    def show_rows(self, rows: Sequence[DisplayRow]) -> None:
        for target in self.targets:
            target.show_rows(rows)

    def show_message(self, message: str) -> None:
        for target in self.targets:
            target.show_message(message)

    def set_timestamp(self, when: datetime) -> None:
        for target in self.targets:
            target.set_timestamp(when)
