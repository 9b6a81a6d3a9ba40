import csv
import io
from typing import Dict, List, Optional, Sequence

from loguru import logger

from standings_board.config.settings import PRIORITY_TEAM
from standings_board.models.standing import TeamStanding, UNRANKED
from standings_board.normalization.cells import classify_cells
from standings_board.normalization.records import parse_leading_int, parse_record

REQUIRED_COLUMNS = ("TEAM", "CONF", "OVR", "WINS", "LOSSES")
RANK_COLUMN = "RANK"  # Optional poll rank column

# A scraped row needs at least a team and two records.
MIN_SCRAPED_CELLS = 3


class NormalizationError(Exception):
    """Custom exception for data normalization errors."""

    pass


class MissingColumnsError(NormalizationError):
    """Raised when the sheet header lacks one or more required columns."""

    def __init__(self, missing: Sequence[str], headers: Sequence[str]):
        self.missing = list(missing)
        self.headers = list(headers)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


def _coerce_poll_rank(value: int) -> int:
    return value if 1 <= value < UNRANKED else UNRANKED


def split_csv_text(text: str) -> tuple[List[str], List[List[str]]]:
    """Split raw CSV text into a trimmed header row and the data rows."""
    lines = list(csv.reader(io.StringIO(text.strip())))
    if not lines:
        return [], []
    headers = [h.strip() for h in lines[0]]
    return headers, lines[1:]


class Normalizer:
    """Turns raw sheet rows or scraped cells into TeamStanding records."""

    def __init__(self, priority_team: str = PRIORITY_TEAM):
        self.priority_team = priority_team.strip().upper()
        logger.debug(f"Normalizer initialized (priority team: {self.priority_team}).")

    def _is_priority(self, team: str) -> bool:
        return team == self.priority_team

    # --- CSV (spreadsheet export) ---

    def normalize_csv_text(self, text: str) -> List[TeamStanding]:
        headers, rows = split_csv_text(text)
        return self.normalize_csv(headers, rows)

    def normalize_csv(
        self, headers: Sequence[str], rows: Sequence[Sequence[str]]
    ) -> List[TeamStanding]:
        """Normalizes sheet rows addressed by header name.

        Args:
            headers: Column names from the first line, matched case-insensitively.
            rows: Data rows, one per team.

        Returns:
            A TeamStanding per row with a non-blank team cell, in sheet order.

        Raises:
            MissingColumnsError: If any of TEAM, CONF, OVR, WINS, LOSSES is absent.
        """
        header_to_index: Dict[str, int] = {
            h.strip().upper(): idx for idx, h in enumerate(headers)
        }
        missing = [col for col in REQUIRED_COLUMNS if col not in header_to_index]
        if missing:
            logger.error(f"Missing required columns {missing}. Headers: {list(headers)}")
            raise MissingColumnsError(missing, headers)

        team_col = header_to_index["TEAM"]
        conf_col = header_to_index["CONF"]
        ovr_col = header_to_index["OVR"]
        wins_col = header_to_index["WINS"]
        losses_col = header_to_index["LOSSES"]
        rank_col: Optional[int] = header_to_index.get(RANK_COLUMN)

        def cell(cols: Sequence[str], idx: int) -> str:
            return cols[idx].strip() if idx < len(cols) and cols[idx] else ""

        standings: List[TeamStanding] = []
        for original_index, cols in enumerate(rows):
            if not cols:
                continue

            team = cell(cols, team_col).upper()
            if not team:
                continue

            conf_text = cell(cols, conf_col)
            conf_wins, conf_losses = parse_record(conf_text)

            poll_rank = UNRANKED
            if rank_col is not None:
                rank_text = cell(cols, rank_col)
                if rank_text:
                    poll_rank = _coerce_poll_rank(parse_leading_int(rank_text, UNRANKED))

            standings.append(
                TeamStanding(
                    team=team,
                    conference_record=conf_text,
                    overall_record=cell(cols, ovr_col),
                    poll_rank=poll_rank,
                    conference_wins=conf_wins,
                    conference_losses=conf_losses,
                    # Overall record comes from the helper columns, not OVR
                    overall_wins=parse_leading_int(cell(cols, wins_col)),
                    overall_losses=parse_leading_int(cell(cols, losses_col)),
                    is_priority_entity=self._is_priority(team),
                    source_order=original_index,
                )
            )

        logger.info(f"Normalized {len(standings)} teams from {len(rows)} sheet rows.")
        return standings

    # --- Scraped HTML table ---

    def normalize_scraped_rows(
        self, rows: Sequence[Sequence[str]]
    ) -> List[TeamStanding]:
        """Normalizes markup-stripped table rows from the scraped standings page.

        Rows without a team name or a conference record are dropped.
        """
        standings: List[TeamStanding] = []
        for original_index, cells in enumerate(rows):
            if len(cells) < MIN_SCRAPED_CELLS:
                continue

            classified = classify_cells(cells)
            if not classified.team_name or not classified.conference_record:
                logger.debug(f"Skipping scraped row without team/record: {list(cells)}")
                continue

            conf_wins, conf_losses = parse_record(classified.conference_record)
            if classified.overall_record:
                overall_wins, overall_losses = parse_record(classified.overall_record)
            else:
                overall_wins, overall_losses = conf_wins, conf_losses

            team = classified.team_name.upper()
            standings.append(
                TeamStanding(
                    team=team,
                    conference_record=classified.conference_record,
                    overall_record=classified.overall_record
                    or classified.conference_record,
                    poll_rank=_coerce_poll_rank(classified.poll_rank),
                    net_rank=classified.net_rank,
                    conference_wins=conf_wins,
                    conference_losses=conf_losses,
                    overall_wins=overall_wins,
                    overall_losses=overall_losses,
                    is_priority_entity=self._is_priority(team),
                    source_order=original_index,
                )
            )

        logger.info(f"Normalized {len(standings)} teams from {len(rows)} scraped rows.")
        return standings
