import re
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict

from standings_board.models.standing import UNRANKED

# Only the leading cells of a scraped row carry standings data.
MAX_SCANNED_CELLS = 8
POLL_RANK_MAX = 25
NET_RANK_MAX = 400

RECORD_CELL = re.compile(r"[0-9]+-[0-9]+")
INTEGER_CELL = re.compile(r"[0-9]+")
RANKED_NAME = re.compile(r"([0-9]+)\s+(.+)")
NUMBERED_PREFIX = re.compile(r"^[0-9]+\.\s*")
WHITESPACE_RUN = re.compile(r"\s+")


class ClassifiedRow(BaseModel):
    """Fields picked out of one scraped table row."""

    model_config = ConfigDict(frozen=True)

    team_name: str = ""
    conference_record: str = ""
    overall_record: str = ""
    poll_rank: int = UNRANKED
    net_rank: Optional[int] = None


def classify_cells(cells: Sequence[str]) -> ClassifiedRow:
    """Guess which scraped cells hold the team, records and rankings.

    Records look like "9-5" (first is conference, second overall). Bare
    integers of at most two characters up to 25 are poll ranks, larger ones up
    to 400 are NET ranks. The first other text longer than two characters is
    the team name, which may itself carry a leading poll rank ("5 Purdue").
    """
    team_name = ""
    conference_record = ""
    overall_record = ""
    poll_rank = UNRANKED
    poll_rank_seen = False
    net_rank: Optional[int] = None

    for cell in cells[:MAX_SCANNED_CELLS]:
        if not cell:
            continue

        if RECORD_CELL.fullmatch(cell):
            if not conference_record:
                conference_record = cell
            elif not overall_record:
                overall_record = cell
        elif INTEGER_CELL.fullmatch(cell):
            value = int(cell)
            if value <= POLL_RANK_MAX and len(cell) <= 2:
                if not poll_rank_seen:
                    poll_rank = value
                    poll_rank_seen = True
            elif 0 < value <= NET_RANK_MAX and net_rank is None:
                net_rank = value
        elif len(cell) > 2 and not team_name:
            team_name = cell

    rank_match = RANKED_NAME.fullmatch(team_name)
    if rank_match:
        poll_rank = int(rank_match.group(1))
        team_name = rank_match.group(2)

    team_name = NUMBERED_PREFIX.sub("", team_name)
    team_name = WHITESPACE_RUN.sub(" ", team_name).strip()

    return ClassifiedRow(
        team_name=team_name,
        conference_record=conference_record,
        overall_record=overall_record,
        poll_rank=poll_rank,
        net_rank=net_rank,
    )
