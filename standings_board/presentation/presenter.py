from typing import Any, Dict, List, Sequence

from standings_board.models.display import DisplayRow
from standings_board.models.standing import TeamStanding


def build_display_rows(ranked: Sequence[TeamStanding]) -> List[DisplayRow]:
    """Turns ranked standings into board rows, numbered from 1."""
    return [
        DisplayRow(
            position=index + 1,
            poll_rank_badge=standing.poll_rank if standing.is_ranked else None,
            team=standing.team,
            conference_record=standing.conference_record,
            overall_record=standing.overall_record,
            highlight=standing.is_priority_entity,
        )
        for index, standing in enumerate(ranked)
    ]


def to_json_payload(ranked: Sequence[TeamStanding]) -> List[Dict[str, Any]]:
    """JSON-ready dicts mirroring every TeamStanding field, in ranked order."""
    return [standing.model_dump(mode="json") for standing in ranked]
