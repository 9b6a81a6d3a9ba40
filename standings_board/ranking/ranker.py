from typing import Iterable, List, Tuple

from loguru import logger

from standings_board.models.standing import TeamStanding

SortKey = Tuple[float, int, float, int, bool, Tuple[int, int], str]


def standing_sort_key(standing: TeamStanding) -> SortKey:
    """Sort key for the standings cascade; smaller keys sort earlier.

    Tiers, in order: conference win pct, conference wins, overall win pct,
    overall wins (all descending), priority team first, poll-ranked teams
    before unranked ones with the better rank first, then team name.
    """
    poll_tier = (0, standing.poll_rank) if standing.is_ranked else (1, 0)
    return (
        -standing.conference_win_pct,
        -standing.conference_wins,
        -standing.overall_win_pct,
        -standing.overall_wins,
        not standing.is_priority_entity,
        poll_tier,
        standing.team,
    )


def compare_standings(a: TeamStanding, b: TeamStanding) -> int:
    """Three-way comparison matching ``standing_sort_key``."""
    key_a, key_b = standing_sort_key(a), standing_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


class StandingsRanker:
    """Orders teams for display; position in the result is the board rank."""

    def rank(self, standings: Iterable[TeamStanding]) -> List[TeamStanding]:
        ranked = sorted(standings, key=standing_sort_key)
        if ranked:
            logger.debug(f"Ranked {len(ranked)} teams, leader: {ranked[0].team}")
        return ranked
