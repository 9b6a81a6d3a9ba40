from typing import Callable, Optional

import httpx
import pytest

from standings_board.models.standing import TeamStanding, UNRANKED


def make_standing(
    team: str,
    conference: tuple = (0, 0),
    overall: tuple = (0, 0),
    poll_rank: int = UNRANKED,
    priority: Optional[bool] = None,
) -> TeamStanding:
    conf_wins, conf_losses = conference
    wins, losses = overall
    return TeamStanding(
        team=team,
        conference_record=f"{conf_wins}-{conf_losses}",
        overall_record=f"{wins}-{losses}",
        poll_rank=poll_rank,
        conference_wins=conf_wins,
        conference_losses=conf_losses,
        overall_wins=wins,
        overall_losses=losses,
        is_priority_entity=team.upper() == "WISCONSIN" if priority is None else priority,
    )


@pytest.fixture
def standing_factory() -> Callable[..., TeamStanding]:
    return make_standing


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def build(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return build


STANDINGS_HTML = """
<html>
<body>
  <table class="nav"><tr><td>Home</td><td>Schedule</td></tr></table>
  <table class="standings">
    <tr><th>Team</th><th>Conf</th><th>Overall</th><th>NET</th></tr>
    <tr><td><a href="/team/purdue">5 Purdue</a></td><td>9-5</td><td>20-8</td><td>12</td></tr>
    <tr><td>Michigan&nbsp;State</td><td>10-4</td><td>22-6</td><td>45</td></tr>
    <tr><td>Wisconsin</td><td>9-5</td><td>19-9</td><td>30</td></tr>
    <tr><th colspan="4">Bottom half</th></tr>
    <tr><td>Penn St.</td><td>2-12</td></tr>
    <tr><td>Iowa</td><td>4-10</td><td><span>14-14</span></td><td>88</td></tr>
    <tr><td>1</td><td>9-5</td><td>20-8</td><td>45</td></tr>
  </table>
</body>
</html>
"""


@pytest.fixture
def standings_html() -> str:
    return STANDINGS_HTML
