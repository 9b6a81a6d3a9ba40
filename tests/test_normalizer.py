import pytest

from standings_board.models.standing import UNRANKED
from standings_board.normalization.normalizer import (
    MissingColumnsError,
    Normalizer,
    split_csv_text,
)

SHEET_CSV = """TEAM,CONF,OVR,WINS,LOSSES,RANK
Purdue,9–5,20-8,20,8,5
 wisconsin ,9-5,19-9,19,9,
Iowa,4-10,14-14,14,14,abc
,3-11,9-19,9,19,
Penn State,,,,,0

Minnesota,bad,10-18,10,18,30
"""


def test_split_csv_text_trims_headers():
    headers, rows = split_csv_text(" team , conf \nA,1-0\n")
    assert headers == ["team", "conf"]
    assert rows == [["A", "1-0"]]


def test_csv_rows_normalized():
    standings = Normalizer().normalize_csv_text(SHEET_CSV)
    teams = [s.team for s in standings]
    assert teams == ["PURDUE", "WISCONSIN", "IOWA", "PENN STATE", "MINNESOTA"]

    purdue = standings[0]
    assert purdue.conference_record == "9–5"
    assert (purdue.conference_wins, purdue.conference_losses) == (9, 5)
    assert (purdue.overall_wins, purdue.overall_losses) == (20, 8)
    assert purdue.overall_record == "20-8"
    assert purdue.poll_rank == 5
    assert purdue.source_order == 0
    assert not purdue.is_priority_entity


def test_csv_priority_team_flagged():
    standings = Normalizer().normalize_csv_text(SHEET_CSV)
    wisconsin = standings[1]
    assert wisconsin.team == "WISCONSIN"
    assert wisconsin.is_priority_entity
    assert wisconsin.poll_rank == UNRANKED


def test_csv_bad_cells_fall_back_to_defaults():
    by_team = {s.team: s for s in Normalizer().normalize_csv_text(SHEET_CSV)}

    assert by_team["IOWA"].poll_rank == UNRANKED
    penn = by_team["PENN STATE"]
    assert penn.poll_rank == UNRANKED  # 0 is not a ranking
    assert penn.conference_record == ""
    assert penn.conference_win_pct == -1
    assert penn.overall_win_pct == 0
    minnesota = by_team["MINNESOTA"]
    assert (minnesota.conference_wins, minnesota.conference_losses) == (0, 0)
    assert minnesota.overall_wins == 10
    assert minnesota.source_order == 6


def test_csv_overall_comes_from_helper_columns_not_ovr():
    csv_text = "TEAM,CONF,OVR,WINS,LOSSES\nOhio State,7-7,17-11,18,12\n"
    (ohio_state,) = Normalizer().normalize_csv_text(csv_text)
    assert ohio_state.overall_record == "17-11"
    assert (ohio_state.overall_wins, ohio_state.overall_losses) == (18, 12)


def test_csv_headers_case_insensitive_and_rank_optional():
    csv_text = "team,Conf,ovr,wins,Losses\nRutgers,3-11,11-17,11,17\n"
    (rutgers,) = Normalizer().normalize_csv_text(csv_text)
    assert rutgers.team == "RUTGERS"
    assert rutgers.poll_rank == UNRANKED


def test_csv_short_row_reads_missing_cells_as_empty():
    csv_text = "TEAM,CONF,OVR,WINS,LOSSES,RANK\nNebraska,5-9\n"
    (nebraska,) = Normalizer().normalize_csv_text(csv_text)
    assert nebraska.overall_record == ""
    assert nebraska.overall_wins == 0
    assert nebraska.poll_rank == UNRANKED


def test_csv_missing_wins_column_raises():
    csv_text = "TEAM,CONF,OVR,LOSSES\nPurdue,9-5,20-8,8\n"
    with pytest.raises(MissingColumnsError) as excinfo:
        Normalizer().normalize_csv_text(csv_text)
    assert excinfo.value.missing == ["WINS"]


def test_csv_empty_document_is_missing_columns():
    with pytest.raises(MissingColumnsError):
        Normalizer().normalize_csv_text("")


def test_priority_team_is_configurable():
    csv_text = "TEAM,CONF,OVR,WINS,LOSSES\nIowa,4-10,14-14,14,14\nWisconsin,9-5,19-9,19,9\n"
    iowa, wisconsin = Normalizer(priority_team="iowa").normalize_csv_text(csv_text)
    assert iowa.is_priority_entity
    assert not wisconsin.is_priority_entity


def test_scraped_rows_normalized():
    rows = [
        ["5 Purdue", "9-5", "20-8", "12"],
        ["Wisconsin", "9–5 is not a record", "8-6"],
        ["Michigan State", "10-4", "22-6", "45"],
        ["Iowa", "4-10", "88"],
        ["1", "9-5", "20-8", "45"],
        ["Penn St.", "2-12"],
    ]
    standings = Normalizer().normalize_scraped_rows(rows)
    assert [s.team for s in standings] == ["PURDUE", "WISCONSIN", "MICHIGAN STATE", "IOWA"]

    purdue, wisconsin, msu, iowa = standings
    assert purdue.poll_rank == 5
    assert purdue.net_rank is None
    assert (purdue.overall_wins, purdue.overall_losses) == (20, 8)

    assert wisconsin.is_priority_entity
    assert wisconsin.conference_record == "8-6"

    assert msu.net_rank == 45
    assert msu.source_order == 2

    # No overall record classified: falls back to the conference record
    assert iowa.overall_record == "4-10"
    assert (iowa.overall_wins, iowa.overall_losses) == (4, 10)
    assert iowa.net_rank == 88


def test_scraped_rank_zero_is_unranked():
    (team,) = Normalizer().normalize_scraped_rows([["0 Indiana", "7-7", "17-11"]])
    assert team.team == "INDIANA"
    assert team.poll_rank == UNRANKED
