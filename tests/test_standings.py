from clubtennis.constants import DEFAULT_GROUPS
from clubtennis.controllers.tournament import (
    StandingsCalculator,
    calculate_group_table,
    compare_rows,
    rank,
)
from clubtennis.models.match import Match, SetScore
from clubtennis.models.standings import QualifiedPlayer, StandingRow
from clubtennis.validation.score import tally_sets


def _build_match(match_id, player1, player2, sets, phase="group", group="A"):
    scores = [SetScore(*s) for s in sets]
    set1, set2 = scores[0], scores[1] if len(scores) > 1 else None
    tiebreak = scores[2] if len(scores) > 2 else None
    won1, won2 = tally_sets(scores)
    return Match(
        id=match_id,
        phase=phase,
        group=group,
        player1=player1,
        player2=player2,
        set1=set1,
        set2=set2,
        tiebreak=tiebreak,
        winner=player1 if won1 > won2 else player2,
    )


def _build_group_a_matches():
    return [
        _build_match(1000, "Henning", "Julia", [(6, 4), (6, 4)]),
        _build_match(1001, "Henning", "Fabi", [(6, 2), (6, 2)]),
        _build_match(1002, "Julia", "Fabi", [(6, 4), (3, 6), (10, 8)]),
    ]


def test_group_table_aggregates_matches():
    table = calculate_group_table("A", _build_group_a_matches(), DEFAULT_GROUPS)
    rows = {row.name: row for row in table}

    assert len(table) == 4
    assert (rows["Henning"].wins, rows["Henning"].losses) == (2, 0)
    assert (rows["Henning"].sets_won, rows["Henning"].sets_lost) == (4, 0)
    assert (rows["Henning"].games_won, rows["Henning"].games_lost) == (24, 12)

    # The match tiebreak is a set, its points are not games
    julia = rows["Julia"]
    assert (julia.matches, julia.wins, julia.losses) == (2, 1, 1)
    assert (julia.sets_won, julia.sets_lost) == (2, 3)
    assert (julia.games_won, julia.games_lost) == (17, 22)

    assert rows["Michael"].matches == 0


def test_group_table_order_follows_cascade():
    table = calculate_group_table("A", _build_group_a_matches(), DEFAULT_GROUPS)
    # Michael has not played: set difference 0 ranks above Fabi's -3
    assert [row.name for row in table] == ["Henning", "Julia", "Michael", "Fabi"]


def test_group_table_ignores_other_groups_and_phases():
    matches = _build_group_a_matches() + [
        _build_match(1003, "Markus", "Thomas", [(6, 0), (6, 0)], group="B"),
        _build_match(
            1004, "Fabi", "Michael", [(6, 0), (6, 0)], phase="semifinal", group="A"
        ),
    ]
    table = calculate_group_table("A", matches, DEFAULT_GROUPS)
    rows = {row.name: row for row in table}
    assert rows["Fabi"].wins == 0
    assert rows["Michael"].matches == 0


def test_unknown_group_gives_empty_table():
    assert calculate_group_table("Z", _build_group_a_matches(), DEFAULT_GROUPS) == []


def test_table_calculation_is_pure():
    matches = _build_group_a_matches()
    snapshot = [m.to_dict() for m in matches]

    first = calculate_group_table("A", matches, DEFAULT_GROUPS)
    second = calculate_group_table("A", matches, DEFAULT_GROUPS)

    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]
    assert [m.to_dict() for m in matches] == snapshot


def test_wins_rank_first():
    better = StandingRow("a", wins=2, sets_won=4, sets_lost=3)
    worse = StandingRow("b", wins=1, sets_won=6, sets_lost=0)
    assert rank([worse, better]) == [better, worse]


def test_set_difference_breaks_equal_wins():
    better = StandingRow("a", wins=1, sets_won=3, sets_lost=1)
    worse = StandingRow("b", wins=1, sets_won=2, sets_lost=2)
    assert compare_rows(better, worse) < 0
    assert compare_rows(worse, better) > 0


def test_set_difference_outranks_set_percentage():
    # +3 at 60% against +1 at 66.7%
    more_sets = StandingRow("a", wins=1, sets_won=9, sets_lost=6)
    higher_percentage = StandingRow("b", wins=1, sets_won=2, sets_lost=1)
    assert higher_percentage.set_percentage > more_sets.set_percentage
    assert rank([higher_percentage, more_sets]) == [more_sets, higher_percentage]


def test_set_percentage_breaks_equal_set_difference():
    # Both +2, 75% against 66.7%
    better = StandingRow("a", wins=1, sets_won=3, sets_lost=1)
    worse = StandingRow("b", wins=1, sets_won=4, sets_lost=2, games_won=50)
    assert rank([worse, better]) == [better, worse]


def test_near_equal_set_percentages_fall_through_to_games():
    # Both about 50.05%: within 0.1, so game difference decides
    higher_percentage = StandingRow("a", wins=1, sets_won=1000, sets_lost=998)
    more_games = StandingRow(
        "b", wins=1, sets_won=1001, sets_lost=999, games_won=20, games_lost=10
    )
    assert rank([higher_percentage, more_games]) == [more_games, higher_percentage]


def test_game_percentage_is_the_last_criterion():
    better = StandingRow("a", wins=1, games_won=20, games_lost=10)
    worse = StandingRow("b", wins=1, games_won=30, games_lost=20)
    assert rank([worse, better]) == [better, worse]


def test_fully_level_rows_keep_input_order():
    first = StandingRow("a", wins=1, sets_won=2, games_won=12, games_lost=6)
    second = StandingRow("b", wins=1, sets_won=2, games_won=12, games_lost=6)
    assert compare_rows(first, second) == 0
    assert rank([first, second]) == [first, second]
    assert rank([second, first]) == [second, first]


def test_percentages_without_sets_are_zero():
    row = StandingRow("a")
    assert row.set_percentage == 0.0
    assert row.game_percentage == 0.0


def test_knockout_group_table_tags_origin():
    seeds = [
        QualifiedPlayer("A", 1, StandingRow("Henning")),
        QualifiedPlayer("C", 2, StandingRow("Herbert")),
    ]
    matches = [
        _build_match(
            1010, "Herbert", "Henning", [(7, 5), (6, 4)], phase="semifinal", group="A"
        ),
        _build_match(
            1011, "Herbert", "Henning", [(6, 0), (6, 0)], phase="semifinal", group="B"
        ),
    ]
    table = StandingsCalculator().knockout_group_table("A", seeds, matches)

    assert [row.name for row in table] == ["Herbert", "Henning"]
    assert (table[0].original_group, table[0].original_position) == ("C", 2)
    assert table[0].games_won == 13
    assert table[1].to_dict()["original_group"] == "A"
