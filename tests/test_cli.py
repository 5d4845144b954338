import pytest

from clubtennis.cli import main, parse_score_tokens
from clubtennis.exceptions import InvalidResultException
from clubtennis.utils.tournament_io import load_tournament


def _init(tmp_path, *extra):
    path = tmp_path / "tournament.json"
    assert main(["--file", str(path), "init", *extra]) == 0
    return path


def test_parse_score_tokens():
    assert parse_score_tokens(["6:4", "3-6", "10:8"]) == {
        "set1_player1": 6,
        "set1_player2": 4,
        "set2_player1": 3,
        "set2_player2": 6,
        "tiebreak_player1": 10,
        "tiebreak_player2": 8,
    }
    with pytest.raises(InvalidResultException):
        parse_score_tokens(["six-four"])
    with pytest.raises(InvalidResultException):
        parse_score_tokens(["6:4", "6:4", "6:4", "6:4"])


def test_init_refuses_to_overwrite(tmp_path, capsys):
    path = _init(tmp_path, "--format", "single_elimination")
    assert main(["--file", str(path), "init"]) == 1
    assert "exists" in capsys.readouterr().out
    assert load_tournament(path).config.knockout_format.value == "single_elimination"


def test_record_and_delete(tmp_path, capsys):
    path = _init(tmp_path)

    # Group is looked up from the first player
    assert main(["--file", str(path), "record", "Henning", "Julia", "6:4", "6:3"]) == 0
    tournament = load_tournament(path)
    assert len(tournament.matches) == 1
    assert tournament.matches[0].group == "A"

    assert main(["--file", str(path), "delete", "1000"]) == 0
    assert load_tournament(path).matches == []
    assert main(["--file", str(path), "delete", "1000"]) == 1


def test_rejected_result_prints_errors(tmp_path, capsys):
    path = _init(tmp_path)
    capsys.readouterr()

    assert main(["--file", str(path), "record", "Henning", "Julia", "6:4", "3:6"]) == 1
    out = capsys.readouterr().out
    assert "Result rejected" in out
    assert "match tiebreak is required" in out
    assert load_tournament(path).matches == []


def test_standings_output(tmp_path, capsys):
    path = _init(tmp_path)
    main(["--file", str(path), "record", "Markus", "Bernd", "6:1", "6:1"])
    capsys.readouterr()

    assert main(["--file", str(path), "standings", "--group", "B"]) == 0
    out = capsys.readouterr().out
    assert "Group B (1/6 played)" in out
    assert "Markus" in out


def test_views_match_format(tmp_path):
    path = _init(tmp_path)
    assert main(["--file", str(path), "qualify"]) == 0
    assert main(["--file", str(path), "knockout"]) == 0
    assert main(["--file", str(path), "bracket"]) == 1
    assert main(["--file", str(path), "pairings", "--group", "C"]) == 0


def test_missing_file_is_reported(tmp_path, capsys):
    assert main(["--file", str(tmp_path / "none.json"), "standings"]) == 1
    assert "Could not load" in capsys.readouterr().out


def test_file_name_without_extension(tmp_path, capsys):
    path = tmp_path / "club"
    assert main(["--file", str(path), "init"]) == 0
    assert (tmp_path / "club.json").exists()

    assert main(["--file", str(path), "record", "Henning", "Julia", "6:4", "6:3"]) == 0
    assert len(load_tournament(path).matches) == 1

    # The existing club.json is not overwritten
    assert main(["--file", str(path), "init"]) == 1
    assert len(load_tournament(tmp_path / "club.json").matches) == 1
