import pytest

from clubtennis.exceptions import FileLoadException
from clubtennis.models.tournament import Tournament
from clubtennis.utils.tournament_io import load_tournament, save_tournament


def test_save_and_load_tournament(group_phase_played, tmp_path):
    path = save_tournament(group_phase_played, tmp_path / "club")

    assert path.suffix == ".json"
    loaded = load_tournament(path)

    assert loaded.name == group_phase_played.name
    assert loaded.config == group_phase_played.config
    assert loaded.matches == sorted(group_phase_played.matches, key=lambda m: m.id)
    assert [p.name for p in loaded.qualified] == [
        p.name for p in group_phase_played.qualified
    ]


def test_load_without_extension(group_phase_played, tmp_path):
    save_tournament(group_phase_played, tmp_path / "club")

    loaded = load_tournament(tmp_path / "club")
    assert loaded.matches == sorted(group_phase_played.matches, key=lambda m: m.id)
    assert load_tournament(str(tmp_path / "club")).name == group_phase_played.name


def test_loaded_tournament_continues_ids(group_phase_played, tmp_path, entry):
    path = save_tournament(group_phase_played, tmp_path / "club.json")
    loaded = load_tournament(path)

    match = loaded.record_match(
        entry("Henning", "Sascha", "6:4 6:4", phase="semifinal", group="A")
    )
    assert match.id == max(m.id for m in group_phase_played.matches) + 1


def test_missing_file(tmp_path):
    with pytest.raises(FileLoadException):
        load_tournament(tmp_path / "missing.json")


def test_malformed_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(FileLoadException):
        load_tournament(path)


def test_invalid_roster_in_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"config": {"groups": {"A": ["One", "Two"]}}}', encoding="utf-8")
    with pytest.raises(FileLoadException):
        load_tournament(path)


def test_empty_tournament_serializes(tournament):
    data = tournament.to_dict()
    assert data["matches"] == []
    assert Tournament.from_dict(data).config == tournament.config
