from datetime import datetime, timezone

from clubtennis.models.match import Match, SetScore


def _build_match(**changes):
    values = dict(
        id=1000,
        phase="group",
        group="A",
        player1="Henning",
        player2="Julia",
        set1=SetScore(6, 4),
        set2=SetScore(3, 6),
        tiebreak=SetScore(10, 8),
        winner="Henning",
        timestamp=datetime(2025, 6, 14, 10, 30, tzinfo=timezone.utc),
    )
    values.update(changes)
    return Match(**values)


def test_set_score_optional_normalises_unplayed_sets():
    assert SetScore.optional(None, None) is None
    assert SetScore.optional(0, 0) is None
    assert SetScore.optional(6, None) == SetScore(6, 0)
    assert SetScore(7, 6).winner_side == 1
    assert SetScore(4, 6).winner_side == 2
    assert SetScore(5, 5).winner_side is None


def test_match_helpers():
    match = _build_match()
    assert match.is_between("Julia", "Henning")
    assert not match.is_between("Julia", "Fabi")
    assert match.score_line() == "6:4 3:6 TB 10:8"
    assert match.played_sets == [SetScore(6, 4), SetScore(3, 6)]


def test_dict_roundtrip_keeps_everything():
    match = _build_match()
    assert Match.from_dict(match.to_dict()) == match


def test_dict_without_tiebreak_omits_it():
    data = _build_match(set2=SetScore(6, 3), tiebreak=None).to_dict()
    assert "tiebreak" not in data
    assert Match.from_dict(data).tiebreak is None


def test_from_dict_accepts_knockout_group_alias():
    data = _build_match(phase="semifinal", group=None).to_dict()
    data["koGroup"] = "B"
    data["timestamp"] = "2025-06-14T10:30:00Z"

    match = Match.from_dict(data)
    assert match.group == "B"
    assert match.timestamp == datetime(2025, 6, 14, 10, 30, tzinfo=timezone.utc)


def test_record_uses_store_columns():
    record = _build_match(set2=SetScore(6, 3), tiebreak=None).to_record()

    assert record["ID"] == 1000
    assert record["Gruppe"] == "A"
    assert record["Spieler1"] == "Henning"
    assert (record["Satz1_Spieler1"], record["Satz1_Spieler2"]) == (6, 4)
    assert (record["Satz2_Spieler1"], record["Satz2_Spieler2"]) == (6, 3)
    # No tiebreak is stored as 0:0
    assert (record["Tiebreak_Spieler1"], record["Tiebreak_Spieler2"]) == (0, 0)
    assert record["Sieger"] == "Henning"
    assert record["Status"] == "completed"


def test_from_record_maps_zero_tiebreak_to_absent():
    record = {
        "ID": 1042,
        "Gruppe": "C",
        "Phase": "group",
        "Spieler1": "Sven",
        "Spieler2": "Jose",
        "Satz1_Spieler1": 7,
        "Satz1_Spieler2": 5,
        "Satz2_Spieler1": 6,
        "Satz2_Spieler2": 1,
        "Tiebreak_Spieler1": 0,
        "Tiebreak_Spieler2": 0,
        "Sieger": "Sven",
        "Status": "completed",
        "Zeitstempel": "2025-06-20T18:05:00+00:00",
    }
    match = Match.from_record(record)

    assert match.id == 1042
    assert match.tiebreak is None
    assert match.set1 == SetScore(7, 5)
    assert match.winner == "Sven"
    assert match.timestamp.year == 2025
