import pytest

from clubtennis.constants import PHASE_GROUP, PHASE_SEMIFINAL
from clubtennis.controllers.tournament import round_robin_pairings
from clubtennis.models.match import MatchEntry
from clubtennis.models.tournament import Tournament
from clubtennis.models.tournament_config import KnockoutFormat, TournamentConfig

# Third against fourth decides the order of the third placed players:
# A's third wins without dropping a game, C's third needs a match tiebreak.
THIRD_VS_FOURTH = {
    "A": "6:0 6:0",
    "B": "6:3 6:3",
    "C": "7:6 3:6 10:8",
}


def _entry(player1, player2, score, phase=PHASE_GROUP, group=None):
    fields = {"phase": phase, "group": group, "player1": player1, "player2": player2}
    for key, token in zip(["set1", "set2", "tiebreak"], score.split()):
        games1, games2 = token.split(":")
        fields[f"{key}_player1"] = int(games1)
        fields[f"{key}_player2"] = int(games2)
    return MatchEntry.from_fields(fields)


def _play_round_robin(tournament, players, phase, group, scores=None):
    """Earlier listed players beat later listed ones."""
    for player1, player2 in round_robin_pairings(players):
        score = (scores or {}).get((player1, player2), "6:4 6:4")
        tournament.record_match(_entry(player1, player2, score, phase, group))


def _play_group_phase(tournament):
    for group_name, players in tournament.config.groups.items():
        scores = {(players[2], players[3]): THIRD_VS_FOURTH[group_name]}
        _play_round_robin(tournament, players, PHASE_GROUP, group_name, scores)


@pytest.fixture
def entry():
    return _entry


@pytest.fixture
def tournament():
    return Tournament(TournamentConfig())


@pytest.fixture
def bracket_tournament():
    return Tournament(
        TournamentConfig(knockout_format=KnockoutFormat.SINGLE_ELIMINATION)
    )


@pytest.fixture
def group_phase_played(tournament):
    _play_group_phase(tournament)
    return tournament


@pytest.fixture
def bracket_group_phase_played(bracket_tournament):
    _play_group_phase(bracket_tournament)
    return bracket_tournament


@pytest.fixture
def knockout_groups_played(group_phase_played):
    for label, players in group_phase_played.knockout_groups.items():
        names = [p.name for p in players]
        _play_round_robin(group_phase_played, names, PHASE_SEMIFINAL, label)
    return group_phase_played
