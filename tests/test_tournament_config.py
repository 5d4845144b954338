import pytest

from clubtennis.constants import DEFAULT_GROUPS
from clubtennis.exceptions import InvalidConfigurationException
from clubtennis.models.tournament import Tournament
from clubtennis.models.tournament_config import KnockoutFormat, TournamentConfig


def _build_groups(**changes):
    groups = {g: list(p) for g, p in DEFAULT_GROUPS.items()}
    groups.update(changes)
    return groups


def test_default_config_is_valid():
    config = TournamentConfig()
    config.validate()

    assert config.group_names == ["A", "B", "C"]
    assert len(config.players) == 12
    assert config.thirds_to_qualify == 2
    assert config.group_of("Sven") == "C"
    assert config.group_of("Nobody") is None


def test_group_size_is_enforced():
    config = TournamentConfig(groups=_build_groups(C=["Sascha", "Herbert", "Sven"]))
    with pytest.raises(InvalidConfigurationException, match="Group C has 3 players"):
        config.validate()


def test_player_names_must_be_unique():
    config = TournamentConfig(
        groups=_build_groups(C=["Sascha", "Herbert", "Sven", "Julia"])
    )
    with pytest.raises(InvalidConfigurationException, match="Julia"):
        config.validate()


def test_qualifier_count_must_fit_groups():
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(qualifier_count=10).validate()
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(qualifier_count=5).validate()


def test_knockout_groups_need_even_split():
    with pytest.raises(InvalidConfigurationException, match="split evenly"):
        TournamentConfig(qualifier_count=7).validate()


def test_single_elimination_needs_three_groups():
    groups = _build_groups()
    del groups["C"]
    config = TournamentConfig(
        groups=groups,
        qualifier_count=4,
        knockout_format=KnockoutFormat.SINGLE_ELIMINATION,
    )
    with pytest.raises(InvalidConfigurationException):
        config.validate()


def test_tournament_validates_its_config():
    with pytest.raises(InvalidConfigurationException):
        Tournament(TournamentConfig(groups={}))


def test_config_dict_roundtrip():
    config = TournamentConfig(
        name="Summer Cup",
        knockout_format=KnockoutFormat.SINGLE_ELIMINATION,
        allow_single_set_win=False,
    )
    restored = TournamentConfig.from_dict(config.to_dict())

    assert restored == config
    assert config.to_dict()["knockout_format"] == "single_elimination"


def test_unknown_knockout_format_is_rejected():
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig.from_dict({"knockout_format": "swiss"})
