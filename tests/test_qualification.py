from clubtennis.constants import DEFAULT_GROUPS, PHASE_GROUP
from clubtennis.controllers.tournament import (
    allocate_knockout_groups,
    group_finishers,
    is_qualification_complete,
    round_robin_pairings,
    select_qualifiers,
)


def _build_partial_tournament(tournament, entry, groups):
    for group_name in groups:
        players = DEFAULT_GROUPS[group_name]
        for player1, player2 in round_robin_pairings(players):
            tournament.record_match(entry(player1, player2, "6:4 6:4", group=group_name))
    return tournament


def test_full_cohort_in_seeding_order(group_phase_played):
    qualified = group_phase_played.qualified

    assert len(qualified) == 8
    assert [p.label for p in qualified] == [
        "A1", "B1", "C1", "A2", "B2", "C2", "A3", "B3"
    ]
    assert [p.name for p in qualified] == [
        "Henning", "Markus", "Sascha", "Julia", "Thomas", "Herbert", "Fabi", "Gunter"
    ]
    assert group_phase_played.qualification_complete


def test_best_thirds_ranked_by_cascade(group_phase_played):
    finishers = [
        group_finishers(g, group_phase_played.matches, DEFAULT_GROUPS)[2]
        for g in DEFAULT_GROUPS
    ]
    fabi, gunter, sven = finishers
    # Level on wins and set percentage, game difference splits A and B
    assert (fabi.set_difference, gunter.set_difference) == (-2, -2)
    assert fabi.game_difference > gunter.game_difference
    # C's third lost a set more in the tiebreak match
    assert sven.set_difference == -3

    names = [p.name for p in group_phase_played.qualified]
    assert "Sven" not in names


def test_no_matches_no_qualifiers(tournament):
    assert select_qualifiers(tournament.matches, DEFAULT_GROUPS) == []
    assert not tournament.qualification_complete


def test_incomplete_groups_give_partial_list(tournament, entry):
    _build_partial_tournament(tournament, entry, ["A"])
    qualified = tournament.qualified
    assert [p.label for p in qualified] == ["A1", "A2"]


def test_thirds_wait_for_every_group(tournament, entry):
    _build_partial_tournament(tournament, entry, ["A", "B"])
    tournament.record_match(entry("Sascha", "Herbert", "6:1 6:1", group="C"))

    qualified = tournament.qualified
    assert len(qualified) == 6
    assert all(p.position < 3 for p in qualified)
    assert not tournament.qualification_complete


def test_players_without_matches_are_not_ranked(tournament, entry):
    tournament.record_match(entry("Henning", "Julia", "6:1 6:1", group="A"))
    finishers = group_finishers("A", tournament.matches, DEFAULT_GROUPS)
    assert [f.name for f in finishers] == ["Henning", "Julia"]


def test_qualification_only_uses_group_matches(group_phase_played):
    matches = [m for m in group_phase_played.matches if m.phase == PHASE_GROUP]
    assert len(matches) == 18
    assert len(select_qualifiers(matches, DEFAULT_GROUPS)) == 8
    assert is_qualification_complete(select_qualifiers(matches, DEFAULT_GROUPS))


def test_allocation_deals_seeds_across_groups(group_phase_played):
    allocation = allocate_knockout_groups(group_phase_played.qualified)

    assert [p.label for p in allocation["A"]] == ["A1", "C1", "B2", "A3"]
    assert [p.label for p in allocation["B"]] == ["B1", "A2", "C2", "B3"]
    # Best group winner and best runner-up start apart
    assert allocation["A"][0].name == "Henning"
    assert allocation["B"][1].name == "Julia"


def test_allocation_waits_for_full_cohort(tournament, entry):
    _build_partial_tournament(tournament, entry, ["A", "B"])
    allocation = allocate_knockout_groups(tournament.qualified)
    assert allocation == {"A": [], "B": []}
