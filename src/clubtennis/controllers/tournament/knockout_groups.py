"""Knockout stage played as round robin groups.

The qualified cohort is dealt into knockout groups, each group plays a
round robin under the ``semifinal`` phase, and the top two of every group
meet in a final round robin under the ``final`` phase.
"""

# Club Tennis
# Copyright (C) 2025  Club Tennis developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from clubtennis.constants import (
    DEFAULT_KNOCKOUT_GROUPS,
    DEFAULT_QUALIFIER_COUNT,
    FINALISTS_PER_KNOCKOUT_GROUP,
    PHASE_FINAL,
    PHASE_SEMIFINAL,
)
from clubtennis.controllers.tournament.round_manager import (
    PairingStatus,
    is_complete,
    pairing_statuses,
    round_robin_pairings,
    round_robin_statuses,
)
from clubtennis.controllers.tournament.standings_calculator import (
    StandingsCalculator,
)
from clubtennis.models.match import Match
from clubtennis.models.standings import QualifiedPlayer, StandingRow
from clubtennis.type_hints import GroupName, PlayerName
from clubtennis.utils import setup_logger

logger = setup_logger(__name__)


def allocate_knockout_groups(
    qualified: Sequence[QualifiedPlayer],
    group_labels: Sequence[GroupName] = tuple(DEFAULT_KNOCKOUT_GROUPS),
    qualifier_count: int = DEFAULT_QUALIFIER_COUNT,
) -> Dict[GroupName, List[QualifiedPlayer]]:
    """Deal the qualified cohort into knockout groups.

    Players are dealt in seeding order, one per group in turn. With two
    groups and eight qualifiers this puts the group winners A, B, A, the
    runners-up B, A, B and the two best thirds A, B, so the best winner
    and the best runner-up start in different groups.

    Args:
        qualified: Qualified players in seeding order
        group_labels: Knockout group labels
        qualifier_count: Cohort size required before groups are formed

    Returns:
        Label to players; every list is empty until the cohort is complete
    """
    allocation: Dict[GroupName, List[QualifiedPlayer]] = {
        label: [] for label in group_labels
    }
    if len(qualified) < qualifier_count or not group_labels:
        return allocation

    for index, player in enumerate(qualified[:qualifier_count]):
        allocation[group_labels[index % len(group_labels)]].append(player)
    return allocation


@dataclass
class KnockoutGroupState:
    """Table and fixtures of one knockout round robin group."""

    label: GroupName
    players: List[QualifiedPlayer]
    table: List[StandingRow] = field(default_factory=list)
    pairings: List[PairingStatus] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return is_complete(self.pairings)

    @property
    def played(self) -> int:
        return sum(1 for p in self.pairings if p.played)


def knockout_group_states(
    allocation: Dict[GroupName, List[QualifiedPlayer]],
    matches: Sequence[Match],
    calculator: Optional[StandingsCalculator] = None,
) -> List[KnockoutGroupState]:
    """Build table and fixture state for every knockout group."""
    calculator = calculator or StandingsCalculator()
    states = []
    for label, players in allocation.items():
        names = [p.name for p in players]
        states.append(
            KnockoutGroupState(
                label=label,
                players=list(players),
                table=calculator.knockout_group_table(label, players, matches),
                pairings=round_robin_statuses(names, matches, PHASE_SEMIFINAL, label),
            )
        )
    return states


def knockout_finalists(
    states: Sequence[KnockoutGroupState],
) -> List[StandingRow]:
    """Top two of every knockout group, in group order.

    Returns:
        Finalist rows (A1, A2, B1, B2 for two groups); empty until every
        knockout group has played all of its pairings
    """
    if not states or not all(s.is_complete for s in states):
        return []
    finalists: List[StandingRow] = []
    for state in states:
        finalists.extend(state.table[:FINALISTS_PER_KNOCKOUT_GROUP])
    return finalists


@dataclass
class FinalRoundState:
    """Round robin among the finalists."""

    finalists: List[PlayerName]
    table: List[StandingRow] = field(default_factory=list)
    pairings: List[PairingStatus] = field(default_factory=list)

    @property
    def champion(self) -> Optional[PlayerName]:
        """Winner of the final round, None until all its matches are played."""
        if not is_complete(self.pairings):
            return None
        return self.table[0].name


def final_round_state(
    finalists: Sequence[StandingRow],
    matches: Sequence[Match],
    calculator: Optional[StandingsCalculator] = None,
) -> FinalRoundState:
    """Table and fixtures of the final round; empty while finalists are pending."""
    names = [row.name for row in finalists]
    if not names:
        return FinalRoundState(finalists=[])

    calculator = calculator or StandingsCalculator()
    final_matches = [
        m
        for m in matches
        if m.phase == PHASE_FINAL
        and m.is_completed
        and m.player1 in names
        and m.player2 in names
    ]
    return FinalRoundState(
        finalists=names,
        table=calculator.build_table(names, final_matches),
        pairings=pairing_statuses(
            round_robin_pairings(names), matches, PHASE_FINAL
        ),
    )
