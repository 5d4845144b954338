"""Single elimination bracket derived from the qualification list.

Quarterfinal pairings are fixed by where each player finished in the
group phase; later rounds pair the winners of the previous round. The
bracket is never stored: every call looks the results of each fixed
pairing up in the match list again.
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
    DEFAULT_QUALIFIER_COUNT,
    KNOCKOUT_PHASES,
    PHASE_FINAL,
    PHASE_QUARTERFINAL,
    PHASE_SEMIFINAL,
)
from clubtennis.controllers.tournament.round_manager import (
    PairingStatus,
    is_complete,
    pairing_statuses,
)
from clubtennis.models.match import Match
from clubtennis.models.standings import QualifiedPlayer
from clubtennis.type_hints import GroupName, Pairing, PlayerName
from clubtennis.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class BracketRound:
    """One round of the bracket.

    Attributes
    ----------
    phase : str
        "quarterfinal", "semifinal" or "final".
    pairings : list of PairingStatus
        Fixed pairings with their results. Empty while the round is
        pending, i.e. until every match of the previous round is played.
    """

    phase: str
    pairings: List[PairingStatus] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        return bool(self.pairings)

    @property
    def is_complete(self) -> bool:
        return is_complete(self.pairings)

    @property
    def winners(self) -> List[PlayerName]:
        """Winners in pairing order; empty unless the round is complete."""
        if not self.is_complete:
            return []
        return [p.winner for p in self.pairings]


@dataclass
class BracketState:
    """Quarterfinal to final, as far as results allow."""

    rounds: Dict[str, BracketRound]

    def round(self, phase: str) -> BracketRound:
        return self.rounds[phase]

    @property
    def champion(self) -> Optional[PlayerName]:
        final = self.rounds[PHASE_FINAL]
        return final.winners[0] if final.is_complete else None

    @property
    def open_phase(self) -> Optional[str]:
        """First round that is ready but not yet complete."""
        for phase in KNOCKOUT_PHASES:
            bracket_round = self.rounds[phase]
            if bracket_round.is_ready and not bracket_round.is_complete:
                return phase
        return None


def quarterfinal_pairings(
    qualified: Sequence[QualifiedPlayer],
    group_names: Sequence[GroupName],
    qualifier_count: int = DEFAULT_QUALIFIER_COUNT,
) -> List[Pairing]:
    """Cross-seeded quarterfinal pairings for three groups.

    With groups A, B, C: A1-B2, B1-C2, C1 against the best third, and the
    second best third against A2.

    Returns:
        Four pairings, or an empty list while qualification is incomplete
    """
    if len(qualified) < qualifier_count or len(group_names) != 3:
        return []

    def seed(group: GroupName, position: int) -> Optional[PlayerName]:
        for player in qualified:
            if player.group == group and player.position == position:
                return player.name
        return None

    first_a, first_b, first_c = (seed(g, 1) for g in group_names)
    second_a, second_b, second_c = (seed(g, 2) for g in group_names)
    thirds = [p.name for p in qualified if p.position == 3]
    if len(thirds) < 2:
        return []

    return [
        (first_a, second_b),
        (first_b, second_c),
        (first_c, thirds[0]),
        (thirds[1], second_a),
    ]


def _winner_pairings(previous: BracketRound) -> List[Pairing]:
    winners = previous.winners
    return [(winners[i], winners[i + 1]) for i in range(0, len(winners) - 1, 2)]


def resolve_bracket(
    qualified: Sequence[QualifiedPlayer],
    matches: Sequence[Match],
    group_names: Sequence[GroupName],
    qualifier_count: int = DEFAULT_QUALIFIER_COUNT,
) -> BracketState:
    """Derive the whole bracket from qualification and recorded matches.

    Args:
        qualified: Qualified players in seeding order
        matches: All matches of the tournament
        group_names: The three group phase groups, in roster order
        qualifier_count: Cohort size required before the bracket opens

    Returns:
        BracketState; rounds whose previous round is unfinished are pending
    """
    quarterfinals = BracketRound(
        PHASE_QUARTERFINAL,
        pairing_statuses(
            quarterfinal_pairings(qualified, group_names, qualifier_count),
            matches,
            PHASE_QUARTERFINAL,
        ),
    )
    semifinals = BracketRound(
        PHASE_SEMIFINAL,
        pairing_statuses(_winner_pairings(quarterfinals), matches, PHASE_SEMIFINAL),
    )
    final = BracketRound(
        PHASE_FINAL,
        pairing_statuses(_winner_pairings(semifinals), matches, PHASE_FINAL),
    )

    state = BracketState(
        rounds={
            PHASE_QUARTERFINAL: quarterfinals,
            PHASE_SEMIFINAL: semifinals,
            PHASE_FINAL: final,
        }
    )
    logger.debug(f"Bracket open phase: {state.open_phase}")
    return state
