"""Pairing lookups shared by the group phase and the knockout stage.

Round robin groups play every unordered pairing once. Whether a pairing
has been played is read off the match list; there is no schedule record.
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

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from clubtennis.models.match import Match
from clubtennis.type_hints import GroupName, Pairing, PlayerName


@dataclass
class PairingStatus:
    """A fixed pairing together with its result, if any.

    Attributes
    ----------
    player1, player2 : str
        The two players, in pairing order.
    match : Match or None
        The completed match for the pairing, None while it is outstanding.
    """

    player1: PlayerName
    player2: PlayerName
    match: Optional[Match] = None

    @property
    def played(self) -> bool:
        return self.match is not None

    @property
    def winner(self) -> Optional[PlayerName]:
        return self.match.winner if self.match else None

    @property
    def pairing(self) -> Pairing:
        return (self.player1, self.player2)


def round_robin_pairings(players: Sequence[PlayerName]) -> List[Pairing]:
    """Every unordered pairing of the players, in roster order."""
    return [
        (players[i], players[j])
        for i in range(len(players))
        for j in range(i + 1, len(players))
    ]


def find_match(
    matches: Iterable[Match],
    player_a: PlayerName,
    player_b: PlayerName,
    phase: str,
    group: Optional[GroupName] = None,
) -> Optional[Match]:
    """Latest completed match between two players in a phase.

    Args:
        matches: All matches of the tournament
        player_a: One player, either order
        player_b: The other player
        phase: Phase to look in
        group: Restrict to one group label, None to ignore the label

    Returns:
        The match with the highest id, or None if the pairing is unplayed
    """
    found = [
        m
        for m in matches
        if m.phase == phase
        and m.is_completed
        and (group is None or m.group == group)
        and m.is_between(player_a, player_b)
    ]
    return max(found, key=lambda m: m.id) if found else None


def pairing_statuses(
    pairings: Iterable[Pairing],
    matches: Sequence[Match],
    phase: str,
    group: Optional[GroupName] = None,
) -> List[PairingStatus]:
    """Attach the recorded result, if any, to each pairing."""
    return [
        PairingStatus(p1, p2, find_match(matches, p1, p2, phase, group))
        for p1, p2 in pairings
    ]


def round_robin_statuses(
    players: Sequence[PlayerName],
    matches: Sequence[Match],
    phase: str,
    group: GroupName,
) -> List[PairingStatus]:
    """Status of every pairing of a round robin group."""
    return pairing_statuses(round_robin_pairings(players), matches, phase, group)


def progress(statuses: Sequence[PairingStatus]) -> Tuple[int, int]:
    """Played and total pairings."""
    return sum(1 for s in statuses if s.played), len(statuses)


def is_complete(statuses: Sequence[PairingStatus]) -> bool:
    """True once every pairing has a result; False for no pairings at all."""
    return bool(statuses) and all(s.played for s in statuses)
