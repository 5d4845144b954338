"""Standings calculation for round robin groups.

This module aggregates completed matches into group tables and ranks them
with the tournament's tie-break cascade.
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

import functools
from typing import Dict, Iterable, List, Optional, Sequence

from clubtennis.constants import PERCENTAGE_EPSILON, PHASE_GROUP, PHASE_SEMIFINAL
from clubtennis.models.match import Match
from clubtennis.models.standings import QualifiedPlayer, StandingRow
from clubtennis.type_hints import GroupName, PlayerName, Roster
from clubtennis.utils import setup_logger
from clubtennis.validation.score import tally_sets

logger = setup_logger(__name__)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def compare_rows(a, b) -> int:
    """Compare two table rows for ranking order.

    Cascade, each level used only when the previous one is level:
    wins, set difference, set percentage (equal within 0.1), game
    difference, game percentage.

    Works on anything exposing the ranking metrics, so it sorts both
    StandingRow and QualifiedPlayer objects.

    Returns:
        Negative if ``a`` ranks higher, positive if ``b`` does, 0 if level
    """
    if a.wins != b.wins:
        return b.wins - a.wins
    if a.set_difference != b.set_difference:
        return b.set_difference - a.set_difference
    if abs(a.set_percentage - b.set_percentage) > PERCENTAGE_EPSILON:
        return _sign(b.set_percentage - a.set_percentage)
    if a.game_difference != b.game_difference:
        return b.game_difference - a.game_difference
    return _sign(b.game_percentage - a.game_percentage)


def rank(rows: Iterable) -> List:
    """Sort rows best first; fully level rows keep their input order."""
    return sorted(rows, key=functools.cmp_to_key(compare_rows))


class StandingsCalculator:
    """Builds ranked tables from a flat match list.

    The same aggregation serves the group phase, the knockout round robin
    groups and the final round. Nothing is cached: every call starts from
    the match list it is given.
    """

    def build_table(
        self,
        players: Sequence[PlayerName],
        matches: Iterable[Match],
        seeds: Optional[Dict[PlayerName, QualifiedPlayer]] = None,
    ) -> List[StandingRow]:
        """Aggregate matches into a ranked table.

        Args:
            players: Players of the table, in roster order
            matches: Matches already filtered to the table's phase and group
            seeds: Qualification records, to tag knockout rows with their origin

        Returns:
            One row per player, best first, including players without matches
        """
        rows: Dict[PlayerName, StandingRow] = {}
        for name in players:
            seed = seeds.get(name) if seeds else None
            rows[name] = StandingRow(
                name=name,
                original_group=seed.group if seed else None,
                original_position=seed.position if seed else None,
            )

        for match in matches:
            row1 = rows.get(match.player1)
            row2 = rows.get(match.player2)
            if row1 is None or row2 is None:
                logger.debug(
                    f"Skipping match {match.id}: "
                    f"{match.player1} vs {match.player2} not in this table"
                )
                continue
            self._credit_match(match, row1, row2)

        return rank(rows.values())

    def _credit_match(self, match: Match, row1: StandingRow, row2: StandingRow) -> None:
        row1.matches += 1
        row2.matches += 1

        for score in match.played_sets:
            row1.games_won += score.player1
            row1.games_lost += score.player2
            row2.games_won += score.player2
            row2.games_lost += score.player1

        # The match tiebreak counts as a set, its points are not games
        player1_sets, player2_sets = tally_sets(
            (match.set1, match.set2, match.tiebreak)
        )
        row1.sets_won += player1_sets
        row1.sets_lost += player2_sets
        row2.sets_won += player2_sets
        row2.sets_lost += player1_sets

        if match.winner == match.player1:
            row1.wins += 1
            row2.losses += 1
        elif match.winner == match.player2:
            row2.wins += 1
            row1.losses += 1

    def group_table(
        self, group_name: GroupName, matches: Iterable[Match], roster: Roster
    ) -> List[StandingRow]:
        """Ranked table of a group phase group.

        Args:
            group_name: Group to rank
            matches: All matches of the tournament
            roster: Group name to player names

        Returns:
            Ranked rows, empty for an unknown group
        """
        players = roster.get(group_name)
        if not players:
            return []
        group_matches = [
            m
            for m in matches
            if m.phase == PHASE_GROUP and m.group == group_name and m.is_completed
        ]
        return self.build_table(players, group_matches)

    def knockout_group_table(
        self,
        group_name: GroupName,
        players: Sequence[QualifiedPlayer],
        matches: Iterable[Match],
        phase: str = PHASE_SEMIFINAL,
    ) -> List[StandingRow]:
        """Ranked table of a knockout round robin group.

        Args:
            group_name: Knockout group label
            players: Qualified players allocated to the group
            matches: All matches of the tournament
            phase: Phase the group's matches are recorded under

        Returns:
            Ranked rows tagged with each player's origin, empty without players
        """
        if not players:
            return []
        knockout_matches = [
            m
            for m in matches
            if m.phase == phase and m.group == group_name and m.is_completed
        ]
        seeds = {p.name: p for p in players}
        return self.build_table([p.name for p in players], knockout_matches, seeds)


_calculator = StandingsCalculator()


def calculate_group_table(
    group_name: GroupName, matches: Iterable[Match], roster: Roster
) -> List[StandingRow]:
    """Module level shortcut for StandingsCalculator.group_table."""
    return _calculator.group_table(group_name, matches, roster)

