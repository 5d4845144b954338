"""Derived standings records."""

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
from typing import Any, Dict, Optional

from clubtennis.type_hints import GroupName, PlayerName


def _percentage(won: int, lost: int) -> float:
    total = won + lost
    return won / total * 100 if total > 0 else 0.0


@dataclass
class StandingRow:
    """One player's line in a group or knockout group table.

    Rows are rebuilt from the match list on every call and never updated
    in place by callers.

    Attributes
    ----------
    name : str
        Player name.
    matches : int
        Completed matches played in the table's phase.
    wins, losses : int
        Match wins and losses.
    sets_won, sets_lost : int
        Sets including the match tiebreak, which counts as one set.
    games_won, games_lost : int
        Games from the two regular sets.
    original_group, original_position : optional
        Where a knockout player qualified from; None in group tables.
    """

    name: PlayerName
    matches: int = 0
    wins: int = 0
    losses: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    games_won: int = 0
    games_lost: int = 0
    original_group: Optional[GroupName] = None
    original_position: Optional[int] = None

    @property
    def set_difference(self) -> int:
        return self.sets_won - self.sets_lost

    @property
    def game_difference(self) -> int:
        return self.games_won - self.games_lost

    @property
    def set_percentage(self) -> float:
        return _percentage(self.sets_won, self.sets_lost)

    @property
    def game_percentage(self) -> float:
        return _percentage(self.games_won, self.games_lost)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize row, derived metrics included."""
        data = {
            "name": self.name,
            "matches": self.matches,
            "wins": self.wins,
            "losses": self.losses,
            "sets_won": self.sets_won,
            "sets_lost": self.sets_lost,
            "games_won": self.games_won,
            "games_lost": self.games_lost,
            "set_difference": self.set_difference,
            "game_difference": self.game_difference,
            "set_percentage": self.set_percentage,
            "game_percentage": self.game_percentage,
        }
        if self.original_group is not None:
            data["original_group"] = self.original_group
            data["original_position"] = self.original_position
        return data


@dataclass
class QualifiedPlayer:
    """A player advancing from the group phase.

    Attributes
    ----------
    group : str
        Group the player qualified from.
    position : int
        Finishing position in that group (1, 2 or 3).
    standing : StandingRow
        The group table row the qualification was ranked on.
    """

    group: GroupName
    position: int
    standing: StandingRow

    @property
    def name(self) -> PlayerName:
        return self.standing.name

    @property
    def label(self) -> str:
        """Seed label such as ``A1`` (winner of group A)."""
        return f"{self.group}{self.position}"

    # Ranking metrics, so qualifiers sort with the same comparator as rows

    @property
    def wins(self) -> int:
        return self.standing.wins

    @property
    def set_difference(self) -> int:
        return self.standing.set_difference

    @property
    def set_percentage(self) -> float:
        return self.standing.set_percentage

    @property
    def game_difference(self) -> int:
        return self.standing.game_difference

    @property
    def game_percentage(self) -> float:
        return self.standing.game_percentage

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "group": self.group,
            "position": self.position,
            "wins": self.wins,
            "set_difference": self.set_difference,
            "set_percentage": self.set_percentage,
            "game_percentage": self.game_percentage,
        }
