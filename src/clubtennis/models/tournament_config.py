"""TournamentConfig data class."""

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
from enum import Enum
from typing import Any, Dict, List, Optional

from clubtennis.constants import (
    DEFAULT_GROUPS,
    DEFAULT_KNOCKOUT_GROUPS,
    DEFAULT_QUALIFIER_COUNT,
    DEFAULT_TOURNAMENT_NAME,
    PLAYERS_PER_GROUP,
)
from clubtennis.exceptions import InvalidConfigurationException
from clubtennis.type_hints import GroupName, PlayerName, Roster


class KnockoutFormat(str, Enum):
    """How the qualified players play out the title."""

    # Two round robin groups of four, top two of each reach the final round
    ROUND_ROBIN_GROUPS = "round_robin_groups"
    # Quarterfinal, semifinal and final, seeded from the group results
    SINGLE_ELIMINATION = "single_elimination"


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    groups : dict of str to list of str
        Ordered roster, group name to its four players. Fixed at setup.
    knockout_format : KnockoutFormat
        Format of the stage after the group phase.
    knockout_groups : list of str
        Labels of the knockout round robin groups.
    qualifier_count : int
        Size of the qualified cohort: every group winner and runner-up plus
        the best third placed players.
    allow_single_set_win : bool
        Accept a result where only one set was entered and won.
    """

    name: str = DEFAULT_TOURNAMENT_NAME
    groups: Roster = field(
        default_factory=lambda: {g: list(p) for g, p in DEFAULT_GROUPS.items()}
    )
    knockout_format: KnockoutFormat = KnockoutFormat.ROUND_ROBIN_GROUPS
    knockout_groups: List[GroupName] = field(
        default_factory=lambda: list(DEFAULT_KNOCKOUT_GROUPS)
    )
    qualifier_count: int = DEFAULT_QUALIFIER_COUNT
    allow_single_set_win: bool = True

    @property
    def group_names(self) -> List[GroupName]:
        return list(self.groups)

    @property
    def players(self) -> List[PlayerName]:
        return [p for group in self.groups.values() for p in group]

    @property
    def thirds_to_qualify(self) -> int:
        """How many third placed players join the winners and runners-up."""
        return self.qualifier_count - 2 * len(self.groups)

    def group_of(self, player: PlayerName) -> Optional[GroupName]:
        for group_name, players in self.groups.items():
            if player in players:
                return group_name
        return None

    def validate(self) -> None:
        """Check the roster fits the configured format.

        Raises:
            InvalidConfigurationException: If the roster or format is invalid
        """
        if not self.groups:
            raise InvalidConfigurationException("At least one group is required")

        for group_name, players in self.groups.items():
            if len(players) != PLAYERS_PER_GROUP:
                raise InvalidConfigurationException(
                    f"Group {group_name} has {len(players)} players, "
                    f"expected {PLAYERS_PER_GROUP}"
                )

        all_players = self.players
        duplicates = sorted({p for p in all_players if all_players.count(p) > 1})
        if duplicates:
            raise InvalidConfigurationException(
                f"Player names must be unique: {', '.join(duplicates)}"
            )

        if not 0 <= self.thirds_to_qualify <= len(self.groups):
            raise InvalidConfigurationException(
                f"Cannot qualify {self.qualifier_count} players from "
                f"{len(self.groups)} groups"
            )

        if self.knockout_format is KnockoutFormat.SINGLE_ELIMINATION:
            if len(self.groups) != 3 or self.qualifier_count != 8:
                raise InvalidConfigurationException(
                    "Single elimination needs 3 groups and 8 qualifiers"
                )
        elif not self.knockout_groups or self.qualifier_count % len(
            self.knockout_groups
        ):
            raise InvalidConfigurationException(
                f"{self.qualifier_count} qualifiers cannot be split evenly "
                f"into {len(self.knockout_groups)} knockout groups"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "groups": {g: list(p) for g, p in self.groups.items()},
            "knockout_format": self.knockout_format.value,
            "knockout_groups": list(self.knockout_groups),
            "qualifier_count": self.qualifier_count,
            "allow_single_set_win": self.allow_single_set_win,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        try:
            knockout_format = KnockoutFormat(
                data.get("knockout_format", KnockoutFormat.ROUND_ROBIN_GROUPS.value)
            )
        except ValueError as e:
            raise InvalidConfigurationException(str(e)) from e

        return cls(
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
            groups={g: list(p) for g, p in data.get("groups", DEFAULT_GROUPS).items()},
            knockout_format=knockout_format,
            knockout_groups=list(
                data.get("knockout_groups", DEFAULT_KNOCKOUT_GROUPS)
            ),
            qualifier_count=data.get("qualifier_count", DEFAULT_QUALIFIER_COUNT),
            allow_single_set_win=data.get("allow_single_set_win", True),
        )
