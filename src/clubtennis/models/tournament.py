"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for tournament management. It owns the
roster configuration and the flat match list; tables, qualification and
knockout state are derived from them on every access and never stored.
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

from typing import Any, Dict, List, Optional, Sequence, Tuple

from clubtennis.constants import PHASE_GROUP
from clubtennis.controllers.tournament import (
    BracketState,
    FinalRoundState,
    KnockoutGroupState,
    PairingStatus,
    ResultRecorder,
    StandingsCalculator,
    allocate_knockout_groups,
    final_round_state,
    is_qualification_complete,
    knockout_finalists,
    knockout_group_states,
    progress,
    resolve_bracket,
    round_robin_statuses,
    select_qualifiers,
)
from clubtennis.models.match import Match, MatchEntry
from clubtennis.models.standings import QualifiedPlayer, StandingRow
from clubtennis.models.tournament_config import KnockoutFormat, TournamentConfig
from clubtennis.type_hints import GroupName, PlayerName
from clubtennis.utils import setup_logger

logger = setup_logger(__name__)


class Tournament:
    """Main tournament management class.

    The Tournament coordinates the specialised calculators:
    - StandingsCalculator: group and knockout tables
    - select_qualifiers: the qualified cohort
    - knockout_groups / bracket_resolver: the knockout stage
    - ResultRecorder: result entry and deletion

    Only ``config`` and ``matches`` are state. Everything else is a
    property recomputed from them.
    """

    def __init__(
        self, config: TournamentConfig, matches: Optional[Sequence[Match]] = None
    ) -> None:
        """Initialize a tournament.

        Args:
            config: Roster and format, validated here
            matches: Matches recorded so far
        """
        config.validate()
        self.config = config
        self.matches: List[Match] = list(matches or [])
        self.calculator = StandingsCalculator()
        self.recorder = ResultRecorder(config)

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def knockout_format(self) -> KnockoutFormat:
        return self.config.knockout_format

    # ========== Result Management ==========

    def record_match(self, entry: MatchEntry, allow_override: bool = False) -> Match:
        """Validate and add a result.

        With ``allow_override`` an existing result for the same pairing is
        replaced instead of rejected.

        Returns:
            The new match

        Raises:
            ResultException: If the entry is rejected
            TournamentStateException: If its knockout round is not open yet
        """
        recorded = self.recorder.record(entry, self.matches, allow_override)
        if recorded.replaced_ids:
            self.matches = [m for m in self.matches if m.id not in recorded.replaced_ids]
        self.matches.append(recorded.match)
        return recorded.match

    def delete_match(self, match_id: int) -> None:
        """Delete a result.

        Raises:
            ResultNotFoundException: If no match has the id
        """
        self.matches = self.recorder.delete(match_id, self.matches)

    def available_pairings(
        self, phase: str, group: Optional[GroupName] = None, allow_override: bool = False
    ) -> List[PairingStatus]:
        return self.recorder.available_pairings(
            phase, group, self.matches, allow_override
        )

    # ========== Group Phase ==========

    def group_table(self, group_name: GroupName) -> List[StandingRow]:
        return self.calculator.group_table(group_name, self.matches, self.config.groups)

    def group_tables(self) -> Dict[GroupName, List[StandingRow]]:
        return {g: self.group_table(g) for g in self.config.group_names}

    def group_pairings(self, group_name: GroupName) -> List[PairingStatus]:
        players = self.config.groups.get(group_name, [])
        return round_robin_statuses(players, self.matches, PHASE_GROUP, group_name)

    def group_progress(self, group_name: GroupName) -> Tuple[int, int]:
        """Played and total pairings of a group phase group."""
        return progress(self.group_pairings(group_name))

    @property
    def qualified(self) -> List[QualifiedPlayer]:
        return select_qualifiers(
            self.matches, self.config.groups, self.config.qualifier_count
        )

    @property
    def qualification_complete(self) -> bool:
        return is_qualification_complete(self.qualified, self.config.qualifier_count)

    # ========== Knockout: round robin groups ==========

    @property
    def knockout_groups(self) -> Dict[GroupName, List[QualifiedPlayer]]:
        return allocate_knockout_groups(
            self.qualified, self.config.knockout_groups, self.config.qualifier_count
        )

    @property
    def knockout_group_states(self) -> List[KnockoutGroupState]:
        return knockout_group_states(
            self.knockout_groups, self.matches, self.calculator
        )

    @property
    def finalists(self) -> List[StandingRow]:
        return knockout_finalists(self.knockout_group_states)

    @property
    def final_round(self) -> FinalRoundState:
        return final_round_state(self.finalists, self.matches, self.calculator)

    # ========== Knockout: single elimination ==========

    @property
    def bracket(self) -> BracketState:
        return resolve_bracket(
            self.qualified,
            self.matches,
            self.config.group_names,
            self.config.qualifier_count,
        )

    @property
    def champion(self) -> Optional[PlayerName]:
        """Tournament winner under the configured format, None until decided."""
        if self.config.knockout_format is KnockoutFormat.SINGLE_ELIMINATION:
            return self.bracket.champion
        return self.final_round.champion

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "config": self.config.to_dict(),
            "matches": [m.to_dict() for m in sorted(self.matches, key=lambda m: m.id)],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        config = TournamentConfig.from_dict(data.get("config", {}))
        matches = [Match.from_dict(m) for m in data.get("matches", [])]
        tournament = cls(config, matches)
        logger.info(
            f"Loaded tournament: {tournament.name} ({len(matches)} matches)"
        )
        return tournament
