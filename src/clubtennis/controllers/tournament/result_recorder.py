"""Result recording and validation for tournaments.

This module turns score entries into match records with proper validation
and error checking. It never stores anything itself: it returns the new
match and leaves saving it to the caller.
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
from typing import List, Optional, Sequence, Tuple

from clubtennis.constants import (
    FIRST_MATCH_ID,
    KO_GROUP_LABEL,
    PHASE_FINAL,
    PHASE_GROUP,
    PHASE_SEMIFINAL,
    PHASES,
)
from clubtennis.controllers.tournament.bracket_resolver import resolve_bracket
from clubtennis.controllers.tournament.knockout_groups import (
    allocate_knockout_groups,
    final_round_state,
    knockout_finalists,
    knockout_group_states,
)
from clubtennis.controllers.tournament.qualification import select_qualifiers
from clubtennis.controllers.tournament.round_manager import (
    PairingStatus,
    round_robin_statuses,
)
from clubtennis.exceptions import (
    InvalidPairingException,
    InvalidResultException,
    RepeatPairingException,
    ResultNotFoundException,
    TournamentStateException,
)
from clubtennis.models.match import Match, MatchEntry
from clubtennis.models.tournament_config import KnockoutFormat, TournamentConfig
from clubtennis.type_hints import GroupName
from clubtennis.utils import setup_logger, utc_now
from clubtennis.validation.score import resolve_winner

logger = setup_logger(__name__)


@dataclass
class RecordedResult:
    """A newly created match and the results it replaces.

    Attributes
    ----------
    match : Match
        The match to save.
    replaced_ids : list of int
        Ids of earlier results for the same pairing that the caller must
        delete; only ever non-empty with an administrative override.
    """

    match: Match
    replaced_ids: List[int] = field(default_factory=list)


def next_match_id(matches: Sequence[Match]) -> int:
    """Next free id: one above the highest in use."""
    if not matches:
        return FIRST_MATCH_ID
    return max(max(m.id for m in matches) + 1, FIRST_MATCH_ID)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating the score and deriving the winner
    - Checking the players form a legal pairing for the phase
    - Preventing repeat results unless an override is requested
    - Deleting results
    """

    def __init__(self, config: TournamentConfig):
        self.config = config

    # ========== Pairings ==========

    def phase_pairings(
        self, phase: str, group: Optional[GroupName], matches: Sequence[Match]
    ) -> Tuple[Optional[GroupName], List[PairingStatus]]:
        """Fixed pairings of a phase, with the group label results are filed under.

        Raises:
            InvalidPairingException: If the phase or group does not exist
            TournamentStateException: If the knockout round is not open yet
        """
        if phase not in PHASES:
            raise InvalidPairingException(f"Unknown phase: {phase}")

        if phase == PHASE_GROUP:
            players = self.config.groups.get(group or "")
            if not players:
                raise InvalidPairingException(f"Unknown group: {group}")
            return group, round_robin_statuses(players, matches, PHASE_GROUP, group)

        qualified = select_qualifiers(
            matches, self.config.groups, self.config.qualifier_count
        )

        if self.config.knockout_format is KnockoutFormat.SINGLE_ELIMINATION:
            bracket = resolve_bracket(
                qualified,
                matches,
                self.config.group_names,
                self.config.qualifier_count,
            )
            bracket_round = bracket.round(phase)
            if not bracket_round.is_ready:
                raise TournamentStateException(
                    f"The {phase} pairings are not decided yet"
                )
            return KO_GROUP_LABEL, bracket_round.pairings

        allocation = allocate_knockout_groups(
            qualified, self.config.knockout_groups, self.config.qualifier_count
        )
        states = knockout_group_states(allocation, matches)

        if phase == PHASE_SEMIFINAL:
            if group not in allocation:
                raise InvalidPairingException(f"Unknown knockout group: {group}")
            if not allocation[group]:
                raise TournamentStateException(
                    "Knockout groups are formed once the group phase is complete"
                )
            state = next(s for s in states if s.label == group)
            return group, state.pairings

        if phase == PHASE_FINAL:
            final_round = final_round_state(knockout_finalists(states), matches)
            if not final_round.finalists:
                raise TournamentStateException(
                    "Finalists are decided once every knockout group is complete"
                )
            return KO_GROUP_LABEL, final_round.pairings

        raise InvalidPairingException(
            f"The {phase} is not played in the {self.config.knockout_format.value} format"
        )

    def available_pairings(
        self,
        phase: str,
        group: Optional[GroupName],
        matches: Sequence[Match],
        allow_override: bool = False,
    ) -> List[PairingStatus]:
        """Pairings a result can be entered for.

        Args:
            phase: Match phase
            group: Group, or knockout group in the round robin format
            matches: All matches of the tournament
            allow_override: Also list pairings that already have a result

        Returns:
            Pairings in schedule order; empty while a knockout round is pending
        """
        try:
            _, statuses = self.phase_pairings(phase, group, matches)
        except TournamentStateException:
            return []
        return [s for s in statuses if allow_override or not s.played]

    # ========== Recording ==========

    def record(
        self,
        entry: MatchEntry,
        matches: Sequence[Match],
        allow_override: bool = False,
    ) -> RecordedResult:
        """Validate an entry and build the match record for it.

        Args:
            entry: Raw score entry
            matches: All matches of the tournament
            allow_override: Replace an existing result for the same pairing

        Returns:
            RecordedResult with the new match and any results it replaces

        Raises:
            InvalidResultException: If the score is illegal or has no winner
            InvalidPairingException: If the players cannot meet in this phase
            RepeatPairingException: If the pairing already has a result
            TournamentStateException: If the knockout round is not open yet
        """
        resolution = resolve_winner(
            entry, allow_single_set_win=self.config.allow_single_set_win
        )
        if not resolution:
            logger.info(
                f"Rejected score for {entry.player1} vs {entry.player2}: "
                f"{'; '.join(resolution.errors)}"
            )
            raise InvalidResultException(resolution.errors)

        if entry.player1 == entry.player2:
            raise InvalidPairingException(f"{entry.player1} cannot play themselves")

        label, statuses = self.phase_pairings(entry.phase, entry.group, matches)
        status = next(
            (
                s
                for s in statuses
                if {s.player1, s.player2} == {entry.player1, entry.player2}
            ),
            None,
        )
        if status is None:
            raise InvalidPairingException(
                f"{entry.player1} vs {entry.player2} is not a {entry.phase} "
                f"pairing{f' in group {entry.group}' if entry.group else ''}"
            )

        replaced_ids: List[int] = []
        if status.played:
            if not allow_override:
                raise RepeatPairingException(
                    f"{entry.player1} vs {entry.player2} already has a result "
                    f"(match {status.match.id})"
                )
            replaced_ids = [
                m.id
                for m in matches
                if m.phase == entry.phase
                and (entry.phase != PHASE_GROUP or m.group == label)
                and m.is_between(entry.player1, entry.player2)
            ]
            logger.warning(
                f"Override: result for {entry.player1} vs {entry.player2} "
                f"replaces match(es) {replaced_ids}"
            )

        match = Match(
            id=next_match_id(matches),
            phase=entry.phase,
            group=label,
            player1=entry.player1,
            player2=entry.player2,
            set1=entry.set1,
            set2=entry.set2,
            tiebreak=entry.tiebreak,
            winner=resolution.winner,
            timestamp=utc_now(),
        )
        logger.info(
            f"Recorded match {match.id} ({match.phase} {match.group}): "
            f"{match.player1} vs {match.player2} {match.score_line()}, "
            f"winner {match.winner}"
        )
        return RecordedResult(match=match, replaced_ids=replaced_ids)

    def delete(self, match_id: int, matches: Sequence[Match]) -> List[Match]:
        """Remove a result; deletion plus re-entry is the correction path.

        Returns:
            The match list without the deleted match

        Raises:
            ResultNotFoundException: If no match has the id
        """
        remaining = [m for m in matches if m.id != match_id]
        if len(remaining) == len(matches):
            raise ResultNotFoundException(f"No match with id {match_id}")
        logger.info(f"Deleted match {match_id}")
        return remaining

