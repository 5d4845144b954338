"""Tennis score validation and winner resolution.

Matches are played as two regular sets; when the sets are split 1:1 a
match tiebreak to 10 points (two clear) decides the match. The functions
here report problems as human readable messages instead of raising, since
the messages go straight back to whoever typed the score.
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

from typing import Iterable, List, Optional, Tuple

from clubtennis.constants import (
    MATCH_TIEBREAK_MIN_MARGIN,
    MATCH_TIEBREAK_MIN_POINTS,
    MAX_SET_GAMES,
    SET_WIN_GAMES,
    SET_WIN_MAX_LOSER_GAMES,
    SETS_TO_WIN,
)
from clubtennis.models.match import MatchEntry, SetScore
from clubtennis.type_hints import PlayerName

MSG_NO_RESULT = "No result entered: enter at least one set"
MSG_TIEBREAK_REQUIRED = "Sets are split 1:1, a match tiebreak is required"
MSG_TIEBREAK_NOT_ALLOWED = "A match tiebreak is only played when sets are split 1:1"
MSG_SECOND_SET_MISSING = "Set 2: no result entered"
MSG_INVALID_RESULT = "Invalid match result"


class WinnerResolution:
    """Outcome of resolving a score entry.

    Attributes:
        winner: Name of the winning player, None if the entry is rejected
        errors: Human-readable reasons the entry was rejected
    """

    def __init__(self, winner: Optional[PlayerName] = None, errors=None):
        self.winner = winner
        self.errors: List[str] = list(errors or [])

    def __bool__(self) -> bool:
        """Allow using the resolution in boolean context: if resolution: ..."""
        return self.winner is not None and not self.errors

    def __repr__(self) -> str:
        if self:
            return f"WinnerResolution(winner={self.winner!r})"
        return f"WinnerResolution(INVALID, {self.errors!r})"


def _is_legal_set(high: int, low: int) -> bool:
    if high == SET_WIN_GAMES and low <= SET_WIN_MAX_LOSER_GAMES:
        return True
    # 7:5 after reaching 5:5, or 7:6 via a set tiebreak
    return high == MAX_SET_GAMES and low in (SET_WIN_GAMES - 1, SET_WIN_GAMES)


def validate_set(score: Optional[SetScore], set_number: int) -> List[str]:
    """Check a single regular set.

    Args:
        score: The set score, None when the set was not played
        set_number: 1 or 2, used in messages

    Returns:
        List of violations, empty when the set is legal or unplayed
    """
    if score is None:
        return []

    prefix = f"Set {set_number}"
    if score.player1 < 0 or score.player2 < 0:
        return [f"{prefix}: negative game counts are not allowed"]
    if score.player1 == 0 and score.player2 == 0:
        return []
    if score.player1 > MAX_SET_GAMES or score.player2 > MAX_SET_GAMES:
        return [f"{prefix}: at most {MAX_SET_GAMES} games per set are possible"]
    if score.player1 == SET_WIN_GAMES and score.player2 == SET_WIN_GAMES:
        return [
            f"{prefix}: at 6:6 a tiebreak decides the set, "
            "enter it as 7:6"
        ]

    high, low = max(score.player1, score.player2), min(score.player1, score.player2)
    if not _is_legal_set(high, low):
        return [f"{prefix}: {score} is not a finished set"]
    return []


def validate_match_tiebreak(tiebreak: Optional[SetScore]) -> List[str]:
    """Check the match tiebreak played instead of a third set."""
    if tiebreak is None:
        return []
    if tiebreak.player1 < 0 or tiebreak.player2 < 0:
        return ["Match tiebreak: negative points are not allowed"]
    if tiebreak.player1 == 0 and tiebreak.player2 == 0:
        return []
    if max(tiebreak.player1, tiebreak.player2) < MATCH_TIEBREAK_MIN_POINTS:
        return [
            f"Match tiebreak: is played to at least "
            f"{MATCH_TIEBREAK_MIN_POINTS} points"
        ]
    if abs(tiebreak.player1 - tiebreak.player2) < MATCH_TIEBREAK_MIN_MARGIN:
        return [
            f"Match tiebreak: must be won by at least "
            f"{MATCH_TIEBREAK_MIN_MARGIN} points"
        ]
    return []


def validate_score(
    set1: Optional[SetScore],
    set2: Optional[SetScore],
    tiebreak: Optional[SetScore] = None,
) -> List[str]:
    """Validate a complete score against tennis legality rules.

    Args:
        set1: First set, None if not played
        set2: Second set, None if not played
        tiebreak: Match tiebreak, None if not played

    Returns:
        All violations found, in set order
    """
    errors = validate_set(set1, 1)
    errors.extend(validate_set(set2, 2))
    errors.extend(validate_match_tiebreak(tiebreak))
    return errors


def tally_sets(sets: Iterable[Optional[SetScore]]) -> Tuple[int, int]:
    """Count sets won by each side, skipping unplayed sets.

    Returns:
        Tuple of (player1 sets, player2 sets)
    """
    player1_sets = player2_sets = 0
    for score in sets:
        if score is None:
            continue
        side = score.winner_side
        if side == 1:
            player1_sets += 1
        elif side == 2:
            player2_sets += 1
    return player1_sets, player2_sets


def resolve_winner(
    entry: MatchEntry, allow_single_set_win: bool = True
) -> WinnerResolution:
    """Validate a score entry and work out who won.

    Args:
        entry: The raw score entry
        allow_single_set_win: Accept a single entered set as the whole
            result (used to record walkovers after one set)

    Returns:
        WinnerResolution with either a winner or the reasons there is none
    """
    set1, set2, tiebreak = entry.set1, entry.set2, entry.tiebreak

    errors = validate_score(set1, set2, tiebreak)
    if errors:
        return WinnerResolution(errors=errors)

    if set1 is None and set2 is None:
        return WinnerResolution(errors=[MSG_NO_RESULT])

    player1_sets, player2_sets = tally_sets((set1, set2))

    if tiebreak is not None and (player1_sets, player2_sets) != (1, 1):
        return WinnerResolution(errors=[MSG_TIEBREAK_NOT_ALLOWED])

    if player1_sets == SETS_TO_WIN:
        return WinnerResolution(winner=entry.player1)
    if player2_sets == SETS_TO_WIN:
        return WinnerResolution(winner=entry.player2)

    if player1_sets == 1 and player2_sets == 1:
        if tiebreak is None:
            return WinnerResolution(errors=[MSG_TIEBREAK_REQUIRED])
        winner = entry.player1 if tiebreak.winner_side == 1 else entry.player2
        return WinnerResolution(winner=winner)

    if player1_sets + player2_sets == 1:
        if not allow_single_set_win:
            return WinnerResolution(errors=[MSG_SECOND_SET_MISSING])
        winner = entry.player1 if player1_sets == 1 else entry.player2
        return WinnerResolution(winner=winner)

    return WinnerResolution(errors=[MSG_INVALID_RESULT])
