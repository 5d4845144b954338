"""Match data classes."""

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
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser

from clubtennis.constants import PHASE_GROUP, RECORD_FIELDS, STATUS_COMPLETED
from clubtennis.exceptions import InvalidResultException
from clubtennis.type_hints import GroupName, Phase, PlayerName
from clubtennis.utils import utc_now


@dataclass(frozen=True)
class SetScore:
    """Games (or match tiebreak points) won by each side.

    Attributes
    ----------
    player1 : int
        Games won by the first named player.
    player2 : int
        Games won by the second named player.
    """

    player1: int
    player2: int

    @classmethod
    def optional(
        cls, player1: Optional[int], player2: Optional[int]
    ) -> Optional["SetScore"]:
        """Build a score from raw values, returning None for an unplayed set.

        A side left blank counts as 0; a 0:0 score is the legacy encoding
        of "not played" and is normalised to None.
        """
        if player1 is None and player2 is None:
            return None
        score = cls(player1 or 0, player2 or 0)
        if score.player1 == 0 and score.player2 == 0:
            return None
        return score

    @property
    def winner_side(self) -> Optional[int]:
        """1 or 2 for the side with more games, None on a level score."""
        if self.player1 > self.player2:
            return 1
        if self.player2 > self.player1:
            return 2
        return None

    def to_dict(self) -> Dict[str, int]:
        return {"player1": self.player1, "player2": self.player2}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["SetScore"]:
        if not data:
            return None
        return cls.optional(data.get("player1"), data.get("player2"))

    def __str__(self) -> str:
        return f"{self.player1}:{self.player2}"


@dataclass
class Match:
    """A completed match as kept by the external store.

    Attributes
    ----------
    id : int
        Unique, monotonically assigned identifier.
    phase : str
        One of "group", "quarterfinal", "semifinal", "final".
    group : str or None
        Group name for group matches, knockout group or "KO" otherwise.
    player1, player2 : str
        Player names in the order the score was entered.
    set1, set2 : SetScore or None
        Game counts, None for a set that was not played.
    tiebreak : SetScore or None
        Match tiebreak points, only present when sets were split 1:1.
    winner : str
        Name of the winning player.
    status : str
        Always "completed"; unplayed pairings have no record.
    timestamp : datetime
        Creation time, informational only.
    """

    id: int
    phase: Phase
    group: Optional[GroupName]
    player1: PlayerName
    player2: PlayerName
    set1: Optional[SetScore]
    set2: Optional[SetScore]
    winner: PlayerName
    tiebreak: Optional[SetScore] = None
    status: str = STATUS_COMPLETED
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def played_sets(self) -> List[SetScore]:
        """Sets that were actually played, in order."""
        return [s for s in (self.set1, self.set2) if s is not None]

    def is_between(self, player_a: PlayerName, player_b: PlayerName) -> bool:
        """Check whether this match was played by the two players, in any order."""
        return {self.player1, self.player2} == {player_a, player_b}

    def score_line(self) -> str:
        """Human readable score, e.g. ``6:4 3:6 TB 10:8``."""
        parts = [str(s) for s in self.played_sets]
        if self.tiebreak is not None:
            parts.append(f"TB {self.tiebreak}")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "phase": self.phase,
            "group": self.group,
            "player1": self.player1,
            "player2": self.player2,
            "set1": self.set1.to_dict() if self.set1 else None,
            "set2": self.set2.to_dict() if self.set2 else None,
            "winner": self.winner,
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.tiebreak is not None:
            data["tiebreak"] = self.tiebreak.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Match":
        """Deserialize match from dictionary.

        Knockout group matches written by older versions carry their group
        under ``koGroup``; it is accepted as an alias.
        """
        timestamp = data.get("timestamp")
        return cls(
            id=int(data["id"]),
            phase=data.get("phase", PHASE_GROUP),
            group=data.get("group") or data.get("koGroup") or data.get("ko_group"),
            player1=data["player1"],
            player2=data["player2"],
            set1=SetScore.from_dict(data.get("set1")),
            set2=SetScore.from_dict(data.get("set2")),
            tiebreak=SetScore.from_dict(data.get("tiebreak")),
            winner=data["winner"],
            status=data.get("status", STATUS_COMPLETED),
            timestamp=date_parser.isoparse(timestamp) if timestamp else utc_now(),
        )

    def to_record(self) -> Dict[str, Any]:
        """Map the match onto the external store's column names.

        Missing sets and the missing tiebreak are written as 0:0, which is
        how the store represents "not played".
        """

        def side(score: Optional[SetScore], index: int) -> int:
            if score is None:
                return 0
            return score.player1 if index == 1 else score.player2

        values = {
            "id": self.id,
            "group": self.group or "",
            "phase": self.phase,
            "player1": self.player1,
            "player2": self.player2,
            "set1_player1": side(self.set1, 1),
            "set1_player2": side(self.set1, 2),
            "set2_player1": side(self.set2, 1),
            "set2_player2": side(self.set2, 2),
            "tiebreak_player1": side(self.tiebreak, 1),
            "tiebreak_player2": side(self.tiebreak, 2),
            "winner": self.winner,
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
        }
        return {RECORD_FIELDS[key]: value for key, value in values.items()}

    @classmethod
    def from_record(cls, fields: Mapping[str, Any]) -> "Match":
        """Build a match from a row of the external store."""

        def get(key: str, default: Any = None) -> Any:
            return fields.get(RECORD_FIELDS[key], default)

        timestamp = get("timestamp")
        return cls(
            id=int(get("id")),
            phase=get("phase", PHASE_GROUP),
            group=get("group") or None,
            player1=get("player1"),
            player2=get("player2"),
            set1=SetScore.optional(get("set1_player1"), get("set1_player2")),
            set2=SetScore.optional(get("set2_player1"), get("set2_player2")),
            tiebreak=SetScore.optional(
                get("tiebreak_player1"), get("tiebreak_player2")
            ),
            winner=get("winner"),
            status=get("status", STATUS_COMPLETED),
            timestamp=date_parser.isoparse(timestamp) if timestamp else utc_now(),
        )


def _parse_games(raw: Any, label: str) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise InvalidResultException([f"{label}: '{text}' is not a whole number"])


@dataclass
class MatchEntry:
    """Raw score entry, before validation turns it into a Match.

    Every score field is optional; a blank field means "not entered".
    """

    phase: Phase
    group: Optional[GroupName]
    player1: PlayerName
    player2: PlayerName
    set1_player1: Optional[int] = None
    set1_player2: Optional[int] = None
    set2_player1: Optional[int] = None
    set2_player2: Optional[int] = None
    tiebreak_player1: Optional[int] = None
    tiebreak_player2: Optional[int] = None

    @property
    def set1(self) -> Optional[SetScore]:
        return SetScore.optional(self.set1_player1, self.set1_player2)

    @property
    def set2(self) -> Optional[SetScore]:
        return SetScore.optional(self.set2_player1, self.set2_player2)

    @property
    def tiebreak(self) -> Optional[SetScore]:
        return SetScore.optional(self.tiebreak_player1, self.tiebreak_player2)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "MatchEntry":
        """Build an entry from form fields, as typed by the user.

        Accepts both ``snake_case`` and the ``camelCase`` names of the
        original entry form (``set1Player1`` and so on).

        Raises:
            InvalidResultException: If a score field is not a whole number
        """

        def pick(snake: str, camel: str) -> Any:
            return fields.get(snake, fields.get(camel))

        labels = {
            "set1_player1": ("set1Player1", "Set 1"),
            "set1_player2": ("set1Player2", "Set 1"),
            "set2_player1": ("set2Player1", "Set 2"),
            "set2_player2": ("set2Player2", "Set 2"),
            "tiebreak_player1": ("tiebreakPlayer1", "Match tiebreak"),
            "tiebreak_player2": ("tiebreakPlayer2", "Match tiebreak"),
        }
        scores = {
            snake: _parse_games(pick(snake, camel), label)
            for snake, (camel, label) in labels.items()
        }
        return cls(
            phase=fields.get("phase", PHASE_GROUP),
            group=fields.get("group") or fields.get("koGroup") or None,
            player1=fields["player1"],
            player2=fields["player2"],
            **scores,
        )
