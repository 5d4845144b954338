"""Type hints used in Club Tennis."""

from typing import Dict, List, Literal, Tuple

# Players are identified by name only
PlayerName = str
GroupName = str

# Match phase literals (for type hints)
Phase = Literal["group", "quarterfinal", "semifinal", "final"]

# Ordered roster: group name -> player names
Roster = Dict[GroupName, List[PlayerName]]

# Two players meeting each other
Pairing = Tuple[PlayerName, PlayerName]
