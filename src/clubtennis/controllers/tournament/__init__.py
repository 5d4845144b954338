"""Tournament controllers for Club Tennis.

Each module owns one concern: standings, qualification, the two knockout
formats, pairing lookups and result entry. All of them derive their state
from the flat match list they are handed.
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

from clubtennis.controllers.tournament.bracket_resolver import (
    BracketRound,
    BracketState,
    quarterfinal_pairings,
    resolve_bracket,
)
from clubtennis.controllers.tournament.knockout_groups import (
    FinalRoundState,
    KnockoutGroupState,
    allocate_knockout_groups,
    final_round_state,
    knockout_finalists,
    knockout_group_states,
)
from clubtennis.controllers.tournament.qualification import (
    group_finishers,
    is_qualification_complete,
    select_qualifiers,
)
from clubtennis.controllers.tournament.result_recorder import (
    RecordedResult,
    ResultRecorder,
    next_match_id,
)
from clubtennis.controllers.tournament.round_manager import (
    PairingStatus,
    find_match,
    is_complete,
    pairing_statuses,
    progress,
    round_robin_pairings,
    round_robin_statuses,
)
from clubtennis.controllers.tournament.standings_calculator import (
    StandingsCalculator,
    calculate_group_table,
    compare_rows,
    rank,
)

__all__ = [
    "BracketRound",
    "BracketState",
    "quarterfinal_pairings",
    "resolve_bracket",
    "FinalRoundState",
    "KnockoutGroupState",
    "allocate_knockout_groups",
    "final_round_state",
    "knockout_finalists",
    "knockout_group_states",
    "group_finishers",
    "is_qualification_complete",
    "select_qualifiers",
    "RecordedResult",
    "ResultRecorder",
    "next_match_id",
    "PairingStatus",
    "find_match",
    "is_complete",
    "pairing_statuses",
    "progress",
    "round_robin_pairings",
    "round_robin_statuses",
    "StandingsCalculator",
    "calculate_group_table",
    "compare_rows",
    "rank",
]
