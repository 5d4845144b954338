"""Selection of the players advancing from the group phase."""

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

from typing import Dict, List, Optional, Sequence

from clubtennis.constants import DEFAULT_QUALIFIER_COUNT
from clubtennis.controllers.tournament.standings_calculator import (
    StandingsCalculator,
    rank,
)
from clubtennis.models.match import Match
from clubtennis.models.standings import QualifiedPlayer
from clubtennis.type_hints import GroupName, Roster
from clubtennis.utils import setup_logger

logger = setup_logger(__name__)

QUALIFYING_POSITIONS = (1, 2, 3)


def group_finishers(
    group_name: GroupName,
    matches: Sequence[Match],
    roster: Roster,
    calculator: Optional[StandingsCalculator] = None,
) -> List[QualifiedPlayer]:
    """Ranked finishers of one group, positions 1 to 3.

    Only players with at least one completed match hold a ranked finish;
    a group where fewer than three players have played yields fewer
    finishers.
    """
    calculator = calculator or StandingsCalculator()
    table = calculator.group_table(group_name, matches, roster)
    ranked = [row for row in table if row.matches > 0]
    return [
        QualifiedPlayer(group=group_name, position=index + 1, standing=row)
        for index, row in enumerate(ranked[: len(QUALIFYING_POSITIONS)])
    ]


def select_qualifiers(
    matches: Sequence[Match],
    roster: Roster,
    qualifier_count: int = DEFAULT_QUALIFIER_COUNT,
) -> List[QualifiedPlayer]:
    """Select the qualified cohort from all group tables.

    Group winners, runners-up and third placed players are pooled by
    position and each pool ranked with the table tie-break cascade. The
    result lists every winner, then every runner-up, then the best thirds
    until ``qualifier_count`` is reached. Thirds are left out until every
    group has a third placed finisher.

    Args:
        matches: All matches of the tournament
        roster: Group name to player names
        qualifier_count: Size of the full cohort

    Returns:
        Qualified players in seeding order; shorter than ``qualifier_count``
        while the group phase is still incomplete
    """
    calculator = StandingsCalculator()
    pools: Dict[int, List[QualifiedPlayer]] = {p: [] for p in QUALIFYING_POSITIONS}

    for group_name in roster:
        for finisher in group_finishers(group_name, matches, roster, calculator):
            pools[finisher.position].append(finisher)

    # Pools are ranked with the full table cascade, game difference included
    # Thirds are only comparable once every group has one
    thirds_needed = max(0, qualifier_count - 2 * len(roster))
    if len(pools[3]) < len(roster):
        thirds_needed = 0
    qualified = rank(pools[1]) + rank(pools[2]) + rank(pools[3])[:thirds_needed]

    logger.debug(
        f"Qualification: {len(qualified)}/{qualifier_count} places decided"
    )
    return qualified


def is_qualification_complete(
    qualified: Sequence[QualifiedPlayer],
    qualifier_count: int = DEFAULT_QUALIFIER_COUNT,
) -> bool:
    return len(qualified) >= qualifier_count
