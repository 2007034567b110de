"""Derived views over a league: sub-round arrangement and standings.

Both are recomputed from the full round list whenever read.
"""

# Shuttle League
# Copyright (C) 2025  Shuttle League developers
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

from shuttleleague.tournament.standings import (
    StandingsCalculator,
    calculate_standings,
    get_head_to_head_stats,
)
from shuttleleague.tournament.sub_rounds import (
    SubRoundArranger,
    arrange_sub_rounds,
    refresh_sub_rounds,
    with_fresh_sub_rounds,
)

__all__ = [
    "StandingsCalculator",
    "SubRoundArranger",
    "arrange_sub_rounds",
    "calculate_standings",
    "get_head_to_head_stats",
    "refresh_sub_rounds",
    "with_fresh_sub_rounds",
]
