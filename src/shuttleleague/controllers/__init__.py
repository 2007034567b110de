"""Controllers that move a round through building, play and completion."""

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

from shuttleleague.controllers.match_lifecycle import (
    calculate_match_winner,
    can_complete_match,
    can_complete_round,
    can_start_match,
    complete_match,
    complete_round,
    record_game_score,
    start_match,
    stop_match,
)
from shuttleleague.controllers.round_builder import (
    add_match,
    add_player_to_match,
    can_add_match,
    can_add_player,
    create_round_template,
    remove_match,
    remove_player_from_match,
)

__all__ = [
    "add_match",
    "add_player_to_match",
    "calculate_match_winner",
    "can_add_match",
    "can_add_player",
    "can_complete_match",
    "can_complete_round",
    "can_start_match",
    "complete_match",
    "complete_round",
    "create_round_template",
    "record_game_score",
    "remove_match",
    "remove_player_from_match",
    "start_match",
    "stop_match",
]
