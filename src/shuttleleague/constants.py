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

# --- Constants ---
SNAPSHOT_FILE_EXTENSION = ".json"
LOG_LEVEL_ENV_VAR = "SHUTTLE_LEAGUE_LOG_LEVEL"

# Genders
MALE = "M"
FEMALE = "F"
GENDERS = (MALE, FEMALE)

# Match types
MENS_DOUBLES = "Men's Doubles"
MIXED_DOUBLES = "Mixed Doubles"
WOMENS_DOUBLES = "Women's Doubles"
MATCH_TYPES = (MENS_DOUBLES, MIXED_DOUBLES, WOMENS_DOUBLES)

# Match sides
TEAM1 = "team1"
TEAM2 = "team2"
SIDES = (TEAM1, TEAM2)

# Per-round template: maximum matches of each type in a single round
MATCH_TYPE_LIMITS = {
    MENS_DOUBLES: 3,
    MIXED_DOUBLES: 2,
    WOMENS_DOUBLES: 1,
}
# Order used when pre-filling a round with the template
ROUND_TEMPLATE = (
    MENS_DOUBLES,
    MENS_DOUBLES,
    MENS_DOUBLES,
    MIXED_DOUBLES,
    MIXED_DOUBLES,
    WOMENS_DOUBLES,
)

# Round assignment policy (not configurable)
PLAYERS_PER_SIDE = 2
MAX_MATCHES_PER_PLAYER = 2
MIN_MATCHES_PER_PLAYER = 1
MAX_MIXED_DOUBLES_PER_PLAYER = 1

# Sub-rounds
SUB_ROUND_MATCH_COUNT = 6
SUB_ROUND_GROUP_SIZE = 3

# Game scoring law
WINNING_SCORE = 21
DEUCE_SCORE = 20
MIN_WINNING_MARGIN = 2
MAX_SCORE = 30
GOLDEN_POINT_THRESHOLD = 29

# Matches are best of three games
GAMES_PER_MATCH = 3
GAMES_TO_WIN_MATCH = 2

# Standings: points awarded per match won
MATCH_WIN_POINTS = 1

# Player levels, weakest to strongest (stored values)
LEVEL_LUYEN_KHI = "Luyện Khí Kỳ"
LEVEL_TRUC_CO = "Trúc Cơ"
LEVEL_KET_DAN = "Kết Đan"
LEVEL_NGUYEN_ANH = "Nguyên Anh"

# Strength points used for team strength display
LEVEL_POINTS = {
    LEVEL_NGUYEN_ANH: 4,
    LEVEL_KET_DAN: 3,
    LEVEL_TRUC_CO: 2,
    LEVEL_LUYEN_KHI: 1,
}
