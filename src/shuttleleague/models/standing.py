"""Derived standings records."""

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

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class TeamStanding:
    """A team's row in the league table."""

    team_id: str
    team_name: str
    rounds_played: int = 0
    wins: int = 0
    losses: int = 0
    total_points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "roundsPlayed": self.rounds_played,
            "wins": self.wins,
            "losses": self.losses,
            "totalPoints": self.total_points,
        }


@dataclass
class HeadToHeadStat:
    """Results of one team against one opponent, over completed matches."""

    team_id: str
    opponent_id: str
    matches_won: int = 0
    matches_lost: int = 0
    games_won: int = 0
    games_lost: int = 0
    points_for: int = 0
    points_against: int = 0

    @property
    def match_diff(self) -> int:
        return self.matches_won - self.matches_lost

    @property
    def game_diff(self) -> int:
        return self.games_won - self.games_lost

    @property
    def point_diff(self) -> int:
        return self.points_for - self.points_against

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teamId": self.team_id,
            "opponentId": self.opponent_id,
            "matchDiff": self.match_diff,
            "gameDiff": self.game_diff,
            "pointDiff": self.point_diff,
            "matchesWon": self.matches_won,
            "matchesLost": self.matches_lost,
            "gamesWon": self.games_won,
            "gamesLost": self.games_lost,
            "pointsFor": self.points_for,
            "pointsAgainst": self.points_against,
        }
