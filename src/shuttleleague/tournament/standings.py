"""Standings calculation for the league.

This module aggregates completed rounds into the league table and ranks
teams with a cascade of tiebreaks.
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

import functools
from typing import Dict, FrozenSet, Iterator, List, Sequence, Tuple

from shuttleleague.constants import MATCH_WIN_POINTS, TEAM1
from shuttleleague.models.match import Match
from shuttleleague.models.player import Team
from shuttleleague.models.round import Round
from shuttleleague.models.standing import HeadToHeadStat, TeamStanding
from shuttleleague.utils import setup_logger

logger = setup_logger(__name__)


class StandingsCalculator:
    """Builds the league table from completed rounds.

    Only rounds flagged ``completed`` count, and within them only matches
    that are completed with a winner. Each match won is worth one point.

    Ranking, each level consulted only when the previous one ties:

    1. Total points
    2. Game differential over every counted match
    3. Point differential over every counted match
    4. Head-to-head among the teams tied on points: match differential,
       then game differential, then point differential
    5. Team name, ascending
    """

    def __init__(self, teams: Sequence[Team], rounds: Sequence[Round]) -> None:
        self.teams = list(teams)
        self.rounds = list(rounds)
        self._team_names: Dict[str, str] = {t.id: t.name for t in self.teams}
        self._head_to_head: Dict[Tuple[str, str], HeadToHeadStat] = {}
        self._standings: Dict[str, TeamStanding] = {}
        self._game_diffs: Dict[str, int] = {}
        self._point_diffs: Dict[str, int] = {}
        self._group_cache: Dict[Tuple[str, FrozenSet[str]], Tuple[int, int, int]] = {}
        self._tally()

    # ========== Aggregation ==========

    def _counted_rounds(self) -> Iterator[Round]:
        for round_data in self.rounds:
            if not round_data.completed:
                continue
            if (
                round_data.team1_id not in self._team_names
                or round_data.team2_id not in self._team_names
            ):
                logger.warning(
                    f"Skipping round {round_data.id}: unknown team "
                    f"{round_data.team1_id} or {round_data.team2_id}"
                )
                continue
            yield round_data

    def _tally(self) -> None:
        for team in self.teams:
            self._standings[team.id] = TeamStanding(
                team_id=team.id, team_name=team.name
            )
            self._game_diffs[team.id] = 0
            self._point_diffs[team.id] = 0

        for round_data in self._counted_rounds():
            counted = [m for m in round_data.matches if m.is_completed]
            for match in counted:
                self._record_match(round_data.team1_id, round_data.team2_id, match)
            if counted:
                self._standings[round_data.team1_id].rounds_played += 1
                self._standings[round_data.team2_id].rounds_played += 1

    def _record_match(self, team1_id: str, team2_id: str, match: Match) -> None:
        if match.winner == TEAM1:
            winner_id, loser_id = team1_id, team2_id
        else:
            winner_id, loser_id = team2_id, team1_id

        self._standings[winner_id].wins += 1
        self._standings[winner_id].total_points += MATCH_WIN_POINTS
        self._standings[loser_id].losses += 1

        first = self._stat(team1_id, team2_id)
        second = self._stat(team2_id, team1_id)
        if winner_id == team1_id:
            first.matches_won += 1
            second.matches_lost += 1
        else:
            second.matches_won += 1
            first.matches_lost += 1

        for game in match.games:
            if game.team1_score > game.team2_score:
                first.games_won += 1
                second.games_lost += 1
                self._game_diffs[team1_id] += 1
                self._game_diffs[team2_id] -= 1
            elif game.team2_score > game.team1_score:
                second.games_won += 1
                first.games_lost += 1
                self._game_diffs[team2_id] += 1
                self._game_diffs[team1_id] -= 1
            first.points_for += game.team1_score
            first.points_against += game.team2_score
            second.points_for += game.team2_score
            second.points_against += game.team1_score
            self._point_diffs[team1_id] += game.team1_score - game.team2_score
            self._point_diffs[team2_id] += game.team2_score - game.team1_score

    def _stat(self, team_id: str, opponent_id: str) -> HeadToHeadStat:
        key = (team_id, opponent_id)
        if key not in self._head_to_head:
            self._head_to_head[key] = HeadToHeadStat(
                team_id=team_id, opponent_id=opponent_id
            )
        return self._head_to_head[key]

    # ========== Queries ==========

    def game_differential(self, team_id: str) -> int:
        return self._game_diffs.get(team_id, 0)

    def point_differential(self, team_id: str) -> int:
        return self._point_diffs.get(team_id, 0)

    def head_to_head(self) -> Dict[str, List[HeadToHeadStat]]:
        """Per team, one stat per opponent met, ordered by opponent name."""
        stats: Dict[str, List[HeadToHeadStat]] = {t.id: [] for t in self.teams}
        for (team_id, _), stat in self._head_to_head.items():
            stats[team_id].append(stat)
        for team_stats in stats.values():
            team_stats.sort(
                key=lambda s: (self._team_names.get(s.opponent_id, ""), s.opponent_id)
            )
        return stats

    def group_head_to_head(
        self, team_id: str, group: FrozenSet[str]
    ) -> Tuple[int, int, int]:
        """Match, game and point differential of a team against ``group`` only."""
        key = (team_id, group)
        if key not in self._group_cache:
            match_diff = game_diff = point_diff = 0
            for opponent_id in group:
                stat = self._head_to_head.get((team_id, opponent_id))
                if stat is None or opponent_id == team_id:
                    continue
                match_diff += stat.match_diff
                game_diff += stat.game_diff
                point_diff += stat.point_diff
            self._group_cache[key] = (match_diff, game_diff, point_diff)
        return self._group_cache[key]

    def standings(self) -> List[TeamStanding]:
        """The league table, best team first."""
        rows = list(self._standings.values())
        tied_groups: Dict[int, FrozenSet[str]] = {}
        for row in rows:
            tied_groups.setdefault(row.total_points, frozenset())
            tied_groups[row.total_points] |= {row.team_id}

        def compare(a: TeamStanding, b: TeamStanding) -> int:
            """Negative if ``a`` ranks above ``b``."""
            if a.total_points != b.total_points:
                return b.total_points - a.total_points

            diff = self.game_differential(b.team_id) - self.game_differential(a.team_id)
            if diff:
                return diff

            diff = self.point_differential(b.team_id) - self.point_differential(
                a.team_id
            )
            if diff:
                return diff

            group = tied_groups[a.total_points]
            a_h2h = self.group_head_to_head(a.team_id, group)
            b_h2h = self.group_head_to_head(b.team_id, group)
            for a_value, b_value in zip(a_h2h, b_h2h):
                if a_value != b_value:
                    return b_value - a_value

            if a.team_name != b.team_name:
                return -1 if a.team_name < b.team_name else 1
            return 0

        return sorted(rows, key=functools.cmp_to_key(compare))


def calculate_standings(
    teams: Sequence[Team], rounds: Sequence[Round]
) -> List[TeamStanding]:
    """Ranked league table for ``teams`` over ``rounds``."""
    return StandingsCalculator(teams, rounds).standings()


def get_head_to_head_stats(
    teams: Sequence[Team], rounds: Sequence[Round]
) -> Dict[str, List[HeadToHeadStat]]:
    """Head-to-head stats keyed by team id; every team has an entry."""
    return StandingsCalculator(teams, rounds).head_to_head()
