"""League snapshot: the players, teams and rounds a caller hands to the engine."""

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

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

from shuttleleague.exceptions import (
    FileLoadException,
    FileSaveException,
    InvalidRecordException,
    PlayerNotFoundException,
    RoundNotFoundException,
    TeamNotFoundException,
)
from shuttleleague.models.player import Player, Team
from shuttleleague.models.round import Round
from shuttleleague.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class League:
    """An in-memory snapshot of the whole league.

    The engine never keeps one of these between calls; callers build it from
    their storage, pass the parts the engine needs, and persist whatever the
    engine returns.
    """

    players: List[Player] = field(default_factory=list)
    teams: List[Team] = field(default_factory=list)
    rounds: List[Round] = field(default_factory=list)

    def player_map(self) -> Dict[str, Player]:
        return {p.id: p for p in self.players}

    def get_player(self, player_id: str) -> Player:
        """Look up a player by id.

        Raises:
            PlayerNotFoundException: If no player has this id
        """
        for player in self.players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundException(f"Player not found: {player_id}")

    def get_team(self, team_id: str) -> Team:
        """Look up a team by id.

        Raises:
            TeamNotFoundException: If no team has this id
        """
        for team in self.teams:
            if team.id == team_id:
                return team
        raise TeamNotFoundException(f"Team not found: {team_id}")

    def get_round(self, round_id: str) -> Round:
        """Look up a round by id.

        Raises:
            RoundNotFoundException: If no round has this id
        """
        for round_ in self.rounds:
            if round_.id == round_id:
                return round_
        raise RoundNotFoundException(f"Round not found: {round_id}")

    def round_rosters(self, round_: Round) -> Tuple[List[str], List[str]]:
        """Player ids of the round's first and second team."""
        return (
            self.get_team(round_.team1_id).player_ids,
            self.get_team(round_.team2_id).player_ids,
        )

    def round_players(self, round_: Round) -> List[Player]:
        """Every player on either team of the round."""
        return [
            *self.get_team(round_.team1_id).players,
            *self.get_team(round_.team2_id).players,
        ]

    def replace_round(self, round_: Round) -> "League":
        """Return a new snapshot with ``round_`` swapped in by id (or appended)."""
        rounds = list(self.rounds)
        for index, existing in enumerate(rounds):
            if existing.id == round_.id:
                rounds[index] = round_
                break
        else:
            rounds.append(round_)
        return replace(self, rounds=rounds)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize league to dictionary."""
        return {
            "players": [p.to_dict() for p in self.players],
            "teams": [t.to_dict() for t in self.teams],
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "League":
        """Deserialize league from dictionary."""
        players = [Player.from_dict(p) for p in data.get("players") or []]
        players_by_id = {p.id: p for p in players}
        teams = [Team.from_dict(t, players_by_id) for t in data.get("teams") or []]
        rounds = [Round.from_dict(r) for r in data.get("rounds") or []]
        logger.debug(
            f"Loaded league: {len(players)} players, {len(teams)} teams, "
            f"{len(rounds)} rounds"
        )
        return cls(players=players, teams=teams, rounds=rounds)


def load_league(path: Union[str, Path]) -> League:
    """Read a league snapshot from a JSON file.

    Raises:
        FileLoadException: If the file is missing, not JSON, or holds
            records that cannot be converted
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise FileLoadException(f"Could not read league file {path}: {e}") from e

    if not isinstance(data, Mapping):
        raise FileLoadException(f"League file {path} does not hold a JSON object")
    try:
        return League.from_dict(data)
    except (InvalidRecordException, TypeError, ValueError) as e:
        raise FileLoadException(f"Invalid league file {path}: {e}") from e


def save_league(league: League, path: Union[str, Path]) -> None:
    """Write a league snapshot as JSON.

    Raises:
        FileSaveException: If the file cannot be written
    """
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(league.to_dict(), f, indent=4, ensure_ascii=False)
    except OSError as e:
        raise FileSaveException(f"Could not save league file {path}: {e}") from e
    logger.info(f"League saved to {path}")
