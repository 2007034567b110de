"""Match and game records."""

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

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from dateutil.parser import isoparse

from shuttleleague.constants import PLAYERS_PER_SIDE, SIDES, TEAM1, TEAM2
from shuttleleague.exceptions import InvalidRecordException
from shuttleleague.type_hints import MatchType, MaybeSide, PlayerIds, PlayerPair, Side


class MatchState(Enum):
    """Lifecycle of a match, derived from its timestamps."""

    BUILDING = "building"
    IN_PLAY = "in_play"
    COMPLETED = "completed"


def parse_timestamp(value: Union[None, str, datetime]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp from a stored record.

    Raises:
        InvalidRecordException: If the value is not a valid timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return isoparse(str(value))
    except ValueError as e:
        raise InvalidRecordException(f"Invalid timestamp: {value!r}") from e


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_side(value: Any) -> MaybeSide:
    if value in (None, ""):
        return None
    if value not in SIDES:
        raise InvalidRecordException(f"Winner must be one of {SIDES}, got {value!r}")
    return value


@dataclass(frozen=True)
class Game:
    """One game of a match. ``winner`` is None while the game is in progress."""

    team1_score: int = 0
    team2_score: int = 0
    winner: MaybeSide = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize game to dictionary."""
        data: Dict[str, Any] = {
            "team1Score": self.team1_score,
            "team2Score": self.team2_score,
        }
        if self.winner:
            data["winner"] = self.winner
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Game":
        """Deserialize game from dictionary."""
        return cls(
            team1_score=int(data.get("team1Score") or 0),
            team2_score=int(data.get("team2Score") or 0),
            winner=_parse_side(data.get("winner")),
        )


@dataclass
class Match:
    """A doubles contest between the two teams of a round.

    Attributes:
        id: Unique identifier
        type: Men's, Mixed or Women's Doubles
        team1_players: Player ids fielded by the round's first team
        team2_players: Player ids fielded by the round's second team
        games: Up to three games, in order
        winner: Side that won two games, once decided
        started_at: Set when the match starts
        completed_at: Set when the match is completed
    """

    id: str
    type: MatchType
    team1_players: PlayerIds = field(default_factory=list)
    team2_players: PlayerIds = field(default_factory=list)
    games: List[Game] = field(default_factory=list)
    winner: MaybeSide = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.started_at = parse_timestamp(self.started_at)
        self.completed_at = parse_timestamp(self.completed_at)

    @property
    def state(self) -> MatchState:
        if self.started_at is None:
            return MatchState.BUILDING
        if self.completed_at is None:
            return MatchState.IN_PLAY
        return MatchState.COMPLETED

    @property
    def is_in_play(self) -> bool:
        return self.state is MatchState.IN_PLAY

    @property
    def is_completed(self) -> bool:
        """Completed with a decided winner, the condition for counting in standings."""
        return self.completed_at is not None and self.winner is not None

    def players(self, side: Side) -> PlayerIds:
        """Player ids on one side of the match."""
        if side == TEAM1:
            return self.team1_players
        if side == TEAM2:
            return self.team2_players
        raise ValueError(f"Unknown side: {side!r}")

    @property
    def all_player_ids(self) -> PlayerIds:
        return [*self.team1_players, *self.team2_players]

    def involves(self, player_id: str) -> bool:
        return player_id in self.team1_players or player_id in self.team2_players

    def pair(self, side: Side) -> Optional[PlayerPair]:
        """The side's two players as a sorted pair, or None if not fully staffed."""
        players = self.players(side)
        if len(players) != PLAYERS_PER_SIDE:
            return None
        first, second = sorted(players)
        return first, second

    @property
    def is_fully_staffed(self) -> bool:
        return (
            len(self.team1_players) == PLAYERS_PER_SIDE
            and len(self.team2_players) == PLAYERS_PER_SIDE
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "team1Players": list(self.team1_players),
            "team2Players": list(self.team2_players),
            "games": [g.to_dict() for g in self.games],
        }
        if self.winner:
            data["winner"] = self.winner
        if self.started_at is not None:
            data["startedAt"] = format_timestamp(self.started_at)
        if self.completed_at is not None:
            data["completedAt"] = format_timestamp(self.completed_at)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        try:
            match_id = str(data["id"])
            match_type = data["type"]
        except KeyError as e:
            raise InvalidRecordException(f"Match record missing field {e}") from e
        return cls(
            id=match_id,
            type=match_type,
            team1_players=[str(p) for p in data.get("team1Players") or []],
            team2_players=[str(p) for p in data.get("team2Players") or []],
            games=[Game.from_dict(g) for g in data.get("games") or []],
            winner=_parse_side(data.get("winner")),
            started_at=parse_timestamp(data.get("startedAt")),
            completed_at=parse_timestamp(data.get("completedAt")),
        )
