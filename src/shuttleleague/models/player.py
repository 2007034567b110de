"""Player and team records."""

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
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from shuttleleague.constants import (
    GENDERS,
    LEVEL_KET_DAN,
    LEVEL_LUYEN_KHI,
    LEVEL_NGUYEN_ANH,
    LEVEL_POINTS,
    LEVEL_TRUC_CO,
)
from shuttleleague.exceptions import InvalidRecordException
from shuttleleague.type_hints import Gender
from shuttleleague.utils import setup_logger

logger = setup_logger(__name__)


class PlayerLevel(Enum):
    """Four ordered skill tiers, weakest first."""

    LUYEN_KHI = LEVEL_LUYEN_KHI
    TRUC_CO = LEVEL_TRUC_CO
    KET_DAN = LEVEL_KET_DAN
    NGUYEN_ANH = LEVEL_NGUYEN_ANH

    @property
    def points(self) -> int:
        """Strength points for this tier (1 for the weakest, 4 for the strongest)."""
        return LEVEL_POINTS[self.value]

    @classmethod
    def parse(cls, value: Any) -> "PlayerLevel":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise InvalidRecordException(f"Unknown player level: {value!r}")


@dataclass(frozen=True)
class Player:
    """A league player.

    Attributes:
        id: Unique identifier
        name: Display name
        gender: ``"M"`` or ``"F"``
        level: Skill tier, only used for team strength display
    """

    id: str
    name: str
    gender: Gender
    level: PlayerLevel = PlayerLevel.LUYEN_KHI

    def __post_init__(self) -> None:
        if self.gender not in GENDERS:
            raise InvalidRecordException(
                f"Player {self.id}: gender must be one of {GENDERS}, "
                f"got {self.gender!r}"
            )
        # Stored records carry the level as its display string
        object.__setattr__(self, "level", PlayerLevel.parse(self.level))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender,
            "level": self.level.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        try:
            return cls(
                id=str(data["id"]),
                name=data["name"],
                gender=data["gender"],
                level=PlayerLevel.parse(data.get("level", LEVEL_LUYEN_KHI)),
            )
        except KeyError as e:
            raise InvalidRecordException(f"Player record missing field {e}") from e


@dataclass
class Team:
    """A team and its roster. Roster order only matters for display."""

    id: str
    name: str
    players: List[Player] = field(default_factory=list)

    @property
    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    @property
    def strength(self) -> int:
        return calculate_team_strength(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary, storing the roster as player ids."""
        return {
            "id": self.id,
            "name": self.name,
            "players": self.player_ids,
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        players_by_id: Optional[Mapping[str, Player]] = None,
    ) -> "Team":
        """Deserialize team from dictionary.

        The roster may hold embedded player records or bare player ids. Ids
        are resolved through ``players_by_id``; ids that cannot be resolved
        are dropped, since a deleted player leaves every roster.
        """
        try:
            team_id = str(data["id"])
            name = data["name"]
        except KeyError as e:
            raise InvalidRecordException(f"Team record missing field {e}") from e

        players: List[Player] = []
        for entry in data.get("players") or []:
            if isinstance(entry, Mapping):
                players.append(Player.from_dict(entry))
                continue
            player = (players_by_id or {}).get(str(entry))
            if player is None:
                logger.warning(f"Team {name}: dropping unknown player id {entry}")
                continue
            players.append(player)
        return cls(id=team_id, name=name, players=players)


def calculate_team_strength(team: Team) -> int:
    """Sum of the level points of every player on the team."""
    return sum(player.level.points for player in team.players)
