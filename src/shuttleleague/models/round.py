"""Data model for a league round."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence

from shuttleleague.exceptions import InvalidRecordException, MatchNotFoundException
from shuttleleague.models.match import Match
from shuttleleague.type_hints import SubRoundGroup


@dataclass(frozen=True)
class SubRounds:
    """Two groups of match ids that can be played side by side.

    Attributes:
        groups: The two groups, each holding three match ids
    """

    groups: tuple

    @classmethod
    def of(cls, first: Sequence[str], second: Sequence[str]) -> "SubRounds":
        return cls(groups=(tuple(first), tuple(second)))

    @property
    def first(self) -> SubRoundGroup:
        return self.groups[0]

    @property
    def second(self) -> SubRoundGroup:
        return self.groups[1]

    def as_partition(self) -> FrozenSet[FrozenSet[str]]:
        """Order-independent form: a set of id-sets."""
        return frozenset(frozenset(group) for group in self.groups)

    def same_partition(self, other: Optional["SubRounds"]) -> bool:
        """True when both describe the same split, ignoring all ordering."""
        if other is None:
            return False
        return self.as_partition() == other.as_partition()

    def to_list(self) -> List[List[str]]:
        return [list(group) for group in self.groups]

    @classmethod
    def from_list(
        cls, data: Optional[Sequence[Sequence[str]]]
    ) -> Optional["SubRounds"]:
        if not data:
            return None
        if len(data) != 2:
            raise InvalidRecordException(
                f"subRounds must hold exactly two groups, got {len(data)}"
            )
        return cls.of([str(i) for i in data[0]], [str(i) for i in data[1]])


@dataclass
class Round:
    """One encounter between two teams, made of up to six matches.

    Attributes:
        id: Unique identifier
        name: Display name
        team1_id: First team; ``team1_players`` of every match belong to it
        team2_id: Second team
        matches: Matches in display order
        completed: One-way flag; completed rounds count toward standings
        sub_rounds: Conflict-free split of the six matches, when one exists
    """

    id: str
    name: str
    team1_id: str
    team2_id: str
    matches: List[Match] = field(default_factory=list)
    completed: bool = False
    sub_rounds: Optional[SubRounds] = None

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def require_match(self, match_id: str) -> Match:
        """Like :meth:`get_match` but raises MatchNotFoundException."""
        match = self.get_match(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match not found: {match_id}")
        return match

    def with_match(self, match: Match) -> "Round":
        """A copy of the round with ``match`` swapped in by id."""
        return replace(
            self, matches=[match if m.id == match.id else m for m in self.matches]
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "team1Id": self.team1_id,
            "team2Id": self.team2_id,
            "matches": [m.to_dict() for m in self.matches],
            "completed": self.completed,
        }
        if self.sub_rounds is not None:
            data["subRounds"] = self.sub_rounds.to_list()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Round":
        """Deserialize round data from dictionary."""
        try:
            return cls(
                id=str(data["id"]),
                name=data.get("name", ""),
                team1_id=str(data["team1Id"]),
                team2_id=str(data["team2Id"]),
                matches=[Match.from_dict(m) for m in data.get("matches") or []],
                completed=bool(data.get("completed", False)),
                sub_rounds=SubRounds.from_list(data.get("subRounds")),
            )
        except KeyError as e:
            raise InvalidRecordException(f"Round record missing field {e}") from e
