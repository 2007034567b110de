"""Type hints used in Shuttle League."""

from typing import Dict, Iterable, List, Literal, Mapping, Optional, Tuple, Union

# Gender literals
Gender = Literal["M", "F"]

# Match type literals
MatchType = Literal["Men's Doubles", "Mixed Doubles", "Women's Doubles"]

# One team's half of a match
Side = Literal["team1", "team2"]
MaybeSide = Optional[Side]

# Ordered player ids on one side of a match
PlayerIds = List[str]
# Unordered pair of player ids, sorted
PlayerPair = Tuple[str, str]
# Three match ids played concurrently
SubRoundGroup = Tuple[str, ...]

# Player lookups accepted by the validators
PlayerLookup = Union[Mapping[str, "Player"], Iterable["Player"], None]

# Raw stored record
Record = Dict[str, object]

#  LocalWords:  PlayerPair SubRoundGroup
