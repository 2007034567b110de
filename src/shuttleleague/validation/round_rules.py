"""Player assignment rules for a round.

Within one round:

- every rostered player plays at least one match and at most two;
- a player plays at most one Mixed Doubles match;
- the same two players are never fielded together in more than one match.
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

from typing import Dict, List, Optional, Sequence, Tuple

from shuttleleague.constants import (
    MAX_MATCHES_PER_PLAYER,
    MAX_MIXED_DOUBLES_PER_PLAYER,
    MIN_MATCHES_PER_PLAYER,
    MIXED_DOUBLES,
    PLAYERS_PER_SIDE,
    SIDES,
    TEAM1,
)
from shuttleleague.models.round import Round
from shuttleleague.type_hints import PlayerLookup, PlayerPair, Side
from shuttleleague.utils import setup_logger
from shuttleleague.utils.validation import RoundValidationResult, ValidationResult
from shuttleleague.validation.eligibility import as_player_map

logger = setup_logger(__name__)

ERR_MATCH_NOT_FOUND = "Match not found"
ERR_NOT_ON_ROSTER = "Player is not on this team's roster"
ERR_MATCH_CAP = (
    f"Player is already playing in {MAX_MATCHES_PER_PLAYER} matches "
    f"(maximum is {MAX_MATCHES_PER_PLAYER})"
)
ERR_MIXED_CAP = (
    f"Player is already playing in {MAX_MIXED_DOUBLES_PER_PLAYER} Mixed Doubles "
    f"match (maximum is {MAX_MIXED_DOUBLES_PER_PLAYER})"
)
ERR_PAIR_USED = "This pair of players is already used in another match"


def count_player_matches(
    round_data: Round, player_id: str, match_type: Optional[str] = None
) -> int:
    """Number of distinct matches in the round that field ``player_id``.

    Args:
        round_data: The round to inspect
        player_id: Player to count
        match_type: Only count matches of this type, if given
    """
    return sum(
        1
        for match in round_data.matches
        if match.involves(player_id)
        and (match_type is None or match.type == match_type)
    )


def _make_pair(first: str, second: str) -> PlayerPair:
    low, high = sorted((first, second))
    return low, high


def validate_player_addition_to_match(
    round_data: Round,
    match_id: str,
    side: Side,
    player_id: str,
    team1_player_ids: Sequence[str] = (),
    team2_player_ids: Sequence[str] = (),
) -> ValidationResult:
    """Check one tentative addition of a player to one side of a match.

    Removals never need this check.

    Args:
        round_data: Current round snapshot
        match_id: Match receiving the player
        side: ``"team1"`` or ``"team2"``
        player_id: Player being added
        team1_player_ids: Roster of the round's first team
        team2_player_ids: Roster of the round's second team

    Returns:
        ValidationResult with validation status
    """
    match = round_data.get_match(match_id)
    if match is None:
        return ValidationResult.fail(ERR_MATCH_NOT_FOUND)

    roster = team1_player_ids if side == TEAM1 else team2_player_ids
    if roster and player_id not in roster:
        return ValidationResult.fail(ERR_NOT_ON_ROSTER)

    current_players = match.players(side)
    if player_id in current_players:
        # Already on this side, nothing changes
        return ValidationResult.ok()

    if count_player_matches(round_data, player_id) >= MAX_MATCHES_PER_PLAYER:
        logger.debug(f"{player_id}: match cap reached in round {round_data.id}")
        return ValidationResult.fail(ERR_MATCH_CAP)

    if match.type == MIXED_DOUBLES:
        mixed_count = count_player_matches(round_data, player_id, MIXED_DOUBLES)
        if mixed_count >= MAX_MIXED_DOUBLES_PER_PLAYER:
            logger.debug(f"{player_id}: mixed doubles cap reached")
            return ValidationResult.fail(ERR_MIXED_CAP)

    new_players = [*current_players, player_id]
    if len(new_players) == PLAYERS_PER_SIDE:
        pair = _make_pair(*new_players)
        for other in round_data.matches:
            if other.id == match_id:
                continue
            if any(other.pair(s) == pair for s in SIDES):
                logger.debug(f"Pair {pair} already used in match {other.id}")
                return ValidationResult.fail(ERR_PAIR_USED)

    return ValidationResult.ok()


def validate_round_player_assignments(
    round_data: Round,
    team1_player_ids: Sequence[str],
    team2_player_ids: Sequence[str],
    all_players_in_round: PlayerLookup = (),
) -> RoundValidationResult:
    """Collect every assignment rule violation in a round.

    Run before starting a match or completing the round. Every violation is
    reported so the user can fix all of them in one pass.

    Args:
        round_data: Current round snapshot
        team1_player_ids: Roster of the round's first team
        team2_player_ids: Roster of the round's second team
        all_players_in_round: Used to show player names instead of ids

    Returns:
        RoundValidationResult listing every error
    """
    players_by_id = as_player_map(all_players_in_round)

    def name_of(player_id: str) -> str:
        player = players_by_id.get(player_id)
        return player.name if player else player_id

    roster: List[str] = list(dict.fromkeys([*team1_player_ids, *team2_player_ids]))

    match_counts: Dict[str, int] = {pid: 0 for pid in roster}
    mixed_counts: Dict[str, int] = {pid: 0 for pid in roster}
    for match in round_data.matches:
        for player_id in set(match.all_player_ids):
            match_counts[player_id] = match_counts.get(player_id, 0) + 1
            if match.type == MIXED_DOUBLES:
                mixed_counts[player_id] = mixed_counts.get(player_id, 0) + 1

    errors: List[str] = []

    for player_id in roster:
        if match_counts[player_id] < MIN_MATCHES_PER_PLAYER:
            errors.append(
                f"{name_of(player_id)} must play at least "
                f"{MIN_MATCHES_PER_PLAYER} match"
            )

    for player_id in roster:
        count = match_counts[player_id]
        if count > MAX_MATCHES_PER_PLAYER:
            errors.append(
                f"{name_of(player_id)} is playing in {count} matches "
                f"(maximum is {MAX_MATCHES_PER_PLAYER})"
            )

    for player_id in roster:
        count = mixed_counts[player_id]
        if count > MAX_MIXED_DOUBLES_PER_PLAYER:
            errors.append(
                f"{name_of(player_id)} is playing in {count} Mixed Doubles matches "
                f"(maximum is {MAX_MIXED_DOUBLES_PER_PLAYER})"
            )

    for (first, second), _ in duplicate_pairs(round_data):
        errors.append(
            f"The pair of players ({name_of(first)}, {name_of(second)}) "
            "is used in more than one match"
        )

    if errors:
        logger.debug(f"Round {round_data.id}: {len(errors)} assignment errors")
    return RoundValidationResult(errors)


def duplicate_pairs(round_data: Round) -> List[Tuple[PlayerPair, List[str]]]:
    """Pairs fielded in more than one match, with the ids of those matches.

    Pairs are listed in the order they first appear, scanning matches in
    round order and team1 before team2.
    """
    pair_matches: Dict[PlayerPair, List[str]] = {}
    for match in round_data.matches:
        for side in SIDES:
            pair = match.pair(side)
            if pair is not None and match.id not in pair_matches.setdefault(pair, []):
                pair_matches[pair].append(match.id)
    return [(pair, ids) for pair, ids in pair_matches.items() if len(ids) > 1]
