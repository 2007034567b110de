"""Building a round's lineup: adding and removing matches and players."""

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

from dataclasses import replace
from typing import Optional, Sequence

from shuttleleague.constants import (
    MATCH_TYPE_LIMITS,
    MATCH_TYPES,
    PLAYERS_PER_SIDE,
    ROUND_TEMPLATE,
    TEAM1,
)
from shuttleleague.exceptions import InvalidAssignmentException, RoundStateException
from shuttleleague.models.match import Match, MatchState
from shuttleleague.models.player import Player
from shuttleleague.models.round import Round
from shuttleleague.tournament.sub_rounds import with_fresh_sub_rounds
from shuttleleague.type_hints import PlayerLookup, Side
from shuttleleague.utils import generate_id, setup_logger
from shuttleleague.utils.validation import ValidationResult
from shuttleleague.validation.eligibility import validate_player_gender_for_match
from shuttleleague.validation.round_rules import validate_player_addition_to_match

logger = setup_logger(__name__)


ERR_ROUND_COMPLETED = "Round is already completed"
ERR_MATCH_NOT_FOUND = "Match not found"
ERR_MATCH_STARTED = "Players can only be changed before the match starts"
ERR_SIDE_FULL = f"Doubles matches can only have {PLAYERS_PER_SIDE} players per team"


def _limit_message(match_type: str, limit: int) -> str:
    plural = "match" if limit == 1 else "matches"
    return (
        f"Maximum {limit} {match_type} {plural} per round. "
        f"Please remove a {match_type} match before adding another one."
    )


# ========== Matches ==========


def can_add_match(round_data: Round, match_type: str) -> ValidationResult:
    """Check the per-round match template (3 Men's, 2 Mixed, 1 Women's)."""
    if round_data.completed:
        return ValidationResult.fail(ERR_ROUND_COMPLETED)
    if match_type not in MATCH_TYPES:
        return ValidationResult.fail(f"Unknown match type: {match_type}")

    limit = MATCH_TYPE_LIMITS[match_type]
    existing = sum(1 for m in round_data.matches if m.type == match_type)
    if existing >= limit:
        return ValidationResult.fail(_limit_message(match_type, limit))
    return ValidationResult.ok()


def add_match(
    round_data: Round, match_type: str, match_id: Optional[str] = None
) -> Round:
    """Append an empty match of ``match_type`` to the round.

    Raises:
        RoundStateException: If the template cap is reached or the round
            is completed
    """
    result = can_add_match(round_data, match_type)
    if not result:
        raise RoundStateException(result.error_message)

    match = Match(id=match_id or generate_id("match"), type=match_type)
    logger.debug(f"Round {round_data.id}: added {match_type} match {match.id}")
    return with_fresh_sub_rounds(
        replace(round_data, matches=[*round_data.matches, match])
    )


def remove_match(round_data: Round, match_id: str) -> Round:
    """Drop a match from the round.

    Raises:
        MatchNotFoundException: If the match does not exist
        RoundStateException: If the round is completed
    """
    round_data.require_match(match_id)
    if round_data.completed:
        raise RoundStateException(ERR_ROUND_COMPLETED)

    logger.debug(f"Round {round_data.id}: removed match {match_id}")
    return with_fresh_sub_rounds(
        replace(
            round_data, matches=[m for m in round_data.matches if m.id != match_id]
        )
    )


def create_round_template(
    round_id: str, name: str, team1_id: str, team2_id: str
) -> Round:
    """A new round pre-filled with the six empty template matches.

    Match ids are ``<round_id>-m1`` through ``<round_id>-m6`` in template
    order (three Men's, two Mixed, one Women's Doubles).
    """
    round_data = Round(id=round_id, name=name, team1_id=team1_id, team2_id=team2_id)
    for number, match_type in enumerate(ROUND_TEMPLATE, start=1):
        round_data = add_match(round_data, match_type, f"{round_id}-m{number}")
    return round_data


# ========== Players ==========


def can_add_player(
    round_data: Round,
    match_id: str,
    side: Side,
    player: Player,
    team1_player_ids: Sequence[str] = (),
    team2_player_ids: Sequence[str] = (),
    all_players: PlayerLookup = (),
) -> ValidationResult:
    """Check whether ``player`` may join one side of a match.

    Checks run in order and the first failure is returned: the round is
    open and the match still building, the side has room, the player's
    gender suits the match, and the round-wide assignment rules hold.

    Args:
        round_data: Current round snapshot
        match_id: Match receiving the player
        side: ``"team1"`` or ``"team2"``
        player: Player being added
        team1_player_ids: Roster of the round's first team
        team2_player_ids: Roster of the round's second team
        all_players: Lookup used to find the genders of players already
            on the side

    Returns:
        ValidationResult with validation status
    """
    if round_data.completed:
        return ValidationResult.fail(ERR_ROUND_COMPLETED)
    match = round_data.get_match(match_id)
    if match is None:
        return ValidationResult.fail(ERR_MATCH_NOT_FOUND)
    if match.state is not MatchState.BUILDING:
        return ValidationResult.fail(ERR_MATCH_STARTED)

    current = match.players(side)
    if player.id in current:
        return ValidationResult.ok()
    if len(current) >= PLAYERS_PER_SIDE:
        return ValidationResult.fail(ERR_SIDE_FULL)

    gender = validate_player_gender_for_match(
        match.type, player.gender, current, all_players
    )
    if not gender:
        return gender

    return validate_player_addition_to_match(
        round_data, match_id, side, player.id, team1_player_ids, team2_player_ids
    )


def add_player_to_match(
    round_data: Round,
    match_id: str,
    side: Side,
    player: Player,
    team1_player_ids: Sequence[str] = (),
    team2_player_ids: Sequence[str] = (),
    all_players: PlayerLookup = (),
) -> Round:
    """Put ``player`` on one side of a match.

    Raises:
        InvalidAssignmentException: If :func:`can_add_player` fails
    """
    result = can_add_player(
        round_data,
        match_id,
        side,
        player,
        team1_player_ids,
        team2_player_ids,
        all_players,
    )
    if not result:
        raise InvalidAssignmentException(result.error_message)

    match = round_data.require_match(match_id)
    current = match.players(side)
    if player.id in current:
        return round_data

    players = [*current, player.id]
    if side == TEAM1:
        updated = replace(match, team1_players=players)
    else:
        updated = replace(match, team2_players=players)
    logger.debug(f"Match {match_id}: {player.name} added to {side}")
    return with_fresh_sub_rounds(round_data.with_match(updated))


def remove_player_from_match(
    round_data: Round, match_id: str, side: Side, player_id: str
) -> Round:
    """Take a player off one side of a match. Always permitted.

    Raises:
        MatchNotFoundException: If the match does not exist
    """
    match = round_data.require_match(match_id)
    players = [p for p in match.players(side) if p != player_id]
    if side == TEAM1:
        updated = replace(match, team1_players=players)
    else:
        updated = replace(match, team2_players=players)
    return with_fresh_sub_rounds(round_data.with_match(updated))
