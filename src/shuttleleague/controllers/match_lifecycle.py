"""Match and round state transitions.

A match moves BUILDING -> IN_PLAY -> COMPLETED; ``stop_match`` rolls it back
to BUILDING. A round's ``completed`` flag is one-way.

Each transition has a ``can_*`` check that returns a ValidationResult and
an action that re-runs the check, raises when it fails and otherwise returns
a replaced Round. Inputs are never mutated.
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

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional, Sequence

from shuttleleague.constants import (
    GAMES_PER_MATCH,
    GAMES_TO_WIN_MATCH,
    PLAYERS_PER_SIDE,
    TEAM1,
    TEAM2,
)
from shuttleleague.exceptions import (
    InvalidGameScoreException,
    MatchStateException,
    RoundStateException,
)
from shuttleleague.models.match import Game, MatchState
from shuttleleague.models.round import Round
from shuttleleague.type_hints import MaybeSide, PlayerLookup
from shuttleleague.utils import setup_logger
from shuttleleague.utils.validation import ValidationResult
from shuttleleague.validation.game_score import validate_game_score
from shuttleleague.validation.round_rules import validate_round_player_assignments

logger = setup_logger(__name__)


ERR_MATCH_NOT_FOUND = "Match not found"
ERR_ROUND_COMPLETED = "Round is already completed"
ERR_ALREADY_STARTED = "Match has already been started"
ERR_NOT_STAFFED = f"Both teams must have {PLAYERS_PER_SIDE} players to start the match"
ERR_ACTIVE_CONFLICT = (
    "Cannot start match: One or more players are already participating in "
    "another active match"
)
ERR_NOT_IN_PLAY = "Match must be in play"
ERR_NO_WINNER = "Match must have a winner before it can be completed"
ERR_STOP_COMPLETED = "Completed matches cannot be stopped"
ERR_MATCHES_IN_PLAY = "Cannot complete round while matches are still in play"


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def calculate_match_winner(games: Sequence[Game]) -> MaybeSide:
    """Best of three: the side that has won two games, if any."""
    team1_wins = sum(1 for g in games if g.winner == TEAM1)
    team2_wins = sum(1 for g in games if g.winner == TEAM2)
    if team1_wins >= GAMES_TO_WIN_MATCH:
        return TEAM1
    if team2_wins >= GAMES_TO_WIN_MATCH:
        return TEAM2
    return None


# ========== Starting ==========


def can_start_match(
    round_data: Round,
    match_id: str,
    team1_player_ids: Sequence[str],
    team2_player_ids: Sequence[str],
    all_players: PlayerLookup = (),
) -> ValidationResult:
    """Check whether a match may start.

    The round must not be completed, the match must still be building with
    both sides fully staffed, the whole round must pass the assignment
    rules, and no player may be busy in another match that is in play.

    Returns:
        ValidationResult; assignment errors are joined with newlines
    """
    match = round_data.get_match(match_id)
    if match is None:
        return ValidationResult.fail(ERR_MATCH_NOT_FOUND)
    if round_data.completed:
        return ValidationResult.fail(ERR_ROUND_COMPLETED)
    if match.state is not MatchState.BUILDING:
        return ValidationResult.fail(ERR_ALREADY_STARTED)
    if not match.is_fully_staffed:
        return ValidationResult.fail(ERR_NOT_STAFFED)

    assignments = validate_round_player_assignments(
        round_data, team1_player_ids, team2_player_ids, all_players
    )
    if not assignments.is_valid:
        return ValidationResult.fail(assignments.error_message)

    players = set(match.all_player_ids)
    for other in round_data.matches:
        if other.id == match_id or not other.is_in_play:
            continue
        if players & set(other.all_player_ids):
            return ValidationResult.fail(ERR_ACTIVE_CONFLICT)

    return ValidationResult.ok()


def start_match(
    round_data: Round,
    match_id: str,
    team1_player_ids: Sequence[str],
    team2_player_ids: Sequence[str],
    all_players: PlayerLookup = (),
    now: Optional[datetime] = None,
) -> Round:
    """Start a match: BUILDING -> IN_PLAY.

    Raises:
        MatchStateException: If :func:`can_start_match` fails
    """
    result = can_start_match(
        round_data, match_id, team1_player_ids, team2_player_ids, all_players
    )
    if not result:
        raise MatchStateException(result.error_message)

    match = round_data.require_match(match_id)
    started = replace(match, started_at=_now(now), completed_at=None)
    logger.info(f"Started match {match_id} in round {round_data.id}")
    return round_data.with_match(started)


# ========== Scoring ==========


def record_game_score(
    round_data: Round,
    match_id: str,
    game_index: int,
    team1_score: Optional[int],
    team2_score: Optional[int],
) -> Round:
    """Store one game's score and recompute the match winner.

    Missing scores count as 0. Games before ``game_index`` that were never
    entered are filled in as 0-0.

    Raises:
        MatchNotFoundException: If the match does not exist
        MatchStateException: If the match is not in play or the game index
            is out of range
        InvalidGameScoreException: If the score breaks the scoring law
    """
    match = round_data.require_match(match_id)
    if match.state is not MatchState.IN_PLAY:
        raise MatchStateException(ERR_NOT_IN_PLAY)
    if not 0 <= game_index < GAMES_PER_MATCH:
        raise MatchStateException(
            f"Game index must be between 0 and {GAMES_PER_MATCH - 1}, got {game_index}"
        )

    score1 = int(team1_score or 0)
    score2 = int(team2_score or 0)
    verdict = validate_game_score(score1, score2)
    if not verdict:
        raise InvalidGameScoreException(verdict.error_message)

    games = list(match.games)
    while len(games) <= game_index:
        games.append(Game())
    games[game_index] = Game(
        team1_score=score1, team2_score=score2, winner=verdict.winner
    )

    winner = calculate_match_winner(games)
    logger.debug(
        f"Match {match_id} game {game_index + 1}: {score1}-{score2}, "
        f"match winner: {winner or 'undecided'}"
    )
    return round_data.with_match(replace(match, games=games, winner=winner))


# ========== Completing / stopping ==========


def can_complete_match(round_data: Round, match_id: str) -> ValidationResult:
    """A match can complete once it is in play and has a decided winner."""
    match = round_data.get_match(match_id)
    if match is None:
        return ValidationResult.fail(ERR_MATCH_NOT_FOUND)
    if match.state is not MatchState.IN_PLAY:
        return ValidationResult.fail(ERR_NOT_IN_PLAY)
    if match.winner is None:
        return ValidationResult.fail(ERR_NO_WINNER)
    return ValidationResult.ok()


def complete_match(
    round_data: Round, match_id: str, now: Optional[datetime] = None
) -> Round:
    """Complete a match: IN_PLAY -> COMPLETED.

    Raises:
        MatchStateException: If :func:`can_complete_match` fails
    """
    result = can_complete_match(round_data, match_id)
    if not result:
        raise MatchStateException(result.error_message)

    match = round_data.require_match(match_id)
    logger.info(f"Completed match {match_id}, winner {match.winner}")
    return round_data.with_match(replace(match, completed_at=_now(now)))


def stop_match(round_data: Round, match_id: str) -> Round:
    """Roll a match back to BUILDING, clearing timestamps, games and winner.

    Raises:
        MatchNotFoundException: If the match does not exist
        MatchStateException: If the match is already completed
    """
    match = round_data.require_match(match_id)
    if match.state is MatchState.COMPLETED:
        raise MatchStateException(ERR_STOP_COMPLETED)

    stopped = replace(
        match, started_at=None, completed_at=None, winner=None, games=[]
    )
    logger.info(f"Stopped match {match_id} in round {round_data.id}")
    return round_data.with_match(stopped)


def can_complete_round(
    round_data: Round,
    team1_player_ids: Sequence[str],
    team2_player_ids: Sequence[str],
    all_players: PlayerLookup = (),
) -> ValidationResult:
    """A round can complete when nothing is in play and assignments are valid."""
    if round_data.completed:
        return ValidationResult.fail(ERR_ROUND_COMPLETED)
    if any(m.is_in_play for m in round_data.matches):
        return ValidationResult.fail(ERR_MATCHES_IN_PLAY)

    assignments = validate_round_player_assignments(
        round_data, team1_player_ids, team2_player_ids, all_players
    )
    if not assignments.is_valid:
        return ValidationResult.fail(assignments.error_message)
    return ValidationResult.ok()


def complete_round(
    round_data: Round,
    team1_player_ids: Sequence[str],
    team2_player_ids: Sequence[str],
    all_players: PlayerLookup = (),
) -> Round:
    """Mark a round completed. There is no way back.

    Raises:
        RoundStateException: If :func:`can_complete_round` fails
    """
    result = can_complete_round(
        round_data, team1_player_ids, team2_player_ids, all_players
    )
    if not result:
        raise RoundStateException(result.error_message)

    logger.info(f"Completed round {round_data.id}")
    return replace(round_data, completed=True)
