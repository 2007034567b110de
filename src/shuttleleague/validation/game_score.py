"""Badminton game scoring law.

A game is won at 21 points. From 20-all a side must lead by two, and at
29-all the next point wins, so no score can pass 30.
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

from typing import Optional

from shuttleleague.constants import (
    DEUCE_SCORE,
    GOLDEN_POINT_THRESHOLD,
    MAX_SCORE,
    MIN_WINNING_MARGIN,
    TEAM1,
    TEAM2,
    WINNING_SCORE,
)
from shuttleleague.type_hints import Side
from shuttleleague.utils.validation import GameScoreResult

ERR_NEGATIVE = "Scores cannot be negative"
ERR_OVER_MAX = f"Maximum score is {MAX_SCORE}"
ERR_BOTH_AT_MAX = f"Both teams cannot reach {MAX_SCORE}"
ERR_EARLY_MAX = (
    f"Score cannot reach {MAX_SCORE} unless opponent has at least "
    f"{GOLDEN_POINT_THRESHOLD}"
)
ERR_DEUCE_MARGIN = (
    f"At {DEUCE_SCORE}-{DEUCE_SCORE} or higher, must win by "
    f"{MIN_WINNING_MARGIN} points"
)
ERR_OVER_WINNING = (
    f"Score cannot exceed {WINNING_SCORE} unless opponent has at least {DEUCE_SCORE}"
)


def _check_side(score: int, opponent: int, side: Side) -> Optional[GameScoreResult]:
    """Apply the one-sided rules to ``score`` against ``opponent``.

    Returns a verdict when ``score`` decides the outcome, else None.
    """
    if score == MAX_SCORE:
        if opponent < GOLDEN_POINT_THRESHOLD:
            return GameScoreResult(False, error_message=ERR_EARLY_MAX)
        return GameScoreResult(True, winner=side)
    return None


def validate_game_score(score1: int, score2: int) -> GameScoreResult:
    """Validate one game's score and tell whether, and by whom, it is won.

    Args:
        score1: Points of the first team
        score2: Points of the second team

    Returns:
        GameScoreResult; ``winner`` is set only for a valid, decided game

    Example:
        >>> validate_game_score(21, 15).winner
        'team1'
        >>> validate_game_score(21, 20).is_valid
        False
    """
    if score1 < 0 or score2 < 0:
        return GameScoreResult(False, error_message=ERR_NEGATIVE)

    if score1 > MAX_SCORE or score2 > MAX_SCORE:
        return GameScoreResult(False, error_message=ERR_OVER_MAX)

    if score1 == MAX_SCORE and score2 == MAX_SCORE:
        return GameScoreResult(False, error_message=ERR_BOTH_AT_MAX)

    for score, opponent, side in ((score1, score2, TEAM1), (score2, score1, TEAM2)):
        verdict = _check_side(score, opponent, side)
        if verdict is not None:
            return verdict

    # 21-20 cannot be recorded: play goes on to 22 or 21-21
    if {score1, score2} == {WINNING_SCORE, DEUCE_SCORE}:
        return GameScoreResult(False, error_message=ERR_DEUCE_MARGIN)

    # Deuce: the leader needs a two point margin
    if score1 >= DEUCE_SCORE and score2 >= DEUCE_SCORE:
        if abs(score1 - score2) >= MIN_WINNING_MARGIN:
            return GameScoreResult(True, winner=TEAM1 if score1 > score2 else TEAM2)
        return GameScoreResult(True)

    # Opponent is below 20 from here on
    for score, side in ((score1, TEAM1), (score2, TEAM2)):
        if score == WINNING_SCORE:
            return GameScoreResult(True, winner=side)

    for score, opponent in ((score1, score2), (score2, score1)):
        if score > WINNING_SCORE and opponent < DEUCE_SCORE:
            return GameScoreResult(False, error_message=ERR_OVER_WINNING)

    # Still in progress
    return GameScoreResult(True)
