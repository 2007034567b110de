"""Rule checks for games, match eligibility and round assignments.

Every function here is a pure query: it returns a verdict and never raises
or mutates its inputs.
"""

from shuttleleague.validation.eligibility import validate_player_gender_for_match
from shuttleleague.validation.game_score import validate_game_score
from shuttleleague.validation.round_rules import (
    count_player_matches,
    duplicate_pairs,
    validate_player_addition_to_match,
    validate_round_player_assignments,
)

__all__ = [
    "count_player_matches",
    "duplicate_pairs",
    "validate_game_score",
    "validate_player_addition_to_match",
    "validate_player_gender_for_match",
    "validate_round_player_assignments",
]
