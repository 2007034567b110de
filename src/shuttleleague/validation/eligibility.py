"""Gender eligibility of a player for one side of a match."""

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

from typing import Dict, List, Mapping, Sequence

from shuttleleague.constants import (
    FEMALE,
    MALE,
    MENS_DOUBLES,
    MIXED_DOUBLES,
    PLAYERS_PER_SIDE,
    WOMENS_DOUBLES,
)
from shuttleleague.models.player import Player
from shuttleleague.type_hints import Gender, PlayerLookup
from shuttleleague.utils import setup_logger
from shuttleleague.utils.validation import ValidationResult

logger = setup_logger(__name__)

ERR_MENS_ONLY = "Men's Doubles matches can only include male players"
ERR_WOMENS_ONLY = "Women's Doubles matches can only include female players"
ERR_MIXED_PAIR = "Mixed Doubles requires one male and one female player per team"
ERR_MIXED_FULL = f"Mixed Doubles can only have {PLAYERS_PER_SIDE} players per team"

# Match types restricted to a single gender
SINGLE_GENDER_TYPES = {
    MENS_DOUBLES: (MALE, ERR_MENS_ONLY),
    WOMENS_DOUBLES: (FEMALE, ERR_WOMENS_ONLY),
}


def as_player_map(
    players: PlayerLookup,
) -> Dict[str, Player]:
    """Normalise a player lookup (mapping or iterable) to ``{id: Player}``."""
    if players is None:
        return {}
    if isinstance(players, Mapping):
        return dict(players)
    return {p.id: p for p in players}


def validate_player_gender_for_match(
    match_type: str,
    player_gender: Gender,
    existing_player_ids: Sequence[str],
    all_players: PlayerLookup,
) -> ValidationResult:
    """Check whether a player may join one side of a match.

    Only the target side's current players are considered; round-wide
    limits are checked by :mod:`shuttleleague.validation.round_rules`.

    Args:
        match_type: Men's, Mixed or Women's Doubles
        player_gender: Gender of the player being added
        existing_player_ids: Player ids already on that side
        all_players: Lookup used to find the genders of existing players

    Returns:
        ValidationResult with validation status
    """
    players_by_id = as_player_map(all_players)
    existing_genders: List[Gender] = [
        players_by_id[pid].gender for pid in existing_player_ids if pid in players_by_id
    ]

    if match_type in SINGLE_GENDER_TYPES:
        required, message = SINGLE_GENDER_TYPES[match_type]
        if player_gender != required or any(g != required for g in existing_genders):
            logger.debug(f"Rejected {player_gender} player for {match_type}")
            return ValidationResult.fail(message)
        return ValidationResult.ok()

    if match_type == MIXED_DOUBLES:
        if len(existing_player_ids) == 0:
            return ValidationResult.ok()
        if len(existing_player_ids) == 1:
            first_gender = existing_genders[0] if existing_genders else None
            if first_gender == player_gender:
                logger.debug(f"Rejected second {player_gender} player for mixed side")
                return ValidationResult.fail(ERR_MIXED_PAIR)
            return ValidationResult.ok()
        # Callers cap doubles sides before asking
        return ValidationResult.fail(ERR_MIXED_FULL)

    return ValidationResult.ok()
