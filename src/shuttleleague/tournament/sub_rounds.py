"""Split a six-match round into two sub-rounds with disjoint players.

Within a sub-round no player appears in more than one match, so the two
sub-rounds can be run as two simultaneous sessions.
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
from itertools import combinations
from typing import FrozenSet, List, Optional, Sequence

from shuttleleague.constants import SUB_ROUND_GROUP_SIZE, SUB_ROUND_MATCH_COUNT
from shuttleleague.models.match import Match
from shuttleleague.models.round import Round, SubRounds
from shuttleleague.utils import setup_logger

logger = setup_logger(__name__)


class SubRoundArranger:
    """Finds a conflict-free 3 + 3 split of a round's matches.

    Candidates for the first group are the 20 index triples of
    ``itertools.combinations(range(6), 3)`` in lexicographic order; the
    complement is the second group. The first candidate whose two groups
    are both free of player overlap wins.
    """

    def is_applicable(self, round_data: Round) -> bool:
        """Exactly six matches, every side holding exactly two players."""
        return len(round_data.matches) == SUB_ROUND_MATCH_COUNT and all(
            match.is_fully_staffed for match in round_data.matches
        )

    def arrange(self, round_data: Round) -> Optional[SubRounds]:
        """Compute a sub-round split.

        Args:
            round_data: The round to split

        Returns:
            The first valid split, or None if the round is not eligible or
            no split exists
        """
        if not self.is_applicable(round_data):
            return None

        matches = round_data.matches
        player_sets = [frozenset(m.all_player_ids) for m in matches]
        all_indices = range(len(matches))

        for first in combinations(all_indices, SUB_ROUND_GROUP_SIZE):
            second = tuple(i for i in all_indices if i not in first)
            if self._conflict_free(player_sets, first) and self._conflict_free(
                player_sets, second
            ):
                return SubRounds.of(
                    [matches[i].id for i in first], [matches[i].id for i in second]
                )

        logger.debug(f"Round {round_data.id}: no conflict-free sub-round split")
        return None

    def refresh(self, round_data: Round) -> Optional[Round]:
        """Recompute the split and report whether the stored one must change.

        Returns:
            A copy of the round carrying the fresh split (or no split), or
            None when the stored split already matches
        """
        fresh = self.arrange(round_data)
        stored = round_data.sub_rounds

        if fresh is None and stored is None:
            return None
        if fresh is not None and fresh.same_partition(stored):
            return None

        logger.debug(f"Round {round_data.id}: sub-rounds updated to {fresh}")
        return replace(round_data, sub_rounds=fresh)

    @staticmethod
    def _conflict_free(
        player_sets: Sequence[FrozenSet[str]], indices: Sequence[int]
    ) -> bool:
        seen: set = set()
        for i in indices:
            if seen & player_sets[i]:
                return False
            seen |= player_sets[i]
        return True


def arrange_sub_rounds(round_data: Round) -> Optional[SubRounds]:
    """Compute the sub-round split of a round, or None."""
    return SubRoundArranger().arrange(round_data)


def refresh_sub_rounds(round_data: Round) -> Optional[Round]:
    """Return the round with a recomputed split, or None if nothing changed."""
    return SubRoundArranger().refresh(round_data)


def with_fresh_sub_rounds(round_data: Round) -> Round:
    """The round with its split brought up to date (unchanged if already current)."""
    return refresh_sub_rounds(round_data) or round_data


def group_matches(round_data: Round, group: Sequence[str]) -> List[Match]:
    """Match records of one sub-round group, in group order."""
    by_id = {m.id: m for m in round_data.matches}
    return [by_id[match_id] for match_id in group if match_id in by_id]
