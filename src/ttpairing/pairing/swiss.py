"""Swiss system pairing.

Participants are matched from the top of the ranking downwards. Each
participant takes the closest-scored opponent they have not met yet, with
ties resolved towards the higher rating. A trial pair is only kept when the
rest of the field can still be completely paired, so the search never paints
itself into a corner. With an odd field the lowest-ranked participant without
a previous bye sits out; if no pairing exists around that bye, the next
candidate is tried.

The search works on participant indices with integer bitmasks of used seats.
"""

# TT Pairing
# Copyright (C) 2025  TT Pairing developers
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

from typing import AbstractSet, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from ttpairing.exceptions import PairingException
from ttpairing.models.participant import Participant
from ttpairing.pairing.search_budget import SearchBudget
from ttpairing.type_hints import Pairings
from ttpairing.utils import setup_logger

logger = setup_logger(__name__)

PlayedPairs = AbstractSet[FrozenSet[Participant]]


class SwissMatcher:
    """Backtracking matcher for one pool of participants.

    Args:
        ranked: Participants to pair, best ranked first
        played: Unordered pairs that already met
        budget: Shared node counter
    """

    def __init__(
        self,
        ranked: Sequence[Participant],
        played: PlayedPairs,
        budget: SearchBudget,
    ):
        self.ranked = list(ranked)
        self.budget = budget
        size = len(self.ranked)
        self.full_mask = (1 << size) - 1

        # compatible[i]: bitmask of everyone i has not met yet
        self.compatible: List[int] = [0] * size
        self.candidates: List[List[int]] = []
        for i, participant in enumerate(self.ranked):
            for j, other in enumerate(self.ranked):
                if i != j and frozenset((participant, other)) not in played:
                    self.compatible[i] |= 1 << j
            order = [j for j in range(size) if self.compatible[i] >> j & 1]
            order.sort(
                key=lambda j: (
                    abs(self.ranked[j].points - participant.points),
                    -self.ranked[j].rating,
                )
            )
            self.candidates.append(order)

        self._memo: Dict[int, bool] = {}
        self._pairs: List[Tuple[int, int]] = []

    def _lowest_free(self, used: int) -> int:
        free = ~used & self.full_mask
        return (free & -free).bit_length() - 1

    def _completable(self, used: int) -> bool:
        """Exact check that the free participants admit a perfect matching."""
        if used == self.full_mask:
            return True
        if used in self._memo:
            return self._memo[used]
        self.budget.tick()

        i = self._lowest_free(used)
        open_opponents = self.compatible[i] & ~used
        result = False
        j = 0
        while open_opponents and not result:
            if open_opponents & 1:
                result = self._completable(used | (1 << i) | (1 << j))
            open_opponents >>= 1
            j += 1

        self._memo[used] = result
        return result

    def _search(self, used: int) -> bool:
        if used == self.full_mask:
            return True
        self.budget.tick()

        i = self._lowest_free(used)
        for j in self.candidates[i]:
            if used >> j & 1:
                continue
            trial = used | (1 << i) | (1 << j)
            if not self._completable(trial):
                continue
            logger.debug(f"Trial pair {self.ranked[i]} vs. {self.ranked[j]}")
            self._pairs.append((i, j))
            if self._search(trial):
                return True
            self._pairs.pop()
        return False

    def match(self) -> Optional[List[Tuple[Participant, Participant]]]:
        """Return the pairs in ranking order, or None if the pool cannot be paired.

        Raises:
            SearchBudgetExceeded: If the budget runs out first
        """
        if len(self.ranked) % 2:
            raise PairingException(
                f"Cannot pair an odd pool of {len(self.ranked)} participants"
            )
        self._pairs = []
        if not self._completable(0) or not self._search(0):
            return None
        return [(self.ranked[i], self.ranked[j]) for i, j in self._pairs]


def select_bye_candidate(
    ranked: Sequence[Participant],
    bye_recipients: AbstractSet[Participant],
    excluded: AbstractSet[Participant],
) -> Optional[Participant]:
    """Lowest-ranked participant who has had no bye and is not excluded."""
    for participant in reversed(ranked):
        if participant not in bye_recipients and participant not in excluded:
            return participant
    return None


def create_swiss_pairings(
    ranked: Sequence[Participant],
    played: PlayedPairs,
    bye_recipients: AbstractSet[Participant],
    budget: SearchBudget,
) -> Optional[Pairings]:
    """Pair one Swiss round.

    Args:
        ranked: All participants, best ranked first
        played: Unordered pairs that already met
        bye_recipients: Participants who already had a bye
        budget: Node counter shared by every attempt of this round

    Returns:
        ``(matches, bye)`` or None when the primary algorithm finds nothing
        and the caller should fall back to force-pairing

    Raises:
        SearchBudgetExceeded: If the budget runs out
    """
    ranked = list(ranked)
    if len(ranked) % 2 == 0:
        matches = SwissMatcher(ranked, played, budget).match()
        if matches is None:
            logger.info("Swiss search exhausted without a bye")
            return None
        return matches, None

    excluded: Set[Participant] = set()
    while True:
        bye = select_bye_candidate(ranked, bye_recipients, excluded)
        if bye is None:
            logger.info("No bye candidate left for the Swiss search")
            return None

        pool = [p for p in ranked if p is not bye]
        matches = SwissMatcher(pool, played, budget).match()
        if matches is not None:
            return matches, bye

        logger.info(f"No Swiss pairing with bye for {bye}, trying next candidate")
        excluded.add(bye)


def played_pairs(
    pairs: Sequence[Tuple[Participant, Optional[Participant]]],
) -> Set[FrozenSet[Participant]]:
    """Collect the unordered non-bye pairs from ``(first, second)`` tuples."""
    return {frozenset((a, b)) for a, b in pairs if b is not None}


__all__: List[str] = [
    "SwissMatcher",
    "create_swiss_pairings",
    "played_pairs",
    "select_bye_candidate",
]
