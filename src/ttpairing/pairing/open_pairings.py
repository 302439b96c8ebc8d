"""Open pairings and the force-pairing fallback.

An *open* pairing is one that has not happened yet: a pair of participants
who never met, or a bye for someone who never had one. When the Swiss search
comes up empty, the round is built from open pairings alone by taking the
first selection that seats every participant exactly once.
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

from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ttpairing.models.pairing import Pairing
from ttpairing.models.participant import Participant
from ttpairing.pairing.search_budget import SearchBudget
from ttpairing.utils import setup_logger

logger = setup_logger(__name__)


def generate_all_pairings(participants: Sequence[Participant]) -> List[Pairing]:
    """Every unordered pair, plus one bye per participant in an odd field."""
    all_pairings = [
        Pairing(participants[i], participants[j])
        for i in range(len(participants) - 1)
        for j in range(i + 1, len(participants))
    ]
    if len(participants) % 2:
        all_pairings.extend(Pairing(p) for p in participants)
    return all_pairings


def players_with_bye(pairings: Iterable[Pairing]) -> Set[Participant]:
    return {p.first for p in pairings if p.is_bye}


def calculate_pairing_difference(
    all_pairings: Iterable[Pairing],
    played: Iterable[Pairing],
    bye_recipients: AbstractSet[Participant],
) -> List[Pairing]:
    """Drop every candidate that already happened.

    Args:
        all_pairings: Candidate pairings
        played: Pairings already in the history
        bye_recipients: Participants whose bye is used up

    Returns:
        Candidates in their original order
    """
    played_keys = {p.key for p in played}
    return [
        pairing
        for pairing in all_pairings
        if pairing.key not in played_keys
        and not (pairing.is_bye and pairing.first in bye_recipients)
    ]


class _CoverSearch:
    """Backtracking over candidate pairings until everyone is seated once."""

    def __init__(
        self,
        candidates: Sequence[Pairing],
        participants: Sequence[Participant],
        budget: SearchBudget,
    ):
        self.index_of: Dict[Participant, int] = {
            p: i for i, p in enumerate(participants)
        }
        self.full_mask = (1 << len(participants)) - 1
        self.options: List[List[Tuple[int, Pairing]]] = [[] for _ in participants]
        for pairing in candidates:
            mask = 0
            for participant in pairing.participants:
                mask |= 1 << self.index_of[participant]
            for participant in pairing.participants:
                self.options[self.index_of[participant]].append((mask, pairing))
        self.budget = budget
        self._failed: Set[Tuple[int, bool]] = set()
        self.selected: List[Pairing] = []

    def run(self, used: int, bye_taken: bool) -> bool:
        if used == self.full_mask:
            return True
        if (used, bye_taken) in self._failed:
            return False
        self.budget.tick()

        free = ~used & self.full_mask
        i = (free & -free).bit_length() - 1
        for mask, pairing in self.options[i]:
            if used & mask:
                continue
            if pairing.is_bye and bye_taken:
                continue
            self.selected.append(pairing)
            if self.run(used | mask, bye_taken or pairing.is_bye):
                return True
            self.selected.pop()

        self._failed.add((used, bye_taken))
        return False


def select_unique_participant_matches(
    candidates: Sequence[Pairing],
    participants: Sequence[Participant],
    budget: SearchBudget,
) -> Optional[List[Pairing]]:
    """Pick candidates covering every participant exactly once.

    At most one bye is used. Candidates are tried in the given order and the
    first complete selection wins.

    Returns:
        The selected pairings, or None when no covering exists

    Raises:
        SearchBudgetExceeded: If the budget runs out
    """
    if not participants:
        return None
    search = _CoverSearch(candidates, participants, budget)
    if not search.run(0, False):
        logger.info(f"No covering selection among {len(candidates)} open pairings")
        return None
    return list(search.selected)


def force_pairing(
    participants: Sequence[Participant],
    history: Sequence[Pairing],
    budget: SearchBudget,
) -> Optional[List[Pairing]]:
    """Build a round from open pairings only, ignoring rankings."""
    open_pairings = calculate_pairing_difference(
        generate_all_pairings(participants), history, players_with_bye(history)
    )
    return select_unique_participant_matches(open_pairings, participants, budget)
