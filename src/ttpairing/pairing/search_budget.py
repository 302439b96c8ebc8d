"""Step counter shared by the backtracking searches."""

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

from ttpairing.constants import DEFAULT_SEARCH_BUDGET
from ttpairing.exceptions import SearchBudgetExceeded


class SearchBudget:
    """Counts visited search nodes and aborts once ``limit`` is passed."""

    def __init__(self, limit: int = DEFAULT_SEARCH_BUDGET):
        if limit < 1:
            raise ValueError(f"Search budget must be positive: {limit}")
        self.limit = limit
        self.steps = 0

    def tick(self) -> None:
        """Record one visited node.

        Raises:
            SearchBudgetExceeded: If the node count passes the limit
        """
        self.steps += 1
        if self.steps > self.limit:
            raise SearchBudgetExceeded(self.limit)

    @property
    def remaining(self) -> int:
        return max(self.limit - self.steps, 0)

    def __repr__(self) -> str:
        return f"SearchBudget(steps={self.steps}, limit={self.limit})"
