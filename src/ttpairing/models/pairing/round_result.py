"""Outcome of a round-generation request."""

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

from dataclasses import dataclass, field
from typing import List, Optional

from ttpairing.models.participant import Participant
from ttpairing.models.pairing.pairing import Pairing


@dataclass
class RoundResult:
    """Pairings produced for one round.

    ``pairings`` holds every Pairing of the round in table order followed by
    the bye, if any. ``forced`` is set when the round came from the
    force-pairing fallback rather than the primary algorithm.
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)
    forced: bool = False

    @property
    def matches(self) -> List[Pairing]:
        return [p for p in self.pairings if not p.is_bye]

    @property
    def bye(self) -> Optional[Participant]:
        for pairing in self.pairings:
            if pairing.is_bye:
                return pairing.first
        return None

    def __len__(self) -> int:
        return len(self.pairings)


@dataclass(frozen=True)
class Finished:
    """No further round can be generated."""

    round_number: int
    reason: str = ""
