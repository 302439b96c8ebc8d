"""Pairing algorithms: Swiss search, round-robin schedule and force-pairing."""

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

from ttpairing.pairing.open_pairings import (
    calculate_pairing_difference,
    force_pairing,
    generate_all_pairings,
    players_with_bye,
    select_unique_participant_matches,
)
from ttpairing.pairing.round_robin import RoundRobin, create_round_robin
from ttpairing.pairing.search_budget import SearchBudget
from ttpairing.pairing.swiss import create_swiss_pairings

__all__ = [
    "RoundRobin",
    "SearchBudget",
    "calculate_pairing_difference",
    "create_round_robin",
    "create_swiss_pairings",
    "force_pairing",
    "generate_all_pairings",
    "players_with_bye",
    "select_unique_participant_matches",
]
