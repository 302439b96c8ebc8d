"""Data models for TT Pairing."""

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

from ttpairing.models.enums import TournamentMode
from ttpairing.models.pairing import Finished, Pairing, RoundResult
from ttpairing.models.participant import Participant

__all__ = ["Finished", "Pairing", "Participant", "RoundResult", "TournamentMode"]
