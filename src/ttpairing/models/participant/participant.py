"""Participant in a table tennis tournament."""

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
from typing import Any, Dict, Tuple

from ttpairing.utils.validation import validate_name_strict, validate_rating_strict


@dataclass(unsafe_hash=True)
class Participant:
    """
    A competitor and their derived ranking statistics.

    Identity is the ``(first_name, last_name, club, rating)`` tuple: two
    participants are equal, and hash alike, only when all four match. All
    other attributes are derived by the standings calculator and are
    excluded from comparison.

    Attributes
    ----------
    first_name : str
        Given name.
    last_name : str
        Family name.
    club : str
        Club affiliation.
    rating : int
        External TTR rating, 0 when unrated.
    points : int
        Match points (one per win, one per bye).
    wins, losses : int
        Decided matches.
    sets_won, sets_lost : int
        Games (sets) won and lost over all matches.
    balls_won, balls_lost : int
        Rally points won and lost over all games.
    buchholz : int
        Sum of the points of every non-bye opponent.
    fein_buchholz : int
        Sum of the Buchholz scores of every non-bye opponent.
    """

    first_name: str
    last_name: str
    club: str
    rating: int = 0

    points: int = field(default=0, compare=False)
    wins: int = field(default=0, compare=False)
    losses: int = field(default=0, compare=False)
    sets_won: int = field(default=0, compare=False)
    sets_lost: int = field(default=0, compare=False)
    balls_won: int = field(default=0, compare=False)
    balls_lost: int = field(default=0, compare=False)
    buchholz: int = field(default=0, compare=False)
    fein_buchholz: int = field(default=0, compare=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def identity(self) -> Tuple[str, str, str, int]:
        return (self.first_name, self.last_name, self.club, self.rating)

    @property
    def set_difference(self) -> int:
        return self.sets_won - self.sets_lost

    @property
    def ball_difference(self) -> int:
        return self.balls_won - self.balls_lost

    def reset_statistics(self) -> None:
        """Zero every derived field."""
        self.points = 0
        self.wins = 0
        self.losses = 0
        self.sets_won = 0
        self.sets_lost = 0
        self.balls_won = 0
        self.balls_lost = 0
        self.buchholz = 0
        self.fein_buchholz = 0

    def statistics(self) -> Dict[str, int]:
        """Snapshot of the derived fields."""
        return {
            "points": self.points,
            "wins": self.wins,
            "losses": self.losses,
            "sets_won": self.sets_won,
            "sets_lost": self.sets_lost,
            "balls_won": self.balls_won,
            "balls_lost": self.balls_lost,
            "buchholz": self.buchholz,
            "fein_buchholz": self.fein_buchholz,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        data: Dict[str, Any] = {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "club": self.club,
            "rating": self.rating,
        }
        data.update(self.statistics())
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary.

        Statistics are restored as saved; they are rebuilt anyway on the
        next standings recomputation.
        """
        participant = cls(
            first_name=validate_name_strict(data.get("first_name"), "First name"),
            last_name=validate_name_strict(data.get("last_name"), "Last name"),
            club=validate_name_strict(data.get("club"), "Club"),
            rating=validate_rating_strict(data.get("rating")),
        )
        for key in participant.statistics():
            setattr(participant, key, int(data.get(key, 0)))
        return participant

    def __str__(self) -> str:
        return f"{self.full_name} ({self.club})"
