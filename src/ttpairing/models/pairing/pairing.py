"""Pairing: one scheduled match or bye within a round."""

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
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from ttpairing.constants import (
    BYE_LABEL,
    EMPTY_RESULT,
    MAX_GAMES,
    RESULT_SEPARATOR,
    UNASSIGNED_TABLE,
)
from ttpairing.exceptions import InvalidResultException
from ttpairing.models.participant import Participant
from ttpairing.type_hints import GameScore, MaybeParticipant
from ttpairing.utils.validation import validate_game_score_strict


def _empty_game_scores() -> List[GameScore]:
    return [(EMPTY_RESULT, EMPTY_RESULT) for _ in range(MAX_GAMES)]


@dataclass(eq=False)
class Pairing:
    """A contest between two participants, or a bye when ``second`` is None.

    Pairings compare by identity. Two records with the same participants are
    different matches unless they are the same object, which is what the
    standings deduplication and history bookkeeping rely on.

    Attributes
    ----------
    first : Participant
        First participant, or the bye recipient.
    second : Participant or None
        Opponent, ``None`` for a bye.
    table : int
        Assigned table, ``UNASSIGNED_TABLE`` until the round is accepted.
    game_scores : list of (str, str)
        Raw per-game rally scores, ``MAX_GAMES`` slots, empty strings for
        games not played.
    overall_result : str
        Sets won by each side as ``"first:second"``, empty until entered.
    """

    first: Participant
    second: MaybeParticipant = None
    table: int = UNASSIGNED_TABLE
    game_scores: List[GameScore] = field(default_factory=_empty_game_scores)
    overall_result: str = EMPTY_RESULT

    @property
    def is_bye(self) -> bool:
        return self.second is None

    @property
    def participants(self) -> Tuple[Participant, ...]:
        if self.second is None:
            return (self.first,)
        return (self.first, self.second)

    @property
    def key(self) -> FrozenSet[Optional[Participant]]:
        """Order-independent identity of who meets whom (byes included)."""
        return frozenset({self.first, self.second})

    @property
    def has_result(self) -> bool:
        """Whether an overall result other than blank has been entered."""
        result = (self.overall_result or "").strip()
        return result not in (EMPTY_RESULT, RESULT_SEPARATOR)

    def involves(self, participant: Participant) -> bool:
        return participant in self.participants

    def opponent_of(self, participant: Participant) -> MaybeParticipant:
        """Return the other side of the pairing, ``None`` for a bye.

        Raises:
            ValueError: If ``participant`` does not play in this pairing
        """
        if self.first == participant:
            return self.second
        if self.second is not None and self.second == participant:
            return self.first
        raise ValueError(f"{participant} does not play in {self}")

    def set_game_score(self, index: int, first_score: Any, second_score: Any) -> None:
        """Store the rally score of one game.

        Raises:
            InvalidResultException: If the slot is out of range or a score is
                not a non-negative whole number
        """
        if not 0 <= index < MAX_GAMES:
            raise InvalidResultException(
                f"Game index must be between 0 and {MAX_GAMES - 1}: {index}"
            )
        self.game_scores[index] = (
            validate_game_score_strict(first_score),
            validate_game_score_strict(second_score),
        )

    def set_game_scores(self, scores: Sequence[Tuple[Any, Any]]) -> None:
        """Replace all game scores; missing trailing games are left blank."""
        if len(scores) > MAX_GAMES:
            raise InvalidResultException(
                f"At most {MAX_GAMES} games per match, got {len(scores)}"
            )
        validated = [
            (validate_game_score_strict(a), validate_game_score_strict(b))
            for a, b in scores
        ]
        self.game_scores = validated + _empty_game_scores()[len(validated):]

    def clear_result(self) -> None:
        self.game_scores = _empty_game_scores()
        self.overall_result = EMPTY_RESULT

    def to_dict(self, index_of: Dict[Participant, int]) -> Dict[str, Any]:
        """Serialize with participants referenced by list index."""
        return {
            "first": index_of[self.first],
            "second": None if self.second is None else index_of[self.second],
            "table": self.table,
            "game_scores": [list(score) for score in self.game_scores],
            "overall_result": self.overall_result,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], participants: Sequence[Participant]
    ) -> "Pairing":
        """Deserialize a pairing against the saved participant list."""
        second_index = data.get("second")
        scores = [tuple(score) for score in data.get("game_scores", [])]
        pairing = cls(
            first=participants[data["first"]],
            second=None if second_index is None else participants[second_index],
            table=data.get("table", UNASSIGNED_TABLE),
            overall_result=data.get("overall_result", EMPTY_RESULT),
        )
        if scores:
            pairing.set_game_scores(scores)
        return pairing

    def __str__(self) -> str:
        if self.second is None:
            return f"{self.first} - {BYE_LABEL}"
        text = f"{self.first} vs. {self.second}"
        if self.table != UNASSIGNED_TABLE:
            text += f" - Table {self.table}"
        return text
