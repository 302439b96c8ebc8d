"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and error checking.
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

from typing import Iterable, Optional, Sequence, Tuple

from ttpairing.constants import EMPTY_RESULT, MAX_GAMES, RESULT_SEPARATOR
from ttpairing.controllers.tournament.standings_calculator import parse_overall_result
from ttpairing.exceptions import InvalidResultException
from ttpairing.models.pairing import Pairing
from ttpairing.type_hints import GameScore, GameScoreInput
from ttpairing.utils import setup_logger
from ttpairing.utils.validation import validate_game_score_strict

logger = setup_logger(__name__)


def derive_overall_result(game_scores: Iterable[GameScore]) -> str:
    """Count games won by each side and format them as ``"a:b"``.

    Games with a missing or tied score are not counted. Returns an empty
    string when no game was decided.
    """
    first_games = second_games = 0
    for first, second in game_scores:
        if not first or not second:
            continue
        if int(first) > int(second):
            first_games += 1
        elif int(second) > int(first):
            second_games += 1
    if first_games == second_games == 0:
        return EMPTY_RESULT
    return f"{first_games}{RESULT_SEPARATOR}{second_games}"


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating per-game rally scores
    - Deriving the overall set result from the games
    - Telling whether a round is ready to be closed
    """

    def record_result(
        self,
        pairing: Pairing,
        game_scores: Sequence[GameScoreInput],
        overall_result: Optional[str] = None,
    ) -> Pairing:
        """Record the result of one match.

        Args:
            pairing: The match to record
            game_scores: Up to five ``(first, second)`` rally scores
            overall_result: Explicit ``"a:b"`` set count; derived from the
                games when omitted

        Returns:
            The updated pairing

        Raises:
            InvalidResultException: If the pairing is a bye or any score is
                invalid; the pairing is left untouched
        """
        if pairing.is_bye:
            raise InvalidResultException(f"Cannot record a result for a bye: {pairing}")
        if len(game_scores) > MAX_GAMES:
            raise InvalidResultException(
                f"At most {MAX_GAMES} games per match, got {len(game_scores)}"
            )

        validated: Tuple[GameScore, ...] = tuple(
            (validate_game_score_strict(a), validate_game_score_strict(b))
            for a, b in game_scores
        )

        if overall_result is None:
            result = derive_overall_result(validated)
        else:
            result = overall_result.strip()
            if result and parse_overall_result(result) is None:
                raise InvalidResultException(
                    f"Overall result must look like '3:1': {overall_result!r}"
                )

        pairing.set_game_scores(validated)
        pairing.overall_result = result
        logger.info(f"Recorded {result or 'no result'} for {pairing}")
        return pairing

    def clear_result(self, pairing: Pairing) -> None:
        pairing.clear_result()

    def is_round_complete(self, pairings: Iterable[Pairing]) -> bool:
        """True when every non-bye pairing carries a result."""
        return all(p.has_result for p in pairings if not p.is_bye)

    def has_results(self, pairings: Iterable[Pairing]) -> bool:
        """True when any non-bye pairing carries a result."""
        return any(p.has_result for p in pairings if not p.is_bye)

    def missing_results(self, pairings: Iterable[Pairing]) -> list:
        return [p for p in pairings if not p.is_bye and not p.has_result]
