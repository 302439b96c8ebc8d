"""Standings calculation for tournaments.

This module rebuilds every participant's match statistics from the match
history and ranks the field.
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

import re
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ttpairing.constants import (
    BYE_BALLS_AWARDED,
    BYE_POINTS,
    BYE_SETS_AWARDED,
    ROUND_ROBIN_RANKING_ORDER,
    SWISS_RANKING_ORDER,
    TB_BALL_DIFFERENCE,
    TB_BUCHHOLZ,
    TB_FEIN_BUCHHOLZ,
    TB_POINTS,
    TB_RATING,
    TB_SET_DIFFERENCE,
    WIN_POINTS,
)
from ttpairing.models.enums import TournamentMode
from ttpairing.models.pairing import Pairing
from ttpairing.models.participant import Participant
from ttpairing.utils import setup_logger

logger = setup_logger(__name__)

_RESULT_PATTERN = re.compile(r"^\s*(\d+)\s*:\s*(\d+)\s*$")
_BALLS_PATTERN = re.compile(r"^\s*(\d+)\s*$")


def parse_overall_result(result: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse ``"a:b"`` into set counts; None for anything else."""
    if result is None:
        return None
    match = _RESULT_PATTERN.match(str(result))
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def _parse_balls(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    match = _BALLS_PATTERN.match(str(value))
    return int(match.group(1)) if match else None


def deduplicate_pairings(pairings: Iterable[Pairing]) -> List[Pairing]:
    """Keep the first bye of each participant and each match object once."""
    seen_byes: Set[Participant] = set()
    seen_matches: Set[int] = set()
    result = []
    for pairing in pairings:
        if pairing.is_bye:
            if pairing.first in seen_byes:
                continue
            seen_byes.add(pairing.first)
        else:
            if id(pairing) in seen_matches:
                continue
            seen_matches.add(id(pairing))
        result.append(pairing)
    return result


def _tiebreak_value(participant: Participant, key: str) -> int:
    if key == TB_POINTS:
        return participant.points
    if key == TB_BUCHHOLZ:
        return participant.buchholz
    if key == TB_FEIN_BUCHHOLZ:
        return participant.fein_buchholz
    if key == TB_SET_DIFFERENCE:
        return participant.set_difference
    if key == TB_BALL_DIFFERENCE:
        return participant.ball_difference
    if key == TB_RATING:
        return participant.rating
    raise ValueError(f"Unknown tiebreak: {key}")


def ranking_order(mode: TournamentMode) -> List[str]:
    """Tiebreak chain for ``mode``, most significant first."""
    if mode == TournamentMode.ROUND_ROBIN:
        return list(ROUND_ROBIN_RANKING_ORDER)
    return list(SWISS_RANKING_ORDER)


def ranking_key(participant: Participant, mode: TournamentMode) -> Tuple[int, ...]:
    """Comparable chain values; larger tuples rank higher."""
    return tuple(_tiebreak_value(participant, key) for key in ranking_order(mode))


def sort_standings(
    participants: Iterable[Participant], mode: TournamentMode
) -> List[Participant]:
    """Return participants best first, ties beyond the chain broken by name."""
    by_name = sorted(
        participants, key=lambda p: (p.last_name, p.first_name, p.club)
    )
    return sorted(by_name, key=lambda p: ranking_key(p, mode), reverse=True)


class StandingsCalculator:
    """Derives points, set and ball counts and the Buchholz tiebreaks.

    Every call to :meth:`recompute` resets the participants first, so the
    result depends only on the history passed in.
    """

    def recompute(
        self, participants: Sequence[Participant], full_history: Iterable[Pairing]
    ) -> None:
        """Rebuild the statistics of ``participants`` in place.

        Args:
            participants: The field; their derived fields are overwritten
            full_history: Every pairing so far, current round included

        Malformed results are skipped, never raised.
        """
        for participant in participants:
            participant.reset_statistics()

        pairings = deduplicate_pairings(full_history)
        opponents: Dict[Participant, List[Participant]] = {
            p: [] for p in participants
        }

        for pairing in pairings:
            if pairing.is_bye:
                self._apply_bye(pairing.first)
                continue
            opponents.setdefault(pairing.first, []).append(pairing.second)
            opponents.setdefault(pairing.second, []).append(pairing.first)
            self._apply_result(pairing)

        for participant in participants:
            participant.buchholz = sum(o.points for o in opponents[participant])
        for participant in participants:
            participant.fein_buchholz = sum(
                o.buchholz for o in opponents[participant]
            )

        logger.debug(
            f"Recomputed standings for {len(participants)} participants "
            f"from {len(pairings)} pairings"
        )

    @staticmethod
    def _apply_bye(participant: Participant) -> None:
        participant.points += BYE_POINTS
        participant.wins += 1
        participant.sets_won += BYE_SETS_AWARDED
        participant.balls_won += BYE_BALLS_AWARDED

    @staticmethod
    def _apply_result(pairing: Pairing) -> None:
        sets = parse_overall_result(pairing.overall_result)
        if sets is None:
            if pairing.has_result:
                logger.warning(
                    f"Skipping malformed result {pairing.overall_result!r} for {pairing}"
                )
            return

        first, second = pairing.first, pairing.second
        first_sets, second_sets = sets
        if first_sets > second_sets:
            first.points += WIN_POINTS
            first.wins += 1
            second.losses += 1
        elif second_sets > first_sets:
            second.points += WIN_POINTS
            second.wins += 1
            first.losses += 1

        first.sets_won += first_sets
        first.sets_lost += second_sets
        second.sets_won += second_sets
        second.sets_lost += first_sets

        for score in pairing.game_scores:
            try:
                first_balls, second_balls = score
            except (TypeError, ValueError):
                logger.warning(
                    f"Skipping malformed game score {score!r} for {pairing}"
                )
                continue
            a = _parse_balls(first_balls)
            b = _parse_balls(second_balls)
            if a is None or b is None:
                continue
            first.balls_won += a
            first.balls_lost += b
            second.balls_won += b
            second.balls_lost += a
