"""
Round Robin Tournament Pairing System

This module implements the circle method for round-robin schedules. Every
participant meets every other participant exactly once; with an odd field a
placeholder seat is added and whoever is drawn against it receives the bye.

Seats are ordered by rating, lowest first. Seat 0 stays fixed while the
remaining seats rotate one position per round.

Example:
    >>> rr = RoundRobin(participants)
    >>> rr.number_of_rounds
    3
    >>> matches, bye = rr.get_round_pairings(1)
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

from typing import Iterable, List, Optional, Tuple

from ttpairing.exceptions import (
    NoPairingAvailableException,
    PairingException,
    ParticipantNotFoundException,
)
from ttpairing.models.participant import Participant
from ttpairing.type_hints import Pairings, RoundSchedule
from ttpairing.utils import setup_logger

logger = setup_logger(__name__)


def circle_schedule(seat_count: int) -> Tuple[RoundSchedule, ...]:
    """Build the complete circle-method schedule for ``seat_count`` seats.

    Args:
        seat_count: Number of seats, must be even and at least 2

    Returns:
        One tuple of seat-index pairs per round, ``seat_count - 1`` rounds
    """
    if seat_count < 2 or seat_count % 2:
        raise PairingException(f"Circle method needs an even seat count: {seat_count}")

    rotating = list(range(1, seat_count))
    length = len(rotating)
    rounds = []
    for offset in range(length):
        position = [rotating[(p + offset) % length] for p in range(length)]
        schedule = [(0, position[0])]
        for k in range(1, seat_count // 2):
            schedule.append((position[k], position[length - k]))
        rounds.append(tuple(schedule))
    return tuple(rounds)


class RoundRobin:
    """
    A complete round-robin schedule for a fixed field.

    Attributes:
        participants: Seat order, lowest rating first
        number_of_rounds: ``n - 1`` for even fields, ``n`` for odd fields
        round_pairings: Matches and bye recipient for each round
    """

    def __init__(self, participants: Iterable[Participant]) -> None:
        """
        Raises:
            PairingException: If fewer than two participants are given
        """
        self.participants = tuple(sorted(participants, key=lambda p: p.rating))
        n_participants = len(self.participants)

        if n_participants < 2:
            logger.error(
                f"Invalid participant count for round robin: {n_participants}"
            )
            raise PairingException(
                f"Round robin needs at least 2 participants, got {n_participants}"
            )

        self.seat_count = n_participants + n_participants % 2
        self.schedule = circle_schedule(self.seat_count)
        self.number_of_rounds = len(self.schedule)
        self._generate_all_pairings()

    def _seat(self, index: int) -> Optional[Participant]:
        if index >= len(self.participants):
            return None
        return self.participants[index]

    def _generate_all_pairings(self) -> None:
        self.round_pairings: List[Pairings] = []

        for round_idx, round_schedule in enumerate(self.schedule):
            matches = []
            bye_participant = None
            for first_seat, second_seat in round_schedule:
                first = self._seat(first_seat)
                second = self._seat(second_seat)
                if first is None or second is None:
                    bye_participant = first if second is None else second
                    continue
                matches.append((first, second))

            logger.debug(
                f"Round {round_idx + 1}: {len(matches)} matches, bye: {bye_participant}"
            )
            self.round_pairings.append((matches, bye_participant))

        logger.info(
            f"Generated round robin schedule: {len(self.participants)} participants, "
            f"{self.number_of_rounds} rounds"
        )

    def get_round_pairings(self, round_number: int) -> Pairings:
        """
        Get pairings for a specific round.

        Args:
            round_number: 1-indexed round number

        Raises:
            NoPairingAvailableException: If round_number is outside the schedule
        """
        if not (1 <= round_number <= self.number_of_rounds):
            raise NoPairingAvailableException(
                f"Round {round_number} is not valid. Tournament has "
                f"{self.number_of_rounds} rounds (1-{self.number_of_rounds})"
            )
        return self.round_pairings[round_number - 1]

    def get_participant_schedule(
        self, participant: Participant
    ) -> List[Tuple[int, Optional[Participant]]]:
        """
        List ``(round_number, opponent)`` for one participant, opponent
        ``None`` on the bye round.

        Raises:
            ParticipantNotFoundException: If participant is not in the schedule
        """
        if participant not in self.participants:
            raise ParticipantNotFoundException(f"{participant} is not in this tournament")

        schedule = []
        for round_idx, (matches, bye_participant) in enumerate(self.round_pairings):
            opponent = None
            if bye_participant != participant:
                for first, second in matches:
                    if participant in (first, second):
                        opponent = second if first == participant else first
                        break
            schedule.append((round_idx + 1, opponent))
        return schedule

    def __repr__(self) -> str:
        return (
            f"RoundRobin(participants={len(self.participants)}, "
            f"rounds={self.number_of_rounds})"
        )


def create_round_robin(participants: Iterable[Participant]) -> RoundRobin:
    """Create the complete round-robin schedule for ``participants``."""
    return RoundRobin(participants)
