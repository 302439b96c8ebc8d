"""Round generation for tournaments.

This module owns the match history of a tournament and produces the pairings
of each round, either from the round-robin schedule or from the Swiss
search with its force-pairing fallback. It also validates manual overrides
of the current round.
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

from itertools import cycle
from typing import FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ttpairing.constants import (
    DEFAULT_SEARCH_BUDGET,
    DEFAULT_TABLE_COUNT,
    MIN_PARTICIPANTS,
    UNASSIGNED_TABLE,
)
from ttpairing.controllers.tournament.standings_calculator import sort_standings
from ttpairing.exceptions import (
    InvalidConfigurationException,
    InvalidPairingException,
    RepeatPairingException,
    RoundNotFoundException,
    SearchBudgetExceeded,
)
from ttpairing.models.enums import TournamentMode
from ttpairing.models.pairing import Finished, Pairing, RoundResult
from ttpairing.models.participant import Participant
from ttpairing.pairing import (
    RoundRobin,
    SearchBudget,
    calculate_pairing_difference,
    create_round_robin,
    create_swiss_pairings,
    force_pairing,
    generate_all_pairings,
    players_with_bye,
)
from ttpairing.utils import setup_logger
from ttpairing.utils.validation import ValidationResult

logger = setup_logger(__name__)


class PairingEngine:
    """Generates rounds and keeps the match history.

    ``all_matches`` is the full history in creation order; ``matches`` is the
    subsequence belonging to the current round. Both hold the same Pairing
    objects, so results entered on the current round show up in the history.

    Args:
        participants: The field
        table_count: Tables available, reused cyclically within a round
        mode: Scheduling discipline
        search_budget: Node limit for each backtracking search
    """

    def __init__(
        self,
        participants: Iterable[Participant],
        table_count: int = DEFAULT_TABLE_COUNT,
        mode: Union[TournamentMode, str] = TournamentMode.SWISS,
        search_budget: int = DEFAULT_SEARCH_BUDGET,
    ):
        self.participants: List[Participant] = list(participants)
        if len(self.participants) < MIN_PARTICIPANTS:
            raise InvalidPairingException(
                f"At least {MIN_PARTICIPANTS} participants are required, "
                f"got {len(self.participants)}"
            )
        if table_count < 1:
            raise InvalidConfigurationException(
                f"Table count must be positive: {table_count}"
            )
        if search_budget < 1:
            raise InvalidConfigurationException(
                f"Search budget must be positive: {search_budget}"
            )

        self.table_count = table_count
        self.mode = TournamentMode.from_value(mode)
        self.search_budget = search_budget
        self.matches: List[Pairing] = []
        self.all_matches: List[Pairing] = []
        self.bye_recipients: Set[Participant] = set()
        self.current_round_number: Optional[int] = None
        self._finished = False
        self._round_robin: Optional[RoundRobin] = None

    @property
    def finished(self) -> bool:
        return self._finished

    @finished.setter
    def finished(self, value: bool) -> None:
        self._finished = bool(value)

    @property
    def round_robin(self) -> RoundRobin:
        if self._round_robin is None:
            self._round_robin = create_round_robin(self.participants)
        return self._round_robin

    def _previous_matches(self) -> List[Pairing]:
        """History without the current round."""
        current = {id(p) for p in self.matches}
        return [p for p in self.all_matches if id(p) not in current]

    def played_pairs(self) -> Set[FrozenSet[Participant]]:
        return {p.key for p in self.all_matches if not p.is_bye}

    # ========== Round generation ==========

    def generate_round(self, round_number: int) -> Union[RoundResult, Finished]:
        """Generate the pairings of ``round_number``.

        Asking again for the round that is current replaces it: its pairings
        are withdrawn from the history first. Any other current round is
        closed and stays in the history.

        Returns:
            The new round, or :class:`Finished` when no valid round exists

        Raises:
            RoundNotFoundException: If ``round_number`` is below 1
            RepeatPairingException: If a round-robin round was already played
        """
        if round_number < 1:
            raise RoundNotFoundException(f"Invalid round number: {round_number}")
        if self._finished:
            logger.info(f"Round {round_number} not generated: tournament finished")
            return Finished(round_number, "tournament already finished")

        if self.matches and round_number == self.current_round_number:
            self._withdraw_current_round()
        else:
            self.clear_current_round()

        if self.mode == TournamentMode.ROUND_ROBIN:
            generated = self._round_robin_round(round_number)
        else:
            generated = self._swiss_round()

        if generated is None:
            self._finished = True
            logger.info(f"No valid pairing for round {round_number}, tournament finished")
            return Finished(round_number, "no valid pairing left")

        pairings, forced = generated
        self._commit(pairings)
        self.current_round_number = round_number
        logger.info(
            f"Generated round {round_number}: {len(pairings)} pairings"
            f"{' (forced)' if forced else ''}"
        )
        return RoundResult(round_number, list(pairings), forced)

    def _round_robin_round(
        self, round_number: int
    ) -> Optional[Tuple[List[Pairing], bool]]:
        schedule = self.round_robin
        if round_number > schedule.number_of_rounds:
            logger.info(
                f"Round robin complete after {schedule.number_of_rounds} rounds"
            )
            return None

        matches, bye = schedule.get_round_pairings(round_number)
        played = self.played_pairs()
        for first, second in matches:
            if frozenset((first, second)) in played:
                raise RepeatPairingException(
                    f"Round {round_number} was already played: {first} vs. {second}"
                )

        pairings = [Pairing(first, second) for first, second in matches]
        if bye is not None:
            pairings.append(Pairing(bye))
        return pairings, False

    def _swiss_round(self) -> Optional[Tuple[List[Pairing], bool]]:
        ranked = sort_standings(self.participants, self.mode)
        try:
            primary = create_swiss_pairings(
                ranked,
                self.played_pairs(),
                self.bye_recipients,
                SearchBudget(self.search_budget),
            )
        except SearchBudgetExceeded as exc:
            logger.warning(f"Swiss search stopped: {exc}")
            primary = None

        if primary is not None:
            matches, bye = primary
            pairings = [Pairing(first, second) for first, second in matches]
            if bye is not None:
                logger.info(f"Bye assigned to {bye}")
                pairings.append(Pairing(bye))
            return pairings, False

        logger.info("Falling back to force-pairing")
        try:
            forced = force_pairing(
                self.participants, self.all_matches, SearchBudget(self.search_budget)
            )
        except SearchBudgetExceeded as exc:
            logger.warning(f"Force-pairing stopped: {exc}")
            forced = None

        if not forced:
            return None
        ordered = [p for p in forced if not p.is_bye] + [p for p in forced if p.is_bye]
        return ordered, True

    def _assign_tables(self, pairings: Sequence[Pairing]) -> None:
        tables = cycle(range(1, self.table_count + 1))
        for pairing in pairings:
            pairing.table = UNASSIGNED_TABLE if pairing.is_bye else next(tables)

    def _commit(self, pairings: Sequence[Pairing]) -> None:
        self._assign_tables(pairings)
        self.matches.extend(pairings)
        self.all_matches.extend(pairings)
        self.bye_recipients.update(p.first for p in pairings if p.is_bye)

    def _withdraw_current_round(self) -> None:
        if not self.matches:
            return
        self.all_matches = self._previous_matches()
        self.matches.clear()
        self.bye_recipients = players_with_bye(self.all_matches)

    def clear_current_round(self) -> None:
        """Forget the current round; the history keeps its pairings."""
        self.matches.clear()
        self.current_round_number = None

    # ========== Manual override ==========

    def calculate_open_pairings(self) -> List[Pairing]:
        """Pairings that have not happened in any earlier round."""
        previous = self._previous_matches()
        return calculate_pairing_difference(
            generate_all_pairings(self.participants),
            previous,
            players_with_bye(previous),
        )

    def _check_selection(self, selection: Sequence[Pairing]) -> Optional[str]:
        """Return the reason ``selection`` is unacceptable, or None."""
        if self.mode == TournamentMode.ROUND_ROBIN:
            return "Manual pairings are not available in round robin mode"

        field_size = len(self.participants)
        expected = (field_size + 1) // 2
        if len(selection) != expected:
            return f"Expected {expected} pairings, got {len(selection)}"

        byes = [p for p in selection if p.is_bye]
        if field_size % 2 == 0 and byes:
            return "A bye is not allowed with an even number of participants"
        if field_size % 2 and len(byes) != 1:
            return f"Exactly one bye is required, got {len(byes)}"

        known = set(self.participants)
        seen: Set[Participant] = set()
        for pairing in selection:
            for participant in pairing.participants:
                if participant not in known:
                    return f"Unknown participant: {participant}"
                if participant in seen:
                    return f"{participant} appears in more than one pairing"
                seen.add(participant)
        if seen != known:
            missing = ", ".join(str(p) for p in known - seen)
            return f"Participants without a pairing: {missing}"

        previous = self._previous_matches()
        played = {p.key for p in previous if not p.is_bye}
        for pairing in selection:
            if not pairing.is_bye and pairing.key in played:
                return f"{pairing.first} and {pairing.second} have already played"

        past_byes = players_with_bye(previous)
        for pairing in byes:
            if pairing.first in past_byes:
                return f"{pairing.first} already had a bye"
        return None

    def set_manual_pairings(self, selection: Iterable[Pairing]) -> ValidationResult:
        """Replace the current round with ``selection``.

        The selection is checked as a whole; on rejection nothing changes.

        Returns:
            A truthy ValidationResult on success, otherwise one carrying the
            reason in ``error_message``
        """
        selection = list(selection)
        reason = self._check_selection(selection)
        if reason is not None:
            logger.warning(f"Manual pairings rejected: {reason}")
            return ValidationResult(is_valid=False, error_message=reason)

        self._withdraw_current_round()
        ordered = [p for p in selection if not p.is_bye] + [
            p for p in selection if p.is_bye
        ]
        self._commit(ordered)
        logger.info(f"Manual pairings set: {len(ordered)} pairings")
        return ValidationResult(is_valid=True)

    # ========== Recovery ==========

    def restore_state(
        self,
        full_history: Iterable[Pairing],
        current_round: Iterable[Pairing],
        round_number: Optional[int] = None,
    ) -> None:
        """Replace the history and current round, e.g. after loading a save."""
        self.all_matches = list(full_history)
        self.matches = list(current_round)
        self.current_round_number = round_number if self.matches else None
        self.bye_recipients = players_with_bye(self.all_matches)
        logger.debug(
            f"Restored {len(self.all_matches)} pairings, "
            f"{len(self.matches)} in the current round"
        )
