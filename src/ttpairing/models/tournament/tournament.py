"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for running a tournament: it sequences round
generation, result entry, standings and round advance, delegating each step
to a specialized controller.
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

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Union

from ttpairing.constants import (
    DEFAULT_SEARCH_BUDGET,
    DEFAULT_TABLE_COUNT,
    MIN_PARTICIPANTS,
)
from ttpairing.controllers.tournament import (
    PairingEngine,
    ResultRecorder,
    StandingsCalculator,
    sort_standings,
)
from ttpairing.exceptions import (
    DuplicateParticipantException,
    InvalidConfigurationException,
    InvalidResultException,
    TournamentStateException,
)
from ttpairing.models.enums import TournamentMode
from ttpairing.models.pairing import Finished, Pairing, RoundResult
from ttpairing.models.participant import Participant
from ttpairing.models.tournament.tournament_config import TournamentConfig
from ttpairing.models.tournament.tournament_state import TournamentState
from ttpairing.type_hints import GameScoreInput
from ttpairing.utils import setup_logger
from ttpairing.utils.validation import ValidationResult

logger = setup_logger(__name__)


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized
    controllers:
    - PairingEngine: generates rounds and keeps the match history
    - ResultRecorder: manages result entry and validation
    - StandingsCalculator: computes points and tiebreak scores
    """

    def __init__(
        self,
        name: str,
        participants: Iterable[Participant],
        table_count: int = DEFAULT_TABLE_COUNT,
        mode: Union[TournamentMode, str] = TournamentMode.SWISS,
        search_budget: int = DEFAULT_SEARCH_BUDGET,
    ) -> None:
        """Initialize a new tournament.

        Args
        ----
        name: Tournament name
        participants: The field, at least two distinct participants
        table_count: Number of tables
        mode: Swiss or round robin
        search_budget: Node limit for each pairing search

        Raises
        ------
        InvalidConfigurationException: If a setting is invalid
        TournamentStateException: If fewer than two participants are given
        DuplicateParticipantException: If a participant appears twice
        """
        try:
            mode = TournamentMode.from_value(mode)
        except ValueError as exc:
            raise InvalidConfigurationException(str(exc)) from exc

        self.config = TournamentConfig(
            name=name,
            table_count=table_count,
            mode=mode,
            search_budget=search_budget,
        )
        self.config.validate()

        self.participants: List[Participant] = list(participants)
        if len(self.participants) < MIN_PARTICIPANTS:
            raise TournamentStateException(
                f"A tournament needs at least {MIN_PARTICIPANTS} participants, "
                f"got {len(self.participants)}"
            )
        seen = set()
        for participant in self.participants:
            if participant in seen:
                raise DuplicateParticipantException(
                    f"Duplicate participant: {participant}"
                )
            seen.add(participant)

        self.pairing_engine = PairingEngine(
            self.participants,
            table_count=self.config.table_count,
            mode=self.config.mode,
            search_budget=self.config.search_budget,
        )
        self.result_recorder = ResultRecorder()
        self.standings_calculator = StandingsCalculator()
        self.current_round_number = 0
        # Time of the last save or load, None for a fresh tournament
        self.saved_at: Optional[datetime] = None

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @name.setter
    def name(self, value: str) -> None:
        """Set tournament name."""
        self.config.name = value

    @property
    def mode(self) -> TournamentMode:
        return self.config.mode

    @property
    def table_count(self) -> int:
        return self.config.table_count

    @property
    def tournament_over(self) -> bool:
        """Is the tournament over?"""
        return self.config.tournament_over

    @property
    def current_round(self) -> List[Pairing]:
        return self.pairing_engine.matches

    @property
    def history(self) -> List[Pairing]:
        return self.pairing_engine.all_matches

    # ========== Round operations ==========

    def _finish(self, result: Union[RoundResult, Finished]) -> None:
        if isinstance(result, Finished):
            self.config.tournament_over = True
            logger.info(f"Tournament '{self.name}' is over: {result.reason}")

    def start(self) -> Union[RoundResult, Finished]:
        """Generate the first round.

        Raises:
            TournamentStateException: If the tournament has already started
        """
        if self.current_round_number:
            raise TournamentStateException("Tournament has already started")
        result = self.pairing_engine.generate_round(1)
        self._finish(result)
        if isinstance(result, RoundResult):
            self.current_round_number = 1
            logger.info(
                f"Started tournament '{self.name}' with {len(self.participants)} participants"
            )
        return result

    def record_result(
        self,
        pairing: Pairing,
        game_scores: Sequence[GameScoreInput],
        overall_result: Optional[str] = None,
    ) -> Pairing:
        """Record the result of a pairing in the current round.

        Raises:
            InvalidResultException: If the pairing is not in the current round
                or the result is invalid
        """
        if not any(p is pairing for p in self.current_round):
            raise InvalidResultException(f"{pairing} is not in the current round")
        return self.result_recorder.record_result(pairing, game_scores, overall_result)

    def advance_round(self) -> Union[RoundResult, Finished]:
        """Close the current round and generate the next one.

        Raises:
            TournamentStateException: If the tournament is over, has not
                started, or results are missing in the current round
        """
        if self.tournament_over:
            raise TournamentStateException("Tournament is already over")
        if not self.current_round_number:
            raise TournamentStateException("Tournament has not started")

        missing = self.result_recorder.missing_results(self.current_round)
        if missing:
            raise TournamentStateException(
                f"Round {self.current_round_number} is missing "
                f"{len(missing)} result(s)"
            )

        self.standings_calculator.recompute(self.participants, self.history)
        self.pairing_engine.clear_current_round()

        next_round = self.current_round_number + 1
        result = self.pairing_engine.generate_round(next_round)
        self._finish(result)
        if isinstance(result, RoundResult):
            self.current_round_number = next_round
        return result

    def open_pairings(self) -> List[Pairing]:
        """Pairings available for a manual override of the current round.

        Raises:
            TournamentStateException: Once results have been entered
        """
        if self.result_recorder.has_results(self.current_round):
            raise TournamentStateException(
                "Results were already entered for the current round"
            )
        return self.pairing_engine.calculate_open_pairings()

    def set_manual_pairings(self, selection: Iterable[Pairing]) -> ValidationResult:
        """Replace the current round with a manual selection.

        Rejected once results have been entered in the current round.
        """
        if self.result_recorder.has_results(self.current_round):
            reason = "Results were already entered for the current round"
            logger.warning(f"Manual pairings rejected: {reason}")
            return ValidationResult(is_valid=False, error_message=reason)
        result = self.pairing_engine.set_manual_pairings(selection)
        if result:
            logger.info(f"Round {self.current_round_number} replaced manually")
        return result

    def get_standings(self) -> List[Participant]:
        """Recompute statistics and return participants best first."""
        self.standings_calculator.recompute(self.participants, self.history)
        return sort_standings(self.participants, self.mode)

    # ========== Persistence ==========

    def to_state(self) -> TournamentState:
        return TournamentState(
            config=self.config,
            participants=list(self.participants),
            full_history=list(self.history),
            current_round=list(self.current_round),
            round_number=self.current_round_number,
            finished=self.pairing_engine.finished,
        )

    @classmethod
    def from_state(cls, state: TournamentState) -> "Tournament":
        """Rebuild a tournament from a snapshot."""
        config = state.config
        tournament = cls(
            config.name,
            state.participants,
            table_count=config.table_count,
            mode=config.mode,
            search_budget=config.search_budget,
        )
        tournament.config.tournament_over = config.tournament_over
        tournament.pairing_engine.restore_state(
            state.full_history, state.current_round, state.round_number
        )
        tournament.pairing_engine.finished = state.finished
        tournament.current_round_number = state.round_number
        tournament.saved_at = state.saved_at
        tournament.standings_calculator.recompute(
            tournament.participants, tournament.history
        )
        logger.info(f"Loaded tournament: {tournament.name}")
        return tournament
