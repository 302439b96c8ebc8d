"""Random tournament simulation.

Plays complete tournaments with random ratings and random best-of-five
results, checking the pairing invariants after every round. Runs are
reproducible through the seed.
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

import random
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Set, Tuple

from ttpairing.constants import DEFAULT_SEARCH_BUDGET, DEFAULT_TABLE_COUNT, MAX_GAMES
from ttpairing.models.enums import TournamentMode
from ttpairing.models.pairing import Finished, Pairing, RoundResult
from ttpairing.models.participant import Participant
from ttpairing.models.tournament import Tournament
from ttpairing.utils import setup_logger

logger = setup_logger(__name__)

GAMES_TO_WIN = (MAX_GAMES + 1) // 2
POINTS_PER_GAME = 11


@dataclass
class SimulationConfig:
    """Configuration for one simulated tournament."""

    num_participants: int = 9
    table_count: int = DEFAULT_TABLE_COUNT
    mode: TournamentMode = TournamentMode.SWISS
    seed: Optional[int] = None
    max_rounds: Optional[int] = None
    search_budget: int = DEFAULT_SEARCH_BUDGET
    rating_range: Tuple[int, int] = (1000, 3000)


@dataclass
class SimulationReport:
    """Outcome of one simulated tournament."""

    rounds_played: int = 0
    forced_rounds: int = 0
    violations: List[str] = field(default_factory=list)
    standings: List[Participant] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


class TournamentSimulator:
    """Plays a whole tournament with random results."""

    def __init__(self, config: SimulationConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.random = rng if rng is not None else random.Random(config.seed)

    def create_participants(self) -> List[Participant]:
        low, high = self.config.rating_range
        return [
            Participant(
                first_name=f"Player{i}",
                last_name=f"Last{i}",
                club=f"Club{i}",
                rating=self.random.randint(low, high),
            )
            for i in range(1, self.config.num_participants + 1)
        ]

    def _game(self, first_wins: bool) -> Tuple[int, int]:
        loser = self.random.randint(0, POINTS_PER_GAME + 3)
        winner = POINTS_PER_GAME if loser <= POINTS_PER_GAME - 2 else loser + 2
        return (winner, loser) if first_wins else (loser, winner)

    def random_game_scores(self) -> List[Tuple[int, int]]:
        """Rally scores of a best-of-five match, stopping at three games."""
        first_games = second_games = 0
        scores = []
        while max(first_games, second_games) < GAMES_TO_WIN:
            first_wins = self.random.random() < 0.5
            scores.append(self._game(first_wins))
            if first_wins:
                first_games += 1
            else:
                second_games += 1
        return scores

    def check_round(
        self,
        result: RoundResult,
        participants: List[Participant],
        seen_pairs: Set[FrozenSet[Participant]],
    ) -> List[str]:
        """Invariant violations of one round; ``seen_pairs`` is updated."""
        violations = []
        label = f"Round {result.round_number}"

        covered = [p for pairing in result.pairings for p in pairing.participants]
        if sorted(covered, key=id) != sorted(participants, key=id):
            violations.append(f"{label}: participants not covered exactly once")

        byes = [p for p in result.pairings if p.is_bye]
        expected_byes = len(participants) % 2
        if len(byes) != expected_byes:
            violations.append(f"{label}: {len(byes)} byes, expected {expected_byes}")

        for pairing in result.matches:
            if pairing.key in seen_pairs:
                violations.append(f"{label}: repeat pairing {pairing}")
            seen_pairs.add(pairing.key)
            if not 1 <= pairing.table <= self.config.table_count:
                violations.append(f"{label}: table {pairing.table} out of range")
        return violations

    def play_round(self, tournament: Tournament, pairings: List[Pairing]) -> None:
        for pairing in pairings:
            if not pairing.is_bye:
                tournament.record_result(pairing, self.random_game_scores())

    def run(self) -> SimulationReport:
        """Play until the tournament finishes or ``max_rounds`` is reached."""
        participants = self.create_participants()
        tournament = Tournament(
            "Simulation",
            participants,
            table_count=self.config.table_count,
            mode=self.config.mode,
            search_budget=self.config.search_budget,
        )
        report = SimulationReport()
        seen_pairs: Set[FrozenSet[Participant]] = set()

        result = tournament.start()
        while isinstance(result, RoundResult):
            report.rounds_played += 1
            report.forced_rounds += int(result.forced)
            report.violations.extend(self.check_round(result, participants, seen_pairs))
            self.play_round(tournament, result.pairings)

            if self.config.max_rounds and report.rounds_played >= self.config.max_rounds:
                break
            result = tournament.advance_round()

        if isinstance(result, Finished):
            logger.debug(f"Simulation finished after {report.rounds_played} rounds")
        report.standings = tournament.get_standings()
        return report


@dataclass
class BatchSummary:
    """Aggregate over several simulations."""

    simulations: int = 0
    failures: int = 0
    invalid: int = 0
    rounds: List[int] = field(default_factory=list)

    @property
    def successes(self) -> int:
        return self.simulations - self.failures


def run_simulations(
    config: SimulationConfig, simulations: int, min_rounds: int = 0
) -> BatchSummary:
    """Run ``simulations`` tournaments from one seeded generator.

    A simulation fails when it plays fewer than ``min_rounds`` rounds or
    breaks an invariant.
    """
    rng = random.Random(config.seed)
    summary = BatchSummary()
    for index in range(simulations):
        report = TournamentSimulator(config, rng).run()
        summary.simulations += 1
        summary.rounds.append(report.rounds_played)
        if not report.ok:
            summary.invalid += 1
            for violation in report.violations:
                logger.warning(f"Simulation {index + 1}: {violation}")
        if report.rounds_played < min_rounds or not report.ok:
            summary.failures += 1
    return summary
