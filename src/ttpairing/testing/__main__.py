"""Simulation CLI for TT Pairing.

Runs batches of random tournaments and prints a summary report:

    python -m ttpairing.testing --players 9 --simulations 100 --min-rounds 7
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

import argparse
import sys
from typing import List, Optional

from ttpairing.constants import DEFAULT_SEARCH_BUDGET, DEFAULT_TABLE_COUNT
from ttpairing.models.enums import TournamentMode
from ttpairing.testing.simulation import BatchSummary, SimulationConfig, run_simulations
from ttpairing.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ttpairing-sim",
        description="Simulate random table tennis tournaments",
    )
    parser.add_argument("--players", type=int, default=9, help="Number of participants")
    parser.add_argument(
        "--tables", type=int, default=DEFAULT_TABLE_COUNT, help="Number of tables"
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in TournamentMode],
        default=TournamentMode.SWISS.value,
        help="Scheduling discipline",
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--simulations", type=int, default=100, help="Number of tournaments to play"
    )
    parser.add_argument(
        "--min-rounds",
        type=int,
        default=0,
        help="A simulation with fewer rounds counts as failed",
    )
    parser.add_argument("--max-rounds", type=int, help="Stop each tournament early")
    parser.add_argument(
        "--search-budget",
        type=int,
        default=DEFAULT_SEARCH_BUDGET,
        help="Node limit for each pairing search",
    )
    return parser


def _percent(part: int, whole: int) -> int:
    return part * 100 // whole if whole else 0


def print_report(summary: BatchSummary, args: argparse.Namespace) -> None:
    rounds = summary.rounds or [0]
    print(f"\n{Colors.BOLD}========================================{Colors.ENDC}")
    print(f"{Colors.BOLD}          SIMULATION REPORT{Colors.ENDC}")
    print(f"{Colors.BOLD}========================================{Colors.ENDC}")
    print(f"Simulations   : {summary.simulations}")
    print(f"Participants  : {args.players}")
    print(f"Mode          : {args.mode}")
    print(f"Minimum rounds: {args.min_rounds}")
    print(f"Rounds played : min {min(rounds)}, max {max(rounds)}")
    print("----------------------------------------")
    print(
        f"{Colors.OKGREEN}Succeeded     : {summary.successes} "
        f"({_percent(summary.successes, summary.simulations)}%){Colors.ENDC}"
    )
    color = Colors.FAIL if summary.failures else Colors.OKGREEN
    print(
        f"{color}Failed        : {summary.failures} "
        f"({_percent(summary.failures, summary.simulations)}%){Colors.ENDC}"
    )
    if summary.invalid:
        print(f"{Colors.WARNING}Invariant violations in {summary.invalid} run(s){Colors.ENDC}")
    print("========================================")


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.players < 2:
        parser.error("--players must be at least 2")
    if args.tables < 1:
        parser.error("--tables must be at least 1")
    if args.simulations < 1:
        parser.error("--simulations must be at least 1")

    config = SimulationConfig(
        num_participants=args.players,
        table_count=args.tables,
        mode=TournamentMode.from_value(args.mode),
        seed=args.seed,
        max_rounds=args.max_rounds,
        search_budget=args.search_budget,
    )
    logger.info(f"Running {args.simulations} simulation(s) with {args.players} participants")
    summary = run_simulations(config, args.simulations, args.min_rounds)
    print_report(summary, args)
    return 1 if summary.failures else 0


if __name__ == "__main__":
    sys.exit(main())
