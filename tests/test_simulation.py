import random

import pytest

from ttpairing.models.enums import TournamentMode
from ttpairing.testing import SimulationConfig, TournamentSimulator, run_simulations
from ttpairing.testing.__main__ import main


def test_swiss_simulation_keeps_invariants():
    report = TournamentSimulator(SimulationConfig(num_participants=9, seed=7)).run()

    assert report.ok, report.violations
    assert 2 <= report.rounds_played <= 9
    assert len(report.standings) == 9


def test_round_robin_simulation_plays_every_round():
    config = SimulationConfig(num_participants=6, mode=TournamentMode.ROUND_ROBIN, seed=3)
    report = TournamentSimulator(config).run()

    assert report.ok, report.violations
    assert report.rounds_played == 5
    assert report.forced_rounds == 0


def test_max_rounds_stops_early():
    config = SimulationConfig(num_participants=8, seed=11, max_rounds=2)
    assert TournamentSimulator(config).run().rounds_played == 2


def test_random_game_scores_are_best_of_five():
    simulator = TournamentSimulator(SimulationConfig(), rng=random.Random(5))
    for _ in range(50):
        scores = simulator.random_game_scores()
        first = sum(1 for a, b in scores if a > b)
        second = sum(1 for a, b in scores if b > a)
        assert 3 <= len(scores) <= 5
        assert max(first, second) == 3
        assert first + second == len(scores)
        for a, b in scores:
            assert max(a, b) >= 11
            assert abs(a - b) >= 2


def test_simulations_are_reproducible():
    config = SimulationConfig(num_participants=7, seed=42)
    assert run_simulations(config, 3).rounds == run_simulations(config, 3).rounds


def test_min_rounds_marks_failures():
    config = SimulationConfig(num_participants=4, seed=1)
    summary = run_simulations(config, 2, min_rounds=10)
    assert summary.failures == 2
    assert summary.successes == 0


def test_cli_prints_report(capsys):
    exit_code = main(["--players", "6", "--simulations", "2", "--seed", "1"])

    assert exit_code == 0
    assert "SIMULATION REPORT" in capsys.readouterr().out


def test_cli_rejects_tiny_field():
    with pytest.raises(SystemExit):
        main(["--players", "1"])
