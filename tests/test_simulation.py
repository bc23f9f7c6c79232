"""Tests for Monte-Carlo simulation and run reports."""

import sys
import os
import random
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.user import User, Availability
from engine.refusal_engine import PassRunner
from engine.simulation import simulate
from engine.explainer import explain_solution, summarize_solution
from data.sample_data import generate_sample_config, generate_dance_event


def make_runner(seed=7):
    users = [User(f"U{i}", "P") for i in range(10)]
    users += [User("A", "Q", ["U0"]), User("B", "Q")]
    return PassRunner(users, random.Random(seed))


class TestSimulate:
    def test_statistics_shape(self):
        result = simulate(make_runner(), [Availability("P", 5), Availability("Q", 2)], 2000)
        assert result.runs == 2000
        assert list(result.partition_stats["Partition"]) == ["P", "Q"]
        assert len(result.user_stats) == 12
        assert result.probability("B") == 1.0
        assert abs(result.probability("U3") - 0.5) <= 0.05

    def test_dependent_never_beats_dependency(self):
        result = simulate(make_runner(), [Availability("P", 5), Availability("Q", 2)], 2000)
        assert result.probability("A") == pytest.approx(result.probability("U0"))

    def test_mean_handed_out(self):
        result = simulate(make_runner(), [Availability("P", 5), Availability("Q", 2)], 500)
        row = result.partition_stats.set_index("Partition").loc["P"]
        assert row["Mean Handed Out"] == 5
        assert row["Requested"] == 5
        assert row["Users"] == 10

    def test_runs_must_be_positive(self):
        with pytest.raises(ValueError):
            simulate(make_runner(), [Availability("P", 5)], 0)

    def test_unknown_user(self):
        result = simulate(make_runner(), [Availability("P", 5)], 10)
        with pytest.raises(KeyError):
            result.probability("Nobody")


class TestExplainer:
    def test_report_lines(self):
        runner = make_runner()
        avail = [Availability("P", 8), Availability("Q", 2)]
        solution = runner.run(avail)
        lines = explain_solution(runner, solution, avail)

        assert lines[0].startswith("Executed run")
        p_header = next(l for l in lines if l.startswith("P - Handed out"))
        assert p_header == f"P - Handed out {solution.count('P')} out of 8 passes for partition:"
        winners = [l[3:] for l in lines if l.startswith(" O ")]
        refused = [l[3:] for l in lines if l.startswith(" x ")]
        assert len(winners) + len(refused) == 12
        assert set(winners) == solution.winners

    def test_summary(self):
        runner = make_runner()
        avail = [Availability("P", 8)]
        solution = runner.run(avail)
        summary = summarize_solution(runner, solution, avail).set_index("Partition")
        assert summary.loc["P", "Handed Out"] == 8
        assert summary.loc["P", "Refused"] == 2
        assert summary.loc["Q", "Requested"] == 0


class TestSampleData:
    def test_sample_event_runs(self):
        config = generate_sample_config(10)
        runner = PassRunner(config.all_users(), random.Random(1))
        solution = runner.run(config.availabilities())
        assert solution.count("Leader") <= 5
        assert solution.count("Follow") <= 5
        # Couples either both win or both lose.
        for n in (1, 2):
            assert (f"LC{n}" in solution.winners) == (f"FC{n}" in solution.winners)

    def test_dance_event_shape(self):
        config = generate_dance_event()
        assert len(config.users["leader_full"]) == int(150 * 1.5)
        couples = [u for u in config.users["follow_part"] if "couple" in u.user_id]
        assert len(couples) == 10
        assert couples[0].deps == ["leader_part-couple-01"]

    def test_dance_event_couples_consistent(self):
        config = generate_dance_event()
        runner = PassRunner(config.all_users(), random.Random(3))
        winners = runner.run(config.availabilities()).winners
        for n in range(1, 31):
            assert (f"leader_full-couple-{n:02d}" in winners) == (f"follow_full-couple-{n:02d}" in winners)
