"""Tests for the user registry and per-run session state."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.user import User
from engine.registry import UserRegistry, internal_weight
from engine.session import AllocationSession, CandidatePool, build_dependents


def make_user(partition, name, *deps, weight=1.0):
    return User(name, partition, list(deps), weight)


def make_registry():
    return UserRegistry([
        make_user("Leader", "L1", "F1"),
        make_user("Leader", "L2", weight=2.0),
        make_user("Follow", "F1", "L1"),
        make_user("Follow", "F2", "L1", "Ghost"),
        make_user("Follow", "F3", weight=4.0),
    ])


class TestInternalWeight:
    def test_reciprocal(self):
        assert internal_weight(2.0) == 0.5
        assert internal_weight(0.5) == 2.0
        assert internal_weight(1.0) == 1.0

    def test_non_positive_is_neutral(self):
        assert internal_weight(0.0) == 1.0
        assert internal_weight(-3.0) == 1.0


class TestUserRegistry:
    def test_partitions_and_members_sorted(self):
        registry = make_registry()
        assert registry.partitions() == ["Follow", "Leader"]
        assert registry.members("Follow") == ["F1", "F2", "F3"]
        assert registry.members("Nobody") == []

    def test_lookup(self):
        registry = make_registry()
        assert "L2" in registry
        assert "Ghost" not in registry
        assert registry.get("L2").weight == 2.0
        assert registry.internal_weight("L2") == 0.5
        assert len(registry) == 5

    def test_read_only(self):
        registry = make_registry()
        with pytest.raises(TypeError):
            registry.users()["X"] = make_user("P", "X")

    def test_negative_weight_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="engine.registry"):
            UserRegistry([make_user("P", "U", weight=-1.0)])
        assert "negative weight" in caplog.text


class TestBuildDependents:
    def test_reverse_edges(self):
        dependents = build_dependents(make_registry())
        assert dependents["L1"] == ["F1", "F2"]
        assert dependents["F1"] == ["L1"]
        assert dependents["Ghost"] == ["F2"]
        assert "F3" not in dependents


class TestCandidatePool:
    def test_initial_state(self):
        pool = CandidatePool("Follow", make_registry())
        assert len(pool) == 3
        assert pool.weight_sum == pytest.approx(1.0 + 1.0 + 0.25)
        assert list(pool) == ["F1", "F2", "F3"]

    def test_shallow_remove(self):
        pool = CandidatePool("Follow", make_registry())
        pool.remove("F3")
        assert "F3" not in pool
        assert pool.weight_sum == pytest.approx(2.0)
        assert pool.survivors() == ["F1", "F2"]

    def test_iteration_keeps_id_order_after_removal(self):
        pool = CandidatePool("Follow", make_registry())
        pool.remove("F2")
        assert list(pool) == ["F1", "F3"]
        assert pool.survivors() == ["F1", "F3"]

    @pytest.mark.parametrize("threshold,expected", [
        (0.0, "F1"),
        (0.4, "F1"),
        (1.0, "F1"),
        (1.5, "F2"),
        (2.1, "F3"),
        (2.25, "F3"),
    ])
    def test_select_by_cumulative_weight(self, threshold, expected):
        # Cumulative refusal weights: F1=1.0, F2=2.0, F3=2.25
        pool = CandidatePool("Follow", make_registry())
        assert pool.select(threshold) == expected

    def test_select_skips_removed_candidates(self):
        pool = CandidatePool("Follow", make_registry())
        pool.remove("F1")
        assert pool.select(0.0) == "F2"
        assert pool.select(0.5) == "F2"
        assert pool.select(1.1) == "F3"

    def test_select_above_total_takes_last_candidate(self):
        pool = CandidatePool("Follow", make_registry())
        pool.remove("F3")
        assert pool.select(pool.weight_sum + 1e-9) == "F2"

    def test_select_on_empty_pool(self):
        pool = CandidatePool("Follow", make_registry())
        for user_id in ["F1", "F2", "F3"]:
            pool.remove(user_id)
        assert pool.select(0.0) is None


class TestAllocationSession:
    def test_refuse_cascades_across_partitions(self):
        session = AllocationSession.start(make_registry())
        assert session.refuse("L1") == 3  # L1, then F1 and F2
        assert session.pools["Leader"].survivors() == ["L2"]
        assert session.pools["Follow"].survivors() == ["F3"]
        assert session.pools["Follow"].weight_sum == pytest.approx(0.25)

    def test_refuse_is_idempotent(self):
        session = AllocationSession.start(make_registry())
        session.refuse("F1")
        assert session.refuse("F1") == 0
        assert session.refuse("L1") == 0
        assert session.is_refused("F2")

    def test_unknown_user_counts_as_refused(self):
        session = AllocationSession.start(make_registry())
        assert session.is_refused("Ghost")
        assert session.refuse("Ghost") == 0

    def test_sessions_are_independent(self):
        registry = make_registry()
        first = AllocationSession.start(registry)
        first.refuse("L1")
        second = AllocationSession.start(registry)
        assert len(second.pools["Follow"]) == 3
