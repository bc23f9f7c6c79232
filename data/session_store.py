"""Typed wrapper around st.session_state for application data."""

import random
from typing import Dict, List, Optional

import streamlit as st

from models.solution import Solution
from models.user import Availability, User
from engine.refusal_engine import PassRunner
from engine.simulation import SimulationResult
from config.defaults import DEFAULT_SIMULATION_RUNS


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "users": [],
        "passes": {},
        "data_loaded": False,
        "runner": None,
        "last_solution": None,
        "last_simulation": None,
        "sidebar_state": {
            "seed": None,
            "runs": DEFAULT_SIMULATION_RUNS,
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_users() -> List[User]:
    return st.session_state.get("users", [])


def get_passes() -> Dict[str, int]:
    return st.session_state.get("passes", {})


def get_availabilities() -> List[Availability]:
    return [Availability(p, n) for p, n in sorted(get_passes().items())]


def get_runner() -> Optional[PassRunner]:
    return st.session_state.get("runner")


def get_last_solution() -> Optional[Solution]:
    return st.session_state.get("last_solution")


def get_last_simulation() -> Optional[SimulationResult]:
    return st.session_state.get("last_simulation")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_event(users: List[User], passes: Dict[str, int]):
    """Store a new event; the runner is rebuilt on next use."""
    st.session_state["users"] = users
    st.session_state["passes"] = dict(passes)
    st.session_state["data_loaded"] = True
    st.session_state["runner"] = None
    st.session_state["last_solution"] = None
    st.session_state["last_simulation"] = None


def set_passes(passes: Dict[str, int]):
    """Store edited pass counts; results computed for the old counts are dropped."""
    st.session_state["passes"] = dict(passes)
    st.session_state["last_solution"] = None
    st.session_state["last_simulation"] = None


def set_last_solution(solution: Solution):
    st.session_state["last_solution"] = solution


def set_last_simulation(result: SimulationResult):
    st.session_state["last_simulation"] = result


def ensure_runner(seed: Optional[int]) -> PassRunner:
    """Return the stored runner, building one when the data or seed changed."""
    runner = st.session_state.get("runner")
    if runner is None or st.session_state.get("runner_seed") != seed:
        rng = random.Random(seed) if seed is not None else None
        runner = PassRunner(get_users(), rng)
        st.session_state["runner"] = runner
        st.session_state["runner_seed"] = seed
    return runner
