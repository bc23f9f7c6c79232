"""Global sidebar controls for seed and simulation size."""

import streamlit as st
from dataclasses import dataclass
from typing import Optional

from data.session_store import get_users, is_data_loaded
from config.defaults import DEFAULT_SIMULATION_RUNS, MAX_SIMULATION_RUNS


@dataclass
class SidebarState:
    seed: Optional[int]
    runs: int


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("Passdraw")
        st.divider()

        use_seed = st.checkbox("Fixed random seed", value=False, key="sidebar_use_seed")
        seed = None
        if use_seed:
            seed = int(st.number_input("Seed", min_value=0, value=5544332211, step=1, key="sidebar_seed"))

        runs = int(st.number_input(
            "Simulation runs",
            min_value=1,
            max_value=MAX_SIMULATION_RUNS,
            value=DEFAULT_SIMULATION_RUNS,
            step=1000,
            key="sidebar_runs",
        ))

        st.divider()

        if is_data_loaded():
            st.success("Event loaded")
            st.caption(f"Users: {len(get_users())}")
            st.caption(f"Partitions: {len({u.partition for u in get_users()})}")
        else:
            st.warning("No event loaded — go to the Event Input tab")

    return SidebarState(seed=seed, runs=runs)
