"""Tab 3: Simulation — repeat the draw and estimate each user's chance of a pass."""

import streamlit as st

from data.session_store import (
    ensure_runner, get_availabilities, get_last_simulation, set_last_simulation, is_data_loaded,
)
from engine.simulation import simulate
from components.charts import win_probability_bar
from components.tables import render_probability_table
from config.defaults import PROBABILITY_TOLERANCE


def render(sidebar_state):
    """Render the Simulation tab."""
    st.header("Simulation")

    if not is_data_loaded():
        st.info("No event loaded. Please load one in the Event Input tab.")
        return

    st.caption(f"Performs {sidebar_state.runs:,} draws with the current pass counts.")
    if st.button("Run Simulation", type="primary", key="btn_run_simulation"):
        runner = ensure_runner(sidebar_state.seed)
        with st.spinner("Simulating..."):
            try:
                result = simulate(runner, get_availabilities(), sidebar_state.runs)
            except ValueError as e:
                st.error(str(e))
                return
        set_last_simulation(result)

    result = get_last_simulation()
    if result is None:
        return

    st.subheader(f"Statistics over {result.runs:,} runs")
    st.dataframe(result.partition_stats, use_container_width=True)

    partitions = list(result.partition_stats["Partition"])
    selected = st.selectbox("Partition", options=partitions, key="simulation_partition")
    row = result.partition_stats[result.partition_stats["Partition"] == selected].iloc[0]
    expected = min(1.0, row["Requested"] / row["Users"]) if row["Users"] else None

    user_stats = result.user_stats[result.user_stats["Partition"] == selected]
    st.plotly_chart(win_probability_bar(user_stats, selected), use_container_width=True)
    st.caption(
        f"Users more than {PROBABILITY_TOLERANCE:.0%} away from the uniform share "
        f"{expected:.1%} are highlighted." if expected is not None else ""
    )
    render_probability_table(user_stats, expected, PROBABILITY_TOLERANCE)
