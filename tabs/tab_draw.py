"""Tab 2: Draw — run one allocation and show who gets a pass."""

import streamlit as st

from data.session_store import (
    ensure_runner, get_availabilities, get_last_solution, set_last_solution, is_data_loaded,
)
from engine.explainer import explain_solution, summarize_solution
from components.charts import passes_vs_requested_bar, pass_share_donut
from components.metrics_cards import render_draw_metrics, render_shortfall_alerts
from components.tables import render_shortfall_table


def render(sidebar_state):
    """Render the Draw tab."""
    st.header("Draw Passes")

    if not is_data_loaded():
        st.info("No event loaded. Please load one in the Event Input tab.")
        return

    availabilities = get_availabilities()
    if st.button("Run Draw", type="primary", key="btn_run_draw"):
        runner = ensure_runner(sidebar_state.seed)
        set_last_solution(runner.run(availabilities))

    solution = get_last_solution()
    if solution is None:
        st.caption("Press Run Draw to allocate passes.")
        return

    runner = ensure_runner(sidebar_state.seed)
    summary = summarize_solution(runner, solution, availabilities)

    render_draw_metrics(summary)
    render_shortfall_alerts(summary)

    col1, col2 = st.columns([2, 1])
    with col1:
        st.plotly_chart(passes_vs_requested_bar(summary), use_container_width=True)
    with col2:
        donut = pass_share_donut(int(summary["Handed Out"].sum()), int(summary["Users"].sum()))
        st.plotly_chart(donut, use_container_width=True)

    render_shortfall_table(summary)

    with st.expander("Full report", expanded=False):
        st.code("\n".join(explain_solution(runner, solution, availabilities)), language=None)
