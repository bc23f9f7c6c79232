"""Passdraw: weighted pass allocation with dependencies. Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from config.logging_config import configure_logging
from data.session_store import initialize_session_state
from tabs import (
    tab_event_input,
    tab_draw,
    tab_simulation,
)


def main():
    configure_logging()
    st.set_page_config(
        page_title="Passdraw",
        page_icon="🎟️",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3 = st.tabs([
        "📥 Event Input",
        "🎟️ Draw",
        "📊 Simulation",
    ])

    with tab1:
        tab_event_input.render(sidebar_state)
    with tab2:
        tab_draw.render(sidebar_state)
    with tab3:
        tab_simulation.render(sidebar_state)


if __name__ == "__main__":
    main()
