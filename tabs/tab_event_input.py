"""Tab 1: Event Input — upload users and pass counts, validate, load samples."""

import streamlit as st
import pandas as pd

from data.loader import (
    load_file, load_run_config_json, load_user_text, parse_availabilities, parse_users, users_to_df,
)
from data.validator import validate_users, validate_partition_coverage
from data.sample_data import generate_sample_config, generate_dance_event
from data.session_store import set_event, set_passes, get_users, get_passes, is_data_loaded
from models.errors import ConfigValidationError, UserParseError
from models.run_config import RunConfig


def _store_config(config: RunConfig, source: str):
    users = config.all_users()
    set_event(users, config.passes)
    st.success(f"{source}: loaded {len(users)} users in {len(config.passes)} partitions")


def _render_json_upload():
    st.caption(
        'JSON with `Passes` (partition → count) and `Users` '
        '(partition → list of `{"ID": ..., "Deps": [...], "Weight": ...}`).'
    )
    json_file = st.file_uploader("Run configuration", type=["json"], key="upload_json")
    if st.button("Upload & Validate", type="primary", key="btn_upload_json"):
        if not json_file:
            st.warning("Please upload a JSON file.")
            return
        try:
            config = load_run_config_json(json_file.getvalue())
        except ConfigValidationError as e:
            st.error(f"Cannot parse input file {json_file.name}: {e}")
            return
        _store_config(config, json_file.name)


def _render_text_upload():
    st.caption("One user per line: `ID` or `ID:dep1,dep2`.")
    partition = st.text_input("Partition", value="default", key="text_partition")
    passes = st.number_input("Passes", min_value=0, value=10, step=1, key="text_passes")
    text = st.text_area("Users", height=200, key="text_users")
    if st.button("Parse Users", type="primary", key="btn_parse_text"):
        try:
            users = load_user_text(text, partition)
        except UserParseError as e:
            st.error(str(e))
            return
        set_event(users, {partition: int(passes)})
        st.success(f"Parsed {len(users)} users for partition {partition}")


def _render_table_upload():
    st.caption("CSV/XLSX with columns `User ID`, `Partition`, optional `Dependencies` and `Weight`.")
    users_file = st.file_uploader("Users table", type=["csv", "xlsx"], key="upload_users_table")
    passes_text = st.text_input(
        "Passes per partition", placeholder="leaders:33, followers:35", key="table_passes",
    )
    if st.button("Upload & Validate", type="primary", key="btn_upload_table"):
        if not users_file:
            st.warning("Please upload a users file.")
            return
        try:
            df = load_file(users_file)
        except ValueError as e:
            st.error(f"Error loading file: {e}")
            return

        result = validate_users(df)
        if not result.is_valid:
            for e in result.errors:
                st.error(e)
            return

        try:
            entries = [s.strip() for s in passes_text.split(",") if s.strip()]
            passes = {a.partition: a.available for a in parse_availabilities(entries)}
        except ValueError as e:
            st.error(str(e))
            return

        coverage = validate_partition_coverage(df, passes)
        for w in result.warnings + coverage.warnings:
            st.warning(w)

        users = parse_users(df)
        set_event(users, passes)
        st.success(f"Loaded {len(users)} users from {users_file.name}")


def _render_pass_editor():
    users = get_users()
    partitions = sorted({u.partition for u in users})
    passes = get_passes()
    df = pd.DataFrame([
        {
            "Partition": p,
            "Users": sum(1 for u in users if u.partition == p),
            "Passes": passes.get(p, 0),
        }
        for p in partitions
    ])
    edited = st.data_editor(
        df, disabled=["Partition", "Users"], use_container_width=True, key="pass_editor",
    )
    if st.button("Save Pass Counts", key="btn_save_passes"):
        set_passes({row["Partition"]: int(row["Passes"]) for _, row in edited.iterrows()})
        st.success("Pass counts saved")


def render(sidebar_state):
    """Render the Event Input tab."""
    st.header("Event Input")

    upload_mode = st.radio(
        "Input format",
        ["JSON configuration", "User list (text)", "Users table (CSV/XLSX)"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "JSON configuration":
        _render_json_upload()
    elif upload_mode == "User list (text)":
        _render_text_upload()
    else:
        _render_table_upload()

    st.divider()
    st.subheader("Sample Events")
    col_small, col_dance = st.columns(2)
    with col_small:
        if st.button("Load Leader/Follow Sample", key="btn_sample_small"):
            _store_config(generate_sample_config(), "Sample event")
    with col_dance:
        if st.button("Load Dance Event Sample", key="btn_sample_dance"):
            _store_config(generate_dance_event(), "Dance event")

    if not is_data_loaded():
        return

    st.divider()
    st.subheader("Pass Counts")
    _render_pass_editor()

    with st.expander("Users", expanded=False):
        st.dataframe(users_to_df(get_users()), use_container_width=True)
