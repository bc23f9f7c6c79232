"""KPI cards and shortfall alerts for a single draw."""

import pandas as pd
import streamlit as st


def draw_metrics(summary: pd.DataFrame) -> list[dict]:
    """Totals across partitions from a `summarize_solution` frame."""
    requested = int(summary["Requested"].sum())
    handed_out = int(summary["Handed Out"].sum())
    return [
        {"label": "Passes Requested", "value": requested},
        {"label": "Passes Handed Out", "value": handed_out, "delta": handed_out - requested},
        {"label": "Users", "value": int(summary["Users"].sum())},
    ]


def shortfall_messages(summary: pd.DataFrame) -> list[str]:
    """One line per partition that ended below its requested passes."""
    short = summary[summary["Handed Out"] < summary["Requested"]]
    return [
        f"{row['Partition']}: dependency refusals left {row['Handed Out']} of "
        f"{row['Requested']} passes handed out."
        for _, row in short.iterrows()
    ]


def render_draw_metrics(summary: pd.DataFrame):
    metrics = draw_metrics(summary)
    for col, m in zip(st.columns(len(metrics)), metrics):
        with col:
            st.metric(label=m["label"], value=m["value"], delta=m.get("delta"))


def render_shortfall_alerts(summary: pd.DataFrame):
    for message in shortfall_messages(summary):
        st.warning(message, icon="🟡")
