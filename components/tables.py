"""Styled summary and probability tables."""

import streamlit as st
import pandas as pd
from typing import Optional


def render_shortfall_table(df: pd.DataFrame):
    """Render a partition summary, highlighting partitions below their requested passes."""
    def color_row(row):
        if row["Handed Out"] < row["Requested"]:
            style = "background-color: #fff3cd; color: #856404; font-weight: bold"
        else:
            style = ""
        return [style] * len(row)

    if {"Handed Out", "Requested"}.issubset(df.columns):
        st.dataframe(df.style.apply(color_row, axis=1), use_container_width=True)
    else:
        st.dataframe(df, use_container_width=True)


def render_probability_table(df: pd.DataFrame, expected: Optional[float] = None, tolerance: float = 0.02):
    """Render per-user probabilities, flagging users far from an expected probability."""
    def color_prob(val):
        try:
            v = float(val)
        except (ValueError, TypeError):
            return ""
        if expected is not None and abs(v - expected) > tolerance:
            return "color: #cc0000; font-weight: bold"
        return ""

    styled = df.style.map(color_prob, subset=["Probability"]).format({"Probability": "{:.1%}"})
    st.dataframe(styled, use_container_width=True)
