"""Plotly chart builders for the Passdraw app."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd


def passes_vs_requested_bar(
    summary_df: pd.DataFrame,
    title: str = "Passes Handed Out vs Requested",
) -> go.Figure:
    """Bar chart comparing requested and handed-out passes by partition."""
    fig = px.bar(
        summary_df, x="Partition", y=["Requested", "Handed Out"],
        barmode="group",
        labels={"value": "Passes", "variable": ""},
        title=title,
        color_discrete_map={"Requested": "#4A90D9", "Handed Out": "#E8734A"},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def win_probability_bar(
    user_stats: pd.DataFrame,
    partition: str = None,
) -> go.Figure:
    """Horizontal bar chart of each user's empirical probability of getting a pass."""
    df = user_stats
    if partition:
        df = df[df["Partition"] == partition]

    df = df.sort_values("User ID", ascending=False)

    fig = px.bar(
        df, x="Probability", y="User ID",
        orientation="h",
        title=f"Win Probability{' — ' + partition if partition else ''}",
        color="Probability",
        color_continuous_scale=["#E8734A", "#F5C542", "#4A90D9"],
        range_color=[0, 1],
    )
    fig.update_layout(height=max(300, len(df) * 25), yaxis_type="category")
    fig.update_traces(texttemplate="%{x:.1%}", textposition="auto")
    return fig


def pass_share_donut(handed_out: int, total: int, title: str = "Users With a Pass") -> go.Figure:
    """Donut chart of users with and without a pass."""
    fig = go.Figure(data=[go.Pie(
        labels=["Pass", "Refused"],
        values=[handed_out, total - handed_out],
        hole=0.6,
        marker_colors=["#4A90D9", "#E8734A"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{handed_out}/{total}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig
