"""Plotly altitude-over-time chart.

Builds the figure only; drawing is left to the Plotly front end
(st.plotly_chart in the app).
"""

import plotly.graph_objects as go

from satalt.models import QueryResult

_LINE_COLOR = "rgb(99, 102, 241)"


def render_altitude_chart(result: QueryResult) -> go.Figure:
    """Render a QueryResult as a line chart of altitude against UTC time.

    Samples are plotted in the order the backend returned them.

    Args:
        result: A succeeded query result (may have no samples).

    Returns:
        Plotly Figure object.
    """
    trace = go.Scatter(
        x=[s.timestamp for s in result.samples],
        y=[s.altitude_km for s in result.samples],
        mode="lines+markers",
        line=dict(color=_LINE_COLOR, width=3),
        marker=dict(color=_LINE_COLOR, size=4),
        name="Altitude",
    )

    fig = go.Figure(data=[trace])
    fig.update_layout(
        autosize=True,
        margin=dict(t=20, r=20, b=60, l=60),
        hovermode="closest",
        xaxis=dict(title="Time (UTC)"),
        yaxis=dict(title="Altitude (km)", autorange=True, rangemode="normal"),
    )
    return fig


CHART_CONFIG = {"responsive": True, "displaylogo": False}
