"""
Radar chart rendering (Plotly)
"""

from __future__ import annotations

import plotly.graph_objects as go

from eval_radar_core.domain.constants import FALLBACK_COLORS, METRIC_KEYS, MODEL_COLORS
from eval_radar_core.domain.value_objects import RadarChart
from eval_radar_core.use_cases.radar import axis_labels, hover_text


def model_colors(model: str, index: int = 0) -> tuple[str, str]:
    """(line, fill) colors for a model; unknown models cycle through fallbacks"""
    if model in MODEL_COLORS:
        return MODEL_COLORS[model]
    return FALLBACK_COLORS[index % len(FALLBACK_COLORS)]


def build_radar_figure(chart: RadarChart, title: str = "Model Performance Comparison") -> go.Figure:
    """
    Build a Plotly polar figure from a RadarChart

    Radial axis runs over [0, 1]; tick labels show original-scale values.
    """
    labels = axis_labels()
    # Repeat the first axis to close each polygon
    theta = labels + labels[:1]

    fig = go.Figure()
    for i, series in enumerate(chart.series):
        line_color, fill_color = model_colors(series.model, i)
        r = [series.normalized[key] for key in METRIC_KEYS]
        hover = [hover_text(series, key) for key in METRIC_KEYS]

        fig.add_trace(go.Scatterpolar(
            r=r + r[:1],
            theta=theta,
            fill="toself",
            name=series.model,
            line=dict(color=line_color, width=2),
            fillcolor=fill_color,
            marker=dict(color=line_color, size=7, line=dict(color="#fff", width=1)),
            hovertext=hover + hover[:1],
            hoverinfo="text",
        ))

    fig.update_layout(
        title=title,
        polar=dict(
            radialaxis=dict(
                range=[0, 1],
                tickvals=[t.position for t in chart.ticks],
                ticktext=[t.label for t in chart.ticks],
                gridcolor="rgba(0, 0, 0, 0.1)",
            ),
            angularaxis=dict(gridcolor="rgba(0, 0, 0, 0.1)"),
        ),
        legend=dict(orientation="h", yanchor="bottom", y=1.05, xanchor="center", x=0.5),
        template="plotly_white",
        height=450,
    )
    return fig
