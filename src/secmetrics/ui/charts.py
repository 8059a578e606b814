"""
Plotly chart builders for the dashboard.
"""

import logging
from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go

from secmetrics.core.breakdown import BreakdownEntry

logger = logging.getLogger(__name__)

# Categorical palette, cycled when a breakdown has more groups than colors
PALETTE = ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884d8', '#82ca9d', '#ffc658', '#8dd1e1']

# Severity labels in English and French exports
SEVERITY_COLORS: Dict[str, str] = {
    'Critical': '#d9534f',
    'High': '#f0ad4e',
    'Medium': '#5bc0de',
    'Low': '#5cb85c',
    'Critique': '#d9534f',
    'Majeure': '#f0ad4e',
    'Mineure': '#5cb85c',
}

CHART_HEIGHT = 320


def _colors(breakdown: Sequence[BreakdownEntry], color_map: Optional[Dict[str, str]] = None) -> List[str]:
    color_map = color_map or {}
    return [
        color_map.get(entry.name, PALETTE[index % len(PALETTE)])
        for index, entry in enumerate(breakdown)
    ]


class ChartFactory:
    """
    Builds the dashboard's two chart kinds from breakdowns:
    - Proportion chart (pie)
    - Categorical magnitude chart (bar)
    """

    @staticmethod
    def _empty(title: str) -> go.Figure:
        fig = go.Figure()
        fig.update_layout(
            title=title,
            annotations=[dict(text="No data available", showarrow=False, font=dict(size=16))],
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            height=CHART_HEIGHT,
        )
        return fig

    @staticmethod
    def build_proportion_chart(
        breakdown: Sequence[BreakdownEntry],
        title: str,
        unit: str = "records",
        color_map: Optional[Dict[str, str]] = None,
    ) -> go.Figure:
        """Pie chart of a breakdown, labelled 'name: pct%'."""
        if not breakdown:
            return ChartFactory._empty(title)

        fig = go.Figure(go.Pie(
            labels=[entry.name or "(blank)" for entry in breakdown],
            values=[entry.value for entry in breakdown],
            text=[f"{entry.name or '(blank)'}: {entry.percentage:.1f}%" for entry in breakdown],
            textinfo="text",
            hovertemplate=f"%{{label}}<br>%{{value}} {unit} (%{{customdata:.1f}}%)<extra></extra>",
            customdata=[entry.percentage for entry in breakdown],
            marker=dict(colors=_colors(breakdown, color_map)),
            sort=False,
        ))
        fig.update_layout(title=title, showlegend=False, height=CHART_HEIGHT)
        return fig

    @staticmethod
    def build_magnitude_chart(
        breakdown: Sequence[BreakdownEntry],
        title: str,
        unit: str = "records",
        horizontal: bool = False,
        top_n: Optional[int] = None,
    ) -> go.Figure:
        """Bar chart of breakdown counts, optionally horizontal and limited to the first top_n groups."""
        entries = list(breakdown)[:top_n] if top_n else list(breakdown)
        if not entries:
            return ChartFactory._empty(title)

        names = [entry.name or "(blank)" for entry in entries]
        values = [entry.value for entry in entries]

        fig = go.Figure(go.Bar(
            x=values if horizontal else names,
            y=names if horizontal else values,
            orientation="h" if horizontal else "v",
            customdata=[entry.percentage for entry in entries],
            hovertemplate=f"%{{{'y' if horizontal else 'x'}}}<br>%{{{'x' if horizontal else 'y'}}} {unit} "
                          f"(%{{customdata:.1f}}%)<extra></extra>",
            marker=dict(color=_colors(entries)),
        ))
        fig.update_layout(title=title, height=CHART_HEIGHT)
        if horizontal:
            # First group on top
            fig.update_yaxes(autorange="reversed")
        return fig

    @staticmethod
    def to_html(fig: go.Figure) -> str:
        """Render a figure as an embeddable HTML fragment (plotly.js loaded once by the page)."""
        return fig.to_html(full_html=False, include_plotlyjs=False)
