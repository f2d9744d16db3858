"""Plotly figures for grouped salary box plots."""

from __future__ import annotations

import json
from typing import Any

import plotly.graph_objects as go

from salarybox.analysis import AnalysisResult
from salarybox.config import group_label


NOT_LOADED_TITLE = "Upload a salary spreadsheet to see box plots here"
EMPTY_TITLE = "No salary data left to plot for this selection"
SALARY_AXIS_TITLE = "Salary"


def build_empty_figure(title: str = NOT_LOADED_TITLE) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        title=title,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=40, r=20, t=60, b=40),
    )
    return fig


def build_box_figure(result: AnalysisResult) -> go.Figure:
    """One box per distribution, in the order the analysis produced them."""

    if result.status == "not_loaded":
        return build_empty_figure(NOT_LOADED_TITLE)
    if not result.distributions:
        return build_empty_figure(EMPTY_TITLE)

    unit = group_label(result.group_by)
    fig = go.Figure()
    for distribution in result.distributions:
        fig.add_trace(
            go.Box(
                y=list(distribution.values),
                name=distribution.label,
                width=0.8,
                boxpoints="outliers",
                hovertemplate=(
                    f"{unit}: {distribution.label}"
                    f"<br>{SALARY_AXIS_TITLE}: %{{y}}<extra></extra>"
                ),
            )
        )
    fig.update_layout(
        title=f"Salary distribution by {unit.lower()}",
        xaxis=dict(title=unit, tickangle=-45),
        yaxis=dict(title=SALARY_AXIS_TITLE),
        showlegend=False,
        boxgap=0.2,
        boxgroupgap=0.1,
        boxmode="group",
        margin=dict(l=60, r=20, t=60, b=140),
    )
    return fig


def figure_to_json(fig: go.Figure) -> dict[str, Any]:
    return json.loads(fig.to_json())


def figure_to_html(fig: go.Figure, *, div_id: str = "chart") -> str:
    return fig.to_html(
        full_html=False,
        include_plotlyjs="cdn",
        div_id=div_id,
        config={"responsive": True},
    )


__all__ = [
    "EMPTY_TITLE",
    "NOT_LOADED_TITLE",
    "build_box_figure",
    "build_empty_figure",
    "figure_to_html",
    "figure_to_json",
]
