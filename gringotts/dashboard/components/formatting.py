"""Shared dashboard formatting helpers."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from gringotts.models.rates import COIN

AMOUNT_COLUMNS = {
    'principal',
    'issued_kton',
    'penalty',
    'kton_burned',
    'net_ring',
    'amount',
    'ring_balance',
    'kton_balance',
    'locked_ring',
    'outstanding_principal',
}


def to_token_units(values: pd.Series, unit: int = COIN) -> pd.Series:
    """Convert exact smallest-unit integers to float whole-token amounts for display."""
    return values.map(lambda v: float('nan') if pd.isna(v) else int(v) / unit).astype(float)


def display_amounts(df: pd.DataFrame, *, unit: int = COIN) -> pd.DataFrame:
    """Copy of df with every known amount column expressed in whole tokens."""
    out = df.copy()
    for col in out.columns:
        if col in AMOUNT_COLUMNS:
            out[col] = to_token_units(out[col], unit)
    return out


def style_numeric_table(
    df: pd.DataFrame,
    *,
    percent_cols: set[str] | None = None,
) -> pd.io.formats.style.Styler | pd.DataFrame:
    """Apply consistent numeric formatting across dashboard tables."""
    if df.empty:
        return df
    percent_cols = percent_cols or set()
    formats: dict[str, str] = {}
    for col in df.columns:
        if not pd.api.types.is_numeric_dtype(df[col]):
            continue
        name = str(col).lower()
        if col in percent_cols or 'fraction' in name:
            formats[col] = '{:,.2%}'
        elif 'count' in name or name.endswith('_id') or 'months' in name or name == 'row' or 'deposits' in name:
            formats[col] = '{:,.0f}'
        else:
            formats[col] = '{:,.4f}'
    if not formats:
        return df
    return df.style.format(formats, na_rep='-')


def plot_axis_number_format(fig: go.Figure, *, y_axes: list[str]) -> go.Figure:
    """Apply thousand separators and consistent tick formatting to selected y-axes."""
    layout = fig.layout
    for axis_name in y_axes:
        axis = getattr(layout, axis_name, None)
        if axis is None:
            continue
        axis.separatethousands = True
    return apply_plot_layout_hygiene(fig)


def apply_plot_layout_hygiene(fig: go.Figure) -> go.Figure:
    """Apply consistent spacing so legends and axis titles do not overlap."""
    fig.update_layout(
        margin=dict(t=72, r=64, b=96, l=72),
        legend=dict(
            orientation='h',
            yanchor='top',
            y=-0.2,
            xanchor='left',
            x=0.0,
            bgcolor='rgba(0,0,0,0)',
        ),
    )
    fig.update_xaxes(automargin=True, title_standoff=12)
    fig.update_yaxes(automargin=True, title_standoff=12)
    return fig
