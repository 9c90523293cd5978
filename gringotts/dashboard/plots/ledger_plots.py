"""Plotly chart builders for ledger schedules."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots
import streamlit as st

from gringotts.dashboard.components.formatting import plot_axis_number_format, to_token_units


def build_issuance_figure(issuance_df: pd.DataFrame) -> go.Figure:
    """Bar chart of KTON issued per lock length."""
    plot_df = pd.DataFrame(
        {
            'lock_months': issuance_df['lock_months'],
            'issued_kton': to_token_units(issuance_df['issued_kton']),
        }
    )
    fig = px.bar(
        plot_df,
        x='lock_months',
        y='issued_kton',
        title='KTON Issued by Lock Length',
        labels={'lock_months': 'Lock (months)', 'issued_kton': 'KTON issued'},
    )
    return plot_axis_number_format(fig, y_axes=['yaxis'])


def build_penalty_figure(schedule_df: pd.DataFrame, title: str = 'Early Redemption Outcome') -> go.Figure:
    """Penalty and net RING on the left axis, KTON burned on the right axis."""
    fig = make_subplots(specs=[[{'secondary_y': True}]])
    x = schedule_df['redeem_at']
    fig.add_scatter(x=x, y=to_token_units(schedule_df['net_ring']), name='Net RING returned', mode='lines')
    fig.add_scatter(x=x, y=to_token_units(schedule_df['penalty']), name='Penalty (RING)', mode='lines')
    fig.add_scatter(
        x=x,
        y=to_token_units(schedule_df['kton_burned']),
        name='KTON burned',
        mode='lines',
        line=dict(dash='dot'),
        secondary_y=True,
    )
    fig.update_layout(title=title)
    fig.update_yaxes(title_text='RING', secondary_y=False)
    fig.update_yaxes(title_text='KTON', secondary_y=True)
    return plot_axis_number_format(fig, y_axes=['yaxis', 'yaxis2'])


def build_maturity_ladder_figure(ladder_df: pd.DataFrame) -> go.Figure:
    """Outstanding principal by maturity month."""
    fig = go.Figure()
    if not ladder_df.empty:
        fig.add_bar(
            x=ladder_df['maturity_month_end'],
            y=to_token_units(ladder_df['outstanding_principal']),
            name='Outstanding principal',
            customdata=ladder_df['deposit_count'],
            hovertemplate='%{x|%Y-%m}: %{y:,.4f} RING (%{customdata} deposits)<extra></extra>',
        )
    fig.update_layout(title='Maturity Ladder', yaxis=dict(title='RING'))
    return plot_axis_number_format(fig, y_axes=['yaxis'])


def render_ledger_plots(
    issuance_df: pd.DataFrame,
    schedule_df: pd.DataFrame | None,
    ladder_df: pd.DataFrame,
) -> None:
    """Render issuance, penalty and maturity charts."""
    st.plotly_chart(build_issuance_figure(issuance_df), use_container_width=True)
    if schedule_df is None or schedule_df.empty:
        st.info('No deposit selected for the penalty curve.')
    else:
        st.plotly_chart(build_penalty_figure(schedule_df), use_container_width=True)
    if ladder_df.empty:
        st.info('No active deposits for the maturity ladder.')
    else:
        st.plotly_chart(build_maturity_ladder_figure(ladder_df), use_container_width=True)
