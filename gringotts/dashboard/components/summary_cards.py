"""Summary card renderer for key ledger KPIs."""

from __future__ import annotations

import streamlit as st

from gringotts.models.rates import COIN


def render_summary_cards(
    locked_ring: int,
    kton_supply: int,
    active_deposits: int,
    title: str = 'Ledger Metrics',
) -> None:
    """Render top-level KPI cards."""
    st.subheader(title)
    c1, c2, c3 = st.columns(3)
    c1.metric('RING Locked', f'{locked_ring / COIN:,.4f}')
    c2.metric('KTON Supply', f'{kton_supply / COIN:,.4f}')
    c3.metric('Active Deposits', f'{active_deposits:,d}')
