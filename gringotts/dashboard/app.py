"""Streamlit app entrypoint for the Gringotts ledger simulator."""

from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd
import streamlit as st

from gringotts.calculations.ledger_views import (
    active_deposits_snapshot,
    kton_issuance_table,
    locked_principal,
    maturity_ladder,
    penalty_schedule,
)
from gringotts.dashboard.components.controls import render_sidebar_controls
from gringotts.dashboard.components.formatting import display_amounts, style_numeric_table
from gringotts.dashboard.components.summary_cards import render_summary_cards
from gringotts.dashboard.plots.ledger_plots import render_ledger_plots
from gringotts.dashboard.reporting.export_pack import (
    build_export_context,
    build_export_workbook_bytes,
    default_export_filename,
)
from gringotts.data.loader import load_input_workbook
from gringotts.engine.ledger import LedgerEngine
from gringotts.engine.scenario import run_operations
from gringotts.models.rates import COIN, RateParameters


@st.cache_data
def _replay(path: str) -> dict[str, object]:
    rate_params, ops = load_input_workbook(path)
    engine = LedgerEngine(rate_params)
    events = run_operations(engine, ops)
    return {
        'rate_params': rate_params,
        'events': events,
        'deposits': engine.deposits_frame(),
        'accounts': engine.accounts_frame(),
        'kton_supply': engine.kton_supply(),
    }


def _last_event_time(events: pd.DataFrame) -> pd.Timestamp:
    if events.empty:
        return pd.Timestamp.now().normalize()
    return pd.Timestamp(events['at'].max())


def main() -> None:
    st.set_page_config(page_title='Gringotts Ledger', layout='wide')
    st.title('Gringotts Bank Ledger Simulator')

    deposit_ids: list[int] = st.session_state.get('known_deposit_ids', [])
    ui = render_sidebar_controls(deposit_ids)
    input_path = ui['input_path']

    try:
        state = _replay(input_path)
    except Exception as exc:
        st.error(f'Failed to load workbook at `{input_path}`: {exc}')
        st.stop()

    rate_params: RateParameters = state['rate_params']
    events: pd.DataFrame = state['events']
    deposits: pd.DataFrame = state['deposits']
    accounts: pd.DataFrame = state['accounts']

    current_ids = [int(x) for x in deposits['deposit_id'].tolist()] if not deposits.empty else []
    if current_ids != deposit_ids:
        st.session_state['known_deposit_ids'] = current_ids
        st.rerun()

    as_of = _last_event_time(events)
    active = active_deposits_snapshot(deposits, as_of)
    render_summary_cards(
        locked_ring=locked_principal(active),
        kton_supply=int(state['kton_supply']),
        active_deposits=int(len(active)),
    )
    st.caption(
        f'Unit interest {rate_params.unit_interest} (scaled 1e18), '
        f'penalty multiplier {rate_params.penalty_multiplier}, as of {as_of}'
    )

    failed = events[events['status'] != 'ok'] if not events.empty else events
    if not failed.empty:
        st.warning(f'{len(failed)} operations were rejected by the ledger.')

    tab_accounts, tab_deposits, tab_events, tab_charts = st.tabs(['Accounts', 'Deposits', 'Events', 'Charts'])
    with tab_accounts:
        st.dataframe(style_numeric_table(display_amounts(accounts)), use_container_width=True)
    with tab_deposits:
        st.dataframe(style_numeric_table(display_amounts(deposits)), use_container_width=True)
    with tab_events:
        st.dataframe(style_numeric_table(display_amounts(events)), use_container_width=True)
    with tab_charts:
        issuance = kton_issuance_table(ui['issuance_principal'] * COIN, rate_params, ui['max_months'])
        schedule = None
        if ui['penalty_deposit'] is not None and not deposits.empty:
            row = deposits[deposits['deposit_id'] == ui['penalty_deposit']].iloc[0]
            schedule = penalty_schedule(
                int(row['principal']),
                int(row['lock_months']),
                pd.Timestamp(row['created_at']),
                rate_params,
                freq=ui['schedule_freq'],
            )
        render_ledger_plots(issuance, schedule, maturity_ladder(deposits))

    ctx = build_export_context(
        path=input_path,
        rate_params=rate_params,
        accounts=accounts,
        deposits=deposits,
        events=events,
    )
    st.download_button(
        'Download Excel export',
        data=build_export_workbook_bytes(ctx, workbook_title='Gringotts Ledger Export'),
        file_name=default_export_filename(input_path, as_of),
        mime='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    )


if __name__ == '__main__':
    main()
