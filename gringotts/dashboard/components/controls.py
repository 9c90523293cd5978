"""Sidebar controls and state normalization helpers."""

from __future__ import annotations

from typing import Any

import streamlit as st

DEFAULT_INPUT_PATH = 'Input.xlsx'
SCHEDULE_FREQ_OPTIONS = ['D', 'W', 'MS']
SCHEDULE_FREQ_LABELS = {'D': 'Daily', 'W': 'Weekly', 'MS': 'Month Start'}


def coerce_option(current: Any, options: list[Any], default: Any) -> Any:
    """Return a stable option value that is guaranteed to be in options."""
    if not options:
        return default
    if current in options:
        return current
    if default in options:
        return default
    return options[0]


def render_sidebar_controls(deposit_ids: list[int]) -> dict[str, Any]:
    """Render sidebar controls and return normalized UI state."""
    st.sidebar.header('Inputs')
    input_path = st.sidebar.text_input(
        'Workbook path',
        value=DEFAULT_INPUT_PATH,
        key='global_input_path',
    )
    st.sidebar.header('Schedules')
    issuance_principal = st.sidebar.number_input(
        'Illustrative principal (RING)',
        min_value=1,
        value=100,
        step=1,
        key='issuance_principal',
    )
    max_months = st.sidebar.slider('Max lock months', min_value=1, max_value=60, value=36, key='max_months')

    selected_deposit = None
    if deposit_ids:
        current = coerce_option(st.session_state.get('penalty_deposit'), deposit_ids, deposit_ids[0])
        st.session_state['penalty_deposit'] = current
        selected_deposit = st.sidebar.selectbox(
            'Penalty curve for deposit',
            deposit_ids,
            index=deposit_ids.index(current),
            key='penalty_deposit',
        )
    freq_current = coerce_option(st.session_state.get('schedule_freq'), SCHEDULE_FREQ_OPTIONS, 'D')
    st.session_state['schedule_freq'] = freq_current
    schedule_freq = st.sidebar.radio(
        'Penalty curve step',
        SCHEDULE_FREQ_OPTIONS,
        index=SCHEDULE_FREQ_OPTIONS.index(freq_current),
        format_func=lambda f: SCHEDULE_FREQ_LABELS[f],
        key='schedule_freq',
        horizontal=True,
    )
    return {
        'input_path': str(input_path).strip() or DEFAULT_INPUT_PATH,
        'issuance_principal': int(issuance_principal),
        'max_months': int(max_months),
        'penalty_deposit': selected_deposit,
        'schedule_freq': schedule_freq,
    }
