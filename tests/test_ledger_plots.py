import pandas as pd

from gringotts.calculations.ledger_views import kton_issuance_table, maturity_ladder, penalty_schedule
from gringotts.dashboard.plots.ledger_plots import (
    build_issuance_figure,
    build_maturity_ladder_figure,
    build_penalty_figure,
)
from gringotts.models.rates import COIN, RateParameters


def test_issuance_figure_in_whole_tokens() -> None:
    fig = build_issuance_figure(kton_issuance_table(100 * COIN, RateParameters(), max_months=2))
    assert list(fig.data[0].y) == [101.5, 203.0]


def test_penalty_figure_has_three_series() -> None:
    schedule = penalty_schedule(100 * COIN, 1, pd.Timestamp('2025-01-01'), RateParameters(), freq='W')
    fig = build_penalty_figure(schedule)
    assert [trace.name for trace in fig.data] == ['Net RING returned', 'Penalty (RING)', 'KTON burned']
    assert fig.data[1].y[-1] == 0.0


def test_maturity_ladder_figure_empty() -> None:
    empty = maturity_ladder(pd.DataFrame())
    fig = build_maturity_ladder_figure(empty)
    assert len(fig.data) == 0
