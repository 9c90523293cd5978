"""Excel export pack builders for the ledger dashboard."""

from __future__ import annotations

from datetime import datetime
from io import BytesIO
import re
from typing import Any

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from gringotts.calculations.ledger_views import maturity_ladder
from gringotts.dashboard.components.formatting import display_amounts
from gringotts.models.rates import RateParameters

EXPORT_SHEETS = ['Summary_Metadata', 'Accounts', 'Deposits', 'Events', 'Maturity_Ladder']


def default_export_filename(workbook_path: str, as_of: pd.Timestamp) -> str:
    """Return a deterministic export filename."""
    stem = re.sub(r'\.xlsx?$', '', str(workbook_path or 'ledger').split('/')[-1], flags=re.IGNORECASE)
    safe_stem = re.sub(r'[^A-Za-z0-9_-]+', '_', stem).strip('_') or 'ledger'
    return f'gringotts_ledger_{safe_stem}_{pd.Timestamp(as_of).date().isoformat()}.xlsx'


def _status_counts(events: pd.DataFrame) -> str:
    if events.empty:
        return ''
    counts = events['status'].value_counts().sort_index()
    return ', '.join(f'{k}={int(v)}' for k, v in counts.items())


def build_export_context(
    *,
    path: str,
    rate_params: RateParameters,
    accounts: pd.DataFrame,
    deposits: pd.DataFrame,
    events: pd.DataFrame | None = None,
) -> dict[str, pd.DataFrame]:
    """Build display-ready dataframes for the export sheets."""
    events = events if events is not None else pd.DataFrame()
    ladder = maturity_ladder(deposits)
    metadata = pd.DataFrame(
        [
            {'Field': 'Generated At', 'Value': datetime.now().isoformat(timespec='seconds')},
            {'Field': 'Workbook Path', 'Value': str(path)},
            {'Field': 'Unit Interest (fixed-point)', 'Value': str(rate_params.unit_interest)},
            {'Field': 'Penalty Multiplier', 'Value': int(rate_params.penalty_multiplier)},
            {'Field': 'KTON Rounding', 'Value': rate_params.kton_rounding},
            {'Field': 'Penalty Rounding', 'Value': rate_params.penalty_rounding},
            {'Field': 'Account Count', 'Value': int(len(accounts))},
            {'Field': 'Deposit Count', 'Value': int(len(deposits))},
            {'Field': 'Event Status Counts', 'Value': _status_counts(events)},
            {'Field': 'Amount Unit', 'Value': 'whole tokens (1e18 smallest units)'},
        ]
    )
    return {
        'summary_metadata': metadata,
        'accounts': display_amounts(accounts),
        'deposits': display_amounts(deposits),
        'events': display_amounts(events),
        'maturity_ladder': display_amounts(ladder),
    }


def _format_worksheet(ws, *, header_row: int = 1, freeze_panes: str = 'A2') -> None:
    ws.freeze_panes = freeze_panes
    max_row = ws.max_row
    max_col = ws.max_column
    if max_row <= 0 or max_col <= 0:
        return

    for col_idx in range(1, max_col + 1):
        ws.cell(row=header_row, column=col_idx).font = Font(bold=True)

    headers = {
        col_idx: str(ws.cell(row=header_row, column=col_idx).value or '').strip().lower()
        for col_idx in range(1, max_col + 1)
    }

    for row_idx in range(header_row + 1, max_row + 1):
        for col_idx in range(1, max_col + 1):
            cell = ws.cell(row=row_idx, column=col_idx)
            if isinstance(cell.value, (pd.Timestamp, datetime)):
                cell.number_format = 'YYYY-MM-DD HH:MM'
                continue
            if isinstance(cell.value, bool):
                continue
            if isinstance(cell.value, (int, float)):
                header = headers.get(col_idx, '')
                if 'count' in header or header.endswith('_id') or 'months' in header or header == 'row':
                    cell.number_format = '#,##0'
                else:
                    cell.number_format = '#,##0.0000'

    for col_idx in range(1, max_col + 1):
        max_len = 0
        for row_idx in range(1, min(max_row, 200) + 1):
            val = ws.cell(row=row_idx, column=col_idx).value
            max_len = max(max_len, len('' if val is None else str(val)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max(10, max_len + 2), 60)


def build_export_workbook_bytes(context: dict[str, Any], *, workbook_title: str) -> bytes:
    """Serialize export context into an Excel workbook."""
    output = BytesIO()
    keys = ['summary_metadata', 'accounts', 'deposits', 'events', 'maturity_ladder']
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        for key, sheet in zip(keys, EXPORT_SHEETS):
            pd.DataFrame(context.get(key, pd.DataFrame())).to_excel(writer, sheet_name=sheet, index=False)
        writer.book.properties.title = str(workbook_title)
        for sheet in EXPORT_SHEETS:
            _format_worksheet(writer.sheets[sheet])
    return output.getvalue()
