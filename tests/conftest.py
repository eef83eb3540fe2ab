"""
Shared fixtures for the preprocessing and training tests.
"""
import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config import INSTANT_COL, TIMESTAMP_COL, TOTAL_COL  # noqa: E402

SCENARIO_TOTALS = [1.69, 11.36, 67.50, 250.50, 573.50, 900.0, 1200.0, 1815.0]


def make_day(date, totals, start='08:00'):
    """One day of half-hourly readings with the given cumulative totals."""
    first = pd.Timestamp(f'{date} {start}')
    rows = []
    prev = 0.0
    for i, total in enumerate(totals):
        rows.append((first + pd.Timedelta(minutes=30 * i), (total - prev) * 2.0, total))
        prev = total
    return pd.DataFrame(rows, columns=[TIMESTAMP_COL, INSTANT_COL, TOTAL_COL])


@pytest.fixture
def scenario_readings():
    """The eight-reading scenario day plus a seven-reading day that widens the bounds."""
    short = make_day('2024-06-01', [0.0, 100.0, 500.0, 1200.0, 2000.0, 2600.0, 3000.0])
    day = make_day('2024-06-02', SCENARIO_TOTALS)
    return pd.concat([short, day], ignore_index=True)
