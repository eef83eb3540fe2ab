"""preprocessing.py
Scaling, day grouping, sequence windowing and the day-id split.
"""
import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, NamedTuple

import numpy as np
import pandas as pd
from sklearn.preprocessing import MinMaxScaler

from config import INSTANT_COL, SPLITS, TIMESTAMP_COL, TOTAL_COL, WindowConfig

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = WindowConfig()


class DegenerateColumnError(ValueError):
    """A column cannot be min-max scaled (empty, non-finite or constant)."""


class InputContractError(ValueError):
    """Windowing input that grouping should never have produced."""


@dataclass(frozen=True)
class NormalizationReference:
    """Stored min/max bounds of one column, for scaling and inverse scaling."""

    name: str
    scaler: MinMaxScaler

    @property
    def min(self):
        return float(self.scaler.data_min_[0])

    @property
    def max(self):
        return float(self.scaler.data_max_[0])

    def normalize(self, x):
        return self._apply(self.scaler.transform, x)

    def denormalize(self, x):
        return self._apply(self.scaler.inverse_transform, x)

    @staticmethod
    def _apply(fn, x):
        arr = np.asarray(x, dtype=float)
        out = fn(arr.reshape(-1, 1)).reshape(arr.shape)
        return float(out) if out.ndim == 0 else out


def fit_reference(values, name='value'):
    """Fit min-max bounds over a column.

    Raises DegenerateColumnError when scaling would divide by zero or
    propagate non-finite values.
    """
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.size == 0:
        raise DegenerateColumnError(f'{name}: no values to scale')
    if not np.isfinite(arr).all():
        raise DegenerateColumnError(f'{name}: contains non-finite values')
    lo, hi = arr.min(), arr.max()
    if hi == lo:
        raise DegenerateColumnError(f'{name}: constant column (min == max == {lo})')
    scaler = MinMaxScaler()
    scaler.fit(arr.reshape(-1, 1))
    return NormalizationReference(name, scaler)


def normalize_readings(df):
    """Scale both power columns to 0-1 over the whole dataset.

    Returns a new frame and a dict of column name -> NormalizationReference.
    """
    refs = {col: fit_reference(df[col].to_numpy(), col) for col in (INSTANT_COL, TOTAL_COL)}
    out = df.copy()
    for col, ref in refs.items():
        out[col] = ref.normalize(out[col].to_numpy())
        logger.debug(f'{col}: min={ref.min} max={ref.max}')
    return out, refs


@dataclass(frozen=True)
class DayGroup:
    day_id: int
    date: object
    values: np.ndarray      # normalized cumulative totals, time-ordered
    target: float           # normalized maximum cumulative total of the day


def group_days(df, cfg=DEFAULT_WINDOW):
    """Group readings by local calendar date.

    Days with fewer than cfg.min_readings rows are dropped, longer days keep
    their first cfg.max_readings rows by timestamp. Surviving days are
    numbered 0, 1, 2, ... in the order they are first seen.
    """
    # parse per value: a column may mix UTC offsets, and the date is the wall-clock one
    stamps = df[TIMESTAMP_COL].map(pd.Timestamp)
    ordered = df.assign(_ts=stamps).sort_values('_ts', kind='mergesort')
    dates = ordered['_ts'].map(lambda ts: ts.date()).to_numpy()

    days: Dict[int, DayGroup] = {}
    dropped = 0
    for date, group in ordered.groupby(dates, sort=False):
        day_totals = group[TOTAL_COL].to_numpy(dtype=float)
        if len(day_totals) < cfg.min_readings:
            dropped += 1
            logger.debug(f'Skipping {date}: {len(day_totals)} readings')
            continue
        day_id = len(days)
        days[day_id] = DayGroup(
            day_id=day_id,
            date=date,
            values=day_totals[:cfg.max_readings].copy(),
            target=float(day_totals.max()),
        )
    logger.info(f'Grouped {len(days)} days, dropped {dropped} short days')
    return days


def split_for_day(day_id, cfg=DEFAULT_WINDOW):
    r = day_id % cfg.split_modulus
    if r == cfg.test_remainder:
        return 'test'
    if r == cfg.val_remainder:
        return 'val'
    return 'train'


class WindowedSet(NamedTuple):
    X: np.ndarray       # (N, seq_len, 1)
    y: np.ndarray       # (N,)
    dates: np.ndarray   # (N,) datetime.date

    def __len__(self):
        return len(self.y)


def _check_day_id(key):
    if key is None or isinstance(key, bool) or not isinstance(key, Integral):
        raise InputContractError(f'missing or non-integer day id {key!r}; group the readings first')


def _check_day(key, day, cfg):
    _check_day_id(key)
    n = len(day.values)
    if n < 2:
        raise InputContractError(f'day {key} has {n} readings, need at least 2')
    if n > cfg.seq_len:
        raise InputContractError(f'day {key} has {n} readings, more than seq_len={cfg.seq_len}')


def create_windows(days, cfg=DEFAULT_WINDOW):
    """Turn day groups into growing-prefix examples.

    For a day with values v1..vn, example i (2 <= i <= n) holds v1..vi in
    the first i positions and zeros after them; its target is the day's
    target. Days are processed by ascending id, prefixes by length.

    Zero padding cannot be told apart from a genuine zero reading.
    """
    for key, day in days.items():
        _check_day(key, day, cfg)

    count = sum(len(d.values) - 1 for d in days.values())
    X = np.zeros((count, cfg.seq_len, 1), dtype=np.float32)
    y = np.empty(count, dtype=np.float32)
    dates = np.empty(count, dtype=object)

    row = 0
    for key in sorted(days):
        day = days[key]
        for i in range(2, len(day.values) + 1):
            X[row, :i, 0] = day.values[:i]
            y[row] = day.target
            dates[row] = day.date
            row += 1
    return WindowedSet(X, y, dates)


def create_split_windows(days, cfg=DEFAULT_WINDOW):
    """Window each split separately. Every split key is present."""
    by_split = {name: {} for name in SPLITS}
    for key, day in days.items():
        _check_day_id(key)
        by_split[split_for_day(key, cfg)][key] = day
    sets = {name: create_windows(by_split[name], cfg) for name in SPLITS}
    logger.info('Windows per split: ' + ', '.join(f'{k}={len(v)}' for k, v in sets.items()))
    return sets


def prepare_datasets(df, cfg=DEFAULT_WINDOW):
    """Readings frame -> (split windows, normalization references)."""
    normalized, refs = normalize_readings(df)
    days = group_days(normalized, cfg)
    return create_split_windows(days, cfg), refs
