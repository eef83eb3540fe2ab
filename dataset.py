"""dataset.py
Fetch the half-hourly solar CSV once and load it as a readings table.
"""
import logging
import os
import urllib.request

import pandas as pd

from config import REQUIRED_COLUMNS, TIMESTAMP_COL

logger = logging.getLogger(__name__)


class MissingColumnError(ValueError):
    """The readings file lacks one of the required columns."""


def fetch_dataset(url, dest, timeout=60):
    """Download url to dest unless dest already exists. Returns dest.

    Network errors propagate to the caller unchanged.
    """
    if os.path.exists(dest):
        logger.info(f'Using cached dataset at {dest}')
        return dest
    parent = os.path.dirname(dest)
    if parent:
        os.makedirs(parent, exist_ok=True)
    logger.info(f'Downloading {url} -> {dest}')
    tmp = dest + '.part'
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response, open(tmp, 'wb') as out:
            out.write(response.read())
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
    os.replace(tmp, dest)
    return dest


def load_readings(path):
    """Read a readings CSV into a DataFrame sorted by timestamp.

    Rows whose timestamp does not parse or whose power columns are empty
    are dropped.
    """
    df = pd.read_csv(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise MissingColumnError(f'{path}: missing columns {missing}')
    return clean_readings(df[list(REQUIRED_COLUMNS)])


def _parse_timestamp(value):
    if pd.isna(value):
        return pd.NaT
    try:
        return pd.Timestamp(value)
    except (ValueError, TypeError):
        return pd.NaT


def clean_readings(df):
    df = df.copy()
    df[TIMESTAMP_COL] = df[TIMESTAMP_COL].map(_parse_timestamp)
    for col in REQUIRED_COLUMNS[1:]:
        df[col] = pd.to_numeric(df[col], errors='coerce')
    rows_before = len(df)
    df = df.dropna()
    dropped = rows_before - len(df)
    if dropped:
        logger.warning(f'Dropped {dropped} unusable rows')
    # mixed UTC offsets (across a DST change) stay as Timestamp objects so each
    # keeps its wall-clock date
    zones = {str(ts.tz) for ts in df[TIMESTAMP_COL]}
    if len(zones) <= 1:
        df[TIMESTAMP_COL] = pd.to_datetime(df[TIMESTAMP_COL])
    else:
        logger.info(f'Timestamps carry {len(zones)} UTC offsets, keeping local times')
    df = df.sort_values(TIMESTAMP_COL, kind='mergesort').reset_index(drop=True)
    logger.info(f'Loaded {len(df)} readings')
    return df
