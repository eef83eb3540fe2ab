"""data_gen.py
Generate a synthetic half-hourly solar readings table and save it as CSV.
"""
import argparse
import os

import numpy as np
import pandas as pd

from config import DEFAULT_DATA_PATH, INSTANT_COL, TIMESTAMP_COL, TOTAL_COL


def generate(days=365, start='2024-01-01', seed=42, short_day_rate=0.05):
    rng = np.random.RandomState(seed)
    rows = []
    for d, day in enumerate(pd.date_range(start, periods=days, freq='D')):
        # daylight window and peak follow the season
        season = 0.5 - 0.5 * np.cos(2 * np.pi * d / 365.0)
        n = int(rng.randint(9, 21))
        if rng.rand() < short_day_rate:
            n = int(rng.randint(1, 8))
        peak = (2000.0 + 2500.0 * season) * (0.4 + 0.6 * rng.rand())
        first = day + pd.Timedelta(hours=8) - pd.Timedelta(minutes=30 * int(3 * season))
        t = np.linspace(0.0, np.pi, n + 2)[1:-1]
        power = np.clip(peak * np.sin(t) + 0.05 * peak * rng.randn(n), 0.0, None)
        total = np.cumsum(power * 0.5)  # 30 minute steps
        for i in range(n):
            rows.append((first + pd.Timedelta(minutes=30 * i), round(power[i], 2), round(total[i], 2)))
    return pd.DataFrame(rows, columns=[TIMESTAMP_COL, INSTANT_COL, TOTAL_COL])


def parse_args(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--out', default=DEFAULT_DATA_PATH)
    parser.add_argument('--days', type=int, default=365)
    parser.add_argument('--seed', type=int, default=42)
    return parser.parse_args(argv)


if __name__ == '__main__':
    args = parse_args()
    os.makedirs(os.path.dirname(args.out) or '.', exist_ok=True)
    df = generate(days=args.days, seed=args.seed)
    df.to_csv(args.out, index=False)
    print('Saved synthetic data to', args.out)
