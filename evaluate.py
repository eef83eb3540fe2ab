"""evaluate.py
Simple evaluation metrics: RMSE, MAE, MAPE
"""
import argparse

import numpy as np


def rmse(a, b): return float(np.sqrt(np.mean((a - b) ** 2)))
def mae(a, b): return float(np.mean(np.abs(a - b)))
def mape(a, b): return float(np.mean(np.abs((a - b) / (b + 1e-8))) * 100)


def summarize(pred, truth):
    pred, truth = np.asarray(pred, dtype=float), np.asarray(truth, dtype=float)
    if pred.shape != truth.shape:
        raise ValueError(f'shape mismatch: pred {pred.shape} vs truth {truth.shape}')
    if pred.size == 0:
        raise ValueError('nothing to evaluate')
    return {'rmse': rmse(pred, truth), 'mae': mae(pred, truth), 'mape': mape(pred, truth)}


def daily_peaks(values, dates):
    """Keep the last value of each consecutive run of equal dates.

    Examples of one day are ordered by prefix length, so this picks the
    value produced from the longest observed prefix.
    """
    values, dates = np.asarray(values), np.asarray(dates)
    if len(values) != len(dates):
        raise ValueError('values and dates differ in length')
    if len(values) == 0:
        return values, dates
    last = np.append(dates[1:] != dates[:-1], True)
    return values[last], dates[last]


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--pred', required=True)
    parser.add_argument('--truth', required=True)
    parser.add_argument('--dates', help='Also report metrics on one prediction per day')
    args = parser.parse_args()
    p = np.load(args.pred)
    t = np.load(args.truth)
    for name, value in summarize(p, t).items():
        print(f'{name.upper()}:', value)
    if args.dates:
        d = np.load(args.dates)
        p_day, _ = daily_peaks(p, d)
        t_day, _ = daily_peaks(t, d)
        print(f'Per day ({len(p_day)} days):')
        for name, value in summarize(p_day, t_day).items():
            print(f'  {name.upper()}:', value)
