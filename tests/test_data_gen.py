"""
Tests for the synthetic solar table generator.
"""
import pandas as pd

from config import DEFAULT_DATA_PATH, INSTANT_COL, TIMESTAMP_COL, TOTAL_COL
from data_gen import generate, parse_args


class TestGenerate:

    def test_columns(self):
        df = generate(days=10)
        assert list(df.columns) == [TIMESTAMP_COL, INSTANT_COL, TOTAL_COL]
        assert df[TIMESTAMP_COL].dt.normalize().nunique() == 10

    def test_reproducible(self):
        pd.testing.assert_frame_equal(generate(days=20, seed=3), generate(days=20, seed=3))

    def test_totals_never_decrease_within_a_day(self):
        df = generate(days=30)
        for _, day in df.groupby(df[TIMESTAMP_COL].dt.date):
            assert day[TOTAL_COL].is_monotonic_increasing
            assert (day[INSTANT_COL] >= 0).all()

    def test_half_hour_steps(self):
        df = generate(days=5)
        for _, day in df.groupby(df[TIMESTAMP_COL].dt.date):
            steps = day[TIMESTAMP_COL].diff().dropna().unique()
            assert all(s == pd.Timedelta(minutes=30) for s in steps)

    def test_short_days(self):
        df = generate(days=15, short_day_rate=1.0)
        assert df.groupby(df[TIMESTAMP_COL].dt.date).size().max() < 8


class TestParseArgs:

    def test_default_output_is_training_input(self):
        assert parse_args([]).out == DEFAULT_DATA_PATH

    def test_overrides(self):
        args = parse_args(['--out', 'x.csv', '--days', '3'])
        assert (args.out, args.days) == ('x.csv', 3)
