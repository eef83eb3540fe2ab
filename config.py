"""config.py
Window and training settings for the solar daily-peak LSTM.
"""
from dataclasses import dataclass

TIMESTAMP_COL = 'timestamp'
INSTANT_COL = 'instantaneous_power'
TOTAL_COL = 'cumulative_total_power'
REQUIRED_COLUMNS = (TIMESTAMP_COL, INSTANT_COL, TOTAL_COL)

DEFAULT_DATA_PATH = 'data/solar.csv'

SPLITS = ('train', 'val', 'test')


@dataclass(frozen=True)
class WindowConfig:
    """
    Controls day filtering, sequence length and the day-id split.
    Readings are half-hourly, so 14 readings cover seven hours of daylight.
    """

    min_readings: int = 8       # shorter days are dropped
    max_readings: int = 14      # longer days keep their first readings
    seq_len: int = 14           # padded length of every input sequence

    split_modulus: int = 10
    test_remainder: int = 0
    val_remainder: int = 9

    def __post_init__(self):
        if not 2 <= self.min_readings <= self.max_readings:
            raise ValueError(
                f'need 2 <= min_readings <= max_readings, got {self.min_readings}, {self.max_readings}')
        if self.max_readings > self.seq_len:
            raise ValueError(f'max_readings ({self.max_readings}) exceeds seq_len ({self.seq_len})')
        if self.split_modulus < 2:
            raise ValueError('split_modulus must be at least 2')
        if self.test_remainder == self.val_remainder:
            raise ValueError('test_remainder and val_remainder must differ')
        for r in (self.test_remainder, self.val_remainder):
            if not 0 <= r < self.split_modulus:
                raise ValueError(f'remainder {r} outside [0, {self.split_modulus})')


@dataclass(frozen=True)
class TrainConfig:
    units: int = 14
    dropout: float = 0.2
    epochs: int = 200
    batch_size: int = 100
