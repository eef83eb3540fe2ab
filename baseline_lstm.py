"""baseline_lstm.py
LSTM baseline predicting a day's total solar production from a partial day.
"""
import argparse
import logging
import os

import numpy as np
from tensorflow.keras.layers import LSTM, Dense, Dropout, Input
from tensorflow.keras.models import Sequential

from config import DEFAULT_DATA_PATH, TOTAL_COL, TrainConfig, WindowConfig
from dataset import fetch_dataset, load_readings
from preprocessing import prepare_datasets

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = WindowConfig()
DEFAULT_TRAIN = TrainConfig()


def build_model(seq_len=DEFAULT_WINDOW.seq_len, features=1,
                units=DEFAULT_TRAIN.units, dropout=DEFAULT_TRAIN.dropout):
    model = Sequential()
    model.add(Input(shape=(seq_len, features)))
    model.add(LSTM(units))
    model.add(Dropout(dropout))
    model.add(Dense(1))
    model.compile(optimizer='adam', loss='mse')
    return model


def train(sets, cfg=DEFAULT_TRAIN, verbose=1):
    """Fit on the train split, monitoring the val split when it has examples.

    The model takes its input shape from the training windows.
    """
    Xtr, ytr, _ = sets['train']
    if len(ytr) == 0:
        raise ValueError('training split is empty')
    Xv, yv, _ = sets['val']
    model = build_model(Xtr.shape[1], Xtr.shape[2], cfg.units, cfg.dropout)
    validation = (Xv, yv) if len(yv) else None
    logger.info(f'Training on {len(ytr)} examples for {cfg.epochs} epochs')
    history = model.fit(Xtr, ytr, validation_data=validation,
                        epochs=cfg.epochs, batch_size=cfg.batch_size, verbose=verbose)
    return model, history


def predict(model, X, ref):
    """Predict normalized targets and map them back to physical units."""
    if len(X) == 0:
        return np.empty(0)
    return ref.denormalize(model.predict(X, verbose=0).reshape(-1))


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--data', default=DEFAULT_DATA_PATH)
    parser.add_argument('--url', help='Download the CSV from here if --data does not exist')
    parser.add_argument('--epochs', type=int, default=DEFAULT_TRAIN.epochs)
    parser.add_argument('--batch', type=int, default=DEFAULT_TRAIN.batch_size)
    parser.add_argument('--outdir', default='outputs', help='Directory to save model and npy files')
    parser.add_argument('--log-level', default='INFO')
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper()),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    os.makedirs(args.outdir, exist_ok=True)

    if args.url:
        fetch_dataset(args.url, args.data)
    df = load_readings(args.data)

    sets, refs = prepare_datasets(df, DEFAULT_WINDOW)
    cfg = TrainConfig(epochs=args.epochs, batch_size=args.batch)
    model, history = train(sets, cfg)

    model_path = os.path.join(args.outdir, 'baseline_lstm.keras')
    model.save(model_path)

    Xt, yt, dates = sets['test']
    ref = refs[TOTAL_COL]
    preds = predict(model, Xt, ref)
    truth = ref.denormalize(yt) if len(yt) else np.empty(0)
    preds_path = os.path.join(args.outdir, 'lstm_preds.npy')
    truth_path = os.path.join(args.outdir, 'lstm_truth.npy')
    dates_path = os.path.join(args.outdir, 'lstm_dates.npy')
    np.save(preds_path, preds)
    np.save(truth_path, truth)
    np.save(dates_path, np.array([d.isoformat() for d in dates]))

    print(f'Saved model: {model_path}')
    print(f'Saved predictions: {preds_path}')
    print(f'Saved ground truth: {truth_path}')
    print(f'Saved test dates: {dates_path}')
