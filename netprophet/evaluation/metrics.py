"""
Calibration metrics for backtesting an engine configuration.

Compares predicted P(A wins) against observed results to check that the
weight table and logistic constant give honest probabilities.
"""

import logging

import numpy as np
from sklearn.metrics import brier_score_loss, log_loss, roc_auc_score

from netprophet.core.config import DEFAULT_CONFIG
from netprophet.core.schema import PredictionResult

log = logging.getLogger(__name__)


def compute_auc(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """ROC AUC; 0.5 when only one class is present."""
    if len(np.unique(y_true)) < 2:
        return 0.5
    return float(roc_auc_score(y_true, y_pred))


def compute_logloss(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Binary cross-entropy (log loss)."""
    y_pred_clipped = np.clip(y_pred, 1e-7, 1 - 1e-7)
    return float(log_loss(y_true, y_pred_clipped, labels=[0, 1]))


def compute_brier(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Brier score (MSE of probabilities)."""
    return float(brier_score_loss(y_true, y_pred, pos_label=1))


def compute_calibration(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    n_bins: int = 10,
    lo: float = DEFAULT_CONFIG.probability_floor,
    hi: float = DEFAULT_CONFIG.probability_ceiling,
) -> dict:
    """Observed win rate of side A per predicted-probability bin.

    Bins split the engine's output range [lo, hi] evenly; predictions outside
    it fall into the end bins. ``expected_calibration_error`` weights each
    bin's gap by its share of matches.
    """
    y_true = np.asarray(y_true, dtype=np.float64)
    y_pred = np.asarray(y_pred, dtype=np.float64)
    bin_edges = np.linspace(lo, hi, n_bins + 1)
    which = np.digitize(y_pred, bin_edges[1:-1])

    counts = np.bincount(which, minlength=n_bins)
    filled = counts > 0
    with np.errstate(divide="ignore", invalid="ignore"):
        pred_mean = np.where(filled, np.bincount(which, y_pred, n_bins) / counts, np.nan)
        won_mean = np.where(filled, np.bincount(which, y_true, n_bins) / counts, np.nan)

    gaps = np.abs(pred_mean[filled] - won_mean[filled])
    if not len(gaps):
        max_gap = ece = float("nan")
    else:
        max_gap = float(gaps.max())
        ece = float(np.dot(gaps, counts[filled]) / counts.sum())

    return {
        "bin_edges": bin_edges,
        "bin_pred_mean": pred_mean,
        "bin_actual_mean": won_mean,
        "bin_counts": counts,
        "max_calibration_error": max_gap,
        "expected_calibration_error": ece,
    }


def evaluate_predictions(
    results: list[PredictionResult],
    a_won: list[bool],
    n_bins: int = 10,
) -> dict:
    """Score a batch of predictions against observed winners (True = A won)."""
    if len(results) != len(a_won):
        raise ValueError(f"{len(results)} predictions but {len(a_won)} outcomes")
    if not results:
        raise ValueError("no predictions to evaluate")

    y_true = np.array(a_won, dtype=np.float64)
    y_pred = np.array([r.probability_a for r in results], dtype=np.float64)
    favorites_won = np.mean((y_pred > 0.5) == (y_true == 1.0))

    report = {
        "n": len(results),
        "auc": compute_auc(y_true, y_pred),
        "logloss": compute_logloss(y_true, y_pred),
        "brier": compute_brier(y_true, y_pred),
        "favorite_hit_rate": float(favorites_won),
        "mean_confidence": float(np.mean([r.confidence for r in results])),
        "calibration": compute_calibration(y_true, y_pred, n_bins),
    }
    log.info(
        f"Backtest on {report['n']} matches: brier={report['brier']:.4f}, "
        f"logloss={report['logloss']:.4f}, auc={report['auc']:.4f}"
    )
    return report
