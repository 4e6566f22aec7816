"""Comprehensive tests for calibration metrics."""

import numpy as np
import pytest

from netprophet.core.schema import PredictionResult
from netprophet.evaluation.metrics import (
    compute_auc, compute_brier, compute_calibration, compute_logloss, evaluate_predictions,
)


def _result(p_a: float, confidence: float = 0.6) -> PredictionResult:
    return PredictionResult(
        probability_a=p_a, probability_b=1 - p_a,
        decimal_odds_a=2.0, decimal_odds_b=2.0,
        factors={}, confidence=confidence,
    )


class TestAUC:
    def test_perfect(self):
        assert compute_auc(np.array([0, 0, 1, 1]), np.array([0.1, 0.2, 0.8, 0.9])) == 1.0

    def test_single_class_returns_0_5(self):
        assert compute_auc(np.ones(5), np.linspace(0.1, 0.9, 5)) == 0.5

    def test_inverted(self):
        assert compute_auc(np.array([0, 0, 1, 1]), np.array([0.9, 0.8, 0.2, 0.1])) == 0.0


class TestLogLoss:
    def test_good_beats_bad(self):
        good = compute_logloss(np.array([0, 1]), np.array([0.1, 0.9]))
        bad = compute_logloss(np.array([0, 1]), np.array([0.9, 0.1]))
        assert good < 0.5 < 1.0 < bad

    def test_clips_extremes(self):
        loss = compute_logloss(np.array([0, 1]), np.array([0.0, 1.0]))
        assert np.isfinite(loss)


class TestBrier:
    def test_perfect(self):
        assert compute_brier(np.array([0, 1]), np.array([0.0, 1.0])) == 0.0

    def test_coin_flip(self):
        assert compute_brier(np.array([0, 1]), np.array([0.5, 0.5])) == pytest.approx(0.25)


class TestCalibration:
    def test_perfectly_calibrated_bin(self):
        y_true = np.array([1, 1, 1, 0])
        y_pred = np.array([0.75, 0.75, 0.75, 0.75])
        cal = compute_calibration(y_true, y_pred, n_bins=4)
        assert cal["max_calibration_error"] == pytest.approx(0.0)
        assert cal["bin_counts"].sum() == 4

    def test_top_edge_is_included(self):
        cal = compute_calibration(np.array([1]), np.array([1.0]), n_bins=5)
        assert cal["bin_counts"][-1] == 1

    def test_bins_span_engine_output_range(self):
        cal = compute_calibration(np.array([0, 1]), np.array([0.3, 0.6]))
        assert cal["bin_edges"][0] == pytest.approx(0.02)
        assert cal["bin_edges"][-1] == pytest.approx(0.98)

    def test_out_of_range_goes_to_end_bins(self):
        cal = compute_calibration(np.array([0, 1]), np.array([0.0, 0.99]), n_bins=4)
        assert cal["bin_counts"].tolist() == [1, 0, 0, 1]

    def test_expected_error_weights_by_count(self):
        y_true = np.array([0, 0, 1, 0])
        y_pred = np.array([0.1, 0.1, 0.9, 0.9])
        cal = compute_calibration(y_true, y_pred)
        assert cal["max_calibration_error"] == pytest.approx(0.4)
        assert cal["expected_calibration_error"] == pytest.approx(0.25)

    def test_no_predictions(self):
        cal = compute_calibration(np.array([]), np.array([]))
        assert np.isnan(cal["max_calibration_error"])
        assert cal["bin_counts"].sum() == 0


class TestEvaluatePredictions:
    def test_report(self):
        results = [_result(0.7), _result(0.3), _result(0.8, 0.8), _result(0.4)]
        report = evaluate_predictions(results, [True, False, True, True])
        assert report["n"] == 4
        assert report["favorite_hit_rate"] == pytest.approx(0.75)
        assert report["mean_confidence"] == pytest.approx(0.65)
        assert 0.0 <= report["brier"] <= 1.0
        assert report["auc"] == pytest.approx(1.0)

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="outcomes"):
            evaluate_predictions([_result(0.6)], [True, False])

    def test_empty(self):
        with pytest.raises(ValueError, match="no predictions"):
            evaluate_predictions([], [])
