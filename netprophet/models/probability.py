"""
Probability model: weighted features -> win probability for player A.

S = sum(weight_i * feature_i), p = 1 / (1 + exp(-k * S)), clamped so that
neither side is ever shown as a certainty. With the default calibration a
one-point rating gap and no other signal gives p ~= 0.70.
"""

import logging
import math

import numpy as np

from netprophet.core.config import DEFAULT_CONFIG, EngineConfig
from netprophet.features.extractor import FeatureVector

log = logging.getLogger(__name__)


def weigh(features: FeatureVector, cfg: EngineConfig = DEFAULT_CONFIG) -> dict[str, float]:
    """Per-factor contributions weight * value, in feature order.

    Factors missing from the weight table contribute 0.
    """
    names = features.names
    values = np.array([features.values[n] for n in names], dtype=np.float64)
    weights = np.array([cfg.weight(n) for n in names], dtype=np.float64)
    return {n: float(c) for n, c in zip(names, weights * values)}


def signal_strength(contributions: dict[str, float]) -> float:
    """Pre-squash score S; positive favors A."""
    return float(sum(contributions.values()))


def logistic(x: float) -> float:
    # Split by sign so exp() never overflows
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def win_probability(signal: float, cfg: EngineConfig = DEFAULT_CONFIG) -> float:
    """P(A wins), clamped to [probability_floor, probability_ceiling]."""
    p = logistic(cfg.logistic_k * signal)
    clamped = min(cfg.probability_ceiling, max(cfg.probability_floor, p))
    if clamped != p:
        log.debug(f"probability {p:.4f} clamped to {clamped:.2f}")
    return clamped


def complementary(probability_a: float) -> tuple[float, float]:
    """(p_a, p_b) with p_b = 1 - p_a."""
    return probability_a, 1.0 - probability_a
