"""
Confidence estimation.

Blends three terms, each in [0, 1]:
  completeness  share of optional evidence slots actually available
  sample size   log-saturating in each player's season match count
  clarity       how far the pre-squash signal S sits from zero

A toss-up between well-documented players still scores moderately: the
sample and completeness terms carry it, only clarity is low.
"""

import logging
import math

import numpy as np

from netprophet.core.config import DEFAULT_CONFIG, EngineConfig
from netprophet.core.schema import PlayerProfile
from netprophet.features.extractor import FeatureVector

log = logging.getLogger(__name__)


def sample_size_term(a: PlayerProfile, b: PlayerProfile, saturation: int = 60) -> float:
    counts = np.array([a.matches_played, b.matches_played], dtype=np.float64)
    per_player = np.minimum(1.0, np.log1p(counts) / math.log1p(saturation))
    return float(per_player.mean())


def clarity_term(signal: float, scale: float = 0.8) -> float:
    return math.tanh(abs(signal) / scale)


def estimate_confidence(
    a: PlayerProfile,
    b: PlayerProfile,
    features: FeatureVector,
    signal: float,
    cfg: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """Confidence strictly inside (0, 1)."""
    completeness = features.completeness
    sample = sample_size_term(a, b, cfg.sample_saturation)
    clarity = clarity_term(signal, cfg.clarity_scale)
    if not all(math.isfinite(t) for t in (completeness, sample, clarity)):
        log.warning("non-finite confidence term, using the floor")
        return cfg.confidence_floor

    raw = (
        cfg.completeness_weight * completeness
        + cfg.sample_weight * sample
        + cfg.clarity_weight * clarity
    )
    confidence = cfg.confidence_floor + (cfg.confidence_ceiling - cfg.confidence_floor) * raw
    log.debug(
        f"confidence={confidence:.3f} (completeness={completeness:.2f}, "
        f"sample={sample:.2f}, clarity={clarity:.2f})"
    )
    return float(confidence)
