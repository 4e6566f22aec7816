"""Recent-form scoring.

Recency weighting is exponential: the most recent result (last in the
window) has weight 1 and each earlier result is multiplied by ``decay``.
Wins score +1, losses -1, so every score lies in [-1, 1].
"""

import math

import numpy as np

from netprophet.core.schema import Outcome, PlayerProfile
from netprophet.features.encoder import OUTCOME_SIGN


def recency_weights(n: int, decay: float) -> np.ndarray:
    """Weights for an n-result window ordered oldest -> newest."""
    return decay ** np.arange(n - 1, -1, -1, dtype=np.float64)


def recency_weighted_form(results: tuple[Outcome, ...], decay: float = 0.6) -> float:
    """Weighted mean of +1/-1 outcomes; 0.0 for an empty window."""
    if not results:
        return 0.0
    signs = np.array([OUTCOME_SIGN[r] for r in results], dtype=np.float64)
    w = recency_weights(len(results), decay)
    return float(np.dot(w, signs) / w.sum())


def streak_signal(player: PlayerProfile) -> float:
    """Signed momentum with diminishing returns on streak length."""
    magnitude = math.tanh(math.sqrt(player.current_streak) * 0.5)
    return OUTCOME_SIGN[player.streak_type] * magnitude


def form_score(player: PlayerProfile, decay: float = 0.6, streak_share: float = 0.3) -> float:
    """Blend of recency-weighted results and current streak, in [-1, 1]."""
    return (
        (1.0 - streak_share) * recency_weighted_form(player.recent_form, decay)
        + streak_share * streak_signal(player)
    )


def bayesian_win_rate(wins: int, losses: int, prior: float = 0.5, prior_matches: int = 10) -> float:
    """Season win rate shrunk toward ``prior``; 0-0 records return the prior."""
    return (wins + prior * prior_matches) / (wins + losses + prior_matches)
