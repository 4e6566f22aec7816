"""
Parlay (accumulator) pricing.

Leg prices multiply; slips with enough legs earn a bonus and users on a
prediction streak get a booster on top.
"""

import logging
import math
from dataclasses import dataclass

log = logging.getLogger(__name__)

BONUS_THRESHOLD = 3             # legs needed for the bonus
BONUS_PERCENTAGE = 0.05
STREAK_BOOSTER_THRESHOLD = 3    # streak needed for the booster
STREAK_BOOSTER_PERCENTAGE = 0.02
MAX_STREAK_BOOSTER = 0.20
SAFE_BET_COST = 50              # coins per leg


@dataclass(frozen=True)
class ParlayQuote:
    base_odds: float
    bonus_multiplier: float
    streak_booster: float
    final_odds: float
    potential_winnings: float

    @property
    def is_eligible_for_bonus(self) -> bool:
        return self.bonus_multiplier > 1.0

    @property
    def bonus_percentage(self) -> float:
        return (self.bonus_multiplier - 1.0) * 100


def streak_booster(user_streak: int) -> float:
    """Multiplier for a user's winning streak: +2% per level from 3, capped at +20%."""
    if user_streak < STREAK_BOOSTER_THRESHOLD:
        return 1.0
    boost = min(
        (user_streak - STREAK_BOOSTER_THRESHOLD + 1) * STREAK_BOOSTER_PERCENTAGE,
        MAX_STREAK_BOOSTER,
    )
    return 1.0 + boost


def safe_bet_cost(n_legs: int) -> int:
    return SAFE_BET_COST * n_legs


def calculate_parlay(leg_odds: list[float], stake: float, user_streak: int = 0) -> ParlayQuote:
    """Price a slip of decimal ``leg_odds``. An empty slip pays nothing."""
    if stake < 0:
        raise ValueError(f"stake must be >= 0, got {stake}")
    for o in leg_odds:
        if o < 1.0:
            raise ValueError(f"Decimal odds must be >= 1.0, got {o}")

    if not leg_odds:
        return ParlayQuote(1.0, 1.0, 1.0, 1.0, 0.0)

    base = math.prod(leg_odds)
    bonus = 1.0 + BONUS_PERCENTAGE if len(leg_odds) >= BONUS_THRESHOLD else 1.0
    booster = streak_booster(user_streak)
    final = base * bonus * booster
    log.debug(f"parlay: {len(leg_odds)} legs, base={base:.2f}, final={final:.2f}")
    return ParlayQuote(
        base_odds=base,
        bonus_multiplier=bonus,
        streak_booster=booster,
        final_odds=final,
        potential_winnings=stake * final,
    )
