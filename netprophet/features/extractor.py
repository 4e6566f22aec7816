"""
Feature extraction: two player profiles + context -> signed features.

Every factor answers "how much does this dimension favor A over B" and is
antisymmetric: swapping the players (and flipping the head-to-head record)
negates it exactly. A factor returns None when the evidence it needs is
missing; the factor is then left out of the vector instead of being zero-filled,
so the confidence estimator can see the gap.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Mapping, Optional

from netprophet.core.config import DEFAULT_CONFIG, EngineConfig
from netprophet.core.schema import (
    HeadToHeadRecord, MatchContext, PlayerProfile,
)
from netprophet.features.encoder import SIDE_SIGN
from netprophet.features.form import bayesian_win_rate, form_score
from netprophet.features.registry import get_factor, list_factors, register

log = logging.getLogger(__name__)

# Optional evidence the confidence estimator counts
COVERAGE_SLOTS = ("surfaceRates", "recentForm", "seasonalForm", "headToHead", "fatigue")


@dataclass(frozen=True)
class FeatureVector:
    """Ordered raw feature values plus which optional evidence was available."""
    values: Mapping[str, float] = field(default_factory=dict)
    coverage: Mapping[str, bool] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.values

    @property
    def names(self) -> list[str]:
        return list(self.values.keys())

    @property
    def completeness(self) -> float:
        if not self.coverage:
            return 0.0
        return sum(1 for ok in self.coverage.values() if ok) / len(self.coverage)


# ── Factors ────────────────────────────────────────────────────────────

@register("ratingDifferential")
def rating_differential(a: PlayerProfile, b: PlayerProfile, ctx: MatchContext,
                        h2h: HeadToHeadRecord, cfg: EngineConfig) -> float:
    return a.skill_rating - b.skill_rating


def surface_edge(player: PlayerProfile, ctx: MatchContext, cfg: EngineConfig) -> float:
    """Explicit rate above/below 0.5, else the preferred-surface bonus, else 0."""
    rate = player.surface_rate(ctx.surface)
    if rate is not None:
        return rate - 0.5
    if player.preferred_surface is ctx.surface:
        return cfg.surface_bonus
    return 0.0


@register("surfaceFit")
def surface_fit(a, b, ctx, h2h, cfg) -> float:
    return surface_edge(a, ctx, cfg) - surface_edge(b, ctx, cfg)


@register("recentForm")
def recent_form(a, b, ctx, h2h, cfg) -> float:
    return (
        form_score(a, cfg.form_decay, cfg.streak_share)
        - form_score(b, cfg.form_decay, cfg.streak_share)
    )


@register("seasonRecord")
def season_record(a, b, ctx, h2h, cfg) -> float:
    rate_a = bayesian_win_rate(a.wins, a.losses, cfg.season_prior, cfg.season_prior_matches)
    rate_b = bayesian_win_rate(b.wins, b.losses, cfg.season_prior, cfg.season_prior_matches)
    return rate_a - rate_b


@register("seasonalForm")
def seasonal_form(a, b, ctx, h2h, cfg) -> Optional[float]:
    if a.seasonal_form is None or b.seasonal_form is None:
        return None
    return a.seasonal_form - b.seasonal_form


def last_meeting_counts(h2h: HeadToHeadRecord, ctx: MatchContext, cfg: EngineConfig) -> bool:
    """A last-meeting result counts unless both dates are known and it is stale."""
    if h2h.last_meeting_result is None:
        return False
    if h2h.last_meeting_date is None or ctx.match_date is None:
        return True
    return (ctx.match_date - h2h.last_meeting_date).days <= cfg.h2h_recency_days


@register("headToHead")
def head_to_head(a, b, ctx, h2h, cfg) -> Optional[float]:
    if not h2h.has_history:
        return None
    value = (h2h.wins_for_side_a - h2h.wins_for_side_b) / max(1, h2h.total_meetings)
    if last_meeting_counts(h2h, ctx, cfg):
        value += SIDE_SIGN[h2h.last_meeting_result] * cfg.h2h_recent_nudge
    return value


@register("experience")
def experience(a, b, ctx, h2h, cfg) -> float:
    return math.tanh(math.log1p(a.matches_played) - math.log1p(b.matches_played))


@register("physicalProfile")
def physical_profile(a, b, ctx, h2h, cfg) -> float:
    return ((a.stamina + a.consistency) - (b.stamina + b.consistency)) / 18.0


def condition_penalty(player: PlayerProfile, cfg: EngineConfig) -> float:
    """Fatigue plus injury penalty; unreported fatigue is neutral."""
    fatigue = 0.0 if player.fatigue_level is None else player.fatigue_level / 10.0
    return fatigue * cfg.fatigue_scale + cfg.injury_penalties.get(player.injury_status.value, 0.0)


@register("fatigueInjury")
def fatigue_injury(a, b, ctx, h2h, cfg) -> float:
    return condition_penalty(b, cfg) - condition_penalty(a, cfg)


# ── Extraction ─────────────────────────────────────────────────────────

def coverage(a: PlayerProfile, b: PlayerProfile, ctx: MatchContext,
             h2h: HeadToHeadRecord) -> dict[str, bool]:
    return {
        "surfaceRates": a.surface_rate(ctx.surface) is not None
                        and b.surface_rate(ctx.surface) is not None,
        "recentForm": bool(a.recent_form) and bool(b.recent_form),
        "seasonalForm": a.seasonal_form is not None and b.seasonal_form is not None,
        "headToHead": h2h.has_history,
        "fatigue": a.fatigue_level is not None and b.fatigue_level is not None,
    }


def extract_features(
    a: PlayerProfile,
    b: PlayerProfile,
    ctx: MatchContext,
    h2h: Optional[HeadToHeadRecord] = None,
    cfg: EngineConfig = DEFAULT_CONFIG,
) -> FeatureVector:
    """Compute every registered factor, in registry order, skipping omitted ones."""
    h2h = h2h or HeadToHeadRecord.empty()
    values = {}
    for name in list_factors():
        v = get_factor(name)(a, b, ctx, h2h, cfg)
        if v is None:
            log.debug(f"{name}: omitted for {a.player_id} vs {b.player_id}")
            continue
        values[name] = float(v)

    return FeatureVector(values=values, coverage=coverage(a, b, ctx, h2h))
