"""
Explanations for a prediction.

Turns weighted factor contributions into short recommendation strings. Rules
are threshold based and deterministic; each rule fires at most once per
prediction and identical strings are dropped.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from netprophet.core.config import DEFAULT_CONFIG, EngineConfig
from netprophet.core.schema import (
    HeadToHeadRecord, InjuryStatus, MatchContext, Outcome, PlayerProfile,
)
from netprophet.features.encoder import INJURY_ORDINAL

log = logging.getLogger(__name__)

LIMITED_DATA = "Limited data: treat with caution"
EVENLY_MATCHED = "Evenly matched: expect a close contest"


def _pick(value: float, a: PlayerProfile, b: PlayerProfile) -> tuple[PlayerProfile, PlayerProfile]:
    """(favored, other) for a signed contribution."""
    return (a, b) if value > 0 else (b, a)


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def rating_rule(contributions, a, b) -> Optional[str]:
    c = contributions.get("ratingDifferential")
    if not c:
        return None
    largest = max(contributions, key=lambda n: abs(contributions[n]))
    if largest != "ratingDifferential":
        return None
    stronger, weaker = _pick(c, a, b)
    return (
        f"{stronger.name} is a strong favorite based on the rating gap "
        f"({stronger.skill_rating:.1f} vs {weaker.skill_rating:.1f})"
    )


def head_to_head_rule(contributions, a, b, h2h: HeadToHeadRecord,
                      probability_a: float, cfg: EngineConfig) -> Optional[str]:
    c = contributions.get("headToHead")
    if not c:
        return None
    leader, _ = _pick(c, a, b)
    if leader is a:
        won, lost = h2h.wins_for_side_a, h2h.wins_for_side_b
    else:
        won, lost = h2h.wins_for_side_b, h2h.wins_for_side_a

    tally = f" ({won}-{lost} head-to-head)" if h2h.total_meetings else ""
    lean = _sign(probability_a - 0.5)
    if lean and _sign(c) != lean:
        if won > lost:
            return f"Historical rivalry favors underdog {leader.name}{tally}"
        return f"Underdog {leader.name} won the last meeting{tally}"
    if abs(c) < cfg.h2h_threshold:
        return None
    if won > lost:
        return f"{leader.name} leads the head-to-head {won}-{lost}"
    # Lead comes from the last-meeting result, not the tally
    return f"{leader.name} won the last meeting{tally}"


def surface_rule(contributions, a, b, ctx: MatchContext, cfg: EngineConfig) -> Optional[str]:
    c = contributions.get("surfaceFit", 0.0)
    if abs(c) < cfg.surface_threshold:
        return None
    player, _ = _pick(c, a, b)
    rate = player.surface_rate(ctx.surface)
    detail = f" ({rate:.0%} win rate)" if rate is not None else ""
    return f"{player.name} has the edge on {ctx.surface.value}{detail}"


def form_rule(contributions, a, b, cfg: EngineConfig) -> Optional[str]:
    c = contributions.get("recentForm", 0.0)
    if abs(c) < cfg.form_threshold:
        return None
    player, _ = _pick(c, a, b)
    if not player.recent_form:
        return f"{player.name} has the stronger current streak"
    wins = sum(1 for r in player.recent_form if r is Outcome.WIN)
    return f"{player.name} is in better recent form ({wins}/{len(player.recent_form)} recent wins)"


def injury_rules(a: PlayerProfile, b: PlayerProfile) -> list[str]:
    injured = [p for p in (a, b) if p.injury_status is not InjuryStatus.HEALTHY]
    injured.sort(key=lambda p: INJURY_ORDINAL[p.injury_status])
    return [f"{p.name} is carrying a {p.injury_status.value} injury" for p in injured]


def fatigue_rule(contributions, a, b, cfg: EngineConfig) -> Optional[str]:
    c = contributions.get("fatigueInjury", 0.0)
    if abs(c) < cfg.fatigue_threshold:
        return None
    fresher, _ = _pick(c, a, b)
    if fresher.fatigue_level is None or fresher.fatigue_level >= 3:
        return None
    return f"{fresher.name} appears well-rested"


def explain(
    a: PlayerProfile,
    b: PlayerProfile,
    ctx: MatchContext,
    h2h: HeadToHeadRecord,
    contributions: Mapping[str, float],
    probability_a: float,
    confidence: float,
    cfg: EngineConfig = DEFAULT_CONFIG,
) -> tuple[str, ...]:
    """Ordered, de-duplicated recommendation strings; possibly empty."""
    candidates = []
    if confidence < cfg.low_confidence:
        candidates.append(LIMITED_DATA)
    elif abs(probability_a - 0.5) < cfg.toss_up_band:
        candidates.append(EVENLY_MATCHED)

    c = contributions.get("ratingDifferential", 0.0)
    if abs(c) >= cfg.strong_rating_gap:
        candidates.append(rating_rule(contributions, a, b))
    candidates.append(head_to_head_rule(contributions, a, b, h2h, probability_a, cfg))
    candidates.append(surface_rule(contributions, a, b, ctx, cfg))
    candidates.append(form_rule(contributions, a, b, cfg))
    candidates.extend(injury_rules(a, b))
    candidates.append(fatigue_rule(contributions, a, b, cfg))

    recommendations = list(dict.fromkeys(r for r in candidates if r))
    if cfg.max_recommendations is not None:
        recommendations = recommendations[:cfg.max_recommendations]
    log.debug(f"{len(recommendations)} recommendations for {a.player_id} vs {b.player_id}")
    return tuple(recommendations)
