"""
Prediction pipeline.

Orchestrates the single pass: feature extraction -> probability model ->
odds, confidence and explanations, assembled into one PredictionResult.
Pure over immutable inputs; safe to call concurrently.
"""

import logging
from typing import Optional

from netprophet.core.config import DEFAULT_CONFIG, EngineConfig
from netprophet.core.schema import (
    HeadToHeadRecord, MatchContext, PlayerProfile, PredictionResult,
)
from netprophet.features.extractor import extract_features
from netprophet.ingestion.fixtures import build_fixture, fixture_key
from netprophet.models.confidence import estimate_confidence
from netprophet.models.probability import (
    complementary, signal_strength, weigh, win_probability,
)
from netprophet.odds.converter import decimal_odds
from netprophet.reporting.explainer import explain

log = logging.getLogger(__name__)


def predict_match(
    player_a: PlayerProfile,
    player_b: PlayerProfile,
    context: MatchContext,
    h2h: Optional[HeadToHeadRecord] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> PredictionResult:
    """Win probabilities, odds, confidence and explanations for A vs B.

    ``h2h`` must already be oriented so that ``wins_for_side_a`` belongs to
    ``player_a``. Missing optional data lowers confidence; it never raises.
    """
    h2h = h2h or HeadToHeadRecord.empty()

    features = extract_features(player_a, player_b, context, h2h, config)
    contributions = weigh(features, config)
    signal = signal_strength(contributions)

    p_a, p_b = complementary(win_probability(signal, config))
    odds_a = decimal_odds(p_a, config.margin, config.odds_floor)
    odds_b = decimal_odds(p_b, config.margin, config.odds_floor)
    confidence = estimate_confidence(player_a, player_b, features, signal, config)
    recommendations = explain(
        player_a, player_b, context, h2h, contributions, p_a, confidence, config,
    )

    assert abs(p_a + p_b - 1.0) < 1e-12, f"probabilities sum to {p_a + p_b}"
    assert odds_a >= config.odds_floor and odds_b >= config.odds_floor
    assert 0.0 < confidence < 1.0, f"confidence out of range: {confidence}"

    log.debug(
        f"{player_a.player_id} vs {player_b.player_id}: S={signal:+.3f}, "
        f"p={p_a:.3f}/{p_b:.3f}, odds={odds_a:.2f}/{odds_b:.2f}"
    )
    return PredictionResult(
        probability_a=p_a,
        probability_b=p_b,
        decimal_odds_a=odds_a,
        decimal_odds_b=odds_b,
        factors=contributions,
        confidence=confidence,
        recommendations=recommendations,
    )


def predict_fixtures(fixtures: list[dict], config: EngineConfig = DEFAULT_CONFIG) -> list[dict]:
    """Price a batch of raw fixture dicts.

    A malformed fixture is reported in its own entry and does not stop the
    batch. Each entry has ``fixture_id`` and either ``result`` or ``error``.
    """
    results = []
    for i, raw in enumerate(fixtures):
        fixture_id = fixture_key(raw, i)
        try:
            fx = build_fixture(raw, default_id=fixture_id)
            result = predict_match(fx.player_a, fx.player_b, fx.context, fx.h2h, config)
        except ValueError as e:
            log.warning(f"Fixture {fixture_id}: {e}")
            results.append({"fixture_id": fixture_id, "error": str(e)})
            continue
        results.append({"fixture_id": fx.fixture_id, "fixture": fx, "result": result})

    n_ok = sum(1 for r in results if "result" in r)
    log.info(f"Priced {n_ok}/{len(results)} fixtures")
    return results
