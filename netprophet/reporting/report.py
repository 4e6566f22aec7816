"""
Text rendering of predictions for the demo CLI.
"""

from netprophet.core.schema import MatchContext, PlayerProfile, PredictionResult
from netprophet.odds.converter import format_american_odds, format_odds


def format_prediction_card(
    player_a: PlayerProfile,
    player_b: PlayerProfile,
    context: MatchContext,
    result: PredictionResult,
    fixture_id: str = "",
) -> str:
    """Readable summary of one prediction: odds table, factors, recommendations."""
    title = f"{player_a.name} vs {player_b.name} ({context.surface.value})"
    if fixture_id:
        title = f"[{fixture_id}] {title}"

    lines = [
        "=" * 70,
        title,
        "=" * 70,
        f"{'Player':<30} {'Win %':>8} {'Decimal':>9} {'US':>7}",
    ]
    for player, p, odds in (
        (player_a, result.probability_a, result.decimal_odds_a),
        (player_b, result.probability_b, result.decimal_odds_b),
    ):
        lines.append(
            f"{player.name:<30} {p:>8.1%} {format_odds(odds):>9} "
            f"{format_american_odds(odds):>7}"
        )

    lines += [
        "",
        f"Confidence: {result.confidence:.0%}",
        "",
        "-" * 40,
        f"{'Factor':<22} {'Contribution':>14}",
        "-" * 40,
    ]
    for name, value in result.factors.items():
        lines.append(f"{name:<22} {value:>+14.4f}")

    if result.recommendations:
        lines += ["", "Notes:"]
        lines += [f"  - {r}" for r in result.recommendations]
    lines.append("")
    return "\n".join(lines)


def format_backtest_summary(report: dict) -> str:
    cal = report["calibration"]
    return "\n".join([
        "-" * 40,
        f"Backtest ({report['n']} matches)",
        "-" * 40,
        f"{'Brier':<22} {report['brier']:>10.4f}",
        f"{'Log-loss':<22} {report['logloss']:>10.4f}",
        f"{'AUC':<22} {report['auc']:>10.4f}",
        f"{'Favorite hit rate':<22} {report['favorite_hit_rate']:>10.1%}",
        f"{'Mean confidence':<22} {report['mean_confidence']:>10.1%}",
        f"{'Max calib. error':<22} {cal['max_calibration_error']:>10.4f}",
        f"{'Expected calib. error':<22} {cal['expected_calibration_error']:>10.4f}",
        "",
    ])
