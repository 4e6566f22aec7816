"""
Odds conversion and display.

Probabilities become decimal prices with the house margin split
proportionally across both sides, so the implied probabilities of a quoted
pair sum to 1 + margin.
"""

from decimal import Decimal, ROUND_HALF_UP

from netprophet.core.config import DEFAULT_CONFIG

_CENTS = Decimal("0.01")


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a bookmaker's board: 1.005 -> 1.01, not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def fair_odds(probability: float) -> float:
    """Decimal odds with no margin: 1 / p."""
    if not 0.0 < probability <= 1.0:
        raise ValueError(f"Probability must be in (0, 1], got {probability}")
    return 1.0 / probability


def decimal_odds(
    probability: float,
    margin: float = DEFAULT_CONFIG.margin,
    floor: float = DEFAULT_CONFIG.odds_floor,
) -> float:
    """Displayed price 1 / (p * (1 + margin)), rounded half up, floored.

    Example:
        >>> decimal_odds(0.5, margin=0.05)
        1.9
    """
    if not 0.0 < probability <= 1.0:
        raise ValueError(f"Probability must be in (0, 1], got {probability}")
    return max(floor, round_half_up(1.0 / (probability * (1.0 + margin))))


def implied_probability(odds: float) -> float:
    """Probability implied by a decimal price."""
    if odds < 1.0:
        raise ValueError(f"Decimal odds must be >= 1.0, got {odds}")
    return 1.0 / odds


def book_overround(odds_a: float, odds_b: float) -> float:
    """How far the pair's implied probabilities exceed 1."""
    return implied_probability(odds_a) + implied_probability(odds_b) - 1.0


def expected_value(odds: float, stake: float, probability: float) -> float:
    """Expected profit of a stake at ``odds`` if the true chance is ``probability``."""
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"Probability must be in [0, 1], got {probability}")
    return (odds - 1.0) * stake * probability - stake * (1.0 - probability)


def format_odds(value: float, decimal_separator: str = ".") -> str:
    """Render a raw decimal price with two places, e.g. 1.85 -> "1.85".

    Callers pass raw numbers only; the numeric value is never altered.
    """
    text = f"{Decimal(repr(float(value))).quantize(_CENTS, rounding=ROUND_HALF_UP):f}"
    return text if decimal_separator == "." else text.replace(".", decimal_separator)


def format_american_odds(odds: float) -> str:
    """Moneyline display: 2.50 -> "+150", 1.50 -> "-200"."""
    if odds <= 1.0:
        raise ValueError(f"Decimal odds must be > 1.0 for moneyline display, got {odds}")
    if odds >= 2.0:
        return f"+{round((odds - 1.0) * 100)}"
    return f"-{round(100.0 / (odds - 1.0))}"
