"""
NetProphet: tennis match odds engine

Turns two players' season, form, surface and rivalry statistics into win
probabilities, decimal odds, a confidence score and explanatory factors.
"""

__version__ = "0.1.0"

from netprophet.core.config import DEFAULT_CONFIG, EngineConfig  # noqa: E402,F401
from netprophet.odds.converter import format_odds  # noqa: E402,F401
from netprophet.pipeline import predict_match  # noqa: E402,F401
