"""
Engine calibration.

Weights and constants are an explicit immutable value passed through the
pipeline, so alternate calibrations can be tested side by side.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_WEIGHTS = {
    "ratingDifferential": 1.00,
    "headToHead": 0.40,
    "surfaceFit": 0.35,
    "seasonRecord": 0.30,
    "recentForm": 0.25,
    "seasonalForm": 0.20,
    "fatigueInjury": 0.15,
    "experience": 0.10,
    "physicalProfile": 0.08,
}

DEFAULT_INJURY_PENALTIES = {
    "healthy": 0.0,
    "minor": 0.35,
    "major": 1.0,
}


@dataclass(frozen=True)
class EngineConfig:
    weights: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    # Probability model: p = 1 / (1 + exp(-k * S)), clamped
    logistic_k: float = 0.85
    probability_floor: float = 0.02
    probability_ceiling: float = 0.98

    # Odds
    margin: float = 0.05
    odds_floor: float = 1.01

    # Features
    surface_bonus: float = 0.15
    form_decay: float = 0.6
    streak_share: float = 0.3
    season_prior: float = 0.5
    season_prior_matches: int = 10
    h2h_recent_nudge: float = 0.25
    h2h_recency_days: int = 180
    fatigue_scale: float = 0.5
    injury_penalties: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_INJURY_PENALTIES)
    )

    # Confidence
    sample_saturation: int = 60
    clarity_scale: float = 0.8
    completeness_weight: float = 0.35
    sample_weight: float = 0.40
    clarity_weight: float = 0.25
    confidence_floor: float = 0.05
    confidence_ceiling: float = 0.95

    # Explainer thresholds
    low_confidence: float = 0.4
    strong_rating_gap: float = 0.5
    h2h_threshold: float = 0.1
    surface_threshold: float = 0.03
    form_threshold: float = 0.1
    fatigue_threshold: float = 0.05
    toss_up_band: float = 0.03
    max_recommendations: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))
        object.__setattr__(self, "injury_penalties", MappingProxyType(dict(self.injury_penalties)))

        if self.logistic_k <= 0:
            raise ValueError(f"logistic_k must be > 0, got {self.logistic_k}")
        if not 0.0 < self.probability_floor < 0.5 < self.probability_ceiling < 1.0:
            raise ValueError(
                f"probability bounds must satisfy 0 < floor < 0.5 < ceiling < 1, got "
                f"{self.probability_floor}/{self.probability_ceiling}"
            )
        if abs(self.probability_floor + self.probability_ceiling - 1.0) > 1e-9:
            raise ValueError("probability floor and ceiling must be symmetric around 0.5")
        if not 0.0 <= self.margin < 1.0:
            raise ValueError(f"margin must be in [0, 1), got {self.margin}")
        if self.odds_floor <= 1.0:
            raise ValueError(f"odds_floor must be > 1.0, got {self.odds_floor}")
        if not 0.0 < self.form_decay <= 1.0:
            raise ValueError(f"form_decay must be in (0, 1], got {self.form_decay}")
        if not 0.0 <= self.streak_share <= 1.0:
            raise ValueError(f"streak_share must be in [0, 1], got {self.streak_share}")
        if not 0.0 < self.confidence_floor < self.confidence_ceiling < 1.0:
            raise ValueError(
                f"confidence bounds must satisfy 0 < floor < ceiling < 1, got "
                f"{self.confidence_floor}/{self.confidence_ceiling}"
            )
        blend = self.completeness_weight + self.sample_weight + self.clarity_weight
        if abs(blend - 1.0) > 1e-9:
            raise ValueError(f"confidence term weights must sum to 1, got {blend}")
        if self.max_recommendations is not None and self.max_recommendations < 0:
            raise ValueError(f"max_recommendations must be >= 0, got {self.max_recommendations}")

    def weight(self, factor: str) -> float:
        """Weight for a factor; unknown factors weigh nothing."""
        return self.weights.get(factor, 0.0)

    def with_overrides(self, **overrides) -> "EngineConfig":
        """Copy with some fields replaced. `weights` entries are merged, not replaced."""
        weights = overrides.pop("weights", None)
        if weights is not None:
            overrides["weights"] = {**self.weights, **weights}
        penalties = overrides.pop("injury_penalties", None)
        if penalties is not None:
            overrides["injury_penalties"] = {**self.injury_penalties, **penalties}
        return replace(self, **overrides)

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}


DEFAULT_CONFIG = EngineConfig()
