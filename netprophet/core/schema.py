"""
NetProphet domain objects.

Callers normalize stored player, match and rivalry rows into these types
before asking for a prediction. Every module in the project depends on this
file; this file depends on nothing else.

Validation rules are enforced at construction time via __post_init__.
Records are frozen: the engine never mutates its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


# ── Enums ──────────────────────────────────────────────────────────────

class Outcome(Enum):
    WIN = "W"
    LOSS = "L"

    @classmethod
    def parse(cls, value) -> "Outcome":
        if isinstance(value, cls):
            return value
        label = str(value).strip().upper()
        if label in ("W", "WIN"):
            return cls.WIN
        if label in ("L", "LOSS"):
            return cls.LOSS
        raise ValueError(f"Unknown match outcome: {value!r}")


class Surface(Enum):
    HARD = "Hard Court"
    CLAY = "Clay Court"
    GRASS = "Grass Court"
    INDOOR = "Indoor"

    @classmethod
    def parse(cls, value) -> "Surface":
        """Accept the enum, its value, or a short label such as 'clay'."""
        if isinstance(value, cls):
            return value
        label = str(value).strip().lower().replace("_", " ")
        for surface in cls:
            if label in (surface.value.lower(), surface.name.lower()):
                return surface
            if label == surface.value.lower().replace(" court", ""):
                return surface
            if label == surface.value.lower().replace(" ", ""):
                return surface
        raise ValueError(f"Unknown surface: {value!r}")


class Hand(Enum):
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value) -> "Hand":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown dominant hand: {value!r}") from None


class InjuryStatus(Enum):
    HEALTHY = "healthy"
    MINOR = "minor"
    MAJOR = "major"

    @classmethod
    def parse(cls, value) -> "InjuryStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown injury status: {value!r}") from None


class Side(Enum):
    A = "A"
    B = "B"

    @classmethod
    def parse(cls, value) -> "Side":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown side: {value!r}") from None

    @property
    def other(self) -> "Side":
        return Side.B if self is Side.A else Side.A


FORM_WINDOW = 5


def trailing_run(results: tuple[Outcome, ...]) -> int:
    """Number of identical outcomes at the end of a form window."""
    if not results:
        return 0
    last = results[-1]
    run = 0
    for r in reversed(results):
        if r is not last:
            break
        run += 1
    return run


# ── Domain Objects ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlayerProfile:
    """One side of a match, as supplied by the caller."""
    player_id: str
    name: str
    skill_rating: float
    wins: int = 0
    losses: int = 0
    recent_form: tuple[Outcome, ...] = ()   # most recent last
    current_streak: int = 0
    streak_type: Outcome = Outcome.WIN
    surface_affinity: Mapping[Surface, float] = field(default_factory=dict)
    preferred_surface: Optional[Surface] = None

    # Physical attributes, 1-10
    aggressiveness: int = 5
    stamina: int = 5
    consistency: int = 5
    age: int = 25
    dominant_hand: Hand = Hand.RIGHT

    # Optional condition fields
    fatigue_level: Optional[float] = None   # 0 = fresh, 10 = exhausted
    injury_status: InjuryStatus = InjuryStatus.HEALTHY
    seasonal_form: Optional[float] = None
    last_match_date: Optional[date] = None

    def __post_init__(self):
        set_ = object.__setattr__
        set_(self, "recent_form", tuple(Outcome.parse(r) for r in self.recent_form))
        set_(self, "streak_type", Outcome.parse(self.streak_type))
        set_(self, "surface_affinity", MappingProxyType(
            {Surface.parse(s): float(r) for s, r in dict(self.surface_affinity).items()}
        ))
        if self.preferred_surface is not None:
            set_(self, "preferred_surface", Surface.parse(self.preferred_surface))
        set_(self, "dominant_hand", Hand.parse(self.dominant_hand))
        set_(self, "injury_status", InjuryStatus.parse(self.injury_status))

        if not self.player_id:
            raise ValueError("player_id cannot be empty")
        if not 1.0 <= self.skill_rating <= 7.0:
            raise ValueError(f"skill_rating must be in [1.0, 7.0], got {self.skill_rating}")
        if self.wins < 0 or self.losses < 0:
            raise ValueError(f"wins/losses must be >= 0, got {self.wins}/{self.losses}")
        if len(self.recent_form) > FORM_WINDOW:
            raise ValueError(
                f"recent_form holds at most {FORM_WINDOW} results, got {len(self.recent_form)}"
            )
        if self.current_streak < 0:
            raise ValueError(f"current_streak must be >= 0, got {self.current_streak}")
        self._check_streak()
        for surface, rate in self.surface_affinity.items():
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"surface_affinity[{surface.value}] must be in [0, 1], got {rate}")
        for attr in ("aggressiveness", "stamina", "consistency"):
            v = getattr(self, attr)
            if not 1 <= v <= 10:
                raise ValueError(f"{attr} must be in [1, 10], got {v}")
        if self.age <= 0:
            raise ValueError(f"age must be positive, got {self.age}")
        if self.fatigue_level is not None and not 0.0 <= self.fatigue_level <= 10.0:
            raise ValueError(f"fatigue_level must be in [0, 10], got {self.fatigue_level}")
        if self.seasonal_form is not None and not 0.0 <= self.seasonal_form <= 1.0:
            raise ValueError(f"seasonal_form must be in [0, 1], got {self.seasonal_form}")

    def _check_streak(self):
        if not self.recent_form:
            return
        run = trailing_run(self.recent_form)
        last = self.recent_form[-1]
        if self.streak_type is not last:
            raise ValueError(
                f"streak_type {self.streak_type.value} disagrees with last result {last.value}"
            )
        # A window made of a single run cannot tell how long the streak really is
        if run == len(self.recent_form):
            if self.current_streak < run:
                raise ValueError(
                    f"current_streak={self.current_streak} shorter than trailing run {run}"
                )
        elif self.current_streak != run:
            raise ValueError(
                f"current_streak={self.current_streak} but recent_form ends with a run of {run}"
            )

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> Optional[float]:
        return self.wins / self.matches_played if self.matches_played else None

    def surface_rate(self, surface: Surface) -> Optional[float]:
        return self.surface_affinity.get(surface)


@dataclass(frozen=True)
class MatchContext:
    """Where and when the match is played."""
    surface: Surface
    match_date: Optional[date] = None
    tournament_level: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "surface", Surface.parse(self.surface))


@dataclass(frozen=True)
class HeadToHeadRecord:
    """Meetings between the two players, counted from side A's perspective."""
    wins_for_side_a: int = 0
    wins_for_side_b: int = 0
    last_meeting_result: Optional[Side] = None
    last_meeting_date: Optional[date] = None

    def __post_init__(self):
        if self.wins_for_side_a < 0 or self.wins_for_side_b < 0:
            raise ValueError(
                f"head-to-head wins must be >= 0, got "
                f"{self.wins_for_side_a}-{self.wins_for_side_b}"
            )
        if self.last_meeting_result is not None:
            object.__setattr__(self, "last_meeting_result", Side.parse(self.last_meeting_result))

    @classmethod
    def empty(cls) -> "HeadToHeadRecord":
        return cls()

    @property
    def total_meetings(self) -> int:
        return self.wins_for_side_a + self.wins_for_side_b

    @property
    def has_history(self) -> bool:
        return self.total_meetings > 0 or self.last_meeting_result is not None

    def flipped(self) -> "HeadToHeadRecord":
        """The same rivalry seen from the other player's side."""
        return HeadToHeadRecord(
            wins_for_side_a=self.wins_for_side_b,
            wins_for_side_b=self.wins_for_side_a,
            last_meeting_result=self.last_meeting_result.other if self.last_meeting_result else None,
            last_meeting_date=self.last_meeting_date,
        )


# ── Output ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PredictionResult:
    """Engine output for one ordered pair of players."""
    probability_a: float
    probability_b: float
    decimal_odds_a: float
    decimal_odds_b: float
    factors: Mapping[str, float]
    confidence: float
    recommendations: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "factors", MappingProxyType(dict(self.factors)))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))
        for name in ("probability_a", "probability_b", "confidence"):
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {v}")
        if self.decimal_odds_a < 1.0 or self.decimal_odds_b < 1.0:
            raise ValueError(
                f"decimal odds must be >= 1.0, got {self.decimal_odds_a}/{self.decimal_odds_b}"
            )

    @property
    def favorite(self) -> Optional[Side]:
        if self.probability_a == self.probability_b:
            return None
        return Side.A if self.probability_a > self.probability_b else Side.B

    def to_dict(self) -> dict:
        return {
            "probabilityA": self.probability_a,
            "probabilityB": self.probability_b,
            "decimalOddsA": self.decimal_odds_a,
            "decimalOddsB": self.decimal_odds_b,
            "factors": dict(self.factors),
            "confidence": self.confidence,
            "recommendations": list(self.recommendations),
        }
