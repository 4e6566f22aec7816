"""
Fixture loading.

A fixture is one ordered pairing (A vs B) with its context and head-to-head
record. Raw fixtures come from YAML/JSON files or API payloads using either
the database's snake_case or the web app's camelCase field names.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from netprophet.core.schema import (
    HeadToHeadRecord, MatchContext, PlayerProfile, Side, Surface,
)
from netprophet.ingestion.base import (
    as_mapping, as_sequence, get_value, require_value, safe_date, safe_float, safe_int,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fixture:
    fixture_id: str
    player_a: PlayerProfile
    player_b: PlayerProfile
    context: MatchContext
    h2h: HeadToHeadRecord


def build_player(row: dict) -> PlayerProfile:
    """Raw player row -> PlayerProfile. Raises ValueError on malformed data."""
    if not isinstance(row, dict):
        raise ValueError(f"player must be a mapping, got {type(row).__name__}")

    name = get_value(row, ["name", "display_name", "displayName"])
    if name is None:
        first = get_value(row, ["first_name", "firstName"]) or ""
        last = get_value(row, ["last_name", "lastName"]) or ""
        name = f"{first} {last}".strip()
    player_id = str(require_value(row, ["id", "player_id", "playerId"]))

    rates = as_mapping(get_value(row, ["surface_affinity", "surfaceAffinity",
                                       "surface_win_rates", "surfaceWinRates"]),
                       f"player {player_id}: surface rates")
    affinity = {}
    for s, r in rates.items():
        if r is None:
            continue
        rate = safe_float(r)
        if rate is None:
            raise ValueError(f"player {player_id}: surface rate {s!r} is not a number")
        affinity[Surface.parse(s)] = rate
    preferred = get_value(row, ["preferred_surface", "preferredSurface",
                                "surface_preference", "surfacePreference"])

    rating = safe_float(
        require_value(row, ["skill_rating", "skillRating", "ntrp_rating", "ntrpRating"])
    )
    if rating is None:
        raise ValueError(f"player {player_id}: skill rating is not a number")

    kwargs = dict(
        player_id=player_id,
        name=name or player_id,
        skill_rating=rating,
        wins=safe_int(get_value(row, ["wins"])),
        losses=safe_int(get_value(row, ["losses"])),
        recent_form=tuple(as_sequence(
            get_value(row, ["recent_form", "recentForm", "last5"]),
            f"player {player_id}: recent form",
        )),
        current_streak=safe_int(get_value(row, ["current_streak", "currentStreak"])),
        surface_affinity=affinity,
        preferred_surface=Surface.parse(preferred) if preferred else None,
        aggressiveness=safe_int(get_value(row, ["aggressiveness"]), 5),
        stamina=safe_int(get_value(row, ["stamina"]), 5),
        consistency=safe_int(get_value(row, ["consistency"]), 5),
        age=safe_int(get_value(row, ["age"]), 25),
        fatigue_level=safe_float(get_value(row, ["fatigue_level", "fatigueLevel"])),
        seasonal_form=safe_float(get_value(row, ["seasonal_form", "seasonalForm"])),
        last_match_date=safe_date(get_value(row, ["last_match_date", "lastMatchDate"])),
    )
    for key, candidates in (
        ("streak_type", ["streak_type", "streakType"]),
        ("dominant_hand", ["dominant_hand", "dominantHand", "hand"]),
        ("injury_status", ["injury_status", "injuryStatus"]),
    ):
        v = get_value(row, candidates)
        if v is not None:
            kwargs[key] = v
    # Without an explicit streak type, take it from the last result
    if "streak_type" not in kwargs and kwargs["recent_form"]:
        kwargs["streak_type"] = kwargs["recent_form"][-1]
    return PlayerProfile(**kwargs)


def build_h2h(row: Optional[dict]) -> HeadToHeadRecord:
    row = as_mapping(row, "head-to-head record")
    if not row:
        return HeadToHeadRecord.empty()
    result = get_value(row, ["last_meeting_result", "lastMeetingResult",
                             "last_match_result", "lastMatchResult"])
    # W/L are from side A's perspective
    if isinstance(result, str) and result.strip().upper() in ("W", "L"):
        result = Side.A if result.strip().upper() == "W" else Side.B
    return HeadToHeadRecord(
        wins_for_side_a=safe_int(get_value(row, ["wins_for_side_a", "winsForSideA",
                                                 "player_a_wins", "wins"])),
        wins_for_side_b=safe_int(get_value(row, ["wins_for_side_b", "winsForSideB",
                                                 "player_b_wins", "losses"])),
        last_meeting_result=result,
        last_meeting_date=safe_date(get_value(row, ["last_meeting_date", "lastMeetingDate",
                                                    "last_match_date", "lastMatchDate"])),
    )


def build_context(row: dict) -> MatchContext:
    return MatchContext(
        surface=require_value(row, ["surface"]),
        match_date=safe_date(get_value(row, ["match_date", "matchDate", "date"])),
        tournament_level=get_value(row, ["tournament_level", "tournamentLevel"]),
    )


def build_fixture(row: dict, default_id: str = "") -> Fixture:
    if not isinstance(row, dict):
        raise ValueError(f"fixture must be a mapping, got {type(row).__name__}")
    context_row = as_mapping(
        get_value(row, ["context", "match_context", "matchContext"]), "match context"
    ) or row
    return Fixture(
        fixture_id=fixture_key(row, default_id),
        player_a=build_player(require_value(row, ["player_a", "playerA"])),
        player_b=build_player(require_value(row, ["player_b", "playerB"])),
        context=build_context(context_row),
        h2h=build_h2h(get_value(row, ["h2h", "head_to_head", "headToHead"])),
    )


def load_fixtures(path: str) -> list[dict]:
    """Load raw fixture dicts from a YAML (or JSON) file.

    Accepts a top-level list or a mapping with a ``fixtures`` list.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Fixtures file not found: {path}")
    with open(p) as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get("fixtures")
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of fixtures")
    log.info(f"Loaded {len(data)} fixtures from {path}")
    return data


def fixture_key(row, index) -> str:
    """Identifier of a raw fixture, falling back to its position in the batch."""
    if isinstance(row, dict):
        v = get_value(row, ["id", "fixture_id", "match_id"])
        if v is not None:
            return str(v)
    return str(index)
