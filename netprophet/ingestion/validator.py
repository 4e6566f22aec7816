"""
Pre-prediction data quality validation.

Runs integrity checks on built fixtures before they are priced. Nothing here
blocks a prediction except a player facing themself; the rest are warnings
that explain a low confidence score.
"""

import logging
from collections import Counter

from netprophet.ingestion.fixtures import Fixture

log = logging.getLogger(__name__)

STALE_MATCH_DAYS = 90
HIGH_FATIGUE = 8.0


class FixtureValidator:
    """Validates a collection of fixtures for quality issues."""

    def validate(self, fixtures: list[Fixture]) -> dict:
        """Run all checks. Returns summary dict + logs warnings."""
        issues = []
        stats = Counter()

        for fx in fixtures:
            stats["fixtures"] += 1
            a, b = fx.player_a, fx.player_b

            if a.player_id == b.player_id:
                issues.append(("error", f"{fx.fixture_id}: {a.player_id} cannot play themself"))
                continue

            for p in (a, b):
                stats["players"] += 1
                if p.matches_played == 0:
                    stats["no_history"] += 1
                    issues.append(("warn", f"{fx.fixture_id}: {p.name} has no match history"))
                if not p.recent_form:
                    issues.append(("warn", f"{fx.fixture_id}: {p.name} has no recent form"))
                if p.seasonal_form is None:
                    stats["missing_seasonal_form"] += 1
                if p.surface_rate(fx.context.surface) is None and p.preferred_surface is None:
                    issues.append((
                        "warn",
                        f"{fx.fixture_id}: no surface data for {p.name} "
                        f"on {fx.context.surface.value}"
                    ))
                if p.fatigue_level is not None and p.fatigue_level >= HIGH_FATIGUE:
                    issues.append((
                        "warn",
                        f"{fx.fixture_id}: {p.name} fatigue level {p.fatigue_level:g}"
                    ))
                if p.last_match_date and fx.context.match_date:
                    idle = (fx.context.match_date - p.last_match_date).days
                    if idle > STALE_MATCH_DAYS:
                        issues.append((
                            "warn",
                            f"{fx.fixture_id}: {p.name} last played {idle} days before the match"
                        ))

            if fx.h2h.has_history:
                stats["with_h2h"] += 1

        errors = [msg for level, msg in issues if level == "error"]
        warns = [msg for level, msg in issues if level == "warn"]

        if errors:
            log.error(f"Fixture validation: {len(errors)} errors")
            for e in errors[:10]:
                log.error(f"  {e}")
        if warns:
            log.warning(f"Fixture validation: {len(warns)} warnings")
            for w in warns[:10]:
                log.warning(f"  {w}")

        return {
            "stats": dict(stats),
            "errors": errors,
            "warnings": warns,
            "is_clean": len(errors) == 0,
        }
