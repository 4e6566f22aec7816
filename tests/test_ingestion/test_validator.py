"""Tests for pre-prediction fixture validation."""

from datetime import date

from netprophet.core.schema import HeadToHeadRecord, MatchContext, Outcome, PlayerProfile, Surface
from netprophet.ingestion.fixtures import Fixture
from netprophet.ingestion.validator import FixtureValidator

W = Outcome.WIN


def _player(pid, **overrides) -> PlayerProfile:
    kwargs = dict(
        player_id=pid, name=pid.title(), skill_rating=4.0, wins=10, losses=5,
        recent_form=(W,), current_streak=1, surface_affinity={Surface.HARD: 0.6},
    )
    kwargs.update(overrides)
    return PlayerProfile(**kwargs)


def _fixture(a, b, h2h=None, match_date=None, fid="f1") -> Fixture:
    return Fixture(fid, a, b, MatchContext(Surface.HARD, match_date), h2h or HeadToHeadRecord.empty())


class TestFixtureValidator:
    def test_clean(self):
        report = FixtureValidator().validate([_fixture(_player("ana"), _player("bea"))])
        assert report["is_clean"]
        assert report["errors"] == []
        assert report["warnings"] == []
        assert report["stats"]["fixtures"] == 1
        assert report["stats"]["players"] == 2

    def test_self_match_is_error(self):
        p = _player("ana")
        report = FixtureValidator().validate([_fixture(p, p)])
        assert not report["is_clean"]
        assert "cannot play themself" in report["errors"][0]

    def test_sparse_player_warnings(self):
        sparse = PlayerProfile(player_id="cy", name="Cy", skill_rating=3.0)
        report = FixtureValidator().validate([_fixture(_player("ana"), sparse)])
        assert report["is_clean"]
        text = " ".join(report["warnings"])
        assert "Cy has no match history" in text
        assert "Cy has no recent form" in text
        assert "no surface data for Cy" in text
        assert report["stats"]["no_history"] == 1

    def test_high_fatigue_warning(self):
        report = FixtureValidator().validate([_fixture(_player("ana", fatigue_level=9), _player("bea"))])
        assert any("fatigue level 9" in w for w in report["warnings"])

    def test_idle_player_warning(self):
        a = _player("ana", last_match_date=date(2025, 11, 1))
        report = FixtureValidator().validate([_fixture(a, _player("bea"), match_date=date(2026, 5, 1))])
        assert any("days before the match" in w for w in report["warnings"])

    def test_counts_h2h_and_seasonal_form(self):
        fixtures = [
            _fixture(_player("ana"), _player("bea"), HeadToHeadRecord(1, 0), fid="f1"),
            _fixture(_player("ana", seasonal_form=0.5), _player("bea", seasonal_form=0.4), fid="f2"),
        ]
        stats = FixtureValidator().validate(fixtures)["stats"]
        assert stats["with_h2h"] == 1
        assert stats["missing_seasonal_form"] == 2
