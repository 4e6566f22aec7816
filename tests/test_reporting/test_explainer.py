"""Tests for recommendation strings."""

from netprophet.core.config import DEFAULT_CONFIG
from netprophet.core.schema import (
    HeadToHeadRecord, MatchContext, Outcome, PlayerProfile, Side, Surface,
)
from netprophet.pipeline import predict_match
from netprophet.reporting.explainer import (
    EVENLY_MATCHED, LIMITED_DATA, explain, head_to_head_rule, injury_rules,
)

W, L = Outcome.WIN, Outcome.LOSS
HARD = MatchContext(Surface.HARD)


def _player(pid, name, **overrides) -> PlayerProfile:
    kwargs = dict(player_id=pid, name=name, skill_rating=4.0, wins=20, losses=20)
    kwargs.update(overrides)
    return PlayerProfile(**kwargs)


class TestHeadlines:
    def test_limited_data(self):
        a = _player("a", "Ana", wins=0, losses=0)
        b = _player("b", "Bea", wins=0, losses=0)
        result = predict_match(a, b, HARD)
        assert result.recommendations[0] == LIMITED_DATA

    def test_evenly_matched(self):
        kw = dict(wins=35, losses=30, recent_form=(W, L), current_streak=1, streak_type=L,
                  surface_affinity={Surface.HARD: 0.55}, seasonal_form=0.5, fatigue_level=2)
        result = predict_match(_player("a", "Ana", **kw), _player("b", "Bea", **kw),
                               HARD, HeadToHeadRecord(2, 2))
        assert result.recommendations == (EVENLY_MATCHED,)


class TestFactorRules:
    def test_strong_rating_favorite(self):
        result = predict_match(
            _player("a", "Ana", skill_rating=5.5), _player("b", "Bea", skill_rating=4.0), HARD,
        )
        assert "Ana is a strong favorite based on the rating gap (5.5 vs 4.0)" in result.recommendations

    def test_small_rating_gap_is_not_called_out(self):
        result = predict_match(
            _player("a", "Ana", skill_rating=4.2), _player("b", "Bea", skill_rating=4.0), HARD,
        )
        assert not any("strong favorite" in r for r in result.recommendations)

    def test_head_to_head_leader(self):
        result = predict_match(_player("a", "Ana"), _player("b", "Bea"), HARD, HeadToHeadRecord(0, 3))
        assert "Bea leads the head-to-head 3-0" in result.recommendations

    def test_rivalry_favors_underdog(self):
        result = predict_match(
            _player("a", "Ana", skill_rating=5.0), _player("b", "Bea"), HARD, HeadToHeadRecord(0, 2),
        )
        assert result.probability_a > 0.5
        assert "Historical rivalry favors underdog Bea (2-0 head-to-head)" in result.recommendations

    def test_last_meeting_without_tally(self):
        ana, bea = _player("a", "Ana"), _player("b", "Bea")
        h2h = HeadToHeadRecord(0, 0, last_meeting_result=Side.A)
        msg = head_to_head_rule({"headToHead": 0.1}, ana, bea, h2h, 0.52, DEFAULT_CONFIG)
        assert msg == "Ana won the last meeting"

    def test_last_meeting_edge_keeps_tally(self):
        ana, bea = _player("a", "Ana"), _player("b", "Bea")
        h2h = HeadToHeadRecord(2, 3, last_meeting_result=Side.A)
        msg = head_to_head_rule({"headToHead": 0.2}, ana, bea, h2h, 0.6, DEFAULT_CONFIG)
        assert msg == "Ana won the last meeting (2-3 head-to-head)"

    def test_underdog_by_last_meeting(self):
        ana, bea = _player("a", "Ana"), _player("b", "Bea")
        h2h = HeadToHeadRecord(3, 2, last_meeting_result=Side.B)
        msg = head_to_head_rule({"headToHead": -0.02}, ana, bea, h2h, 0.7, DEFAULT_CONFIG)
        assert msg == "Underdog Bea won the last meeting (2-3 head-to-head)"

    def test_no_contradictory_tally_end_to_end(self):
        h2h = HeadToHeadRecord(0, 0, last_meeting_result=Side.A)
        result = predict_match(_player("a", "Ana"), _player("b", "Bea"), HARD, h2h)
        assert "Ana won the last meeting" in result.recommendations
        assert not any("0-0" in r for r in result.recommendations)

    def test_surface_edge_with_rate(self):
        a = _player("a", "Ana", surface_affinity={Surface.HARD: 0.75})
        b = _player("b", "Bea", surface_affinity={Surface.HARD: 0.45})
        result = predict_match(a, b, HARD)
        assert "Ana has the edge on Hard Court (75% win rate)" in result.recommendations

    def test_surface_edge_from_preference(self):
        b = _player("b", "Bea", preferred_surface=Surface.HARD)
        result = predict_match(_player("a", "Ana"), b, HARD)
        assert "Bea has the edge on Hard Court" in result.recommendations

    def test_better_form(self):
        a = _player("a", "Ana", recent_form=(W, W, L, W, W), current_streak=2)
        b = _player("b", "Bea", recent_form=(W, L, L, W, L), current_streak=1, streak_type=L)
        result = predict_match(a, b, HARD)
        assert "Ana is in better recent form (4/5 recent wins)" in result.recommendations

    def test_well_rested(self):
        a = _player("a", "Ana", fatigue_level=1)
        b = _player("b", "Bea", fatigue_level=9)
        result = predict_match(a, b, HARD)
        assert "Ana appears well-rested" in result.recommendations

    def test_injuries_major_first(self):
        a = _player("a", "Ana", injury_status="minor")
        b = _player("b", "Bea", injury_status="major")
        assert injury_rules(a, b) == [
            "Bea is carrying a major injury",
            "Ana is carrying a minor injury",
        ]


class TestExplain:
    def test_no_duplicates(self):
        a = _player("a", "Ana", skill_rating=6.0, injury_status="minor",
                    surface_affinity={Surface.HARD: 0.8})
        b = _player("b", "Bea", skill_rating=3.0, injury_status="minor",
                    surface_affinity={Surface.HARD: 0.3})
        result = predict_match(a, b, HARD, HeadToHeadRecord(4, 1))
        assert len(result.recommendations) == len(set(result.recommendations))

    def test_truncation(self):
        cfg = DEFAULT_CONFIG.with_overrides(max_recommendations=1)
        a = _player("a", "Ana", skill_rating=6.0, injury_status="minor")
        b = _player("b", "Bea", skill_rating=3.0, injury_status="major")
        result = predict_match(a, b, HARD, config=cfg)
        assert len(result.recommendations) == 1

    def test_may_be_empty(self):
        a, b = _player("a", "Ana"), _player("b", "Bea")
        assert explain(a, b, HARD, HeadToHeadRecord.empty(), {}, 0.6, 0.7) == ()
