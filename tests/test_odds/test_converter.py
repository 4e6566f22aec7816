"""Tests for odds conversion and display."""

import pytest

from netprophet.odds.converter import (
    book_overround, decimal_odds, expected_value, fair_odds, format_american_odds,
    format_odds, implied_probability, round_half_up,
)


class TestRounding:
    def test_half_up_not_bankers(self):
        assert round_half_up(1.005) == 1.01
        assert round_half_up(2.675) == 2.68
        assert round_half_up(1.125) == 1.13

    def test_places(self):
        assert round_half_up(3.14159, 3) == 3.142


class TestDecimalOdds:
    def test_even_money_with_margin(self):
        assert decimal_odds(0.5) == 1.9

    def test_quarter(self):
        assert decimal_odds(0.25) == 3.81

    def test_no_margin(self):
        assert decimal_odds(0.5, margin=0.0) == 2.0

    def test_floor(self):
        assert decimal_odds(0.98) == 1.01
        assert decimal_odds(1.0) == 1.01

    def test_monotone_non_increasing(self):
        probs = [0.02, 0.1, 0.25, 0.4, 0.5, 0.6, 0.75, 0.9, 0.98]
        odds = [decimal_odds(p) for p in probs]
        assert odds == sorted(odds, reverse=True)

    @pytest.mark.parametrize("p", [0.0, -0.1, 1.2])
    def test_rejects_bad_probability(self, p):
        with pytest.raises(ValueError, match="Probability"):
            decimal_odds(p)

    def test_fair_odds(self):
        assert fair_odds(0.4) == pytest.approx(2.5)


class TestImplied:
    def test_implied_probability(self):
        assert implied_probability(2.0) == 0.5

    def test_overround_matches_margin(self):
        assert book_overround(1.9, 1.9) == pytest.approx(0.0526, abs=1e-4)

    def test_rejects_sub_one_odds(self):
        with pytest.raises(ValueError, match="Decimal odds"):
            implied_probability(0.5)

    def test_expected_value(self):
        assert expected_value(2.0, 10, 0.5) == pytest.approx(0.0)
        assert expected_value(3.0, 10, 0.5) == pytest.approx(5.0)
        assert expected_value(1.5, 10, 0.5) < 0


class TestFormatOdds:
    def test_two_places(self):
        assert format_odds(1.85) == "1.85"
        assert format_odds(2) == "2.00"
        assert format_odds(12.5) == "12.50"

    def test_rounds_half_up(self):
        assert format_odds(1.855) == "1.86"

    def test_separator(self):
        assert format_odds(1.85, decimal_separator=",") == "1,85"

    @pytest.mark.parametrize("value", [1.01, 1.9, 2.38, 3.81, 47.62, 1.234, 9.999])
    def test_parses_back_within_a_cent(self, value):
        assert abs(float(format_odds(value)) - value) <= 0.01


class TestAmericanOdds:
    def test_underdog(self):
        assert format_american_odds(2.5) == "+150"

    def test_favorite(self):
        assert format_american_odds(1.5) == "-200"

    def test_even(self):
        assert format_american_odds(2.0) == "+100"

    def test_rejects_one(self):
        with pytest.raises(ValueError):
            format_american_odds(1.0)
