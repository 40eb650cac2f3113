import pytest

from premium_checker.chain_filter import calculate_strike_threshold, filter_options_by_strike_price
from premium_checker.data_models import ChainLink


def test_threshold_multiplier_mode_scales_both_branches():
    assert calculate_strike_threshold(0.7, 200.0) == pytest.approx(140.0)
    assert calculate_strike_threshold(1.4, 200.0) == pytest.approx(280.0)


def test_threshold_absolute_mode():
    assert calculate_strike_threshold(0.7, 200.0, mode="absolute") == pytest.approx(140.0)
    assert calculate_strike_threshold(150, 200.0, mode="absolute") == 150.0


def test_threshold_unknown_mode():
    with pytest.raises(ValueError):
        calculate_strike_threshold(0.7, 200.0, mode="dollars")


def test_put_filter_strict_below_with_bid(put_chain):
    kept = filter_options_by_strike_price(put_chain, 100.0, "put")
    assert [l.strike for l in kept] == ["90.00", "95.00", "80.00"]


def test_put_filter_excludes_placeholder_bid(put_chain):
    kept = filter_options_by_strike_price(put_chain, 1000.0, "put")
    assert "100.00" not in [l.strike for l in kept]


def test_call_filter_strict_above(call_chain):
    kept = filter_options_by_strike_price(call_chain, 100.0, "call")
    assert [l.strike for l in kept] == ["103.00", "107.00"]


def test_filter_parses_thousands_and_skips_junk():
    chain = [
        ChainLink(strike="1,050.00", c_Bid="12.10"),
        ChainLink(strike="n/a", c_Bid="1.00"),
        ChainLink(strike=None, c_Bid="1.00"),
        ChainLink(strike="1,200.00", c_Bid=None),
    ]
    kept = filter_options_by_strike_price(chain, 1000, "call")
    assert [l.strike for l in kept] == ["1,050.00"]
