import math

import pytest

from premium_checker.calculations import annualized_roi, apy, leveraged_roi, percentage_from_strike, roi


def test_percentage_from_strike_sign():
    assert percentage_from_strike(110, 110) == 0.0
    assert percentage_from_strike(100, 110) == pytest.approx(-9.0909, abs=1e-4)
    assert percentage_from_strike(120, 110) > 0


def test_roi_simple():
    assert roi(2.0, 100.0) == pytest.approx(2.0)


def test_annualized_roi_compounds():
    # 1 % over 365 days is exactly 1 % a year
    assert annualized_roi(0.01, 365) == pytest.approx(1.0)
    assert annualized_roi(0.02, 57) == pytest.approx((1.02 ** (365 / 57) - 1) * 100)


def test_annualized_roi_monotonic():
    assert annualized_roi(0.02, 30) > annualized_roi(0.01, 30)
    assert annualized_roi(0.02, 30) > annualized_roi(0.02, 60)


def test_apy_linear():
    assert apy(100.0, 2.0, 10) == pytest.approx(73.0)


@pytest.mark.parametrize("days", [0, -3])
def test_apy_rejects_non_positive_days(days):
    with pytest.raises(ValueError):
        apy(100.0, 2.0, days)


def test_leveraged_roi_defaults_and_cost():
    assert leveraged_roi(2.0, 100.0, 55) == pytest.approx(2.0 * 365 / 57 / 100 * 100)
    # half the capital doubles the return
    assert leveraged_roi(2.0, 100.0, 55, leverage=0.5) == pytest.approx(2 * leveraged_roi(2.0, 100.0, 55))
    assert leveraged_roi(2.0, 100.0, 55, commission=100.0) == pytest.approx(leveraged_roi(2.0, 100.0, 55) / 2)


def test_annualized_roi_overflow_is_infinite():
    # 1000x in three days does not fit in a float once compounded
    assert annualized_roi(999.0, 3) == math.inf


def test_leveraged_roi_settlement_days():
    assert leveraged_roi(2.0, 100.0, 55, settlement_days=0) == pytest.approx(2.0 * 365 / 55)
    assert leveraged_roi(2.0, 100.0, 55, settlement_days=2) == leveraged_roi(2.0, 100.0, 55)
