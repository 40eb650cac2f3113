from conftest import make_result
from premium_checker.report import PUT_COLUMNS, SPREAD_COLUMNS, results_to_frame


def test_results_to_frame_keeps_order_and_values():
    rows = [make_result(95, 2.4, annualized=30.0), make_result(90, 1.2, annualized=10.0)]
    df = results_to_frame(rows)
    assert list(df.columns) == PUT_COLUMNS
    assert df["strike_price"].tolist() == [95.0, 90.0]
    assert df["annualized_roi"].tolist() == [30.0, 10.0]


def test_results_to_frame_empty_spreads():
    df = results_to_frame([], spreads=True)
    assert df.empty
    assert list(df.columns) == SPREAD_COLUMNS
