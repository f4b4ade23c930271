"""Tests for the Lump Sum vs DCA simulation engine."""
import math
import pytest
from datetime import date

from dca.engine import StrategySimulator, simulate, validate_price_series
from dca.errors import InvalidInputError, PriceIntegrityError
from dca.scheduler import get_investment_dates
from dca.metrics import calculate_cagr
from models.enums import Frequency, StrategyType
from models.simulation import PricePoint


# ── Worked example ──────────────────────────────────────

def test_three_month_scenario(three_month_series):
    result = simulate(1000, 500, "monthly", date(2020, 1, 1), date(2020, 3, 31), three_month_series)

    assert [p.lump_sum_value for p in result.points] == pytest.approx([1000, 1100, 1210])

    units = [5.0, 5.0 + 500 / 110, 5.0 + 500 / 110 + 500 / 121]
    assert [p.dca_units for p in result.points] == pytest.approx(units)
    assert [p.dca_value for p in result.points] == pytest.approx([500, 1050, units[2] * 121])
    assert result.points[2].dca_value == pytest.approx(1655.0)
    assert [p.dca_invested for p in result.points] == [500, 1000, 1500]

    years = (date(2020, 3, 31) - date(2020, 1, 31)).days / 365.25
    assert result.lump_sum.final_value == pytest.approx(1210)
    assert result.lump_sum.total_units == pytest.approx(10.0)
    assert result.lump_sum.cagr == pytest.approx(calculate_cagr(1000, 1210, years), rel=1e-9)
    assert result.dca.total_invested == 1500
    assert result.dca.num_investments == 3
    assert result.dca.periodic_amount == 500
    assert result.dca.total_units == pytest.approx(units[2])
    assert result.dca.cagr == pytest.approx(calculate_cagr(1500, units[2] * 121, years), rel=1e-9)


def test_dca_advantage(three_month_series):
    result = simulate(1000, 500, "monthly", "2020-01-01", "2020-03-31", three_month_series)
    assert result.dca_advantage_pct == pytest.approx(result.dca.roi_pct - result.lump_sum.roi_pct)
    assert result.dca_advantage_pct < 0  # rising market favours lump sum


# ── Lump Sum ────────────────────────────────────────────

@pytest.mark.parametrize("first_close", [0.37, 100.0, 18234.55])
def test_lump_sum_first_value_equals_amount(first_close):
    points = [PricePoint(date(2021, 1, 4), first_close), PricePoint(date(2021, 1, 5), first_close * 1.1)]
    result = simulate(25000, 100, "monthly", "2021-01-01", "2021-01-31", points)
    assert result.points[0].lump_sum_value == pytest.approx(25000)


def test_lump_sum_defined_everywhere(daily_series):
    result = simulate(1000, 100, "quarterly", "2020-01-01", "2021-12-31", daily_series)
    assert all(p.lump_sum_value is not None for p in result.points)


# ── DCA accumulation ────────────────────────────────────

@pytest.mark.parametrize("frequency", list(Frequency))
def test_dca_units_monotonic_and_step_on_schedule(daily_series, frequency):
    result = simulate(1000, 100, frequency, "2020-01-01", "2021-12-31", daily_series)
    scheduled = {p.date for p in get_investment_dates(daily_series, frequency)}

    previous = 0.0
    for point in result.points:
        if point.dca_units is None:
            continue
        assert point.dca_units >= previous
        if point.dca_units > previous:
            assert point.date in scheduled
        previous = point.dca_units
    assert result.dca.num_investments == len(scheduled)


def test_dca_gap_before_first_investment(daily_series):
    result = simulate(1000, 100, "monthly", "2020-01-01", "2021-12-31", daily_series)
    first = result.first_investment_date
    assert first == date(2020, 1, 31)
    for point in result.points:
        if point.date < first:
            assert point.dca_value is None
            assert point.dca_units is None
        else:
            assert point.dca_value is not None


def test_dca_value_equals_units_times_close(daily_series):
    result = simulate(1000, 100, "monthly", "2020-01-01", "2021-12-31", daily_series)
    for point in result.points:
        if point.has_dca_position:
            assert point.dca_value == pytest.approx(point.dca_units * point.close)


def test_zero_dca_amount_is_defined_zero_for_lump_sum_only(three_month_series):
    result = simulate(1000, 0, "monthly", "2020-01-01", "2020-03-31", three_month_series,
                      strategy=StrategyType.LUMP_SUM)
    assert all(p.dca_value == 0.0 for p in result.points)
    assert result.dca.num_investments == 0
    assert result.dca.cagr == 0.0


def test_clips_series_to_date_range(daily_series):
    result = simulate(1000, 100, "monthly", "2020-06-15", "2020-09-15", daily_series)
    assert result.points[0].date == date(2020, 6, 15)
    assert result.points[-1].date == date(2020, 9, 15)
    # First buy is June's month-end, not the start date
    assert result.first_investment_date == date(2020, 6, 30)
    assert result.points[0].lump_sum_value == pytest.approx(1000)


def test_output_matches_input_length_and_order(daily_series):
    result = simulate(1000, 100, "yearly", "2020-01-01", "2021-12-31", daily_series)
    assert [p.date for p in result.points] == [p.date for p in daily_series]
    assert [p.close for p in result.points] == [p.close for p in daily_series]


def test_input_not_mutated(three_month_series):
    before = list(three_month_series)
    simulate(1000, 500, "monthly", "2020-01-01", "2020-03-31", three_month_series)
    assert three_month_series == before


def test_deterministic(daily_series):
    a = simulate(1000, 100, "quarterly", "2020-01-01", "2021-12-31", daily_series)
    b = simulate(1000, 100, "quarterly", "2020-01-01", "2021-12-31", list(daily_series))
    assert a == b
    assert a.to_dict() == b.to_dict()


# ── Validation ──────────────────────────────────────────

@pytest.mark.parametrize("lump_sum", [0, -5, math.nan, math.inf])
def test_rejects_bad_lump_sum(three_month_series, lump_sum):
    with pytest.raises(InvalidInputError):
        simulate(lump_sum, 500, "monthly", "2020-01-01", "2020-03-31", three_month_series)


def test_rejects_zero_dca_when_dca_requested(three_month_series):
    with pytest.raises(InvalidInputError, match="DCA amount"):
        simulate(1000, 0, "monthly", "2020-01-01", "2020-03-31", three_month_series)


def test_rejects_negative_dca(three_month_series):
    with pytest.raises(InvalidInputError):
        simulate(1000, -1, "monthly", "2020-01-01", "2020-03-31", three_month_series,
                 strategy="lump_sum")


@pytest.mark.parametrize("start, end", [("2020-03-31", "2020-01-01"), ("2020-01-01", "2020-01-01")])
def test_rejects_inverted_range(three_month_series, start, end):
    with pytest.raises(InvalidInputError, match="before end"):
        simulate(1000, 500, "monthly", start, end, three_month_series)


def test_rejects_bad_date_string(three_month_series):
    with pytest.raises(InvalidInputError):
        simulate(1000, 500, "monthly", "01/01/2020", "2020-03-31", three_month_series)


def test_rejects_empty_series():
    with pytest.raises(InvalidInputError, match="empty"):
        simulate(1000, 500, "monthly", "2020-01-01", "2020-03-31", [])


def test_rejects_series_outside_range(three_month_series):
    with pytest.raises(InvalidInputError, match="No price data"):
        simulate(1000, 500, "monthly", "2021-01-01", "2021-03-31", three_month_series)


def test_rejects_unknown_frequency():
    with pytest.raises(InvalidInputError, match="frequency"):
        StrategySimulator("weekly")


def test_rejects_unknown_strategy():
    with pytest.raises(InvalidInputError, match="strategy"):
        StrategySimulator("monthly", "all_in")


# ── Price integrity ─────────────────────────────────────

@pytest.mark.parametrize("bad_close", [0.0, -10.0, math.nan, math.inf])
def test_rejects_invalid_close(bad_close):
    points = [PricePoint(date(2020, 1, 2), 100.0), PricePoint(date(2020, 1, 3), bad_close)]
    with pytest.raises(PriceIntegrityError) as exc:
        simulate(1000, 500, "monthly", "2020-01-01", "2020-01-31", points)
    assert exc.value.point_date == date(2020, 1, 3)


def test_rejects_duplicate_dates():
    points = [PricePoint(date(2020, 1, 2), 100.0), PricePoint(date(2020, 1, 2), 101.0)]
    with pytest.raises(PriceIntegrityError, match="ascending"):
        validate_price_series(points)


def test_rejects_descending_dates():
    points = [PricePoint(date(2020, 1, 3), 100.0), PricePoint(date(2020, 1, 2), 101.0)]
    with pytest.raises(PriceIntegrityError):
        validate_price_series(points)


def test_integrity_errors_are_value_errors():
    assert issubclass(PriceIntegrityError, ValueError)
    assert issubclass(InvalidInputError, ValueError)
