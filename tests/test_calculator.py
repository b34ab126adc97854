"""
Tests for the comparison engine (calculator.py).

Covers the closed-form formulas, the rounding order of the totals,
the tie-break, degenerate terms, the HELOC rate sweep and the yearly
cost paths used by the charts.
"""

import math

import numpy as np
import pytest

from calculator import (
    EquityInputs,
    available_equity,
    cheaper_label,
    compare,
    cost_paths,
    heloc_costs,
    js_round,
    loan_costs,
    monthly_payment,
    rate_sweep,
)


def _inputs(**overrides):
    values = dict(home_value=450_000, mortgage_balance=250_000,
                  borrow_amount=50_000, loan_rate=8.5, heloc_rate=9.0)
    values.update(overrides)
    return EquityInputs(**values)


# --- Rounding ---

def test_js_round_rounds_half_up():
    assert js_round(2.5) == 3.0
    assert js_round(0.5) == 1.0
    assert js_round(-2.5) == -2.0
    assert js_round(374.49) == 374.0


def test_js_round_passes_through_non_finite():
    assert math.isnan(js_round(float("nan")))
    assert js_round(float("inf")) == float("inf")


# --- Available equity ---

def test_available_equity_at_80_percent_ltv():
    assert available_equity(450_000, 250_000) == pytest.approx(110_000)


def test_available_equity_never_negative():
    assert available_equity(100_000, 500_000) == 0.0
    assert available_equity(0, 0) == 0.0
    for home in (0, 50_000, 300_000, 1_000_000):
        for owed in (0, 100_000, 900_000):
            assert available_equity(home, owed) >= 0.0


# --- Loan payment ---

def test_monthly_payment_matches_amortisation_formula():
    r = 8.5 / 100 / 12
    n = 180
    expected = 50_000 * r * (1 + r) ** n / ((1 + r) ** n - 1)
    payment = monthly_payment(50_000, 8.5, 15)
    assert payment == pytest.approx(expected, rel=1e-12)
    assert 492.0 < payment < 493.0


def test_monthly_payment_zero_rate_is_straight_line():
    assert monthly_payment(36_000, 0, 15) == 36_000 / 180
    assert monthly_payment(50_000, 0.0, 15) == 50_000 / 180


def test_monthly_payment_accepts_arrays():
    payments = monthly_payment(50_000, np.array([0.0, 8.5]), 15)
    assert payments.shape == (2,)
    assert payments[0] == pytest.approx(50_000 / 180)
    assert payments[1] == pytest.approx(monthly_payment(50_000, 8.5, 15))


def test_zero_year_term_yields_inf_not_error():
    assert monthly_payment(50_000, 8.5, 0) == float("inf")
    assert monthly_payment(50_000, 0, 0) == float("inf")
    assert math.isnan(monthly_payment(0, 0, 0))


def test_loan_total_interest_rounds_total_paid_first():
    payment, total_paid, total_interest = loan_costs(50_000, 8.5, 15)
    assert total_paid == js_round(payment * 180)
    assert total_interest == total_paid - 50_000


# --- HELOC ---

def test_heloc_interest_only_figures():
    monthly, total = heloc_costs(50_000, 9.0, 10)
    assert monthly == 375.0
    assert total == 45_000.0


def test_heloc_total_multiplies_rounded_monthly():
    # 50,000 * 9.1% / 12 = 379.17 -> 379 before multiplying, so the total
    # is 45,480 rather than 45,500
    monthly, total = heloc_costs(50_000, 9.1, 10)
    assert monthly == 379.0
    assert total == 45_480.0


# --- compare() ---

def test_compare_default_inputs(default_inputs):
    result = compare(default_inputs)

    assert result.available_equity == pytest.approx(110_000)
    assert result.heloc_monthly_interest == 375.0
    assert result.heloc_total_interest == 45_000.0
    assert result.heloc_total_paid == 95_000.0
    assert result.loan_total_interest == result.loan_total_paid - 50_000
    assert result.cheaper_option == "loan"
    assert result.cost_difference == 45_000.0 - result.loan_total_interest
    assert result.exceeds_available_equity is False
    assert result.loan_term_years == 15
    assert result.heloc_draw_years == 10


def test_compare_heloc_cheaper_when_its_rate_is_low():
    result = compare(_inputs(loan_rate=12.0, heloc_rate=5.0))
    assert result.cheaper_option == "heloc"
    assert result.cost_difference == result.loan_total_interest - result.heloc_total_interest


def test_tie_favours_loan():
    result = compare(_inputs(loan_rate=0.0, heloc_rate=0.0))
    assert result.loan_total_interest == 0.0
    assert result.heloc_total_interest == 0.0
    assert result.cheaper_option == "loan"

    nothing_borrowed = compare(_inputs(borrow_amount=0))
    assert nothing_borrowed.cheaper_option == "loan"


def test_borrowing_beyond_equity_is_flagged():
    result = compare(_inputs(borrow_amount=200_000))
    assert result.exceeds_available_equity is True


def test_degenerate_term_produces_nan_without_raising():
    result = compare(_inputs(loan_term_years=0))
    assert result.loan_monthly_payment == float("inf")
    assert math.isnan(result.loan_total_interest)
    assert result.cheaper_option == "heloc"


def test_compare_is_deterministic(default_inputs):
    assert compare(default_inputs) == compare(default_inputs)


def test_cheaper_label():
    assert cheaper_label("loan") == "Home Equity Loan"
    assert cheaper_label("heloc") == "HELOC"


# --- Rate sweep ---

def test_rate_sweep_finds_breakeven(default_inputs):
    sweep = rate_sweep(default_inputs)

    assert sweep.loan_rate == 8.5
    assert len(sweep.rows) == 19
    assert sweep.rows[0].heloc_rate == 5.0
    assert sweep.rows[-1].heloc_rate == 14.0
    # Loan interest is ~$38.6k; a HELOC needs 8% (~$40k over 10 years) to cost more
    assert sweep.breakeven_rate == 8.0
    for row in sweep.rows:
        expected = "loan" if row.heloc_rate >= 8.0 else "heloc"
        assert row.cheaper_option == expected
        assert row.advantage >= 0


def test_rate_sweep_rows_match_compare(default_inputs):
    sweep = rate_sweep(default_inputs, rates=[9.0])
    result = compare(default_inputs)
    row = sweep.rows[0]
    assert row.heloc_total_interest == result.heloc_total_interest
    assert row.loan_total_interest == result.loan_total_interest
    assert row.advantage == result.cost_difference


def test_rate_sweep_no_breakeven_when_loan_rate_is_high():
    sweep = rate_sweep(_inputs(loan_rate=20.0))
    assert sweep.breakeven_rate is None
    assert all(r.cheaper_option == "heloc" for r in sweep.rows)


# --- Cost paths ---

def test_cost_paths_default(default_inputs):
    paths = cost_paths(default_inputs)
    payment = monthly_payment(50_000, 8.5, 15)

    assert len(paths.years) == 16
    assert paths.loan_balance[0] == pytest.approx(50_000)
    assert paths.loan_balance[-1] == pytest.approx(0.0, abs=1e-6)
    assert paths.loan_cum_interest[0] == pytest.approx(0.0)
    assert paths.loan_cum_interest[-1] == pytest.approx(payment * 180 - 50_000)
    assert np.all(np.diff(paths.loan_balance) <= 0)

    assert paths.heloc_cum_interest[10] == 45_000.0
    assert paths.heloc_balance[10] == 50_000.0
    assert np.isnan(paths.heloc_cum_interest[11])


def test_cost_paths_zero_rate_loan_is_linear():
    paths = cost_paths(_inputs(loan_rate=0.0))
    assert paths.loan_balance[5] == pytest.approx(50_000 - 50_000 / 180 * 60)
    assert np.allclose(paths.loan_cum_interest, 0.0)
