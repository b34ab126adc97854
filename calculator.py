"""
Calculation engine for the Home Equity Loan vs HELOC comparison.

Compares two ways of borrowing against a home on total interest paid:
  A) Home equity loan: fixed rate, fully amortised over LOAN_TERM_YEARS
  B) HELOC: variable rate, interest-only over the HELOC_DRAW_YEARS draw period

The formula helpers accept numpy arrays so the HELOC rate sweep evaluates
its whole grid in one pass; scalar inputs come back as plain floats.
Arithmetic runs under ``np.errstate`` so a degenerate term (zero years)
yields inf/nan rather than raising.

Half rounds toward +inf. The loan's total paid is rounded before the
principal is subtracted; the HELOC's monthly interest is rounded before it
is multiplied out over the draw period.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

import config as cfg


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass
class EquityInputs:
    """User inputs for the comparison. Expected to be sanitised already."""

    home_value: float            # current market value of the home
    mortgage_balance: float      # outstanding first-mortgage balance
    borrow_amount: float         # amount the homeowner wants to borrow
    loan_rate: float             # home equity loan annual rate, percent
    heloc_rate: float            # HELOC annual rate, percent
    loan_term_years: int = cfg.LOAN_TERM_YEARS
    heloc_draw_years: int = cfg.HELOC_DRAW_YEARS


@dataclass
class ComparisonResult:
    """Derived comparison figures. Recomputed on every request."""

    available_equity: float      # 80% LTV headroom, never negative
    loan_monthly_payment: float  # unrounded amortised payment
    loan_total_paid: float       # rounded payment * term months
    loan_total_interest: float
    heloc_monthly_interest: float  # rounded interest-only payment
    heloc_total_interest: float
    heloc_total_paid: float      # principal + HELOC interest
    cheaper_option: str          # 'loan' or 'heloc'; ties go to the loan
    cost_difference: float       # absolute gap in total interest
    exceeds_available_equity: bool
    loan_term_years: int
    heloc_draw_years: int


@dataclass
class RateSweepRow:
    """One HELOC rate tested against the fixed loan."""

    heloc_rate: float
    heloc_monthly_interest: float
    heloc_total_interest: float
    loan_total_interest: float
    cheaper_option: str
    advantage: float             # cheaper option's margin, >= 0


@dataclass
class RateSweepResult:
    """Output of the HELOC rate sweep."""

    loan_rate: float
    rows: list[RateSweepRow]
    breakeven_rate: Optional[float]  # lowest tested HELOC rate where the loan wins


@dataclass
class CostPaths:
    """Yearly cumulative interest and balances for both products."""

    years: np.ndarray = field(repr=False)               # 0 .. horizon
    loan_cum_interest: np.ndarray = field(repr=False)
    loan_balance: np.ndarray = field(repr=False)
    heloc_cum_interest: np.ndarray = field(repr=False)
    heloc_balance: np.ndarray = field(repr=False)


CHEAPER_LABELS = {
    "loan": "Home Equity Loan",
    "heloc": "HELOC",
}


def cheaper_label(option: str) -> str:
    return CHEAPER_LABELS[option]


# ─── Formula Helpers ──────────────────────────────────────────────────

def _as_output(values):
    arr = np.asarray(values, dtype=float)
    return float(arr) if arr.ndim == 0 else arr


def js_round(x):
    """Round half toward +inf (2.5 -> 3, -2.5 -> -2).

    Python's ``round`` uses banker's rounding, which shifts totals by a
    dollar at exact halves.
    """
    return _as_output(np.floor(np.asarray(x, dtype=float) + 0.5))


def available_equity(home_value, mortgage_balance):
    """Borrowable equity at the maximum LTV, floored at zero."""
    home_value = np.asarray(home_value, dtype=float)
    mortgage_balance = np.asarray(mortgage_balance, dtype=float)
    return _as_output(np.maximum(home_value * cfg.MAX_LTV - mortgage_balance, 0.0))


def monthly_payment(principal, annual_rate_pct, years):
    """Standard fixed-rate amortisation payment.

        M = P * r(1+r)^n / ((1+r)^n - 1)

    where r = annual_rate/100/12 and n = years*12. A zero (or negative)
    rate falls back to straight-line repayment, P/n.

    Parameters
    ----------
    principal : array_like
        Amount borrowed.
    annual_rate_pct : array_like
        Annual rate in percent.
    years : array_like
        Term in years.

    Returns
    -------
    float or np.ndarray
        Monthly payment. inf/nan for a zero-year term.
    """
    principal = np.asarray(principal, dtype=float)
    r = np.asarray(annual_rate_pct, dtype=float) / 100 / 12
    n = np.asarray(years, dtype=float) * 12

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        growth = (1 + r) ** n
        amortised = principal * r * growth / (growth - 1)
        straight_line = principal / n
        payment = np.where(r <= 0, straight_line, amortised)
    return _as_output(payment)


def loan_costs(principal, annual_rate_pct, years):
    """Return (monthly payment, total paid, total interest) for the loan."""
    payment = monthly_payment(principal, annual_rate_pct, years)
    with np.errstate(invalid="ignore"):
        total_paid = js_round(np.asarray(payment) * (np.asarray(years, dtype=float) * 12))
        total_interest = js_round(np.asarray(total_paid) - principal)
    return payment, total_paid, total_interest


def heloc_costs(principal, annual_rate_pct, draw_years):
    """Return (monthly interest, total interest) over the draw period.

    The monthly figure is rounded first and then multiplied by the number
    of draw-period months, so rounding error accumulates across the period.
    """
    monthly_rate = np.asarray(annual_rate_pct, dtype=float) / 100 / 12
    monthly = js_round(np.asarray(principal, dtype=float) * monthly_rate)
    with np.errstate(invalid="ignore"):
        total = js_round(np.asarray(monthly) * (np.asarray(draw_years, dtype=float) * 12))
    return monthly, total


# ─── Core Comparison ──────────────────────────────────────────────────

def compare(inputs: EquityInputs) -> ComparisonResult:
    """Evaluate both products for the given inputs."""
    principal = inputs.borrow_amount

    equity = available_equity(inputs.home_value, inputs.mortgage_balance)
    loan_monthly, loan_total_paid, loan_total_interest = loan_costs(
        principal, inputs.loan_rate, inputs.loan_term_years,
    )
    heloc_monthly, heloc_total_interest = heloc_costs(
        principal, inputs.heloc_rate, inputs.heloc_draw_years,
    )

    # nan never compares <=, so degenerate loans fall through to 'heloc'
    cheaper = "loan" if loan_total_interest <= heloc_total_interest else "heloc"

    return ComparisonResult(
        available_equity=equity,
        loan_monthly_payment=loan_monthly,
        loan_total_paid=loan_total_paid,
        loan_total_interest=loan_total_interest,
        heloc_monthly_interest=heloc_monthly,
        heloc_total_interest=heloc_total_interest,
        heloc_total_paid=principal + heloc_total_interest,
        cheaper_option=cheaper,
        cost_difference=abs(loan_total_interest - heloc_total_interest),
        exceeds_available_equity=bool(principal > equity),
        loan_term_years=inputs.loan_term_years,
        heloc_draw_years=inputs.heloc_draw_years,
    )


# ─── HELOC Rate Sweep ─────────────────────────────────────────────────

def rate_sweep(
    inputs: EquityInputs,
    rates: Sequence[float] = cfg.HELOC_SWEEP_RATES,
) -> RateSweepResult:
    """Test a grid of HELOC rates against the user's fixed loan.

    HELOC interest is non-decreasing in the rate, so the first tested rate
    where the loan wins is the breakeven: at or above it the fixed loan
    costs less in total interest.

    Parameters
    ----------
    inputs : EquityInputs
        Base inputs. ``heloc_rate`` is replaced by each grid value.
    rates : sequence of float
        HELOC annual rates to test, in percent, ascending.

    Returns
    -------
    RateSweepResult
        Table rows and breakeven rate (None if the HELOC always wins).
    """
    grid = np.asarray(list(rates), dtype=float)
    _, _, loan_interest = loan_costs(
        inputs.borrow_amount, inputs.loan_rate, inputs.loan_term_years,
    )
    monthly, totals = heloc_costs(inputs.borrow_amount, grid, inputs.heloc_draw_years)
    monthly = np.atleast_1d(monthly)
    totals = np.atleast_1d(totals)

    rows: list[RateSweepRow] = []
    breakeven: Optional[float] = None
    for rate, heloc_monthly, heloc_total in zip(grid, monthly, totals):
        loan_wins = loan_interest <= heloc_total
        rows.append(RateSweepRow(
            heloc_rate=float(rate),
            heloc_monthly_interest=float(heloc_monthly),
            heloc_total_interest=float(heloc_total),
            loan_total_interest=loan_interest,
            cheaper_option="loan" if loan_wins else "heloc",
            advantage=abs(float(heloc_total) - loan_interest),
        ))
        if breakeven is None and loan_wins:
            breakeven = float(rate)

    return RateSweepResult(
        loan_rate=inputs.loan_rate,
        rows=rows,
        breakeven_rate=breakeven,
    )


# ─── Yearly Cost Paths ────────────────────────────────────────────────

def cost_paths(inputs: EquityInputs) -> CostPaths:
    """Cumulative interest and balance at each year end, for charting.

    The loan follows the closed-form amortisation balance
    B_k = P(1+r)^k - M((1+r)^k - 1)/r after k payments (P - Mk when r <= 0),
    with k capped at the term. The HELOC balance stays at the principal
    through the draw period and interest accrues at the rounded monthly
    figure. Repayment after the draw period is not modelled (nan).
    """
    principal = float(inputs.borrow_amount)
    loan_years = inputs.loan_term_years
    draw_years = inputs.heloc_draw_years
    horizon = max(loan_years, draw_years, 0)

    years = np.arange(horizon + 1)
    r = inputs.loan_rate / 100 / 12
    payment = monthly_payment(principal, inputs.loan_rate, loan_years)
    k = np.minimum(years * 12, loan_years * 12).astype(float)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if r <= 0:
            balance = principal - payment * k
        else:
            growth = (1 + r) ** k
            balance = principal * growth - payment * (growth - 1) / r
        balance = np.maximum(balance, 0.0)
        loan_interest = payment * k - (principal - balance)

    heloc_monthly, _ = heloc_costs(principal, inputs.heloc_rate, draw_years)
    in_draw = years <= draw_years
    heloc_interest = np.where(in_draw, heloc_monthly * years * 12, np.nan)
    heloc_balance = np.where(in_draw, principal, np.nan)

    return CostPaths(
        years=years,
        loan_cum_interest=loan_interest,
        loan_balance=balance,
        heloc_cum_interest=heloc_interest.astype(float),
        heloc_balance=heloc_balance,
    )
