"""
Constants for the Home Equity Loan vs HELOC calculator.

All monetary values in USD. Rates are annual percentages (8.5 means 8.5%).
Server settings can be overridden through environment variables.
"""

import os

# ── Equity ───────────────────────────────────────────────────────────
MAX_LTV = 0.80              # lenders allow borrowing up to 80% of home value

# ── Product terms ────────────────────────────────────────────────────
LOAN_TERM_YEARS = 15        # fixed-rate home equity loan, fully amortising
HELOC_DRAW_YEARS = 10       # HELOC draw period, interest-only

# ── Form defaults ────────────────────────────────────────────────────
DEFAULT_HOME_VALUE = 450_000
DEFAULT_MORTGAGE_BALANCE = 250_000
DEFAULT_BORROW_AMOUNT = 50_000
DEFAULT_LOAN_RATE = 8.5
DEFAULT_HELOC_RATE = 9.0

# Input bounds shown on the form (min, max, step). Not enforced by the
# calculator; the browser uses them as hints only.
HOME_VALUE_BOUNDS = (50_000, 5_000_000, 10_000)
MORTGAGE_BALANCE_BOUNDS = (0, 5_000_000, 5_000)
BORROW_AMOUNT_BOUNDS = (5_000, 500_000, 1_000)
RATE_BOUNDS = (0, 20, 0.125)

# ── HELOC rate sweep ─────────────────────────────────────────────────
# HELOC rates tested against the user's fixed loan rate, 5% to 14%.
HELOC_SWEEP_RATES = [5.0 + 0.5 * i for i in range(19)]

# ── Copy ─────────────────────────────────────────────────────────────
EQUITY_TIPS = [
    "Home equity loans offer fixed rates and predictable payments",
    "HELOCs provide flexible borrowing with variable rates",
    "Interest may be tax-deductible if used for home improvements",
    "Compare total costs including fees before deciding",
]

DISCLAIMER = (
    "This calculator provides estimates comparing home equity loan and HELOC "
    "costs using simplified assumptions. Actual rates, terms, fees, and "
    "eligibility vary by lender and creditworthiness. The figures shown are "
    "estimates only and do not constitute financial advice or a loan offer. "
    "HELOC rates are typically variable and may change over time. Consult a "
    "mortgage professional for personalized guidance."
)

# ── Server / output ──────────────────────────────────────────────────
HOST = os.getenv("HELOC_HOST", "127.0.0.1")
PORT = int(os.getenv("HELOC_PORT", "5000"))
DEBUG = os.getenv("HELOC_DEBUG", "1").strip().lower() in ("1", "true", "yes")
REPORT_PATH = os.getenv("HELOC_REPORT_PATH", "home_equity_report.pdf")
