"""
CLI interface and shared display-data computation for the
Home Equity Loan vs HELOC calculator.
"""

from __future__ import annotations

import math
import re
import sys
from typing import Any, Dict, List, Optional

import config as cfg
from calculator import (
    ComparisonResult,
    EquityInputs,
    RateSweepResult,
    cheaper_label,
    compare,
    js_round,
    rate_sweep,
)
import report


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float, decimals: int = 0) -> str:
    """Format number as $X,XXX (-$X,XXX when negative)."""
    if val is None or not math.isfinite(val):
        return "n/a"
    sign = "-" if val < 0 else ""
    return f"{sign}${abs(val):,.{decimals}f}"


def pct(val: float, decimals: int = 2) -> str:
    return f"{val:.{decimals}f}%"


# ═══════════════════════════════════════════════════════════════════
# Input sanitisation (shared with the web form)
# ═══════════════════════════════════════════════════════════════════

_WHOLE_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _strip_symbols(s: str) -> str:
    """Remove currency symbols, percent signs and commas; trim outer whitespace."""
    return s.replace("$", "").replace("%", "").replace(",", "").strip()


def _sanitise(raw: Any, pattern: re.Pattern, convert) -> float:
    if raw is None:
        return 0
    m = pattern.match(_strip_symbols(str(raw)))
    if not m:
        return 0
    try:
        val = convert(m.group(0))
        # ints beyond float range overflow here
        if not math.isfinite(val) or val < 0:
            return 0
    except (ValueError, OverflowError):
        return 0
    return val


def parse_whole(raw: Any) -> int:
    """Parse a whole-dollar amount the way the form does.

    Takes the leading integer ("12.9k" -> 12), and maps anything
    unparseable or negative to 0.
    """
    return _sanitise(raw, _WHOLE_RE, int)


def parse_decimal(raw: Any) -> float:
    """Parse a rate; leading decimal prefix, else 0."""
    return _sanitise(raw, _DECIMAL_RE, float)


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _prompt(label: str, default: Any, parse) -> Any:
    raw = input(f"  {label} [{default}]: ").strip()
    if not raw:
        return default
    val = parse(raw)
    if val == 0 and not raw.lstrip("$ ").startswith("0"):
        print("    Read as 0.")
    return val


def collect_inputs() -> EquityInputs:
    """Prompt the user for the five comparison inputs."""
    print("\n  Enter your details (press Enter for defaults):\n")

    home = _prompt("Home value ($)", cfg.DEFAULT_HOME_VALUE, parse_whole)
    balance = _prompt("Mortgage balance ($)", cfg.DEFAULT_MORTGAGE_BALANCE, parse_whole)
    borrow = _prompt("Amount to borrow ($)", cfg.DEFAULT_BORROW_AMOUNT, parse_whole)
    loan_rate = _prompt("Loan interest rate (%)", cfg.DEFAULT_LOAN_RATE, parse_decimal)
    heloc_rate = _prompt("HELOC interest rate (%)", cfg.DEFAULT_HELOC_RATE, parse_decimal)

    return EquityInputs(
        home_value=home,
        mortgage_balance=balance,
        borrow_amount=borrow,
        loan_rate=loan_rate,
        heloc_rate=heloc_rate,
    )


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def _breakdown_rows(result: ComparisonResult) -> List[Dict[str, Any]]:
    return [
        {"label": f"Home Equity Loan ({result.loan_term_years}yr)",
         "value": result.loan_total_paid, "is_total": False},
        {"label": f"HELOC ({result.heloc_draw_years}yr draw)",
         "value": result.heloc_total_paid, "is_total": False},
        {"label": "Estimated Difference",
         "value": result.cost_difference, "is_total": True},
    ]


def _max_swept_rate(sweep: Optional[RateSweepResult]) -> Optional[float]:
    if sweep is None or not sweep.rows:
        return None
    return max(r.heloc_rate for r in sweep.rows)


def compute_display_data(
    inputs: EquityInputs,
    result: ComparisonResult,
    sweep: Optional[RateSweepResult] = None,
) -> Dict[str, Any]:
    """Extract every figure needed for the output sections."""
    return {
        # Inputs echo
        "home_value": inputs.home_value,
        "mortgage_balance": inputs.mortgage_balance,
        "borrow_amount": inputs.borrow_amount,
        "loan_rate": inputs.loan_rate,
        "heloc_rate": inputs.heloc_rate,
        "loan_term_years": result.loan_term_years,
        "heloc_draw_years": result.heloc_draw_years,
        # Equity
        "available_equity": result.available_equity,
        "exceeds_equity": result.exceeds_available_equity,
        # Home equity loan
        "loan_monthly": js_round(result.loan_monthly_payment),
        "loan_monthly_exact": result.loan_monthly_payment,
        "loan_total_paid": result.loan_total_paid,
        "loan_total_interest": result.loan_total_interest,
        # HELOC
        "heloc_monthly": result.heloc_monthly_interest,
        "heloc_total_interest": result.heloc_total_interest,
        "heloc_total_paid": result.heloc_total_paid,
        # Verdict
        "cheaper_option": result.cheaper_option,
        "cheaper_label": cheaper_label(result.cheaper_option),
        "cost_difference": result.cost_difference,
        "breakdown": _breakdown_rows(result),
        # Rate sweep
        "sweep": sweep,
        "breakeven_rate": sweep.breakeven_rate if sweep is not None else None,
        "max_swept_rate": _max_swept_rate(sweep),
        # Copy
        "tips": cfg.EQUITY_TIPS,
        "disclaimer": cfg.DISCLAIMER,
    }


def generate_summary_text(d: Dict[str, Any]) -> str:
    """Build a 2-3 sentence plain-English summary."""
    diff = fmt(d["cost_difference"])
    loan_int = fmt(d["loan_total_interest"])
    heloc_int = fmt(d["heloc_total_interest"])
    term = d["loan_term_years"]
    draw = d["heloc_draw_years"]

    if d["cheaper_option"] == "loan":
        text = (
            f"The Home Equity Loan costs {diff} less in total interest "
            f"({loan_int} over {term} years vs {heloc_int} over the "
            f"{draw}-year HELOC draw period). Its {fmt(d['loan_monthly'])}/mo "
            f"payment is fixed and repays the full {fmt(d['borrow_amount'])}, "
            f"while the HELOC's {fmt(d['heloc_monthly'])}/mo interest-only "
            f"payment leaves the balance outstanding when the draw ends."
        )
    else:
        text = (
            f"The HELOC costs {diff} less in total interest "
            f"({heloc_int} over the {draw}-year draw period vs {loan_int} "
            f"over the {term}-year loan). Its {fmt(d['heloc_monthly'])}/mo "
            f"interest-only payment is below the loan's "
            f"{fmt(d['loan_monthly'])}/mo, but the {fmt(d['borrow_amount'])} "
            f"balance is still owed after the draw period and the rate can change."
        )

    if d["sweep"] is not None:
        if d["breakeven_rate"] is not None:
            text += (
                f" At a {pct(d['loan_rate'])} loan rate, the loan becomes the "
                f"cheaper option once the HELOC rate reaches "
                f"{pct(d['breakeven_rate'], 1)}."
            )
        elif d["max_swept_rate"] is not None:
            text += (
                f" No HELOC rate up to {pct(d['max_swept_rate'], 1)} makes the "
                f"loan cheaper on total interest."
            )
    return text


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)
H_BAR = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{H_BAR * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{H_BAR * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 38) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H_BAR * (W - 2)}╝"


def _wrap(text: str, width: int = W - 6) -> List[str]:
    lines = []
    line = ""
    for word in text.split():
        if len(line) + len(word) + 1 <= width:
            line = f"{line} {word}" if line else word
        else:
            lines.append(line)
            line = word
    if line:
        lines.append(line)
    return lines


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_home(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Home value", fmt(d["home_value"])),
        _box_row("Mortgage balance", fmt(d["mortgage_balance"])),
        _box_row("Amount to borrow", fmt(d["borrow_amount"])),
        _box_line(),
        _box_row(f"Available equity ({cfg.MAX_LTV:.0%} LTV)", fmt(d["available_equity"])),
    ]
    if d["exceeds_equity"]:
        rows.append(_box_line())
        for line in _wrap("WARNING: The amount to borrow is more than your "
                          "available equity. Lenders may not approve it."):
            rows.append(_box_line(line))
    _print_section("YOUR HOME", rows)


def _print_loan(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Interest rate (fixed)", pct(d["loan_rate"])),
        _box_row("Monthly payment", fmt(d["loan_monthly"])),
        _box_row("Term", f"{d['loan_term_years']} years"),
        _box_line(),
        _box_row("Total paid", fmt(d["loan_total_paid"])),
        _box_row("Total interest", fmt(d["loan_total_interest"])),
    ]
    _print_section("HOME EQUITY LOAN", rows)


def _print_heloc(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Interest rate (variable)", pct(d["heloc_rate"])),
        _box_row("Interest-only payment", f"{fmt(d['heloc_monthly'])}/mo"),
        _box_row("Draw period", f"{d['heloc_draw_years']} years"),
        _box_line(),
        _box_row("Total paid (incl. principal)", fmt(d["heloc_total_paid"])),
        _box_row("Total interest", fmt(d["heloc_total_interest"])),
    ]
    _print_section("HELOC", rows)


def _print_comparison(d: Dict[str, Any]) -> None:
    rows = [_box_row(r["label"], fmt(r["value"])) for r in d["breakdown"]]
    rows.append(_box_line())
    rows.append(_box_row("Lower total interest", d["cheaper_label"]))
    rows.append(_box_line())
    for line in _wrap(generate_summary_text(d)):
        rows.append(_box_line(line))
    _print_section("COST COMPARISON", rows)


def _print_sweep(d: Dict[str, Any]) -> None:
    sweep: RateSweepResult = d["sweep"]

    h1 = f"{'HELOC rate':>10}  {'Interest/mo':>11}  {'HELOC total':>12}  {'Cheaper':>8}  {'By':>9}"
    rows = [_box_line(h1), _box_line("─" * (W - 6))]

    for r in sweep.rows:
        marker = " <<" if r.heloc_rate == sweep.breakeven_rate else ""
        line = (
            f"{pct(r.heloc_rate, 1):>10}  "
            f"{fmt(r.heloc_monthly_interest):>11}  "
            f"{fmt(r.heloc_total_interest):>12}  "
            f"{r.cheaper_option:>8}  "
            f"{fmt(r.advantage):>9}"
            f"{marker}"
        )
        rows.append(_box_line(line))

    rows.append(_box_line())
    rows.append(_box_row("Loan total interest (fixed)", fmt(d["loan_total_interest"])))
    _print_section(f"HELOC RATE SWEEP (LOAN AT {pct(sweep.loan_rate)})", rows)


def _print_tips(d: Dict[str, Any]) -> None:
    rows = [_box_line(f"• {tip}") for tip in d["tips"]]
    rows.append(_box_line())
    for line in _wrap(d["disclaimer"]):
        rows.append(_box_line(line))
    _print_section("KEY CONSIDERATIONS", rows)


def _print_report(pdf_path: str) -> None:
    rows = [
        _box_line(f"PDF report saved to: {pdf_path}"),
        _box_line("Charts also available in the web app:"),
        _box_line("  python main.py  (opens localhost:5000)"),
    ]
    _print_section("REPORT", rows)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(pdf_path: str = cfg.REPORT_PATH) -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  Home Equity Loan vs HELOC Calculator")
    print("=" * W)

    inputs = collect_inputs()

    result = compare(inputs)
    sweep = rate_sweep(inputs)
    d = compute_display_data(inputs, result, sweep)

    print()
    _print_home(d)
    _print_loan(d)
    _print_heloc(d)
    _print_comparison(d)
    _print_sweep(d)
    _print_tips(d)

    print("\n  Generating PDF report...")
    saved = report.generate_pdf(inputs, result, sweep, d, generate_summary_text(d), pdf_path)
    print(f"  Saved to {saved}\n")

    _print_report(saved)


if __name__ == "__main__":
    run_cli()
