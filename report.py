"""
PDF report generation and reusable chart rendering for the
Home Equity Loan vs HELOC calculator.

Provides:
  - Multi-page PDF report (generate_pdf)
  - Base64-encoded chart images for web embedding (get_web_charts)
  - Individual page renderers reusable by both CLI and web
"""

from __future__ import annotations

import base64
import io
import logging
import math
from typing import Any, Dict, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter
import numpy as np

import config as cfg
from calculator import (
    ComparisonResult,
    CostPaths,
    EquityInputs,
    RateSweepResult,
    cost_paths,
)

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0a101f"
CARD = "#131b2e"
TEXT = "#f1f5f9"
TEXT2 = "#cbd5e1"
SKY = "#38bdf8"
EMERALD = "#34d399"
AMBER = "#fbbf24"
SLATE = "#94a3b8"
BORDER = "#1e293b"

LOAN_COLOR = SKY
HELOC_COLOR = AMBER

A4W, A4H = 8.27, 11.69
WEB_W, WEB_H = 10, 6


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _usd(x: float) -> str:
    """Dollar amount for matplotlib text ($ escaped so mathtext stays off)."""
    if not math.isfinite(x):
        return "n/a"
    sign = "-" if x < 0 else ""
    return f"{sign}\\${abs(x):,.0f}"


def _usd_axis(x, _):
    if abs(x) >= 1e6:
        return f"\\${x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"\\${x / 1e3:.0f}k"
    return f"\\${x:.0f}"


def _pct_axis(x, _):
    return f"{x:.1f}%"


USD_FMT = FuncFormatter(_usd_axis)
PCT_FMT = FuncFormatter(_pct_axis)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply dark theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, alpha=0.15, color=SLATE)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)


# ═══════════════════════════════════════════════════════════════════
# Page 1: Summary (text only)
# ═══════════════════════════════════════════════════════════════════

def _page1_summary(inputs: EquityInputs, d: Dict, summary_text: str) -> plt.Figure:
    fig = plt.figure(figsize=(A4W, A4H))
    fig.patch.set_facecolor(BG)

    fig.text(0.50, 0.93, "Home Equity Loan vs HELOC",
             ha="center", fontsize=18, color=TEXT, fontweight="bold")
    fig.text(0.50, 0.91, "Estimated Cost Comparison",
             ha="center", fontsize=11, color=TEXT2)

    y = 0.86
    fig.text(0.08, y, "Your Details", fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.028
    params = [
        f"Home value: {_usd(inputs.home_value)}  |  "
        f"Mortgage balance: {_usd(inputs.mortgage_balance)}  |  "
        f"Borrow: {_usd(inputs.borrow_amount)}",
        f"Available equity ({cfg.MAX_LTV:.0%} LTV): {_usd(d['available_equity'])}",
    ]
    for p in params:
        fig.text(0.10, y, p, fontsize=9, color=TEXT2)
        y -= 0.024
    if d["exceeds_equity"]:
        fig.text(0.10, y, "Amount to borrow exceeds available equity.",
                 fontsize=9, color=AMBER)
        y -= 0.024

    y -= 0.025
    fig.text(0.08, y,
             f"Home Equity Loan: {d['loan_rate']:.2f}% fixed, "
             f"{d['loan_term_years']} years",
             fontsize=13, color=LOAN_COLOR, fontweight="bold")
    y -= 0.028
    for line in [
        f"Monthly payment: {_usd(d['loan_monthly'])}",
        f"Total paid: {_usd(d['loan_total_paid'])}",
        f"Total interest: {_usd(d['loan_total_interest'])}",
    ]:
        fig.text(0.10, y, line, fontsize=9.5, color=TEXT2)
        y -= 0.024

    y -= 0.025
    fig.text(0.08, y,
             f"HELOC: {d['heloc_rate']:.2f}% variable, "
             f"{d['heloc_draw_years']}-year draw",
             fontsize=13, color=HELOC_COLOR, fontweight="bold")
    y -= 0.028
    for line in [
        f"Interest-only payment: {_usd(d['heloc_monthly'])}/mo",
        f"Total paid (incl. principal): {_usd(d['heloc_total_paid'])}",
        f"Total interest: {_usd(d['heloc_total_interest'])}",
    ]:
        fig.text(0.10, y, line, fontsize=9.5, color=TEXT2)
        y -= 0.024

    # Verdict
    y -= 0.03
    color = LOAN_COLOR if d["cheaper_option"] == "loan" else HELOC_COLOR
    fig.text(0.08, y, f"Lower total interest: {d['cheaper_label']}",
             fontsize=14, color=color, fontweight="bold")
    y -= 0.026
    fig.text(0.08, y, f"by {_usd(d['cost_difference'])}",
             fontsize=10, color=TEXT2)
    y -= 0.034
    text = summary_text.replace("$", "\\$")
    fig.text(0.08, y, text, fontsize=9, color=TEXT2, va="top", wrap=True)

    # Tips and disclaimer
    y = 0.26
    fig.text(0.08, y, "Key Considerations", fontsize=12, color=TEXT, fontweight="bold")
    y -= 0.026
    for tip in d["tips"]:
        fig.text(0.10, y, f"• {tip}", fontsize=9, color=TEXT2)
        y -= 0.022
    fig.text(0.08, 0.06, d["disclaimer"], fontsize=7, color=SLATE,
             va="bottom", wrap=True)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 2: Interest and balance over time
# ═══════════════════════════════════════════════════════════════════

def _page2_paths(paths: CostPaths, d: Dict, figsize=(A4W, A4H * 0.75)) -> plt.Figure:
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=figsize, constrained_layout=True)
    _style(fig, ax1, ax2)
    years = paths.years

    ax1.plot(years, paths.loan_cum_interest, color=LOAN_COLOR, linewidth=2.2,
             label="Home equity loan", solid_capstyle="round")
    ax1.plot(years, paths.heloc_cum_interest, color=HELOC_COLOR, linewidth=2.2,
             label="HELOC (interest-only)", solid_capstyle="round")
    ax1.yaxis.set_major_formatter(USD_FMT)
    ax1.set_ylabel("Cumulative interest")
    ax1.set_title("Interest Paid Over Time", fontsize=12, pad=10)
    _legend(ax1)

    ax2.plot(years, paths.loan_balance, color=LOAN_COLOR, linewidth=2.2,
             label="Loan balance")
    ax2.fill_between(years, paths.loan_balance, alpha=0.1, color=LOAN_COLOR)
    ax2.plot(years, paths.heloc_balance, color=HELOC_COLOR, linewidth=2.2,
             linestyle="--", label="HELOC balance")
    ax2.axvline(d["heloc_draw_years"], color=SLATE, linewidth=1, linestyle=":")
    ax2.text(d["heloc_draw_years"], ax2.get_ylim()[1] * 0.95, " draw period ends",
             fontsize=8, color=SLATE, va="top")
    ax2.yaxis.set_major_formatter(USD_FMT)
    ax2.set_xlabel("Years")
    ax2.set_ylabel("Balance owed")
    ax2.set_title("Balance Owed", fontsize=12, pad=10)
    _legend(ax2, loc="lower left")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 3: Total cost comparison
# ═══════════════════════════════════════════════════════════════════

def _chart_total_cost(d: Dict, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Stacked principal + interest bars for each option."""
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    labels = [f"Home Equity Loan\n({d['loan_term_years']}yr)",
              f"HELOC\n({d['heloc_draw_years']}yr draw)"]
    principal = np.array([d["borrow_amount"], d["borrow_amount"]], dtype=float)
    interest = np.array([d["loan_total_interest"], d["heloc_total_interest"]], dtype=float)
    colors = [LOAN_COLOR, HELOC_COLOR]
    x = np.arange(2)

    ax.bar(x, principal, color=SLATE, alpha=0.35, width=0.5, label="Principal")
    ax.bar(x, interest, bottom=principal, color=colors, width=0.5, label="Interest")

    for i in range(2):
        total = principal[i] + interest[i]
        if np.isfinite(total):
            ax.annotate(_usd(total), xy=(x[i], total), fontsize=10, color=colors[i],
                        fontweight="bold", ha="center",
                        xytext=(0, 6), textcoords="offset points")

    winner_color = LOAN_COLOR if d["cheaper_option"] == "loan" else HELOC_COLOR
    ax.text(
        0.02, 0.97,
        f"{d['cheaper_label']} saves {_usd(d['cost_difference'])} in interest",
        transform=ax.transAxes, fontsize=10, color=winner_color,
        fontweight="bold", va="top",
        bbox=dict(boxstyle="round,pad=0.4", facecolor=BG,
                  edgecolor=winner_color, alpha=0.92),
    )

    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.yaxis.set_major_formatter(USD_FMT)
    ax.set_ylabel("Total paid")
    ax.set_title("Total Cost Comparison", fontsize=13, pad=12)
    _legend(ax, loc="upper right")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 4: HELOC rate sweep
# ═══════════════════════════════════════════════════════════════════

def _chart_rate_sweep(sweep: RateSweepResult, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """HELOC total interest at each tested rate against the fixed loan."""
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    rates = np.array([r.heloc_rate for r in sweep.rows], dtype=float)
    totals = np.array([r.heloc_total_interest for r in sweep.rows], dtype=float)
    colors = [LOAN_COLOR if r.cheaper_option == "loan" else HELOC_COLOR
              for r in sweep.rows]

    width = 0.8 * (rates[1] - rates[0]) if len(rates) > 1 else 0.4
    ax.bar(rates, totals, width=width, color=colors, alpha=0.85)

    if sweep.rows:
        loan_interest = sweep.rows[0].loan_total_interest
        ax.axhline(loan_interest, color=LOAN_COLOR, linewidth=1.6, linestyle="--",
                   label=f"Loan interest at {sweep.loan_rate:.2f}%: {_usd(loan_interest)}")

    if sweep.breakeven_rate is not None:
        ax.axvline(sweep.breakeven_rate, color=EMERALD, linewidth=1.2, linestyle=":")
        ax.annotate(
            f"Loan cheaper from\n{sweep.breakeven_rate:.1f}% HELOC rate",
            xy=(sweep.breakeven_rate, ax.get_ylim()[1] * 0.85), fontsize=8,
            color=EMERALD, xytext=(10, 0), textcoords="offset points",
            bbox=dict(boxstyle="round,pad=0.3", facecolor=BG,
                      edgecolor=EMERALD, alpha=0.9),
        )

    ax.xaxis.set_major_formatter(PCT_FMT)
    ax.yaxis.set_major_formatter(USD_FMT)
    ax.set_xlabel("HELOC rate")
    ax.set_ylabel("HELOC total interest (draw period)")
    ax.set_title("At What HELOC Rate Does the Loan Win?", fontsize=13, pad=12)
    _legend(ax, loc="upper left")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=120, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def generate_pdf(
    inputs: EquityInputs,
    result: ComparisonResult,
    sweep: Optional[RateSweepResult],
    d: Dict[str, Any],
    summary_text: str,
    path: str = cfg.REPORT_PATH,
) -> str:
    """Generate the full PDF report. Returns the file path."""
    paths = cost_paths(inputs)
    pages = [
        _page1_summary(inputs, d, summary_text),
        _page2_paths(paths, d),
        _chart_total_cost(d, figsize=(A4W, A4H * 0.5)),
    ]
    if sweep is not None:
        pages.append(_chart_rate_sweep(sweep, figsize=(A4W, A4H * 0.5)))

    try:
        with PdfPages(path) as pdf:
            for fig in pages:
                pdf.savefig(fig, facecolor=fig.get_facecolor())
    finally:
        for fig in pages:
            plt.close(fig)
    logger.info("Wrote %d-page report to %s (cheaper: %s)",
                len(pages), path, result.cheaper_option)
    return path


def get_web_charts(
    inputs: EquityInputs,
    sweep: Optional[RateSweepResult],
    d: Dict[str, Any],
) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns up to 3 charts:
      [0] Interest & balance over time
      [1] Total cost comparison
      [2] HELOC rate sweep (only when a sweep was run)
    """
    chart_figs = [
        _page2_paths(cost_paths(inputs), d, figsize=(WEB_W, WEB_H + 3)),
        _chart_total_cost(d, figsize=(WEB_W, WEB_H)),
    ]
    if sweep is not None:
        chart_figs.append(_chart_rate_sweep(sweep, figsize=(WEB_W, WEB_H)))

    try:
        return [figure_to_base64(f) for f in chart_figs]
    finally:
        for f in chart_figs:
            plt.close(f)
