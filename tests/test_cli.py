"""
Tests for formatting, input sanitisation and display data (cli.py).
"""

import builtins
import re

import pytest

import cli
from calculator import compare, rate_sweep


# --- Formatting ---

def test_fmt_whole_dollars():
    assert cli.fmt(1234.4) == "$1,234"
    assert cli.fmt(110_000) == "$110,000"
    assert cli.fmt(0) == "$0"


def test_fmt_negative_and_non_finite():
    assert cli.fmt(-500) == "-$500"
    assert cli.fmt(float("nan")) == "n/a"
    assert cli.fmt(float("inf")) == "n/a"


def test_pct():
    assert cli.pct(8.5) == "8.50%"
    assert cli.pct(8.0, 1) == "8.0%"


# --- Sanitisation ---

@pytest.mark.parametrize("raw, expected", [
    ("450000", 450_000),
    ("$450,000", 450_000),
    ("12.9", 12),
    ("1e5", 1),
    ("  250000 ", 250_000),
    ("", 0),
    ("abc", 0),
    ("-5000", 0),
    ("1 2", 1),
    ("$ 450,000 ", 450_000),
    ("1" + "0" * 400, 0),
    (None, 0),
    (50_000, 50_000),
])
def test_parse_whole(raw, expected):
    assert cli.parse_whole(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("8.5", 8.5),
    ("9%", 9.0),
    (".5", 0.5),
    ("7.125abc", 7.125),
    ("", 0),
    ("rate", 0),
    ("-1", 0),
    ("1e999", 0),
    ("8 .5", 8.0),
    (9.0, 9.0),
])
def test_parse_decimal(raw, expected):
    assert cli.parse_decimal(raw) == expected


# --- Display data ---

def test_compute_display_data(default_inputs):
    result = compare(default_inputs)
    sweep = rate_sweep(default_inputs)
    d = cli.compute_display_data(default_inputs, result, sweep)

    assert d["loan_monthly"] == 492.0
    assert d["heloc_monthly"] == 375.0
    assert d["cheaper_option"] == "loan"
    assert d["cheaper_label"] == "Home Equity Loan"
    assert d["breakeven_rate"] == 8.0
    assert d["max_swept_rate"] == 14.0
    assert d["exceeds_equity"] is False

    labels = [row["label"] for row in d["breakdown"]]
    assert labels == ["Home Equity Loan (15yr)", "HELOC (10yr draw)", "Estimated Difference"]
    assert d["breakdown"][0]["value"] == result.loan_total_paid
    assert d["breakdown"][1]["value"] == 95_000.0
    assert d["breakdown"][2]["value"] == result.cost_difference
    assert d["breakdown"][2]["is_total"] is True


def test_compute_display_data_without_sweep(default_inputs):
    d = cli.compute_display_data(default_inputs, compare(default_inputs))
    assert d["sweep"] is None
    assert d["breakeven_rate"] is None
    assert d["max_swept_rate"] is None


def test_summary_text_loan_wins(default_inputs):
    d = cli.compute_display_data(default_inputs, compare(default_inputs),
                                 rate_sweep(default_inputs))
    text = cli.generate_summary_text(d)
    assert text.startswith("The Home Equity Loan costs")
    assert "$375/mo" in text
    assert "8.0%" in text


def test_summary_text_heloc_wins(default_inputs):
    default_inputs.loan_rate = 20.0
    d = cli.compute_display_data(default_inputs, compare(default_inputs),
                                 rate_sweep(default_inputs))
    text = cli.generate_summary_text(d)
    assert text.startswith("The HELOC costs")
    assert "No HELOC rate up to 14.0%" in text


# --- CLI run ---

def test_run_cli_with_defaults(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(builtins, "input", lambda prompt="": "")
    pdf = tmp_path / "cli_report.pdf"

    cli.run_cli(pdf_path=str(pdf))

    out = capsys.readouterr().out
    assert "YOUR HOME" in out
    assert "$110,000" in out
    assert "COST COMPARISON" in out
    assert "Home Equity Loan" in out
    assert "HELOC RATE SWEEP" in out
    assert pdf.exists()
    assert pdf.read_bytes()[:4] == b"%PDF"


def test_run_cli_sanitises_typed_values(monkeypatch, tmp_path, capsys):
    answers = iter(["500000", "300000", "abc", "", ""])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))

    cli.run_cli(pdf_path=str(tmp_path / "r.pdf"))

    out = capsys.readouterr().out
    assert "Read as 0." in out
    # Nothing borrowed: both totals are zero and the tie goes to the loan
    assert re.search(r"Amount to borrow\s+\$0\s", out)
    assert re.search(r"Lower total interest\s+Home Equity Loan", out)
