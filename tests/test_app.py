"""
Tests for the Flask routes (app.py).
"""

import threading
import types

import app as webapp


FORM = {
    "home_value": "450000",
    "mortgage_balance": "250000",
    "borrow_amount": "50000",
    "loan_rate": "8.5",
    "heloc_rate": "9",
}


def test_get_renders_form_with_defaults(client):
    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Home Equity Loan vs HELOC Calculator" in html
    assert 'value="450000"' in html
    assert "$110,000" in html
    assert "cheaper-option" not in html


def test_post_renders_comparison_and_saves_report(client, report_path):
    resp = client.post("/", data=FORM)
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Lower Total Interest" in html
    assert 'id="cheaper-option">Home Equity Loan<' in html
    assert "$492" in html
    assert "$375/mo" in html
    assert "data:image/png;base64," in html
    assert "more than your available" not in html
    assert report_path.exists()


def test_post_warns_when_borrowing_beyond_equity(client):
    resp = client.post("/", data=dict(FORM, borrow_amount="200000"))
    assert resp.status_code == 200
    assert "more than your available" in resp.get_data(as_text=True)


def test_post_with_blank_field_reads_zero(client):
    resp = client.post("/", data=dict(FORM, heloc_rate=""))
    assert resp.status_code == 200
    # A 0% HELOC costs nothing in interest
    assert 'id="cheaper-option">HELOC<' in resp.get_data(as_text=True)


def test_parse_form_missing_fields_take_defaults():
    inputs = webapp.parse_form({"borrow_amount": "$75,000"})
    assert inputs.borrow_amount == 75_000
    assert inputs.home_value == 450_000
    assert inputs.heloc_rate == 9.0


def test_download_before_any_report_is_404(client):
    resp = client.get("/download-pdf")
    assert resp.status_code == 404


def test_download_after_comparison_returns_pdf(client):
    client.post("/", data=FORM)
    resp = client.get("/download-pdf")
    assert resp.status_code == 200
    assert resp.data[:4] == b"%PDF"
    assert "home_equity_report.pdf" in resp.headers["Content-Disposition"]
    resp.close()


def test_post_with_overflowing_home_value_reads_zero(client):
    resp = client.post("/", data=dict(FORM, home_value="1" + "0" * 400))
    assert resp.status_code == 200
    # No home value means no equity to borrow against
    assert "more than your available" in resp.get_data(as_text=True)


def test_post_with_huge_borrow_amount_still_renders(client, report_path):
    resp = client.post("/", data=dict(FORM, borrow_amount="99999999999999999999"))
    assert resp.status_code == 200
    assert "more than your available" in resp.get_data(as_text=True)
    assert report_path.read_bytes()[:4] == b"%PDF"


def test_run_web_uses_given_report_path(monkeypatch, tmp_path):
    started = {}
    monkeypatch.setattr(webapp.app, "run", lambda **kw: started.update(kw))
    monkeypatch.setattr(threading, "Timer",
                        lambda *a, **kw: types.SimpleNamespace(start=lambda: None))
    monkeypatch.setattr(webapp, "PDF_PATH", webapp.PDF_PATH)

    target = str(tmp_path / "served.pdf")
    webapp.run_web(debug=False, pdf_path=target)

    assert webapp.PDF_PATH == target
    assert started["debug"] is False
