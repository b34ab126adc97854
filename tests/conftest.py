"""
Shared test fixtures: default inputs, Flask test client, temporary report path.
"""

import pytest

import app as webapp
from calculator import EquityInputs


@pytest.fixture
def default_inputs():
    """The form's starting values: $450k home, $250k owed, borrow $50k."""
    return EquityInputs(
        home_value=450_000,
        mortgage_balance=250_000,
        borrow_amount=50_000,
        loan_rate=8.5,
        heloc_rate=9.0,
    )


@pytest.fixture
def report_path(tmp_path, monkeypatch):
    """Point the web app's PDF output at a temp file."""
    path = tmp_path / "report.pdf"
    monkeypatch.setattr(webapp, "PDF_PATH", str(path))
    return path


@pytest.fixture
def client(report_path):
    """Flask test client writing reports to a temp file."""
    webapp.app.config["TESTING"] = True
    with webapp.app.test_client() as c:
        yield c
