"""
Flask web application for the Home Equity Loan vs HELOC calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from flask import Flask, render_template_string, request, send_file

import config as cfg
from calculator import EquityInputs, available_equity, compare, rate_sweep
from cli import (
    compute_display_data,
    generate_summary_text,
    fmt,
    parse_decimal,
    parse_whole,
    pct,
)
import report

logger = logging.getLogger(__name__)

app = Flask(__name__)

PDF_PATH = cfg.REPORT_PATH

# ═══════════════════════════════════════════════════════════════════
# Form parsing
# ═══════════════════════════════════════════════════════════════════

DEFAULT_VALUES: Dict[str, Any] = {
    "home_value": cfg.DEFAULT_HOME_VALUE,
    "mortgage_balance": cfg.DEFAULT_MORTGAGE_BALANCE,
    "borrow_amount": cfg.DEFAULT_BORROW_AMOUNT,
    "loan_rate": cfg.DEFAULT_LOAN_RATE,
    "heloc_rate": cfg.DEFAULT_HELOC_RATE,
}


def parse_form(form: dict) -> EquityInputs:
    """Parse the HTML form into EquityInputs.

    Missing fields take the defaults; fields present but blank or
    unparseable become 0.
    """
    def whole(name: str) -> int:
        return parse_whole(form.get(name, DEFAULT_VALUES[name]))

    def decimal(name: str) -> float:
        return parse_decimal(form.get(name, DEFAULT_VALUES[name]))

    return EquityInputs(
        home_value=whole("home_value"),
        mortgage_balance=whole("mortgage_balance"),
        borrow_amount=whole("borrow_amount"),
        loan_rate=decimal("loan_rate"),
        heloc_rate=decimal("heloc_rate"),
    )


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Home Equity Loan vs HELOC Calculator</title>
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800&display=swap" rel="stylesheet">
<style>
  *{margin:0;padding:0;box-sizing:border-box}
  html{scroll-behavior:smooth}

  :root{
    --bg-deep:#050816;
    --bg-surface:rgba(15,23,42,0.55);
    --bg-input:rgba(8,11,22,0.85);
    --border-subtle:rgba(56,189,248,0.1);
    --border-hover:rgba(56,189,248,0.25);
    --text-primary:#f1f5f9;
    --text-secondary:#94a3b8;
    --text-muted:#64748b;
    --sky:#38bdf8;
    --sky-deep:#0ea5e9;
    --amber:#fbbf24;
    --emerald:#34d399;
    --emerald-deep:#10b981;
    --radius-lg:16px;
    --radius-md:10px;
  }

  body{
    background:var(--bg-deep);color:var(--text-primary);
    font-family:'Inter',system-ui,-apple-system,sans-serif;
    line-height:1.6;min-height:100vh;overflow-x:hidden;
  }

  .container{max-width:980px;margin:0 auto;padding:2rem 1.5rem;position:relative;z-index:1}

  /* ── hero header ── */
  .hero{text-align:center;padding:1.5rem 0 2.5rem}
  .hero h1{
    font-size:clamp(1.5rem,4vw,2.3rem);font-weight:800;
    letter-spacing:-.035em;line-height:1.15;
    background:linear-gradient(135deg,#e2e8f0 0%,#38bdf8 50%,#fbbf24 100%);
    -webkit-background-clip:text;-webkit-text-fill-color:transparent;
    background-clip:text;
  }
  .hero-sub{color:var(--text-secondary);margin-top:.6rem;font-size:1rem}

  /* ── glass cards ── */
  .card{
    background:var(--bg-surface);
    backdrop-filter:blur(24px);-webkit-backdrop-filter:blur(24px);
    border:1px solid var(--border-subtle);
    border-radius:var(--radius-lg);padding:1.8rem;
    margin-bottom:1.4rem;position:relative;overflow:hidden;
    transition:border-color .3s,box-shadow .3s;
  }
  .card:hover{border-color:var(--border-hover)}
  .accent-left{border-left:4px solid var(--sky)}

  h2{font-size:1.1rem;font-weight:700;color:var(--text-primary);letter-spacing:-.015em;margin-bottom:1rem}

  /* ── form ── */
  .form-grid{display:grid;grid-template-columns:1fr 1fr;gap:1rem 1.5rem}
  .form-group{display:flex;flex-direction:column}
  .form-group.full{grid-column:1/-1}
  .form-group label{
    font-size:.78rem;color:var(--text-secondary);margin-bottom:.3rem;
    font-weight:500;letter-spacing:.02em;
  }
  .form-group input{
    background:var(--bg-input);
    border:1px solid rgba(71,85,105,.35);border-radius:var(--radius-md);
    color:var(--text-primary);padding:.6rem .85rem;font-size:.88rem;font-family:inherit;
  }
  .form-group input:focus{outline:none;border-color:var(--sky-deep);box-shadow:0 0 0 3px rgba(14,165,233,.12)}
  .hint{font-size:.75rem;color:var(--text-muted);margin-top:.25rem}

  .btn{
    display:inline-flex;align-items:center;justify-content:center;gap:.5rem;
    padding:.75rem 2rem;border:none;border-radius:var(--radius-md);
    font-size:.95rem;font-weight:600;cursor:pointer;font-family:inherit;
    text-decoration:none;transition:transform .2s,box-shadow .3s;
  }
  .btn:hover{transform:translateY(-2px)}
  .btn-primary{background:linear-gradient(135deg,var(--sky-deep),#6366f1);color:#fff}
  .btn-success{background:linear-gradient(135deg,var(--emerald-deep),var(--emerald));color:#fff}

  /* ── results ── */
  .result-label{font-size:.8rem;color:var(--text-secondary);text-transform:uppercase;letter-spacing:.05em;font-weight:600}
  .result-hero{font-size:2.4rem;font-weight:800;color:var(--sky);font-variant-numeric:tabular-nums}
  .result-value{font-size:1.3rem;font-weight:700;font-variant-numeric:tabular-nums}
  .result-divider{border:none;border-top:1px solid rgba(51,65,85,.4);margin:1.2rem 0}
  .split{display:grid;grid-template-columns:1fr 1fr;gap:1rem;text-align:center}
  .split > div + div{border-left:1px solid rgba(56,189,248,.25)}
  .text-center{text-align:center}
  .tag-loan{color:var(--sky)}
  .tag-heloc{color:var(--amber)}
  .tag-win{color:var(--emerald)}

  .warning{
    background:rgba(245,158,11,.06);border:1px solid rgba(245,158,11,.18);
    border-radius:var(--radius-md);padding:.75rem 1rem;margin-top:1rem;
    font-size:.84rem;color:#fcd34d;
  }
  .summary{color:var(--text-secondary);line-height:1.75;font-size:.9rem;margin-top:1rem}

  /* ── tables ── */
  .table-wrap{overflow-x:auto;border-radius:var(--radius-md);border:1px solid rgba(51,65,85,.25)}
  table{width:100%;border-collapse:collapse;font-size:.9rem}
  th{
    text-align:left;padding:.65rem .8rem;background:rgba(15,23,42,.45);
    color:var(--text-secondary);font-weight:600;font-size:.76rem;
    text-transform:uppercase;letter-spacing:.05em;
  }
  td{padding:.6rem .8rem;border-bottom:1px solid rgba(51,65,85,.15)}
  td.num{text-align:right;font-weight:600;font-variant-numeric:tabular-nums}
  tr.total-row td{background:rgba(56,189,248,.07);font-weight:600;color:var(--sky)}
  tr.breakeven-row td{background:rgba(16,185,129,.07);font-weight:600}

  ul.tips{list-style:none;display:grid;gap:.6rem}
  ul.tips li{display:flex;align-items:center;gap:.7rem;color:var(--text-secondary);font-size:.93rem}
  ul.tips li::before{content:'';width:6px;height:6px;border-radius:50%;background:var(--sky);flex-shrink:0}

  .chart-img{width:100%;border-radius:var(--radius-md);border:1px solid rgba(51,65,85,.15)}
  .chart-desc{color:var(--text-muted);font-size:.82rem;margin-bottom:.8rem}
  .disclaimer{max-width:620px;margin:0 auto 1.5rem;font-size:.84rem;color:var(--text-secondary);line-height:1.6}
  .dl-section{text-align:center;padding:1rem 0 2rem}
  .footer{text-align:center;padding:1.5rem 0 2rem;color:var(--text-muted);font-size:.8rem;border-top:1px solid rgba(51,65,85,.3)}

  @media(max-width:640px){
    .container{padding:1rem}
    .card{padding:1.2rem}
    .form-grid,.split{grid-template-columns:1fr}
    .split > div + div{border-left:none}
  }
</style>
</head>
<body>
<div class="container">

<header class="hero">
  <h1>Home Equity Loan vs HELOC Calculator</h1>
  <p class="hero-sub">Compare estimated costs of each option</p>
</header>

<!-- Input Form -->
<div class="card">
  <form method="POST" id="equity-form">
    <div class="form-grid">
      <div class="form-group">
        <label for="home_value">Home Value ($)</label>
        <input id="home_value" type="number" name="home_value"
               min="{{ bounds.home[0] }}" max="{{ bounds.home[1] }}" step="{{ bounds.home[2] }}"
               value="{{ v.home_value or '' }}" placeholder="{{ defaults.home_value }}">
      </div>
      <div class="form-group">
        <label for="mortgage_balance">Mortgage Balance ($)</label>
        <input id="mortgage_balance" type="number" name="mortgage_balance"
               min="{{ bounds.balance[0] }}" max="{{ bounds.balance[1] }}" step="{{ bounds.balance[2] }}"
               value="{{ v.mortgage_balance or '' }}" placeholder="{{ defaults.mortgage_balance }}">
      </div>
      <div class="form-group full">
        <label for="borrow_amount">Amount to Borrow ($)</label>
        <input id="borrow_amount" type="number" name="borrow_amount"
               min="{{ bounds.borrow[0] }}" max="{{ bounds.borrow[1] }}" step="{{ bounds.borrow[2] }}"
               value="{{ v.borrow_amount or '' }}" placeholder="{{ defaults.borrow_amount }}">
        <div class="hint">Available equity ({{ ltv_pct }} LTV): {{ fmt(equity) }}</div>
      </div>
      <div class="form-group">
        <label for="loan_rate">Loan Interest Rate (%)</label>
        <input id="loan_rate" type="number" name="loan_rate"
               min="{{ bounds.rate[0] }}" max="{{ bounds.rate[1] }}" step="{{ bounds.rate[2] }}"
               value="{{ v.loan_rate or '' }}" placeholder="{{ defaults.loan_rate }}">
      </div>
      <div class="form-group">
        <label for="heloc_rate">HELOC Interest Rate (%)</label>
        <input id="heloc_rate" type="number" name="heloc_rate"
               min="{{ bounds.rate[0] }}" max="{{ bounds.rate[1] }}" step="{{ bounds.rate[2] }}"
               value="{{ v.heloc_rate or '' }}" placeholder="{{ defaults.heloc_rate }}">
      </div>
    </div>
    <div style="margin-top:1.2rem">
      <button type="submit" class="btn btn-primary" id="submit-btn">Compare Options</button>
    </div>
  </form>
</div>

{% if d %}
<!-- ═══════════════════════════════════════════════════════════ -->
<!-- RESULTS                                                     -->
<!-- ═══════════════════════════════════════════════════════════ -->

<div class="card">
  <div class="text-center">
    <div class="result-label">Home Equity Loan Monthly Payment</div>
    <div class="result-hero">{{ fmt(d.loan_monthly) }}</div>
    <div class="hint">fixed for {{ d.loan_term_years }} years</div>
  </div>
  <hr class="result-divider">
  <div class="split">
    <div>
      <div class="result-label">HELOC Interest-Only</div>
      <div class="result-value tag-heloc">{{ fmt(d.heloc_monthly) }}/mo</div>
    </div>
    <div>
      <div class="result-label">Lower Total Interest</div>
      <div class="result-value tag-win" id="cheaper-option">{{ d.cheaper_label }}</div>
    </div>
  </div>
  {% if d.exceeds_equity %}
  <div class="warning">
    &#9888; The amount to borrow ({{ fmt(d.borrow_amount) }}) is more than your available
    equity ({{ fmt(d.available_equity) }}). Lenders typically cap combined borrowing at
    {{ ltv_pct }} of your home's value.
  </div>
  {% endif %}
  <p class="summary">{{ summary_text }}</p>
</div>

<div class="card accent-left">
  <h2>Key Considerations</h2>
  <ul class="tips">
    {% for tip in d.tips %}<li>{{ tip }}</li>{% endfor %}
  </ul>
</div>

<div class="card">
  <h2>Cost Comparison</h2>
  <div class="table-wrap">
    <table>
      <tbody>
        {% for row in d.breakdown %}
        <tr class="{{ 'total-row' if row.is_total }}">
          <td>{{ row.label }}</td>
          <td class="num">{{ fmt(row.value) }}</td>
        </tr>
        {% endfor %}
      </tbody>
    </table>
  </div>
</div>

{% if d.sweep %}
<div class="card">
  <h2>At What HELOC Rate Does the Loan Win?</h2>
  <p class="chart-desc">
    Your loan stays fixed at {{ pct(d.sweep.loan_rate) }} ({{ fmt(d.loan_total_interest) }} total interest).
    {% if d.breakeven_rate is not none %}
      From a HELOC rate of <strong>{{ pct(d.breakeven_rate, 1) }}</strong> upward the loan costs less.
    {% else %}
      No tested HELOC rate makes the loan cheaper.
    {% endif %}
  </p>
  <div class="table-wrap">
    <table>
      <thead>
        <tr><th>HELOC rate</th><th>Interest/mo</th><th>HELOC total</th><th>Cheaper</th><th>By</th></tr>
      </thead>
      <tbody>
        {% for r in d.sweep.rows %}
        <tr class="{{ 'breakeven-row' if r.heloc_rate == d.breakeven_rate }}">
          <td>{{ pct(r.heloc_rate, 1) }}</td>
          <td>{{ fmt(r.heloc_monthly_interest) }}</td>
          <td>{{ fmt(r.heloc_total_interest) }}</td>
          <td class="{{ 'tag-loan' if r.cheaper_option == 'loan' else 'tag-heloc' }}">{{ r.cheaper_option }}</td>
          <td>{{ fmt(r.advantage) }}</td>
        </tr>
        {% endfor %}
      </tbody>
    </table>
  </div>
</div>
{% endif %}

{% for chart in charts %}
<div class="card">
  <img class="chart-img" src="data:image/png;base64,{{ chart }}" alt="{{ chart_titles[loop.index0] }}">
</div>
{% endfor %}

<div class="dl-section">
  <a href="/download-pdf" class="btn btn-success">Download PDF Report</a>
</div>
{% endif %}

<p class="disclaimer">{{ disclaimer }}</p>

<footer class="footer">
  Estimates only &middot; Simplified assumptions &middot; Free to use
</footer>
</div>
</body>
</html>
"""

CHART_TITLES = [
    "Interest paid and balance owed over time",
    "Total cost comparison",
    "HELOC rate sweep",
]


def _render(values: Dict[str, Any], d=None, charts=None, summary_text: str = ""):
    equity = available_equity(values["home_value"], values["mortgage_balance"])
    return render_template_string(
        HTML_TEMPLATE,
        v=values,
        defaults=DEFAULT_VALUES,
        bounds={
            "home": cfg.HOME_VALUE_BOUNDS,
            "balance": cfg.MORTGAGE_BALANCE_BOUNDS,
            "borrow": cfg.BORROW_AMOUNT_BOUNDS,
            "rate": cfg.RATE_BOUNDS,
        },
        ltv_pct=f"{cfg.MAX_LTV:.0%}",
        equity=equity,
        d=d,
        charts=charts or [],
        chart_titles=CHART_TITLES,
        summary_text=summary_text,
        disclaimer=cfg.DISCLAIMER,
        fmt=fmt,
        pct=pct,
    )


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        return _render(dict(DEFAULT_VALUES))

    # POST: compute the comparison
    inputs = parse_form(request.form.to_dict())
    values = {
        "home_value": inputs.home_value,
        "mortgage_balance": inputs.mortgage_balance,
        "borrow_amount": inputs.borrow_amount,
        "loan_rate": inputs.loan_rate,
        "heloc_rate": inputs.heloc_rate,
    }

    result = compare(inputs)
    sweep = rate_sweep(inputs)
    d = compute_display_data(inputs, result, sweep)
    summary_text = generate_summary_text(d)
    logger.info("Compared borrow=%s loan=%.3f%% heloc=%.3f%% -> %s by %s",
                inputs.borrow_amount, inputs.loan_rate, inputs.heloc_rate,
                result.cheaper_option, result.cost_difference)

    chart_images = report.get_web_charts(inputs, sweep, d)

    # Save PDF for download
    report.generate_pdf(inputs, result, sweep, d, summary_text, PDF_PATH)

    return _render(values, d=d, charts=chart_images, summary_text=summary_text)


@app.route("/download-pdf")
def download_pdf():
    if os.path.exists(PDF_PATH):
        return send_file(os.path.abspath(PDF_PATH), as_attachment=True,
                         download_name="home_equity_report.pdf")
    logger.warning("PDF requested before any report was generated (%s)", PDF_PATH)
    return "No report generated yet. Run a comparison first.", 404


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = cfg.DEBUG, pdf_path: str | None = None) -> None:
    """Start the Flask development server and open browser.

    ``pdf_path`` overrides where POSTed comparisons save their report.
    """
    import webbrowser
    import threading

    global PDF_PATH
    if pdf_path:
        PDF_PATH = pdf_path

    url = f"http://{cfg.HOST}:{cfg.PORT}"
    logger.info("Starting web app at %s", url)
    threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=cfg.HOST, port=cfg.PORT, debug=debug)


if __name__ == "__main__":
    run_web()
