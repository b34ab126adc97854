"""
Entry point for the Home Equity Loan vs HELOC calculator.

Usage:
    python main.py          # launches the web app at localhost:5000
    python main.py --cli    # runs the terminal interface
"""

import argparse
import logging


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Home Equity Loan vs HELOC Calculator",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--pdf",
        default=None,
        help="Where to write the PDF report (default: HELOC_REPORT_PATH or home_equity_report.pdf)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cli:
        from cli import run_cli
        if args.pdf:
            run_cli(pdf_path=args.pdf)
        else:
            run_cli()
    else:
        from app import run_web
        run_web(pdf_path=args.pdf)


if __name__ == "__main__":
    main()
