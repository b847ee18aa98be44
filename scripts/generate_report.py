#!/usr/bin/env python3
"""
Sales Report Script

Fetches the complete sale history from the REST API, aggregates it, and writes
the sales report to the reports directory.

Usage:
    python generate_report.py --token <access-token>
    python generate_report.py --token <access-token> --format html
    python generate_report.py --token <access-token> --now 2024-03-15T10:00:00 --output-dir ./out
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import load_settings
from services.report_export import build_html_artifact, build_pdf_artifact, save_artifact
from services.report_renderer import format_currency
from services.report_service import build_report
from services.sale_source import HttpSaleSource, SaleFetchError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a sales report from the Vetra POS API")
    parser.add_argument("--token", required=True, help="Bearer token of the shop owner")
    parser.add_argument("--api-url", help="API base URL (defaults to VETRA_API_URL)")
    parser.add_argument("--format", choices=["pdf", "html"], default="pdf", help="Output format")
    parser.add_argument("--output-dir", type=Path, help="Directory to write to (defaults to VETRA_REPORTS_DIR)")
    parser.add_argument("--now", type=datetime.fromisoformat, help="Report clock, ISO-8601 (defaults to now)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    source = HttpSaleSource(
        api_url=args.api_url or settings.api_url,
        access_token=args.token,
        timeout=settings.http_timeout,
        tz=settings.tz,
    )

    try:
        report = build_report(source, now=args.now, tz=settings.tz)
    except SaleFetchError as e:
        print(f"[ERROR] {e}")
        return 1

    if args.format == "html":
        artifact = build_html_artifact(report, settings)
    else:
        artifact = build_pdf_artifact(report, settings)

    path = save_artifact(artifact, args.output_dir or settings.reports_dir)

    aggregate = report.aggregate
    print(f"[SUCCESS] Report written to {path}")
    print(f"  Sales considered: {report.sale_count}")
    print(f"  Daily:   {format_currency(aggregate.daily_total, settings.currency_symbol)}")
    print(f"  Weekly:  {format_currency(aggregate.weekly_total, settings.currency_symbol)}")
    print(f"  Monthly: {format_currency(aggregate.monthly_total, settings.currency_symbol)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
