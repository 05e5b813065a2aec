#!/usr/bin/env python3
"""CLI script to price an intake form from a JSON file.

Usage:
    python scripts/quote.py intake.json
    python scripts/quote.py intake.json --format email --brand "Tessara Systems"
    cat intake.json | python scripts/quote.py - --format json

The intake file uses the same camelCase fields as the API
(companyName, industry, employeeCount, channels, integrations, ...).
No database or network access is needed.
"""

from __future__ import annotations

import argparse
import json
import os
import sys

# Ensure project root is on sys.path so we can import src.app
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pydantic import ValidationError  # noqa: E402

FORMATS = ("internal", "sms", "email", "proposal", "json")


def render(raw: dict, fmt: str, brand: str) -> str:
    """Price a raw intake dict and return the requested rendering."""
    from src.app.pricing import PricingInput, calculate_quote
    from src.app.pricing import formatters

    data = PricingInput.model_validate(raw)
    output = calculate_quote(data)

    if fmt == "json":
        return json.dumps(
            {
                "input": data.model_dump(mode="json", by_alias=True),
                "output": output.model_dump(mode="json", by_alias=True),
            },
            indent=2,
        )
    if fmt == "sms":
        return formatters.generate_sms_quote(data, output, brand=brand)
    if fmt == "email":
        return formatters.generate_email_quote(data, output, brand=brand)
    if fmt == "proposal":
        return formatters.generate_proposal_summary(data, output, brand=brand)
    return formatters.generate_internal_notes(data, output)


def main() -> None:
    from src.app.config import get_settings

    parser = argparse.ArgumentParser(description="Price an intake form")
    parser.add_argument("intake", help="Path to intake JSON file, or - for stdin")
    parser.add_argument("--format", choices=FORMATS, default="internal", help="Output rendering")
    parser.add_argument("--brand", default=None, help="Brand name (default: BRAND_NAME setting)")
    args = parser.parse_args()

    try:
        if args.intake == "-":
            raw = json.load(sys.stdin)
        else:
            with open(args.intake, encoding="utf-8") as f:
                raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Could not read intake: {exc}", file=sys.stderr)
        sys.exit(1)

    brand = args.brand or get_settings().BRAND_NAME
    try:
        print(render(raw, args.format, brand))
    except ValidationError as exc:
        print(f"Invalid intake:\n{exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
