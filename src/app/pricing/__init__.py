"""Pricing engine: deterministic quote calculation and copy-ready renderings.

Exports:
    calculate_quote: Intake form -> PricingOutput.
    render_all: PricingOutput -> QuoteTexts (SMS, email, proposal, internal notes).
    PricingInput, PricingOutput, LineItem, QuoteTexts: data models.
"""

from src.app.pricing.engine import (
    calculate_quote,
    complexity_score,
    determine_confidence,
    determine_tier,
    industry_multiplier,
)
from src.app.pricing.formatters import (
    DEFAULT_BRAND,
    generate_email_quote,
    generate_internal_notes,
    generate_proposal_summary,
    generate_sms_quote,
    render_all,
)
from src.app.pricing.schemas import (
    LineItem,
    PricingInput,
    PricingOutput,
    QuoteTexts,
)

__all__ = [
    "DEFAULT_BRAND",
    "LineItem",
    "PricingInput",
    "PricingOutput",
    "QuoteTexts",
    "calculate_quote",
    "complexity_score",
    "determine_confidence",
    "determine_tier",
    "generate_email_quote",
    "generate_internal_notes",
    "generate_proposal_summary",
    "generate_sms_quote",
    "industry_multiplier",
    "render_all",
]
