"""Pydantic schemas for saved pricing quotes.

QuoteCreate carries everything needed to insert a row; QuoteRead is what the
repository returns. The JSON documents are stored exactly as the pricing
models dump them (camelCase keys), so a saved input can be fed straight back
into PricingInput.model_validate() to reload the calculator.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.app.pricing.schemas import PricingInput, PricingOutput


class _QuoteFields(BaseModel):
    """Columns shared by create and read schemas."""

    company_name: str
    industry: str | None = None
    employee_count: str | None = None
    recommended_tier: str
    monthly_total: int
    setup_fee: int
    annual_total: int
    pricing_input: dict[str, Any] = Field(default_factory=dict)
    pricing_output: dict[str, Any] = Field(default_factory=dict)
    created_by: str | None = None
    lead_id: str | None = None


class QuoteCreate(_QuoteFields):
    """Data required to persist a computed quote."""

    @classmethod
    def from_calculation(
        cls,
        data: PricingInput,
        output: PricingOutput,
        *,
        created_by: str | None = None,
        lead_id: str | None = None,
    ) -> QuoteCreate:
        """Build a QuoteCreate from an intake and its computed output."""
        return cls(
            company_name=data.company_name,
            industry=data.industry or None,
            employee_count=data.employee_count.value,
            recommended_tier=output.recommended_tier.value,
            monthly_total=output.monthly_total,
            setup_fee=output.setup_fee,
            annual_total=output.annual_total,
            pricing_input=data.model_dump(mode="json", by_alias=True),
            pricing_output=output.model_dump(mode="json", by_alias=True),
            created_by=created_by,
            lead_id=lead_id,
        )


class QuoteRead(_QuoteFields):
    """A persisted quote."""

    id: str
    created_at: datetime | None = None
