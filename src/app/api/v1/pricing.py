"""REST API endpoints for the admin pricing calculator.

Provides quote calculation with all four text renderings, plus create/list/get
for saved quotes. All endpoints require an authenticated admin.

Saving a quote always recomputes the output server-side from the submitted
intake; client-supplied totals are never persisted.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.app.api.deps import AdminUser, get_current_admin
from src.app.config import get_settings
from src.app.core.monitoring import record_quote_calculated, record_quote_saved
from src.app.pricing import PricingInput, PricingOutput, QuoteTexts, calculate_quote, render_all
from src.app.quotes.schemas import QuoteCreate, QuoteRead

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/pricing", tags=["pricing"])


# ── Request / Response Schemas ───────────────────────────────────────────────


class CalculateResponse(BaseModel):
    """Computed quote with its intake echoed back and all text renderings."""

    input: PricingInput
    output: PricingOutput
    texts: QuoteTexts


class SaveQuoteRequest(BaseModel):
    """Request body for saving a quote."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pricing_input: PricingInput
    lead_id: str | None = None


class QuoteResponse(BaseModel):
    """Saved quote row, serializes datetimes to ISO strings."""

    id: str
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
    created_at: str | None = None


class QuoteListResponse(BaseModel):
    quotes: list[QuoteResponse] = Field(default_factory=list)


# ── Dependency Injection Helper ──────────────────────────────────────────────


def _get_quote_repository(request: Request) -> Any:
    """Retrieve QuoteRepository from app.state, 503 if not available."""
    repo = getattr(request.app.state, "quote_repository", None)
    if repo is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Quote storage not initialized",
        )
    return repo


# ── Conversion Helpers ───────────────────────────────────────────────────────


def _quote_to_response(quote: QuoteRead) -> QuoteResponse:
    """Convert QuoteRead to QuoteResponse."""
    return QuoteResponse(
        id=quote.id,
        company_name=quote.company_name,
        industry=quote.industry,
        employee_count=quote.employee_count,
        recommended_tier=quote.recommended_tier,
        monthly_total=quote.monthly_total,
        setup_fee=quote.setup_fee,
        annual_total=quote.annual_total,
        pricing_input=quote.pricing_input,
        pricing_output=quote.pricing_output,
        created_by=quote.created_by,
        lead_id=quote.lead_id,
        created_at=quote.created_at.isoformat() if quote.created_at else None,
    )


def _calculate(data: PricingInput) -> PricingOutput:
    output = calculate_quote(data)
    record_quote_calculated(output.recommended_tier.value)
    return output


# ── Endpoints ────────────────────────────────────────────────────────────────


@router.post("/calculate", response_model=CalculateResponse)
async def calculate(
    body: PricingInput,
    admin: AdminUser = Depends(get_current_admin),
) -> CalculateResponse:
    """Compute a quote and every copy-ready rendering for an intake form."""
    output = _calculate(body)
    texts = render_all(body, output, brand=get_settings().BRAND_NAME)
    logger.debug(
        "pricing.quote_calculated",
        tier=output.recommended_tier.value,
        monthly_total=output.monthly_total,
        confidence=output.confidence.value,
    )
    return CalculateResponse(input=body, output=output, texts=texts)


@router.post("/quotes", response_model=QuoteResponse, status_code=201)
async def create_quote(
    body: SaveQuoteRequest,
    request: Request,
    admin: AdminUser = Depends(get_current_admin),
) -> QuoteResponse:
    """Recompute and save a quote for later reload."""
    repo = _get_quote_repository(request)

    if not body.pricing_input.company_name.strip():
        raise HTTPException(
            status_code=422,
            detail="companyName is required to save a quote",
        )

    output = _calculate(body.pricing_input)
    data = QuoteCreate.from_calculation(
        body.pricing_input,
        output,
        created_by=admin.email,
        lead_id=body.lead_id,
    )
    quote = await repo.create_quote(data)
    record_quote_saved(quote.recommended_tier)
    logger.info(
        "pricing.quote_saved",
        quote_id=quote.id,
        company_name=quote.company_name,
        tier=quote.recommended_tier,
        created_by=admin.email,
    )
    return _quote_to_response(quote)


@router.get("/quotes", response_model=QuoteListResponse)
async def list_quotes(
    request: Request,
    limit: int | None = Query(default=None, ge=1),
    admin: AdminUser = Depends(get_current_admin),
) -> QuoteListResponse:
    """List recently saved quotes, newest first."""
    repo = _get_quote_repository(request)
    max_limit = get_settings().QUOTE_LIST_LIMIT
    effective_limit = min(limit or max_limit, max_limit)
    quotes = await repo.list_quotes(limit=effective_limit)
    return QuoteListResponse(quotes=[_quote_to_response(q) for q in quotes])


@router.get("/quotes/{quote_id}", response_model=QuoteResponse)
async def get_quote(
    quote_id: str,
    request: Request,
    admin: AdminUser = Depends(get_current_admin),
) -> QuoteResponse:
    """Get a saved quote by id."""
    repo = _get_quote_repository(request)
    quote = await repo.get_quote(quote_id)
    if quote is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Quote not found: {quote_id}",
        )
    return _quote_to_response(quote)
