"""Saved quote repository -- async create and list for pricing_quotes.

Uses the session_factory callable pattern: the repository receives an async
generator function yielding AsyncSession instances, so tests and scripts can
supply their own session source.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator, Callable

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.quotes.models import PricingQuoteModel
from src.app.quotes.schemas import QuoteCreate, QuoteRead

logger = structlog.get_logger(__name__)


def _model_to_quote(model: PricingQuoteModel) -> QuoteRead:
    """Convert PricingQuoteModel to QuoteRead schema."""
    return QuoteRead(
        id=str(model.id),
        company_name=model.company_name,
        industry=model.industry,
        employee_count=model.employee_count,
        recommended_tier=model.recommended_tier,
        monthly_total=model.monthly_total,
        setup_fee=model.setup_fee,
        annual_total=model.annual_total,
        pricing_input=model.pricing_input or {},
        pricing_output=model.pricing_output or {},
        created_by=model.created_by,
        lead_id=model.lead_id,
        created_at=model.created_at,
    )


class QuoteRepository:
    """Async persistence for saved pricing quotes.

    Args:
        session_factory: Async callable that yields AsyncSession instances.
    """

    def __init__(
        self, session_factory: Callable[..., AsyncGenerator[AsyncSession, None]]
    ) -> None:
        self._session_factory = session_factory

    async def create_quote(self, data: QuoteCreate) -> QuoteRead:
        """Insert a saved quote.

        Args:
            data: QuoteCreate with summary columns and JSON documents.

        Returns:
            QuoteRead with generated id and created_at.
        """
        async for session in self._session_factory():
            model = PricingQuoteModel(
                company_name=data.company_name,
                industry=data.industry,
                employee_count=data.employee_count,
                recommended_tier=data.recommended_tier,
                monthly_total=data.monthly_total,
                setup_fee=data.setup_fee,
                annual_total=data.annual_total,
                pricing_input=data.pricing_input,
                pricing_output=data.pricing_output,
                created_by=data.created_by,
                lead_id=data.lead_id,
            )
            session.add(model)
            await session.commit()
            await session.refresh(model)
            logger.info(
                "quotes.created",
                quote_id=str(model.id),
                tier=model.recommended_tier,
                monthly_total=model.monthly_total,
            )
            return _model_to_quote(model)
        raise RuntimeError("session_factory yielded no session")

    async def list_quotes(self, limit: int = 50) -> list[QuoteRead]:
        """List saved quotes, newest first.

        Args:
            limit: Maximum number of quotes to return.
        """
        async for session in self._session_factory():
            stmt = (
                select(PricingQuoteModel)
                .order_by(PricingQuoteModel.created_at.desc())
                .limit(limit)
            )
            result = await session.execute(stmt)
            return [_model_to_quote(m) for m in result.scalars().all()]
        return []

    async def get_quote(self, quote_id: str) -> QuoteRead | None:
        """Get a saved quote by id. Malformed ids are treated as not found."""
        try:
            key = uuid.UUID(quote_id)
        except ValueError:
            return None
        async for session in self._session_factory():
            stmt = select(PricingQuoteModel).where(PricingQuoteModel.id == key)
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            if model is None:
                return None
            return _model_to_quote(model)
        return None
