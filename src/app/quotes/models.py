"""Saved pricing quote persistence model.

A saved quote is an immutable snapshot: the full intake and computed output
as JSON documents, plus denormalized summary columns for list views.
Rows are only ever inserted; re-quoting a prospect inserts a new row.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, func, text
from sqlalchemy.dialects.postgresql import JSON, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.app.core.database import Base


class PricingQuoteModel(Base):
    """One saved quote from the admin pricing calculator."""

    __tablename__ = "pricing_quotes"
    __table_args__ = (
        Index("ix_pricing_quotes_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    company_name: Mapped[str] = mapped_column(String(300), nullable=False)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    employee_count: Mapped[str | None] = mapped_column(String(20), nullable=True)
    recommended_tier: Mapped[str] = mapped_column(String(20), nullable=False)
    monthly_total: Mapped[int] = mapped_column(Integer, nullable=False)
    setup_fee: Mapped[int] = mapped_column(Integer, nullable=False)
    annual_total: Mapped[int] = mapped_column(Integer, nullable=False)
    pricing_input: Mapped[dict] = mapped_column(JSON, nullable=False)
    pricing_output: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(320), nullable=True)
    lead_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
