"""Saved pricing quotes: ORM model, schemas, and async repository."""

from src.app.quotes.repository import QuoteRepository
from src.app.quotes.schemas import QuoteCreate, QuoteRead

__all__ = ["QuoteCreate", "QuoteRead", "QuoteRepository"]
