from datetime import date
from typing import Any

from pydantic import BaseModel

from ledger_feed.models import EnrichedTransaction, Money


class EnrichRequest(BaseModel):
    # Either the booked list itself or the provider's transactions payload
    transactions: list[dict[str, Any]] | None = None
    provider_transactions: dict[str, Any] | None = None
    # Either the balance string or the provider's balances payload
    current_balance: str | None = None
    provider_balances: dict[str, Any] | None = None
    search: str | None = None
    category: str | None = None
    date_from: date | None = None
    date_to: date | None = None


class EnrichResponse(BaseModel):
    success: bool = True
    # Current account balance, formatted like the account summaries
    balance: Money
    data: list[EnrichedTransaction]


class HealthResponse(BaseModel):
    status: str
    model_loaded: bool
