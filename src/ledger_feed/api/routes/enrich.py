import asyncio
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from ledger_feed.api.dependencies import get_model_store
from ledger_feed.api.schemas import EnrichRequest, EnrichResponse
from ledger_feed.classifiers.store import ModelStore
from ledger_feed.core import settings
from ledger_feed.domain.money import format_balance, parse_amount
from ledger_feed.domain.provider import (
    extract_booked_transactions,
    extract_current_balance,
    parse_transactions,
)
from ledger_feed.enrichment.pipeline import EnrichmentPipeline
from ledger_feed.errors import DataFormatError
from ledger_feed.logger import get_logger
from ledger_feed.models import Money

logger = get_logger(__name__)

router = APIRouter()


def _resolve_booked(req: EnrichRequest) -> list[dict[str, Any]]:
    if req.transactions is not None:
        return req.transactions
    if req.provider_transactions is not None:
        return extract_booked_transactions(req.provider_transactions)
    raise DataFormatError("Request carries no transactions")


def _resolve_balance(req: EnrichRequest) -> str:
    if req.current_balance is not None:
        return req.current_balance
    if req.provider_balances is not None:
        return extract_current_balance(req.provider_balances)
    raise DataFormatError("Request carries no current balance")


@router.post("/enrich", response_model=EnrichResponse)
async def enrich_transactions(
    req: EnrichRequest,
    store: Annotated[ModelStore, Depends(get_model_store)],
) -> EnrichResponse:
    transactions = parse_transactions(_resolve_booked(req))
    current_balance = _resolve_balance(req)

    logger.info(
        "[API] Enriching %d transactions (search=%s, category=%s, range=%s..%s).",
        len(transactions),
        req.search or "-",
        req.category or "-",
        req.date_from or "-",
        req.date_to or "-",
    )

    currency_format = settings.get_currency_format()
    balance = Money(
        value=parse_amount(current_balance, field="current balance"),
        formatted=format_balance(current_balance, currency_format),
    )

    classifier = await asyncio.to_thread(store.get)
    pipeline = EnrichmentPipeline(
        classifier,
        currency_format=currency_format,
        search_threshold=settings.get_search_threshold(),
    )
    data = await asyncio.to_thread(
        pipeline.run,
        transactions,
        current_balance,
        req.search,
        req.date_from,
        req.date_to,
        req.category,
    )
    return EnrichResponse(balance=balance, data=data)
