from typing import Any

from pydantic import ValidationError

from ledger_feed.errors import DataFormatError
from ledger_feed.models import RawTransaction


def _unwrap_data(payload: Any) -> Any:
    # Provider client responses sometimes arrive still wrapped as {"data": {...}}
    if isinstance(payload, dict) and "data" in payload and isinstance(payload["data"], dict):
        return payload["data"]
    return payload


def extract_booked_transactions(payload: Any) -> list[dict[str, Any]]:
    payload = _unwrap_data(payload)
    if not isinstance(payload, dict):
        raise DataFormatError("Transactions payload must be an object")

    transactions = payload.get("transactions")
    if not isinstance(transactions, dict):
        raise DataFormatError("Transactions payload is missing 'transactions'")

    booked = transactions.get("booked", [])
    if not isinstance(booked, list):
        raise DataFormatError("'transactions.booked' must be a list")
    return booked


def extract_current_balance(payload: Any) -> str:
    payload = _unwrap_data(payload)
    if not isinstance(payload, dict):
        raise DataFormatError("Balances payload must be an object")

    balances = payload.get("balances")
    if not isinstance(balances, list) or not balances:
        raise DataFormatError("Balances payload has no balances")

    first = balances[0]
    amount = None
    if isinstance(first, dict):
        balance_amount = first.get("balanceAmount")
        if isinstance(balance_amount, dict):
            amount = balance_amount.get("amount")
    if amount is None:
        raise DataFormatError("First balance is missing 'balanceAmount.amount'")
    return str(amount)


def parse_transactions(items: list[dict[str, Any]]) -> list[RawTransaction]:
    parsed: list[RawTransaction] = []
    for index, item in enumerate(items):
        try:
            parsed.append(RawTransaction.model_validate(item))
        except ValidationError as exc:
            tx_id = None
            if isinstance(item, dict):
                tx_id = item.get("transactionId") or item.get("internalTransactionId")
            raise DataFormatError(
                f"Malformed transaction at index {index} ({tx_id or 'no id'}): {exc.error_count()} error(s)"
            ) from exc
    return parsed
