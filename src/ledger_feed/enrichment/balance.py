from collections.abc import Sequence
from decimal import Decimal

from ledger_feed.domain.money import CurrencyFormat, format_amount, parse_amount, subtract
from ledger_feed.errors import DataFormatError
from ledger_feed.models import EnrichedTransaction, Money, RawTransaction


def _money(value: Decimal, currency_format: CurrencyFormat) -> Money:
    return Money(value=value, formatted=format_amount(value, currency_format))


def annotate(
    transactions: Sequence[RawTransaction],
    current_balance: Decimal | str,
    currency_format: CurrencyFormat | None = None,
) -> list[EnrichedTransaction]:
    """
    Attach the running balance to every transaction, walking back from the newest.

    ``current_balance`` is the balance after transaction 0. Each later
    (older) entry gets the previous balance minus the previous amount.
    """
    currency_format = currency_format or CurrencyFormat()
    balance = parse_amount(current_balance, field="current balance")

    annotated: list[EnrichedTransaction] = []
    previous_amount: Decimal | None = None
    for index, transaction in enumerate(transactions):
        try:
            amount = parse_amount(transaction.transaction_amount.amount)
        except DataFormatError as exc:
            raise DataFormatError(
                f"Transaction {transaction.transaction_id} (index {index}): {exc.message}"
            ) from exc

        if previous_amount is not None:
            balance = subtract(balance, previous_amount)
        previous_amount = amount

        annotated.append(EnrichedTransaction(
            id=transaction.transaction_id,
            weight=index,
            title=transaction.title,
            date=transaction.booking_date,
            amount=_money(amount, currency_format),
            balance=_money(balance, currency_format),
        ))
    return annotated
