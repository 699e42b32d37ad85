from collections.abc import Sequence
from datetime import date, datetime

from ledger_feed.domain.timefmt import end_of_day, start_of_day
from ledger_feed.models import EnrichedTransaction


def filter_by_range(
    transactions: Sequence[EnrichedTransaction],
    date_from: date | datetime | None,
    date_to: date | datetime | None,
) -> list[EnrichedTransaction]:
    # A one-sided range is not applied
    if date_from is None or date_to is None:
        return list(transactions)

    lower = start_of_day(date_from)
    upper = end_of_day(date_to)
    return [
        transaction
        for transaction in transactions
        if lower <= start_of_day(transaction.date) <= upper
    ]
