from collections.abc import Sequence

from rapidfuzz import fuzz, utils

from ledger_feed.models import EnrichedTransaction

DEFAULT_THRESHOLD = 75.0


def score_title(query: str, title: str) -> float:
    if not title.strip():
        return 0.0
    return fuzz.partial_ratio(query, title, processor=utils.default_process)


def search(
    transactions: Sequence[EnrichedTransaction],
    query: str | None,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[EnrichedTransaction]:
    """
    Keep transactions whose title fuzzily contains ``query``, best match first.

    Without a query the input comes back untouched. Equal scores keep their
    input order.
    """
    if not query or not query.strip():
        return list(transactions)

    scored = []
    for transaction in transactions:
        score = score_title(query, transaction.title)
        # Blank titles never match, even with a zero threshold
        if transaction.title.strip() and score >= threshold:
            scored.append((score, transaction))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [transaction for _, transaction in scored]
