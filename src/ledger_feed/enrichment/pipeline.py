from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from time import perf_counter

from ledger_feed.classifiers.base import TextClassifier
from ledger_feed.domain.money import CurrencyFormat
from ledger_feed.domain.timefmt import format_elapsed
from ledger_feed.enrichment.balance import annotate
from ledger_feed.enrichment.categorize import Categorizer
from ledger_feed.enrichment.dates import filter_by_range
from ledger_feed.enrichment.search import DEFAULT_THRESHOLD, search
from ledger_feed.logger import get_logger
from ledger_feed.models import EnrichedTransaction, RawTransaction

logger = get_logger(__name__)


class EnrichmentPipeline:
    """
    Turns a provider transaction list into the client feed.

    Balances are computed over the full list before any filter runs, since
    dropping a transaction first would leave a gap in the running total.
    Search may reorder results; the final sort on ``weight`` restores
    provider order.
    """

    def __init__(
        self,
        classifier: TextClassifier,
        *,
        currency_format: CurrencyFormat | None = None,
        search_threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.categorizer = Categorizer(classifier)
        self.currency_format = currency_format or CurrencyFormat()
        self.search_threshold = search_threshold

    def run(
        self,
        transactions: Sequence[RawTransaction],
        current_balance: Decimal | str,
        query: str | None = None,
        date_from: date | datetime | None = None,
        date_to: date | datetime | None = None,
        category: str | None = None,
    ) -> list[EnrichedTransaction]:
        started_at = perf_counter()

        enriched = annotate(transactions, current_balance, self.currency_format)
        logger.debug("[ENRICH] Annotated balances for %d transactions.", len(enriched))

        enriched = search(enriched, query, self.search_threshold)
        if query:
            logger.debug("[ENRICH] Search '%s' kept %d transactions.", query, len(enriched))

        enriched = filter_by_range(enriched, date_from, date_to)
        if date_from is not None and date_to is not None:
            logger.debug("[ENRICH] Range %s..%s kept %d transactions.", date_from, date_to, len(enriched))

        enriched = self.categorizer.categorize(enriched, category)
        if category:
            logger.debug("[ENRICH] Category '%s' kept %d transactions.", category, len(enriched))

        result = sorted(enriched, key=lambda transaction: transaction.weight)
        logger.info(
            "[ENRICH] %d of %d transactions returned in %s.",
            len(result),
            len(transactions),
            format_elapsed(started_at),
        )
        return result
