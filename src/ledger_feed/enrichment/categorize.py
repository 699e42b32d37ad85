from collections.abc import Sequence

from ledger_feed.classifiers.base import TextClassifier
from ledger_feed.errors import ModelUnavailableError
from ledger_feed.logger import get_logger
from ledger_feed.models import EnrichedTransaction

logger = get_logger(__name__)


class Categorizer:
    def __init__(self, classifier: TextClassifier) -> None:
        self.classifier = classifier

    def label(self, title: str) -> str:
        try:
            return self.classifier.classify(title)
        except ModelUnavailableError:
            raise
        except Exception as exc:
            raise ModelUnavailableError(f"Category model failed to classify: {exc}") from exc

    def categorize(
        self,
        transactions: Sequence[EnrichedTransaction],
        category: str | None = None,
    ) -> list[EnrichedTransaction]:
        categorized: list[EnrichedTransaction] = []
        for transaction in transactions:
            label = self.label(transaction.title)
            logger.debug("[ENRICH] %s '%s' -> '%s'", transaction.id, transaction.title[:50], label)

            if category and label != category:
                continue
            categorized.append(transaction.model_copy(update={"category": label}))
        return categorized
