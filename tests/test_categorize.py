from unittest.mock import MagicMock

import pytest

from conftest import KeywordClassifier
from ledger_feed.enrichment.balance import annotate
from ledger_feed.enrichment.categorize import Categorizer
from ledger_feed.errors import ModelUnavailableError
from ledger_feed.models import RawTransaction


def test_labels_every_transaction(classifier: KeywordClassifier, newest_first: list[RawTransaction]) -> None:
    enriched = annotate(newest_first, "1000")

    result = Categorizer(classifier).categorize(enriched)

    assert [t.category for t in result] == [
        "Subscriptions",
        "Groceries",
        "Subscriptions",
        "Income",
        "Subscriptions",
    ]
    assert len(classifier.calls) == len(newest_first)
    # Inputs are left untouched
    assert all(t.category is None for t in enriched)


def test_filter_is_exact_and_case_sensitive(
    classifier: KeywordClassifier, newest_first: list[RawTransaction]
) -> None:
    enriched = annotate(newest_first, "1000")
    categorizer = Categorizer(classifier)

    assert [t.id for t in categorizer.categorize(enriched, "Groceries")] == ["t1"]
    assert categorizer.categorize(enriched, "groceries") == []
    assert categorizer.categorize(enriched, "Grocer") == []


def test_empty_title_is_still_classified(classifier: KeywordClassifier) -> None:
    enriched = annotate(
        [RawTransaction.model_validate({
            "transactionId": "x",
            "bookingDate": "2024-01-01",
            "transactionAmount": {"amount": "-1"},
        })],
        "0",
    )

    result = Categorizer(classifier).categorize(enriched)

    assert result[0].category == "Other"
    assert classifier.calls == [""]


def test_classifier_failure_is_not_masked(newest_first: list[RawTransaction]) -> None:
    broken = MagicMock()
    broken.classify.side_effect = RuntimeError("model exploded")

    with pytest.raises(ModelUnavailableError, match="model exploded"):
        Categorizer(broken).categorize(annotate(newest_first, "0"))
