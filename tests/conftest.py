from datetime import date
from typing import Any

import pytest

from ledger_feed.classifiers.base import TextClassifier
from ledger_feed.models import RawTransaction


class KeywordClassifier(TextClassifier):
    """Deterministic stand-in for the trained model."""

    def __init__(self, rules: dict[str, str], default: str = "Other") -> None:
        self.rules = rules
        self.default = default
        self.calls: list[str] = []

    @property
    def labels(self) -> list[str]:
        return sorted(set(self.rules.values()) | {self.default})

    def classify(self, text: str) -> str:
        self.calls.append(text)
        lowered = text.lower()
        for keyword, label in self.rules.items():
            if keyword in lowered:
                return label
        return self.default


def provider_tx(
    tx_id: str,
    booking_date: str,
    amount: str,
    *titles: str,
) -> dict[str, Any]:
    return {
        "transactionId": tx_id,
        "bookingDate": booking_date,
        "transactionAmount": {"amount": amount, "currency": "DKK"},
        "remittanceInformationUnstructuredArray": list(titles),
    }


def raw_tx(tx_id: str, booking_date: date, amount: str, title: str | None = None) -> RawTransaction:
    return RawTransaction.model_validate(
        provider_tx(tx_id, booking_date.isoformat(), amount, *([title] if title is not None else []))
    )


@pytest.fixture
def classifier() -> KeywordClassifier:
    return KeywordClassifier({
        "spotify": "Subscriptions",
        "spotfy": "Subscriptions",
        "netflix": "Subscriptions",
        "rema": "Groceries",
        "netto": "Groceries",
        "salary": "Income",
    })


@pytest.fixture
def newest_first() -> list[RawTransaction]:
    return [
        raw_tx("t0", date(2024, 3, 5), "-129.00", "Spotfy refund"),
        raw_tx("t1", date(2024, 3, 4), "-342.50", "Rema 1000 Norrebro"),
        raw_tx("t2", date(2024, 3, 2), "-99.00", "SPOTIFY"),
        raw_tx("t3", date(2024, 3, 1), "25000.00", "Salary March"),
        raw_tx("t4", date(2024, 2, 28), "-79.00", "Netflix.com"),
    ]
