from datetime import date
from decimal import Decimal

import pytest

from conftest import raw_tx
from ledger_feed.domain.money import CurrencyFormat
from ledger_feed.enrichment.balance import annotate
from ledger_feed.errors import DataFormatError


def test_balance_regression_vector() -> None:
    # Newest first: A(+100), B(-30), C(+10), balance 500 after A
    transactions = [
        raw_tx("A", date(2024, 1, 3), "100", "A"),
        raw_tx("B", date(2024, 1, 2), "-30", "B"),
        raw_tx("C", date(2024, 1, 1), "10", "C"),
    ]

    result = annotate(transactions, Decimal("500"))

    assert [t.balance.value for t in result] == [Decimal("500"), Decimal("400"), Decimal("430")]
    assert [t.weight for t in result] == [0, 1, 2]
    assert [t.id for t in result] == ["A", "B", "C"]
    assert result[0].balance.formatted == "500,00"
    assert result[1].amount.formatted == "-30,00"


def test_balance_is_exact_decimal() -> None:
    transactions = [raw_tx(str(i), date(2024, 1, 1), "0.10", "x") for i in range(11)]

    result = annotate(transactions, "1.00")

    assert result[-1].balance.value == Decimal("0.00")
    assert result[-1].balance.formatted == "0,00"


def test_balance_accepts_string_balance_and_custom_format() -> None:
    transactions = [raw_tx("a", date(2024, 1, 1), "-1500.5", "Rent")]
    currency_format = CurrencyFormat(symbol="kr ", decimal=".", separator=",")

    result = annotate(transactions, "20000.00", currency_format)

    assert result[0].balance.formatted == "kr 20,000.00"
    assert result[0].amount.formatted == "-kr 1,500.50"


def test_empty_remittance_gives_empty_title() -> None:
    transactions = [raw_tx("a", date(2024, 1, 1), "-5.00")]

    result = annotate(transactions, "10")

    assert result[0].title == ""
    assert result[0].category is None


def test_malformed_amount_fails_the_request() -> None:
    transactions = [
        raw_tx("ok", date(2024, 1, 2), "-5.00", "fine"),
        raw_tx("bad", date(2024, 1, 1), "12,3O", "broken"),
    ]

    with pytest.raises(DataFormatError, match="bad"):
        annotate(transactions, "10")


def test_malformed_balance_fails() -> None:
    with pytest.raises(DataFormatError):
        annotate([raw_tx("a", date(2024, 1, 1), "1", "x")], "twenty")


def test_empty_input_yields_empty_result() -> None:
    assert annotate([], "100") == []


def test_large_amounts_stay_exact() -> None:
    big = "12345678901234567890123456789"
    transactions = [
        raw_tx("A", date(2024, 1, 2), big, "A"),
        raw_tx("B", date(2024, 1, 1), "0.01", "B"),
    ]

    result = annotate(transactions, "0")

    assert result[1].balance.value == Decimal("-12345678901234567890123456789")
    assert result[1].balance.formatted == "-12.345.678.901.234.567.890.123.456.789,00"


@pytest.mark.parametrize("amount", ["1E+3", "1_000", "1" * 31])
def test_unparseable_amount_names_transaction(amount: str) -> None:
    transactions = [raw_tx("A", date(2024, 1, 2), amount, "A")]

    with pytest.raises(DataFormatError, match="Transaction A \\(index 0\\)"):
        annotate(transactions, "0")
