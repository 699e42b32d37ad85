import datetime as dt
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator


class TransactionAmount(BaseModel):
    # Kept as the provider string; parsed by domain.money at balance time
    amount: str
    currency: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> object:
        if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
            return str(value)
        return value


class RawTransaction(BaseModel):
    """A booked transaction as returned by the open-banking provider."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Some banks only send internalTransactionId
    transaction_id: str = Field(
        validation_alias=AliasChoices("transactionId", "internalTransactionId", "transaction_id"),
    )
    booking_date: dt.date = Field(alias="bookingDate")
    transaction_amount: TransactionAmount = Field(alias="transactionAmount")
    remittance_information: list[str] = Field(
        default_factory=list,
        alias="remittanceInformationUnstructuredArray",
    )

    @field_validator("booking_date", mode="before")
    @classmethod
    def _strip_time(cls, value: object) -> object:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10 and value[10] in {"T", " "}:
            return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value

    @field_validator("remittance_information", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def title(self) -> str:
        if not self.remittance_information:
            return ""
        return self.remittance_information[0] or ""


class Money(BaseModel):
    value: Decimal
    formatted: str

    @field_serializer("value")
    def _serialize_value(self, value: Decimal) -> str:
        return str(value)


class EnrichedTransaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    weight: int
    title: str
    date: dt.date
    amount: Money
    balance: Money
    category: str | None = None
