"""Schema contract for Monobank payloads and tool arguments."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MINOR_UNITS_PER_MAJOR = 100


class _UpstreamModel(BaseModel):
    """Base for read-only mirrors of Monobank JSON objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


class Account(_UpstreamModel):
    """Card or settlement account as reported by client-info."""

    id: str
    send_id: str | None = None
    balance: int | None = None
    credit_limit: int | None = None
    type: str | None = None
    currency_code: int | None = None
    cashback_type: str | None = None
    masked_pan: list[str] | None = None
    iban: str | None = None


class Jar(_UpstreamModel):
    """Savings jar attached to the client."""

    id: str
    send_id: str | None = None
    title: str | None = None
    description: str | None = None
    currency_code: int | None = None
    balance: int | None = None
    goal: int | None = None


class ClientInfo(_UpstreamModel):
    """Client profile with accounts and optional jars."""

    client_id: str
    name: str | None = None
    web_hook_url: str | None = None
    permissions: str | None = None
    accounts: list[Account] | None = None
    jars: list[Jar] | None = None

    def to_payload(self) -> dict[str, object]:
        """Serialize back to the upstream shape, keeping only keys the API sent."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class StatementItem(_UpstreamModel):
    """Raw statement transaction; amounts are in minor currency units."""

    id: str
    time: int
    description: str
    mcc: int
    original_mcc: int
    hold: bool
    amount: int
    operation_amount: int
    currency_code: int
    commission_rate: int
    cashback_amount: int
    balance: int
    comment: str | None = None
    receipt_id: str | None = None
    invoice_id: str | None = None
    counter_edrpou: str | None = None
    counter_iban: str | None = None
    counter_name: str | None = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: int) -> int:
        """Reject timestamps that cannot be rendered as a calendar date."""
        try:
            unix_to_iso8601(value)
        except (OverflowError, OSError, ValueError) as error:
            raise ValueError(f"time {value} is out of the representable range") from error
        return value


class NormalizedStatementItem(BaseModel):
    """Statement transaction as returned to tool callers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    time: str
    description: str
    mcc: int
    original_mcc: int
    hold: bool
    amount: float
    operation_amount: float
    currency_code: int
    commission_rate: float
    cashback_amount: float
    balance: float
    comment: str | None = None
    receipt_id: str | None = None
    counter_name: str | None = None

    @classmethod
    def from_statement_item(cls, item: StatementItem) -> NormalizedStatementItem:
        """Convert minor units to major units and render the timestamp in UTC."""
        return cls(
            time=unix_to_iso8601(item.time),
            description=item.description,
            mcc=item.mcc,
            original_mcc=item.original_mcc,
            hold=item.hold,
            amount=to_major_units(item.amount),
            operation_amount=to_major_units(item.operation_amount),
            currency_code=item.currency_code,
            commission_rate=to_major_units(item.commission_rate),
            cashback_amount=to_major_units(item.cashback_amount),
            balance=to_major_units(item.balance),
            comment=item.comment,
            receipt_id=item.receipt_id,
            counter_name=item.counter_name,
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize with camelCase keys; absent optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GetStatementArgs(BaseModel):
    """Arguments accepted by the get_statement tool."""

    model_config = ConfigDict(strict=True)

    account_id: str = Field(
        description="Account identifier from the list of accounts, or '0' for default",
    )
    from_timestamp: float = Field(
        description="Start of the statement period (Unix timestamp)",
    )
    to_timestamp: float = Field(
        description="End of the statement period (Unix timestamp)",
    )


def to_major_units(minor_units: int) -> float:
    """Convert an amount in minor currency units (kopiyka, cent) to major units."""
    return minor_units / MINOR_UNITS_PER_MAJOR


def unix_to_iso8601(timestamp: int) -> str:
    """Render Unix seconds as an ISO-8601 UTC string with millisecond precision."""
    moment = datetime.fromtimestamp(timestamp, tz=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
