"""Data models for ``csv2beancount``.

Two families live here:

- The configuration schema (``LedgerConfig`` with its ``CsvConfig`` section and
  the ``TransactionRule`` table). These are pydantic models validated once from
  the YAML document and frozen afterwards.
- ``Transaction``: one balanced, two-posting ledger entry built from a single
  CSV row. It is constructed and rendered immediately; nothing is persisted.

Optional settings are modelled as ``None`` rather than sentinels so that an
absent value can always be told apart from a present-but-empty one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from decimal import Decimal
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
)

# ---------------------------------------------------------------------------
# Configuration schema
# ---------------------------------------------------------------------------

# Zero-based position into a row's field sequence. Only the lower bound can be
# checked here; the upper bound depends on the width of each row.
ColumnIndex = Annotated[StrictInt, Field(ge=0)]

SingleChar = Annotated[StrictStr, Field(min_length=1, max_length=1)]


def _scalar_text(value: Any) -> Any:
    # YAML resolves bare numbers and dates in text fields; keep their text.
    # Booleans are left alone so they still fail as non-strings.
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Date)):
        return str(value)
    return value


class CsvConfig(BaseModel):
    """The ``csv:`` section: column mapping, formats and reader settings.

    Attributes
    ----------
    currency:
        Commodity code written on every posting (e.g., ``USD``).
    processing_account:
        Account the statement belongs to (e.g., ``Assets:Checking``).
    default_account:
        Counterpart account used when no rule overrides it.
    date_format:
        ``strptime`` pattern used to parse the date column.
    date, amount_in, amount_out, description:
        Column indices of the respective fields.
    payee:
        Optional column index of the payee. Empty payee cells are omitted
        from the rendered header.
    delimiter, quote:
        Optional single characters overriding ``,`` and ``"``.
    skip:
        Optional number of leading records to discard (e.g., headers).
    toggle_sign:
        When true, every resolved amount is negated once more.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    currency: StrictStr
    processing_account: StrictStr
    default_account: StrictStr
    date_format: StrictStr
    date: ColumnIndex
    amount_in: ColumnIndex
    amount_out: ColumnIndex
    description: ColumnIndex
    payee: ColumnIndex | None = None
    delimiter: SingleChar | None = None
    skip: Annotated[StrictInt, Field(ge=0)] | None = None
    toggle_sign: StrictBool | None = None
    quote: SingleChar | None = None

    @field_validator(
        "currency", "processing_account", "default_account", "date_format", mode="before"
    )
    @classmethod
    def _text_from_scalar(cls, v: Any) -> Any:
        return _scalar_text(v)

    @property
    def effective_delimiter(self) -> str:
        return self.delimiter if self.delimiter is not None else ","

    @property
    def effective_quote(self) -> str:
        return self.quote if self.quote is not None else '"'

    @property
    def effective_skip(self) -> int:
        return self.skip if self.skip is not None else 0

    @property
    def sign_toggled(self) -> bool:
        return self.toggle_sign is True


class TransactionRule(BaseModel):
    """Override for rows whose raw description matches the rule's key.

    ``account`` replaces the counterpart account and ``info`` replaces the
    description. ``None`` means "keep the row's default"; an explicit empty
    string is a real override.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    account: StrictStr | None = None
    info: StrictStr | None = None

    @field_validator("account", "info", mode="before")
    @classmethod
    def _text_from_scalar(cls, v: Any) -> Any:
        return _scalar_text(v)


class LedgerConfig(BaseModel):
    """Root of the YAML configuration document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    csv: CsvConfig
    transactions: dict[StrictStr, TransactionRule] | None = None


# ---------------------------------------------------------------------------
# Ledger transaction
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A two-posting ledger entry.

    ``magnitude`` is the amount posted to ``processing_account``; the
    ``other_account`` leg always carries its exact negation, so the postings
    balance by construction.
    """

    date: Date
    processing_account: str
    other_account: str
    currency: str
    magnitude: Decimal
    payee: str | None
    description: str

    @property
    def counter_magnitude(self) -> Decimal:
        return negate(self.magnitude)

    def postings(self) -> tuple[tuple[str, Decimal], tuple[str, Decimal]]:
        """Return ``((processing_account, amount), (other_account, amount))``."""
        return (
            (self.processing_account, self.magnitude),
            (self.other_account, self.counter_magnitude),
        )


def negate(value: Decimal) -> Decimal:
    """Exact negation; zero stays unsigned so it never renders as ``-0``."""
    if value.is_zero():
        return value.copy_abs()
    return value.copy_negate()


__all__ = [
    "CsvConfig",
    "LedgerConfig",
    "Transaction",
    "TransactionRule",
    "negate",
]
