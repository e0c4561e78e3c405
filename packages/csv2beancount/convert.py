"""Row → transaction mapping and ledger rendering.

Each CSV row becomes exactly one balanced two-posting transaction. Rows are
independent; the only thing carried between them is output order. Any failure
(short row, unparseable date, no parseable amount) is raised immediately and
aborts the run; output already written for earlier rows stands.

Amount sign resolution
----------------------
Exports often report credits and debits in separate columns. The
``amount_in`` column is tried first and taken in its literal sign; failing
that, ``amount_out`` is parsed and negated. With ``toggle_sign`` enabled the
result is negated once more.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import TextIO

from .logging_setup import get_logger
from .models import CsvConfig, Transaction, TransactionRule, negate
from .rules import resolve_rule

_logger = get_logger("csv2beancount.convert")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _field(row: Sequence[str], index: int, role: str, row_number: int | None) -> str:
    try:
        return row[index]
    except IndexError as exc:
        where = f"row {row_number}" if row_number is not None else "row"
        raise ValueError(
            f"{where} has no {role} column at index {index} (row has {len(row)} fields)"
        ) from exc


def parse_amount(raw: str) -> Decimal | None:
    """Parse ``raw`` as an exact decimal, or return ``None`` when it is not one.

    Empty strings, non-numeric text and non-finite values (``NaN``,
    ``Infinity``) all count as unparseable.
    """

    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_date(raw: str, date_format: str, *, row_number: int | None = None) -> date:
    try:
        return datetime.strptime(raw, date_format).date()
    except ValueError as exc:
        where = f"row {row_number}: " if row_number is not None else ""
        raise ValueError(
            f"{where}could not parse date {raw!r} with format {date_format!r}"
        ) from exc


def resolve_magnitude(
    amount_in: str, amount_out: str, *, toggle_sign: bool, description: str
) -> Decimal:
    """Return the signed amount for the processing-account leg."""

    value = parse_amount(amount_in)
    if value is None:
        out = parse_amount(amount_out)
        if out is None:
            raise ValueError(f"Could not parse either in or out amounts for {description}")
        value = negate(out)
    return negate(value) if toggle_sign else value


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_transaction(
    row: Sequence[str],
    config: CsvConfig,
    rules: Mapping[str, TransactionRule] | None = None,
    *,
    row_number: int | None = None,
) -> Transaction:
    """Map one CSV row to a :class:`Transaction`.

    ``row_number`` is only used to make error messages point at the offending
    record.
    """

    payee: str | None = None
    if config.payee is not None:
        payee = _field(row, config.payee, "payee", row_number) or None

    raw_description = _field(row, config.description, "description", row_number)
    tx_date = parse_date(
        _field(row, config.date, "date", row_number),
        config.date_format,
        row_number=row_number,
    )

    resolved = resolve_rule(raw_description, rules, config.default_account)

    magnitude = resolve_magnitude(
        _field(row, config.amount_in, "amount_in", row_number),
        _field(row, config.amount_out, "amount_out", row_number),
        toggle_sign=config.sign_toggled,
        description=resolved.description,
    )

    return Transaction(
        date=tx_date,
        processing_account=config.processing_account,
        other_account=resolved.account,
        currency=config.currency,
        magnitude=magnitude,
        payee=payee,
        description=resolved.description,
    )


def convert_rows(
    rows: Iterable[Sequence[str]],
    config: CsvConfig,
    rules: Mapping[str, TransactionRule] | None = None,
) -> Iterator[Transaction]:
    """Lazily build one transaction per row, in input order.

    Rows are numbered from ``skip + 1`` so messages match the record's
    position in the source file.
    """

    for row_number, row in enumerate(rows, start=config.effective_skip + 1):
        yield build_transaction(row, config, rules, row_number=row_number)


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------


def format_transaction(tx: Transaction) -> str:
    """Render ``tx`` as a header line followed by its two postings.

    The payee segment is left out entirely when there is no payee. No trailing
    newline is included.
    """

    header = f"{tx.date.isoformat()} *"
    if tx.payee is not None:
        header += f' "{tx.payee}"'
    header += f' "{tx.description}"'

    lines = [header]
    for account, amount in tx.postings():
        lines.append(f"  {account} {amount} {tx.currency}")
    return "\n".join(lines)


def render_ledger(transactions: Iterable[Transaction], out: TextIO) -> int:
    """Write each transaction to ``out`` as soon as it is produced.

    Consecutive entries are separated by exactly one blank line. Returns the
    number of transactions written.
    """

    count = 0
    for tx in transactions:
        if count:
            out.write("\n")
        out.write(format_transaction(tx))
        out.write("\n")
        count += 1
    _logger.info("convert:done transactions=%d", count)
    return count


__all__ = [
    "build_transaction",
    "convert_rows",
    "format_transaction",
    "parse_amount",
    "parse_date",
    "render_ledger",
    "resolve_magnitude",
]
