"""Public interface for the ``csv2beancount`` package.

Symbol re-exports only; the conversion logic lives in ``convert``, ``rules``,
``config`` and ``ingest.reader``.
"""

from .config import load_config, parse_config
from .convert import (
    build_transaction,
    convert_rows,
    format_transaction,
    parse_amount,
    render_ledger,
)
from .ingest.reader import open_rows, read_rows
from .models import CsvConfig, LedgerConfig, Transaction, TransactionRule
from .rules import Resolution, resolve_rule

__all__ = [
    # API
    "build_transaction",
    "convert_rows",
    "format_transaction",
    "load_config",
    "open_rows",
    "parse_amount",
    "parse_config",
    "read_rows",
    "render_ledger",
    "resolve_rule",
    # Models / types
    "CsvConfig",
    "LedgerConfig",
    "Resolution",
    "Transaction",
    "TransactionRule",
]
