"""Read a delimited export as plain rows of string fields.

No header handling is done: every record is data unless discarded via the
configured ``skip`` count. ``skip`` counts parsed records, so a quoted field
spanning several physical lines still counts as one record.
"""

from __future__ import annotations

import csv
import itertools
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from os import PathLike
from pathlib import Path

from ..logging_setup import get_logger
from ..models import CsvConfig

_logger = get_logger("csv2beancount.ingest.reader")


def read_rows(
    lines: Iterable[str],
    *,
    delimiter: str = ",",
    quote: str = '"',
    skip: int = 0,
) -> Iterator[list[str]]:
    """Yield records from ``lines`` after discarding the first ``skip``.

    Blank lines are not records: they are dropped before ``skip`` is applied.
    Malformed input surfaces as ``csv.Error`` from the underlying reader.
    """

    reader = (
        row for row in csv.reader(lines, delimiter=delimiter, quotechar=quote) if row
    )
    return itertools.islice(reader, skip, None)


@contextmanager
def open_rows(path: str | PathLike[str], config: CsvConfig) -> Iterator[Iterator[list[str]]]:
    """Open ``path`` and yield a row iterator configured from ``config``.

    Opening happens before anything is yielded, so a missing or unreadable
    file raises ``OSError`` before any row is processed.
    """

    p = Path(path)
    with p.open(encoding="utf-8", newline="") as f:
        _logger.debug(
            "reader:open path=%s delimiter=%r quote=%r skip=%d",
            p,
            config.effective_delimiter,
            config.effective_quote,
            config.effective_skip,
        )
        yield read_rows(
            f,
            delimiter=config.effective_delimiter,
            quote=config.effective_quote,
            skip=config.effective_skip,
        )


__all__ = ["open_rows", "read_rows"]
