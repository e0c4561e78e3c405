"""CLI for the ``csv2beancount`` package.

Converts a delimited transaction export into ledger text on standard output:

    csv2beancount --csv-path statement.csv --yaml-path bank.yaml

The command handler :func:`cmd_convert` does the work and returns an exit code;
the Typer command is a thin wrapper around it. Environment variables (notably
``CSV2BEANCOUNT_LOG_LEVEL``) may be provided through a local ``.env`` loaded
with ``python-dotenv`` before logging is configured.
"""

from __future__ import annotations

import csv
import sys
from pathlib import Path
from typing import Annotated, TextIO

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .config import load_config
from .convert import convert_rows, render_ledger
from .ingest.reader import open_rows
from .logging_setup import configure_logging, get_logger

_logger = get_logger("csv2beancount.cli")


def cmd_convert(csv_path: str | Path, yaml_path: str | Path, *, out: TextIO | None = None) -> int:
    """Convert ``csv_path`` using the configuration at ``yaml_path``.

    Behavior
    --------
    - Loads and validates the YAML configuration before touching the CSV.
    - Opens the CSV and converts rows one at a time, writing each transaction
      to ``out`` (default: ``sys.stdout``) as soon as it is built.
    - Stops at the first failing row; transactions already written stand.

    Errors are written to stderr as ``Error: <message>`` and the function
    returns ``1``. On success, returns ``0``.
    """

    stream = out if out is not None else sys.stdout

    try:
        config = load_config(yaml_path)
    except FileNotFoundError:
        print(f"Error: File not found: {yaml_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {yaml_path}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Failed to read configuration '{yaml_path}': {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Invalid configuration '{yaml_path}': {e}", file=sys.stderr)
        return 1

    try:
        with open_rows(csv_path, config.csv) as rows:
            count = render_ledger(convert_rows(rows, config.csv, config.transactions), stream)
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return 1
    except csv.Error as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: I/O failure while converting '{csv_path}': {e}", file=sys.stderr)
        return 1

    _logger.info("cli:convert_ok csv=%s transactions=%d", csv_path, count)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help="Convert transactions in CSV to beancount format.",
)

# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults).
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,
    "--csv-path",
    "-c",
    help="Path to the delimited transaction export",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)

YAML_PATH_OPTION: OptionInfo = typer.Option(
    ...,
    "--yaml-path",
    "-y",
    help="Path to the YAML configuration (column mapping and rules)",
    dir_okay=False,
    file_okay=True,
    exists=False,
)


@app.command()
def convert(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    yaml_path: Annotated[Path, YAML_PATH_OPTION],
) -> None:
    """Convert a CSV export to ledger entries printed on stdout."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()

    raise typer.Exit(cmd_convert(csv_path, yaml_path))


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
