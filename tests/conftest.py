"""Pytest configuration shared by the ``csv2beancount`` tests.

- Puts the workspace ``packages/`` dir (and the repo root, for
  ``tests.helpers``) on ``sys.path`` so the package imports without an
  editable install.
- Resets the package logger between tests. ``configure_logging`` is
  idempotent per process and the CLI tests invoke it, so without a reset the
  first test's handler (bound to that test's captured stderr) would leak into
  later tests.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
# Ensure `packages/` precedes the repo root on sys.path so local packages resolve first.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

import csv2beancount.logging_setup as logging_setup  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_package_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CSV2BEANCOUNT_LOG_LEVEL", raising=False)
    yield
    logger = logging.getLogger("csv2beancount")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging_setup._CONFIGURED = False


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper writing ``text`` to ``tmp_path / name``."""

    def _write(name: str, text: str) -> Path:
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return p

    return _write
