"""Description-keyed rule lookup.

A rule table maps a raw description (exact, case-sensitive) to a
:class:`~csv2beancount.models.TransactionRule`. Each rule may override the
description, the counterpart account, both or neither; every field a rule
leaves unset falls back to the row's default.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple

from .logging_setup import get_logger
from .models import TransactionRule

_logger = get_logger("csv2beancount.rules")


class Resolution(NamedTuple):
    """Effective description and counterpart account for one row."""

    description: str
    account: str


def resolve_rule(
    description: str,
    rules: Mapping[str, TransactionRule] | None,
    default_account: str,
) -> Resolution:
    """Apply the matching rule for ``description``, if any.

    No normalization or partial matching is performed. A missing table and a
    lookup miss behave identically: the raw description and
    ``default_account`` are returned.
    """

    rule = rules.get(description) if rules is not None else None
    if rule is None:
        return Resolution(description, default_account)

    _logger.debug("rules:match description=%r", description)
    return Resolution(
        rule.info if rule.info is not None else description,
        rule.account if rule.account is not None else default_account,
    )


__all__ = ["Resolution", "resolve_rule"]
