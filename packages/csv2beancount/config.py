"""Load and validate the YAML configuration document.

The document has a mandatory ``csv:`` section describing the column mapping
and an optional ``transactions:`` table of description-keyed rules. Only
schema-level checks happen here; column bounds are checked per row because the
row width is only known while reading.
"""

from __future__ import annotations

from collections.abc import Hashable
from os import PathLike
from pathlib import Path

import yaml

from .logging_setup import get_logger
from .models import LedgerConfig

_logger = get_logger("csv2beancount.config")


class _ConfigLoader(yaml.SafeLoader):
    """``SafeLoader`` that keeps plain mapping keys as their source text.

    Rule keys are matched against raw CSV descriptions, so a key such as
    ``1234``, ``2023-01-05`` or ``ON`` must stay the string it was written as
    rather than resolve to an int, date or bool.
    """

    def construct_mapping(self, node, deep=False):
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = key_node.value
            else:
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        "found unhashable key",
                        key_node.start_mark,
                    )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def parse_config(text: str, *, source: str = "<string>") -> LedgerConfig:
    """Parse a YAML document into a validated :class:`LedgerConfig`.

    Raises ``ValueError`` for malformed YAML or a root that is not a mapping,
    and ``pydantic.ValidationError`` (also a ``ValueError``) on schema
    mismatch.
    """

    try:
        data = yaml.load(text, Loader=_ConfigLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid YAML in {source}: {exc}") from exc

    if data is None:
        raise ValueError(f"configuration document is empty: {source}")
    if not isinstance(data, dict):
        raise ValueError(
            f"configuration root must be a mapping, got {type(data).__name__}: {source}"
        )

    return LedgerConfig.model_validate(data)


def load_config(path: str | PathLike[str]) -> LedgerConfig:
    """Read ``path`` and return the validated configuration.

    ``OSError`` from opening the file propagates unchanged.
    """

    p = Path(path)
    text = p.read_text(encoding="utf-8")
    config = parse_config(text, source=str(p))
    _logger.debug(
        "config:loaded path=%s rules=%d",
        p,
        len(config.transactions or {}),
    )
    return config


__all__ = ["load_config", "parse_config"]
