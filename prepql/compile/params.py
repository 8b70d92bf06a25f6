"""Filter map → ParameterSet.

A filter key is a column name, optionally followed by whitespace and a
comparison operator::

    {"firstname": "fred"}   ->  "firstname = ? "
    {"age >": 11}           ->  "age > ? "

Keys without whitespace get an implicit ``=``; keys with whitespace are kept
verbatim (trimmed).  When operator enforcement is on, the trailing operator
must be in the configured allowlist and the column must be a plain or dotted
identifier.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from prepql.compile.base import QmarkCompiler, SQLCompiler
from prepql.compile.types import TypeInferencer
from prepql.errors import DisallowedOperatorError
from prepql.schema.config import BuilderConfig
from prepql.schema.params import ParameterSet

logger = logging.getLogger("prepql")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_WHITESPACE = re.compile(r"\s")


def split_filter_key(key: str) -> tuple[str, str | None]:
    """Split a trimmed filter key into ``(column, operator)``.

    ``operator`` is ``None`` for bare column keys.
    """
    if not _WHITESPACE.search(key):
        return key, None
    column, operator = key.rsplit(maxsplit=1)
    return column.strip(), operator


class ParameterSetBuilder:
    """Builds :class:`ParameterSet` instances from filter maps.

    Args:
        config: Operator allowlist and date/time format.
        compiler: Placeholder renderer; defaults to ``?``.
        inferencer: Type inferencer; defaults to one using
            ``config.datetime_format``.
    """

    def __init__(
        self,
        config: BuilderConfig | None = None,
        compiler: SQLCompiler | None = None,
        inferencer: TypeInferencer | None = None,
    ) -> None:
        self._config = config or BuilderConfig()
        self._compiler = compiler or QmarkCompiler()
        self._inferencer = inferencer or TypeInferencer(self._config.datetime_format)

    @property
    def inferencer(self) -> TypeInferencer:
        return self._inferencer

    def build(self, filter_map: Mapping[str, Any] | None) -> ParameterSet:
        """Convert ``filter_map`` to a parameter set, in insertion order.

        ``None`` or an empty map yields an empty set.

        Raises:
            DisallowedOperatorError: If a key fails the operator allowlist.
            UnsupportedTypeError: If a value has no binding type.
        """
        params = ParameterSet()
        if not filter_map:
            return params

        placeholder = self._compiler.param_placeholder()
        for raw_key, raw_value in filter_map.items():
            name = str(raw_key).strip()
            self.check_key(name)
            if not _WHITESPACE.search(name):
                name += " ="
            name += f" {placeholder} "
            tag = self._inferencer.infer_type(raw_value)
            value = self._inferencer.normalize(raw_value, tag)
            params.add_clause(name, tag, value)

        logger.debug("Built %d clause(s) with types '%s'", len(params), params.type_list)
        return params

    def check_key(self, key: str) -> None:
        """Validate a trimmed filter key against the operator allowlist."""
        if not self._config.enforce_operators:
            return
        column, operator = split_filter_key(key)
        if not _IDENTIFIER.match(column) or (
            operator is not None and operator not in self._config.allowed_operators
        ):
            raise DisallowedOperatorError(key, self._config.allowed_operators)
