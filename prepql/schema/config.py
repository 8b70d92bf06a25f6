"""Pydantic model for the builder configuration.

Every field has a default, so most callers never construct one::

    from prepql import BuilderConfig, Database

    # Accept ``>=`` / ``<=`` in filter keys as well
    config = BuilderConfig(allowed_operators=[">", "<", "=", "!=", ">=", "<="])
    db = Database(handle, config=config)
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Comparison operators accepted in filter keys by default.
DEFAULT_OPERATORS: tuple[str, ...] = (">", "<", "=", "!=")

#: Canonical text form of date/time values bound as strings.
DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class BuilderConfig(BaseModel):
    """Controls how filter maps are turned into statement fragments.

    Attributes:
        allowed_operators: Operators permitted after the column name in a
            filter key (``{"age >": 11}``).
        enforce_operators: When False, filter keys are accepted verbatim
            without operator or column-name checks.
        datetime_format: ``strftime`` format used for date/time values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    allowed_operators: list[str] = Field(default_factory=lambda: list(DEFAULT_OPERATORS))
    enforce_operators: bool = True
    datetime_format: str = DEFAULT_DATETIME_FORMAT

    @field_validator("allowed_operators")
    @classmethod
    def _strip_operators(cls, value: list[str]) -> list[str]:
        operators = [op.strip() for op in value]
        if any(not op or any(ch.isspace() for ch in op) for op in operators):
            raise ValueError("operators must be non-empty and contain no whitespace")
        return operators
