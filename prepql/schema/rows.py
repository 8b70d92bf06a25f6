"""Result row types and the row materialization contract.

Rows are mapped onto the caller's result type by one of two explicit rules:

* ``pydantic.BaseModel`` subclasses (including the default
  :class:`GenericRow`) are built with ``model_validate`` from the
  column-name → value mapping.
* Any other class (dataclasses, plain classes) is called with the columns
  as keyword arguments.

A mismatch between columns and the target's fields raises
:class:`~prepql.errors.ResultMappingError`.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from prepql.errors import ResultMappingError

T = TypeVar("T")


class GenericRow(BaseModel):
    """Untyped row: one attribute per returned column, in column order.

    Usage::

        row.firstname
        row["firstname"]
        row.as_dict()   # {"firstname": "Alice", "age": 34}
    """

    model_config = ConfigDict(extra="allow")

    def as_dict(self) -> dict[str, Any]:
        return dict(self.__pydantic_extra__ or {})

    def keys(self) -> list[str]:
        return list(self.as_dict())

    def __getitem__(self, column: str) -> Any:
        try:
            return self.as_dict()[column]
        except KeyError:
            raise KeyError(column) from None

    def __contains__(self, column: object) -> bool:
        return column in self.as_dict()

    def __iter__(self) -> Iterator[tuple[str, Any]]:  # type: ignore[override]
        return iter(self.as_dict().items())


def materialize_row(
    result_type: type[T],
    columns: Sequence[str],
    values: Sequence[Any],
) -> T:
    """Build one ``result_type`` instance from a fetched row.

    Args:
        result_type: Target class.
        columns: Column names in result-set order.
        values: Row values, parallel to ``columns``.

    Returns:
        A fresh ``result_type`` instance.

    Raises:
        ResultMappingError: If the columns do not fit the target's fields.
    """
    mapping = dict(zip(columns, values))
    if isinstance(result_type, type) and issubclass(result_type, BaseModel):
        try:
            return result_type.model_validate(mapping)  # type: ignore[return-value]
        except PydanticValidationError as exc:
            raise ResultMappingError(result_type, list(columns), str(exc)) from exc
    try:
        return result_type(**mapping)
    except TypeError as exc:
        raise ResultMappingError(result_type, list(columns), str(exc)) from exc
