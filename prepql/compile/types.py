"""Runtime type inference and value normalization for bound values.

``TypeInferencer`` maps each Python value to a :class:`TypeTag` and
normalizes it to the form handed to the driver.  Scalars are handled in
:meth:`TypeInferencer.infer_type`; every other value is routed through the
:meth:`TypeInferencer.infer_object_type` hook, which subclasses override to
support additional types::

    class DecimalInferencer(TypeInferencer):
        def infer_object_type(self, value):
            if isinstance(value, Decimal):
                return TypeTag.FLOAT
            return super().infer_object_type(value)

        def normalize(self, value, tag):
            if isinstance(value, Decimal):
                return float(value)
            return super().normalize(value, tag)
"""
from __future__ import annotations

import datetime
from typing import Any

from prepql.errors import UnsupportedTypeError
from prepql.schema.config import DEFAULT_DATETIME_FORMAT
from prepql.schema.params import TypeTag


class TypeInferencer:
    """Maps values to binding types and their canonical bound form.

    Args:
        datetime_format: ``strftime`` format for date/time values.
    """

    def __init__(self, datetime_format: str = DEFAULT_DATETIME_FORMAT) -> None:
        self._datetime_format = datetime_format

    def infer_type(self, value: Any) -> TypeTag:
        """Return the binding type for ``value``.

        Raises:
            UnsupportedTypeError: If ``value`` has no known mapping.
        """
        # bool is an int subclass but is not bound as a number
        if isinstance(value, bool) or value is None:
            raise UnsupportedTypeError(type(value).__name__)
        if isinstance(value, int):
            return TypeTag.INTEGER
        if isinstance(value, float):
            return TypeTag.FLOAT
        if isinstance(value, str):
            return TypeTag.STRING
        return self.infer_object_type(value)

    def infer_object_type(self, value: Any) -> TypeTag:
        """Return the binding type for a non-scalar value.

        Override in subclasses to support further object types.

        Raises:
            UnsupportedTypeError: If the type of ``value`` is not supported.
        """
        if isinstance(value, (datetime.datetime, datetime.date)):
            return TypeTag.STRING
        raise UnsupportedTypeError(type(value).__name__)

    def normalize(self, value: Any, tag: TypeTag) -> Any:
        """Convert ``value`` to the form bound for ``tag``."""
        if isinstance(value, datetime.datetime):
            return value.strftime(self._datetime_format)
        if isinstance(value, datetime.date):
            midnight = datetime.datetime.combine(value, datetime.time.min)
            return midnight.strftime(self._datetime_format)
        return value
