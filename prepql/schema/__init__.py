"""prepql data types: parameter sets, result rows and builder configuration."""
from prepql.schema.config import BuilderConfig
from prepql.schema.params import BoundValue, ParameterSet, TypeTag
from prepql.schema.rows import GenericRow, materialize_row

__all__ = [
    "BoundValue",
    "BuilderConfig",
    "GenericRow",
    "ParameterSet",
    "TypeTag",
    "materialize_row",
]
