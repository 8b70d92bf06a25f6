"""prepql compilation layer: structured input → positional-parameter SQL."""
from prepql.compile.base import CompiledStatement, FormatCompiler, QmarkCompiler, SQLCompiler
from prepql.compile.builder import QueryBuilder
from prepql.compile.clause_builders import (
    LimitClauseBuilder,
    OrderClauseBuilder,
    WhereClauseBuilder,
    generate_where,
)
from prepql.compile.params import ParameterSetBuilder
from prepql.compile.types import TypeInferencer

__all__ = [
    "CompiledStatement",
    "SQLCompiler",
    "QmarkCompiler",
    "FormatCompiler",
    "QueryBuilder",
    "ParameterSetBuilder",
    "TypeInferencer",
    "WhereClauseBuilder",
    "OrderClauseBuilder",
    "LimitClauseBuilder",
    "generate_where",
]
