"""Placeholder compilers keyed by DB-API paramstyle.

``Database`` looks its compiler up from ``handle.paramstyle``, so a driver
with another paramstyle only needs a registration::

    from prepql.compile.registry import CompilerFactory

    @CompilerFactory.register("numeric")
    class NumericCompiler(SQLCompiler):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from prepql.compile.base import SQLCompiler
from prepql.errors import CompilationError


class CompilerFactory:
    """Maps paramstyle names to :class:`SQLCompiler` classes."""

    _styles: ClassVar[dict[str, type[SQLCompiler]]] = {}

    @classmethod
    def register_class(cls, paramstyle: str, compiler_cls: type[SQLCompiler]) -> None:
        cls._styles[paramstyle] = compiler_cls

    @classmethod
    def register(cls, paramstyle: str) -> Callable[[type[SQLCompiler]], type[SQLCompiler]]:
        """Class decorator form of :meth:`register_class`."""

        def decorator(compiler_cls: type[SQLCompiler]) -> type[SQLCompiler]:
            cls.register_class(paramstyle, compiler_cls)
            return compiler_cls

        return decorator

    @classmethod
    def create(cls, paramstyle: str) -> SQLCompiler:
        """Return a compiler for ``paramstyle``.

        Raises:
            CompilationError: If the paramstyle has no registered compiler.
        """
        try:
            return cls._styles[paramstyle]()
        except KeyError:
            raise CompilationError(
                f"Unsupported paramstyle '{paramstyle}' (known: {', '.join(sorted(cls._styles))})"
            ) from None
