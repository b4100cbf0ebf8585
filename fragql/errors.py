"""Custom exception hierarchy for fragQL.

All public errors inherit from FragQLError so callers can catch the base
class for any fragQL-specific failure.
"""
from __future__ import annotations


class FragQLError(Exception):
    """Base exception for all fragQL errors."""


class UsageError(FragQLError):
    """Raised when a QueryBuilder is driven into a statement it refuses to emit.

    Args:
        message: Human-readable description.
        statement: The statement kind being rendered (e.g. ``"DELETE"``).
    """

    def __init__(self, message: str, statement: str | None = None) -> None:
        super().__init__(message)
        self.statement = statement


class FragmentTypeError(FragQLError, TypeError):
    """Raised when a fragment is constructed from the wrong kinds of values.

    Also a :class:`TypeError`, so ``except TypeError`` call sites keep working.

    Args:
        message: Human-readable description.
        fragment: Name of the fragment type being constructed.
    """

    def __init__(self, message: str, fragment: str | None = None) -> None:
        super().__init__(message)
        self.fragment = fragment


class ConfigError(FragQLError):
    """Raised when :class:`~fragql.config.BuilderOptions` cannot be built.

    Args:
        message: Human-readable description.
        errors: The structured error list reported by pydantic.
    """

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors: list[dict] = errors or []
