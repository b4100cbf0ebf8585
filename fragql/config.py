"""Pydantic model for the options a QueryBuilder is created with.

The defaults reproduce the plain builder behaviour, so most callers never
need options at all.  Set them when a deployment wants guard rails on the
statements it renders::

    from fragql import BuilderOptions, QueryBuilder

    options = BuilderOptions(default_limit=100, max_limit=1000)
    sql = QueryBuilder(options).table("events").select("*")
    # SELECT * FROM "events" LIMIT 100

Options loaded from a config file go through :meth:`BuilderOptions.from_mapping`
so a bad value surfaces as :class:`~fragql.errors.ConfigError`.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from fragql.errors import ConfigError


class BuilderOptions(BaseModel):
    """Options shared by a builder and the nested builders it creates.

    Attributes:
        paranoid_column: Column checked by ``QueryBuilder.paranoid()`` when no
            column is given.  Paranoid tables mark rows deleted with a
            timestamp instead of removing them.
        default_limit: LIMIT rendered by ``select`` when the builder has no
            explicit limit.  ``None`` renders no LIMIT.
        max_limit: Upper bound for ``QueryBuilder.limit``; larger values are
            clamped.  ``None`` means unbounded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    paranoid_column: str = Field(default="deleted_at", min_length=1)
    default_limit: int | None = Field(default=None, ge=0)
    max_limit: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_limits(self) -> BuilderOptions:
        """Reject a default limit above the maximum."""
        if (
            self.default_limit is not None
            and self.max_limit is not None
            and self.default_limit > self.max_limit
        ):
            raise ValueError(
                f"default_limit ({self.default_limit}) exceeds max_limit ({self.max_limit})"
            )
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BuilderOptions:
        """Validate ``data`` into options.

        Args:
            data: Raw option values, e.g. a section of a parsed config file.

        Returns:
            The validated :class:`BuilderOptions`.

        Raises:
            ConfigError: If a key is unknown or a value is invalid.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(
                f"Invalid builder options: {exc}", errors=exc.errors()
            ) from exc

    def clamp_limit(self, limit: int) -> int:
        """Return ``limit`` capped at :attr:`max_limit`."""
        if self.max_limit is not None and limit > self.max_limit:
            return self.max_limit
        return limit


#: Options used when a builder is created without any.
DEFAULT_OPTIONS = BuilderOptions()
