"""Domain errors raised before any storage write happens."""

from __future__ import annotations


class TypeValidationError(ValueError):
    """A type aggregate failed validation and was not persisted.

    Attributes:
        alias: Alias of the offending aggregate (may be None or empty).
        errors: Individual validation messages.
    """

    def __init__(self, alias: str | None, errors: list[str]) -> None:
        self.alias = alias
        self.errors = errors
        super().__init__("; ".join(errors))
