"""Exception hierarchy for the opportunity catalog."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog errors."""
    pass


class CriteriaValidationError(CatalogError):
    """A filter criterion could not be interpreted (e.g. a non-numeric deadline window).

    The filter engine catches this and treats the value as matching nothing.
    """

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} value: {value!r}")


class RemoteStoreError(CatalogError):
    """A read or write against the persistence service failed."""

    def __init__(self, message: str, *, table: str | None = None, code: str | None = None) -> None:
        self.table = table
        self.code = code
        super().__init__(message)


class TagConflictError(RemoteStoreError):
    """Inserting a tag hit the unique constraint on tags.name."""

    def __init__(self, name: str, *, table: str | None = None, code: str | None = None) -> None:
        self.name = name
        super().__init__(f"Tag {name!r} already exists", table=table, code=code)


class NotFoundError(CatalogError):
    """The referenced opportunity does not exist (anymore)."""

    def __init__(self, opportunity_id: str) -> None:
        self.opportunity_id = opportunity_id
        super().__init__(f"Opportunity {opportunity_id!r} not found")
