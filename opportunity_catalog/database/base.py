"""Persistence interface consumed by the catalog service and tag reconciler."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.tag import Tag, TagLink


class BaseStore(ABC):
    """Abstract async CRUD/query surface of the hosted backend.

    Implementations raise ``RemoteStoreError`` (or a subclass) for any
    failed call and ``NotFoundError`` when a write references a missing
    opportunity.
    """

    # ------------------------------------------------------------------
    # Opportunities
    # ------------------------------------------------------------------

    @abstractmethod
    async def list_opportunities(self) -> List[Dict[str, Any]]:
        """Return all opportunity rows ordered by deadline ascending."""
        pass

    @abstractmethod
    async def get_opportunity(self, opportunity_id: str) -> Optional[Dict[str, Any]]:
        """Return one opportunity row, or None when it does not exist."""
        pass

    @abstractmethod
    async def insert_opportunity(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it with its assigned id."""
        pass

    @abstractmethod
    async def update_opportunity(self, opportunity_id: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Update the given columns and return the stored row."""
        pass

    @abstractmethod
    async def delete_opportunity(self, opportunity_id: str) -> None:
        pass

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    @abstractmethod
    async def list_tags_for_opportunity(self, opportunity_id: str) -> List[str]:
        """Return the names of the tags linked to an opportunity."""
        pass

    @abstractmethod
    async def find_tag_by_name(self, name: str) -> Optional[Tag]:
        pass

    @abstractmethod
    async def create_tag(self, name: str) -> Tag:
        """Insert a tag row. Raises TagConflictError if the name is taken."""
        pass

    @abstractmethod
    async def list_tag_names(self) -> List[str]:
        """Return every tag name, sorted ascending."""
        pass

    # ------------------------------------------------------------------
    # Associations
    # ------------------------------------------------------------------

    @abstractmethod
    async def delete_associations(self, opportunity_id: str) -> None:
        pass

    @abstractmethod
    async def insert_associations(self, links: List[TagLink]) -> None:
        """Insert join rows in one batched write."""
        pass
