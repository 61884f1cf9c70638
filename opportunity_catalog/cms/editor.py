"""Operator actions for the CMS screen, reported as user-facing notices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from ..errors import CatalogError, RemoteStoreError
from ..models.opportunity import OpportunityInput, OpportunityUpdate
from ..services.opportunity_service import OpportunityService

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"


@dataclass(frozen=True)
class Notice:
    """A toast-style message for the operator.

    Attributes:
        level: 'success' or 'error'.
        message: Text shown to the operator.
        retryable: True when repeating the action may succeed (store failures).
    """

    level: str
    message: str
    retryable: bool = False

    @property
    def ok(self) -> bool:
        return self.level == "success"


def toggle_tag(selected: list[str], tag: str) -> list[str]:
    """Return ``selected`` with ``tag`` removed if present, else appended."""
    if tag in selected:
        return [t for t in selected if t != tag]
    return [*selected, tag]


class CatalogEditor:
    """Create, update and delete opportunities on behalf of the CMS form."""

    def __init__(self, service: OpportunityService) -> None:
        self.service = service

    async def save(self, form: dict[str, Any], editing_id: Optional[str] = None) -> Notice:
        """Create (no ``editing_id``) or update an opportunity from form data.

        Tag links are fully replaced by the form's tag list in both cases.
        """
        try:
            payload = OpportunityInput(**form)
        except ValidationError as exc:
            logger.info("Rejected opportunity form: %d invalid field(s)", exc.error_count())
            return Notice("error", REQUIRED_FIELDS_MESSAGE)

        try:
            if editing_id:
                await self.service.update_opportunity(
                    editing_id, OpportunityUpdate(**payload.model_dump())
                )
                return Notice("success", "Opportunity updated")
            await self.service.create_opportunity(payload)
            return Notice("success", "Opportunity created")
        except CatalogError as exc:
            action = "update" if editing_id else "create"
            logger.error("Failed to %s opportunity %s: %s", action, editing_id or payload.title, exc)
            return Notice(
                "error",
                f"Failed to {action} opportunity",
                retryable=isinstance(exc, RemoteStoreError),
            )

    async def delete(self, opportunity_id: str) -> Notice:
        try:
            await self.service.delete_opportunity(opportunity_id)
        except CatalogError as exc:
            logger.error("Failed to delete opportunity %s: %s", opportunity_id, exc)
            return Notice(
                "error",
                "Failed to delete opportunity",
                retryable=isinstance(exc, RemoteStoreError),
            )
        return Notice("success", "Opportunity deleted")
