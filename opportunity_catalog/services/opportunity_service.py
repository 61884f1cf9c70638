"""Catalog service: CRUD over the store with tag links kept in sync."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Union

from ..database.base import BaseStore
from ..filtering.engine import filter_opportunities
from ..models.filter_criteria import FilterCriteria
from ..models.opportunity import Opportunity, OpportunityInput, OpportunityUpdate
from ..tags.reconciler import TagReconciler, normalize_tag_names

logger = logging.getLogger(__name__)


class OpportunityService:
    """High-level operations used by the browse and CMS screens."""

    def __init__(self, store: BaseStore, reconciler: Optional[TagReconciler] = None) -> None:
        self.store = store
        self.reconciler = reconciler or TagReconciler(store)

    async def fetch_opportunities(self) -> list[Opportunity]:
        """All opportunities, deadline ascending, each with its tag names."""
        rows = await self.store.list_opportunities()
        opportunities = []
        for row in rows:
            tags = await self.store.list_tags_for_opportunity(str(row["id"]))
            opportunities.append(Opportunity.from_row(row, tags))
        logger.info("Fetched %d opportunities", len(opportunities))
        return opportunities

    async def fetch_opportunity(self, opportunity_id: str) -> Optional[Opportunity]:
        row = await self.store.get_opportunity(opportunity_id)
        if row is None:
            return None
        tags = await self.store.list_tags_for_opportunity(opportunity_id)
        return Opportunity.from_row(row, tags)

    async def search(
        self,
        criteria: FilterCriteria,
        as_of: Optional[Union[date, datetime]] = None,
    ) -> list[Opportunity]:
        """Fetch the catalog and apply the filter engine to it."""
        return filter_opportunities(await self.fetch_opportunities(), criteria, as_of)

    async def create_opportunity(self, payload: OpportunityInput) -> Opportunity:
        row = await self.store.insert_opportunity(payload.to_row())
        opportunity_id = str(row["id"])

        tags = normalize_tag_names(payload.tags)
        if tags:
            await self.reconciler.reconcile(opportunity_id, tags)

        return Opportunity.from_row(row, tags)

    async def update_opportunity(self, opportunity_id: str, changes: OpportunityUpdate) -> Opportunity:
        """Write the set fields; relink tags only when ``changes.tags`` is given.

        Raises:
            NotFoundError: no opportunity with this id.
        """
        row = await self.store.update_opportunity(opportunity_id, changes.to_row())

        if changes.tags is not None:
            linked = await self.reconciler.reconcile(opportunity_id, changes.tags)
            tags = [tag.name for tag in linked]
        else:
            tags = await self.store.list_tags_for_opportunity(opportunity_id)

        return Opportunity.from_row(row, tags)

    async def delete_opportunity(self, opportunity_id: str) -> None:
        await self.store.delete_opportunity(opportunity_id)

    async def get_all_tags(self) -> list[str]:
        return await self.store.list_tag_names()
