"""Pytest fixtures and an in-memory store."""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import pytest

from opportunity_catalog.database.base import BaseStore
from opportunity_catalog.errors import NotFoundError, RemoteStoreError, TagConflictError
from opportunity_catalog.models import Opportunity, Tag, TagLink


class InMemoryStore(BaseStore):
    """In-memory replacement for SupabaseStore.

    ``fail_on`` maps a method name to an exception raised on its next call.
    ``calls`` records method names in call order.
    """

    def __init__(self):
        self.opportunities: Dict[str, Dict[str, Any]] = {}
        self.tags: Dict[str, Tag] = {}
        self.links: List[TagLink] = []
        self.calls: List[str] = []
        self.fail_on: Dict[str, Exception] = {}
        self._next_id = 0

    def _call(self, name: str) -> None:
        self.calls.append(name)
        exc = self.fail_on.pop(name, None)
        if exc is not None:
            raise exc

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    # Helpers for arranging state -----------------------------------------

    def add_opportunity(self, **row) -> str:
        opportunity_id = row.pop("id", None) or self._new_id("opp")
        base = {
            "title": "Untitled",
            "organization": "Org",
            "type": "scholarship",
            "description": "",
            "full_description": "",
            "deadline": "2030-01-01",
            "location": "Global",
            "amount": None,
            "url": "https://example.com",
            "image_url": None,
        }
        self.opportunities[opportunity_id] = {**base, **row, "id": opportunity_id}
        return opportunity_id

    def linked_names(self, opportunity_id: str) -> set:
        by_id = {tag.id: tag.name for tag in self.tags.values()}
        return {by_id[link.tag_id] for link in self.links if link.opportunity_id == opportunity_id}

    # BaseStore -------------------------------------------------------------

    async def list_opportunities(self) -> List[Dict[str, Any]]:
        self._call("list_opportunities")
        rows = sorted(self.opportunities.values(), key=lambda r: str(r["deadline"]))
        return [dict(row) for row in rows]

    async def get_opportunity(self, opportunity_id: str) -> Optional[Dict[str, Any]]:
        self._call("get_opportunity")
        row = self.opportunities.get(opportunity_id)
        return dict(row) if row else None

    async def insert_opportunity(self, row: Dict[str, Any]) -> Dict[str, Any]:
        self._call("insert_opportunity")
        opportunity_id = self.add_opportunity(**row)
        return dict(self.opportunities[opportunity_id])

    async def update_opportunity(self, opportunity_id: str, row: Dict[str, Any]) -> Dict[str, Any]:
        self._call("update_opportunity")
        if opportunity_id not in self.opportunities:
            raise NotFoundError(opportunity_id)
        self.opportunities[opportunity_id].update(row)
        return dict(self.opportunities[opportunity_id])

    async def delete_opportunity(self, opportunity_id: str) -> None:
        self._call("delete_opportunity")
        self.opportunities.pop(opportunity_id, None)
        self.links = [link for link in self.links if link.opportunity_id != opportunity_id]

    async def list_tags_for_opportunity(self, opportunity_id: str) -> List[str]:
        self._call("list_tags_for_opportunity")
        by_id = {tag.id: tag.name for tag in self.tags.values()}
        return [by_id[link.tag_id] for link in self.links if link.opportunity_id == opportunity_id]

    async def find_tag_by_name(self, name: str) -> Optional[Tag]:
        self._call("find_tag_by_name")
        return self.tags.get(name)

    async def create_tag(self, name: str) -> Tag:
        self._call("create_tag")
        if name in self.tags:
            raise TagConflictError(name, table="tags", code="23505")
        tag = Tag(id=self._new_id("tag"), name=name)
        self.tags[name] = tag
        return tag

    async def list_tag_names(self) -> List[str]:
        self._call("list_tag_names")
        return sorted(self.tags)

    async def delete_associations(self, opportunity_id: str) -> None:
        self._call("delete_associations")
        self.links = [link for link in self.links if link.opportunity_id != opportunity_id]

    async def insert_associations(self, links: List[TagLink]) -> None:
        self._call("insert_associations")
        for link in links:
            if link.opportunity_id not in self.opportunities:
                raise NotFoundError(link.opportunity_id)
        self.links.extend(links)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def store_error():
    return RemoteStoreError("boom", table="tags", code="500")


@pytest.fixture
def today() -> date:
    return date(2026, 3, 1)


def make_opportunity(
    id: str,
    title: str = "Opportunity",
    organization: str = "Org",
    type: str = "scholarship",
    description: str = "",
    deadline: Optional[date] = None,
    location: str = "Global",
    tags: Optional[list] = None,
    **kwargs,
) -> Opportunity:
    return Opportunity(
        id=id,
        title=title,
        organization=organization,
        type=type,
        description=description,
        full_description=kwargs.pop("full_description", description),
        deadline=deadline or date(2030, 1, 1),
        location=location,
        url=kwargs.pop("url", f"https://example.com/{id}"),
        tags=tags or [],
        **kwargs,
    )


@pytest.fixture
def scenario_records(today):
    """Two-record catalog: US internship due in 10 days, global scholarship in 40."""
    return [
        make_opportunity(
            "1",
            title="Software Internship",
            type="internship",
            deadline=today + timedelta(days=10),
            location="United States",
            tags=["tech"],
        ),
        make_opportunity(
            "2",
            title="Graduate Fellowship",
            type="scholarship",
            deadline=today + timedelta(days=40),
            location="Global",
            tags=["grad"],
        ),
    ]
