"""Supabase-backed store for opportunities, tags and their join table."""

import logging
import os
import time
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..errors import NotFoundError, RemoteStoreError, TagConflictError
from ..models.tag import Tag, TagLink
from .base import BaseStore

logger = logging.getLogger(__name__)

# PostgreSQL error codes surfaced by PostgREST
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _is_transient(exc: BaseException) -> bool:
    """Only transport-level failures are worth retrying; API errors are final."""
    return isinstance(exc, RemoteStoreError) and isinstance(exc.__cause__, httpx.TransportError)


class SupabaseStore(BaseStore):
    """Async client for the opportunities, tags and opportunity_tags tables."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        *,
        opportunities_table: str = "opportunities",
        tags_table: str = "tags",
        opportunity_tags_table: str = "opportunity_tags",
        read_retry_attempts: int = 3,
        retry_wait: Any = None,
    ) -> None:
        """Initialize from explicit args or env vars.

        The underlying async client is created on first use.

        Args:
            url: Supabase project URL (falls back to SUPABASE_URL env var).
            key: Supabase anon/service key (falls back to SUPABASE_KEY env var).
            read_retry_attempts: Attempts for listing reads on transport errors.
            retry_wait: tenacity wait strategy between read attempts.
        """
        self._url = url or os.environ["SUPABASE_URL"]
        self._key = key or os.environ["SUPABASE_KEY"]
        self._client: Optional[AsyncClient] = None

        self.opportunities_table = opportunities_table
        self.tags_table = tags_table
        self.opportunity_tags_table = opportunity_tags_table

        self._read_retry_attempts = read_retry_attempts
        self._retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=8)

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _table(self, name: str):
        if self._client is None:
            self._client = await acreate_client(self._url, self._key)
        return self._client.table(name)

    async def _execute(self, table: str, op: str, query: Any) -> List[Dict[str, Any]]:
        """Run a built query, log the call, and map failures to RemoteStoreError."""
        start = time.monotonic()
        try:
            response = await query.execute()
        except APIError as exc:
            duration_ms = (time.monotonic() - start) * 1000
            logger.error(
                "store_call table=%s op=%s result=failure code=%s error=%s duration_ms=%.0f",
                table, op, exc.code, exc.message, duration_ms,
            )
            raise RemoteStoreError(
                f"{op} on {table} failed: {exc.message}", table=table, code=exc.code
            ) from exc
        except httpx.HTTPError as exc:
            duration_ms = (time.monotonic() - start) * 1000
            logger.error(
                "store_call table=%s op=%s result=failure error=%s duration_ms=%.0f",
                table, op, exc, duration_ms,
            )
            raise RemoteStoreError(f"{op} on {table} failed: {exc}", table=table) from exc

        rows = response.data or []
        duration_ms = (time.monotonic() - start) * 1000
        logger.debug(
            "store_call table=%s op=%s result=success rows=%d duration_ms=%.0f",
            table, op, len(rows), duration_ms,
        )
        return rows

    async def _read(self, table: str, op: str, build):
        """Execute a read-only query, retrying transient transport failures."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._read_retry_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception(_is_transient),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                query = build(await self._table(table))
                return await self._execute(table, op, query)

    # ------------------------------------------------------------------
    # Opportunities
    # ------------------------------------------------------------------

    async def list_opportunities(self) -> List[Dict[str, Any]]:
        return await self._read(
            self.opportunities_table,
            "list",
            lambda t: t.select("*").order("deadline", desc=False),
        )

    async def get_opportunity(self, opportunity_id: str) -> Optional[Dict[str, Any]]:
        table = await self._table(self.opportunities_table)
        rows = await self._execute(
            self.opportunities_table,
            "get",
            table.select("*").eq("id", opportunity_id).limit(1),
        )
        return rows[0] if rows else None

    async def insert_opportunity(self, row: Dict[str, Any]) -> Dict[str, Any]:
        table = await self._table(self.opportunities_table)
        rows = await self._execute(self.opportunities_table, "insert", table.insert(row))
        if not rows:
            raise RemoteStoreError(
                "insert returned no row", table=self.opportunities_table
            )
        logger.info("Created opportunity %s", rows[0].get("id"))
        return rows[0]

    async def update_opportunity(self, opportunity_id: str, row: Dict[str, Any]) -> Dict[str, Any]:
        if not row:
            existing = await self.get_opportunity(opportunity_id)
            if existing is None:
                raise NotFoundError(opportunity_id)
            return existing

        table = await self._table(self.opportunities_table)
        rows = await self._execute(
            self.opportunities_table,
            "update",
            table.update(row).eq("id", opportunity_id),
        )
        if not rows:
            raise NotFoundError(opportunity_id)
        logger.info("Updated opportunity %s (%s)", opportunity_id, ", ".join(sorted(row)))
        return rows[0]

    async def delete_opportunity(self, opportunity_id: str) -> None:
        table = await self._table(self.opportunities_table)
        await self._execute(
            self.opportunities_table,
            "delete",
            table.delete().eq("id", opportunity_id),
        )
        logger.info("Deleted opportunity %s", opportunity_id)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    async def list_tags_for_opportunity(self, opportunity_id: str) -> List[str]:
        table = await self._table(self.opportunity_tags_table)
        rows = await self._execute(
            self.opportunity_tags_table,
            "list_tags",
            table.select(f"{self.tags_table}(name)").eq("opportunity_id", opportunity_id),
        )
        names = []
        for row in rows:
            tag = row.get(self.tags_table)
            # Embedded many-to-one relations come back as an object, occasionally a list.
            if isinstance(tag, list):
                tag = tag[0] if tag else None
            if tag and tag.get("name"):
                names.append(tag["name"])
        return names

    async def find_tag_by_name(self, name: str) -> Optional[Tag]:
        table = await self._table(self.tags_table)
        rows = await self._execute(
            self.tags_table,
            "find",
            table.select("id, name").eq("name", name).limit(1),
        )
        return Tag(**rows[0]) if rows else None

    async def create_tag(self, name: str) -> Tag:
        table = await self._table(self.tags_table)
        try:
            rows = await self._execute(self.tags_table, "insert", table.insert({"name": name}))
        except RemoteStoreError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise TagConflictError(name, table=self.tags_table, code=exc.code) from exc
            raise
        if not rows:
            raise RemoteStoreError("insert returned no row", table=self.tags_table)
        logger.info("Created tag %r", name)
        return Tag(**rows[0])

    async def list_tag_names(self) -> List[str]:
        rows = await self._read(
            self.tags_table,
            "list",
            lambda t: t.select("name").order("name", desc=False),
        )
        return [row["name"] for row in rows]

    # ------------------------------------------------------------------
    # Associations
    # ------------------------------------------------------------------

    async def delete_associations(self, opportunity_id: str) -> None:
        table = await self._table(self.opportunity_tags_table)
        await self._execute(
            self.opportunity_tags_table,
            "delete",
            table.delete().eq("opportunity_id", opportunity_id),
        )

    async def insert_associations(self, links: List[TagLink]) -> None:
        if not links:
            return
        table = await self._table(self.opportunity_tags_table)
        records = [link.model_dump() for link in links]
        try:
            await self._execute(self.opportunity_tags_table, "insert", table.insert(records))
        except RemoteStoreError as exc:
            if exc.code == FOREIGN_KEY_VIOLATION:
                raise NotFoundError(links[0].opportunity_id) from exc
            raise
