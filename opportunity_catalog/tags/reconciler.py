"""Tag reconciliation for opportunities.

Replaces an opportunity's tag links with exactly the desired set of names:

1. Delete every existing link for the opportunity (always, full replace).
2. Resolve each desired name to a tag id, creating missing tags.
3. Insert all links in one batched write.

Store failures are not retried or rolled back. If a run fails after step 1
the links are in an indeterminate state; re-run or re-fetch to confirm.
"""

import logging
import time
from typing import Iterable, List

from ..database.base import BaseStore
from ..errors import NotFoundError, TagConflictError
from ..models.tag import Tag, TagLink

logger = logging.getLogger(__name__)


def normalize_tag_names(names: Iterable[str]) -> List[str]:
    """Strip whitespace, drop blanks and collapse duplicates (first one wins).

    Matching stays case-sensitive: "AI" and "ai" are different tags.
    """
    cleaned = (name.strip() for name in names if name is not None)
    return list(dict.fromkeys(name for name in cleaned if name))


class TagReconciler:
    """Synchronizes the opportunity_tags association against a store."""

    def __init__(self, store: BaseStore) -> None:
        self.store = store

    async def reconcile(self, opportunity_id: str, desired_tag_names: Iterable[str]) -> List[Tag]:
        """Link exactly ``desired_tag_names`` to the opportunity.

        Args:
            opportunity_id: Opportunity whose links are replaced.
            desired_tag_names: Tag names to end up with; duplicates collapse.

        Returns:
            The tags now linked, in first-seen order of the desired names.

        Raises:
            NotFoundError: the opportunity does not exist.
            RemoteStoreError: any store call failed; the run is aborted.
        """
        names = normalize_tag_names(desired_tag_names)
        start = time.monotonic()

        if await self.store.get_opportunity(opportunity_id) is None:
            raise NotFoundError(opportunity_id)

        await self.store.delete_associations(opportunity_id)

        if not names:
            logger.info("Cleared tags for opportunity %s", opportunity_id)
            return []

        tags = []
        for name in names:
            tags.append(await self._resolve(name))

        await self.store.insert_associations(
            [TagLink(opportunity_id=opportunity_id, tag_id=tag.id) for tag in tags]
        )

        duration_ms = (time.monotonic() - start) * 1000
        logger.info(
            "reconcile_complete opportunity=%s tags=%d duration_ms=%.0f",
            opportunity_id, len(tags), duration_ms,
        )
        return tags

    async def _resolve(self, name: str) -> Tag:
        """Look up a tag by name, creating it when absent."""
        tag = await self.store.find_tag_by_name(name)
        if tag is not None:
            return tag

        try:
            return await self.store.create_tag(name)
        except TagConflictError:
            # Another writer inserted the same name between lookup and insert.
            tag = await self.store.find_tag_by_name(name)
            if tag is None:
                raise
            logger.info("Tag %r created concurrently; using id %s", name, tag.id)
            return tag
