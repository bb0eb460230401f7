from __future__ import annotations

from typing import Optional

from .client import PostsClient
from .filters import FilterCriteria


class PostsCache:
    """
    Last fetched post list.

    Contract: create/update/delete only talk to the API and mark the cache
    stale, they never refetch. Callers must call refresh() after a mutation.
    """

    def __init__(self, client: PostsClient):
        self.client = client
        self._posts: list[dict] = []
        self._stale = True

    @property
    def is_stale(self) -> bool:
        return self._stale

    def read(self) -> list[dict]:
        return list(self._posts)

    def invalidate(self) -> None:
        self._stale = True

    def refresh(self, filters: Optional[FilterCriteria] = None) -> list[dict]:
        params = (filters or FilterCriteria()).to_params()
        # komplette Liste ersetzen, kein inkrementelles Update
        self._posts = self.client.list_posts(params)
        self._stale = False
        return self.read()

    def create(self, payload: dict) -> dict:
        created = self.client.create_post(payload)
        self.invalidate()
        return created

    def update(self, post_id: str, payload: dict) -> dict | None:
        updated = self.client.update_post(post_id, payload)
        self.invalidate()
        return updated

    def delete(self, post_id: str) -> dict:
        ack = self.client.delete_post(post_id)
        self.invalidate()
        return ack
