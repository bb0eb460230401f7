from __future__ import annotations

from typing import Optional

from .client import PostsClient
from .filters import FilterCriteria
from .form import PostForm
from .store import PostsCache


class PostsBoard:
    """
    Page controller: filters + cached list + form.

    Every mutation is followed by a refresh with the active filters.
    """

    def __init__(self, client: PostsClient):
        self.client = client
        self.cache = PostsCache(client)
        self.filters = FilterCriteria()
        self.form = PostForm()

    @property
    def posts(self) -> list[dict]:
        return self.cache.read()

    def load(self) -> list[dict]:
        return self.cache.refresh(self.filters)

    def change_filter(self, name: str, value: Optional[str]) -> list[dict]:
        self.filters = self.filters.merge(name, value)
        return self.load()

    def find(self, post_id: str) -> Optional[dict]:
        return next((p for p in self.cache.read() if p["id"] == post_id), None)

    def edit(self, post_id: str) -> None:
        post = self.find(post_id)
        if post is None:
            raise KeyError(f"Post {post_id} is not in the current list")
        self.form.start_edit(post)

    def _persist(self, payload: dict, edit_id: Optional[str]):
        if edit_id:
            return self.cache.update(edit_id, payload)
        return self.cache.create(payload)

    def submit(self):
        result = self.form.submit(self.client, self._persist)
        self.load()
        return result

    def delete(self, post_id: str) -> dict:
        ack = self.cache.delete(post_id)
        self.load()
        return ack

    def close(self) -> None:
        self.form.close()
