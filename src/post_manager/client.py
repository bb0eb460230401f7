from __future__ import annotations

from typing import Any, Optional

import httpx

from .config import api_base_url
from .uploads import IMAGE_FIELD


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class PostsClient:
    """
    Thin wrapper around the posts REST API.

    Accepts any httpx.Client, so a FastAPI TestClient can be passed in.
    No retries and no request timeout: a stalled call stalls the caller.
    """

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.Client] = None):
        if http is None:
            http = httpx.Client(base_url=base_url or api_base_url(), timeout=None)
        self.http = http

    def close(self) -> None:
        self.http.close()

    def _check(self, resp: httpx.Response) -> Any:
        if resp.is_error:
            try:
                body = resp.json()
                message = body.get("error") or body.get("detail") or resp.text
            except (ValueError, AttributeError):
                message = resp.text
            raise ApiError(resp.status_code, str(message))
        return resp.json()

    def list_posts(self, params: Optional[dict] = None) -> list[dict]:
        return self._check(self.http.get("/api/posts", params=params or {}))

    def create_post(self, payload: dict) -> dict:
        return self._check(self.http.post("/api/posts", json=payload))

    def update_post(self, post_id: str, payload: dict) -> dict | None:
        return self._check(self.http.put(f"/api/posts/{post_id}", json=payload))

    def delete_post(self, post_id: str) -> dict:
        return self._check(self.http.delete(f"/api/posts/{post_id}"))

    def upload_image(self, filename: str, content: bytes, content_type: str) -> str:
        files = {IMAGE_FIELD: (filename, content, content_type)}
        data = self._check(self.http.post("/api/upload", files=files))
        return data["imageUrl"]
