"""Plain-text rendering of the post list and the filter bar."""
from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

STATUS_LABELS = {
    "active": "Active",
    "inactive": "Inactive",
}


def image_url(value: Optional[str]) -> Optional[str]:
    """
    Normalize a stored image reference for display.

    Preview handles (file:) and absolute URLs stay as they are, bare
    relative paths get a leading slash.
    """
    if not value:
        return None
    if value.startswith(("file:", "http://", "https://", "/")):
        return value
    return f"/{value}"


def format_date(value) -> str:
    if isinstance(value, dt.date):
        day = value
    else:
        day = dt.date.fromisoformat(str(value)[:10])
    return day.strftime("%d.%m.%Y")


def render_post(post: dict) -> str:
    status = post.get("status", "")
    lines = [
        f"{post['title']}  [{STATUS_LABELS.get(status, status)}]  {format_date(post['date'])}",
        f"  {post['description']}",
    ]
    url = image_url(post.get("imageUrl"))
    if url:
        lines.append(f"  image: {url}")
    lines.append(f"  id: {post['id']}")
    return "\n".join(lines)


def render_posts(posts: Iterable[dict]) -> str:
    blocks = [render_post(p) for p in posts]
    if not blocks:
        return "No posts found."
    return "\n\n".join(blocks)


def render_filters(filters) -> str:
    status = STATUS_LABELS.get(filters.status, "All") if filters.status else "All"
    if filters.has_date_range():
        dates = f"{filters.start_date} - {filters.end_date}"
    else:
        dates = "any date"
    return f"Status: {status} | Date: {dates}"
