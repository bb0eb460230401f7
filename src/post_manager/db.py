from __future__ import annotations

import datetime as dt
import threading
from typing import Iterator, Optional

from sqlmodel import SQLModel, create_engine, Session, select

from .config import database_url
from .models import Post


ENGINE = None  # wird lazy erzeugt, einmal pro Prozess
_ENGINE_LOCK = threading.Lock()


def _create_engine():
    return create_engine(database_url(), echo=False, pool_pre_ping=True)


def get_engine():
    """
    Shared engine for the whole process.

    Created on first use; concurrent first callers wait on the lock and get
    the same instance. It is never disposed by the app.
    """
    global ENGINE
    if ENGINE is None:
        with _ENGINE_LOCK:
            if ENGINE is None:
                ENGINE = _create_engine()
    return ENGINE


def reset_engine_for_tests():
    """Optional: für Tests/Reloads, falls sich DATABASE_URL ändert."""
    global ENGINE
    ENGINE = None


def init_db():
    SQLModel.metadata.create_all(get_engine())


def get_session() -> Iterator[Session]:
    with Session(get_engine()) as session:
        yield session


# ---------------------------
# Posts
# ---------------------------

def list_posts(
    session: Session,
    status: Optional[str] = None,
    start_date: Optional[dt.date] = None,
    end_date: Optional[dt.date] = None,
) -> list[dict]:
    stmt = select(Post)
    if status:
        stmt = stmt.where(Post.status == status)
    # Datumsfilter nur wenn beide Grenzen gesetzt sind (inklusive)
    if start_date is not None and end_date is not None:
        stmt = stmt.where(Post.date >= start_date, Post.date <= end_date)
    posts = session.exec(stmt).all()
    return [p.model_dump() for p in posts]


def get_post(session: Session, post_id: str) -> dict | None:
    post = session.get(Post, post_id)
    return post.model_dump() if post else None


def create_post(session: Session, data: dict) -> dict:
    post = Post(**data)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post.model_dump()


def update_post(session: Session, post_id: str, changes: dict) -> dict | None:
    post = session.get(Post, post_id)
    if post is None:
        return None
    for key, value in changes.items():
        if key == "id":
            continue
        setattr(post, key, value)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post.model_dump()


def delete_post(session: Session, post_id: str) -> None:
    post = session.get(Post, post_id)
    if post is None:
        return
    session.delete(post)
    session.commit()
