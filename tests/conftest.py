# tests/conftest.py
import importlib
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

import post_manager.db as db
from post_manager.client import PostsClient


def png_bytes(size=(32, 32), color=(200, 30, 30)) -> bytes:
    img = Image.new("RGB", size, color)
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def engine():
    """
    Frische In-Memory-DB pro Test. StaticPool, damit alle Threads
    (TestClient-Threadpool) dieselbe Verbindung sehen.
    """
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.ENGINE = eng
    db.init_db()

    yield eng

    eng.dispose()
    db.reset_engine_for_tests()


@pytest.fixture()
def upload_dir(tmp_path, monkeypatch):
    target = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_DIR", str(target))
    return target


@pytest.fixture()
def client(engine, upload_dir):
    # App neu laden, damit Upload-Route und /uploads-Mount UPLOAD_DIR sehen
    import post_manager.api as api
    importlib.reload(api)

    with TestClient(api.app) as c:
        yield c


@pytest.fixture()
def posts_client(client):
    return PostsClient(http=client)


@pytest.fixture()
def make_post(client):
    def _make(title="Hello", description="World", status="active", date="2024-01-01", image_url=""):
        r = client.post(
            "/api/posts",
            json={
                "title": title,
                "description": description,
                "status": status,
                "date": date,
                "imageUrl": image_url,
            },
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _make
