import pytest

from conftest import png_bytes
from post_manager.board import PostsBoard
from post_manager.form import UploadFailed

pytestmark = pytest.mark.client


@pytest.fixture()
def board(posts_client):
    b = PostsBoard(posts_client)
    b.load()
    yield b
    b.close()


def _fill(form, **overrides):
    values = {"title": "Hello", "description": "World", "status": "active", "date": "2024-01-01"}
    values.update(overrides)
    for name, value in values.items():
        form.set_field(name, value)


def test_create_scenario_new_post_appears_after_refetch(board):
    assert board.posts == []
    _fill(board.form)

    created = board.submit()

    assert created["imageUrl"] == ""
    assert board.posts == [created]
    assert {k: created[k] for k in ("title", "description", "status", "date")} == {
        "title": "Hello", "description": "World", "status": "active", "date": "2024-01-01",
    }
    assert not board.cache.is_stale


def test_create_with_image_uploads_then_persists(board, upload_dir):
    _fill(board.form)
    board.form.select_image("cat.png", png_bytes(), "image/png")

    created = board.submit()

    assert created["imageUrl"].startswith("/uploads/")
    assert (upload_dir / created["imageUrl"].rsplit("/", 1)[-1]).exists()


def test_failed_upload_persists_nothing(board, monkeypatch):
    import post_manager.form as form_module

    # Client-Allowlist umgehen, damit der Server ablehnt
    monkeypatch.setattr(form_module, "CLIENT_IMAGE_TYPES", frozenset({"image/png", "image/gif"}))
    _fill(board.form)
    board.form.select_image("anim.png", png_bytes(), "image/gif")

    with pytest.raises(UploadFailed):
        board.submit()

    assert board.load() == []


def test_edit_scenario_keeps_existing_image(board, posts_client):
    existing = posts_client.create_post({
        "title": "T", "description": "D", "status": "active",
        "date": "2024-01-01", "imageUrl": "/uploads/old.png",
    })
    board.load()

    board.edit(existing["id"])
    board.form.set_field("title", "T2")
    updated = board.submit()

    assert updated["id"] == existing["id"]
    assert updated["imageUrl"] == "/uploads/old.png"
    assert board.posts == [updated]
    assert board.form.mode == "create"


def test_edit_unknown_post_fails(board):
    with pytest.raises(KeyError):
        board.edit("missing")


def test_filter_change_refetches(board, posts_client):
    posts_client.create_post({"title": "a", "description": "d", "status": "active", "date": "2024-01-01"})
    posts_client.create_post({"title": "b", "description": "d", "status": "inactive", "date": "2024-02-01"})

    assert len(board.load()) == 2
    assert [p["title"] for p in board.change_filter("status", "inactive")] == ["b"]
    assert {p["title"] for p in board.change_filter("status", "")} == {"a", "b"}

    board.change_filter("startDate", "2024-01-15")
    assert len(board.posts) == 2  # nur eine Grenze -> kein Datumsfilter
    board.change_filter("endDate", "2024-03-01")
    assert [p["title"] for p in board.posts] == ["b"]


def test_delete_refetches(board, posts_client):
    created = posts_client.create_post({"title": "a", "description": "d", "status": "active", "date": "2024-01-01"})
    board.load()

    assert board.delete(created["id"]) == {"message": "Deleted"}
    assert board.posts == []
