import argparse
import datetime as dt
import os
from pathlib import Path

import uvicorn
from sqlmodel import Session


def seed():
    from .db import init_db, get_engine, create_post

    init_db()
    today = dt.date.today()
    samples = [
        ("Sommerfest", "Planung für das Sommerfest im Juli.", "active", today),
        ("Newsletter", "Entwurf für den nächsten Newsletter.", "inactive", today - dt.timedelta(days=7)),
        ("Workshop", "Anmeldung für den Fotografie-Workshop.", "active", today - dt.timedelta(days=30)),
    ]
    with Session(get_engine()) as session:
        for title, description, status, day in samples:
            create_post(session, {
                "title": title,
                "description": description,
                "status": status,
                "date": day,
                "image_url": "",
            })
    print(f"Seeded {len(samples)} posts.")


def start_api():
    src_dir = Path(__file__).resolve().parents[1]  # .../src
    reload = os.getenv("RELOAD", "").strip().lower() == "true"
    uvicorn.run(
        "post_manager.api:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=reload,
        reload_dirs=[str(src_dir)] if reload else None,
    )


def list_posts(argv=None):
    from .board import PostsBoard
    from .client import PostsClient
    from .display import render_filters, render_posts

    parser = argparse.ArgumentParser(description="List posts from the posts API.")
    parser.add_argument("--status", choices=["active", "inactive"])
    parser.add_argument("--start-date", help="YYYY-MM-DD, needs --end-date")
    parser.add_argument("--end-date", help="YYYY-MM-DD, needs --start-date")
    parser.add_argument("--url", help="API base URL (default: POSTS_API_URL)")
    args = parser.parse_args(argv)

    client = PostsClient(base_url=args.url)
    board = PostsBoard(client)
    try:
        board.filters = board.filters.merge("status", args.status)
        board.filters = board.filters.merge("startDate", args.start_date)
        board.filters = board.filters.merge("endDate", args.end_date)
        posts = board.load()
        print(render_filters(board.filters))
        print()
        print(render_posts(posts))
    finally:
        board.close()
        client.close()
