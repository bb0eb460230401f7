from __future__ import annotations

import datetime as dt
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from . import config
from .db import (
    init_db,
    get_session,
    list_posts as list_posts_from_db,
    create_post as create_post_in_db,
    update_post as update_post_in_db,
    delete_post as delete_post_from_db,
)
from .models import Ack, PostIn, PostOut, PostUpdate, UploadOut
from .uploads import UploadError, save_upload


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ohne DATABASE_URL bricht der Start hier ab
    init_db()
    # Mount braucht das Verzeichnis schon vor dem ersten Upload
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title="Post Manager",
    description="REST API for creating, filtering and editing posts.",
    lifespan=lifespan,
)

UPLOAD_DIR = config.upload_dir()

# Uploads statisch ausliefern (URLs bleiben /uploads/...)
app.mount(
    "/uploads",
    StaticFiles(directory=str(UPLOAD_DIR), check_dir=False),
    name="uploads",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_upload_dir() -> Path:
    return UPLOAD_DIR


@app.exception_handler(UploadError)
async def upload_error_handler(request: Request, exc: UploadError):
    print(f"[upload] rejected: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(SQLAlchemyError)
async def db_error_handler(request: Request, exc: SQLAlchemyError):
    print(f"[api] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ----------------------------
# Posts
# ----------------------------
def _parse_day(value: Optional[str], name: str) -> Optional[dt.date]:
    if not value:
        return None
    try:
        return dt.date.fromisoformat(value[:10])
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{name} is not a valid date")


@app.get("/api/posts", response_model=List[PostOut], summary="List posts")
def list_posts(
    status: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
):
    # nur beide Grenzen zusammen ergeben einen Datumsfilter
    if start_date and end_date:
        start, end = _parse_day(start_date, "startDate"), _parse_day(end_date, "endDate")
    else:
        start = end = None
    return list_posts_from_db(session, status=status or None, start_date=start, end_date=end)


@app.post("/api/posts", response_model=PostOut, status_code=201, summary="Create a new post")
def create_post(payload: PostIn, session: Session = Depends(get_session)):
    return create_post_in_db(session, payload.model_dump())


@app.put(
    "/api/posts/{post_id}",
    response_model=Optional[PostOut],
    summary="Update a post (null if the id is unknown)",
)
def update_post(post_id: str, payload: PostUpdate, session: Session = Depends(get_session)):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    return update_post_in_db(session, post_id, changes)


@app.delete("/api/posts/{post_id}", response_model=Ack, summary="Delete a post")
def delete_post(post_id: str, session: Session = Depends(get_session)):
    delete_post_from_db(session, post_id)
    return {"message": "Deleted"}


# ----------------------------
# Upload
# ----------------------------
@app.post("/api/upload", response_model=UploadOut, summary="Upload one image")
async def upload_image(
    image: Optional[UploadFile] = File(None),
    upload_dir: Path = Depends(get_upload_dir),
):
    image_url = await save_upload(image, upload_dir)
    return {"imageUrl": image_url}
