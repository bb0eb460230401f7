from __future__ import annotations

import datetime as dt
import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field as PydField
from sqlmodel import SQLModel, Field


class PostStatus(str, Enum):
    active = "active"
    inactive = "inactive"


def _new_id() -> str:
    return uuid.uuid4().hex


class Post(SQLModel, table=True):
    # opake ID, wird beim Anlegen vergeben und danach nie geändert
    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)

    title: str
    description: str
    status: PostStatus = Field(index=True)
    date: dt.date = Field(index=True)
    image_url: str = ""


# ---------------------------
# Wire schemas (camelCase nach außen)
# ---------------------------

class PostIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    status: PostStatus
    date: dt.date
    image_url: str = PydField(default="", alias="imageUrl")


class PostUpdate(BaseModel):
    """Partial update: only the fields that were sent are replaced."""
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    status: PostStatus | None = None
    date: dt.date | None = None
    image_url: str | None = PydField(default=None, alias="imageUrl")


class PostOut(PostIn):
    id: str


class UploadOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = PydField(alias="imageUrl")


class Ack(BaseModel):
    message: str
