from __future__ import annotations

import tempfile
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Callable, Optional

import httpx
from PIL import Image
from pydantic import BaseModel, Field, ValidationError

from .client import ApiError, PostsClient
from .display import image_url
from .models import PostStatus
from .uploads import ALLOWED_IMAGE_TYPES

# Gleiche Allowlist wie der Server (JPEG/PNG), sonst scheitert der Upload erst dort
CLIENT_IMAGE_TYPES = frozenset(ALLOWED_IMAGE_TYPES)
PREVIEW_SIZE = (192, 192)

FIELD_MESSAGES = {
    "title": "Title is required",
    "description": "Description is required",
    "status": "Status is required",
    "date": "Date is required",
}
FORM_FIELDS = tuple(FIELD_MESSAGES)


class FormValidationError(Exception):
    def __init__(self, errors: dict[str, str]):
        super().__init__(", ".join(errors.values()))
        self.errors = errors


class ImageSelectionError(Exception):
    pass


class UploadFailed(Exception):
    """Image upload failed, the post was not saved."""


class PostFormData(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    status: PostStatus
    date: str = Field(min_length=1)


@dataclass
class SelectedImage:
    filename: str
    content: bytes
    content_type: str


class PreviewHandle:
    """
    Local thumbnail of a selected, not yet uploaded image.

    The temp file is the handle; release() deletes it. Safe to release twice.
    """

    def __init__(self, path: Path):
        self.path = path
        self.released = False

    @classmethod
    def create(cls, content: bytes) -> "PreviewHandle":
        with Image.open(BytesIO(content)) as im:
            im.thumbnail(PREVIEW_SIZE)  # behält Seitenverhältnis
            if im.mode not in ("RGB", "RGBA", "L", "P"):
                im = im.convert("RGB")
            tmp = tempfile.NamedTemporaryFile(prefix="post-preview-", suffix=".png", delete=False)
            path = Path(tmp.name)
            try:
                with tmp:
                    im.save(tmp, format="PNG")
            except Exception:
                path.unlink(missing_ok=True)
                raise
        return cls(path)

    @property
    def url(self) -> str:
        return self.path.as_uri()

    def release(self) -> None:
        if not self.released:
            self.path.unlink(missing_ok=True)
            self.released = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.release()


class PostForm:
    """
    Create/edit form for one post.

    create mode: edit_id is None. edit mode: bound to one existing post.
    A submit uploads the selected image first and only then persists the
    post; a failed upload aborts the whole submission.
    """

    def __init__(self):
        self.values: dict[str, str] = {}
        self.errors: dict[str, str] = {}
        self.edit_id: Optional[str] = None
        self.selected: Optional[SelectedImage] = None
        self._preview: Optional[PreviewHandle] = None
        self._existing_image_url = ""
        self.reset()

    @property
    def mode(self) -> str:
        return "edit" if self.edit_id else "create"

    @property
    def preview_url(self) -> Optional[str]:
        if self._preview is not None:
            return self._preview.url
        # im Edit-Modus das vorhandene Bild zeigen, ohne neu hochzuladen
        if self.edit_id and self._existing_image_url:
            return image_url(self._existing_image_url)
        return None

    # ---------------------------
    # Felder & Validierung
    # ---------------------------

    def set_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELDS:
            raise KeyError(name)
        self.values[name] = value
        if self.errors:
            self.validate()

    def validate(self) -> dict[str, str]:
        try:
            PostFormData(**self.values)
            self.errors = {}
        except ValidationError as exc:
            errors = {}
            for err in exc.errors():
                field = str(err["loc"][0])
                errors[field] = FIELD_MESSAGES.get(field, err["msg"])
            self.errors = errors
        return self.errors

    # ---------------------------
    # Bildauswahl
    # ---------------------------

    def select_image(self, filename: str, content: bytes, content_type: str) -> None:
        if content_type not in CLIENT_IMAGE_TYPES:
            self.remove_image()
            raise ImageSelectionError("Please select a valid image file (JPEG or PNG)")
        try:
            preview = PreviewHandle.create(content)
        except (OSError, Image.DecompressionBombError) as exc:
            self.remove_image()
            raise ImageSelectionError(f"Error generating preview: {exc}") from exc
        self._release_preview()
        self._preview = preview
        self.selected = SelectedImage(filename, content, content_type)

    def remove_image(self) -> None:
        self.selected = None
        self._release_preview()

    def _release_preview(self) -> None:
        if self._preview is not None:
            self._preview.release()
            self._preview = None

    # ---------------------------
    # Modus
    # ---------------------------

    def start_edit(self, post: dict) -> None:
        self.reset()
        self.edit_id = post["id"]
        self.values = {
            "title": post.get("title", ""),
            "description": post.get("description", ""),
            "status": post.get("status", ""),
            "date": str(post.get("date", ""))[:10],
        }
        self._existing_image_url = post.get("imageUrl") or ""

    def cancel(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.values = {name: "" for name in FORM_FIELDS}
        self.errors = {}
        self.edit_id = None
        self._existing_image_url = ""
        self.remove_image()

    def close(self) -> None:
        self._release_preview()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ---------------------------
    # Submit
    # ---------------------------

    def build_payload(self, image_url_value: str) -> dict:
        return {
            "title": self.values["title"],
            "description": self.values["description"],
            "status": self.values["status"],
            "date": self.values["date"],
            "imageUrl": image_url_value,
        }

    def submit(self, client: PostsClient, persist: Callable[[dict, Optional[str]], object]):
        """
        Validate, upload (if an image was chosen), then persist.

        persist(payload, edit_id) does the create/update call. On success the
        form goes back to create mode; on any failure the state is kept.
        """
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)

        if self.selected is not None:
            try:
                new_url = client.upload_image(
                    self.selected.filename, self.selected.content, self.selected.content_type
                )
            except (ApiError, httpx.HTTPError) as exc:
                print(f"[form] image upload failed: {exc}")
                raise UploadFailed(str(exc)) from exc
        elif self.edit_id:
            new_url = self._existing_image_url
        else:
            new_url = ""

        result = persist(self.build_payload(new_url), self.edit_id)
        self.reset()
        return result
