from __future__ import annotations

import logging
import os
import random
import time
from pathlib import Path
from typing import Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.exceptions import ValidationError
from .model import StoredFile

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


class DocumentStorage:
    """Keeps uploaded employee documents on local disk."""

    def __init__(self, upload_dir: str | os.PathLike):
        self._upload_dir = Path(upload_dir)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    def _unique_name(self, original: str) -> str:
        ext = Path(secure_filename(original) or "").suffix.lower()
        return f"file-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"

    def save(self, upload: Optional[FileStorage]) -> StoredFile:
        if upload is None or not upload.filename:
            raise ValidationError("File is required", [{"field": "file", "message": "required"}])
        if upload.mimetype not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                "Invalid file type. Only PDF and DOC files are allowed.",
                [{"field": "file", "message": "invalid file type"}],
            )

        self._upload_dir.mkdir(parents=True, exist_ok=True)
        target = self._upload_dir / self._unique_name(upload.filename)
        upload.save(str(target))

        logger.info("document stored path=%s", target)
        return StoredFile(
            original_name=upload.filename,
            path=str(target),
            size=target.stat().st_size,
            mime_type=upload.mimetype,
        )

    def remove(self, path: Optional[str]) -> None:
        if not path:
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning("document file already gone path=%s", path)
