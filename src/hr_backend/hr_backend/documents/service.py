from __future__ import annotations

import logging
from typing import Any, Optional

from werkzeug.datastructures import FileStorage

from ..common.pagination import Page, PageRequest
from ..common.validators import require_choice, require_int, require_non_empty
from ..core.enums import DocumentStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import DocumentChanges, EmployeeDocument, StoredFile
from .repository import DocumentRepository
from .storage import DocumentStorage

logger = logging.getLogger(__name__)


class DocumentService:
    """Employee documents: metadata in the record store, bytes in ``DocumentStorage``."""

    def __init__(self, documents: DocumentRepository, storage: DocumentStorage):
        self._documents = documents
        self._storage = storage

    def list_documents(self, page: PageRequest, *, user_id: Optional[int] = None) -> Page[EmployeeDocument]:
        total = self._documents.count(user_id=user_id)
        items = self._documents.list_page(limit=page.per_page, offset=page.offset, user_id=user_id)
        return Page(items=list(items), total=total, request=page)

    def upload(self, *, user_id: Any, type: Any, file: Optional[FileStorage]) -> int:
        owner = require_int(user_id, "user_id", min_value=1)
        doc_type = require_non_empty(type, "type", max_len=100)
        stored = self._storage.save(file)

        try:
            document_id = self._documents.insert(
                user_id=owner, type=doc_type, file=stored, status=DocumentStatus.ACTIVE
            )
        except Exception:
            self._storage.remove(stored.path)
            raise

        logger.info("document uploaded id=%s user_id=%s", document_id, owner)
        return document_id

    def update(
        self,
        document_id: int,
        *,
        user_id: Any = None,
        type: Any = None,
        status: Any = None,
        file: Optional[FileStorage] = None,
    ) -> None:
        old_path = self._documents.get_file_path(document_id)
        if old_path is None:
            raise NotFoundError("Document not found")

        owner = require_int(user_id, "user_id", min_value=1) if user_id not in (None, "") else None
        doc_type = require_non_empty(type, "type", max_len=100) if type not in (None, "") else None
        doc_status = require_choice(status, DocumentStatus, "status") if status not in (None, "") else None
        stored: Optional[StoredFile] = self._storage.save(file) if file is not None and file.filename else None

        changes = DocumentChanges(user_id=owner, type=doc_type, status=doc_status, file=stored)
        if changes.is_empty():
            raise ValidationError("No fields to update")

        try:
            updated = self._documents.update(document_id, changes)
        except Exception:
            if stored:
                self._storage.remove(stored.path)
            raise

        if not updated:
            if stored:
                self._storage.remove(stored.path)
            raise NotFoundError("Document not found")

        if stored:
            self._storage.remove(old_path)

    def delete(self, document_id: int) -> None:
        path = self._documents.get_file_path(document_id)
        if path is None:
            raise NotFoundError("Document not found")
        self._documents.delete(document_id)
        self._storage.remove(path)
        logger.info("document deleted id=%s", document_id)
