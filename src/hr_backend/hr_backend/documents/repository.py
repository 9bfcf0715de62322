from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import DocumentStatus
from .model import DocumentChanges, EmployeeDocument, StoredFile


class DocumentRepository(Protocol):
    def count(self, *, user_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def list_page(self, *, limit: int, offset: int, user_id: Optional[int] = None) -> Sequence[EmployeeDocument]:
        raise NotImplementedError

    def get_file_path(self, document_id: int) -> Optional[str]:
        raise NotImplementedError

    def insert(self, *, user_id: int, type: str, file: StoredFile, status: DocumentStatus) -> int:
        raise NotImplementedError

    def update(self, document_id: int, changes: DocumentChanges) -> bool:
        raise NotImplementedError

    def delete(self, document_id: int) -> bool:
        raise NotImplementedError
