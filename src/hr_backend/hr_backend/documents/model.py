from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import DocumentStatus


@dataclass(frozen=True)
class EmployeeDocument:
    document_id: int
    user_id: int
    name: str
    type: str
    file_path: str
    file_size: Optional[int]
    mime_type: Optional[str]
    status: DocumentStatus
    created_at: Optional[datetime] = None
    employee: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.document_id,
            "user_id": self.user_id,
            "name": self.name,
            "type": self.type,
            "path": self.file_path,
            "file_size": self.file_size,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "employee": self.employee,
        }


@dataclass(frozen=True)
class StoredFile:
    """A file already written to the upload directory."""

    original_name: str
    path: str
    size: int
    mime_type: str


@dataclass(frozen=True)
class DocumentChanges:
    user_id: Optional[int] = None
    type: Optional[str] = None
    status: Optional[DocumentStatus] = None
    file: Optional[StoredFile] = None

    def is_empty(self) -> bool:
        return self.user_id is None and self.type is None and self.status is None and self.file is None
