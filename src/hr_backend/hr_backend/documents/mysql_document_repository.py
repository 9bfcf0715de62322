from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import DocumentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DocumentChanges, EmployeeDocument, StoredFile
from .repository import DocumentRepository


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _where(user_id: Optional[int]) -> tuple[str, tuple]:
        if user_id is None:
            return "", ()
        return "WHERE ed.user_id=%s", (int(user_id),)

    def count(self, *, user_id: Optional[int] = None) -> int:
        where, params = self._where(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employee_documents ed {where}", params)
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_page(self, *, limit: int, offset: int, user_id: Optional[int] = None) -> Sequence[EmployeeDocument]:
        where, params = self._where(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ed.id, ed.user_id, ed.name, ed.type, ed.file_path, ed.file_size,
                       ed.mime_type, ed.status, ed.created_at, u.name AS employee
                FROM employee_documents ed
                JOIN users u ON ed.user_id = u.id
                {where}
                ORDER BY ed.created_at DESC
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), int(offset)),
            )
            return [
                EmployeeDocument(
                    document_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    name=r["name"],
                    type=r["type"],
                    file_path=r["file_path"],
                    file_size=int(r["file_size"]) if r.get("file_size") is not None else None,
                    mime_type=r.get("mime_type"),
                    status=DocumentStatus(r["status"]),
                    created_at=r.get("created_at"),
                    employee=r.get("employee"),
                )
                for r in fetchall(cur)
            ]

    def get_file_path(self, document_id: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT file_path FROM employee_documents WHERE id=%s", (int(document_id),))
            row = fetchone(cur)
            return row["file_path"] if row else None

    def insert(self, *, user_id: int, type: str, file: StoredFile, status: DocumentStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_documents(user_id, name, type, file_path, file_size, mime_type, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), file.original_name, type, file.path, file.size, file.mime_type, status.value),
            )
            return int(cur.lastrowid)

    def update(self, document_id: int, changes: DocumentChanges) -> bool:
        assignments: list[str] = []
        params: list[object] = []

        if changes.user_id is not None:
            assignments.append("user_id=%s")
            params.append(int(changes.user_id))
        if changes.type is not None:
            assignments.append("type=%s")
            params.append(changes.type)
        if changes.status is not None:
            assignments.append("status=%s")
            params.append(changes.status.value)
        if changes.file is not None:
            assignments.extend(["name=%s", "file_path=%s", "file_size=%s", "mime_type=%s"])
            params.extend([changes.file.original_name, changes.file.path, changes.file.size, changes.file.mime_type])

        if not assignments:
            return False

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employee_documents SET {', '.join(assignments)}, updated_at=CURRENT_TIMESTAMP WHERE id=%s",
                (*params, int(document_id)),
            )
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when nothing changed.
            cur.execute("SELECT 1 AS found FROM employee_documents WHERE id=%s", (int(document_id),))
            return fetchone(cur) is not None

    def delete(self, document_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_documents WHERE id=%s", (int(document_id),))
            return cur.rowcount > 0
