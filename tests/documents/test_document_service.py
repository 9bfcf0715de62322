from __future__ import annotations

import io
import os
from dataclasses import replace

import pytest
from werkzeug.datastructures import FileStorage

from src.hr_backend.hr_backend.common.pagination import PageRequest
from src.hr_backend.hr_backend.core.enums import DocumentStatus
from src.hr_backend.hr_backend.core.exceptions import InfrastructureError, NotFoundError, ValidationError
from src.hr_backend.hr_backend.documents.model import EmployeeDocument
from src.hr_backend.hr_backend.documents.service import DocumentService
from src.hr_backend.hr_backend.documents.storage import DocumentStorage

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _upload(name: str = "contract.pdf", content_type: str = PDF, data: bytes = b"%PDF-1.4 test") -> FileStorage:
    return FileStorage(stream=io.BytesIO(data), filename=name, content_type=content_type)


class InMemoryDocuments:
    def __init__(self):
        self.docs: dict[int, EmployeeDocument] = {}
        self.fail_writes = False

    def count(self, *, user_id=None):
        return len(self.list_page(limit=10**6, offset=0, user_id=user_id))

    def list_page(self, *, limit, offset, user_id=None):
        items = [d for d in self.docs.values() if user_id is None or d.user_id == user_id]
        return sorted(items, key=lambda d: d.document_id, reverse=True)[offset : offset + limit]

    def get_file_path(self, document_id):
        doc = self.docs.get(document_id)
        return doc.file_path if doc else None

    def insert(self, *, user_id, type, file, status):
        if self.fail_writes:
            raise InfrastructureError("store down")
        new_id = len(self.docs) + 1
        self.docs[new_id] = EmployeeDocument(
            document_id=new_id,
            user_id=user_id,
            name=file.original_name,
            type=type,
            file_path=file.path,
            file_size=file.size,
            mime_type=file.mime_type,
            status=status,
        )
        return new_id

    def update(self, document_id, changes):
        if self.fail_writes:
            raise InfrastructureError("store down")
        doc = self.docs.get(document_id)
        if doc is None:
            return False
        if changes.type is not None:
            doc = replace(doc, type=changes.type)
        if changes.status is not None:
            doc = replace(doc, status=changes.status)
        if changes.file is not None:
            doc = replace(doc, name=changes.file.original_name, file_path=changes.file.path)
        self.docs[document_id] = doc
        return True

    def delete(self, document_id):
        return self.docs.pop(document_id, None) is not None


@pytest.fixture
def docs_repo():
    return InMemoryDocuments()


@pytest.fixture
def service(docs_repo, tmp_path):
    return DocumentService(docs_repo, DocumentStorage(tmp_path / "uploads"))


def test_upload_stores_file_and_activates(service, docs_repo, tmp_path):
    doc_id = service.upload(user_id="3", type="contract", file=_upload())

    doc = docs_repo.docs[doc_id]
    assert doc.status is DocumentStatus.ACTIVE
    assert doc.name == "contract.pdf"
    assert doc.user_id == 3
    assert os.path.exists(doc.file_path)
    assert os.path.basename(doc.file_path).startswith("file-")
    assert doc.file_path.endswith(".pdf")
    assert doc.file_size == len(b"%PDF-1.4 test")


def test_upload_rejects_other_mime_types(service, tmp_path):
    with pytest.raises(ValidationError, match="Invalid file type"):
        service.upload(user_id=3, type="photo", file=_upload("me.png", "image/png"))

    assert not (tmp_path / "uploads").exists() or not any((tmp_path / "uploads").iterdir())


def test_upload_requires_file_and_fields(service):
    with pytest.raises(ValidationError, match="File is required"):
        service.upload(user_id=3, type="contract", file=None)
    with pytest.raises(ValidationError):
        service.upload(user_id=0, type="contract", file=_upload())
    with pytest.raises(ValidationError):
        service.upload(user_id=3, type="  ", file=_upload())


def test_failed_insert_removes_stored_file(service, docs_repo, tmp_path):
    docs_repo.fail_writes = True

    with pytest.raises(InfrastructureError):
        service.upload(user_id=3, type="contract", file=_upload())

    assert list((tmp_path / "uploads").iterdir()) == []


def test_replacing_file_deletes_previous_one(service, docs_repo):
    doc_id = service.upload(user_id=3, type="contract", file=_upload())
    old_path = docs_repo.docs[doc_id].file_path

    service.update(doc_id, status="archived", file=_upload("contract-v2.docx", DOCX, b"PK\x03\x04"))

    doc = docs_repo.docs[doc_id]
    assert doc.status is DocumentStatus.ARCHIVED
    assert doc.name == "contract-v2.docx"
    assert not os.path.exists(old_path)
    assert os.path.exists(doc.file_path)


def test_update_validation(service, docs_repo):
    doc_id = service.upload(user_id=3, type="contract", file=_upload())

    with pytest.raises(ValidationError, match="No fields to update"):
        service.update(doc_id)
    with pytest.raises(ValidationError):
        service.update(doc_id, status="deleted")
    with pytest.raises(NotFoundError):
        service.update(999, type="payslip")


def test_delete_removes_row_and_file(service, docs_repo):
    doc_id = service.upload(user_id=3, type="contract", file=_upload())
    path = docs_repo.docs[doc_id].file_path

    service.delete(doc_id)

    assert doc_id not in docs_repo.docs
    assert not os.path.exists(path)
    with pytest.raises(NotFoundError):
        service.delete(doc_id)


def test_list_documents_filters_by_owner(service):
    service.upload(user_id=3, type="contract", file=_upload())
    service.upload(user_id=4, type="contract", file=_upload())
    service.upload(user_id=3, type="payslip", file=_upload())

    page = service.list_documents(PageRequest(), user_id=3)

    assert page.total == 2
    assert [d.type for d in page.items] == ["payslip", "contract"]
