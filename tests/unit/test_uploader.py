from unittest.mock import MagicMock

import pytest

from cvchat.database.repositories.cv_uploads_repository import CvUploadsRepository
from cvchat.processor.exceptions import UploadValidationError
from cvchat.processor.uploader import CvUploader
from cvchat.storage.file_store import LocalFileStore

PDF = b"%PDF-1.4 minimal"
MAX_BYTES = 5 * 1024 * 1024


def _make_uploader() -> tuple[CvUploader, MagicMock, MagicMock]:
    upload_repo = MagicMock(spec=CvUploadsRepository)
    file_store = MagicMock(spec=LocalFileStore)
    upload_repo.insert.return_value = "upload-1"
    file_store.store.return_value = "user-1/abc.pdf"
    uploader = CvUploader(upload_repo=upload_repo, file_store=file_store, max_upload_bytes=MAX_BYTES)
    return uploader, upload_repo, file_store


class TestRegister:
    def test_stores_bytes_and_inserts_record(self) -> None:
        uploader, upload_repo, file_store = _make_uploader()

        upload_id = uploader.register("user-1", PDF, "cv.pdf", "application/pdf")

        assert upload_id == "upload-1"
        file_store.store.assert_called_once_with(PDF, owner_id="user-1", filename="cv.pdf")
        upload_repo.insert.assert_called_once_with(
            owner_id="user-1",
            original_name="cv.pdf",
            stored_path="user-1/abc.pdf",
            mime_type="application/pdf",
        )

    def test_accepts_file_at_size_limit(self) -> None:
        uploader, _repo, file_store = _make_uploader()
        content = PDF + b"0" * (MAX_BYTES - len(PDF))

        uploader.register("user-1", content, "cv.pdf", "application/pdf")

        file_store.store.assert_called_once()

    def test_removes_stored_file_when_insert_fails(self) -> None:
        uploader, upload_repo, file_store = _make_uploader()
        upload_repo.insert.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError, match="db down"):
            uploader.register("user-1", PDF, "cv.pdf", "application/pdf")

        file_store.delete.assert_called_once_with("user-1/abc.pdf")


class TestValidation:
    @pytest.mark.parametrize(
        ("content", "filename", "mime_type", "message"),
        [
            (None, "", "", "No file uploaded"),
            (PDF, "cv.docx", "application/msword", "Only PDF files are allowed"),
            (b"", "cv.pdf", "application/pdf", "Uploaded file is empty"),
            (PDF + b"0" * MAX_BYTES, "cv.pdf", "application/pdf", r"File too large \(max 5 MB\)"),
            (b"PK\x03\x04 zip", "cv.pdf", "application/pdf", "File is not a valid PDF"),
        ],
    )
    def test_rejects_invalid_upload(
        self,
        content: bytes | None,
        filename: str,
        mime_type: str,
        message: str,
    ) -> None:
        uploader, upload_repo, file_store = _make_uploader()

        with pytest.raises(UploadValidationError, match=message):
            uploader.register("user-1", content, filename, mime_type)

        file_store.store.assert_not_called()
        upload_repo.insert.assert_not_called()
