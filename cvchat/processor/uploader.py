from cvchat.database.repositories.cv_uploads_repository import CvUploadsRepository
from cvchat.logging.logger import Log
from cvchat.processor.exceptions import UploadValidationError
from cvchat.storage.file_store import LocalFileStore

PDF_MAGIC = b"%PDF-"


class CvUploader:
    """Validates an uploaded CV, stores its bytes and registers an `uploaded` record."""

    def __init__(
        self,
        upload_repo: CvUploadsRepository,
        file_store: LocalFileStore,
        max_upload_bytes: int,
        accepted_mime_type: str = "application/pdf",
    ) -> None:
        self._upload_repo = upload_repo
        self._file_store = file_store
        self._max_upload_bytes = max_upload_bytes
        self._accepted_mime_type = accepted_mime_type

    def register(
        self,
        owner_id: str,
        content: bytes | None,
        filename: str,
        mime_type: str,
    ) -> str:
        """Store the file and create its upload record.

        Returns:
            The new upload id.

        Raises:
            UploadValidationError: if no file, the wrong type, or too many bytes were sent.
        """
        pdf_bytes = self._validated(content, filename, mime_type)
        ref = self._file_store.store(pdf_bytes, owner_id=owner_id, filename=filename)
        try:
            upload_id = self._upload_repo.insert(
                owner_id=owner_id,
                original_name=filename,
                stored_path=ref,
                mime_type=mime_type,
            )
        except Exception:
            self._file_store.delete(ref)
            raise
        Log.info("Registered upload", upload_id=upload_id, owner_id=owner_id, bytes=len(pdf_bytes))
        return upload_id

    def _validated(self, content: bytes | None, filename: str, mime_type: str) -> bytes:
        if content is None or not filename:
            raise UploadValidationError("No file uploaded")
        if mime_type != self._accepted_mime_type:
            raise UploadValidationError("Only PDF files are allowed")
        if not content:
            raise UploadValidationError("Uploaded file is empty")
        if len(content) > self._max_upload_bytes:
            limit_mib = self._max_upload_bytes / (1024 * 1024)
            raise UploadValidationError(f"File too large (max {limit_mib:g} MB)")
        if not content.startswith(PDF_MAGIC):
            raise UploadValidationError("File is not a valid PDF")
        return content
