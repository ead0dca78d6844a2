from cvchat.database.repositories.cv_uploads_repository import CvUploadsRepository
from cvchat.logging.logger import Log
from cvchat.storage.file_store import LocalFileStore


class OrphanSweeper:
    """Deletes stored files no upload still needs.

    A file is kept while its record is `uploaded` or `error` (a forced reprocess may
    still read it). Files younger than the grace period are skipped so an upload
    whose record is not committed yet is never swept.
    """

    def __init__(
        self,
        file_store: LocalFileStore,
        upload_repo: CvUploadsRepository,
        grace_seconds: int,
    ) -> None:
        self._file_store = file_store
        self._upload_repo = upload_repo
        self._grace_seconds = grace_seconds

    def sweep(self) -> int:
        """Delete orphaned files and return how many were removed."""
        candidates = self._file_store.list_refs(older_than_seconds=self._grace_seconds)
        if not candidates:
            Log.debug("No stored files old enough to sweep")
            return 0
        retained = self._upload_repo.find_retained_refs()
        removed = 0
        for ref in candidates:
            if ref in retained:
                continue
            try:
                self._file_store.delete(ref)
            except OSError as exc:
                Log.warning("Could not delete orphaned file", ref=ref, error=str(exc))
                continue
            removed += 1
        Log.info("Orphan sweep finished", checked=len(candidates), removed=removed)
        return removed
