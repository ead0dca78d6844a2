import uuid
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from cvchat.database.connection import Database
from cvchat.database.models import UploadRecord, UploadStatus
from cvchat.processor.exceptions import StaleUploadError, UploadNotFoundError


class CvUploadsRepository:
    """Database operations for the cv_uploads table.

    Every state-changing write checks and bumps `version`, so two concurrent
    processing runs on one upload cannot both commit.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def insert(
        self,
        owner_id: str,
        original_name: str,
        stored_path: str,
        mime_type: str,
    ) -> str:
        """Insert a new upload in the `uploaded` state and return its id."""
        with self._database.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO cv_uploads
                        (user_id, original_name, stored_path, mimetype, status)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (owner_id, original_name, stored_path, mime_type, UploadStatus.UPLOADED.value),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT INTO cv_uploads returned no id")
        return str(row[0])

    def find_for_owner(self, upload_id: str, owner_id: str) -> UploadRecord:
        """Find an upload by id, scoped to its owner.

        Raises:
            UploadNotFoundError: if the upload does not exist or belongs to someone else.
        """
        if not _is_uuid(upload_id):
            raise UploadNotFoundError(f"Upload {upload_id} not found")
        with self._database.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, status, stored_path, original_name, mimetype,
                           extracted_text, prompts, error_msg, processed_at,
                           created_at, version
                    FROM cv_uploads
                    WHERE id = %s AND user_id = %s
                    """,
                    (upload_id, owner_id),
                )
                row = cur.fetchone()

        if row is None:
            raise UploadNotFoundError(f"Upload {upload_id} not found")
        return _record_from_row(row)

    def reset_for_reprocess(self, upload_id: str, expected_version: int) -> int:
        """Put a processed or failed upload back into `uploaded`.

        Returns:
            The new record version.

        Raises:
            StaleUploadError: if the record changed since it was read.
        """
        with self._database.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE cv_uploads
                    SET status = %s, error_msg = NULL, processed_at = NULL,
                        extracted_text = NULL, prompts = NULL,
                        version = version + 1
                    WHERE id = %s AND version = %s
                    RETURNING version
                    """,
                    (UploadStatus.UPLOADED.value, upload_id, expected_version),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise StaleUploadError(f"Upload {upload_id} changed concurrently")
        return int(row[0])

    def mark_processed(
        self,
        upload_id: str,
        expected_version: int,
        extracted_text: str,
        prompts: list[str],
    ) -> None:
        """Persist the structured markdown and prompts.

        Raises:
            StaleUploadError: if the record changed since it was read.
        """
        with self._database.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE cv_uploads
                    SET status = %s, extracted_text = %s, prompts = %s,
                        error_msg = NULL, processed_at = NOW(),
                        version = version + 1
                    WHERE id = %s AND version = %s
                    """,
                    (
                        UploadStatus.PROCESSED.value,
                        extracted_text,
                        Jsonb(prompts),
                        upload_id,
                        expected_version,
                    ),
                )
                updated = cur.rowcount
            conn.commit()
        if updated == 0:
            raise StaleUploadError(f"Upload {upload_id} changed concurrently")

    def mark_error(self, upload_id: str, expected_version: int, error_message: str) -> bool:
        """Persist a processing failure.

        Returns:
            False when the record changed concurrently and nothing was written.
        """
        with self._database.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE cv_uploads
                    SET status = %s, error_msg = %s, processed_at = NOW(),
                        version = version + 1
                    WHERE id = %s AND version = %s
                    """,
                    (UploadStatus.ERROR.value, error_message, upload_id, expected_version),
                )
                updated = cur.rowcount
            conn.commit()
        return updated > 0

    def find_retained_refs(self) -> set[str]:
        """Stored paths still needed by `uploaded` or `error` records."""
        with self._database.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT stored_path FROM cv_uploads WHERE status IN (%s, %s)",
                    (UploadStatus.UPLOADED.value, UploadStatus.ERROR.value),
                )
                rows = cur.fetchall()
        return {row[0] for row in rows}


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def _record_from_row(row: dict[str, Any]) -> UploadRecord:
    return UploadRecord(
        id=str(row["id"]),
        owner_id=row["user_id"],
        status=UploadStatus(row["status"]),
        raw_file_ref=row["stored_path"],
        original_name=row["original_name"],
        mime_type=row["mimetype"],
        extracted_text=row["extracted_text"],
        prompts=list(row["prompts"] or []),
        error_message=row["error_msg"],
        processed_at=row["processed_at"],
        created_at=row["created_at"],
        version=row["version"],
    )
