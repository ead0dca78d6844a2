from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class UploadStatus(StrEnum):
    UPLOADED = "uploaded"
    PROCESSED = "processed"
    ERROR = "error"


@dataclass
class UploadRecord:
    """Represents a row from the cv_uploads table."""

    id: str
    owner_id: str
    status: UploadStatus
    raw_file_ref: str
    original_name: str = ""
    mime_type: str = ""
    extracted_text: str | None = None
    prompts: list[str] = field(default_factory=list)
    error_message: str | None = None
    processed_at: datetime | None = None
    created_at: datetime | None = None
    version: int = 0
