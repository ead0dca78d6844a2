from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from cvchat.database.models import UploadRecord
from cvchat.structuring.models import SectionFlag


@dataclass(slots=True)
class PipelineContext:
    upload_id: str
    owner_id: str
    force: bool = False
    record: UploadRecord | None = None
    version: int = 0
    raw_bytes: bytes = b""
    raw_text: str = ""
    repaired_text: str = ""
    markdown: str = ""
    flags: frozenset[SectionFlag] = frozenset()
    prompts: list[str] = field(default_factory=list)
    summary: str = ""
    error_message: str = ""

    def require_record(self) -> UploadRecord:
        if self.record is None:
            raise ValueError("PipelineContext.record must be set by LoadUploadStep first")
        return self.record


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
