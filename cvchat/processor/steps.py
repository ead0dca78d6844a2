from cvchat.database.models import UploadStatus
from cvchat.database.repositories.cv_uploads_repository import CvUploadsRepository
from cvchat.logging.logger import Log
from cvchat.pdf.base import BasePdfExtractor
from cvchat.processor.exceptions import (
    ExtractionError,
    InvalidUploadStateError,
    UploadFileMissingError,
)
from cvchat.processor.pipeline import PipelineContext, PipelineStep
from cvchat.storage.file_store import LocalFileStore
from cvchat.structuring.structurer import CvStructurer

TRUNCATION_MARKER = "..."


def summarize(markdown: str, length: int) -> str:
    """First `length` characters, with a truncation marker when cut."""
    if len(markdown) <= length:
        return markdown
    return markdown[:length] + TRUNCATION_MARKER


class LoadUploadStep(PipelineStep):
    """Fetch the owner's upload and enforce the state machine.

    A non-`uploaded` record is only accepted with force, and only after its stored
    bytes are confirmed to still exist; the record is then reset to `uploaded`.
    """

    def __init__(self, upload_repo: CvUploadsRepository, file_store: LocalFileStore) -> None:
        self._upload_repo = upload_repo
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        record = self._upload_repo.find_for_owner(context.upload_id, context.owner_id)
        context.record = record
        context.version = record.version
        if record.status == UploadStatus.UPLOADED:
            return context

        if not context.force:
            raise InvalidUploadStateError(f"Cannot re-process a '{record.status}' upload")
        if not self._file_store.exists(record.raw_file_ref):
            raise UploadFileMissingError(
                f"Cannot re-process upload {record.id}: its file is no longer available"
            )
        context.version = self._upload_repo.reset_for_reprocess(record.id, record.version)
        Log.info(
            "Upload reset for forced reprocess",
            upload_id=record.id,
            previous_status=record.status,
        )
        return context


class ReadFileStep(PipelineStep):
    def __init__(self, file_store: LocalFileStore) -> None:
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        record = context.require_record()
        context.raw_bytes = self._file_store.read(record.raw_file_ref)
        Log.info("Loaded upload bytes", upload_id=record.id, bytes=len(context.raw_bytes))
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.raw_text = self._pdf_extractor.extract(context.raw_bytes)
        if not context.raw_text.strip():
            raise ExtractionError("No text could be extracted from the PDF")
        Log.info("Extracted raw text", upload_id=context.upload_id, chars=len(context.raw_text))
        return context


class RepairTextStep(PipelineStep):
    def __init__(self, structurer: CvStructurer) -> None:
        self._structurer = structurer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.repaired_text = self._structurer.repair(context.raw_text)
        return context


class StructureMarkdownStep(PipelineStep):
    def __init__(self, structurer: CvStructurer) -> None:
        self._structurer = structurer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.markdown = self._structurer.to_markdown(context.repaired_text)
        if not context.markdown:
            raise ExtractionError("Extracted text is empty after structuring")
        Log.info("Structured markdown", upload_id=context.upload_id, chars=len(context.markdown))
        return context


class ExtractSectionsStep(PipelineStep):
    def __init__(self, structurer: CvStructurer) -> None:
        self._structurer = structurer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.flags = self._structurer.sections(context.markdown)
        Log.debug(
            "Detected CV sections",
            upload_id=context.upload_id,
            sections=",".join(sorted(context.flags)),
        )
        return context


class GeneratePromptsStep(PipelineStep):
    def __init__(self, structurer: CvStructurer) -> None:
        self._structurer = structurer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.prompts = self._structurer.prompts(context.markdown, context.flags)
        Log.info("Generated prompts", upload_id=context.upload_id, prompts=len(context.prompts))
        return context


class SummarizeStep(PipelineStep):
    def __init__(self, summary_length: int) -> None:
        self._summary_length = summary_length

    def run(self, context: PipelineContext) -> PipelineContext:
        context.summary = summarize(context.markdown, self._summary_length)
        return context


class PersistProcessedStep(PipelineStep):
    def __init__(self, upload_repo: CvUploadsRepository) -> None:
        self._upload_repo = upload_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._upload_repo.mark_processed(
            context.upload_id,
            context.version,
            extracted_text=context.markdown,
            prompts=context.prompts,
        )
        context.version += 1
        Log.info("Upload marked as processed", upload_id=context.upload_id)
        return context


class ReleaseFileStep(PipelineStep):
    """Best-effort delete of the stored bytes once `processed` is committed.

    A failed delete leaves an orphan for OrphanSweeper instead of failing a run
    whose result is already persisted.
    """

    def __init__(self, file_store: LocalFileStore) -> None:
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        record = context.require_record()
        try:
            self._file_store.delete(record.raw_file_ref)
        except OSError as exc:
            Log.warning(
                "Could not release upload file, leaving it for the sweeper",
                upload_id=record.id,
                error=str(exc),
            )
        return context


class MarkErrorStep(PipelineStep):
    def __init__(self, upload_repo: CvUploadsRepository) -> None:
        self._upload_repo = upload_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        written = self._upload_repo.mark_error(
            context.upload_id,
            context.version,
            context.error_message,
        )
        if written:
            Log.error(
                "Upload marked as error",
                upload_id=context.upload_id,
                error=context.error_message,
            )
        else:
            Log.warning(
                "Upload changed concurrently, error state not written",
                upload_id=context.upload_id,
                error=context.error_message,
            )
        return context
