from collections.abc import Sequence

from cvchat.config.settings import Settings
from cvchat.database.repositories.cv_uploads_repository import CvUploadsRepository
from cvchat.logging.logger import Log
from cvchat.pdf.base import BasePdfExtractor
from cvchat.pdf.factory import PdfExtractorFactory
from cvchat.processor.exceptions import StaleUploadError
from cvchat.processor.models import ProcessResult
from cvchat.processor.pipeline import PipelineContext, PipelineStep
from cvchat.processor.steps import (
    ExtractSectionsStep,
    ExtractTextStep,
    GeneratePromptsStep,
    LoadUploadStep,
    MarkErrorStep,
    PersistProcessedStep,
    ReadFileStep,
    ReleaseFileStep,
    RepairTextStep,
    StructureMarkdownStep,
    SummarizeStep,
)
from cvchat.storage.file_store import LocalFileStore
from cvchat.structuring.structurer import CvStructurer


class Processor:
    """Runs the processing state machine for one upload.

    Preflight steps (lookup, state check, forced reset) reject a request without
    touching the record. Any failure in the main steps is persisted through
    failed_step as the `error` state and re-raised.
    """

    def __init__(
        self,
        preflight: Sequence[PipelineStep],
        steps: Sequence[PipelineStep],
        failed_step: PipelineStep,
    ) -> None:
        self._preflight = list(preflight)
        self._steps = list(steps)
        self._failed_step = failed_step

    def process(self, upload_id: str, owner_id: str, force: bool = False) -> ProcessResult:
        """Process an upload: read -> extract -> repair -> structure -> prompts -> persist."""
        Log.info("Processing upload", upload_id=upload_id, force=force)
        context = PipelineContext(upload_id=upload_id, owner_id=owner_id, force=force)
        for step in self._preflight:
            context = step.run(context)

        try:
            for step in self._steps:
                context = step.run(context)
        except StaleUploadError:
            Log.warning("Upload was processed concurrently", upload_id=upload_id)
            raise
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            self._failed_step.run(context)
            raise

        return ProcessResult(
            summary=context.summary,
            extracted_text=context.markdown,
            prompts=list(context.prompts),
        )


def build_processor(
    settings: Settings,
    upload_repo: CvUploadsRepository,
    file_store: LocalFileStore,
    structurer: CvStructurer,
    pdf_extractor: BasePdfExtractor | None = None,
) -> Processor:
    """Build a Processor wired with the standard step sequence."""
    if pdf_extractor is None:
        pdf_extractor = PdfExtractorFactory.create(settings)
    return Processor(
        preflight=[LoadUploadStep(upload_repo=upload_repo, file_store=file_store)],
        steps=[
            ReadFileStep(file_store=file_store),
            ExtractTextStep(pdf_extractor=pdf_extractor),
            RepairTextStep(structurer=structurer),
            StructureMarkdownStep(structurer=structurer),
            ExtractSectionsStep(structurer=structurer),
            GeneratePromptsStep(structurer=structurer),
            SummarizeStep(summary_length=settings.summary_length),
            PersistProcessedStep(upload_repo=upload_repo),
            ReleaseFileStep(file_store=file_store),
        ],
        failed_step=MarkErrorStep(upload_repo=upload_repo),
    )
