from fastapi import APIRouter, Depends, File, UploadFile, status

from cvchat.api.dependencies import get_current_principal, get_services
from cvchat.api.services import AppServices

router = APIRouter(prefix="/cv", tags=["cv"])


@router.post("/upload", status_code=status.HTTP_201_CREATED)
def upload_cv(
    file: UploadFile | None = File(default=None),
    owner_id: str = Depends(get_current_principal),
    services: AppServices = Depends(get_services),
) -> dict[str, str]:
    """Store a PDF and register it as `uploaded`."""
    content: bytes | None = None
    filename = ""
    mime_type = ""
    if file is not None:
        # One byte past the limit is enough for the uploader to reject it.
        content = file.file.read(services.max_upload_bytes + 1)
        filename = file.filename or ""
        mime_type = file.content_type or ""
    upload_id = services.uploader.register(owner_id, content, filename, mime_type)
    return {"uploadId": upload_id, "message": "PDF uploaded successfully"}


@router.post("/{upload_id}/prompts")
def generate_prompts(
    upload_id: str,
    force: bool = False,
    owner_id: str = Depends(get_current_principal),
    services: AppServices = Depends(get_services),
) -> dict[str, object]:
    """Process an upload into structured markdown and suggested prompts."""
    result = services.processor.process(upload_id, owner_id, force=force)
    return {
        "extractedText": result.summary,
        "markdownContent": result.extracted_text,
        "examplePrompts": result.prompts,
    }
