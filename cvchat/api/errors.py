from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cvchat.logging.logger import Log
from cvchat.processor.exceptions import (
    AuthError,
    CvChatError,
    InvalidUploadStateError,
    StaleUploadError,
    UploadNotFoundError,
    UploadValidationError,
)

PROCESSING_FAILED_MESSAGE = "Failed to process the uploaded CV"

# First match wins; subclasses must precede their bases.
_STATUS_CODES: list[tuple[type[CvChatError], int]] = [
    (UploadValidationError, 400),
    (AuthError, 401),
    (UploadNotFoundError, 404),
    (InvalidUploadStateError, 400),
    (StaleUploadError, 409),
]


def status_code_for(exc: CvChatError) -> int:
    for error_cls, status_code in _STATUS_CODES:
        if isinstance(exc, error_cls):
            return status_code
    return 500


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CvChatError)
    async def handle_cvchat_error(request: Request, exc: CvChatError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code == 500:
            Log.error("Request failed", path=request.url.path, error=str(exc))
            return JSONResponse({"error": PROCESSING_FAILED_MESSAGE}, status_code=500)
        return JSONResponse({"error": str(exc)}, status_code=status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        Log.error(
            "Unhandled error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse({"error": PROCESSING_FAILED_MESSAGE}, status_code=500)
