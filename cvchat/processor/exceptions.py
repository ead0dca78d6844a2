class CvChatError(Exception):
    """Base exception for all upload and processing errors."""


class UploadValidationError(CvChatError):
    """Raised when an upload is missing, too large, or not an accepted document type."""


class AuthError(CvChatError):
    """Raised when a bearer credential is missing, invalid, or expired."""


class UploadNotFoundError(CvChatError):
    """Raised when an upload does not exist or belongs to another principal."""


class UploadFileMissingError(UploadNotFoundError):
    """Raised when the stored bytes of an upload are no longer available."""


class InvalidUploadStateError(CvChatError):
    """Raised when processing is requested for a non-uploaded record without force."""


class StaleUploadError(CvChatError):
    """Raised when an upload changed concurrently between read and write."""


class ExtractionError(CvChatError):
    """Raised when raw text extraction fails or yields no usable text."""
