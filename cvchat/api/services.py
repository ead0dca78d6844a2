from dataclasses import dataclass

from cvchat.auth.base import BaseIdentityProvider
from cvchat.processor.processor import Processor
from cvchat.processor.uploader import CvUploader


@dataclass(frozen=True)
class AppServices:
    """Collaborators the routes need, built by the composition root."""

    identity_provider: BaseIdentityProvider
    uploader: CvUploader
    processor: Processor
    max_upload_bytes: int
