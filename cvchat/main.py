import uvicorn
from fastapi import FastAPI

from cvchat.api.app import create_app
from cvchat.api.services import AppServices
from cvchat.auth.supabase_identity import SupabaseIdentityProvider
from cvchat.config.settings import Settings
from cvchat.database.connection import Database
from cvchat.database.repositories.cv_uploads_repository import CvUploadsRepository
from cvchat.logging.logger import Log
from cvchat.processor.processor import build_processor
from cvchat.processor.uploader import CvUploader
from cvchat.storage.file_store import LocalFileStore
from cvchat.storage.sweeper import OrphanSweeper
from cvchat.structuring.lexicon_loader import load_lexicon
from cvchat.structuring.structurer import CvStructurer


def build_application(settings: Settings) -> FastAPI:
    """Wire database, storage, structuring and auth into the HTTP app."""
    lexicon = load_lexicon(settings.lexicon_path)
    database = Database(settings)
    identity_provider = SupabaseIdentityProvider(
        base_url=settings.supabase_url,
        api_key=settings.supabase_anon_key,
        timeout_seconds=settings.auth_timeout_seconds,
    )
    upload_repo = CvUploadsRepository(database)
    file_store = LocalFileStore(settings.files_root)
    structurer = CvStructurer(lexicon, max_prompts=settings.max_prompts)

    services = AppServices(
        identity_provider=identity_provider,
        uploader=CvUploader(
            upload_repo=upload_repo,
            file_store=file_store,
            max_upload_bytes=settings.max_upload_bytes,
            accepted_mime_type=settings.accepted_mime_type,
        ),
        processor=build_processor(settings, upload_repo, file_store, structurer),
        max_upload_bytes=settings.max_upload_bytes,
    )

    def shutdown() -> None:
        identity_provider.close()
        database.close()
        Log.info("cvchat stopped")

    return create_app(services, settings, on_shutdown=shutdown)


def serve() -> None:
    """Entry point: settings -> logging -> dependencies -> HTTP server."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = build_application(settings)
    Log.info("cvchat starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


def sweep() -> None:
    """Entry point: delete stored upload files that no record still needs."""
    settings = Settings()
    Log.configure(settings.log_level)
    database = Database(settings)
    try:
        sweeper = OrphanSweeper(
            file_store=LocalFileStore(settings.files_root),
            upload_repo=CvUploadsRepository(database),
            grace_seconds=settings.orphan_grace_seconds,
        )
        sweeper.sweep()
    finally:
        database.close()


if __name__ == "__main__":
    serve()
