import os
from collections.abc import Generator
from pathlib import Path

import pytest

from cvchat.config.settings import Settings
from cvchat.database.connection import Database
from cvchat.database.repositories.cv_uploads_repository import CvUploadsRepository

SCHEMA_PATH = Path(__file__).parents[2] / "cvchat" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "cvchat_test")
    os.environ.setdefault("DB_POOL_TIMEOUT_SECONDS", "3")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def database(test_settings: Settings) -> Generator[Database, None, None]:
    db: Database | None = None
    try:
        db = Database(test_settings)
        with db.connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        if db is not None:
            db.close()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def upload_repo(database: Database) -> CvUploadsRepository:
    return CvUploadsRepository(database)


@pytest.fixture
def integration_cleanup(database: Database) -> Generator[list[str], None, None]:
    upload_ids: list[str] = []
    yield upload_ids
    if not upload_ids:
        return
    with database.connection() as conn:
        with conn.cursor() as cur:
            for upload_id in upload_ids:
                cur.execute("DELETE FROM cv_uploads WHERE id = %s", (upload_id,))
        conn.commit()


@pytest.fixture
def seed_upload(
    upload_repo: CvUploadsRepository,
    integration_cleanup: list[str],
) -> str:
    upload_id = upload_repo.insert(
        owner_id="owner-a",
        original_name="cv.pdf",
        stored_path="owner-a/seed.pdf",
        mime_type="application/pdf",
    )
    integration_cleanup.append(upload_id)
    return upload_id
