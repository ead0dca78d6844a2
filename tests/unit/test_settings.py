from pathlib import Path

import pytest
from pydantic import ValidationError

from cvchat.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_upload_limit(self) -> None:
        s = Settings()
        assert s.max_upload_bytes == 5 * 1024 * 1024
        assert s.accepted_mime_type == "application/pdf"

    def test_default_summary_and_prompt_cap(self) -> None:
        s = Settings()
        assert s.summary_length == 500
        assert s.max_prompts == 15

    def test_default_lexicon_is_bundled(self) -> None:
        s = Settings()
        assert s.lexicon_path is None


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_files_root(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FILES_ROOT", "/var/cvchat/uploads")
        s = Settings()
        assert s.files_root == Path("/var/cvchat/uploads")

    def test_loads_supabase_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
        s = Settings()
        assert s.supabase_url == "https://project.supabase.co"

    def test_parses_cors_origins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example,")
        s = Settings()
        assert s.get_cors_origins() == ["http://a.example", "http://b.example"]


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_max_prompts_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_PROMPTS", "abc")
        with pytest.raises(ValidationError):
            Settings()
