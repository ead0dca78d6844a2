from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "cvchat"
    db_username: str = "cvchat"
    db_password: str = "secret"
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 30.0

    pdf_engine: str = "pdfplumber"

    files_root: Path = Path("uploads")
    max_upload_bytes: int = 5 * 1024 * 1024
    accepted_mime_type: str = "application/pdf"
    orphan_grace_seconds: int = 3600

    summary_length: int = 500
    max_prompts: int = 15
    lexicon_path: Path | None = None

    supabase_url: str = ""
    supabase_anon_key: str = ""
    auth_timeout_seconds: int = 10

    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: str = "http://localhost:5173"

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from a comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
