from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "taxdocs"
    db_username: str = "taxdocs"
    db_password: str = "secret"

    upload_dir: Path = Path("/tmp/uploads/documents")
    max_upload_bytes: int = 10 * 1024 * 1024

    auth_secret_key: str = "change-me"
    auth_algorithm: str = "HS256"

    google_cloud_project_id: str = ""
    google_cloud_location: str = "us"
    google_cloud_w2_processor_id: str = ""
    google_cloud_1099_processor_id: str = ""
    google_application_credentials: str = ""

    extraction_llm_provider: str = "openai_compatible"
    llm_api_key: str = ""
    llm_base_url: str = "https://apps.abacus.ai/v1"
    llm_model_name: str = "gpt-4.1-mini"
    llm_timeout_seconds: int = 60
    llm_max_tokens: int = 3000

    stream_chunk_size: int = 100
    stream_chunk_delay_seconds: float = 0.05

    @property
    def document_ai_configured(self) -> bool:
        """True when every value the Document AI provider needs is present."""
        return bool(
            self.google_cloud_project_id
            and self.google_cloud_w2_processor_id
            and self.google_application_credentials
        )
