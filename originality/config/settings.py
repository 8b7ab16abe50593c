from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    storage_base_path: Path = Path("uploads")
    pdf_engine: str = "pdfplumber"

    plagiarism_api_provider: str = "mock"
    plagiarism_api_key: str = ""
    plagiarism_api_url: str = ""
    copyleaks_email: str = ""
    public_base_url: str = "http://localhost:3000"
    provider_timeout_seconds: int = 30

    max_concurrent_submissions: int = 4
