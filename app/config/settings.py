from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    app_name: str = "PDF to Blog service"
    app_version: str = "development"

    host: str = "0.0.0.0"
    port: int = 5018
    cors_origins: list[str] = [
        "http://localhost:8080",
        "http://127.0.0.1:8080",
        "http://localhost:5173",
    ]

    max_upload_bytes: int = 50 * 1024 * 1024

    extraction_provider: str = "mistral"
    extraction_timeout_seconds: int = 120
    mistral_api_key: str = ""
    mistral_base_url: str = "https://api.mistral.ai/v1"
    mistral_ocr_model: str = "mistral-ocr-latest"

    vision_provider: str = "openai"
    vision_api_key: str = ""
    vision_base_url: str = ""
    vision_model_name: str = "gpt-4o"
    vision_max_tokens: int = 4000
    vision_timeout_seconds: int = 120

    generation_provider: str = "mistral"
    generation_api_key: str = ""
    generation_base_url: str = ""
    generation_model_name: str = "mistral-large-latest"
    generation_temperature: float = 0.7
    generation_timeout_seconds: int = 60

    blog_response_model: str = "mistral-ocr-v1.0"
    component_response_model: str = "vision-v1.0"
