from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""

    ocr_model: str = "claude-sonnet-4-5-20250929"  # Vision model for reading label photos
    knowledge_model: str = "claude-sonnet-4-5-20250929"

    # Anthropic API timeout settings (seconds)
    anthropic_timeout: int = 60
    anthropic_connect_timeout: int = 10

    # Knowledge source
    knowledge_max_tokens: int = 2048
    knowledge_max_retries: int = 2  # Schema retries after the first attempt
    ocr_max_tokens: int = 2048

    # Label image uploads
    upload_dir: str = "uploads/labels"
    max_image_width: int = 1920

    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
