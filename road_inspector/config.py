from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_key: str = ""  # empty = no auth check (local dev)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_base_url: str = ""
    openai_timeout_seconds: float = 60.0
    analysis_max_tokens: int = 1500
    analysis_temperature: float = 0.3
    max_image_size_bytes: int = 10 * 1024 * 1024  # 10MB
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
