from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.0-flash:generateContent"
)


class GeminiSettings(BaseSettings):
    """Endpoint, key and fixed generation parameters for one Gemini client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )
    api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    api_url: str = Field(default=DEFAULT_GEMINI_API_URL, alias="GEMINI_API_URL")
    temperature: float = Field(default=0.7, alias="GEMINI_TEMPERATURE")
    top_k: int = Field(default=40, alias="GEMINI_TOP_K")
    top_p: float = Field(default=0.8, alias="GEMINI_TOP_P")
    max_output_tokens: int = Field(default=1024, alias="GEMINI_MAX_OUTPUT_TOKENS")
    max_retries: int = Field(default=3, ge=0, alias="GEMINI_MAX_RETRIES")
    timeout_seconds: float = Field(default=30.0, alias="GEMINI_TIMEOUT_SECONDS")

    @computed_field
    def is_configured(self) -> bool:
        return bool(self.api_key) and self.api_key != "your-gemini-api-key-here"


class ObservabilitySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    bad_responses_log: str = Field(
        default="logs/bad_responses.log", alias="BAD_RESPONSES_LOG"
    )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="study-buddy", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=4000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    gemini: GeminiSettings = Field(default_factory=lambda: GeminiSettings())
    observability: ObservabilitySettings = Field(
        default_factory=lambda: ObservabilitySettings()
    )


settings = Settings()
