from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────────────────────────
    app_name: str = "AI Agent Store"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # ── Store ────────────────────────────────────────────────────────────────
    store_backend: Literal["supabase", "dynamodb"] = Field(
        default="supabase", alias="STORE_BACKEND"
    )

    # ── Supabase ─────────────────────────────────────────────────────────────
    supabase_url: str = Field(default="", alias="SUPABASE_URL")
    supabase_key: str = Field(default="", alias="SUPABASE_KEY")
    supabase_table: str = Field(default="agents", alias="SUPABASE_TABLE")

    # ── DynamoDB ─────────────────────────────────────────────────────────────
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    dynamodb_table_name: str = Field(default="AgentStore", alias="DYNAMODB_TABLE_NAME")

    # ── Model provider ───────────────────────────────────────────────────────
    llm_provider: Literal["vertexai", "openai", "anthropic"] = Field(
        default="vertexai", alias="LLM_PROVIDER"
    )
    llm_max_tokens: int = Field(default=1024, alias="LLM_MAX_TOKENS")

    # Vertex AI (Gemini)
    google_project_id: str = Field(default="", alias="GOOGLE_PROJECT_ID")
    google_location: str = Field(default="us-central1", alias="GOOGLE_LOCATION")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")

    # OpenAI
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")

    # Anthropic / Claude
    anthropic_api_key: str = Field(default="", alias="ANTHROPIC_API_KEY")
    claude_model: str = Field(default="claude-haiku-4-5-20251001", alias="CLAUDE_MODEL")

    # ── UI ───────────────────────────────────────────────────────────────────
    api_base_url: str = Field(default="http://localhost:8000", alias="API_BASE_URL")

    # ── CORS ─────────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(
        default=["http://localhost:8501"], alias="CORS_ORIGINS"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
