"""Environment-based configuration."""

from __future__ import annotations

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from careerlog.constants import DEFAULT_OLLAMA_URL


class Settings(BaseSettings):
    """Reads from .env file and ``CAREERLOG_*`` environment variables."""

    # Generative backends
    openai_api_key: str = ""
    remote_model: str = "openai/gpt-3.5-turbo"
    use_local_llm: bool = False
    ollama_model: str = "llama3.2"
    ollama_base_url: str = DEFAULT_OLLAMA_URL

    # Offline mode: no data leaves the machine
    enterprise: bool = False

    # Reference resolution
    skip_references: bool = False
    github_token: str = ""
    gitlab_token: str = ""
    gitlab_url: str = "https://gitlab.com"

    # Sampling
    confidence_threshold: float = 0.5
    low_impact_backend_skip_rate: float = 0.5
    skip_low_impact: bool = False
    low_impact_drop_rate: float = 0.5
    random_seed: int | None = None

    # External calls
    request_timeout_seconds: float = 5.0
    diff_prompt_chars: int = 2000

    # Logging
    log_level: str = "WARNING"

    @field_validator(
        "confidence_threshold",
        "low_impact_backend_skip_rate",
        "low_impact_drop_rate",
    )
    @classmethod
    def _validate_unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("must be between 0 and 1")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v

    @field_validator("gitlab_url", "ollama_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def _reject_offline_conflict(self) -> Settings:
        """Enterprise mode and a backend selection contradict each other."""
        if self.enterprise and (self.openai_api_key or self.use_local_llm):
            raise ValueError(
                "enterprise mode cannot be combined with a generative "
                "backend (API key or local LLM)"
            )
        return self

    @property
    def backend_configured(self) -> bool:
        """True when at least one generative backend is selected."""
        return bool(self.openai_api_key) or self.use_local_llm

    @property
    def local_model(self) -> str:
        """Local model in litellm provider/model format."""
        return f"ollama/{self.ollama_model}"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "CAREERLOG_",
        "extra": "ignore",
    }
