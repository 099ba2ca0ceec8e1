from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _normalise_gitlab_base(url: str) -> str:
    """Ensure the GitLab base URL points at the v4 REST API root.

    Self-managed instances are usually configured by their web address
    (``https://gitlab.example.com``). The provider needs ``/api/v4``
    appended, so both forms are accepted.
    """
    url = url.rstrip("/")
    if not url.endswith("/api/v4"):
        url = f"{url}/api/v4"
    return url


class Settings(BaseSettings):
    """Engine and API settings loaded from environment variables.

    Nothing here is a credential: the engine only talks to public,
    unauthenticated hosting APIs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Hosting APIs
    github_api_base: str = "https://api.github.com"
    github_raw_base: str = "https://raw.githubusercontent.com"
    gitlab_api_base: str = "https://gitlab.com/api/v4"

    @field_validator("gitlab_api_base", mode="before")
    @classmethod
    def normalise_gitlab_api_base(cls, v: str) -> str:
        return _normalise_gitlab_base(v)

    # Every outbound call is bounded by this timeout. A timed-out call is
    # treated exactly like a failed one.
    http_timeout_seconds: float = 10.0
    user_agent: str = "stackprobe/0.1"

    # CORS allowed origins, as a JSON list in the environment.
    cors_origins: list[str] = ["*"]

    # Rate limiting — SlowAPI format, e.g. "10/minute", "100/hour".
    detect_rate_limit: str = "30/minute"

    # Short-lived result cache in the HTTP layer. 0 disables it.
    detect_cache_ttl_seconds: int = 60

    # Sentry — leave blank to disable error capture.
    sentry_dsn: str = ""

    # App
    debug: bool = True


def get_settings() -> Settings:
    return Settings()
