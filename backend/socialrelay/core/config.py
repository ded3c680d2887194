"""
Application configuration using Pydantic settings
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from socialrelay.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings"""

    # LinkedIn OAuth (authorization code, confidential client)
    LINKEDIN_CLIENT_ID: Optional[str] = None
    LINKEDIN_CLIENT_SECRET: Optional[str] = None
    LINKEDIN_REDIRECT_URI: Optional[str] = None
    LINKEDIN_SUCCESS_URL: str = "http://localhost:5173/linkedin/success"

    # Twitter OAuth 2.0 (authorization code + PKCE, public client)
    TWITTER_CLIENT_ID: Optional[str] = None
    TWITTER_REDIRECT_URI: Optional[str] = None

    # Completion API (GitHub Models, OpenAI-compatible)
    GITHUB_TOKEN: Optional[str] = None
    COMPLETION_BASE_URL: str = "https://models.github.ai/inference"
    COMPLETION_MODEL: str = "openai/o4-mini"

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Pending authorization attempts older than this are treated as absent
    PENDING_ATTEMPT_TTL_SECONDS: int = 600

    # Application
    APP_NAME: str = "SocialRelay API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    PORT: int = 3000

    # CORS
    CORS_ORIGINS: str = "http://localhost:8080"

    # Frontend URL (default success destination after OAuth)
    FRONTEND_URL: str = "http://localhost:8080"

    # Session cookie settings
    SESSION_COOKIE_NAME: str = "relay_session"
    COOKIE_SECURE: bool = False  # Set to True in production with HTTPS
    COOKIE_SAMESITE: str = "lax"  # Must allow top-level redirects back from the provider

    # Legacy behavior: append the access token to the success redirect URL
    EXPOSE_TOKEN_IN_REDIRECT: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def provider_credentials(self) -> dict:
        """Required credential keys per provider, mapped to their current values"""
        return {
            "linkedin": {
                "LINKEDIN_CLIENT_ID": self.LINKEDIN_CLIENT_ID,
                "LINKEDIN_CLIENT_SECRET": self.LINKEDIN_CLIENT_SECRET,
                "LINKEDIN_REDIRECT_URI": self.LINKEDIN_REDIRECT_URI,
            },
            "twitter": {
                "TWITTER_CLIENT_ID": self.TWITTER_CLIENT_ID,
                "TWITTER_REDIRECT_URI": self.TWITTER_REDIRECT_URI,
            },
        }

    def is_provider_configured(self, provider: str) -> bool:
        values = self.provider_credentials().get(provider, {})
        return bool(values) and all(values.values())

    def validate_required(self) -> None:
        """
        Refuse to start with missing credentials.

        GITHUB_TOKEN is always required. A provider with none of its
        credentials set is disabled; a provider with only some of them set
        is a misconfiguration.
        """
        problems = []
        if not self.GITHUB_TOKEN:
            problems.append("GITHUB_TOKEN is not set")

        for provider, values in self.provider_credentials().items():
            missing = [key for key, value in values.items() if not value]
            if missing and len(missing) < len(values):
                problems.append(f"{provider} is partially configured, missing: {', '.join(missing)}")

        if problems:
            raise ConfigurationError("; ".join(problems))


settings = Settings()
