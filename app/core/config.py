from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

from app.core.exceptions import MissingConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    # Store connection secrets. Both are required before the store is used,
    # but the app itself boots without them.
    DATABASE_URL: Optional[str] = None
    DATABASE_PASSWORD: Optional[str] = None

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS configuration — comma-separated origins
    CORS_ORIGINS: str = "*"

    # IANA zone name used for the "today" window; system local time if unset
    DASHBOARD_TIMEZONE: Optional[str] = None

    RATE_LIMIT_ENABLED: bool = True
    TASK_CREATE_RATE_LIMIT: str = "60/minute"

    def database_url(self) -> str:
        """Return the store URL with the password merged in.

        Raises :class:`MissingConfigurationError` when either secret is
        absent.
        """
        missing = [
            name
            for name in ("DATABASE_URL", "DATABASE_PASSWORD")
            if not getattr(self, name)
        ]
        if missing:
            raise MissingConfigurationError(
                "Missing environment variables: %s" % ", ".join(missing)
            )
        url = make_url(self.DATABASE_URL).set(password=self.DATABASE_PASSWORD)
        return url.render_as_string(hide_password=False)


settings = Settings()
