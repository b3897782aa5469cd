"""Settings for the link preview API."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from linkpreview.app.constants import DEFAULT_SERVER_URL, PLACEHOLDER_IMAGE_NAME

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; LinkPreviewBot/0.1; +https://github.com/link-preview-api)"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(8080, validation_alias="PORT")
    server_url: str = Field(DEFAULT_SERVER_URL, validation_alias="SERVER_URL")
    static_dir: str = Field("public", validation_alias="STATIC_DIR")

    cache_backend: str = Field("mongo", validation_alias="CACHE_BACKEND")
    database_uri: str = Field("", validation_alias="DATABASE_URI")
    database_name: str = Field("link_preview", validation_alias="DATABASE_NAME")
    database_collection: str = Field("meta_cache", validation_alias="DATABASE_COLLECTION")
    database_connection_timeout_ms: int = Field(5000, validation_alias="DATABASE_CONNECTION_TIMEOUT_MS")

    initial_backoff_seconds: float = Field(0.5, validation_alias="INITIAL_BACKOFF_SECONDS")
    max_backoff_seconds: float = Field(5.0, validation_alias="MAX_BACKOFF_SECONDS")
    backoff_multiplier: float = Field(2.0, validation_alias="BACKOFF_MULTIPLIER")
    max_connection_attempts: int = Field(3, validation_alias="MAX_CONNECTION_ATTEMPTS")

    fetch_connect_timeout_seconds: float = Field(5.0, validation_alias="FETCH_CONNECT_TIMEOUT_SECONDS")
    fetch_read_timeout_seconds: float = Field(10.0, validation_alias="FETCH_READ_TIMEOUT_SECONDS")
    user_agent: str = Field(DEFAULT_USER_AGENT, validation_alias="USER_AGENT")

    readiness_ping_timeout_seconds: float = Field(5.0, validation_alias="READINESS_PING_TIMEOUT_SECONDS")

    @property
    def placeholder_image_url(self) -> str:
        return f"{self.server_url.rstrip('/')}/{PLACEHOLDER_IMAGE_NAME}"
