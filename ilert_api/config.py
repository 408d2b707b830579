"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

API_ENDPOINT = "https://api.ilert.com"
TIMEOUT = 30


class IlertSettings(BaseSettings):
    """iLert client settings.

    Every field can be set through an ILERT_ prefixed environment variable,
    e.g. ILERT_API_TOKEN or ILERT_ENDPOINT.
    """

    model_config = SettingsConfigDict(
        env_prefix="ILERT_",
        case_sensitive=False,
        extra="ignore",
    )

    endpoint: str = Field(default=API_ENDPOINT, description="iLert API base URL")
    api_token: str | None = Field(
        default=None,
        description="API token, used as Bearer token (takes precedence over basic auth)",
    )
    organization: str | None = Field(
        default=None, description="Organization (tenant) for basic auth"
    )
    username: str | None = Field(default=None, description="Username for basic auth")
    password: str | None = Field(default=None, description="Password for basic auth")
    timeout: int = Field(default=TIMEOUT, description="API timeout in seconds")
    user_agent: str | None = Field(
        default=None, description="Override the default User-Agent header"
    )

    @property
    def has_basic_auth(self) -> bool:
        return bool(self.organization and self.username and self.password)
