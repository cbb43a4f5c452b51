"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MessagingSettings(BaseSettings):
    """Messaging settings.

    Environment variables:
        TEAMCHAT_MESSAGING_POST_SEND_QUEUE_SIZE: Capacity of the tag
            processing queue (default: 1000)
        TEAMCHAT_MESSAGING_POST_SEND_ENABLED: Queue sent messages for tag
            processing (default: true)
        TEAMCHAT_MESSAGING_BOT_USER_ID: User id the tag processor posts
            replies as (optional)
    """

    model_config = SettingsConfigDict(
        env_prefix="TEAMCHAT_MESSAGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    post_send_queue_size: int = Field(
        default=1000,
        description="Capacity of the post-send queue",
        ge=1,
    )
    post_send_enabled: bool = Field(
        default=True,
        description="Enqueue sent messages for tag processing",
    )
    bot_user_id: str | None = Field(
        default=None,
        description="User id used for system replies",
    )


class WorkspaceSettings(BaseSettings):
    """Workspace and invite settings.

    Environment variables:
        TEAMCHAT_WORKSPACE_INVITE_TTL_DAYS: Lifetime of invites created
            without an explicit expiry (default: 7)
        TEAMCHAT_WORKSPACE_DEFAULT_INVITE_MAX_USES: max_uses for invites
            created without one, 0 for unlimited (default: 0)
    """

    model_config = SettingsConfigDict(
        env_prefix="TEAMCHAT_WORKSPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    invite_ttl_days: int = Field(
        default=7,
        description="Default invite lifetime in days",
        ge=1,
    )
    default_invite_max_uses: int = Field(
        default=0,
        description="Default invite max uses (0 = unlimited)",
        ge=0,
    )

    @property
    def invite_ttl(self) -> timedelta:
        return timedelta(days=self.invite_ttl_days)


class KeycloakSettings(BaseSettings):
    """Keycloak admin API settings.

    Environment variables:
        TEAMCHAT_KEYCLOAK_URL: Keycloak base URL (default: http://localhost:8090)
        TEAMCHAT_KEYCLOAK_REALM: Realm holding workspace groups (default: teamchat)
        TEAMCHAT_KEYCLOAK_CLIENT_ID: Admin client id (default: admin-cli)
        TEAMCHAT_KEYCLOAK_CLIENT_SECRET: Client secret; selects the
            client_credentials grant when set
        TEAMCHAT_KEYCLOAK_USERNAME: Admin username for the password grant
        TEAMCHAT_KEYCLOAK_PASSWORD: Admin password for the password grant
        TEAMCHAT_KEYCLOAK_TIMEOUT_SECONDS: HTTP timeout (default: 30)
        TEAMCHAT_KEYCLOAK_TOKEN_REFRESH_BUFFER_SECONDS: Refresh the admin
            token this long before it expires (default: 30)
    """

    model_config = SettingsConfigDict(
        env_prefix="TEAMCHAT_KEYCLOAK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default="http://localhost:8090", description="Keycloak URL")
    realm: str = Field(default="teamchat", description="Keycloak realm")
    client_id: str = Field(default="admin-cli", description="Admin client id")
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Admin client secret",
    )
    username: str = Field(default="", description="Admin username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Admin password",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout in seconds",
        gt=0,
    )
    token_refresh_buffer_seconds: float = Field(
        default=30.0,
        description="Seconds before expiry at which the admin token is refreshed",
        ge=0,
    )

    @model_validator(mode="after")
    def validate_credentials(self) -> "KeycloakSettings":
        """Require either a client secret or a username for the password grant."""
        if not self.client_secret.get_secret_value() and not self.username:
            raise ValueError(
                "either client_secret or username must be set for the admin API"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="TEAMCHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Teamchat", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def messaging(self) -> MessagingSettings:
        """Get messaging settings."""
        return get_messaging_settings()

    @property
    def workspace(self) -> WorkspaceSettings:
        """Get workspace settings."""
        return get_workspace_settings()

    @property
    def keycloak(self) -> KeycloakSettings:
        """Get Keycloak settings."""
        return get_keycloak_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_messaging_settings() -> MessagingSettings:
    return MessagingSettings()


@lru_cache
def get_workspace_settings() -> WorkspaceSettings:
    return WorkspaceSettings()


@lru_cache
def get_keycloak_settings() -> KeycloakSettings:
    """Get cached Keycloak settings.

    Raises:
        pydantic.ValidationError: If no admin credentials are configured
    """
    return KeycloakSettings()
