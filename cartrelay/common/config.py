"""Central environment-driven settings for the relay process.

The process loads this once at startup and hands the object to `create_app`.
Variable names follow the deployment's existing `.env` (see `.env.example`).
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cartrelay.common.errors import ConfigurationError


class RelaySettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "cartrelay"
    log_level: str = "INFO"
    port: int = 3000
    midtrans_server_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("midtrans_server_key", "SECRET"),
    )
    midtrans_client_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("midtrans_client_key", "NEXT_PUBLIC_CLIENT"),
    )
    midtrans_is_production: bool = False
    firebase_project_id: str | None = None
    firebase_client_email: str | None = None
    firebase_private_key: str | None = None
    cors_origin: str = "http://localhost:3000"
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("firebase_private_key")
    @classmethod
    def _restore_newlines(cls, value: str | None) -> str | None:
        # PEM keys are stored on one line in env files with escaped newlines.
        if value is None:
            return value
        return value.replace("\\n", "\n")

    @field_validator("cors_origin")
    @classmethod
    def _strip_origin(cls, value: str) -> str:
        return value.strip()

    def firebase_service_account(self) -> dict[str, str | None]:
        """Service-account mapping accepted by `firebase_admin.credentials.Certificate`."""

        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "client_email": self.firebase_client_email,
            "private_key": self.firebase_private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        }


def require_payment_credentials(config: RelaySettings) -> None:
    """Raise when the Midtrans server or client key is missing."""

    if not config.midtrans_server_key or not config.midtrans_client_key:
        raise ConfigurationError(
            "Midtrans keys (SECRET, NEXT_PUBLIC_CLIENT) are not defined in environment variables."
        )


settings = RelaySettings()
