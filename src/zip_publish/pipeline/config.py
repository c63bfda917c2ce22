"""
Publish configuration.

PublishConfig is immutable once constructed. It can be built directly
in Python (the only way to supply a computed card body) or loaded from
a YAML file, with secrets optionally taken from the environment.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from zip_publish.core.exceptions import ConfigurationError
from zip_publish.notifications.channels.dingtalk import DingTalkSettings
from zip_publish.notifications.models import CardInfo
from zip_publish.transfer.sftp import SftpSettings

ENV_SFTP_PASSWORD = "ZIP_PUBLISH_SFTP_PASSWORD"
ENV_DINGTALK_TOKEN = "ZIP_PUBLISH_DINGTALK_TOKEN"
ENV_DINGTALK_SECRET = "ZIP_PUBLISH_DINGTALK_SECRET"


class PublishConfig(BaseModel):
    """Immutable configuration for one application's publish pipeline."""

    app: str = Field(description="Application name, unique archive prefix")
    source_dir: Path = Field(description="Build output directory to package")
    artifact_dir: Path = Field(description="Local directory for archives")
    remote_dir: str = Field(description="Remote base directory for uploads")
    host: str = Field(description="Public download host, ends with '/'")
    fill_width: int = Field(ge=1, description="Digits the daily sequence is padded to")
    sftp: SftpSettings
    dingtalk: DingTalkSettings = Field(default_factory=DingTalkSettings)
    card: CardInfo
    production_modes: tuple[str, ...] = Field(
        default=("production",),
        description="Build modes that trigger a publish",
    )

    model_config = {"frozen": True}

    @field_validator("app")
    @classmethod
    def validate_app(cls, v: str) -> str:
        """Application names become filename prefixes."""
        if not v or not v.strip():
            raise ValueError("app must not be empty")
        if any(ch in v for ch in ("/", "\\")) or any(ch.isspace() for ch in v):
            raise ValueError("app must not contain path separators or whitespace")
        return v

    @field_validator("host")
    @classmethod
    def normalize_host(cls, v: str) -> str:
        """Ensure the download host ends with a path separator."""
        return v if v.endswith("/") else f"{v}/"

    @field_validator("remote_dir")
    @classmethod
    def validate_remote_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("remote_dir must not be empty")
        return v

    def download_url(self, filename: str) -> str:
        """Public URL of an uploaded archive."""
        return f"{self.host}{filename}"


def _apply_env_secrets(data: dict[str, Any]) -> dict[str, Any]:
    """Fill secrets missing from the file from the environment."""
    sftp = dict(data.get("sftp") or {})
    if not sftp.get("password") and os.environ.get(ENV_SFTP_PASSWORD):
        sftp["password"] = os.environ[ENV_SFTP_PASSWORD]
    data["sftp"] = sftp

    dingtalk = dict(data.get("dingtalk") or {})
    if not dingtalk.get("access_token") and os.environ.get(ENV_DINGTALK_TOKEN):
        dingtalk["access_token"] = os.environ[ENV_DINGTALK_TOKEN]
    if not dingtalk.get("secret") and os.environ.get(ENV_DINGTALK_SECRET):
        dingtalk["secret"] = os.environ[ENV_DINGTALK_SECRET]
    data["dingtalk"] = dingtalk

    return data


def load_config(path: Path) -> PublishConfig:
    """
    Load a PublishConfig from a YAML file.

    Relative source_dir and artifact_dir are resolved against the
    directory containing the file.

    Args:
        path: YAML configuration file

    Returns:
        Validated PublishConfig

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration: {e}", config_file=str(path)
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML: {e}", config_file=str(path)
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration must be a mapping", config_file=str(path)
        )

    data = _apply_env_secrets(dict(data))
    base_dir = path.parent
    for key in ("source_dir", "artifact_dir"):
        value = data.get(key)
        if value is not None and not Path(value).is_absolute():
            data[key] = base_dir / value

    try:
        return PublishConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        config_key = ".".join(str(loc) for loc in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg')}",
            config_file=str(path),
            config_key=config_key or None,
            details={"errors": len(e.errors())},
        ) from e
