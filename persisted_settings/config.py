"""Identity models describing where a settings type is stored."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SettingsFormat(str, Enum):
    """Supported on-disk serializations."""

    TOML = "toml"
    YAML = "yaml"
    JSON = "json"

    @property
    def extension(self) -> str:
        return self.value


DEFAULT_DOMAIN = "com"


class SettingsIdentity(BaseModel):
    """Organization triple plus format that determines a settings file location."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(
        default=DEFAULT_DOMAIN,
        description="Reverse-DNS style qualifier of the organization, e.g. 'com' or 'org'.",
    )
    company: str = Field(description="Name of the organization publishing the application.")
    project: str = Field(description="Name of the application; also names the settings file.")
    format: SettingsFormat = Field(
        default=SettingsFormat.TOML,
        description="Serialization used for the settings file.",
    )

    @field_validator("domain", "company", "project", mode="before")
    @classmethod
    def _strip_names(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("Identity components must not be empty.")
        return value

    @property
    def filename(self) -> str:
        """Name of the settings file inside the configuration directory."""
        return f"{self.project}.{self.format.extension}"

    def as_dict(self) -> dict[str, str]:
        return self.model_dump(mode="json")
