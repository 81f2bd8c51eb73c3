from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.enums import OutputFormat


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_OUTPUT_DIR = Path("reports")


class AppConfig(BaseModel):
    """Effective configuration of one report run.

    Built by ``config.loader.load_config`` from the config file, the environment
    and command-line overrides, or directly by library callers:

        config = AppConfig(github_token="ghp_xxx", output_format="csv")

    The instance is immutable and passed explicitly to every component.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    github_token: str = Field(
        default="",
        description="GitHub personal access token with access to Dependabot alerts",
        repr=False,
        validate_default=True,
    )

    output_format: OutputFormat = Field(
        default=OutputFormat.JSON,
        description="Report format: json or csv",
    )

    output_dir: Path = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Directory receiving report files (created if absent)",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Base URL of the GitHub REST API",
    )

    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to the alerts request",
    )

    max_retries: int = Field(
        default=0,
        ge=0,
        description="Extra attempts after a retryable network failure (timeouts)",
    )

    @field_validator("github_token", mode="before")
    @classmethod
    def _require_token(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(
                "Github Personal Access token is required. Please set it in your config.yaml file "
                "(See config.yaml.example) or as the DEPENDABOT_TOKEN environment variable."
            )
        return v.strip() if isinstance(v, str) else v

    @field_validator("output_format", mode="before")
    @classmethod
    def _parse_format(cls, v: object) -> object:
        if v is None or v == "":
            return OutputFormat.JSON
        if isinstance(v, str) and not isinstance(v, OutputFormat):
            parsed = OutputFormat.from_str(v)
            if parsed is None:
                raise ValueError(f"Unsupported output format '{v}'. Use 'json' or 'csv'.")
            return parsed
        return v

    @field_validator("api_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")


class FileConfig(BaseModel):
    """Schema of the YAML configuration file. Every key is optional."""

    model_config = ConfigDict(extra="forbid")

    github_token: Optional[str] = None
    output_format: Optional[str] = None
    output_dir: Optional[Path] = None
    api_url: Optional[str] = None
    timeout_seconds: Optional[float] = None
    max_retries: Optional[int] = None


class EnvSettings(BaseSettings):
    """Environment layer, also read from a local .env file.

    - DEPENDABOT_TOKEN=ghp_xxx
    - DEPENDABOT_OUTPUT_DIR=/path/to/reports
    - DEPENDABOT_TIMEOUT_SECONDS=10
    """

    model_config = SettingsConfigDict(
        env_prefix="DEPENDABOT_",
        env_file=".env",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    token: Optional[str] = None
    output_dir: Optional[Path] = None
    timeout_seconds: Optional[float] = None
