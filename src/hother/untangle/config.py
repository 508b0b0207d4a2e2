"""Configuration for document extraction and rendering."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UntangleConfig(BaseModel):
    """Settings shared by the extractor, the renderers and the CLI."""

    model_config = ConfigDict(frozen=True)

    signature_separator: str = Field(default="::", min_length=1, description="Separator cell rendered between signature name and type")
    table_class: str = Field(default="sig", description="CSS class of rendered signature tables")
    template_path: Path | None = Field(default=None, description="Custom page template (packaged default if None)")
    log_level: str = Field(default="WARNING", description="Logging level name")
    json_logs: bool = Field(default=False, description="Emit logs as JSON")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def debug(self) -> bool:
        """Whether per-block debug logging is enabled."""
        return self.log_level == "DEBUG"
