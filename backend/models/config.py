"""Configuration section models"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class DiffSettings(BaseModel):
    """Diff engine settings"""

    model_config = ConfigDict(extra="allow")

    maxCells: StrictInt = Field(default=4_000_000, ge=0)  # n*m cap on LCS tables, 0 disables
    contextLines: StrictInt = Field(default=3, ge=0)
    highlightChanges: StrictBool = True


class ServerSettings(BaseModel):
    """uvicorn bind address"""

    model_config = ConfigDict(extra="allow")

    host: StrictStr = Field(default="0.0.0.0", min_length=1)
    port: StrictInt = Field(default=8000, ge=1, le=65535)


class LoggingSettings(BaseModel):
    """Root logger settings"""

    model_config = ConfigDict(extra="allow")

    level: StrictStr = "info"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


SECTION_MODELS: dict[str, type[BaseModel]] = {
    "diff": DiffSettings,
    "server": ServerSettings,
    "logging": LoggingSettings,
}


def default_sections() -> dict[str, dict[str, Any]]:
    """Defaults for every known section"""
    return {name: model().model_dump() for name, model in SECTION_MODELS.items()}


def validate_section(name: str, values: Any) -> dict[str, Any]:
    """Validate one config section; raises pydantic.ValidationError on bad values"""
    return SECTION_MODELS[name].model_validate(values).model_dump()
