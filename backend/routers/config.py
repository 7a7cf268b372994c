"""Configuration API endpoints"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ValidationError

from models.config import validate_section
from services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    diff: dict | None = None
    server: dict | None = None
    logging: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    diff: dict
    server: dict
    logging: dict


def merge_section(current_config: dict[str, Any], name: str, update: dict[str, Any]) -> dict[str, Any]:
    """Merge an update into one section, rejecting values the backend cannot use"""
    try:
        return validate_section(name, {**current_config.get(name, {}), **update})
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in (name, *error["loc"]))
        raise HTTPException(status_code=400, detail=f"Invalid {field}: {error['msg']}")


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()

    return ConfigResponse(
        diff=config.get("diff", {}),
        server=config.get("server", {}),
        logging=config.get("logging", {}),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.diff:
        current_config["diff"] = merge_section(current_config, "diff", request.diff)
    if request.server:
        current_config["server"] = merge_section(current_config, "server", request.server)
    if request.logging:
        current_config["logging"] = merge_section(current_config, "logging", request.logging)

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if request.logging:
        logging.getLogger().setLevel(current_config["logging"]["level"].upper())

    return {"status": "success", "message": "Configuration updated"}
