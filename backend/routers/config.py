"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    diff: dict | None = None
    server: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    diff: dict
    server: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(
        diff=config.get("diff", {}),
        server=config.get("server", {}),
    )


def _validate_diff_settings(diff: dict) -> None:
    if "maxCells" in diff:
        max_cells = diff["maxCells"]
        if isinstance(max_cells, bool) or not isinstance(max_cells, int) or max_cells <= 0:
            raise HTTPException(status_code=400, detail="maxCells must be a positive integer")
    for key in ("emptyPlaceholder", "fallbackNotice"):
        if key in diff and not isinstance(diff[key], str):
            raise HTTPException(status_code=400, detail=f"{key} must be a string")


def _validate_server_settings(server: dict) -> None:
    if "host" in server and not isinstance(server["host"], str):
        raise HTTPException(status_code=400, detail="host must be a string")
    if "port" in server:
        port = server["port"]
        if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
            raise HTTPException(status_code=400, detail="port must be an integer between 1 and 65535")


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.diff:
        _validate_diff_settings(request.diff)
        current_config["diff"] = {**current_config.get("diff", {}), **request.diff}
    if request.server:
        _validate_server_settings(request.server)
        current_config["server"] = {**current_config.get("server", {}), **request.server}

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration updated"}
