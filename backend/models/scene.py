"""Scene and checkpoint data models"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Scene(BaseModel):
    """Live plain-text state of a scene"""

    id: str
    title: str = ""
    content: str = ""
    summary: str = ""
    updated_at: datetime


class Checkpoint(BaseModel):
    """Snapshot of a scene's content at a point in time"""

    id: str
    scene_id: str
    label: str
    content: str
    created_at: datetime


class SceneUpdateRequest(BaseModel):
    """Request to create or update a scene"""

    title: str | None = None
    content: str | None = None
    summary: str | None = None


class CheckpointCreateRequest(BaseModel):
    """Request to snapshot a scene"""

    label: str | None = None
