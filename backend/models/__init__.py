"""Models module - Pydantic data models"""

from .diff import (
    DiffKind,
    DiffLine,
    DiffRequest,
    DiffResponse,
    DiffStreamEvent,
    DiffSummary,
    RenderedLine,
    RenderResponse,
)
from .scene import Checkpoint, CheckpointCreateRequest, Scene, SceneUpdateRequest

__all__ = [
    # Diff models
    "DiffKind",
    "DiffLine",
    "DiffRequest",
    "DiffResponse",
    "DiffStreamEvent",
    "DiffSummary",
    "RenderedLine",
    "RenderResponse",
    # Scene models
    "Checkpoint",
    "CheckpointCreateRequest",
    "Scene",
    "SceneUpdateRequest",
]
