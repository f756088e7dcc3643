"""Scene and checkpoint API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from models.diff import DiffResponse
from models.scene import Checkpoint, CheckpointCreateRequest, Scene, SceneUpdateRequest
from routers.diff import build_diff_response
from services.checkpoint_store import (
    CheckpointNotFoundError,
    CheckpointStore,
    SceneNotFoundError,
)

router = APIRouter()


def _not_found(e: LookupError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.put("/{scene_id}", response_model=Scene)
async def update_scene(scene_id: str, request: SceneUpdateRequest) -> Scene:
    """Create or update the live text of a scene"""
    return CheckpointStore.get_instance().upsert_scene(
        scene_id,
        title=request.title,
        content=request.content,
        summary=request.summary,
    )


@router.get("/{scene_id}", response_model=Scene)
async def get_scene(scene_id: str) -> Scene:
    """Get the live state of a scene"""
    try:
        return CheckpointStore.get_instance().get_scene(scene_id)
    except SceneNotFoundError as e:
        raise _not_found(e)


@router.post("/{scene_id}/checkpoints", response_model=Checkpoint)
async def create_checkpoint(scene_id: str, request: CheckpointCreateRequest) -> Checkpoint:
    """Snapshot the current scene text"""
    try:
        checkpoint = CheckpointStore.get_instance().create_checkpoint(scene_id, request.label)
    except SceneNotFoundError as e:
        raise _not_found(e)
    print(f"[Checkpoints] Created '{checkpoint.label}' for scene {scene_id}")
    return checkpoint


@router.get("/{scene_id}/checkpoints", response_model=list[Checkpoint])
async def list_checkpoints(scene_id: str) -> list[Checkpoint]:
    """List checkpoints for a scene, newest first"""
    try:
        return CheckpointStore.get_instance().list_checkpoints(scene_id)
    except SceneNotFoundError as e:
        raise _not_found(e)


@router.get("/{scene_id}/checkpoints/{checkpoint_id}", response_model=Checkpoint)
async def get_checkpoint(scene_id: str, checkpoint_id: str) -> Checkpoint:
    try:
        return CheckpointStore.get_instance().get_checkpoint(scene_id, checkpoint_id)
    except (SceneNotFoundError, CheckpointNotFoundError) as e:
        raise _not_found(e)


@router.delete("/{scene_id}/checkpoints/{checkpoint_id}")
async def delete_checkpoint(scene_id: str, checkpoint_id: str) -> dict[str, Any]:
    try:
        CheckpointStore.get_instance().delete_checkpoint(scene_id, checkpoint_id)
    except (SceneNotFoundError, CheckpointNotFoundError) as e:
        raise _not_found(e)
    return {"status": "success", "message": "Checkpoint deleted"}


@router.get("/{scene_id}/checkpoints/{checkpoint_id}/diff", response_model=DiffResponse)
async def diff_checkpoint(scene_id: str, checkpoint_id: str) -> DiffResponse:
    """Compare a checkpoint against the live scene text"""
    store = CheckpointStore.get_instance()
    try:
        checkpoint = store.get_checkpoint(scene_id, checkpoint_id)
        scene = store.get_scene(scene_id)
    except (SceneNotFoundError, CheckpointNotFoundError) as e:
        raise _not_found(e)

    return await build_diff_response(checkpoint.content, scene.content)


@router.post("/{scene_id}/checkpoints/{checkpoint_id}/restore", response_model=Scene)
async def restore_checkpoint(scene_id: str, checkpoint_id: str) -> Scene:
    """Replace the scene text with a checkpoint's text"""
    try:
        scene = CheckpointStore.get_instance().restore_checkpoint(scene_id, checkpoint_id)
    except (SceneNotFoundError, CheckpointNotFoundError) as e:
        raise _not_found(e)
    print(f"[Checkpoints] Restored checkpoint {checkpoint_id} into scene {scene_id}")
    return scene
