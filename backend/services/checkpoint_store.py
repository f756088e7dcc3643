"""
Checkpoint Store - In-memory scenes and their historical snapshots
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone

from models.scene import Checkpoint, Scene


class SceneNotFoundError(LookupError):
    """Raised when a scene id is unknown"""


class CheckpointNotFoundError(LookupError):
    """Raised when a checkpoint id is unknown for a scene"""


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CheckpointStore:
    """Keep live scene text and checkpoints per scene"""

    _instance = None

    def __init__(self):
        self._lock = threading.Lock()
        self._scenes: dict[str, Scene] = {}
        # Oldest first; list_checkpoints reverses
        self._checkpoints: dict[str, list[Checkpoint]] = {}
        self._created_counts: dict[str, int] = {}

    @classmethod
    def get_instance(cls) -> "CheckpointStore":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = CheckpointStore()
        return cls._instance

    # ========== Scenes ==========

    def upsert_scene(
        self,
        scene_id: str,
        title: str | None = None,
        content: str | None = None,
        summary: str | None = None,
    ) -> Scene:
        """Create the scene on first write, otherwise update the given fields"""
        with self._lock:
            scene = self._scenes.get(scene_id)
            if scene is None:
                scene = Scene(id=scene_id, updated_at=_now())
            updates = {"updated_at": _now()}
            if title is not None:
                updates["title"] = title
            if content is not None:
                updates["content"] = content
            if summary is not None:
                updates["summary"] = summary
            scene = scene.model_copy(update=updates)
            self._scenes[scene_id] = scene
            return scene

    def get_scene(self, scene_id: str) -> Scene:
        with self._lock:
            return self._get_scene_locked(scene_id)

    def _get_scene_locked(self, scene_id: str) -> Scene:
        scene = self._scenes.get(scene_id)
        if scene is None:
            raise SceneNotFoundError(f"Scene not found: {scene_id}")
        return scene

    # ========== Checkpoints ==========

    def create_checkpoint(self, scene_id: str, label: str | None = None) -> Checkpoint:
        """Snapshot the scene's current content"""
        with self._lock:
            scene = self._get_scene_locked(scene_id)
            count = self._created_counts.get(scene_id, 0) + 1
            self._created_counts[scene_id] = count

            label = (label or "").strip() or f"Checkpoint {count}"
            checkpoint = Checkpoint(
                id=str(uuid.uuid4()),
                scene_id=scene_id,
                label=label,
                content=scene.content,
                created_at=_now(),
            )
            self._checkpoints.setdefault(scene_id, []).append(checkpoint)
            return checkpoint

    def list_checkpoints(self, scene_id: str) -> list[Checkpoint]:
        """Checkpoints for a scene, newest first"""
        with self._lock:
            self._get_scene_locked(scene_id)
            return list(reversed(self._checkpoints.get(scene_id, [])))

    def get_checkpoint(self, scene_id: str, checkpoint_id: str) -> Checkpoint:
        with self._lock:
            return self._get_checkpoint_locked(scene_id, checkpoint_id)

    def _get_checkpoint_locked(self, scene_id: str, checkpoint_id: str) -> Checkpoint:
        self._get_scene_locked(scene_id)
        for checkpoint in self._checkpoints.get(scene_id, []):
            if checkpoint.id == checkpoint_id:
                return checkpoint
        raise CheckpointNotFoundError(f"Checkpoint not found: {checkpoint_id}")

    def delete_checkpoint(self, scene_id: str, checkpoint_id: str) -> None:
        with self._lock:
            checkpoint = self._get_checkpoint_locked(scene_id, checkpoint_id)
            self._checkpoints[scene_id].remove(checkpoint)

    def restore_checkpoint(self, scene_id: str, checkpoint_id: str) -> Scene:
        """Replace the scene content with a checkpoint's content"""
        with self._lock:
            checkpoint = self._get_checkpoint_locked(scene_id, checkpoint_id)
            scene = self._scenes[scene_id].model_copy(
                update={"content": checkpoint.content, "updated_at": _now()}
            )
            self._scenes[scene_id] = scene
            return scene

    def clear(self) -> None:
        """Drop all scenes and checkpoints"""
        with self._lock:
            self._scenes.clear()
            self._checkpoints.clear()
            self._created_counts.clear()
