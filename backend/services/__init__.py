"""Services module - Business logic layer"""

from .line_diff import LineDiffEngine, compute_line_diff, render, render_text, summarize
from .config_manager import ConfigManager
from .checkpoint_store import CheckpointNotFoundError, CheckpointStore, SceneNotFoundError

__all__ = [
    "LineDiffEngine",
    "compute_line_diff",
    "render",
    "render_text",
    "summarize",
    "ConfigManager",
    "CheckpointStore",
    "CheckpointNotFoundError",
    "SceneNotFoundError",
]
