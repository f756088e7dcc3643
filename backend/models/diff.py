"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class DiffKind(str, Enum):
    """How a line relates the historical text to the current text"""

    UNCHANGED = "unchanged"
    REMOVED = "removed"
    ADDED = "added"


class DiffLine(BaseModel):
    """A single annotated line of a line diff"""

    model_config = ConfigDict(frozen=True)

    kind: DiffKind
    text: str
    synthetic: bool = False  # Placeholder/notice lines, not part of either text


class DiffSummary(BaseModel):
    """Counts of added and removed lines"""

    additions: int = 0
    removals: int = 0

    @property
    def label(self) -> str:
        if self.additions == 0 and self.removals == 0:
            return "No differences"
        return f"+{self.additions} / -{self.removals}"


class RenderedLine(BaseModel):
    """Display form of a diff line"""

    kind: DiffKind
    prefix: str  # "  ", "- ", "+ "
    text: str
    style: str  # "secondary", "red", "green"


class DiffRequest(BaseModel):
    """Request to diff two texts"""

    historical_text: str = ""
    current_text: str = ""


class DiffResponse(BaseModel):
    """Complete diff result"""

    lines: list[DiffLine]
    summary: DiffSummary
    fallback: bool = False  # True when detailed comparison was skipped


class RenderResponse(BaseModel):
    """Rendered diff for display"""

    lines: list[RenderedLine]
    text: str
    summary: DiffSummary
    label: str  # "No differences" or "+N / -M"


class DiffStreamEvent(BaseModel):
    """SSE stream event"""

    type: str  # "line", "summary", "done", "error"
    line: DiffLine | None = None
    summary: DiffSummary | None = None
    fallback: bool | None = None
    done: bool = False
    error: str | None = None
