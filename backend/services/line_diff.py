"""
Line Diff Engine - Compare a scene checkpoint against the live scene text
"""

from __future__ import annotations

import re
from typing import Any

from models.diff import DiffKind, DiffLine, DiffSummary, RenderedLine

DEFAULT_MAX_CELLS = 4_000_000
DEFAULT_EMPTY_PLACEHOLDER = "(No content)"
DEFAULT_FALLBACK_NOTICE = (
    "(Detailed comparison skipped: texts are too large. "
    "Showing full removal and addition.)"
)

# "\r\n" counts as a single boundary
_NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")

_PREFIXES = {
    DiffKind.UNCHANGED: "  ",
    DiffKind.REMOVED: "- ",
    DiffKind.ADDED: "+ ",
}

_STYLES = {
    DiffKind.UNCHANGED: "secondary",
    DiffKind.REMOVED: "red",
    DiffKind.ADDED: "green",
}


def split_lines(text: str) -> list[str]:
    """Split text into lines, keeping empty lines.

    A trailing newline yields a trailing empty line. The empty string has no
    lines at all.
    """
    if not text:
        return []
    return _NEWLINE_PATTERN.split(text)


class LineDiffEngine:
    """LCS-based line diff with a coarse fallback for oversized inputs"""

    def __init__(
        self,
        max_cells: int = DEFAULT_MAX_CELLS,
        empty_placeholder: str = DEFAULT_EMPTY_PLACEHOLDER,
        fallback_notice: str = DEFAULT_FALLBACK_NOTICE,
    ):
        if max_cells <= 0:
            raise ValueError(f"max_cells must be positive, got {max_cells}")
        self.max_cells = max_cells
        self.empty_placeholder = empty_placeholder
        self.fallback_notice = fallback_notice

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "LineDiffEngine":
        """Build an engine from the "diff" section of the backend config"""
        cfg = config.get("diff")
        if not isinstance(cfg, dict):
            cfg = {}

        max_cells = cfg.get("maxCells", DEFAULT_MAX_CELLS)
        if isinstance(max_cells, bool) or not isinstance(max_cells, int) or max_cells <= 0:
            print(
                f"[LineDiffEngine] Invalid maxCells {max_cells!r} in config, "
                f"using {DEFAULT_MAX_CELLS}"
            )
            max_cells = DEFAULT_MAX_CELLS

        empty_placeholder = cfg.get("emptyPlaceholder", DEFAULT_EMPTY_PLACEHOLDER)
        if not isinstance(empty_placeholder, str):
            empty_placeholder = DEFAULT_EMPTY_PLACEHOLDER
        fallback_notice = cfg.get("fallbackNotice", DEFAULT_FALLBACK_NOTICE)
        if not isinstance(fallback_notice, str):
            fallback_notice = DEFAULT_FALLBACK_NOTICE

        return cls(
            max_cells=max_cells,
            empty_placeholder=empty_placeholder,
            fallback_notice=fallback_notice,
        )

    def compute_line_diff(self, historical_text: str, current_text: str) -> list[DiffLine]:
        """Diff two texts line by line.

        Reading the result top to bottom, the unchanged and removed lines
        rebuild the historical text and the unchanged and added lines rebuild
        the current text. Synthetic lines belong to neither.
        """
        historical_lines = split_lines(historical_text)
        current_lines = split_lines(current_text)

        if historical_lines == current_lines:
            if not historical_lines:
                return [
                    DiffLine(kind=DiffKind.UNCHANGED, text=self.empty_placeholder, synthetic=True)
                ]
            return [DiffLine(kind=DiffKind.UNCHANGED, text=line) for line in historical_lines]

        if self._exceeds_ceiling(len(historical_lines), len(current_lines)):
            print(
                f"[LineDiffEngine] Skipping detailed comparison: "
                f"{len(historical_lines)} x {len(current_lines)} lines exceeds "
                f"{self.max_cells} cells"
            )
            return self._coarse_diff(historical_lines, current_lines)

        return self._lcs_diff(historical_lines, current_lines)

    def _exceeds_ceiling(self, h: int, c: int) -> bool:
        return h > 0 and c > 0 and h > self.max_cells // c

    def _coarse_diff(self, historical_lines: list[str], current_lines: list[str]) -> list[DiffLine]:
        """Everything removed, then everything added"""
        result = [DiffLine(kind=DiffKind.UNCHANGED, text=self.fallback_notice, synthetic=True)]
        result.extend(DiffLine(kind=DiffKind.REMOVED, text=line) for line in historical_lines)
        result.extend(DiffLine(kind=DiffKind.ADDED, text=line) for line in current_lines)
        return result

    def _lcs_diff(self, historical_lines: list[str], current_lines: list[str]) -> list[DiffLine]:
        h = len(historical_lines)
        c = len(current_lines)
        width = c + 1

        # lengths[i * width + j] = LCS length of historical[i:] and current[j:]
        lengths = [0] * ((h + 1) * width)
        for i in range(h - 1, -1, -1):
            row = i * width
            next_row = row + width
            old_line = historical_lines[i]
            for j in range(c - 1, -1, -1):
                if old_line == current_lines[j]:
                    lengths[row + j] = lengths[next_row + j + 1] + 1
                else:
                    down = lengths[next_row + j]
                    right = lengths[row + j + 1]
                    lengths[row + j] = down if down >= right else right

        result = []
        i = j = 0
        while i < h and j < c:
            if historical_lines[i] == current_lines[j]:
                result.append(DiffLine(kind=DiffKind.UNCHANGED, text=historical_lines[i]))
                i += 1
                j += 1
            elif lengths[(i + 1) * width + j] >= lengths[i * width + j + 1]:
                # Ties resolve as a removal
                result.append(DiffLine(kind=DiffKind.REMOVED, text=historical_lines[i]))
                i += 1
            else:
                result.append(DiffLine(kind=DiffKind.ADDED, text=current_lines[j]))
                j += 1

        result.extend(DiffLine(kind=DiffKind.REMOVED, text=line) for line in historical_lines[i:])
        result.extend(DiffLine(kind=DiffKind.ADDED, text=line) for line in current_lines[j:])
        return result


def summarize(lines: list[DiffLine]) -> DiffSummary:
    """Count added and removed lines"""
    additions = 0
    removals = 0
    for line in lines:
        if line.synthetic:
            continue
        if line.kind == DiffKind.ADDED:
            additions += 1
        elif line.kind == DiffKind.REMOVED:
            removals += 1
    return DiffSummary(additions=additions, removals=removals)


def render(lines: list[DiffLine]) -> list[RenderedLine]:
    """Attach display prefix and style to each line"""
    return [
        RenderedLine(
            kind=line.kind,
            prefix=_PREFIXES[line.kind],
            text=line.text,
            style=_STYLES[line.kind],
        )
        for line in lines
    ]


def render_text(lines: list[DiffLine]) -> str:
    """Render the diff as prefixed plain text"""
    return "\n".join(f"{_PREFIXES[line.kind]}{line.text}" for line in lines)


def reconstruct_historical(lines: list[DiffLine]) -> str:
    """Rebuild the historical text from a diff"""
    return "\n".join(
        line.text
        for line in lines
        if not line.synthetic and line.kind in (DiffKind.UNCHANGED, DiffKind.REMOVED)
    )


def reconstruct_current(lines: list[DiffLine]) -> str:
    """Rebuild the current text from a diff"""
    return "\n".join(
        line.text
        for line in lines
        if not line.synthetic and line.kind in (DiffKind.UNCHANGED, DiffKind.ADDED)
    )


def is_fallback(lines: list[DiffLine]) -> bool:
    """Whether the diff came from the coarse path"""
    # The empty-input placeholder is the only other synthetic line, and it
    # never appears alongside real lines.
    return len(lines) > 1 and lines[0].synthetic


# ═══════════════════════════════════════════════════════════════════════════
# Module-level helper functions
# ═══════════════════════════════════════════════════════════════════════════


def compute_line_diff(
    historical_text: str,
    current_text: str,
    max_cells: int = DEFAULT_MAX_CELLS,
) -> list[DiffLine]:
    """Convenience function to diff two texts with default settings."""
    return LineDiffEngine(max_cells=max_cells).compute_line_diff(historical_text, current_text)
