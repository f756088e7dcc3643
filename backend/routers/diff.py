"""Diff API endpoints"""

from __future__ import annotations

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse
from starlette.concurrency import run_in_threadpool

from models.diff import (
    DiffLine,
    DiffRequest,
    DiffResponse,
    DiffStreamEvent,
    RenderResponse,
)
from services.config_manager import ConfigManager
from services.line_diff import LineDiffEngine, is_fallback, render, render_text, summarize

router = APIRouter()


async def run_line_diff(historical_text: str, current_text: str) -> list[DiffLine]:
    """Compute a diff off the event loop with the configured engine"""
    config = ConfigManager.get_instance().get_config()
    engine = LineDiffEngine.from_config(config)
    return await run_in_threadpool(engine.compute_line_diff, historical_text, current_text)


async def build_diff_response(historical_text: str, current_text: str) -> DiffResponse:
    lines = await run_line_diff(historical_text, current_text)
    return DiffResponse(
        lines=lines,
        summary=summarize(lines),
        fallback=is_fallback(lines),
    )


@router.post("", response_model=DiffResponse)
async def diff_texts(request: DiffRequest) -> DiffResponse:
    """Diff a historical text against the current text"""
    return await build_diff_response(request.historical_text, request.current_text)


@router.post("/render", response_model=RenderResponse)
async def render_diff(request: DiffRequest) -> RenderResponse:
    """Diff two texts and return the prefixed display form"""
    lines = await run_line_diff(request.historical_text, request.current_text)
    summary = summarize(lines)
    return RenderResponse(
        lines=render(lines),
        text=render_text(lines),
        summary=summary,
        label=summary.label,
    )


@router.post("/stream")
async def stream_diff(request: DiffRequest):
    """Diff two texts and stream the lines (SSE)"""

    async def event_generator():
        try:
            lines = await run_line_diff(request.historical_text, request.current_text)

            for line in lines:
                event = DiffStreamEvent(type="line", line=line)
                yield {"event": "message", "data": event.model_dump_json()}

            event = DiffStreamEvent(
                type="summary",
                summary=summarize(lines),
                fallback=is_fallback(lines),
            )
            yield {"event": "message", "data": event.model_dump_json()}

            event = DiffStreamEvent(type="done", done=True)
            yield {"event": "message", "data": event.model_dump_json()}

        except Exception as e:
            event = DiffStreamEvent(type="error", error=str(e))
            yield {"event": "message", "data": event.model_dump_json()}

    return EventSourceResponse(event_generator())
