"""API routes: parse documents, scan templates, render pages and whole sites."""

from __future__ import annotations

import json
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import AsyncGenerator

from fastapi import APIRouter, HTTPException
from loguru import logger
from sse_starlette.sse import EventSourceResponse

from .. import config
from ..document import DocumentParser
from ..errors import TemplateResolutionError, WebdotmdError
from ..models import (
    BuildResponse,
    ParseRequest,
    ParseResponse,
    PlaceholderInfo,
    RenderRequest,
    RenderResponse,
    ScanRequest,
    ScanResponse,
    TaskListResponse,
)
from ..services.site_builder import _task_store, build_site, get_task, list_tasks, run_task
from ..template import Template, constant

router = APIRouter(prefix="/api", tags=["api"])
_executor = ThreadPoolExecutor(max_workers=config.MAX_WORKERS)


def _http_error(e: WebdotmdError) -> HTTPException:
    if isinstance(e, TemplateResolutionError):
        return HTTPException(422, str(e))
    return HTTPException(400, str(e))


@router.post("/documents/parse", response_model=ParseResponse)
async def api_parse_document(body: ParseRequest):
    """Parse one document into metadata and a tree of tagged element dicts."""
    try:
        document = DocumentParser().parse(body.text)
    except WebdotmdError as e:
        raise _http_error(e)
    return ParseResponse(**document.to_dict())


@router.post("/templates/scan", response_model=ScanResponse)
async def api_scan_template(body: ScanRequest):
    """List the placeholders of a template with relative and absolute spans."""
    template = Template.from_text(body.content)
    placeholders = [
        PlaceholderInfo(
            name=ph.name,
            is_autofill=ph.is_autofill,
            relative_span=(ph.start, ph.end),
            absolute_span=(start, stop),
        )
        for ph, start, stop in template.spans()
    ]
    return ScanResponse(placeholders=placeholders)


@router.post("/render", response_model=RenderResponse)
async def api_render(body: RenderRequest):
    """Render pages synchronously. Returns rendered html keyed by output path."""
    autofill = {name: constant(value) for name, value in body.autofill.items()}
    try:
        result = build_site(
            body.pages, body.templates, autofill=autofill, values=body.values, skip_invalid=body.skip_invalid
        )
    except WebdotmdError as e:
        raise _http_error(e)
    return RenderResponse(**result)


@router.post("/sites/build", response_model=BuildResponse)
async def api_build_site(body: RenderRequest):
    """Start a site build. Returns task_id immediately. Subscribe to GET /api/tasks/{task_id}/stream for progress."""
    task_id = uuid.uuid4().hex
    _task_store[task_id] = {"status": "running", "events": [], "result": None}
    logger.info(f"Queued site build {task_id}: {len(body.pages)} pages")
    _executor.submit(
        run_task,
        pages=body.pages,
        templates=body.templates,
        autofill={name: constant(value) for name, value in body.autofill.items()},
        values=body.values,
        skip_invalid=body.skip_invalid,
        task_id=task_id,
    )
    return BuildResponse(task_id=task_id)


@router.get("/tasks/{task_id}/stream")
async def api_task_stream(task_id: str):
    """SSE stream for build progress. Events: PageRendered/PageFailed, progress, result, error."""
    if not get_task(task_id):
        raise HTTPException(404, "Task not found")

    async def event_generator() -> AsyncGenerator[str, None]:
        import asyncio
        last_index = 0
        while True:
            t = get_task(task_id)
            if not t:
                break
            events = t.get("events", [])
            for ev in events[last_index:]:
                yield json.dumps(ev)
            last_index = len(events)
            status = t.get("status", "running")
            if status != "running":
                result = t.get("result")
                if result:
                    yield json.dumps({"kind": "result", "data": result})
                break
            await asyncio.sleep(0.3)

    return EventSourceResponse(event_generator())


@router.get("/tasks", response_model=TaskListResponse)
async def api_tasks_list(page: int = 1, size: int = 20):
    """List site build history."""
    data = list_tasks(page=page, size=size)
    return TaskListResponse(**data)
