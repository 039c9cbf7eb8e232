"""Render a whole site: many pages against one shared template set.

Pages are independent units, so they render in a thread pool; the template
map is read-only for the whole build. Output is keyed by page, never by
completion order.
"""

from __future__ import annotations

import uuid
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import PurePosixPath
from typing import Any, Callable, Mapping

from loguru import logger

from .. import config
from ..document import Document, DocumentParser
from ..errors import WebdotmdError
from ..template import AutofillFunc, Template
from .renderer import PageRenderer

# Event callback: (event_kind, data) -> None
EventCallback = Callable[[str, dict[str, Any]], None]

# In-memory task store for status and result
_task_store: dict[str, dict[str, Any]] = {}


def load_templates(sources: Mapping[str, str]) -> dict[str, Template]:
    """Scan every raw template in ``{logical path: text}``."""
    return {name: Template.from_text(text) for name, text in sources.items()}


def load_documents(sources: Mapping[str, str], parser: DocumentParser | None = None) -> dict[str, Document]:
    """Parse every raw document in ``{logical path: text}``; the first bad document raises."""
    parser = parser or DocumentParser()
    return {path: parser.parse(text) for path, text in sources.items()}


def output_path(page_path: str, extension: str | None = None) -> str:
    return str(PurePosixPath(page_path).with_suffix(extension or config.OUTPUT_EXTENSION))


def build_site(
    pages: Mapping[str, str],
    templates: Mapping[str, str],
    autofill: Mapping[str, AutofillFunc] | None = None,
    values: Mapping[str, str] | None = None,
    on_event: EventCallback | None = None,
    skip_invalid: bool | None = None,
    max_workers: int | None = None,
) -> dict[str, Any]:
    """Parse and render every page.

    Returns ``{"pages": {output path: html}, "failures": {page path: message}}``.
    ``values`` are shared by every page; a page's own metadata overrides them.
    Without ``skip_invalid`` the first failing page aborts the build and its
    error propagates.
    """
    emit = on_event or (lambda k, d: None)
    skip = config.SKIP_INVALID_PAGES if skip_invalid is None else skip_invalid
    parser = DocumentParser()
    renderer = PageRenderer(load_templates(templates), autofill)

    def render_page(text: str) -> str:
        return renderer.render(parser.parse(text), values)

    rendered: dict[str, str] = {}
    failures: dict[str, str] = {}
    logger.info(f"Building site: {len(pages)} pages, {len(templates)} templates")
    emit("SiteStarted", {"pages": len(pages), "templates": len(templates)})

    with ThreadPoolExecutor(max_workers=max_workers or config.MAX_WORKERS) as executor:
        futures = {executor.submit(render_page, text): path for path, text in pages.items()}
        for future in as_completed(futures):
            path = futures[future]
            try:
                html = future.result()
            except WebdotmdError as e:
                if not skip:
                    for pending in futures:
                        pending.cancel()
                    logger.error(f"Page {path} failed, aborting build: {e}")
                    emit("PageFailed", {"page": path, "reason": str(e)})
                    raise
                logger.warning(f"Skipping page {path}: {e}")
                failures[path] = str(e)
                emit("PageFailed", {"page": path, "reason": str(e)})
                continue
            out = output_path(path)
            rendered[out] = html
            emit("PageRendered", {"page": path, "output": out})

    logger.info(f"Site built: {len(rendered)} rendered, {len(failures)} failed")
    emit("SiteCompleted", {"rendered": len(rendered), "failed": len(failures)})
    return {"pages": rendered, "failures": failures}


def run_task(
    pages: Mapping[str, str],
    templates: Mapping[str, str],
    autofill: Mapping[str, AutofillFunc] | None = None,
    values: Mapping[str, str] | None = None,
    skip_invalid: bool | None = None,
    task_id: str | None = None,
) -> str:
    """Run a site build. If task_id is provided, use it and append events to that task's store."""
    task_id = task_id or uuid.uuid4().hex
    events: list[dict[str, Any]] = []
    total = len(pages) or 1
    done = 0

    def on_event(kind: str, data: dict[str, Any]) -> None:
        nonlocal done
        events.append({"kind": kind, "data": data})
        if kind in ("PageRendered", "PageFailed"):
            done += 1
            events.append({"kind": "progress", "data": {"page": data.get("page"), "progress": done * 100 // total}})
        if task_id in _task_store:
            _task_store[task_id]["events"] = list(events)

    _task_store[task_id] = {"status": "running", "events": events, "result": None}
    try:
        result = build_site(
            pages, templates, autofill=autofill, values=values, on_event=on_event, skip_invalid=skip_invalid
        )
        _task_store[task_id]["result"] = {
            "status": "success" if not result["failures"] else "partial_success",
            "pages": result["pages"],
            "failures": result["failures"],
            "failure_reason": "",
        }
        _task_store[task_id]["status"] = "completed"
    except Exception as e:
        logger.error(f"Site build {task_id} failed: {e}")
        _task_store[task_id]["status"] = "failed"
        _task_store[task_id]["result"] = {"status": "failed", "failure_reason": str(e)}
        events.append({"kind": "error", "data": {"message": str(e)}})
    _task_store[task_id]["events"] = list(events)
    return task_id


def get_task(task_id: str) -> dict[str, Any] | None:
    return _task_store.get(task_id)


def list_tasks(page: int = 1, size: int = 20) -> dict[str, Any]:
    items = list(_task_store.items())
    items.reverse()
    total = len(items)
    start = (page - 1) * size
    end = start + size
    tasks = []
    for tid, data in items[start:end]:
        row = {"task_id": tid, "status": data.get("status", "unknown")}
        result = data.get("result")
        if result:
            row["page_count"] = len(result.get("pages") or {})
            row["failure_reason"] = result.get("failure_reason") or None
        tasks.append(row)
    return {"tasks": tasks, "total": total}
