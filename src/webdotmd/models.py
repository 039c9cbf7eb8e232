"""Pydantic models for API request/response."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    metadata: dict[str, str]
    elements: list[dict[str, Any]]


class ScanRequest(BaseModel):
    content: str


class PlaceholderInfo(BaseModel):
    name: str
    is_autofill: bool
    relative_span: tuple[int, int]
    absolute_span: tuple[int, int]


class ScanResponse(BaseModel):
    placeholders: list[PlaceholderInfo]


class RenderRequest(BaseModel):
    pages: dict[str, str]
    templates: dict[str, str]
    # shared page values, overridden by each page's metadata
    values: dict[str, str] = Field(default_factory=dict)
    # constant values registered as zero-argument autofill functions
    autofill: dict[str, str] = Field(default_factory=dict)
    skip_invalid: bool = False


class RenderResponse(BaseModel):
    pages: dict[str, str]
    failures: dict[str, str] = Field(default_factory=dict)


class BuildResponse(BaseModel):
    task_id: str


class TaskListItem(BaseModel):
    task_id: str
    status: str
    page_count: int | None = None
    failure_reason: str | None = None


class TaskListResponse(BaseModel):
    tasks: list[TaskListItem]
    total: int
