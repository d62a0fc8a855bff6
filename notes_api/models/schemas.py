from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Note(BaseModel):
    id: str
    title: str | None = None
    content: str | None = None


class NoteCreate(BaseModel):
    title: str | None = None
    content: str | None = None


class NotePatch(BaseModel):
    """Partial update: a missing or null field keeps the stored value."""

    title: str | None = None
    content: str | None = None


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str


class BasicMetricsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    request_count: int = Field(alias="requestCount")
    notes_count: int = Field(alias="notesCount")


class HealthResponse(BaseModel):
    status: str
