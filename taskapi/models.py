"""Pydantic models for the Task API."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
)

from taskapi import __version__


class TaskWrite(BaseModel):
    """Request body for creating or replacing a task.

    Any ``id`` sent by the client is ignored; the store owns identifiers.
    """

    name: StrictStr = Field(
        ...,
        min_length=1,
        description="The task name (required, non-empty)",
    )
    description: StrictStr = Field(
        default="",
        description="Free-text details about the task",
    )
    status: StrictInt = Field(
        default=0,
        ge=0,
        le=1,
        description="Completion status: 0 = incomplete, 1 = completed",
    )

    @field_validator("description", "status", mode="before")
    @classmethod
    def null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat an explicit null like an omitted optional field."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class Task(BaseModel):
    """A task held by the store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier for the task")
    name: str = Field(..., description="The task name")
    description: str = Field(default="", description="Free-text details about the task")
    status: int = Field(default=0, description="Completion status: 0 = incomplete, 1 = completed")


class ErrorResponse(BaseModel):
    """Body returned with every 4xx response."""

    error: str


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = __version__
