"""
Job domain models and schemas.

Request/response schemas for job events, derived job views, and payload
projections.

Dependencies: pydantic
System role: Job tracking API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RecordEventRequest(BaseModel):
    """Request schema for appending a job snapshot."""

    message_id: str = Field(min_length=1, max_length=255, description="Logical job key")
    account_id: int = Field(description="Owning account")
    payload: dict[str, Any] = Field(default_factory=dict, description="Execution state document")
    status: str | None = Field(default=None, description="Explicit status override")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message_id": "msg-4f1c",
                "account_id": 7,
                "payload": {
                    "job": "package",
                    "complete": ["fetch", "build:compile"],
                    "data": {"router": {"route": ["build", "package"], "action": "release"}},
                },
            }
        }
    )


class JobEventResponse(BaseModel):
    """Response schema for a stored job snapshot."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    message_id: str
    account_id: int
    payload: dict[str, Any]
    status: str | None
    created_at: datetime


class ServiceResponse(BaseModel):
    """Response schema for a resolved service entity."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class JobView(BaseModel):
    """
    Derived state of a job, computed from its current snapshot.

    percent_complete is -1 when neither a route nor completions are recorded.
    """

    id: int
    message_id: str
    account_id: int
    status: str
    percent_complete: int = Field(ge=-1, le=100)
    task: str | None
    pending_services: list[str]
    completed_services: list[str]
    route_services: list[str]
    created_at: datetime


class ProjectionRequest(BaseModel):
    """Request schema for a payload projection."""

    collections: dict[str, list[str | int]] = Field(
        default_factory=dict,
        description="At most one {alias: path} of a payload array",
    )
    scalars: dict[str, list[str | int]] = Field(
        default_factory=dict,
        description="{alias: path} of payload scalars",
    )
    account_ids: list[int] | None = Field(default=None, description="Account restriction")


class RegisterServiceRequest(BaseModel):
    """Request schema for registering a service."""

    name: str = Field(min_length=1, max_length=255, description="Service name used in routes")
    description: str | None = Field(default=None, description="Human-readable description")
