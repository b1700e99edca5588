"""
Typed view over a job snapshot payload.

Producers write a free-form JSON document per snapshot. Only a handful of
fields matter for progress tracking; this module gives each of them a named
accessor and a defined fallback so derivations never deal with raw dicts.

Payload shape (field names and nesting are fixed by producers):

    {
        "job": "<terminal step>",
        "complete": ["svc_a", "svc_b", "svc_b:sub_step"],
        "error": <any marker>,
        "data": {"router": {"route": ["svc_c"], "action": "<task label>"}}
    }

Dependencies: pydantic
System role: Payload contract for status and route derivation
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUB_STEP_SEPARATOR = ":"


def _as_name(value: Any) -> str | None:
    """Producer identifiers may be numbers; anything else is not a name."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_name_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    names = (_as_name(entry) for entry in value)
    return [name for name in names if name is not None]


def _as_section(value: Any) -> Any:
    return value if isinstance(value, dict) else {}


class RouterData(BaseModel):
    """Router section: remaining planned route and task label."""

    model_config = ConfigDict(extra="allow")

    route: list[str] = Field(default_factory=list, description="Planned remaining services")
    action: str | None = Field(default=None, description="Task label for the job")

    @field_validator("route", mode="before")
    @classmethod
    def route_names(cls, value: Any) -> list[str]:
        return _as_name_list(value)

    @field_validator("action", mode="before")
    @classmethod
    def action_name(cls, value: Any) -> str | None:
        return _as_name(value)


class PayloadData(BaseModel):
    """Data section of the payload."""

    model_config = ConfigDict(extra="allow")

    router: RouterData = Field(default_factory=RouterData)

    @field_validator("router", mode="before")
    @classmethod
    def router_section(cls, value: Any) -> Any:
        return _as_section(value)


class JobPayload(BaseModel):
    """
    Snapshot payload with fallbacks for every tracked field.

    Building the view never fails: malformed sections fall back to their
    defaults, null list entries are dropped, and numeric identifiers are
    read as their string form. Unknown keys are preserved as extra fields
    so a payload can be re-serialized without losing producer data.

    Attributes:
        job: Terminal step identifier
        complete: Completion markers, sub-step markers contain ':'
        error: Error marker; any value other than null/false means failure
        data: Nested router section
    """

    model_config = ConfigDict(extra="allow")

    job: str | None = None
    complete: list[str] = Field(default_factory=list)
    error: Any = None
    data: PayloadData = Field(default_factory=PayloadData)

    @field_validator("job", mode="before")
    @classmethod
    def job_name(cls, value: Any) -> str | None:
        return _as_name(value)

    @field_validator("complete", mode="before")
    @classmethod
    def complete_names(cls, value: Any) -> list[str]:
        return _as_name_list(value)

    @field_validator("data", mode="before")
    @classmethod
    def data_section(cls, value: Any) -> Any:
        return _as_section(value)

    @classmethod
    def from_raw(cls, raw: Any) -> "JobPayload":
        """
        Build a payload view from a stored JSON document.

        Args:
            raw: Decoded payload column value (None or a non-object is
                treated as an empty payload)

        Returns:
            JobPayload: Typed view with defaults applied
        """
        return cls.model_validate(_as_section(raw))

    @property
    def route(self) -> list[str]:
        """Planned remaining services, in route order."""
        return self.data.router.route

    @property
    def action(self) -> str | None:
        """Task label from the router section."""
        return self.data.router.action

    @property
    def has_error(self) -> bool:
        """Whether an error marker is present."""
        return self.error is not None and self.error is not False

    @property
    def completed_steps(self) -> list[str]:
        """Completion markers for whole steps, excluding sub-step markers."""
        return [entry for entry in self.complete if SUB_STEP_SEPARATOR not in entry]
