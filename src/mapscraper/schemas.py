from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RunStatus(str, Enum):
    READY = "READY"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED-OUT"
    ABORTED = "ABORTED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Any) -> "RunStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().upper())
        except ValueError:
            return cls.UNKNOWN


# platform status -> badge shown in the history table
DISPLAY_STATUS = {
    RunStatus.SUCCEEDED: "completed",
    RunStatus.RUNNING: "running",
    RunStatus.FAILED: "failed",
    RunStatus.ABORTED: "failed",
    RunStatus.TIMED_OUT: "failed",
}


class ActorRun(BaseModel):
    """One execution of the scraping actor, as returned by ``/acts/{id}/runs``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    act_id: Optional[str] = Field(None, alias="actId")
    status: RunStatus = RunStatus.UNKNOWN
    started_at: Optional[datetime] = Field(None, alias="startedAt")
    finished_at: Optional[datetime] = Field(None, alias="finishedAt")
    default_dataset_id: Optional[str] = Field(None, alias="defaultDatasetId")
    stats: Dict[str, Any] = Field(default_factory=dict)
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, v: Any) -> RunStatus:
        return RunStatus.parse(v)

    @field_validator("stats", "options", mode="before")
    @classmethod
    def _none_to_dict(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}

    @property
    def display_status(self) -> str:
        return DISPLAY_STATUS.get(self.status, "pending")

    @property
    def display_name(self) -> str:
        if self.started_at is None:
            return f"Run {self.id}"
        dt = self.started_at
        return f"Run {dt.strftime('%b')} {dt.day}, {dt.strftime('%H:%M')}"


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(extra="ignore")

    label: Optional[str] = None
    format: Optional[str] = None


class DisplaySchema(BaseModel):
    """Column order plus per-field label/format hints for the preview table.

    Keys in ``fields`` need not have an entry in ``properties``; such columns
    fall back to the raw key and default formatting.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    fields: List[str] = Field(default_factory=list)
    properties: Dict[str, FieldDescriptor] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def _fields_as_str(cls, v: Any) -> List[str]:
        if not isinstance(v, list):
            return []
        return [str(x) for x in v if x is not None]

    @field_validator("properties", mode="before")
    @classmethod
    def _drop_bad_descriptors(cls, v: Any) -> Dict[str, Any]:
        if not isinstance(v, dict):
            return {}
        return {str(k): d for k, d in v.items() if isinstance(d, (dict, FieldDescriptor))}

    def label_for(self, key: str) -> str:
        d = self.properties.get(key)
        return (d.label if d else None) or key

    def format_for(self, key: str) -> Optional[str]:
        d = self.properties.get(key)
        return d.format if d else None

    @classmethod
    def from_platform(cls, raw: Any) -> Optional["DisplaySchema"]:
        """
        Build from the dataset's ``schema`` block. Only the ``views.overview``
        view is used:
          {"views": {"overview": {"title": ...,
                                  "transformation": {"fields": [...]},
                                  "display": {"properties": {...}}}}}
        Returns None when the block is missing or has no overview view.
        """
        if not isinstance(raw, dict):
            return None
        overview = (raw.get("views") or {}).get("overview")
        if not isinstance(overview, dict):
            return None

        transformation = overview.get("transformation") or {}
        display = overview.get("display") or {}
        return cls(
            title=overview.get("title"),
            fields=transformation.get("fields") if isinstance(transformation, dict) else [],
            properties=display.get("properties") if isinstance(display, dict) else {},
        )


class DatasetMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: Optional[str] = None
    item_count: int = Field(0, alias="itemCount")
    display_schema: Optional[DisplaySchema] = Field(None, alias="schema")

    @field_validator("item_count", mode="before")
    @classmethod
    def _count_or_zero(cls, v: Any) -> int:
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            return 0

    @field_validator("display_schema", mode="before")
    @classmethod
    def _parse_schema(cls, v: Any) -> Optional[Any]:
        if v is None or isinstance(v, DisplaySchema):
            return v
        if isinstance(v, dict) and "views" not in v:
            # already flattened (fields/properties)
            return v
        return DisplaySchema.from_platform(v)
