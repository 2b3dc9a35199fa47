from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator


class EventIn(BaseModel):
    """One candidate event as submitted by an agent."""

    source: str = Field(min_length=1)   # "git" | "fitness" | "reading" | ...
    context: str = ""                   # e.g. repository name
    timestamp: datetime                 # any parseable date-time; naive = UTC
    metadata: Any = Field(default_factory=dict)   # opaque, stored verbatim

    @field_validator("context", mode="before")
    @classmethod
    def _null_context(cls, v):
        return "" if v is None else v

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata(cls, v):
        return {} if v is None else v

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        try:
            return v.astimezone(timezone.utc)
        except OverflowError as exc:
            raise ValueError(f"timestamp out of range: {exc}") from exc


class EventOut(BaseModel):
    source: str
    context: str
    timestamp: datetime
    metadata: Any
