"""Pydantic models for the KG dashboard.

These schemas define the contract between the search orchestrator and the
rendering layer. Every model is frozen: state changes produce new values.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SourceCategory(str, Enum):
    """Kind of data provider behind a source."""

    DATABASE = "database"
    WEB = "web"
    API = "api"


class SourceStatus(str, Enum):
    """Per-source search state machine.

    idle -> searching -> complete | error, and any state -> idle on reset.
    """

    IDLE = "idle"
    SEARCHING = "searching"
    COMPLETE = "complete"
    ERROR = "error"


TERMINAL_STATUSES = frozenset({SourceStatus.COMPLETE, SourceStatus.ERROR})


class Source(BaseModel):
    """Data source listed in the search panel."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique, stable identifier")
    name: str = Field(..., min_length=1, description="Display name")
    category: SourceCategory

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ensure id is non-blank."""
        if not v.strip():
            raise ValueError("id must be non-empty")
        return v.strip()


class ProgressState(BaseModel):
    """Search progress of one source.

    Invariants:
        idle: progress and info are both None
        searching: 0 <= progress < 100, no info
        complete/error: progress == 100, info present
    """

    model_config = ConfigDict(frozen=True)

    status: SourceStatus = SourceStatus.IDLE
    progress: Optional[float] = Field(None, ge=0.0, le=100.0)
    info: Optional[str] = None

    @model_validator(mode="after")
    def validate_status_fields(self) -> "ProgressState":
        """Check progress/info against status."""
        if self.status == SourceStatus.IDLE:
            if self.progress is not None or self.info is not None:
                raise ValueError("idle state carries no progress or info")
        elif self.status == SourceStatus.SEARCHING:
            if self.progress is None or self.progress >= 100.0:
                raise ValueError("searching state requires 0 <= progress < 100")
            if self.info is not None:
                raise ValueError("searching state carries no info")
        else:
            if self.progress != 100.0:
                raise ValueError(f"{self.status.value} state requires progress == 100")
            if not self.info:
                raise ValueError(f"{self.status.value} state requires info")
        return self

    @classmethod
    def idle(cls) -> "ProgressState":
        return cls(status=SourceStatus.IDLE)

    @classmethod
    def searching(cls, progress: float = 0.0) -> "ProgressState":
        return cls(status=SourceStatus.SEARCHING, progress=progress)

    @classmethod
    def complete(cls, info: str) -> "ProgressState":
        return cls(status=SourceStatus.COMPLETE, progress=100.0, info=info)

    @classmethod
    def failed(cls, info: str) -> "ProgressState":
        return cls(status=SourceStatus.ERROR, progress=100.0, info=info)

    @property
    def is_terminal(self) -> bool:
        """True once the source finished this session (complete or error)."""
        return self.status in TERMINAL_STATUSES


class SourceSnapshot(BaseModel):
    """A source together with its current progress.

    Handed to source-click handlers and state listeners.
    """

    model_config = ConfigDict(frozen=True)

    source: Source
    state: ProgressState
