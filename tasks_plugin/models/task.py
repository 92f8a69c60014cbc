"""Task and TaskList models for SQLModel."""
from sqlmodel import SQLModel, Field
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional
import uuid

from tasks_plugin.config import IdentityScheme


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    """Task lifecycle states. pending -> completed is the only transition."""
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TaskIdentity:
    """Opaque key of a task inside its list."""

    value: str
    scheme: IdentityScheme

    @classmethod
    def from_label(cls, label: str) -> "TaskIdentity":
        """Identity taken from a caller-supplied label."""
        return cls(value=label, scheme=IdentityScheme.LABEL)

    @classmethod
    def generate(cls) -> "TaskIdentity":
        """Fresh identity backed by a random UUID4."""
        return cls(value=str(uuid.uuid4()), scheme=IdentityScheme.GENERATED)

    @classmethod
    def existing(cls, scheme: IdentityScheme, value: str) -> "TaskIdentity":
        """Identity of a task the caller is referring to."""
        return cls(value=value, scheme=scheme)

    def __str__(self) -> str:
        return self.value


class Task(SQLModel):
    """Task entity. Exactly one of id/label carries its identity."""

    id: Optional[str] = Field(default=None)
    label: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def new(cls, identity: TaskIdentity, description: Optional[str], now: datetime) -> "Task":
        """Create a pending task keyed by the given identity."""
        if identity.scheme == IdentityScheme.LABEL:
            return cls(label=identity.value, description=description, created_at=now, updated_at=now)
        return cls(id=identity.value, description=description, created_at=now, updated_at=now)

    @property
    def identity(self) -> str:
        return self.label if self.label is not None else self.id

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskList(SQLModel):
    """A session's task list. Tasks are kept in insertion order."""

    id: Optional[str] = Field(default=None)  # only set for explicitly created lists
    session_id: str
    tasks: Dict[str, Task] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __setattr__(self, name, value):
        """Owning session is fixed once assigned."""
        if name == "session_id":
            current = getattr(self, "session_id", None)
            if current is not None and current != value:
                raise AttributeError("TaskList.session_id cannot be reassigned")
        super().__setattr__(name, value)

    @property
    def key(self) -> str:
        """Store key: the list id when present, otherwise the owning session."""
        return self.id if self.id is not None else self.session_id
