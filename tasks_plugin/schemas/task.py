"""Request and response schemas for the task list tools."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Dict, List, Optional

from tasks_plugin.models.task import Task, TaskList, TaskStatus


class SessionContext(BaseModel):
    """Caller context attached to every tool request."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(None, alias="sessionId")


class ToolRequest(BaseModel):
    """Envelope of every tool call: {"context": {...}, "args": {...}}."""
    context: Optional[SessionContext] = None
    args: Dict[str, Any] = Field(default_factory=dict)


class TaskResponse(BaseModel):
    """Schema for task responses."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    status: TaskStatus
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class TaskListResponse(BaseModel):
    """Schema for task list responses."""
    id: Optional[str] = None
    session_id: str = Field(serialization_alias="sessionId")
    tasks: List[TaskResponse] = []
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def from_task_list(cls, task_list: TaskList) -> "TaskListResponse":
        return cls(
            id=task_list.id,
            session_id=task_list.session_id,
            tasks=[TaskResponse.model_validate(task) for task in task_list.tasks.values()],
            created_at=task_list.created_at,
            updated_at=task_list.updated_at,
        )


class DeleteTaskResponse(BaseModel):
    """Confirmation record returned by delete_task."""
    success: bool = True
    deleted_id: Optional[str] = Field(None, serialization_alias="deletedId")
    deleted_label: Optional[str] = Field(None, serialization_alias="deletedLabel")


class CompletionStatus(BaseModel):
    """Aggregate completion state of a task list."""
    all_complete: bool = Field(serialization_alias="allComplete")
    remaining: List[str] = []


def dump(model: BaseModel) -> Dict[str, Any]:
    """Serialize a response schema to camelCase JSON-ready data."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_task(task: Task) -> Dict[str, Any]:
    return dump(TaskResponse.model_validate(task))
