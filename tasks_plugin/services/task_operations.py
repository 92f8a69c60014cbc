"""
Task List Operations

Business logic applied to a single, already resolved and ownership-checked
TaskList. None of these functions touch the store: callers hold the list
lock and refresh the list's updatedAt after a successful mutation.
"""

from typing import Any, Dict, List, Optional, Union

from tasks_plugin.config import CompletionResponse, IdentityScheme
from tasks_plugin.errors import Conflict, InvalidArgument, NotFound
from tasks_plugin.models.task import Task, TaskIdentity, TaskList, TaskStatus, utcnow
from tasks_plugin.schemas.task import CompletionStatus, DeleteTaskResponse


def _get(task_list: TaskList, identity: TaskIdentity) -> Task:
    task = task_list.tasks.get(identity.value)
    if task is None:
        raise NotFound("task", identity.value)
    return task


def add_task(task_list: TaskList, identity: TaskIdentity, description: Optional[str] = None) -> Task:
    """Insert a new pending task; a label already in the list is a Conflict."""
    if identity.value in task_list.tasks:
        raise Conflict(identity.value)

    task = Task.new(identity, description, utcnow())
    task_list.tasks[task.identity] = task
    return task


def complete_task(task_list: TaskList, identity: TaskIdentity) -> Task:
    """Mark a task completed. Completing a completed task is a no-op write."""
    task = _get(task_list, identity)
    task.status = TaskStatus.COMPLETED
    task.updated_at = utcnow()
    return task


def update_task(task_list: TaskList, identity: TaskIdentity, fields: Dict[str, Any]) -> Task:
    """
    Apply a partial update to a task.

    Only description and status are updatable and only when present in
    fields; omitted fields keep their value. Completed tasks cannot go back
    to pending.
    """
    task = _get(task_list, identity)

    status = None
    if fields.get("status") is not None:
        try:
            status = TaskStatus(fields["status"])
        except ValueError:
            raise InvalidArgument(
                "status",
                f"Status must be one of: {', '.join(s.value for s in TaskStatus)}",
            )
        if task.is_completed and status == TaskStatus.PENDING:
            raise InvalidArgument("status", "Completed tasks cannot be reopened")

    description = fields.get("description")
    if description is not None and not isinstance(description, str):
        raise InvalidArgument("description", "Description must be a string")

    if description is not None:
        task.description = description
    if status is not None:
        task.status = status
    task.updated_at = utcnow()
    return task


def delete_task(task_list: TaskList, identity: TaskIdentity) -> DeleteTaskResponse:
    """Remove a task and return a confirmation record."""
    _get(task_list, identity)
    del task_list.tasks[identity.value]

    if identity.scheme == IdentityScheme.LABEL:
        return DeleteTaskResponse(deleted_label=identity.value)
    return DeleteTaskResponse(deleted_id=identity.value)


def view_task(task_list: TaskList, identity: TaskIdentity) -> Task:
    return _get(task_list, identity)


def list_tasks(task_list: TaskList) -> List[Task]:
    """All tasks in insertion order."""
    return list(task_list.tasks.values())


def check_all_complete(
    task_list: TaskList,
    response: CompletionResponse = CompletionResponse.STRUCTURED,
) -> Union[CompletionStatus, bool]:
    """
    Report whether every task is completed.

    An empty list is vacuously complete. In BOOLEAN mode only the
    allComplete flag is returned.
    """
    remaining = [task.identity for task in task_list.tasks.values() if not task.is_completed]
    result = CompletionStatus(all_complete=not remaining, remaining=remaining)
    if response == CompletionResponse.BOOLEAN:
        return result.all_complete
    return result
