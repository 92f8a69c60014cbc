"""
Base Tool Interface

Provides base functionality for all task list tools including:
- Required argument extraction
- Task list resolution and ownership checks
- Logging
"""

from typing import Any, Dict, Optional
from abc import ABC, abstractmethod
import logging

from tasks_plugin.config import IdentityScheme, ListAddressing, Settings
from tasks_plugin.errors import Forbidden, InvalidArgument, MissingArgument, NotFound
from tasks_plugin.models.task import TaskIdentity, TaskList
from tasks_plugin.services.task_list_store import TaskListStore

logger = logging.getLogger(__name__)

LIST_ID_ARG = "taskListId"


class BaseMCPTool(ABC):
    """
    Base class for all task list tools

    Provides common functionality:
    - Argument validation
    - List resolution through the store
    - Audit logging
    """

    def __init__(self, store: TaskListStore, settings: Settings):
        self.store = store
        self.settings = settings

    @property
    def identity_arg(self) -> str:
        """Name of the argument that identifies a task."""
        if self.settings.identity_scheme == IdentityScheme.LABEL:
            return "label"
        return "taskId"

    def require_arg(self, args: Dict[str, Any], field: str) -> str:
        """
        Fetch a required, non-empty string argument

        Raises:
            MissingArgument: If the argument is absent or empty
        """
        value = args.get(field)
        if not isinstance(value, str) or not value.strip():
            raise MissingArgument(field)
        return value

    def optional_arg(self, args: Dict[str, Any], field: str) -> Optional[str]:
        """
        Fetch an optional string argument

        Absent, null and whitespace-only values count as omitted.

        Raises:
            InvalidArgument: If the argument is present but not a string
        """
        value = args.get(field)
        if value is None:
            return None
        if not isinstance(value, str):
            raise InvalidArgument(field, f"{field.capitalize()} must be a string")
        return value if value.strip() else None

    def task_identity(self, args: Dict[str, Any]) -> TaskIdentity:
        """Identity of the task an argument set refers to."""
        return TaskIdentity.existing(
            self.settings.identity_scheme,
            self.require_arg(args, self.identity_arg),
        )

    def resolve_list(self, session_id: str, args: Dict[str, Any],
                     create_missing: bool = False) -> TaskList:
        """
        Resolve the caller's task list

        Args:
            session_id: Session making the request
            args: Tool arguments (taskListId in explicit addressing)
            create_missing: Create the session's list on first write

        Raises:
            MissingArgument: taskListId absent in explicit addressing
            NotFound: List does not exist (or is masked)
            Forbidden: List belongs to another session
        """
        list_id = None
        if self.settings.list_addressing == ListAddressing.EXPLICIT:
            list_id = self.require_arg(args, LIST_ID_ARG)

        try:
            return self.store.resolve(session_id, list_id, create_missing=create_missing)
        except Forbidden:
            if self.settings.mask_forbidden:
                # Do not reveal that the list exists
                raise NotFound("task list", list_id)
            raise

    def log_tool_invocation(self, tool_name: str, session_id: str, params: Dict[str, Any]) -> None:
        """
        Log tool invocation for audit trail

        Args:
            tool_name: Name of the tool being invoked
            session_id: Session making the request
            params: Tool arguments as received
        """
        logger.info(
            f"Tool Invocation: {tool_name} | Session: {session_id} | Args: {params}"
        )

    @abstractmethod
    async def execute(self, session_id: str, args: Dict[str, Any]) -> Any:
        """
        Execute the tool logic

        Must be implemented by subclasses

        Args:
            session_id: Calling session
            args: Tool-specific arguments

        Returns:
            JSON-ready tool result
        """
        pass


def list_id_parameters(settings: Settings) -> Dict[str, Any]:
    """JSON schema properties addressing a list, per addressing mode."""
    if settings.list_addressing == ListAddressing.EXPLICIT:
        return {LIST_ID_ARG: {"type": "string", "description": "Task list ID"}}
    return {}


def identity_parameters(settings: Settings) -> Dict[str, Any]:
    """JSON schema properties identifying a task, per identity scheme."""
    if settings.identity_scheme == IdentityScheme.LABEL:
        return {"label": {"type": "string", "description": "Task label"}}
    return {"taskId": {"type": "string", "description": "Task ID"}}


def build_parameters(properties: Dict[str, Any], required: list) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }
