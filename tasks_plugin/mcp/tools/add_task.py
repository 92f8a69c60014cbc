"""
Add Task Tool

Adds a pending task to the caller's task list. With label identities the
label must be unique within the list; otherwise a fresh task ID is generated.
"""

from typing import Any, Dict
import logging

from tasks_plugin.config import IdentityScheme
from tasks_plugin.mcp.base_tool import (
    BaseMCPTool,
    build_parameters,
    list_id_parameters,
)
from tasks_plugin.models.task import TaskIdentity
from tasks_plugin.schemas.task import dump_task
from tasks_plugin.services import task_operations

logger = logging.getLogger(__name__)


class AddTaskTool(BaseMCPTool):
    """Tool for adding tasks"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add a new pending task

        Args:
            session_id: Owner of the task list
            args: label (label identities) or description (generated IDs),
                plus taskListId with explicit addressing

        Returns:
            Created task
        """
        self.log_tool_invocation("add_task", session_id, args)

        if self.settings.identity_scheme == IdentityScheme.LABEL:
            identity = TaskIdentity.from_label(self.require_arg(args, "label"))
            description = self.optional_arg(args, "description")
        else:
            description = self.require_arg(args, "description")
            identity = TaskIdentity.generate()

        task_list = self.resolve_list(session_id, args, create_missing=True)
        with self.store.lock(task_list):
            task = task_operations.add_task(task_list, identity, description)
            self.store.touch(task_list)
            logger.info(f"Added task for session {session_id}: {task.identity}")
            return dump_task(task)


def register_add_task_tool(mcp_server, store, settings):
    """Register add_task tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    properties = list_id_parameters(settings)
    if settings.identity_scheme == IdentityScheme.LABEL:
        properties["label"] = {"type": "string", "description": "Task label, unique within the list"}
        properties["description"] = {"type": "string", "description": "Task description (optional)"}
        required = ["label"]
    else:
        properties["description"] = {"type": "string", "description": "Task description"}
        required = ["description"]
    required += list(list_id_parameters(settings))

    tool = MCPTool(
        name="add_task",
        description="Add a pending task to the session's task list",
        parameters=build_parameters(properties, required),
        handler=lambda **kwargs: AddTaskTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
