"""
Update Task Tool

Applies a partial update to a task: only the fields present in the request
change.
"""

from typing import Any, Dict
import logging

from tasks_plugin.mcp.base_tool import (
    BaseMCPTool,
    build_parameters,
    identity_parameters,
    list_id_parameters,
)
from tasks_plugin.models.task import TaskStatus
from tasks_plugin.schemas.task import dump_task
from tasks_plugin.services import task_operations

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("description", "status")


class UpdateTaskTool(BaseMCPTool):
    """Tool for updating tasks"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a task's description and/or status

        Args:
            session_id: Owner of the task list
            args: task identity, optional description and status

        Returns:
            Updated task
        """
        self.log_tool_invocation("update_task", session_id, args)

        identity = self.task_identity(args)
        fields = {}
        for name in UPDATABLE_FIELDS:
            value = self.optional_arg(args, name)
            if value is not None:
                fields[name] = value

        task_list = self.resolve_list(session_id, args)
        with self.store.lock(task_list):
            task = task_operations.update_task(task_list, identity, fields)
            self.store.touch(task_list)
            logger.info(f"Updated task {task.identity} for session {session_id}: {sorted(fields)}")
            return dump_task(task)


def register_update_task_tool(mcp_server, store, settings):
    """Register update_task tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    required_properties = {**list_id_parameters(settings), **identity_parameters(settings)}
    properties = {
        **required_properties,
        "description": {"type": "string", "description": "New task description (optional)"},
        "status": {
            "type": "string",
            "enum": [status.value for status in TaskStatus],
            "description": "New task status (optional)",
        },
    }

    tool = MCPTool(
        name="update_task",
        description="Update a task's description or status",
        parameters=build_parameters(properties, list(required_properties)),
        handler=lambda **kwargs: UpdateTaskTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
