"""
Delete Task Tool

Removes a task from the caller's task list.
"""

from typing import Any, Dict
import logging

from tasks_plugin.mcp.base_tool import (
    BaseMCPTool,
    build_parameters,
    identity_parameters,
    list_id_parameters,
)
from tasks_plugin.schemas.task import dump
from tasks_plugin.services import task_operations

logger = logging.getLogger(__name__)


class DeleteTaskTool(BaseMCPTool):
    """Tool for deleting tasks"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> Dict[str, Any]:
        self.log_tool_invocation("delete_task", session_id, args)

        identity = self.task_identity(args)
        task_list = self.resolve_list(session_id, args)
        with self.store.lock(task_list):
            confirmation = task_operations.delete_task(task_list, identity)
            self.store.touch(task_list)
            logger.info(f"Deleted task {identity} for session {session_id}")
            return dump(confirmation)


def register_delete_task_tool(mcp_server, store, settings):
    """Register delete_task tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    properties = {**list_id_parameters(settings), **identity_parameters(settings)}

    tool = MCPTool(
        name="delete_task",
        description="Delete a task from the session's task list",
        parameters=build_parameters(properties, list(properties)),
        handler=lambda **kwargs: DeleteTaskTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
