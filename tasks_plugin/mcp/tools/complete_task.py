"""
Complete Task Tool

Marks a task as completed. Completing an already completed task succeeds
and leaves it completed.
"""

from typing import Any, Dict
import logging

from tasks_plugin.mcp.base_tool import (
    BaseMCPTool,
    build_parameters,
    identity_parameters,
    list_id_parameters,
)
from tasks_plugin.schemas.task import dump_task
from tasks_plugin.services import task_operations

logger = logging.getLogger(__name__)


class CompleteTaskTool(BaseMCPTool):
    """Tool for completing tasks"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> Dict[str, Any]:
        self.log_tool_invocation("complete_task", session_id, args)

        identity = self.task_identity(args)
        task_list = self.resolve_list(session_id, args)
        with self.store.lock(task_list):
            task = task_operations.complete_task(task_list, identity)
            self.store.touch(task_list)
            logger.info(f"Completed task {task.identity} for session {session_id}")
            return dump_task(task)


def register_complete_task_tool(mcp_server, store, settings):
    """Register complete_task tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    properties = {**list_id_parameters(settings), **identity_parameters(settings)}

    tool = MCPTool(
        name="complete_task",
        description="Mark a task as completed",
        parameters=build_parameters(properties, list(properties)),
        handler=lambda **kwargs: CompleteTaskTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
