"""
View Task Tool

Retrieves a single task from the caller's task list.
"""

from typing import Any, Dict

from tasks_plugin.mcp.base_tool import (
    BaseMCPTool,
    build_parameters,
    identity_parameters,
    list_id_parameters,
)
from tasks_plugin.schemas.task import dump_task
from tasks_plugin.services import task_operations


class ViewTaskTool(BaseMCPTool):
    """Tool for viewing a task"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> Dict[str, Any]:
        self.log_tool_invocation("view_task", session_id, args)

        identity = self.task_identity(args)
        task_list = self.resolve_list(session_id, args)
        with self.store.lock(task_list):
            return dump_task(task_operations.view_task(task_list, identity))


def register_view_task_tool(mcp_server, store, settings):
    """Register view_task tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    properties = {**list_id_parameters(settings), **identity_parameters(settings)}

    tool = MCPTool(
        name="view_task",
        description="View a single task",
        parameters=build_parameters(properties, list(properties)),
        handler=lambda **kwargs: ViewTaskTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
