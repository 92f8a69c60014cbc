"""
Create Task List Tool

Allocates a new, empty task list owned by the calling session. Only
registered when lists are addressed explicitly by taskListId.
"""

from typing import Any, Dict

from tasks_plugin.mcp.base_tool import BaseMCPTool, build_parameters
from tasks_plugin.schemas.task import TaskListResponse, dump


class CreateTaskListTool(BaseMCPTool):
    """Tool for creating task lists"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> Dict[str, Any]:
        self.log_tool_invocation("create_task_list", session_id, args)

        task_list = self.store.create(session_id)
        with self.store.lock(task_list):
            return dump(TaskListResponse.from_task_list(task_list))


def register_create_task_list_tool(mcp_server, store, settings):
    """Register create_task_list tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    tool = MCPTool(
        name="create_task_list",
        description="Create a new, empty task list owned by the calling session",
        parameters=build_parameters({}, []),
        handler=lambda **kwargs: CreateTaskListTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
