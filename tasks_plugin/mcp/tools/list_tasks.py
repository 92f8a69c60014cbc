"""
List Tasks Tool

Lists every task of the caller's task list in insertion order.
"""

from typing import Any, Dict, List
import logging

from tasks_plugin.mcp.base_tool import BaseMCPTool, build_parameters, list_id_parameters
from tasks_plugin.schemas.task import dump_task
from tasks_plugin.services import task_operations

logger = logging.getLogger(__name__)


class ListTasksTool(BaseMCPTool):
    """Tool for listing tasks"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> List[Dict[str, Any]]:
        self.log_tool_invocation("list_tasks", session_id, args)

        task_list = self.resolve_list(session_id, args)
        with self.store.lock(task_list):
            tasks = [dump_task(task) for task in task_operations.list_tasks(task_list)]

        logger.info(f"Listed {len(tasks)} tasks for session {session_id}")
        return tasks


def register_list_tasks_tool(mcp_server, store, settings):
    """Register list_tasks tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    properties = list_id_parameters(settings)

    tool = MCPTool(
        name="list_tasks",
        description="List all tasks of the session's task list in insertion order",
        parameters=build_parameters(properties, list(properties)),
        handler=lambda **kwargs: ListTasksTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
