"""
Check All Complete Tool

Reports whether every task in the caller's list is completed, along with
the identities of the tasks still open. Depending on configuration the
response is the structured record or a bare boolean.
"""

from typing import Any, Dict, Union

from tasks_plugin.mcp.base_tool import BaseMCPTool, build_parameters, list_id_parameters
from tasks_plugin.schemas.task import CompletionStatus, dump
from tasks_plugin.services import task_operations


class CheckAllCompleteTool(BaseMCPTool):
    """Tool for checking aggregate completion"""

    async def execute(self, session_id: str, args: Dict[str, Any]) -> Union[Dict[str, Any], bool]:
        self.log_tool_invocation("check_all_complete", session_id, args)

        task_list = self.resolve_list(session_id, args)
        with self.store.lock(task_list):
            result = task_operations.check_all_complete(task_list, self.settings.completion_response)

        if isinstance(result, CompletionStatus):
            return dump(result)
        return result


def register_check_all_complete_tool(mcp_server, store, settings):
    """Register check_all_complete tool with the server"""
    from tasks_plugin.mcp.server import MCPTool

    properties = list_id_parameters(settings)

    tool = MCPTool(
        name="check_all_complete",
        description="Check whether every task in the session's task list is completed",
        parameters=build_parameters(properties, list(properties)),
        handler=lambda **kwargs: CheckAllCompleteTool(store, settings).execute(**kwargs)
    )

    mcp_server.register_tool(tool)
