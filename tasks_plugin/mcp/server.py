"""
Tool Server Implementation

This module implements the registry of tools that agents call to manage
their session's task lists.
"""

from typing import Any, Callable, Dict, List
from dataclasses import dataclass
import logging

from tasks_plugin.errors import NotFound

logger = logging.getLogger(__name__)


@dataclass
class MCPTool:
    """Tool definition"""
    name: str
    description: str
    parameters: Dict[str, Any]
    handler: Callable


class MCPServer:
    """
    Tool server for session task lists

    Provides tools that agents can invoke against their own task lists.
    """

    def __init__(self, name: str = "tasks-plugin"):
        self.tools: Dict[str, MCPTool] = {}
        self.name = name
        logger.info(f"Initializing tool server: {self.name}")

    def register_tool(self, tool: MCPTool):
        """Register a tool with the server"""
        if tool.name in self.tools:
            logger.warning(f"Tool {tool.name} already registered, overwriting")

        self.tools[tool.name] = tool
        logger.info(f"Registered tool: {tool.name}")

    def get_tool(self, name: str) -> MCPTool:
        """Get a registered tool by name"""
        if name not in self.tools:
            raise NotFound("tool", name)
        return self.tools[name]

    def list_tools(self) -> List[str]:
        """List all registered tool names"""
        return list(self.tools.keys())

    async def invoke_tool(self, tool_name: str, session_id: str, args: Dict[str, Any]) -> Any:
        """
        Invoke a tool on behalf of a session

        Args:
            tool_name: Name of the tool to invoke
            session_id: Calling session, already validated by the router
            args: Tool arguments

        Returns:
            Tool execution result (JSON-ready data)

        Raises:
            NotFound: If the tool is not registered
        """
        tool = self.get_tool(tool_name)

        logger.debug(f"Invoking tool: {tool_name} for session: {session_id}")

        try:
            result = await tool.handler(session_id=session_id, args=args)
            logger.debug(f"Tool {tool_name} executed successfully")
            return result
        except Exception as e:
            logger.info(f"Tool {tool_name} failed: {str(e)}")
            raise

    def get_tool_schemas(self) -> Dict[str, Dict[str, Any]]:
        """Get JSON schemas for all registered tools"""
        return {
            name: {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.parameters
            }
            for name, tool in self.tools.items()
        }
