"""Tool router: every task list operation is POST /{tool_name}."""
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict
import logging

from tasks_plugin.errors import MissingContext, TaskListError, create_error_response
from tasks_plugin.mcp.server import MCPServer
from tasks_plugin.schemas.task import ToolRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tools"])


def get_mcp_server(request: Request) -> MCPServer:
    """Dependency for getting the application's tool server."""
    return request.app.state.mcp_server


@router.get("/tools", response_model=Dict[str, Any])
async def list_tools(server: MCPServer = Depends(get_mcp_server)):
    """JSON schemas of the registered tools."""
    return server.get_tool_schemas()


@router.post("/{tool_name}")
async def invoke_tool(
    tool_name: str,
    body: ToolRequest,
    server: MCPServer = Depends(get_mcp_server),
):
    """Invoke a task list tool on behalf of the session in the request context."""
    session_id = body.context.session_id if body.context else None
    if not session_id or not session_id.strip():
        raise MissingContext()

    try:
        return await server.invoke_tool(tool_name, session_id, body.args)
    except TaskListError:
        raise
    except Exception:
        logger.exception(f"Error in /{tool_name} for session {session_id}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=create_error_response("INTERNAL_ERROR", "Internal server error"),
        )
