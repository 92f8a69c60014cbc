"""Main FastAPI application for the Tasks Plugin."""
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from tasks_plugin import __version__
from tasks_plugin.config import ListAddressing, Settings
from tasks_plugin.errors import MissingArgument, MissingContext, TaskListError, create_error_response
from tasks_plugin.logging_setup import configure_logging
from tasks_plugin.mcp.server import MCPServer
from tasks_plugin.mcp.tools.add_task import register_add_task_tool
from tasks_plugin.mcp.tools.check_all_complete import register_check_all_complete_tool
from tasks_plugin.mcp.tools.complete_task import register_complete_task_tool
from tasks_plugin.mcp.tools.create_task_list import register_create_task_list_tool
from tasks_plugin.mcp.tools.delete_task import register_delete_task_tool
from tasks_plugin.mcp.tools.list_tasks import register_list_tasks_tool
from tasks_plugin.mcp.tools.update_task import register_update_task_tool
from tasks_plugin.mcp.tools.view_task import register_view_task_tool
from tasks_plugin.middleware.cors import add_cors_middleware
from tasks_plugin.routers import tools_router
from tasks_plugin.services.task_list_store import TaskListStore

logger = logging.getLogger(__name__)


def request_error(exc: RequestValidationError) -> TaskListError:
    """Map a malformed tool request body onto the typed request errors."""
    locations = [tuple(error.get("loc", ())) for error in exc.errors()]
    if locations and all(loc[:2] == ("body", "args") for loc in locations):
        return MissingArgument("args")
    # missing body, malformed JSON or a bad context
    return MissingContext()


def build_mcp_server(store: TaskListStore, settings: Settings) -> MCPServer:
    """Create the tool server and register the tools for the configured mode."""
    mcp_server = MCPServer()

    if settings.list_addressing == ListAddressing.EXPLICIT:
        register_create_task_list_tool(mcp_server, store, settings)
    register_add_task_tool(mcp_server, store, settings)
    register_list_tasks_tool(mcp_server, store, settings)
    register_view_task_tool(mcp_server, store, settings)
    register_update_task_tool(mcp_server, store, settings)
    register_complete_task_tool(mcp_server, store, settings)
    register_delete_task_tool(mcp_server, store, settings)
    register_check_all_complete_tool(mcp_server, store, settings)

    return mcp_server


def create_app(settings: Optional[Settings] = None, store: Optional[TaskListStore] = None) -> FastAPI:
    """
    Build the application with its own store and tool server.

    Args:
        settings: Runtime settings (defaults to the environment)
        store: Task list store (defaults to a new, empty one)
    """
    if settings is None:
        settings = Settings.from_env()
    if store is None:
        store = TaskListStore(settings.list_addressing)
    if store.addressing != settings.list_addressing:
        raise ValueError(
            f"Store addressing {store.addressing.value} does not match "
            f"configured addressing {settings.list_addressing.value}"
        )

    app = FastAPI(
        title="Tasks Plugin",
        description="Session-scoped task lists for agent runtimes",
        version=__version__,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.mcp_server = build_mcp_server(store, settings)

    add_cors_middleware(app, settings)

    @app.exception_handler(TaskListError)
    async def task_list_error_handler(request: Request, exc: TaskListError):
        return JSONResponse(
            status_code=exc.status_code,
            content=create_error_response(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        error = request_error(exc)
        logger.info(f"Rejected malformed request to {request.url.path}: {error.code}")
        return await task_list_error_handler(request, error)

    @app.get("/health", response_class=PlainTextResponse)
    async def health_check():
        """Liveness probe."""
        return "OK"

    app.include_router(tools_router)

    logger.info(
        f"Tasks Plugin ready: identity={settings.identity_scheme.value} "
        f"addressing={settings.list_addressing.value} tools={app.state.mcp_server.list_tools()}"
    )
    return app


def create_app_from_env() -> FastAPI:
    """Application factory for uvicorn: configures logging from the environment."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings)


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
