"""
Task List Errors

Every failure a tool can report is one of the request-scoped errors below.
Each carries a stable code, a message safe to show to the caller, and an
optional details dict.
"""

from typing import Any, Dict, Optional


class TaskListError(Exception):
    """Base exception for request-scoped task list failures"""

    code = "ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MissingContext(TaskListError):
    """No session identifier supplied with the request"""

    code = "MISSING_CONTEXT"
    status_code = 400

    def __init__(self):
        super().__init__("Missing context.sessionId", details={"field": "context.sessionId"})


class MissingArgument(TaskListError):
    """A required argument was absent or empty"""

    code = "MISSING_ARGUMENT"
    status_code = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing args.{field}", details={"field": field})


class InvalidArgument(TaskListError):
    """An argument was present but carries an unusable value"""

    code = "INVALID_ARGUMENT"
    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message, details={"field": field})


class NotFound(TaskListError):
    """Referenced task list, task or tool does not exist"""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, identifier: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        if identifier:
            message = f"{resource.capitalize()} not found: {identifier}"
            details = {"resource": resource, "id": identifier}
        else:
            message = f"{resource.capitalize()} not found"
            details = {"resource": resource}
        super().__init__(message, details=details)


class Forbidden(TaskListError):
    """Referenced task list exists but belongs to another session"""

    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, resource: str = "task list"):
        self.resource = resource
        super().__init__(
            f"Not authorized to access this {resource}",
            details={"resource": resource},
        )


class Conflict(TaskListError):
    """A task with the requested identity already exists in the list"""

    code = "CONFLICT"
    status_code = 409

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"Task already exists: {identity}", details={"identity": identity})


def create_error_response(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Create a standardized error response

    Args:
        code: Stable error code
        message: Caller-facing message
        details: Optional structured details

    Returns:
        Standardized error response dictionary
    """
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
    }
