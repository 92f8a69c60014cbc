"""Runtime configuration for the Tasks Plugin."""
from enum import Enum
from typing import List
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env values without overriding the real environment
load_dotenv()


class IdentityScheme(str, Enum):
    """How tasks are identified inside a list."""
    LABEL = "label"          # caller-supplied label, unique per list
    GENERATED = "generated"  # fresh UUID per add_task


class ListAddressing(str, Enum):
    """How a request is routed to its task list."""
    SESSION = "session"    # the session id is the list key
    EXPLICIT = "explicit"  # lists are created and addressed by taskListId


class CompletionResponse(str, Enum):
    """Response shape of check_all_complete."""
    STRUCTURED = "structured"
    BOOLEAN = "boolean"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Application settings."""

    identity_scheme: IdentityScheme = IdentityScheme.GENERATED
    list_addressing: ListAddressing = ListAddressing.SESSION
    completion_response: CompletionResponse = CompletionResponse.STRUCTURED
    mask_forbidden: bool = Field(
        default=False,
        description="Report lists owned by another session as not found",
    )

    log_level: str = "INFO"
    environment: str = "development"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        origins = os.environ.get("CORS_ORIGINS", "*")
        return cls(
            identity_scheme=os.environ.get("TASK_IDENTITY_SCHEME", IdentityScheme.GENERATED.value),
            list_addressing=os.environ.get("TASK_LIST_ADDRESSING", ListAddressing.SESSION.value),
            completion_response=os.environ.get("COMPLETION_RESPONSE", CompletionResponse.STRUCTURED.value),
            mask_forbidden=_env_bool("MASK_FORBIDDEN"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            environment=os.environ.get("ENVIRONMENT", "development"),
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "8080")),
        )
