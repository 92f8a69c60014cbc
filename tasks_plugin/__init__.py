"""Session-scoped task list plugin for agent runtimes."""

__version__ = "1.0.0"
