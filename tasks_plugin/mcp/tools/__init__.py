"""Task list tools, one module per tool."""
