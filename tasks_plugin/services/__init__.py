"""Task list services: ownership resolution and list operations."""
