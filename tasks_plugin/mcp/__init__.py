"""
Tool Server Package

Registry of the task list tools an agent invokes over HTTP. Every tool
resolves its list through the TaskListStore, so ownership is checked before
any operation runs.
"""
