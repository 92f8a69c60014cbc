"""
Task List Store

Owns every task list of the process and is the single place where a
request's session is checked against a list's owner. Lists live in memory
for the life of the process.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional
import logging
import threading
import uuid

from tasks_plugin.config import ListAddressing
from tasks_plugin.errors import Forbidden, NotFound
from tasks_plugin.models.task import TaskList, utcnow

logger = logging.getLogger(__name__)


class TaskListStore:
    """In-memory store of task lists, keyed by session id or list id."""

    def __init__(self, addressing: ListAddressing = ListAddressing.SESSION):
        self.addressing = addressing
        self._lists: Dict[str, TaskList] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._lists)

    def create(self, session_id: str) -> TaskList:
        """
        Allocate a new, empty list owned by session_id.

        Only available when lists are addressed explicitly; session-keyed
        lists are created on first write by resolve().
        """
        if self.addressing != ListAddressing.EXPLICIT:
            raise RuntimeError("Task lists are keyed by session; create() is not available")

        now = utcnow()
        task_list = TaskList(id=str(uuid.uuid4()), session_id=session_id, created_at=now, updated_at=now)
        self._insert(task_list)
        logger.info(f"Created task list {task_list.id} for session {session_id}")
        return task_list

    def resolve(self, session_id: str, list_id: Optional[str] = None,
                create_missing: bool = False) -> TaskList:
        """
        Find the list a request addresses and verify the caller owns it.

        Args:
            session_id: Session making the request
            list_id: Explicit list id (explicit addressing only)
            create_missing: Create the session's list if absent (session addressing only)

        Returns:
            The owned TaskList

        Raises:
            NotFound: No such list
            Forbidden: The list belongs to another session
        """
        if self.addressing == ListAddressing.SESSION:
            return self._resolve_by_session(session_id, create_missing)

        with self._guard:
            task_list = self._lists.get(list_id) if list_id else None

        if task_list is None:
            raise NotFound("task list", list_id)

        if task_list.session_id != session_id:
            logger.warning(
                f"Ownership validation failed: session {session_id} "
                f"attempted to access task list {list_id}"
            )
            raise Forbidden("task list")

        return task_list

    def _resolve_by_session(self, session_id: str, create_missing: bool) -> TaskList:
        with self._guard:
            task_list = self._lists.get(session_id)
            if task_list is None and create_missing:
                now = utcnow()
                task_list = TaskList(session_id=session_id, created_at=now, updated_at=now)
                self._lists[task_list.key] = task_list
                self._locks[task_list.key] = threading.RLock()
                logger.info(f"Created task list for session {session_id}")

        if task_list is None:
            raise NotFound("task list")
        return task_list

    def _insert(self, task_list: TaskList) -> None:
        with self._guard:
            self._lists[task_list.key] = task_list
            self._locks[task_list.key] = threading.RLock()

    @contextmanager
    def lock(self, task_list: TaskList) -> Iterator[TaskList]:
        """Hold the list's mutex for the duration of an operation."""
        with self._guard:
            list_lock = self._locks[task_list.key]
        with list_lock:
            yield task_list

    def touch(self, task_list: TaskList) -> None:
        """Refresh the list's updatedAt after a mutation."""
        task_list.updated_at = utcnow()
