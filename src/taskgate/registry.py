"""Dependency-gated task registry.

``TaskManager`` owns every task record and every blocking edge. A task may
be completed once all of its blockers are complete; the registry answers
that question but never enforces it, and it permits cycles.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any

from rich.markup import escape

from taskgate import log
from taskgate.errors import TaskNotFoundError
from taskgate.tasks.model import Task, TaskFilter, TaskID


@dataclass(frozen=True)
class MutationEvent:
    """Emitted to subscribers after a mutating call has been applied."""

    operation: str
    task_id: TaskID


Listener = Callable[[MutationEvent], None]


class TaskManager:
    """In-memory store of tasks and their blocking-task lists.

    Usage::

        tm = TaskManager()
        tm.register_task(task)
        tm.add_blocking_task(task.id, other.id)   # other must finish first
        tm.get_can_complete_task(task.id)         # False until other is complete
        tm.set_task_completion(other.id, True)
    """

    def __init__(self) -> None:
        self._tasks: dict[TaskID, Task] = {}
        self._deps: dict[TaskID, list[TaskID]] = {}
        self._listeners: list[Listener] = []

    # ── observers ────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every mutation. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, operation: str, task_id: TaskID) -> None:
        event = MutationEvent(operation=operation, task_id=task_id)
        for listener in list(self._listeners):
            listener(event)

    # ── mutations ────────────────────────────────────────────────

    def register_task(self, task: Task) -> None:
        """Insert *task*, replacing any task with the same id."""
        self._tasks[task.id] = task
        log.debug(f"Task {escape(task.id)}: registered ({escape(repr(task.name))})")
        self._notify("register_task", task.id)

    def add_blocking_task(self, task_id: TaskID, blocking: TaskID | Iterable[TaskID]) -> None:
        """Append one blocker id, or each id of an iterable, to *task_id*'s blockers.

        Ids are neither validated nor deduplicated.
        """
        new_ids = [blocking] if isinstance(blocking, str) else list(blocking)
        self._deps.setdefault(task_id, []).extend(new_ids)
        log.debug(f"Task {escape(task_id)}: blocked by {escape(' '.join(new_ids))}")
        self._notify("add_blocking_task", task_id)

    def remove_blocking_task(self, task_id: TaskID, blocking_id: TaskID) -> None:
        """Drop every occurrence of *blocking_id* from *task_id*'s blockers."""
        blockers = self._deps.get(task_id, [])
        self._deps[task_id] = [bid for bid in blockers if bid != blocking_id]
        log.debug(f"Task {escape(task_id)}: no longer blocked by {escape(blocking_id)}")
        self._notify("remove_blocking_task", task_id)

    def set_task_completion(self, task_id: TaskID, is_complete: bool) -> None:
        """Replace *task_id*'s record with a copy whose ``complete`` is *is_complete*."""
        task = self._get_task_by_id(task_id)
        self._tasks[task_id] = replace(task, complete=is_complete)
        log.debug(f"Task {escape(task_id)}: complete={is_complete}")
        self._notify("set_task_completion", task_id)

    # ── lookups ──────────────────────────────────────────────────

    def get_task(self, task_id: TaskID) -> Task:
        return self._get_task_by_id(task_id)

    def get_tasks(self, filter: TaskFilter | str | None = None) -> list[Task]:
        """Return tasks in registration order, optionally only complete/incomplete ones."""
        tasks = list(self._tasks.values())
        if filter is None:
            return tasks
        if TaskFilter(filter) is TaskFilter.COMPLETE:
            return [t for t in tasks if t.complete]
        return [t for t in tasks if not t.complete]

    def get_blocking_task_ids(self, task_id: TaskID) -> list[TaskID]:
        return list(self._deps.get(task_id, []))

    def get_blocking_tasks(self, task_id: TaskID) -> list[Task]:
        return [self._get_task_by_id(bid) for bid in self.get_blocking_task_ids(task_id)]

    # ── gating ───────────────────────────────────────────────────

    def get_can_complete_task(self, task_id: TaskID) -> bool:
        """Return ``True`` if every recorded blocker of *task_id* is complete.

        A blocker id with no registered task raises ``TaskNotFoundError``.
        """
        blockers = self._deps.get(task_id)
        if not blockers:
            return True
        return all(self._get_task_by_id(bid).complete for bid in blockers)

    def get_eligible_dependent_tasks(self, task_id: TaskID) -> list[Task]:
        """Tasks that could still be added as blockers of *task_id*.

        Excludes the task itself and its current blockers. Does not look for
        cycles, so picking from this list can create one.
        """
        blockers = set(self._deps.get(task_id, []))
        return [t for t in self._tasks.values() if t.id != task_id and t.id not in blockers]

    # ── diagnostics ──────────────────────────────────────────────

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready copy of the whole registry, for debugging."""
        return {
            "tasks": [t.to_dict() for t in self._tasks.values()],
            "dependencies": {tid: list(ids) for tid, ids in self._deps.items()},
        }

    def explain_block(self, task_id: TaskID) -> str:
        """Human-readable explanation of why *task_id* can't be completed yet."""
        reasons: list[str] = []
        for bid in dict.fromkeys(self._deps.get(task_id, [])):
            blocker = self._tasks.get(bid)
            if blocker is None:
                reasons.append(f"{bid} (missing)")
            elif not blocker.complete:
                reasons.append(f"{bid} (incomplete)")
        return " ".join(reasons)

    def find_cycles(self) -> list[list[TaskID]]:
        """Return every blocking cycle, each as a path ending where it started."""
        cycles: list[list[TaskID]] = []
        seen: set[tuple[TaskID, ...]] = set()

        def record(loop: list[TaskID]) -> None:
            # one entry per cycle, whatever node it was entered from
            pivot = loop.index(min(loop))
            key = tuple(loop[pivot:] + loop[:pivot])
            if key not in seen:
                seen.add(key)
                cycles.append(loop + [loop[0]])

        def walk(start: TaskID, path: list[TaskID], on_path: set[TaskID]) -> None:
            for bid in self._deps.get(path[-1], []):
                if bid == start:
                    record(list(path))
                elif bid not in on_path:
                    path.append(bid)
                    on_path.add(bid)
                    walk(start, path, on_path)
                    on_path.discard(bid)
                    path.pop()

        for tid in list(self._deps):
            walk(tid, [tid], {tid})
        return cycles

    # ── internals ────────────────────────────────────────────────

    def _get_task_by_id(self, task_id: TaskID) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
