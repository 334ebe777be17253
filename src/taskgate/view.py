"""Rich renderables for the task list and a single task."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from taskgate.errors import TaskNotFoundError
from taskgate.registry import TaskManager
from taskgate.tasks.model import TaskFilter, TaskID


def _mark(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[dim]no[/dim]"


def _can_complete_cell(manager: TaskManager, task_id: TaskID) -> str:
    try:
        return _mark(manager.get_can_complete_task(task_id))
    except TaskNotFoundError:
        # a blocker id points at no task
        return "[red]?[/red]"


def render_tasks(
    manager: TaskManager,
    filter: TaskFilter | str | None = None,
    title: str = "Tasks",
) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Complete")
    table.add_column("Can complete")
    table.add_column("Blocked by")

    for task in manager.get_tasks(filter):
        table.add_row(
            escape(task.id),
            escape(task.name),
            _mark(task.complete),
            _can_complete_cell(manager, task.id),
            escape(" ".join(manager.get_blocking_task_ids(task.id))),
        )
    return table


def render_task(manager: TaskManager, task_id: TaskID) -> Table:
    """Detail view of one task. Raises ``TaskNotFoundError`` for an unknown id."""
    task = manager.get_task(task_id)

    table = Table(title=f"{escape(task.name)} ({escape(task.id)})", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Description", escape(task.description) if task.description else "[dim]-[/dim]")
    table.add_row("Complete", _mark(task.complete))
    table.add_row("Can complete", _can_complete_cell(manager, task.id))

    reason = manager.explain_block(task.id)
    if reason:
        table.add_row("Waiting on", escape(reason))

    blockers = manager.get_blocking_task_ids(task.id)
    table.add_row("Blocked by", escape(" ".join(blockers)) or "[dim]-[/dim]")

    candidates = manager.get_eligible_dependent_tasks(task.id)
    table.add_row(
        "Can depend on",
        ", ".join(f"{escape(t.name)} ({escape(t.id)})" for t in candidates) or "[dim]-[/dim]",
    )
    return table
