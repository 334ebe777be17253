"""Interactive command loop over a ``TaskManager``."""

from __future__ import annotations

import shlex

import click
from rich.markup import escape

from taskgate import log
from taskgate.config import Config
from taskgate.errors import TaskNotFoundError
from taskgate.registry import MutationEvent, TaskManager
from taskgate.tasks.model import TaskFilter, make_task
from taskgate.view import render_task, render_tasks

HELP_TEXT = """\
[bold]Commands[/bold]
  add NAME [DESCRIPTION]      create a task
  list \\[complete|incomplete]  show tasks
  show ID                     show one task
  block ID BLOCKER...         ID can't be completed before BLOCKER
  unblock ID BLOCKER          remove BLOCKER from ID's blockers
  done ID                     mark complete (only when nothing blocks it)
  undo ID                     mark incomplete
  eligible ID                 tasks that could still block ID
  cycles                      report blocking cycles
  dump                        print the registry as JSON (--debug only)
  help                        this text
  quit                        leave the shell"""


class TaskShell:
    """Line-oriented front end. Re-renders the task list after each mutation."""

    def __init__(self, manager: TaskManager, cfg: Config | None = None) -> None:
        self.manager = manager
        self.cfg = cfg or Config()
        self._dirty = False
        self._unsubscribe = manager.subscribe(self._on_mutation)

    def _on_mutation(self, event: MutationEvent) -> None:
        log.debug(f"mutation: {event.operation} ({escape(event.task_id)})")
        self._dirty = True

    def close(self) -> None:
        self._unsubscribe()

    # ── loop ─────────────────────────────────────────────────────

    def run(self) -> None:
        log.info("Type 'help' for commands, 'quit' to leave.")
        try:
            while True:
                try:
                    line = click.prompt(
                        self.cfg.prompt, default="", show_default=False, prompt_suffix=" "
                    )
                except click.Abort:
                    # EOF / Ctrl-C
                    break
                if not self.execute(line):
                    break
        finally:
            self.close()

    def execute(self, line: str) -> bool:
        """Run one command line. Returns ``False`` when the shell should exit."""
        try:
            argv = shlex.split(line)
        except ValueError as exc:
            log.error(escape(f"Cannot parse command: {exc}"))
            return True
        if not argv:
            return True

        self._dirty = False
        try:
            keep_going = self._dispatch(argv[0].lower(), argv[1:])
        except TaskNotFoundError as exc:
            log.error(escape(str(exc)))
            keep_going = True
        except click.UsageError as exc:
            log.error(escape(exc.format_message()))
            keep_going = True

        if self._dirty:
            log.render(render_tasks(self.manager))
        return keep_going

    # ── commands ─────────────────────────────────────────────────

    def _dispatch(self, cmd: str, args: list[str]) -> bool:
        match cmd:
            case "quit" | "exit":
                return False
            case "help":
                log.render(HELP_TEXT)
            case "add":
                self._add(args)
            case "list":
                self._list(args)
            case "show":
                log.render(render_task(self.manager, _one(args, "show ID")))
            case "block":
                if len(args) < 2:
                    raise click.UsageError("usage: block ID BLOCKER...")
                self.manager.add_blocking_task(args[0], args[1:])
            case "unblock":
                if len(args) != 2:
                    raise click.UsageError("usage: unblock ID BLOCKER")
                self.manager.remove_blocking_task(args[0], args[1])
            case "done":
                self._done(_one(args, "done ID"))
            case "undo":
                self.manager.set_task_completion(_one(args, "undo ID"), False)
            case "eligible":
                self._eligible(_one(args, "eligible ID"))
            case "cycles":
                self._cycles()
            case "dump":
                if not self.cfg.debug:
                    raise click.UsageError("dump is only available with --debug")
                log.dump(self.manager.snapshot())
            case _:
                raise click.UsageError(f"Unknown command: {cmd} (try 'help')")
        return True

    def _add(self, args: list[str]) -> None:
        if not args or len(args) > 2:
            raise click.UsageError("usage: add NAME [DESCRIPTION]")
        description = args[1] if len(args) == 2 else None
        task = make_task(args[0], description=description)
        self.manager.register_task(task)
        log.success(f"Created task {escape(task.id)}: {escape(task.name)}")

    def _list(self, args: list[str]) -> None:
        if len(args) > 1:
            raise click.UsageError("usage: list [FILTER]")
        if not args:
            log.render(render_tasks(self.manager))
            return
        try:
            task_filter = TaskFilter(args[0].lower())
        except ValueError:
            raise click.UsageError("list filter must be 'complete' or 'incomplete'") from None
        log.render(render_tasks(self.manager, task_filter, title=f"Tasks ({task_filter.value})"))

    def _done(self, task_id: str) -> None:
        if not self.manager.get_can_complete_task(task_id):
            reason = self.manager.explain_block(task_id)
            log.warn(f"Task {escape(task_id)} is blocked: {escape(reason)}")
            return
        self.manager.set_task_completion(task_id, True)

    def _eligible(self, task_id: str) -> None:
        candidates = self.manager.get_eligible_dependent_tasks(task_id)
        if not candidates:
            log.info(f"No other tasks can block {escape(task_id)}")
            return
        for task in candidates:
            log.console.print(f"  - {escape(task.id)}: {escape(task.name)}")

    def _cycles(self) -> None:
        cycles = self.manager.find_cycles()
        if not cycles:
            log.success("No blocking cycles")
            return
        for cycle in cycles:
            log.warn(f"Cycle: {escape(' -> '.join(cycle))}")


def _one(args: list[str], usage: str) -> str:
    if len(args) != 1:
        raise click.UsageError(f"usage: {usage}")
    return args[0]
