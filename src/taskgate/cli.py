"""taskgate CLI.

Installed as ``taskgate`` console_script; also runnable as ``python -m taskgate``.
"""

from __future__ import annotations

import click

from taskgate import __version__
from taskgate.config import Config
from taskgate.registry import TaskManager
from taskgate.tasks.model import make_task


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.option("--debug", is_flag=True, help="Enable diagnostic commands (dump)")
@click.version_option(__version__, prog_name="taskgate")
@click.pass_context
def main(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """taskgate — track tasks and what must be finished before them.

    \b
    EXAMPLES:
      taskgate shell            # interactive task registry
      taskgate --debug shell    # ... with the 'dump' command enabled
      taskgate demo             # walk through a small example
    """
    from taskgate import log

    log.set_verbose(verbose)
    ctx.obj = Config(verbose=verbose, debug=debug)


@main.command()
@click.pass_obj
def shell(cfg: Config) -> None:
    """Start an interactive shell over a fresh task registry."""
    from taskgate.shell import TaskShell

    TaskShell(TaskManager(), cfg).run()


@main.command()
@click.pass_obj
def demo(cfg: Config) -> None:
    """Build a small chore list and complete it in dependency order."""
    from taskgate import log
    from taskgate.view import render_tasks

    tm = TaskManager()
    tm.subscribe(lambda event: log.debug(f"mutation: {event.operation} ({event.task_id})"))

    cooking = make_task("Finish cooking")
    counters = make_task("Wipe counters", "After the cooking is done")
    vacuum = make_task("Vacuum")
    checkout = make_task("Checkout", "Leave the keys on the table")
    for task in (cooking, counters, vacuum, checkout):
        tm.register_task(task)

    tm.add_blocking_task(counters.id, cooking.id)
    tm.add_blocking_task(vacuum.id, counters.id)
    tm.add_blocking_task(checkout.id, vacuum.id)

    log.render(render_tasks(tm, title="Chores"))

    for task in (checkout, vacuum, counters, cooking):
        if tm.get_can_complete_task(task.id):
            log.info(f"{task.name} can be completed now")
        else:
            log.warn(f"{task.name} is waiting on: {tm.explain_block(task.id)}")

    for task in (cooking, counters, vacuum, checkout):
        tm.set_task_completion(task.id, True)
        log.success(f"Completed {task.name}")

    log.render(render_tasks(tm, title="Chores"))

    cycles = tm.find_cycles()
    if cycles:
        for cycle in cycles:
            log.warn(f"Cycle: {' -> '.join(cycle)}")
    else:
        log.success("No blocking cycles")

    if cfg.debug:
        log.dump(tm.snapshot())
