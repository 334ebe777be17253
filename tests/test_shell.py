"""Tests for taskgate.shell.TaskShell command handling."""

from __future__ import annotations

import pytest

from taskgate.config import Config
from taskgate.shell import TaskShell


@pytest.fixture
def shell(abc_manager) -> TaskShell:
    return TaskShell(abc_manager, Config(prompt=">"))


class TestShellCommands:
    """Each command drives the registry and reports through the log."""

    def test_blank_line_is_ignored(self, shell):
        assert shell.execute("   ") is True

    def test_quit(self, shell):
        assert shell.execute("quit") is False
        assert shell.execute("EXIT") is False

    def test_add_registers_task(self, shell, capsys):
        shell.execute('add "Take out trash" "before 8pm"')
        added = shell.manager.get_tasks()[-1]
        assert added.name == "Take out trash"
        assert added.description == "before 8pm"
        assert added.complete is False
        assert "Created task" in capsys.readouterr().out

    def test_add_without_description(self, shell):
        shell.execute("add Dishes")
        assert shell.manager.get_tasks()[-1].description is None

    def test_block_and_unblock(self, shell):
        shell.execute("block C A B")
        assert shell.manager.get_blocking_task_ids("C") == ["A", "B"]
        shell.execute("unblock C A")
        assert shell.manager.get_blocking_task_ids("C") == ["B"]

    def test_done_refused_while_blocked(self, shell, capsys):
        shell.execute("block C A")
        capsys.readouterr()
        shell.execute("done C")
        assert shell.manager.get_task("C").complete is False
        out = capsys.readouterr().out
        assert "blocked" in out
        assert "A (incomplete)" in out

    def test_done_then_undo(self, shell):
        shell.execute("block C A")
        shell.execute("done A")
        shell.execute("done C")
        assert shell.manager.get_task("C").complete is True
        shell.execute("undo A")
        assert shell.manager.get_task("A").complete is False
        assert shell.manager.get_task("C").complete is True

    def test_unknown_task_reported_not_raised(self, shell, capsys):
        assert shell.execute("show ghost") is True
        assert "Task not found" in capsys.readouterr().err

    def test_done_unknown_task(self, shell, capsys):
        assert shell.execute("done ghost") is True
        assert "Task not found" in capsys.readouterr().err

    def test_missing_blocker_reported(self, shell, capsys):
        shell.execute("block C ghost")
        capsys.readouterr()
        shell.execute("done C")
        assert "ghost" in capsys.readouterr().err

    def test_unknown_command(self, shell, capsys):
        assert shell.execute("frobnicate") is True
        assert "Unknown command" in capsys.readouterr().err

    def test_usage_errors(self, shell, capsys):
        shell.execute("block C")
        shell.execute("unblock C")
        shell.execute("show")
        shell.execute("add")
        err = capsys.readouterr().err
        assert err.count("usage:") == 4

    def test_unknown_markup_id_reported(self, shell, capsys):
        assert shell.execute('show "[/x]"') is True
        assert "[/x]" in capsys.readouterr().err

    def test_markup_blocker_id_rerenders(self, shell, capsys):
        assert shell.execute('block C "[/x]"') is True
        assert shell.manager.get_blocking_task_ids("C") == ["[/x]"]
        assert "[/x]" in capsys.readouterr().out

    def test_markup_blocker_id_in_block_warning(self, shell, capsys):
        shell.manager.add_blocking_task("[/x]", "A")
        capsys.readouterr()
        shell.execute('done "[/x]"')
        out = capsys.readouterr().out
        assert "Task [/x] is blocked" in out

    def test_markup_ids_in_cycle_report(self, shell, capsys):
        shell.execute('block "[/x]" "[/x]"')
        capsys.readouterr()
        shell.execute("cycles")
        assert "[/x] -> [/x]" in capsys.readouterr().out

    def test_unbalanced_quotes(self, shell, capsys):
        assert shell.execute('add "oops') is True
        assert "Cannot parse command" in capsys.readouterr().err

    def test_list_filter(self, shell, capsys):
        shell.execute("done B")
        capsys.readouterr()
        shell.execute("list complete")
        out = capsys.readouterr().out
        assert "Task B" in out
        assert "Task A" not in out

    def test_list_bad_filter(self, shell, capsys):
        shell.execute("list finished")
        assert "complete" in capsys.readouterr().err

    def test_eligible(self, shell, capsys):
        shell.execute("block C A")
        capsys.readouterr()
        shell.execute("eligible C")
        out = capsys.readouterr().out
        assert "B: Task B" in out
        assert "A: Task A" not in out

    def test_cycles(self, shell, capsys):
        shell.execute("cycles")
        assert "No blocking cycles" in capsys.readouterr().out
        shell.execute("block A B")
        shell.execute("block B A")
        capsys.readouterr()
        shell.execute("cycles")
        assert "A -> B -> A" in capsys.readouterr().out

    def test_dump_requires_debug(self, shell, capsys):
        shell.execute("dump")
        assert "--debug" in capsys.readouterr().err

    def test_dump_with_debug(self, abc_manager, capsys):
        shell = TaskShell(abc_manager, Config(debug=True))
        shell.execute("dump")
        out = capsys.readouterr().out
        assert '"dependencies"' in out
        assert '"Task A"' in out

    def test_help(self, shell, capsys):
        shell.execute("help")
        out = capsys.readouterr().out
        assert "block ID BLOCKER" in out
        assert "list [complete|incomplete]" in out


class TestShellRerender:
    """The task table is re-rendered only after a mutation."""

    def test_mutation_rerenders(self, shell, capsys):
        shell.execute("block C A")
        out = capsys.readouterr().out
        assert "Blocked by" in out

    def test_read_does_not_rerender(self, shell, capsys):
        shell.execute("eligible C")
        assert "Blocked by" not in capsys.readouterr().out

    def test_refused_done_does_not_rerender(self, shell, capsys):
        shell.execute("block C A")
        capsys.readouterr()
        shell.execute("done C")
        assert "Blocked by" not in capsys.readouterr().out

    def test_close_unsubscribes(self, shell, capsys):
        shell.close()
        shell.execute("block C A")
        assert "Blocked by" not in capsys.readouterr().out
