"""Console output for taskgate: tagged log lines and rich renderables."""

from __future__ import annotations

from typing import Any

from rich.console import Console, RenderableType

console = Console(highlight=False)
_err_console = Console(highlight=False, stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def _emit(out: Console, tag: str, style: str, msg: str) -> None:
    out.print(f"[{style}]\\[{tag}][/{style}] {msg}")


def info(msg: str) -> None:
    _emit(console, "INFO", "blue", msg)


def success(msg: str) -> None:
    _emit(console, "OK", "green", msg)


def warn(msg: str) -> None:
    _emit(console, "WARN", "yellow", msg)


def error(msg: str) -> None:
    _emit(_err_console, "ERROR", "red", msg)


def debug(msg: str) -> None:
    if _verbose:
        console.print(f"[dim]\\[DEBUG] {msg}[/dim]")


def render(renderable: RenderableType) -> None:
    """Print a table, panel or markup string to stdout."""
    console.print(renderable)


def dump(data: Any) -> None:
    """Pretty-print JSON-serialisable *data* (diagnostic snapshots)."""
    console.print_json(data=data)
