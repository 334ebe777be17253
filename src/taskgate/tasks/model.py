"""Task data model and the id-minting task factory."""

from __future__ import annotations

import itertools
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

TaskID = str

_id_counter = itertools.count()


class TaskFilter(str, Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class Task:
    id: TaskID
    name: str = ""
    description: str | None = None
    complete: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def next_task_id() -> TaskID:
    """Mint a process-unique task id (``"0"``, ``"1"``, ...)."""
    return str(next(_id_counter))


def make_task(name: str, description: str | None = None, complete: bool = False) -> Task:
    """Create a task with a freshly minted id and the given fields verbatim."""
    return Task(id=next_task_id(), name=name, description=description, complete=complete)
