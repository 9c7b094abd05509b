"""
Edit session: run structural edits off the interactive thread.

An editor front end should stay responsive while an insert or delete and the
following tree rebuild run. ``EditSession`` runs each edit on a worker thread
(``asyncio.to_thread``) against a private copy of the program and hands back
the result once. The copy and its rebuilt tree replace the session state
only when the edit succeeds, so a failed edit is never visible.

Only one edit may be in flight. A second submission while the first is
running raises ``EditInProgressError``; front ends are expected to disable
edit controls while ``busy`` is True.

Usage:
    session = EditSession(AIProgram.from_file(path, services))
    index = await session.add_entry(Segment.AI, "SelectRandom")
    await session.update_names(index, "Pick", "Root")
    render_tree(session.tree)
    await session.save(path)
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, List, Tuple, TypeVar

from .errors import EditInProgressError
from .logging_utils import log_success
from .program import AIProgram, TreeNode
from .schemas import Segment

T = TypeVar("T")


class EditSession:
    """Owns the current program and tree of one open document."""

    def __init__(self, program: AIProgram, *, verbose: bool = False):
        self.program = program
        self.tree: List[TreeNode] = program.to_tree()
        self.verbose = verbose
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    async def _run(self, description: str, operation: Callable[[AIProgram], T]) -> T:
        if self.busy:
            raise EditInProgressError()

        self._in_flight = True
        try:
            working = self.program.copy()

            def _task() -> Tuple[T, List[TreeNode]]:
                result = operation(working)
                return result, working.to_tree()

            result, tree = await asyncio.to_thread(_task)
            self.program = working
            self.tree = tree
        finally:
            self._in_flight = False

        if self.verbose:
            log_success(f"[Edit] {description}")
        return result

    async def add_entry(self, segment: Segment, class_name: str) -> int:
        return await self._run(
            f"Added {segment.value} '{class_name}'",
            lambda program: program.add_entry(segment, class_name),
        )

    async def delete_entry(self, index: int) -> None:
        await self._run(
            f"Deleted entry {index}",
            lambda program: program.delete_entry(index),
        )

    async def update_names(self, index: int, child_name: str, parent_name: str) -> None:
        await self._run(
            f"Renamed entry {index} to '{child_name}'",
            lambda program: program.update_names(index, child_name, parent_name),
        )

    async def save(self, path: Path | str) -> None:
        await asyncio.to_thread(self.program.save, path)
        if self.verbose:
            log_success(f"[Save] Wrote {path}")
