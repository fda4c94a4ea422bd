"""Branching undo history.

Unlike :class:`~edit_engine.buffer.undo.History`, a new edit made after an
undo never discards the undone future: it becomes a sibling branch. Every
navigation (plain undo/redo or jumping to an arbitrary node) reduces to
walking parent/child links and replaying operations.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from edit_engine.runtime import telemetry

from .document import TextBuffer
from .operations import CursorSnapshot, CursorTarget, EditOperation, coalesce
from .state import ORIGIN
from .undo import CoalesceClock

PREVIEW_LENGTH = 20


@dataclass(eq=False)
class UndoNode:
    """One user-visible edit; applying ``operations`` to the parent yields this state."""

    id: int
    parent: Optional["UndoNode"]
    operations: List[EditOperation] = field(default_factory=list)
    cursor_before: Optional[CursorSnapshot] = None
    cursor_after: Optional[CursorSnapshot] = None
    timestamp: float = 0.0
    children: List["UndoNode"] = field(default_factory=list)
    active_child: Optional[int] = None
    mergeable: bool = False

    @property
    def operation(self) -> Optional[EditOperation]:
        return self.operations[-1] if self.operations else None

    def descendants(self) -> int:
        return sum(1 + child.descendants() for child in self.children)

    def path(self) -> List["UndoNode"]:
        """Nodes from the root down to (and including) this one."""

        chain: List[UndoNode] = []
        node: Optional[UndoNode] = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    def walk(self) -> Iterator["UndoNode"]:
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class BranchInfo:
    index: int
    is_active: bool
    operation: Optional[EditOperation]
    timestamp: float
    descendants: int


class UndoTree:
    """Tree of edits rooted at the document state the history started from."""

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        coalesce_timeout_ms: int = 500,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self.buffer = buffer
        self._timer = CoalesceClock(coalesce_timeout_ms, clock)
        self._wall_clock = wall_clock
        self._cursor: Optional[CursorTarget] = None
        self._next_id = 1
        self._root = self._make_root()
        self._current = self._root

    def _make_root(self) -> UndoNode:
        return UndoNode(
            id=0,
            parent=None,
            cursor_after=CursorSnapshot(head=ORIGIN, tail=ORIGIN),
            timestamp=self._wall_clock(),
        )

    @property
    def root(self) -> UndoNode:
        return self._root

    @property
    def current(self) -> UndoNode:
        return self._current

    @property
    def coalesce_timeout_ms(self) -> int:
        return self._timer.timeout_ms

    @property
    def can_undo(self) -> bool:
        return self._current.parent is not None

    @property
    def can_redo(self) -> bool:
        return bool(self._current.children)

    @property
    def has_branches(self) -> bool:
        return len(self._current.children) > 1

    def attach(self, cursor: CursorTarget) -> None:
        self._cursor = cursor

    def record(
        self,
        operation: EditOperation,
        cursor_before: CursorSnapshot,
        *,
        combined: bool = False,
    ) -> None:
        within_window = self._timer.tick()
        node = self._current
        single = len(operation.text) == 1 and not operation.multiline

        if combined and node.parent is not None and not node.children:
            node.operations.append(operation)
            node.mergeable = single
            return

        if (
            node.parent is not None
            and not node.children
            and node.mergeable
            and within_window
            and node.operations
        ):
            merged = coalesce(node.operations[-1], operation)
            if merged is not None:
                node.operations[-1] = merged
                return

        child = UndoNode(
            id=self._next_id,
            parent=node,
            operations=[operation],
            cursor_before=cursor_before,
            timestamp=self._wall_clock(),
            mergeable=single,
        )
        self._next_id += 1
        node.children.append(child)
        node.active_child = len(node.children) - 1
        self._current = child

    def undo(self) -> bool:
        node = self._current
        parent = node.parent
        if parent is None:
            return False
        node.cursor_after = self._snapshot()
        for operation in reversed(node.operations):
            operation.inverse().apply(self.buffer)
        if node.cursor_before is not None:
            self._restore(node.cursor_before)
        parent.active_child = parent.children.index(node)
        self._current = parent
        self._timer.reset()
        return True

    def redo(self, branch: Optional[int] = None) -> bool:
        node = self._current
        if not node.children:
            return False
        if branch is None:
            branch = node.active_child if node.active_child is not None else 0
        if branch < 0 or branch >= len(node.children):
            return False
        child = node.children[branch]
        for operation in child.operations:
            operation.apply(self.buffer)
        if child.cursor_after is not None:
            self._restore(child.cursor_after)
        node.active_child = branch
        self._current = child
        self._timer.reset()
        return True

    def branches(self) -> List[BranchInfo]:
        node = self._current
        return [
            BranchInfo(
                index=index,
                is_active=index == node.active_child,
                operation=child.operation,
                timestamp=child.timestamp,
                descendants=child.descendants(),
            )
            for index, child in enumerate(node.children)
        ]

    def find(self, node_id: int) -> Optional[UndoNode]:
        for node in self._root.walk():
            if node.id == node_id:
                return node
        return None

    def go_to_node(self, node_id: int) -> bool:
        """Undo back to the common ancestor, then redo down to ``node_id``."""

        target = self.find(node_id)
        if target is None:
            return False
        with telemetry.span(
            "history::go_to_node",
            logger_name="edit_engine.history",
            component="history",
            metadata={"from": self._current.id, "to": node_id},
        ) as handle:
            current_path = self._current.path()
            target_path = target.path()
            common = 0
            while (
                common < len(current_path)
                and common < len(target_path)
                and current_path[common] is target_path[common]
            ):
                common += 1

            undo_steps = len(current_path) - common
            for _ in range(undo_steps):
                self.undo()
            for node in target_path[common:]:
                assert node.parent is not None
                self.redo(node.parent.children.index(node))
            handle.add_metadata("undo_steps", undo_steps)
            handle.add_metadata("redo_steps", len(target_path) - common)
        return True

    def get_tree(self) -> Dict[str, Any]:
        """Nested dict describing the tree, suitable for a history visualizer."""

        def describe(node: UndoNode) -> Dict[str, Any]:
            operation = node.operation
            preview = None
            if operation is not None:
                text = operation.text
                if len(text) > PREVIEW_LENGTH:
                    text = text[:PREVIEW_LENGTH] + "..."
                preview = {"type": operation.kind.value, "text": text}
            return {
                "id": node.id,
                "is_current": node is self._current,
                "operation": preview,
                "timestamp": node.timestamp,
                "children": [describe(child) for child in node.children],
                "active_child": node.active_child,
            }

        return describe(self._root)

    def clear(self) -> None:
        self._next_id = 1
        self._root = self._make_root()
        self._current = self._root
        self._timer.reset()

    def break_coalescing(self) -> None:
        self._timer.reset()

    def _snapshot(self) -> Optional[CursorSnapshot]:
        return self._cursor.snapshot() if self._cursor is not None else None

    def _restore(self, snapshot: CursorSnapshot) -> None:
        if self._cursor is not None:
            self._cursor.restore(snapshot)


__all__ = ["BranchInfo", "UndoNode", "UndoTree"]
