"""Tree builder: derive the rooted AI hierarchy from ChildIdx references.

Roots are AI records that no ChildIdx points at. Each tree follows ChildIdx
values in stored order, skipping ``-1`` slots. A child referenced from two
parents appears under both; a reference back to an ancestor raises
``CycleDetectedError`` instead of recursing forever.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Sequence, Tuple

from pydantic import BaseModel, Field

from ..errors import CycleDetectedError
from ..schemas import CHILD_IDX

if TYPE_CHECKING:  # pragma: no cover
    from .engine import AIProgram


class TreeNode(BaseModel):
    """One entry in the display tree."""

    display_name: str = Field(..., description="Localized Name or ClassName")
    global_index: int = Field(..., description="Index of the record in the program")
    children: List["TreeNode"] = Field(default_factory=list)

    def walk(self) -> Iterator["TreeNode"]:
        """Depth-first, parents before children."""

        yield self
        for child in self.children:
            yield from child.walk()


def find_roots(program: "AIProgram") -> List[int]:
    """AI indices never targeted by a ChildIdx reference, in AI order."""

    return [
        index
        for index in range(program.actions_offset())
        if not program.references(index).ai_child_refs
    ]


def build_tree(program: "AIProgram", index: int, path: Tuple[int, ...] = ()) -> TreeNode:
    if index in path:
        raise CycleDetectedError(path=[*path, index])

    record = program.record_at(index)
    children: List[TreeNode] = []
    child_refs = record.get_object(CHILD_IDX)
    if child_refs is not None:
        for _, param in child_refs.items():
            child = param.as_int()
            if child is not None and child >= 0:
                children.append(build_tree(program, child, (*path, index)))

    return TreeNode(
        display_name=program.display_name(record, index=index),
        global_index=index,
        children=children,
    )


def render_tree(trees: Sequence[TreeNode]) -> str:
    """Indented outline, one line per node: ``name [index]``."""

    lines: List[str] = []

    def _render(node: TreeNode, prefix: str, is_last: bool, is_root: bool) -> None:
        label = f"{node.display_name} [{node.global_index}]"
        if is_root:
            lines.append(label)
            child_prefix = ""
        else:
            lines.append(f"{prefix}{'└── ' if is_last else '├── '}{label}")
            child_prefix = prefix + ("    " if is_last else "│   ")
        for position, child in enumerate(node.children):
            _render(child, child_prefix, position == len(node.children) - 1, False)

    for tree in trees:
        _render(tree, "", True, True)
    return "\n".join(lines)
