"""Consistency engine for AI programs."""

from .store import EntryStore, Layout, SEGMENT_ORDER, missing_sections
from .references import References, check_child_objects, find_references
from .tree import TreeNode, build_tree, find_roots, render_tree
from .engine import AIProgram

__all__ = [
    "AIProgram",
    "EntryStore",
    "Layout",
    "SEGMENT_ORDER",
    "missing_sections",
    "References",
    "check_child_objects",
    "find_references",
    "TreeNode",
    "build_tree",
    "find_roots",
    "render_tree",
]
