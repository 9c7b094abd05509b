"""Reference resolver: find every embedded index pointing at a record.

Three kinds of objects hold references:

- ``DemoAIActionIdx`` (top level): global indices of demo AI/Action entries
- ``ChildIdx`` (on AI records): global indices of child AI/Action entries
- ``BehaviorIdx`` (on AI and Action records): indices local to the Behavior
  segment, i.e. ``global - behaviors_offset``

Resolution is a full scan. Containers hold tens to low hundreds of records
and mutations are user-driven, so no index is maintained.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Set, Tuple

from ..catalog import ClassCatalog
from ..errors import MissingRequiredObjectError
from ..schemas import BEHAVIOR_IDX, CHILD_IDX, CLASS_NAME, DEF, ParameterList, ParameterObject, Segment
from .store import EntryStore, Layout

# (global index of the record holding the reference, parameter key)
Location = Tuple[int, int]


@dataclass
class References:
    """Locations whose value currently equals one target index."""

    demo_refs: Set[int] = field(default_factory=set)
    ai_child_refs: Set[Location] = field(default_factory=set)
    ai_behavior_refs: Set[Location] = field(default_factory=set)
    action_behavior_refs: Set[Location] = field(default_factory=set)

    def __len__(self) -> int:
        return (
            len(self.demo_refs)
            + len(self.ai_child_refs)
            + len(self.ai_behavior_refs)
            + len(self.action_behavior_refs)
        )

    def is_empty(self) -> bool:
        return len(self) == 0

    def locations(self) -> Iterator[Tuple[str, Optional[int], int]]:
        """Flatten to ``(object name, holder index or None, key)`` in a stable order."""

        for key in sorted(self.demo_refs):
            yield "DemoAIActionIdx", None, key
        for index, key in sorted(self.ai_child_refs):
            yield CHILD_IDX, index, key
        for index, key in sorted(self.ai_behavior_refs | self.action_behavior_refs):
            yield BEHAVIOR_IDX, index, key


def _matching_keys(obj: ParameterObject, value: int) -> Iterator[int]:
    for key, param in obj.items():
        if param.as_int() == value:
            yield key


def _requires_child_idx(record: ParameterList, catalog: Optional[ClassCatalog]) -> bool:
    if catalog is None:
        return True
    defs = record.get_object(DEF)
    class_name = defs.get(CLASS_NAME) if defs is not None else None
    if class_name is None or class_name.as_str() is None:
        return True
    return catalog.declares_children(Segment.AI, class_name.as_str())


def check_child_objects(store: EntryStore, catalog: Optional[ClassCatalog] = None) -> None:
    """Raise if an AI record lacks the ChildIdx object its class requires."""

    for index, ai in enumerate(store.ais()):
        if ai.get_object(CHILD_IDX) is None and _requires_child_idx(ai, catalog):
            raise MissingRequiredObjectError(
                object_name=CHILD_IDX,
                index=index,
                detail="Its class declares children, so the object is required.",
            )


def find_references(
    store: EntryStore,
    target: int,
    *,
    catalog: Optional[ClassCatalog] = None,
    space: Optional[Layout] = None,
) -> References:
    """Find every location holding ``target``.

    Args:
        store: Program to scan
        target: Global index being looked for
        catalog: Used to decide whether an AI may lack ChildIdx; without it
            every AI must carry one
        space: Layout in which ``target`` is expressed. Defaults to the
            current layout; mutations pass the layout from before the
            structural change. Holder indices always use the current layout.

    Raises:
        MissingRequiredObjectError: DemoAIActionIdx missing, or an AI lacks a
            required ChildIdx
    """

    space = space or store.layout()
    current = store.layout()
    refs = References()

    demos = store.demo_index()
    refs.demo_refs.update(_matching_keys(demos, target))

    # BehaviorIdx values are only meaningful for Behavior targets; anything
    # else would compare against -1 or other segments' local numbers
    behavior_local = target - space.behaviors if space.is_behavior(target) else None

    check_child_objects(store, catalog)
    for index, ai in enumerate(store.ais()):
        children = ai.get_object(CHILD_IDX)
        if children is not None:
            refs.ai_child_refs.update((index, key) for key in _matching_keys(children, target))
        behaviors = ai.get_object(BEHAVIOR_IDX)
        if behaviors is not None and behavior_local is not None:
            refs.ai_behavior_refs.update(
                (index, key) for key in _matching_keys(behaviors, behavior_local)
            )

    if behavior_local is not None:
        for local, action in enumerate(store.actions()):
            behaviors = action.get_object(BEHAVIOR_IDX)
            if behaviors is None:
                continue
            index = current.actions + local
            refs.action_behavior_refs.update(
                (index, key) for key in _matching_keys(behaviors, behavior_local)
            )

    return refs
