"""
Mutation engine for AI programs.

``AIProgram`` wraps a loaded ``ParameterIO`` and keeps every embedded index
consistent while records are added, removed and renamed.

Core primitive: ``reindex(old, new)`` rewrites every location that points at
``old`` so it points at ``new`` (``-1`` clears it). Structural edits are
expressed as sequences of reindex calls:

1. add_entry: records after the insertion point move up by one, walked in
   descending order so a freshly rewritten value is never matched again
2. delete_entry: references to the removed record are cleared, then every
   later record moves down by one in ascending order

Each reindex searches in the layout from before the structural change and
writes in the layout after it. The two differ only for BehaviorIdx values,
which are stored relative to the start of the Behavior segment.

Preconditions (required objects, known class, index range) are checked
before the first write, so a raised error leaves the program unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..catalog import ProgramServices
from ..codec import load_document, save_document
from ..errors import CycleDetectedError, MissingRequiredObjectError, UnresolvableNameError
from ..logging_utils import debug_enabled, log_engine
from ..names import numbered_name
from ..schemas import (
    BEHAVIOR_IDX,
    CHILD_IDX,
    CLASS_NAME,
    DEF,
    GROUP_NAME,
    NAME,
    Parameter,
    ParameterIO,
    ParameterList,
    ParameterObject,
    Segment,
    hash_name,
)
from .references import References, check_child_objects, find_references
from .store import SEGMENT_ORDER, EntryStore, Layout
from .tree import TreeNode, build_tree, find_roots


def _string_param(obj: ParameterObject, name: str) -> Optional[str]:
    param = obj.get(name)
    return param.as_str() if param is not None else None


class AIProgram(EntryStore):
    """An AI program plus the services needed to edit and display it.

    Example:
        services = ProgramServices.from_directory()
        program = AIProgram.from_file("Enemy_Lizalfos.json", services)
        new_index = program.add_entry(Segment.AI, "SelectRandom")
        program.update_names(new_index, "Pick", "Root")
        program.save("Enemy_Lizalfos.json")
    """

    def __init__(
        self,
        pio: ParameterIO,
        services: Optional[ProgramServices] = None,
        *,
        source: Optional[str] = None,
    ):
        super().__init__(pio, source=source)
        self.services = services or ProgramServices()
        # Strings seen in the document are the best source for names the
        # bundled table does not know
        self.services.names.add_names_from(pio)

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: Path | str, services: Optional[ProgramServices] = None) -> "AIProgram":
        return cls(load_document(path), services, source=str(path))

    def save(self, path: Path | str) -> None:
        save_document(self.pio, path, names=self.services.names)

    def copy(self) -> "AIProgram":
        """Independent copy of the document sharing the same services."""

        return AIProgram(self.pio.model_copy(deep=True), self.services)

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    def display_name(self, record: ParameterList, *, index: Optional[int] = None) -> str:
        """``Name`` if present (even empty), else ``ClassName``, passed through localization."""

        defs = record.get_object(DEF)
        if defs is None:
            raise MissingRequiredObjectError(object_name=DEF, index=index)
        name = _string_param(defs, NAME)
        if name is not None:
            return self.services.localization.translate(name)
        class_name = _string_param(defs, CLASS_NAME)
        if class_name is None:
            raise UnresolvableNameError(index=index)
        return self.services.localization.translate(class_name)

    def entry_name(self, index: int) -> str:
        return self.display_name(self.record_at(index), index=index)

    def def_name(self, index: int) -> Optional[str]:
        """Raw ``Def.Name`` of a record, None when absent."""

        defs = self.record_at(index).get_object(DEF)
        if defs is None:
            raise MissingRequiredObjectError(object_name=DEF, index=index)
        return _string_param(defs, NAME)

    def describe_entries(self, segment: Optional[Segment] = None) -> Iterator[Tuple[int, Segment, str, str]]:
        """Yield ``(global index, segment, key name, display name)``."""

        layout = self.layout()
        for current in SEGMENT_ORDER:
            if segment is not None and current is not segment:
                continue
            start = layout.start(current)
            for local, (key, record) in enumerate(self.segment_entries(current).items()):
                index = start + local
                yield index, current, self.services.names.try_name(key), self.display_name(record, index=index)

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def references(self, target: int, *, space: Optional[Layout] = None) -> References:
        return find_references(self, target, catalog=self.services.catalog, space=space)

    def _check_preconditions(self) -> None:
        self.demo_index()
        check_child_objects(self, self.services.catalog)

    def _reference_object(self, index: int, object_name: str) -> ParameterObject:
        obj = self.record_at(index).get_object(object_name)
        if obj is None:  # pragma: no cover - the resolver only reports existing objects
            raise MissingRequiredObjectError(object_name=object_name, index=index)
        return obj

    def reindex(
        self,
        old: int,
        new: int,
        *,
        source: Optional[Layout] = None,
        target: Optional[Layout] = None,
    ) -> int:
        """Point every reference to ``old`` at ``new``.

        Args:
            old: Global index being replaced, expressed in ``source``
            new: Replacement global index in ``target``, or -1 to clear
            source: Layout used to search (default: current)
            target: Layout used to translate BehaviorIdx values (default: current)

        Returns:
            Number of locations rewritten
        """

        if new < -1:
            raise ValueError(f"Replacement index must be >= -1, got {new}")
        target = target or self.layout()
        refs = self.references(old, space=source)
        if refs.is_empty():
            return 0

        demos = self.demo_index()
        for key in refs.demo_refs:
            demos.set(key, Parameter.of_int(new))
        for index, key in refs.ai_child_refs:
            self._reference_object(index, CHILD_IDX).set(key, Parameter.of_int(new))

        behavior_value = new if new < 0 else new - target.behaviors
        for index, key in refs.ai_behavior_refs | refs.action_behavior_refs:
            self._reference_object(index, BEHAVIOR_IDX).set(key, Parameter.of_int(behavior_value))

        if debug_enabled("DEBUG_REFERENCES"):
            log_engine(f"[Reindex] {old} -> {new}: {len(refs)} reference(s) rewritten")
        return len(refs)

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def _store_segment(self, segment: Segment, records: List[ParameterList]) -> None:
        """Replace a segment's records, keyed ``<Segment>_<n>`` by position."""

        entries = self.segment_entries(segment)
        entries.clear()
        entries.update(
            (hash_name(numbered_name(segment, position)), record)
            for position, record in enumerate(records)
        )

    def add_entry(self, segment: Segment, class_name: str) -> int:
        """Append a new ``class_name`` record to ``segment``.

        Returns:
            Global index of the new record

        Raises:
            UnknownClassError: The catalog has no such class for ``segment``
            MissingRequiredObjectError: The program is missing an object the
                reference scan depends on
        """

        entry = self.services.catalog.blank_entry(segment, class_name)
        self._check_preconditions()

        before = self.layout()
        after = before.grown(segment, 1)
        insert_at = before.end(segment)

        for index in range(before.total - 1, insert_at - 1, -1):
            self.reindex(index, index + 1, source=before, target=after)

        self._store_segment(segment, self.segment(segment) + [entry])
        if debug_enabled("DEBUG_REFERENCES"):
            log_engine(f"[Insert] {segment.value} '{class_name}' at {insert_at}")
        return insert_at

    def delete_entry(self, index: int) -> None:
        """Remove the record at ``index``, clearing references to it.

        References to the removed record become -1; deletion is never
        refused because a record is still referenced.

        Raises:
            OutOfRangeError: ``index`` is not a valid global index
        """

        before = self.layout()
        segment = before.segment_of(index)
        self._check_preconditions()

        self.reindex(index, -1)

        entries = self.segment_entries(segment)
        local = index - before.start(segment)
        del entries[list(entries)[local]]

        after = self.layout()
        for current in range(index, after.total):
            self.reindex(current + 1, current, source=before, target=after)

        self._store_segment(segment, self.segment(segment))
        if debug_enabled("DEBUG_REFERENCES"):
            log_engine(f"[Delete] {segment.value} entry {index}")

    def update_names(self, index: int, child_name: str, parent_name: str) -> None:
        """Set a record's Name/GroupName and propagate it to its children.

        Every record reachable through ChildIdx gets the Name of its parent
        as GroupName and keeps its own Name.

        Raises:
            CycleDetectedError: ChildIdx references loop back to an ancestor
        """

        plan: List[Tuple[int, Optional[str], str]] = []
        self._plan_names(index, child_name, parent_name, [], plan)
        for target, name, group in plan:
            defs = self.record_at(target).get_object(DEF)
            if name is not None:
                defs.set(NAME, Parameter.of_string_ref(name))
            defs.set(GROUP_NAME, Parameter.of_string_ref(group))

    def _plan_names(
        self,
        index: int,
        name: Optional[str],
        group: str,
        path: List[int],
        plan: List[Tuple[int, Optional[str], str]],
    ) -> None:
        if index in path:
            raise CycleDetectedError(path=path + [index])
        record = self.record_at(index)
        if record.get_object(DEF) is None:
            raise MissingRequiredObjectError(object_name=DEF, index=index)
        plan.append((index, name, group))

        children = record.get_object(CHILD_IDX)
        if children is None:
            return
        for _, param in children.items():
            child = param.as_int()
            if child is None or child < 0:
                continue
            self._plan_names(child, self.def_name(child), name or "", path + [index], plan)

    # ------------------------------------------------------------------
    # Tree view
    # ------------------------------------------------------------------

    def roots(self) -> List[int]:
        return find_roots(self)

    def build_tree(self, index: int) -> TreeNode:
        return build_tree(self, index)

    def to_tree(self) -> List[TreeNode]:
        return [build_tree(self, root) for root in find_roots(self)]
