"""Entry store: segment layout and global index arithmetic.

Records live in four ordered segments. The global index of a record is its
position in ``AI ++ Action ++ Behavior ++ Query``; converting between global
and segment-local indices is arithmetic on the segment offsets, which are
always recomputed from the live segment sizes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..errors import InvalidContainerError, MissingRequiredObjectError, OutOfRangeError
from ..schemas import (
    CLASS_NAME,
    DEF,
    DEMO_AI_ACTION_IDX,
    ParameterIO,
    ParameterList,
    ParameterObject,
    Segment,
)

SEGMENT_ORDER: Tuple[Segment, ...] = (
    Segment.AI,
    Segment.ACTION,
    Segment.BEHAVIOR,
    Segment.QUERY,
)


@dataclass(frozen=True)
class Layout:
    """Snapshot of segment boundaries at one moment."""

    actions: int
    behaviors: int
    queries: int
    total: int

    def start(self, segment: Segment) -> int:
        return {
            Segment.AI: 0,
            Segment.ACTION: self.actions,
            Segment.BEHAVIOR: self.behaviors,
            Segment.QUERY: self.queries,
        }[segment]

    def end(self, segment: Segment) -> int:
        return {
            Segment.AI: self.actions,
            Segment.ACTION: self.behaviors,
            Segment.BEHAVIOR: self.queries,
            Segment.QUERY: self.total,
        }[segment]

    def segment_of(self, index: int) -> Segment:
        if index < 0 or index >= self.total:
            raise OutOfRangeError(index=index, total=self.total)
        if index < self.actions:
            return Segment.AI
        if index < self.behaviors:
            return Segment.ACTION
        if index < self.queries:
            return Segment.BEHAVIOR
        return Segment.QUERY

    def is_behavior(self, index: int) -> bool:
        return self.behaviors <= index < self.queries

    def grown(self, segment: Segment, delta: int) -> "Layout":
        """Layout after ``segment`` changes size by ``delta``."""

        shift = {
            Segment.AI: (delta, delta, delta),
            Segment.ACTION: (0, delta, delta),
            Segment.BEHAVIOR: (0, 0, delta),
            Segment.QUERY: (0, 0, 0),
        }[segment]
        return Layout(
            actions=self.actions + shift[0],
            behaviors=self.behaviors + shift[1],
            queries=self.queries + shift[2],
            total=self.total + delta,
        )


def missing_sections(pio: ParameterIO) -> List[str]:
    """Names of the required lists/objects absent from ``pio``."""

    missing = [segment.value for segment in SEGMENT_ORDER if pio.get_list(segment.key) is None]
    if pio.get_object(DEMO_AI_ACTION_IDX) is None:
        missing.append(DEMO_AI_ACTION_IDX)
    return missing


class EntryStore:
    """Owns the four segments and the demo-index object of one AI program."""

    def __init__(self, pio: ParameterIO, *, source: str | None = None):
        missing = missing_sections(pio)
        if missing:
            raise InvalidContainerError(missing=missing, source=source)
        self.pio = pio

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------

    def _segment_list(self, segment: Segment) -> ParameterList:
        return self.pio.lists[segment.key]

    def segment_entries(self, segment: Segment) -> Dict[int, ParameterList]:
        """Ordered key -> record mapping of one segment (live, mutable)."""

        return self._segment_list(segment).lists

    def segment(self, segment: Segment) -> List[ParameterList]:
        return list(self.segment_entries(segment).values())

    def ais(self) -> List[ParameterList]:
        return self.segment(Segment.AI)

    def actions(self) -> List[ParameterList]:
        return self.segment(Segment.ACTION)

    def behaviors(self) -> List[ParameterList]:
        return self.segment(Segment.BEHAVIOR)

    def queries(self) -> List[ParameterList]:
        return self.segment(Segment.QUERY)

    def demo_index(self) -> ParameterObject:
        demos = self.pio.get_object(DEMO_AI_ACTION_IDX)
        if demos is None:
            raise MissingRequiredObjectError(object_name=DEMO_AI_ACTION_IDX)
        return demos

    # ------------------------------------------------------------------
    # Offsets
    # ------------------------------------------------------------------

    def layout(self) -> Layout:
        sizes = [len(self.segment_entries(segment)) for segment in SEGMENT_ORDER]
        return Layout(
            actions=sizes[0],
            behaviors=sizes[0] + sizes[1],
            queries=sizes[0] + sizes[1] + sizes[2],
            total=sum(sizes),
        )

    def segment_offsets(self) -> Tuple[int, int, int]:
        """``(actions_offset, behaviors_offset, queries_offset)``."""

        layout = self.layout()
        return layout.actions, layout.behaviors, layout.queries

    def actions_offset(self) -> int:
        return self.layout().actions

    def behaviors_offset(self) -> int:
        return self.layout().behaviors

    def queries_offset(self) -> int:
        return self.layout().queries

    def __len__(self) -> int:
        return self.layout().total

    # ------------------------------------------------------------------
    # Index conversion
    # ------------------------------------------------------------------

    def locate(self, index: int) -> Tuple[Segment, int]:
        """Global index -> (segment, local index)."""

        layout = self.layout()
        segment = layout.segment_of(index)
        return segment, index - layout.start(segment)

    def global_index(self, segment: Segment, local: int) -> int:
        layout = self.layout()
        size = layout.end(segment) - layout.start(segment)
        if local < 0 or local >= size:
            raise OutOfRangeError(index=layout.start(segment) + local, total=layout.total)
        return layout.start(segment) + local

    def segment_of(self, index: int) -> Segment:
        return self.layout().segment_of(index)

    def record_at(self, index: int) -> ParameterList:
        """Record at ``index``; the returned model is live and editable."""

        segment, local = self.locate(index)
        return self.segment(segment)[local]

    def all_records(self) -> List[ParameterList]:
        records: List[ParameterList] = []
        for segment in SEGMENT_ORDER:
            records.extend(self.segment_entries(segment).values())
        return records

    def class_name_at(self, index: int) -> str:
        record = self.record_at(index)
        defs = record.get_object(DEF)
        if defs is None:
            raise MissingRequiredObjectError(object_name=DEF, index=index)
        class_name = defs.get(CLASS_NAME)
        if class_name is None or class_name.as_str() is None:
            raise MissingRequiredObjectError(
                object_name=DEF, index=index, detail="Its Def has no ClassName.",
            )
        return class_name.as_str()
