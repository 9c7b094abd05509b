"""Tests for segment layout and global index arithmetic."""

import pytest

from plasticity.errors import InvalidContainerError, OutOfRangeError
from plasticity.program import AIProgram, Layout
from plasticity.schemas import DEMO_AI_ACTION_IDX, ParameterIO, Segment, hash_name

from builders import make_pio, make_program, make_record, make_services


def test_sample_layout(program):
    layout = program.layout()

    assert layout == Layout(actions=3, behaviors=5, queries=7, total=8)
    assert program.segment_offsets() == (3, 5, 7)
    assert program.actions_offset() <= program.behaviors_offset() <= program.queries_offset() <= len(program)


def test_offsets_follow_segment_sizes():
    program = make_program(actions=[make_record("Wait")], queries=[make_record("Check")])

    assert program.segment_offsets() == (0, 1, 1)
    assert len(program) == 2
    assert program.segment_of(1) is Segment.QUERY


def test_locate_and_global_index(program):
    assert program.locate(0) == (Segment.AI, 0)
    assert program.locate(4) == (Segment.ACTION, 1)
    assert program.locate(6) == (Segment.BEHAVIOR, 1)
    assert program.locate(7) == (Segment.QUERY, 0)

    assert program.global_index(Segment.BEHAVIOR, 1) == 6
    assert program.class_name_at(7) == "Check"
    assert program.record_at(4) is program.actions()[1]
    assert program.record_at(6) is program.behaviors()[1]
    assert [program.class_name_at(5), program.class_name_at(6)] == ["Lookout", "Face"]
    assert len(program.behaviors()) == program.queries_offset() - program.behaviors_offset()


@pytest.mark.parametrize("index", [-1, 8, 100])
def test_out_of_range_indices(program, index):
    with pytest.raises(OutOfRangeError) as excinfo:
        program.record_at(index)

    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.total == 8


def test_local_index_past_segment_end(program):
    with pytest.raises(OutOfRangeError):
        program.global_index(Segment.ACTION, 2)


def test_layout_growth():
    layout = Layout(actions=3, behaviors=5, queries=7, total=8)

    assert layout.grown(Segment.AI, 1) == Layout(actions=4, behaviors=6, queries=8, total=9)
    assert layout.grown(Segment.BEHAVIOR, -1) == Layout(actions=3, behaviors=5, queries=6, total=7)
    assert layout.grown(Segment.QUERY, 1).end(Segment.QUERY) == 9
    assert layout.is_behavior(5) and layout.is_behavior(6)
    assert not layout.is_behavior(7)


def test_missing_segment_is_rejected():
    pio = make_pio(ais=[make_record("Leaf", children={})])
    del pio.lists[hash_name("Query")]

    with pytest.raises(InvalidContainerError) as excinfo:
        AIProgram(pio, make_services(), source="broken.json")

    assert excinfo.value.missing == ["Query"]
    assert "broken.json" in str(excinfo.value)


def test_missing_demo_object_is_rejected():
    pio = make_pio()
    del pio.objects[hash_name(DEMO_AI_ACTION_IDX)]

    with pytest.raises(InvalidContainerError, match=DEMO_AI_ACTION_IDX):
        AIProgram(pio, make_services())


def test_empty_container_is_rejected():
    with pytest.raises(InvalidContainerError) as excinfo:
        AIProgram(ParameterIO(), make_services())

    assert excinfo.value.missing == ["AI", "Action", "Behavior", "Query", DEMO_AI_ACTION_IDX]
