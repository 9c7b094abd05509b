"""Tests for the reference resolver."""

import pytest

from plasticity.errors import MissingRequiredObjectError
from plasticity.schemas import hash_name

from builders import make_program, make_record


def test_demo_and_child_references(program):
    refs = program.references(3)

    assert refs.demo_refs == {hash_name("Demo_Idling")}
    assert refs.ai_child_refs == {(0, hash_name("B"))}
    assert not refs.ai_behavior_refs
    assert not refs.action_behavior_refs
    assert len(refs) == 2


def test_behavior_references_use_local_indices(program):
    # Attack's BehaviorIdx holds 1, which is Behavior-local for global 6
    refs = program.references(6)

    assert refs.action_behavior_refs == {(4, hash_name("Lookout"))}
    assert not refs.ai_behavior_refs

    # Guard's Alert slot holds Behavior-local 0, i.e. global 5
    lookout = program.references(5)
    assert lookout.ai_behavior_refs == {(1, hash_name("Alert"))}
    assert not lookout.action_behavior_refs


def test_behavior_values_never_match_other_segments(program):
    # AI 1 shares the number 1 with Attack's behavior slot
    refs = program.references(1)

    assert refs.ai_child_refs == {(0, hash_name("A"))}
    assert not refs.action_behavior_refs


def test_ai_behavior_references():
    program = make_program(
        ais=[make_record("Root", children={"A": -1}, behaviors={"Guard": 0})],
        behaviors=[make_record("Lookout")],
    )

    assert program.references(1).ai_behavior_refs == {(0, hash_name("Guard"))}


def test_several_keys_on_one_record_are_all_found():
    program = make_program(
        ais=[
            make_record("Root", children={"A": 1, "B": 1}),
            make_record("Leaf", children={}),
        ],
        demos={"Demo_Idling": 1, "Demo_Attack": 1},
    )

    refs = program.references(1)
    assert refs.ai_child_refs == {(0, hash_name("A")), (0, hash_name("B"))}
    assert len(refs) == 4


def test_locations_are_flattened_in_order(program):
    locations = list(program.references(3).locations())

    assert locations == [
        ("DemoAIActionIdx", None, hash_name("Demo_Idling")),
        ("ChildIdx", 0, hash_name("B")),
    ]


def test_ai_without_children_of_known_leaf_class_is_allowed():
    program = make_program(ais=[make_record("Leaf")], actions=[make_record("Wait")])

    assert program.references(1).is_empty()


@pytest.mark.parametrize("class_name", ["Root", "Mystery"])
def test_ai_missing_required_child_object(class_name):
    program = make_program(ais=[make_record(class_name)], actions=[make_record("Wait")])

    with pytest.raises(MissingRequiredObjectError, match="ChildIdx"):
        program.references(1)


def test_missing_demo_object_surfaces_on_scan(program):
    program.pio.objects.clear()

    with pytest.raises(MissingRequiredObjectError, match="DemoAIActionIdx"):
        program.references(0)
