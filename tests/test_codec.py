"""Tests for the JSON document codec."""

import json

import pytest

from plasticity.codec import (
    decode_key,
    dumps,
    encode_key,
    load_document,
    loads,
    save_document,
    to_document,
)
from plasticity.errors import InvalidContainerError
from plasticity.names import NameTable
from plasticity.program import AIProgram
from plasticity.schemas import Parameter, ParameterIO, ParameterObject, hash_name

from builders import make_pio, make_record, make_services


def test_keys_render_as_names_when_known():
    names = NameTable(["Demo_Idling"], numbered_limit=0)

    assert encode_key(hash_name("Demo_Idling"), names) == "Demo_Idling"
    assert encode_key(hash_name("Demo_Idling")) == f"0x{hash_name('Demo_Idling'):08x}"
    assert encode_key(0x1234, names) == "0x00001234"


def test_decode_key():
    assert decode_key("0x00001234") == 0x1234
    assert decode_key("ChildIdx") == hash_name("ChildIdx")


def test_document_layout():
    pio = make_pio(ais=[make_record("Leaf", children={})], demos={"Demo_Idling": 0})

    document = to_document(pio, NameTable(["Demo_Idling"], numbered_limit=5))

    assert document["version"] == 0
    assert document["type"] == "xml"
    assert document["objects"]["DemoAIActionIdx"] == {"Demo_Idling": {"type": "int", "value": 0}}
    record = document["lists"]["AI"]["lists"]["AI_0"]
    assert record["objects"]["Def"]["ClassName"] == {"type": "string32", "value": "Leaf"}
    assert record["objects"]["ChildIdx"] == {}


def test_round_trip_preserves_values_and_order():
    pio = make_pio(
        ais=[make_record("Root", name="Top", children={"B": 1, "A": -1})],
        actions=[make_record("Wait")],
    )
    sinst = ParameterObject()
    sinst.set("Rate", Parameter(type="f32", value=0.25))
    sinst.set("Pos", Parameter(type="vec3", value=[1.0, 2.0, 3.0]))
    sinst.set("Loop", Parameter(type="bool", value=True))
    pio.get_list("AI").get_list("AI_0").set_object("SInst", sinst)

    for names in (None, NameTable(numbered_limit=5)):
        restored = loads(dumps(pio, names))
        assert restored == pio
        children = restored.get_list("AI").get_list("AI_0").get_object("ChildIdx")
        assert [key for key, _ in children.items()] == [hash_name("B"), hash_name("A")]


def test_dumps_uses_indent():
    text = dumps(make_pio(), NameTable(numbered_limit=0), indent=4)

    assert text.startswith("{\n    ")
    assert json.loads(text)["lists"]["AI"] == {"objects": {}, "lists": {}}


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2, 3]",
        json.dumps({"objects": {"X": {"Y": {"type": "int", "value": "seven"}}}}),
        json.dumps({"objects": {"X": {"Y": {"type": "matrix", "value": 1}}}}),
    ],
)
def test_invalid_documents(text):
    with pytest.raises(InvalidContainerError, match="Invalid AI program"):
        loads(text, source="bad.json")


def test_save_and_load_file(tmp_path):
    pio = make_pio(queries=[make_record("Check")])
    path = tmp_path / "out.json"

    save_document(pio, path)

    assert path.read_text("utf-8").endswith("}\n")
    assert load_document(path) == pio


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "missing.json")


def test_document_without_segments_is_not_a_program(tmp_path):
    path = tmp_path / "plain.json"
    save_document(ParameterIO(), path)

    with pytest.raises(InvalidContainerError) as excinfo:
        AIProgram.from_file(path, make_services())

    assert str(path) in str(excinfo.value)
    assert "AI" in excinfo.value.missing
