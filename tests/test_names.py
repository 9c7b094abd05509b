"""Tests for the hash -> name table."""

import json

from plasticity.names import NameTable, numbered_name
from plasticity.schemas import Parameter, ParameterList, ParameterObject, Segment, hash_name


def test_exact_names_win():
    table = NameTable(["Demo_Idling"], numbered_limit=5)

    assert table.try_name(hash_name("Demo_Idling")) == "Demo_Idling"
    assert table.get_name(hash_name("Demo_Idling")) == "Demo_Idling"
    assert hash_name("Demo_Idling") in table
    assert hash_name("Demo_Unknown") not in table


def test_builtin_names_are_always_known():
    table = NameTable(numbered_limit=0)

    for name in ("Def", "ChildIdx", "BehaviorIdx", "SInst", "DemoAIActionIdx", "ClassName", "Query"):
        assert table.try_name(hash_name(name)) == name


def test_numbered_names_up_to_limit():
    table = NameTable(numbered_limit=20)

    assert numbered_name(Segment.ACTION, 3) == "Action_3"
    assert table.try_name(hash_name("AI_12")) == "AI_12"
    assert table.try_name(hash_name("Behavior_20")) == "Behavior_20"
    assert table.numbered_name(hash_name("Query_0")) == "Query_0"
    # not an exact name, only a numbered one
    assert table.get_name(hash_name("AI_12")) is None


def test_unknown_keys_fall_back_to_decimal():
    table = NameTable(numbered_limit=20)
    key = hash_name("AI_21")

    assert table.try_name(key) == str(key)
    assert table.resolve(key) is None


def test_add_names_from_walks_nested_strings():
    record = ParameterList()
    defs = ParameterObject()
    defs.set("Name", Parameter.of_string_ref("Zebra"))
    defs.set("ClassName", Parameter.of_string32("Unicorn"))
    defs.set("Count", Parameter.of_int(3))
    record.set_object("Def", defs)
    root = ParameterList()
    root.set_list("AI_0", record)

    table = NameTable(numbered_limit=0)
    assert table.add_names_from(root) == 2
    assert table.try_name(hash_name("Zebra")) == "Zebra"
    assert table.add_names_from(root) == 0


def test_from_file_accepts_list_or_mapping(tmp_path):
    as_list = tmp_path / "list.json"
    as_list.write_text(json.dumps(["Idle", "Battle"]), "utf-8")
    as_dict = tmp_path / "dict.json"
    as_dict.write_text(json.dumps({"123": "Idle", "456": "Battle"}), "utf-8")

    for path in (as_list, as_dict):
        table = NameTable.from_file(path, numbered_limit=0)
        assert table.try_name(hash_name("Idle")) == "Idle"
        assert table.try_name(hash_name("Battle")) == "Battle"
