"""Tests for configuration and colored logging helpers."""

import pytest

from plasticity.config import Config
from plasticity.logging_utils import (
    Color,
    LOG_TAG_ENGINE,
    colored,
    debug_enabled,
    log_engine,
    log_error,
)
from plasticity.schemas import Segment

from builders import make_sample_program


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.setenv("PLASTICITY_NO_COLOR", "1")
    assert colored("hello", Color.RED) == "hello"

    monkeypatch.delenv("PLASTICITY_NO_COLOR")
    assert colored("hello", Color.RED) == f"{Color.RED.value}hello{Color.RESET.value}"
    assert colored("hi", Color.BLUE, bold=True).startswith(Color.BOLD.value + Color.BLUE.value)


def test_log_helpers_prefix_tags(monkeypatch, capsys):
    monkeypatch.setenv("PLASTICITY_NO_COLOR", "1")

    log_engine("step")
    log_error("broken")

    assert capsys.readouterr().out.splitlines() == [f"{LOG_TAG_ENGINE} step", "[!] broken"]


@pytest.mark.parametrize("value, expected", [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("", False)])
def test_debug_enabled(monkeypatch, value, expected):
    monkeypatch.setenv("DEBUG_REFERENCES", value)

    assert debug_enabled("DEBUG_REFERENCES") is expected


def test_reference_debug_output(monkeypatch, capsys):
    monkeypatch.setenv("PLASTICITY_NO_COLOR", "1")
    monkeypatch.setenv("DEBUG_REFERENCES", "1")
    program = make_sample_program()

    program.add_entry(Segment.AI, "Leaf")

    output = capsys.readouterr().out
    assert "[•] [Reindex] 3 -> 4: 2 reference(s) rewritten" in output
    assert "[•] [Insert] AI 'Leaf' at 3" in output


def test_reference_debug_output_is_off_by_default(monkeypatch, capsys):
    monkeypatch.delenv("DEBUG_REFERENCES", raising=False)

    make_sample_program().delete_entry(0)

    assert capsys.readouterr().out == ""


def test_config_validate(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "DATA_DIR", tmp_path)
    Config.validate()

    monkeypatch.setattr(Config, "NUMBERED_NAME_LIMIT", -1)
    with pytest.raises(ValueError, match="PLASTICITY_NUMBERED_NAME_LIMIT"):
        Config.validate()

    monkeypatch.setattr(Config, "NUMBERED_NAME_LIMIT", 10)
    monkeypatch.setattr(Config, "DATA_DIR", tmp_path / "missing")
    with pytest.raises(ValueError, match="PLASTICITY_DATA_DIR"):
        Config.validate()


def test_config_display(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "DATA_DIR", tmp_path)

    text = Config.display()
    assert text.splitlines()[0] == "Plasticity Configuration:"
    assert str(tmp_path) in text
