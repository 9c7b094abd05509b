"""
JSON text documents for parameter containers.

Binary parameter archives are handled by external tooling; this module reads
and writes a human-readable JSON rendition of the same tree so programs can be
inspected, diffed and edited by hand.

Document layout:
```json
{
  "version": 0,
  "type": "xml",
  "objects": {
    "DemoAIActionIdx": {"Demo_Idling": {"type": "int", "value": 3}}
  },
  "lists": {
    "AI": {
      "objects": {},
      "lists": {
        "AI_0": {
          "objects": {"Def": {"ClassName": {"type": "string32", "value": "Root"}}},
          "lists": {}
        }
      }
    }
  }
}
```

Key rendering:
- Keys whose name is known (and re-hashes to the same key) are written as names
- Unknown keys are written as ``0x`` followed by eight hex digits
- Parsing hashes every key except the hex form, which is decoded directly
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .config import Config
from .errors import InvalidContainerError
from .names import NameTable
from .schemas import Parameter, ParameterIO, ParameterList, ParameterObject, hash_name

_HEX_KEY = re.compile(r"0x[0-9a-fA-F]{8}")


def encode_key(key: int, names: Optional[NameTable] = None) -> str:
    name = names.resolve(key) if names is not None else None
    if name is not None and hash_name(name) == key and not _HEX_KEY.fullmatch(name):
        return name
    return f"0x{key:08x}"


def decode_key(text: str) -> int:
    if _HEX_KEY.fullmatch(text):
        return int(text, 16)
    return hash_name(text)


def _object_to_document(obj: ParameterObject, names: Optional[NameTable]) -> Dict[str, Any]:
    return {
        encode_key(key, names): param.model_dump(mode="json")
        for key, param in obj.items()
    }


def _list_to_document(plist: ParameterList, names: Optional[NameTable]) -> Dict[str, Any]:
    return {
        "objects": {
            encode_key(key, names): _object_to_document(obj, names)
            for key, obj in plist.objects.items()
        },
        "lists": {
            encode_key(key, names): _list_to_document(child, names)
            for key, child in plist.lists.items()
        },
    }


def to_document(pio: ParameterIO, names: Optional[NameTable] = None) -> Dict[str, Any]:
    """Convert a container into JSON-compatible data."""

    return {"version": pio.version, "type": pio.type, **_list_to_document(pio, names)}


def _object_from_document(data: Dict[str, Any]) -> ParameterObject:
    return ParameterObject(
        params={decode_key(key): Parameter.model_validate(value) for key, value in data.items()}
    )


def _list_from_document(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "objects": {
            decode_key(key): _object_from_document(obj)
            for key, obj in data.get("objects", {}).items()
        },
        "lists": {
            decode_key(key): ParameterList(**_list_from_document(child))
            for key, child in data.get("lists", {}).items()
        },
    }


def from_document(data: Any, *, source: Optional[str] = None) -> ParameterIO:
    """Build a container from JSON-compatible data.

    Raises:
        InvalidContainerError: If the data does not describe a parameter tree
    """

    if not isinstance(data, dict):
        raise InvalidContainerError(reason="document root must be a JSON object", source=source)
    try:
        return ParameterIO(
            version=data.get("version", 0),
            type=data.get("type", "xml"),
            **_list_from_document(data),
        )
    except (ValidationError, AttributeError, TypeError, ValueError) as exc:
        raise InvalidContainerError(reason=str(exc), source=source) from exc


def dumps(pio: ParameterIO, names: Optional[NameTable] = None, *, indent: Optional[int] = None) -> str:
    indent = Config.JSON_INDENT if indent is None else indent
    return json.dumps(to_document(pio, names), indent=indent, ensure_ascii=False)


def loads(text: str, *, source: Optional[str] = None) -> ParameterIO:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidContainerError(reason=f"not valid JSON ({exc})", source=source) from exc
    return from_document(data, source=source)


def load_document(path: Path | str) -> ParameterIO:
    """Read a container from a JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        InvalidContainerError: If the file is not a parameter document
    """

    path = Path(path)
    return loads(path.read_text("utf-8"), source=str(path))


def save_document(pio: ParameterIO, path: Path | str, *, names: Optional[NameTable] = None) -> None:
    path = Path(path)
    path.write_text(dumps(pio, names) + "\n", "utf-8")
