"""
Pydantic schemas for the AI program parameter container.

An AI program is a tree of parameter lists and parameter objects. Every list,
object and parameter is stored under a 32-bit key that is the CRC32 hash of a
human-readable name; the names themselves are not stored.

Layout of an AI program:
```
ParameterIO
  lists:
    AI        -> {AI_0: ParameterList, AI_1: ..., ...}
    Action    -> {Action_0: ..., ...}
    Behavior  -> {Behavior_0: ..., ...}
    Query     -> {Query_0: ..., ...}
  objects:
    DemoAIActionIdx -> {Demo_Name: int, ...}
```

Each record (a ParameterList inside a segment) carries objects such as
``Def``, ``ChildIdx``, ``BehaviorIdx`` and ``SInst``.

Design notes:
- Dicts preserve insertion order, and order is significant: it defines the
  segment-local index of every record
- Models are mutable in place; the engine edits them directly
- Only integer ranges and vector arity are validated
"""

from __future__ import annotations

import zlib
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator


def hash_name(name: str) -> int:
    """Return the CRC32 (IEEE) key for ``name``."""

    return zlib.crc32(name.encode("utf-8")) & 0xFFFFFFFF


def key_of(name: Union[str, int]) -> int:
    """Accept either a name or an already-hashed key."""

    if isinstance(name, int):
        return name
    return hash_name(name)


# ============================================================================
# Segments
# ============================================================================


class Segment(str, Enum):
    """The four ordered record collections of an AI program.

    Declaration order is the concatenation order of the global index space.
    """

    AI = "AI"
    ACTION = "Action"
    BEHAVIOR = "Behavior"
    QUERY = "Query"

    @property
    def key(self) -> int:
        return hash_name(self.value)

    @classmethod
    def parse(cls, text: str) -> "Segment":
        """Case-insensitive lookup that also accepts the British spelling."""

        lowered = text.strip().lower()
        if lowered == "behaviour":
            lowered = "behavior"
        for segment in cls:
            if segment.value.lower() == lowered:
                return segment
        raise ValueError(f"Unknown segment '{text}' (expected one of AI, Action, Behavior, Query)")


# Well-known object names
DEF = "Def"
CHILD_IDX = "ChildIdx"
BEHAVIOR_IDX = "BehaviorIdx"
SINST = "SInst"
DEMO_AI_ACTION_IDX = "DemoAIActionIdx"

NAME = "Name"
CLASS_NAME = "ClassName"
GROUP_NAME = "GroupName"


# ============================================================================
# Parameters
# ============================================================================

ParameterValue = Union[bool, int, float, str, List[float]]

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1


class ParameterType(str, Enum):
    """Value types a parameter can hold."""

    BOOL = "bool"
    INT = "int"
    U32 = "u32"
    F32 = "f32"
    STRING32 = "string32"
    STRING64 = "string64"
    STRING256 = "string256"
    STRING_REF = "string_ref"
    VEC2 = "vec2"
    VEC3 = "vec3"
    VEC4 = "vec4"
    QUAT = "quat"
    COLOR = "color"

    @property
    def is_string(self) -> bool:
        return self in _STRING_TYPES

    @property
    def arity(self) -> Optional[int]:
        """Number of float components for vector-like types, else None."""

        return _VECTOR_ARITY.get(self)


_STRING_TYPES = {
    ParameterType.STRING32,
    ParameterType.STRING64,
    ParameterType.STRING256,
    ParameterType.STRING_REF,
}

_VECTOR_ARITY = {
    ParameterType.VEC2: 2,
    ParameterType.VEC3: 3,
    ParameterType.VEC4: 4,
    ParameterType.QUAT: 4,
    ParameterType.COLOR: 4,
}


class Parameter(BaseModel):
    """A single typed value."""

    type: ParameterType = Field(..., description="Value type tag")
    value: ParameterValue = Field(..., description="Payload; vectors are float lists")

    @model_validator(mode="after")
    def check_value(self) -> "Parameter":
        kind = self.type
        if kind is ParameterType.BOOL:
            if not isinstance(self.value, bool):
                raise ValueError(f"bool parameter expects True/False, got {self.value!r}")
        elif kind in (ParameterType.INT, ParameterType.U32):
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise ValueError(f"{kind.value} parameter expects an integer, got {self.value!r}")
            low, high = (INT32_MIN, INT32_MAX) if kind is ParameterType.INT else (0, UINT32_MAX)
            if not low <= self.value <= high:
                raise ValueError(f"{kind.value} value {self.value} out of range [{low}, {high}]")
        elif kind is ParameterType.F32:
            if isinstance(self.value, (bool, str, list)):
                raise ValueError(f"f32 parameter expects a number, got {self.value!r}")
            self.value = float(self.value)
        elif kind.is_string:
            if not isinstance(self.value, str):
                raise ValueError(f"{kind.value} parameter expects text, got {self.value!r}")
        else:
            arity = kind.arity
            if not isinstance(self.value, list) or len(self.value) != arity:
                raise ValueError(f"{kind.value} parameter expects {arity} components, got {self.value!r}")
        return self

    @classmethod
    def of_int(cls, value: int) -> "Parameter":
        return cls(type=ParameterType.INT, value=value)

    @classmethod
    def of_string_ref(cls, value: str) -> "Parameter":
        return cls(type=ParameterType.STRING_REF, value=value)

    @classmethod
    def of_string32(cls, value: str) -> "Parameter":
        return cls(type=ParameterType.STRING32, value=value)

    @classmethod
    def default(cls, kind: ParameterType) -> "Parameter":
        """Zero value for ``kind`` (identity rotation for quaternions)."""

        if kind is ParameterType.BOOL:
            return cls(type=kind, value=False)
        if kind in (ParameterType.INT, ParameterType.U32):
            return cls(type=kind, value=0)
        if kind is ParameterType.F32:
            return cls(type=kind, value=0.0)
        if kind.is_string:
            return cls(type=kind, value="")
        if kind is ParameterType.QUAT:
            return cls(type=kind, value=[0.0, 0.0, 0.0, 1.0])
        return cls(type=kind, value=[0.0] * (kind.arity or 0))

    def as_int(self) -> Optional[int]:
        """Return the value of an ``int`` parameter, None for any other type."""

        if self.type is ParameterType.INT:
            return self.value  # type: ignore[return-value]
        return None

    def as_str(self) -> Optional[str]:
        if self.type.is_string:
            return self.value  # type: ignore[return-value]
        return None


# ============================================================================
# Containers
# ============================================================================


class ParameterObject(BaseModel):
    """Ordered mapping of key -> Parameter."""

    params: Dict[int, Parameter] = Field(default_factory=dict)

    def get(self, name: Union[str, int]) -> Optional[Parameter]:
        return self.params.get(key_of(name))

    def set(self, name: Union[str, int], param: Parameter) -> None:
        # Replacing an existing key keeps its position
        self.params[key_of(name)] = param

    def items(self) -> Iterator[Tuple[int, Parameter]]:
        return iter(self.params.items())

    def __len__(self) -> int:
        return len(self.params)


class ParameterList(BaseModel):
    """Ordered mapping of named objects plus nested lists."""

    objects: Dict[int, ParameterObject] = Field(default_factory=dict)
    lists: Dict[int, "ParameterList"] = Field(default_factory=dict)

    def get_object(self, name: Union[str, int]) -> Optional[ParameterObject]:
        return self.objects.get(key_of(name))

    def set_object(self, name: Union[str, int], obj: ParameterObject) -> None:
        self.objects[key_of(name)] = obj

    def get_list(self, name: Union[str, int]) -> Optional["ParameterList"]:
        return self.lists.get(key_of(name))

    def set_list(self, name: Union[str, int], plist: "ParameterList") -> None:
        self.lists[key_of(name)] = plist


class ParameterIO(ParameterList):
    """Root of a parameter document."""

    version: int = Field(0, description="Document version number")
    type: str = Field("xml", description="Document type tag")
