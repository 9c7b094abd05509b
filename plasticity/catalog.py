"""
Read-only lookup services consumed by the engine.

Three tables back the editor:
- ClassCatalog: class definitions per segment (child slots, behavior slots,
  static instance parameters), used to seed new records and to list valid
  class choices
- Localization: Japanese -> English display names, identity on miss
- NameTable: hash -> name reverse lookup (see ``names.py``)

All three are constructed explicitly and handed to ``AIProgram`` through a
``ProgramServices`` bundle, so tests can inject small fixture tables.

aidef.json structure:
```json
{
  "AI": {
    "SelectByOnOff": {
      "childs": ["On", "Off"],
      "behaviors": [],
      "static_inst_params": [{"name": "Flag", "type": "string_ref"}]
    }
  },
  "Action": {...},
  "Behavior": {...},
  "Query": {...}
}
```
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel, Field

from .config import Config
from .errors import UnknownClassError
from .names import NameTable
from .schemas import (
    BEHAVIOR_IDX,
    CHILD_IDX,
    CLASS_NAME,
    DEF,
    GROUP_NAME,
    NAME,
    SINST,
    Parameter,
    ParameterList,
    ParameterObject,
    ParameterType,
    ParameterValue,
    Segment,
)


class InstParamDef(BaseModel):
    """Declaration of one static instance parameter."""

    name: str
    type: ParameterType
    default: Optional[ParameterValue] = Field(
        None, description="Initial value; None means the type's zero value",
    )

    def make(self) -> Parameter:
        if self.default is None:
            return Parameter.default(self.type)
        return Parameter(type=self.type, value=self.default)


class ClassDefinition(BaseModel):
    """Template for records of one class."""

    childs: List[str] = Field(default_factory=list, description="ChildIdx slot names")
    behaviors: List[str] = Field(default_factory=list, description="BehaviorIdx slot names")
    static_inst_params: List[InstParamDef] = Field(default_factory=list)


class ClassCatalog:
    """Class definitions keyed by segment, then class name."""

    def __init__(self, definitions: Optional[Dict[Segment, Dict[str, ClassDefinition]]] = None):
        self._definitions: Dict[Segment, Dict[str, ClassDefinition]] = {
            segment: dict((definitions or {}).get(segment, {})) for segment in Segment
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Dict[str, dict]]) -> "ClassCatalog":
        definitions: Dict[Segment, Dict[str, ClassDefinition]] = {}
        for segment_name, classes in payload.items():
            segment = Segment.parse(segment_name)
            definitions[segment] = {
                class_name: ClassDefinition.model_validate(data or {})
                for class_name, data in classes.items()
            }
        return cls(definitions)

    @classmethod
    def from_file(cls, path: Path | str) -> "ClassCatalog":
        return cls.from_dict(json.loads(Path(path).read_text("utf-8")))

    def classes(self, segment: Segment) -> List[str]:
        """Sorted class names valid for ``segment``."""

        return sorted(self._definitions[segment])

    def get(self, segment: Segment, class_name: str) -> ClassDefinition:
        try:
            return self._definitions[segment][class_name]
        except KeyError:
            raise UnknownClassError(segment=segment.value, class_name=class_name) from None

    def has_class(self, segment: Segment, class_name: str) -> bool:
        return class_name in self._definitions[segment]

    def declares_children(self, segment: Segment, class_name: str) -> bool:
        """Whether records of this class must carry a ChildIdx object.

        Unknown classes are assumed to need one.
        """

        definition = self._definitions[segment].get(class_name)
        if definition is None:
            return True
        return bool(definition.childs)

    def blank_entry(self, segment: Segment, class_name: str) -> ParameterList:
        """Build a fresh record for ``class_name`` with every slot unset."""

        definition = self.get(segment, class_name)
        entry = ParameterList()

        defs = ParameterObject()
        if segment in (Segment.AI, Segment.ACTION):
            defs.set(NAME, Parameter.of_string_ref(""))
            defs.set(CLASS_NAME, Parameter.of_string32(class_name))
            defs.set(GROUP_NAME, Parameter.of_string_ref(""))
        else:
            defs.set(CLASS_NAME, Parameter.of_string32(class_name))
        entry.set_object(DEF, defs)

        # AI records always carry ChildIdx, even when the class has no slots
        if segment is Segment.AI or definition.childs:
            children = ParameterObject()
            for child in definition.childs:
                children.set(child, Parameter.of_int(-1))
            entry.set_object(CHILD_IDX, children)

        if definition.behaviors:
            behaviors = ParameterObject()
            for slot in definition.behaviors:
                behaviors.set(slot, Parameter.of_int(-1))
            entry.set_object(BEHAVIOR_IDX, behaviors)

        if definition.static_inst_params:
            sinst = ParameterObject()
            for param_def in definition.static_inst_params:
                sinst.set(param_def.name, param_def.make())
            entry.set_object(SINST, sinst)

        return entry

    def known_names(self) -> Iterator[str]:
        """Every name the catalog can contribute to a NameTable."""

        for classes in self._definitions.values():
            for class_name, definition in classes.items():
                yield class_name
                yield from definition.childs
                yield from definition.behaviors
                for param_def in definition.static_inst_params:
                    yield param_def.name


class Localization:
    """Display-name translation map."""

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        self._mapping: Dict[str, str] = dict(mapping or {})

    @classmethod
    def from_file(cls, path: Path | str) -> "Localization":
        return cls(json.loads(Path(path).read_text("utf-8")))

    def translate(self, text: str) -> str:
        return self._mapping.get(text, text)

    def __len__(self) -> int:
        return len(self._mapping)


CATALOG_FILE = "aidef.json"
LOCALIZATION_FILE = "jpen.json"
HASHES_FILE = "hashes.json"


@dataclass
class ProgramServices:
    """The lookup tables an ``AIProgram`` consults."""

    names: NameTable = field(default_factory=NameTable)
    localization: Localization = field(default_factory=Localization)
    catalog: ClassCatalog = field(default_factory=ClassCatalog)

    @classmethod
    def from_directory(cls, data_dir: Optional[Path | str] = None) -> "ProgramServices":
        """Load all three tables from ``data_dir`` (default ``Config.DATA_DIR``).

        Raises:
            FileNotFoundError: If one of the table files is missing
        """

        directory = Path(data_dir) if data_dir is not None else Config.DATA_DIR
        paths = {
            filename: directory / filename
            for filename in (CATALOG_FILE, LOCALIZATION_FILE, HASHES_FILE)
        }
        missing = [str(path) for path in paths.values() if not path.exists()]
        if missing:
            raise FileNotFoundError(f"Lookup tables not found: {', '.join(missing)}")

        catalog = ClassCatalog.from_file(paths[CATALOG_FILE])
        names = NameTable.from_file(paths[HASHES_FILE])
        names.add_names(catalog.known_names())
        return cls(
            names=names,
            localization=Localization.from_file(paths[LOCALIZATION_FILE]),
            catalog=catalog,
        )
