"""
Plasticity - consistency engine for hashed-key AI program containers.

Load an AI program, add, delete and rename its records, and every embedded
index (demo indices, child links, behavior links) follows along.

No global state. Lookup tables are injected through ``ProgramServices``.
"""

__version__ = "0.1.0"

# Main editing surface
from .program import (
    AIProgram,
    EntryStore,
    Layout,
    References,
    TreeNode,
    build_tree,
    find_references,
    find_roots,
    render_tree,
)
from .session import EditSession

# Lookup services
from .catalog import ClassCatalog, ClassDefinition, InstParamDef, Localization, ProgramServices
from .names import NameTable, numbered_name

# Container schemas
from .schemas import (
    Parameter,
    ParameterIO,
    ParameterList,
    ParameterObject,
    ParameterType,
    Segment,
    hash_name,
)

# Documents
from .codec import load_document, save_document

# Errors
from .errors import (
    CycleDetectedError,
    EditInProgressError,
    InvalidContainerError,
    MissingRequiredObjectError,
    OutOfRangeError,
    PlasticityError,
    UnknownClassError,
    UnresolvableNameError,
)

__all__ = [
    # Editing
    "AIProgram",
    "EditSession",
    "EntryStore",
    "Layout",
    "References",
    "TreeNode",
    "build_tree",
    "find_references",
    "find_roots",
    "render_tree",
    # Services
    "ClassCatalog",
    "ClassDefinition",
    "InstParamDef",
    "Localization",
    "ProgramServices",
    "NameTable",
    "numbered_name",
    # Schemas
    "Parameter",
    "ParameterIO",
    "ParameterList",
    "ParameterObject",
    "ParameterType",
    "Segment",
    "hash_name",
    # Documents
    "load_document",
    "save_document",
    # Errors
    "PlasticityError",
    "InvalidContainerError",
    "OutOfRangeError",
    "MissingRequiredObjectError",
    "UnresolvableNameError",
    "UnknownClassError",
    "CycleDetectedError",
    "EditInProgressError",
]
