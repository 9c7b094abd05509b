"""Exceptions raised by the consistency engine.

Every error carries a human-readable message meant to be shown to the user
as-is. Mutations check their preconditions before writing anything, so a
raised error means the container is unchanged.
"""

from typing import List, Optional


class PlasticityError(Exception):
    """Base class for all Plasticity errors."""


class InvalidContainerError(PlasticityError):
    """Raised at load time when the container is not an AI program."""

    def __init__(
        self,
        *,
        missing: Optional[List[str]] = None,
        reason: Optional[str] = None,
        source: Optional[str] = None,
    ) -> None:
        self.missing = missing or []
        self.reason = reason
        self.source = source
        where = f" ({source})" if source else ""
        if self.missing:
            message = (
                f"Invalid AI program{where}: missing {', '.join(self.missing)}.\n"
                "An AI program needs the AI, Action, Behavior and Query lists "
                "and a DemoAIActionIdx object."
            )
        else:
            message = f"Invalid AI program{where}: {reason or 'unreadable document'}"
        super().__init__(message)


class OutOfRangeError(PlasticityError, IndexError):
    """Raised when a global index is outside the current record range."""

    def __init__(self, *, index: int, total: int) -> None:
        self.index = index
        self.total = total
        super().__init__(
            f"Entry index {index} is out of range; the program has {total} entries "
            f"(valid indices 0..{total - 1})."
        )


class MissingRequiredObjectError(PlasticityError):
    """Raised when a record lacks an object the operation depends on."""

    def __init__(self, *, object_name: str, index: Optional[int] = None, detail: str = "") -> None:
        self.object_name = object_name
        self.index = index
        owner = f"Entry {index}" if index is not None else "The program"
        message = f"{owner} is missing its {object_name} object."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class UnresolvableNameError(PlasticityError):
    """Raised when a Def object has neither Name nor ClassName."""

    def __init__(self, *, index: Optional[int] = None) -> None:
        self.index = index
        owner = f"Entry {index}" if index is not None else "Entry"
        super().__init__(f"{owner} has neither a Name nor a ClassName in its Def object.")


class UnknownClassError(PlasticityError, KeyError):
    """Raised when the class catalog has no definition for a class."""

    def __init__(self, *, segment: str, class_name: str) -> None:
        self.segment = segment
        self.class_name = class_name
        super().__init__(f"Unknown {segment} class '{class_name}'.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class CycleDetectedError(PlasticityError):
    """Raised when a ChildIdx walk returns to one of its own ancestors."""

    def __init__(self, *, path: List[int]) -> None:
        self.path = path
        chain = " -> ".join(str(i) for i in path)
        super().__init__(f"ChildIdx references form a cycle: {chain}.")


class EditInProgressError(PlasticityError):
    """Raised when an edit is submitted while another is still running."""

    def __init__(self) -> None:
        super().__init__("Another edit is still in progress; wait for it to finish.")
