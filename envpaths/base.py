"""Base interfaces, sync states, and errors.

Defines the common interface for environment stores (OsEnvironment,
MemoryEnvironment) and the ownership states a PathList moves through.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class EnvPathsError(Exception):
    """Base class for envpaths errors."""


class InvalidValueKind(EnvPathsError, TypeError):
    """Raised when a value is neither a string, a sequence of paths, nor None.

    Attributes:
        name: Variable the value was assigned to (None for unbound lists).
        value: The rejected value.
    """

    def __init__(self, name: str | None, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(
            f"Cannot assign {value!r} to {name}. "
            f"Expected a string, a sequence of paths or None, "
            f"got {type(value).__name__}."
        )


class SyncState(Enum):
    """Relationship between an in-memory PathList and the environment.

    OWNER: the list is the write-through master for its variable.
    STALE: another list owns the variable; refresh before any use.
    DETACHED: a derived copy holding its own content; nothing is written
        until it is explicitly written back, which makes it the owner.
    """

    OWNER = "owner"
    STALE = "stale"
    DETACHED = "detached"


@runtime_checkable
class EnvironmentStore(Protocol):
    """Minimal interface for the backing environment table.

    The registry only ever reads a variable by name and writes one back;
    anything else (listing, deleting) is outside the sync contract.
    """

    def get(self, name: str) -> str | None:
        """Return the raw value of *name*, or None when unset."""
        ...

    def set(self, name: str, value: str) -> None:
        """Store *value* under *name*."""
        ...
