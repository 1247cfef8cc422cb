"""Path-list variables as mutable sequences.

A PathList mirrors one environment variable (``PATH``, ``LD_LIBRARY_PATH``,
...) as an ordered, duplicate-free list of normalized entries. Every
mutation writes the joined value back to the registry's store, so code
that reads the raw variable (or a spawned subprocess) sees the change.
"""

from __future__ import annotations

import functools
import logging
import os
import re
from collections.abc import Callable, Iterable, Iterator, MutableSequence
from typing import TYPE_CHECKING, Any

from .base import InvalidValueKind, SyncState
from .context import writes_deferred
from .platform import join_entries, split_value, unify_path

if TYPE_CHECKING:
    from .registry import VariableRegistry

logger = logging.getLogger(__name__)


def _default_registry() -> VariableRegistry:
    from .registry import env

    return env


def _is_single(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike))


def _mutator(method: Callable[..., Any]) -> Callable[..., Any]:
    """Run *method* under the registry lock on fresh content, then write back."""

    @functools.wraps(method)
    def wrapper(self: PathList, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            self._ensure_fresh()
            result = method(self, *args, **kwargs)
            self._write_back()
            return result

    return wrapper


class PathList(MutableSequence):
    """An environment variable holding a list of paths.

    Entries are normalized with ``unify_path``, kept unique (first
    occurrence wins) and, while the registry's ``verify_directories``
    policy is on, limited to existing directories.

    Usually obtained from a registry rather than built directly::

        path = env["PATH"]
        path.append("/opt/tool/bin")       # os.environ["PATH"] updated
        path.delete_if(lambda p: "maya" in p)
        path.prepend(["/usr/local/bin", "/opt/bin"])

    Set operations (``|``, ``&``, ``-``, ``+``) return a detached copy
    that is not written until it is assigned back or mutated; the
    original stops being the owner of the variable and re-reads the
    environment before its next use.
    """

    def __init__(
        self,
        name: str | None = None,
        value: Any = None,
        *,
        registry: VariableRegistry | None = None,
        write: bool = True,
    ) -> None:
        """Create a list bound to the variable *name*.

        Args:
            name: Environment variable name, or None for an unbound list.
            value: Initial content: a separator-joined string, an iterable
                of paths, or None for an empty list.
            registry: Registry providing the store, platform and policy.
                Defaults to the module-level ``env`` registry.
            write: If False the list starts detached and *value* is not
                written to the store.

        Raises:
            InvalidValueKind: If *value* has an unsupported type.
        """
        self._name = name
        self._registry = registry if registry is not None else _default_registry()
        self._entries: list[str] = []
        self._state = SyncState.DETACHED
        if write:
            self.replace(value)
        else:
            self._load(value)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def registry(self) -> VariableRegistry:
        return self._registry

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_synced(self) -> bool:
        """True if this list is the write-through owner of its variable."""
        return self._state is SyncState.OWNER

    @property
    def separator(self) -> str:
        return self._registry.platform.separator

    @property
    def _lock(self) -> Any:
        return self._registry.lock

    # -------------------------------------------------------------------------
    # Value pipeline
    # -------------------------------------------------------------------------

    def _unify(self, path: str | os.PathLike) -> str:
        return unify_path(
            os.fspath(path),
            self._name,
            self._registry.platform,
            self._registry.rewrite_variables,
        )

    def _verify(self, path: str) -> bool:
        if not self._registry.verify_directories:
            return True
        if os.path.isdir(path):
            return True
        logger.debug("Skipping %s entry %r: not a directory", self._name, path)
        return False

    def _coerce_value(self, value: Any) -> list[str]:
        """Resolve an assigned value to a list of raw entries."""
        if value is None:
            return []
        if isinstance(value, str):
            return split_value(value, self.separator)
        if isinstance(value, (bytes, bytearray)) or not isinstance(value, Iterable):
            raise InvalidValueKind(self._name, value)
        items = []
        for item in value:
            if not _is_single(item):
                raise InvalidValueKind(self._name, value)
            path = os.fspath(item)
            if not isinstance(path, str):
                raise InvalidValueKind(self._name, value)
            items.append(path)
        return items

    def _single(self, value: Any) -> str:
        """Normalize one path, rejecting anything that is not a text path."""
        if _is_single(value):
            path = os.fspath(value)
            if isinstance(path, str):
                return self._unify(path)
        raise InvalidValueKind(self._name, value)

    def _coerce_paths(self, value: Any) -> list[str]:
        """Resolve a single path or an iterable of paths to normalized entries."""
        if _is_single(value):
            return [self._single(value)]
        return [self._unify(p) for p in self._coerce_value(value)]

    def _pipeline(self, items: Iterable[str]) -> list[str]:
        unique = dict.fromkeys(self._unify(p) for p in items)
        return [p for p in unique if self._verify(p)]

    def _load(self, value: Any) -> None:
        self._entries = self._pipeline(self._coerce_value(value))

    def _candidates(self, value: Any) -> list[str]:
        """New entries from *value*: not yet present, unique, and verified."""
        seen = set(self._entries)
        result = []
        for path in self._coerce_paths(value):
            if path in seen:
                continue
            seen.add(path)
            if self._verify(path):
                result.append(path)
        return result

    # -------------------------------------------------------------------------
    # Environment sync
    # -------------------------------------------------------------------------

    def _ensure_fresh(self) -> None:
        if self._state is SyncState.STALE:
            self.from_env()

    def _write_back(self) -> None:
        if self._name is None:
            return
        self._registry._claim(self)
        if writes_deferred(self._registry):
            self._registry._defer(self)
            logger.debug("Deferred write of %s", self._name)
            return
        value = join_entries(self._entries, self.separator)
        self._registry.store.set(self._name, value)
        logger.debug("Wrote %s=%r", self._name, value)

    def _mark_stale(self) -> None:
        if self._name is not None and self._state is SyncState.OWNER:
            self._state = SyncState.STALE
            self._registry._release(self)

    def to_env(self) -> None:
        """Send the value of this list to the environment store."""
        if self._name is None:
            return
        with self._lock:
            self._ensure_fresh()
            self._write_back()

    def from_env(self) -> None:
        """Replace the content of this list with the live environment value."""
        if self._name is None:
            return
        with self._lock:
            raw = self._registry._read(self._name)
            self._registry._claim(self)
            self._load(raw)
            logger.debug("Refreshed %s from environment", self._name)

    refresh = from_env

    @_mutator
    def replace(self, value: Any) -> None:
        """Replace the whole content and write it back.

        Raises:
            InvalidValueKind: If *value* has an unsupported type.
        """
        self._load(value)

    @_mutator
    def check_directories(self) -> None:
        """Drop entries that are not existing directories.

        Only this variable is filtered; the registry policy is unchanged.
        """
        self._entries = [p for p in self._entries if os.path.isdir(p)]

    # -------------------------------------------------------------------------
    # Sequence protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            self._ensure_fresh()
            return len(self._entries)

    def __getitem__(self, index: Any) -> Any:
        with self._lock:
            self._ensure_fresh()
            return self._entries[index]

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            self._ensure_fresh()
            return iter(list(self._entries))

    def __contains__(self, value: object) -> bool:
        if not _is_single(value):
            return False
        try:
            path = self._single(value)
        except InvalidValueKind:
            return False
        with self._lock:
            self._ensure_fresh()
            return path in self._entries

    @_mutator
    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            self._entries[index] = self._coerce_paths(value)
        else:
            self._entries[index] = self._single(value)
        self._entries = self._pipeline(self._entries)

    @_mutator
    def __delitem__(self, index: Any) -> None:
        del self._entries[index]

    @_mutator
    def insert(self, index: int, value: Any) -> None:
        self._entries[index:index] = self._candidates(value)

    @_mutator
    def append(self, value: Any) -> None:
        """Add a path, or every path of an iterable, at the end.

        Entries already present or, with verification on, not existing
        directories are skipped one by one.
        """
        self._entries.extend(self._candidates(value))

    push = append
    extend = append

    @_mutator
    def prepend(self, value: Any) -> None:
        """Add a path, or every path of an iterable, at the front.

        The iterable's order is kept: its first element ends up first.
        """
        self._entries[0:0] = self._candidates(value)

    unshift = prepend

    def __iadd__(self, value: Any) -> PathList:
        self.append(value)
        return self

    @_mutator
    def clear(self) -> None:
        self._entries.clear()

    @_mutator
    def delete(self, value: Any) -> None:
        """Remove every entry equal to *value* (after normalization)."""
        targets = set(self._coerce_paths(value))
        self._entries = [p for p in self._entries if p not in targets]

    @_mutator
    def delete_at(self, index: int) -> str:
        """Remove and return the entry at *index*."""
        return self._entries.pop(index)

    def pop(self, index: int = -1) -> str:
        return self.delete_at(index)

    @_mutator
    def delete_if(self, predicate: Callable[[str], bool]) -> None:
        """Remove every entry for which *predicate* returns True."""
        self._entries = [p for p in self._entries if not predicate(p)]

    @_mutator
    def remove(self, value: Any) -> None:
        """Remove the first entry equal to *value*.

        Raises:
            ValueError: If *value* is not present or is not a path.
        """
        try:
            path = self._single(value)
        except InvalidValueKind:
            raise ValueError(f"{value!r} is not in {self._name}") from None
        self._entries.remove(path)

    @_mutator
    def remove_matching(self, pattern: str | re.Pattern[str]) -> None:
        """Remove every entry matching the regular expression *pattern*."""
        regex = re.compile(pattern)
        self._entries = [p for p in self._entries if not regex.search(p)]

    @_mutator
    def reverse(self) -> None:
        self._entries.reverse()

    @_mutator
    def sort(self, *, key: Callable[[str], Any] | None = None, reverse: bool = False) -> None:
        self._entries.sort(key=key, reverse=reverse)

    # -------------------------------------------------------------------------
    # Set operations (return detached copies)
    # -------------------------------------------------------------------------

    def _derive(self, combine: Callable[[list[str], list[str]], list[str]], other: Any) -> PathList:
        with self._lock:
            self._ensure_fresh()
            operand = self._coerce_paths(other)
            entries = combine(list(self._entries), operand)
            self._mark_stale()
            return PathList(self._name, entries, registry=self._registry, write=False)

    def union(self, other: Any) -> PathList:
        """Entries of this list followed by the new entries of *other*."""
        return self._derive(lambda a, b: a + b, other)

    concat = union

    def intersect(self, other: Any) -> PathList:
        """Entries of this list also present in *other*."""

        def keep(a: list[str], b: list[str]) -> list[str]:
            wanted = set(b)
            return [p for p in a if p in wanted]

        return self._derive(keep, other)

    def difference(self, other: Any) -> PathList:
        """Entries of this list not present in *other* (a path or iterable)."""

        def drop(a: list[str], b: list[str]) -> list[str]:
            unwanted = set(b)
            return [p for p in a if p not in unwanted]

        return self._derive(drop, other)

    subtract = difference

    __or__ = union
    __and__ = intersect
    __sub__ = difference
    __add__ = concat

    def copy(self) -> PathList:
        """Return a detached copy; this list keeps its ownership."""
        with self._lock:
            self._ensure_fresh()
            return PathList(
                self._name, list(self._entries), registry=self._registry, write=False
            )

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathList):
            return list(self) == list(other)
        if isinstance(other, (list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        with self._lock:
            self._ensure_fresh()
            return join_entries(self._entries, self.separator)

    def __repr__(self) -> str:
        return f"PathList({self._name!r}, {list(self)!r})"
