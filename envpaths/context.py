"""Context variables and scoped policy helpers.

Shared context variables used by PathList and VariableRegistry to batch
write-backs, plus a helper to change the verification policy for a block.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .registry import VariableRegistry

# Registries whose PathList mutations are queued instead of written.
_deferring: contextvars.ContextVar[frozenset] = contextvars.ContextVar(
    "envpaths_deferring", default=frozenset()
)


def writes_deferred(registry: VariableRegistry | None = None) -> bool:
    """Return True while *registry* is inside a ``defer_writes()`` block.

    Without a registry, report whether any registry is deferring.
    """
    deferring = _deferring.get()
    if registry is None:
        return bool(deferring)
    return registry in deferring


def _resolve(registry: VariableRegistry | None) -> VariableRegistry:
    if registry is None:
        from .registry import env

        return env
    return registry


@contextmanager
def defer_writes(registry: VariableRegistry | None = None) -> Iterator[None]:
    """Suppress per-mutation writes to the environment store.

    Every PathList mutation normally stores the joined value right away.
    Inside this context manager the lists of *registry* are still updated
    in memory but their store writes are queued on the registry, and
    flushed once when the outermost block for that registry exits. Lists
    of other registries keep writing through. Reads of a queued variable
    through the registry see the pending value.

    Example::

        with defer_writes():
            path = env["PATH"]
            path.delete_if(lambda p: "maya" in p)
            path.prepend(["/opt/maya/bin", "/opt/maya/lib"])
        # os.environ["PATH"] is written once here
    """
    reg = _resolve(registry)
    token = _deferring.set(_deferring.get() | {reg})
    try:
        yield
    finally:
        _deferring.reset(token)
        if reg not in _deferring.get():
            reg.flush()


@contextmanager
def verification(
    enabled: bool, registry: VariableRegistry | None = None
) -> Iterator[None]:
    """Temporarily switch the directory-verification policy.

    Enabling filters every cached list immediately (same as setting
    ``verify_directories``); the previous policy is restored on exit.
    """
    reg = _resolve(registry)
    previous = reg.verify_directories
    reg.verify_directories = enabled
    try:
        yield
    finally:
        reg.verify_directories = previous
