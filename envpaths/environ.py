"""Environment store implementations."""

from __future__ import annotations

import os
from collections.abc import MutableMapping


class OsEnvironment:
    """Store backed by the live process environment.

    Writes go through ``os.environ`` so they reach ``putenv`` and are
    inherited by subprocesses spawned afterwards.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> str | None:
        return self._environ.get(name)

    def set(self, name: str, value: str) -> None:
        self._environ[name] = value

    def __repr__(self) -> str:
        return "OsEnvironment()"


class MemoryEnvironment:
    """Simple in-memory environment table.

    Stores variables in a plain dict. Useful for testing and for
    building up a child process environment without touching the
    current process::

        store = MemoryEnvironment({"PATH": "/usr/bin"})
        registry = VariableRegistry(store=store)
        registry["PATH"].append("/opt/tool/bin")
        subprocess.run(cmd, env=store.as_dict())
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.vars: dict[str, str] = dict(initial) if initial else {}

    def get(self, name: str) -> str | None:
        return self.vars.get(name)

    def set(self, name: str, value: str) -> None:
        self.vars[name] = value

    def as_dict(self) -> dict[str, str]:
        """Return an independent copy of all variables."""
        return dict(self.vars)

    def __repr__(self) -> str:
        return f"MemoryEnvironment({self.vars!r})"
