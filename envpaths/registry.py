"""Process-wide cache of path-list variables.

A VariableRegistry hands out one PathList per variable name, owns the
directory-verification policy, and keeps track of which list is the
write-through owner of each variable. The module-level ``env`` registry
works on ``os.environ``::

    from envpaths import env

    env.verify_directories = False
    path = env["PATH"]
    path.append("/opt/tool/bin")          # os.environ["PATH"] updated
    env["PYTHONPATH"] = ["/src", "/lib"]
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Collection, Iterator
from typing import Any

from .base import EnvironmentStore, SyncState
from .config import EnvPathsConfig
from .environ import OsEnvironment
from .pathlist import PathList
from .platform import DEFAULT_REWRITE_VARIABLES, PlatformInfo, detect_platform, join_entries

logger = logging.getLogger(__name__)


class VariableRegistry:
    """Cache mapping variable names to their PathList.

    Attributes:
        store: Environment table lists read from and write to.
        platform: Host description (separator, emulation layer).
        rewrite_variables: Variables whose drive-letter entries are
            rewritten under an emulation layer.
        lock: Re-entrant lock guarding the cache and every list's
            read-modify-write cycle.
    """

    def __init__(
        self,
        store: EnvironmentStore | None = None,
        *,
        verify_directories: bool = True,
        platform: PlatformInfo | None = None,
        rewrite_variables: Collection[str] = DEFAULT_REWRITE_VARIABLES,
    ) -> None:
        self.store: EnvironmentStore = store if store is not None else OsEnvironment()
        self.platform = platform if platform is not None else detect_platform()
        self.rewrite_variables = frozenset(rewrite_variables)
        self.lock = threading.RLock()
        self._verify = bool(verify_directories)
        self._cache: dict[str, PathList] = {}
        self._owners: dict[str, PathList] = {}
        self._pending: dict[str, PathList] = {}

    @classmethod
    def from_config(
        cls, config: EnvPathsConfig, store: EnvironmentStore | None = None
    ) -> VariableRegistry:
        """Build a registry from an EnvPathsConfig."""
        return cls(
            store,
            verify_directories=config.verify_directories,
            platform=detect_platform(config.platform),
            rewrite_variables=config.rewrite_variables,
        )

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    def get(self, name: str) -> PathList:
        """Return the PathList for *name*, creating it from the store if needed.

        An unset variable yields an empty list and is not written.
        """
        with self.lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached
            raw = self._read(name)
            if raw is None:
                path_list = PathList(name, registry=self, write=False)
                self._claim(path_list)
            else:
                path_list = PathList(name, raw, registry=self)
            self._cache[name] = path_list
            return path_list

    def set(self, name: str, value: Any) -> PathList:
        """Assign *value* to *name* and cache the resulting PathList.

        Args:
            name: Variable name.
            value: A separator-joined string, an iterable of paths, or None.

        Raises:
            InvalidValueKind: If *value* has an unsupported type.
        """
        with self.lock:
            path_list = PathList(name, value, registry=self)
            self._cache[name] = path_list
            return path_list

    def clear(self) -> None:
        """Forget every cached list. The environment itself is untouched.

        Lists handed out before become detached copies. Deferred writes
        are flushed first so they are not lost.
        """
        with self.lock:
            self.flush()
            for path_list in [*self._cache.values(), *self._owners.values()]:
                path_list._state = SyncState.DETACHED
            self._owners.clear()
            self._cache.clear()

    def __getitem__(self, name: str) -> PathList:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def __iter__(self) -> Iterator[str]:
        with self.lock:
            return iter(list(self._cache))

    def __len__(self) -> int:
        return len(self._cache)

    # -------------------------------------------------------------------------
    # Verification policy
    # -------------------------------------------------------------------------

    @property
    def verify_directories(self) -> bool:
        """Whether entries must be existing directories (default: True).

        Setting it to True immediately filters every cached list.
        Setting it to False only affects later mutations.
        """
        return self._verify

    @verify_directories.setter
    def verify_directories(self, value: bool) -> None:
        with self.lock:
            self._verify = bool(value)
            if self._verify:
                for path_list in list(self._cache.values()):
                    path_list.check_directories()

    def get_verify_directories(self) -> bool:
        return self.verify_directories

    def set_verify_directories(self, value: bool) -> None:
        self.verify_directories = value

    # -------------------------------------------------------------------------
    # Ownership and deferred writes (used by PathList)
    # -------------------------------------------------------------------------

    def _claim(self, path_list: PathList) -> None:
        """Make *path_list* the owner of its variable, staling the previous one."""
        name = path_list.name
        if name is None:
            return
        with self.lock:
            previous = self._owners.get(name)
            if previous is not None and previous is not path_list:
                previous._state = SyncState.STALE
                logger.debug("Ownership of %s moved to a new list", name)
            self._owners[name] = path_list
            path_list._state = SyncState.OWNER
            if name in self._pending:
                self._pending[name] = path_list

    def _release(self, path_list: PathList) -> None:
        name = path_list.name
        with self.lock:
            if name is not None and self._owners.get(name) is path_list:
                del self._owners[name]

    def _defer(self, path_list: PathList) -> None:
        with self.lock:
            self._pending[path_list.name] = path_list  # type: ignore[index]

    def _read(self, name: str) -> str | None:
        """Current value of *name*, including writes not yet flushed."""
        with self.lock:
            pending = self._pending.get(name)
            if pending is not None:
                return join_entries(pending._entries, self.platform.separator)
            return self.store.get(name)

    def flush(self) -> None:
        """Write every deferred list to the store.

        A queued list is written even if it went stale afterwards: a new
        owner for the same name replaces the queue entry when it claims.
        """
        with self.lock:
            pending, self._pending = self._pending, {}
            for name, path_list in pending.items():
                value = join_entries(path_list._entries, self.platform.separator)
                self.store.set(name, value)
                logger.debug("Flushed %s=%r", name, value)

    def __repr__(self) -> str:
        return (
            f"VariableRegistry(store={self.store!r}, "
            f"verify_directories={self._verify}, cached={sorted(self._cache)})"
        )


# Default registry bound to the process environment
env = VariableRegistry()

