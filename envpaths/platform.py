"""Platform detection and path normalization.

The separator used to join a path-list variable depends on the host
(``;`` on Windows, ``:`` everywhere else). POSIX emulation layers that
run over a drive-letter host (Cygwin, MSYS) additionally expose drives
under a mount point, e.g. ``C:/foo`` is ``/cygdrive/c/foo`` under Cygwin
and ``/c/foo`` under MSYS.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Collection
from dataclasses import dataclass

DEFAULT_REWRITE_VARIABLES: tuple[str, ...] = ("PATH",)

_DRIVE = re.compile(r"^([A-Za-z]):/?")
_NATIVE_DRIVE = re.compile(r"^([A-Z]):/")

# Mount point used by each emulation layer for host drives
_MOUNT_PREFIXES = {
    "cygwin": "/cygdrive",
    "msys": "",
}


@dataclass(frozen=True)
class PlatformInfo:
    """What the path-list code needs to know about the host.

    Attributes:
        platform_id: Identifier the info was derived from (``sys.platform`` style).
        separator: Character joining entries of a path-list variable.
        emulation: Name of the POSIX emulation layer, or None.
    """

    platform_id: str
    separator: str
    emulation: str | None = None

    @property
    def is_windows(self) -> bool:
        return self.separator == ";"

    @property
    def mount_prefix(self) -> str | None:
        """Prefix under which the emulation layer mounts host drives."""
        if self.emulation is None:
            return None
        return _MOUNT_PREFIXES[self.emulation]


def detect_platform(platform_id: str | None = None) -> PlatformInfo:
    """Build a PlatformInfo from a ``sys.platform`` style identifier.

    Args:
        platform_id: Identifier such as ``"win32"``, ``"linux"`` or
            ``"cygwin"``. Defaults to the running interpreter's ``sys.platform``.

    Raises:
        ValueError: If *platform_id* is empty or not a string.
    """
    if platform_id is None:
        platform_id = sys.platform
    if not isinstance(platform_id, str) or not platform_id:
        raise ValueError(f"Invalid platform identifier: {platform_id!r}")

    ident = platform_id.lower()
    if ident.startswith("win"):
        return PlatformInfo(platform_id, ";")
    for emulation in _MOUNT_PREFIXES:
        if ident.startswith(emulation):
            return PlatformInfo(platform_id, ":", emulation)
    return PlatformInfo(platform_id, ":")


def split_value(value: str, separator: str) -> list[str]:
    """Split a raw variable value into entries, dropping empty segments."""
    return [part for part in value.split(separator) if part]


def join_entries(entries: list[str], separator: str) -> str:
    """Join entries into a raw variable value."""
    return separator.join(entries)


def unify_path(
    path: str,
    name: str | None = None,
    platform: PlatformInfo | None = None,
    rewrite_variables: Collection[str] = DEFAULT_REWRITE_VARIABLES,
) -> str:
    """Bring a path entry to a consistent spelling.

    Backslashes become forward slashes and a leading drive letter is
    upper-cased (``c:\\tmp`` -> ``C:/tmp``). Under an emulation layer,
    drive letters already in mount form are lower-cased, and drive-form
    entries of the variables listed in *rewrite_variables* are moved to
    the mount form (``C:/foo`` -> ``/cygdrive/c/foo``).

    Args:
        path: Entry to normalize.
        name: Variable the entry belongs to.
        platform: Host description. Defaults to the detected platform.
        rewrite_variables: Variable names whose drive-form entries are
            rewritten under an emulation layer.

    Returns:
        The normalized entry.
    """
    if platform is None:
        platform = detect_platform()

    p = path.replace("\\", "/")
    m = _DRIVE.match(p)
    if m:
        p = f"{m.group(1).upper()}:/{p[m.end():]}"

    prefix = platform.mount_prefix
    if prefix is None:
        return p

    if prefix and p.startswith(prefix + "/"):
        return re.sub(
            rf"^{re.escape(prefix)}/([A-Za-z])(?=/|$)",
            lambda mm: f"{prefix}/{mm.group(1).lower()}",
            p,
        )
    if name in rewrite_variables:
        p = _NATIVE_DRIVE.sub(lambda mm: f"{prefix}/{mm.group(1).lower()}/", p)
    return p
