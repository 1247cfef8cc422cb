"""envpaths: Path-list environment variables as synchronized Python lists."""

from .base import EnvironmentStore, EnvPathsError, InvalidValueKind, SyncState
from .config import EnvPathsConfig, configure
from .context import defer_writes, verification
from .environ import MemoryEnvironment, OsEnvironment
from .pathlist import PathList
from .platform import PlatformInfo, detect_platform, unify_path
from .registry import VariableRegistry, env

__all__ = [
    "configure",
    "defer_writes",
    "detect_platform",
    "env",
    "EnvironmentStore",
    "EnvPathsConfig",
    "EnvPathsError",
    "InvalidValueKind",
    "MemoryEnvironment",
    "OsEnvironment",
    "PathList",
    "PlatformInfo",
    "SyncState",
    "unify_path",
    "VariableRegistry",
    "verification",
]
