"""Configuration for path-list registries.

Provides the configuration dataclass and the configure factory used to
build a VariableRegistry with non-default policy or platform rules.
"""

from dataclasses import dataclass

from .platform import DEFAULT_REWRITE_VARIABLES, detect_platform


@dataclass
class EnvPathsConfig:
    """Configuration for a VariableRegistry.

    Attributes:
        verify_directories: Drop entries that are not existing directories
            (default: True).
        rewrite_variables: Variables whose drive-letter entries are moved
            to the emulation layer's mount form (default: ("PATH",)).
        platform: ``sys.platform`` style identifier to assume. None means
            the running interpreter's platform.
    """

    verify_directories: bool = True
    rewrite_variables: tuple[str, ...] = DEFAULT_REWRITE_VARIABLES
    platform: str | None = None


def configure(**kwargs) -> EnvPathsConfig:
    """Build a registry configuration.

    Args:
        **kwargs: Any of the EnvPathsConfig fields.
            - verify_directories (bool): Filter non-directories.
            - rewrite_variables (str | iterable of str): Variable names
              that get the emulation drive rewrite.
            - platform (str): Platform identifier, e.g. "win32" or "cygwin".

    Returns:
        EnvPathsConfig for VariableRegistry.from_config().

    Examples:
        >>> configure(verify_directories=False)
        EnvPathsConfig(verify_directories=False, rewrite_variables=('PATH',), platform=None)

        >>> configure(platform="cygwin", rewrite_variables="PATH")
        EnvPathsConfig(verify_directories=True, rewrite_variables=('PATH',), platform='cygwin')
    """
    verify_directories = kwargs.pop("verify_directories", True)
    rewrite_variables = kwargs.pop("rewrite_variables", DEFAULT_REWRITE_VARIABLES)
    platform = kwargs.pop("platform", None)

    if kwargs:
        raise ValueError(f"Unexpected configuration arguments: {list(kwargs.keys())}")

    if isinstance(rewrite_variables, str):
        rewrite_variables = (rewrite_variables,)
    rewrite_variables = tuple(rewrite_variables)
    for name in rewrite_variables:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Invalid variable name in rewrite_variables: {name!r}")

    if platform is not None:
        # Raises ValueError for unusable identifiers
        detect_platform(platform)

    return EnvPathsConfig(
        verify_directories=bool(verify_directories),
        rewrite_variables=rewrite_variables,
        platform=platform,
    )
