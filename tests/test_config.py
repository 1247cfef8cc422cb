"""Tests for configure() and VariableRegistry.from_config()."""

import pytest

from envpaths import EnvPathsConfig, MemoryEnvironment, VariableRegistry, configure


def test_defaults():
    """Test the default configuration."""
    config = configure()
    assert config == EnvPathsConfig()
    assert config.verify_directories is True
    assert config.rewrite_variables == ("PATH",)
    assert config.platform is None


def test_rewrite_variables_accepts_string():
    """Test that a single variable name is wrapped in a tuple."""
    config = configure(rewrite_variables="MAYA_SCRIPT_PATH")
    assert config.rewrite_variables == ("MAYA_SCRIPT_PATH",)


def test_unexpected_argument():
    """Test that unknown keyword arguments are rejected."""
    with pytest.raises(ValueError, match="Unexpected configuration arguments"):
        configure(check_dirs=False)


def test_invalid_platform():
    """Test that an empty platform identifier is rejected."""
    with pytest.raises(ValueError, match="Invalid platform identifier"):
        configure(platform="")


def test_invalid_rewrite_variable():
    """Test that empty variable names are rejected."""
    with pytest.raises(ValueError, match="rewrite_variables"):
        configure(rewrite_variables=["PATH", ""])


def test_from_config():
    """Test building a registry from a configuration."""
    store = MemoryEnvironment()
    config = configure(
        verify_directories=False,
        platform="cygwin",
        rewrite_variables=("PATH", "MAYA_SCRIPT_PATH"),
    )
    registry = VariableRegistry.from_config(config, store)

    assert registry.verify_directories is False
    assert registry.platform.emulation == "cygwin"
    registry["MAYA_SCRIPT_PATH"] = ["d:\\maya\\scripts"]
    assert store.get("MAYA_SCRIPT_PATH") == "/cygdrive/d/maya/scripts"
