"""Tests for platform detection and path normalization."""

import pytest

from envpaths import detect_platform, unify_path
from envpaths.platform import join_entries, split_value

LINUX = detect_platform("linux")
WINDOWS = detect_platform("win32")
CYGWIN = detect_platform("cygwin")
MSYS = detect_platform("msys")


class TestDetectPlatform:
    """Test separator and emulation layer detection."""

    def test_windows_uses_semicolon(self):
        """Test that Windows joins entries with ';'."""
        assert WINDOWS.separator == ";"
        assert WINDOWS.is_windows is True
        assert WINDOWS.emulation is None

    @pytest.mark.parametrize("ident", ["linux", "darwin", "freebsd13"])
    def test_posix_uses_colon(self, ident):
        """Test that POSIX platforms join entries with ':'."""
        info = detect_platform(ident)
        assert info.separator == ":"
        assert info.emulation is None
        assert info.mount_prefix is None

    def test_cygwin_is_emulation_layer(self):
        """Test that Cygwin is detected with its /cygdrive mount point."""
        assert CYGWIN.separator == ":"
        assert CYGWIN.emulation == "cygwin"
        assert CYGWIN.mount_prefix == "/cygdrive"

    def test_msys_is_emulation_layer(self):
        """Test that MSYS mounts drives at the root."""
        assert MSYS.emulation == "msys"
        assert MSYS.mount_prefix == ""

    def test_defaults_to_running_platform(self):
        """Test that no identifier means sys.platform."""
        import sys

        assert detect_platform().platform_id == sys.platform

    @pytest.mark.parametrize("ident", ["", 42])
    def test_invalid_identifier_raises(self, ident):
        """Test that unusable identifiers are rejected."""
        with pytest.raises(ValueError, match="Invalid platform identifier"):
            detect_platform(ident)


class TestSplitJoin:
    """Test raw value splitting and joining."""

    def test_split_drops_empty_segments(self):
        """Test that empty segments from '::' or trailing ':' are dropped."""
        assert split_value("/a::/b:", ":") == ["/a", "/b"]

    def test_join_then_split(self):
        """Test that joined entries split back to the same list."""
        entries = ["C:/a", "D:/b c", "E:/"]
        assert split_value(join_entries(entries, ";"), ";") == entries


class TestUnifyPath:
    """Test entry normalization."""

    def test_backslashes_become_slashes(self):
        """Test that backslashes are converted on Windows."""
        assert unify_path("C:\\foo\\bar", "PATH", WINDOWS) == "C:/foo/bar"

    def test_drive_letter_upper_cased(self):
        """Test that a lower-case drive letter is upper-cased."""
        assert unify_path("d:\\x", "PATH", WINDOWS) == "D:/x"

    def test_bare_drive_gets_slash(self):
        """Test that 'c:' becomes the drive root 'C:/'."""
        assert unify_path("c:", "PATH", WINDOWS) == "C:/"

    def test_posix_path_unchanged(self):
        """Test that ordinary POSIX paths pass through."""
        assert unify_path("/usr/local/bin", "PATH", LINUX) == "/usr/local/bin"

    def test_idempotent(self):
        """Test that normalizing twice changes nothing."""
        once = unify_path("c:\\Program Files\\Tool", "PATH", CYGWIN)
        assert unify_path(once, "PATH", CYGWIN) == once

    def test_cygwin_rewrites_path_variable(self):
        """Test that PATH drive entries move to /cygdrive under Cygwin."""
        assert unify_path("C:\\foo", "PATH", CYGWIN) == "/cygdrive/c/foo"

    def test_cygwin_leaves_other_variables(self):
        """Test that other variables keep the drive form."""
        assert unify_path("C:\\foo", "LD_LIBRARY_PATH", CYGWIN) == "C:/foo"

    def test_cygwin_lowercases_existing_mount_form(self):
        """Test that /cygdrive/C is spelled /cygdrive/c."""
        assert unify_path("/cygdrive/C/foo", "LIB", CYGWIN) == "/cygdrive/c/foo"
        assert unify_path("/cygdrive/D", "LIB", CYGWIN) == "/cygdrive/d"

    def test_custom_rewrite_variables(self):
        """Test that the rewritten variable names are configurable."""
        rewrite = ("PATH", "MAYA_SCRIPT_PATH")
        assert (
            unify_path("e:/scripts", "MAYA_SCRIPT_PATH", CYGWIN, rewrite)
            == "/cygdrive/e/scripts"
        )
        assert unify_path("e:/scripts", "PATH", CYGWIN, ()) == "E:/scripts"

    def test_msys_rewrites_to_root_mount(self):
        """Test that MSYS mounts drives as /c/..."""
        assert unify_path("C:\\foo", "PATH", MSYS) == "/c/foo"

    def test_no_rewrite_outside_emulation(self):
        """Test that Windows keeps drive-form PATH entries."""
        assert unify_path("C:/foo", "PATH", WINDOWS) == "C:/foo"
