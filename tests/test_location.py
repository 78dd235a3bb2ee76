"""Tests for Location construction, decomposition and identity."""

from __future__ import annotations

import dataclasses
import os
import tempfile
from pathlib import Path

import pytest

from file_locations.context import LocationContext
from file_locations.directories import Domain, SystemDirectory
from file_locations.location import Location, standardize_path


class TestStandardizePath:
    """Tests for path standardization."""

    def test_collapses_redundant_segments(self) -> None:
        """Test separators and dot segments are collapsed."""
        assert standardize_path("/tmp//root/./sub/../") == "/tmp/root"

    def test_leading_double_separator(self) -> None:
        """Test a leading double separator becomes a single one."""
        assert standardize_path("//tmp") == "/tmp"

    def test_expands_home(self, temp_home: Path) -> None:
        """Test a leading tilde expands to the home directory."""
        assert standardize_path("~/notes") == str(temp_home / "notes")

    def test_relative_is_anchored_at_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test relative paths are made absolute against the cwd."""
        monkeypatch.chdir(tmp_path)
        assert standardize_path("a/b") == os.path.join(os.getcwd(), "a", "b")

    def test_empty_stays_empty(self) -> None:
        """Test the empty path is kept as the degenerate empty path."""
        assert standardize_path("") == ""


class TestConstruction:
    """Tests for Location constructors."""

    @pytest.mark.parametrize(
        "path", ["/", "/tmp", "/tmp/root/", "/tmp//x/./y/..", "/a b/ü.txt", ""]
    )
    def test_from_path_is_idempotent(self, path: str) -> None:
        """Test re-constructing from a location's path changes nothing."""
        once = Location.from_path(path).path
        assert Location.from_path(once).path == once

    def test_from_path_url(self) -> None:
        """Test the URL is a percent-encoded file URL."""
        loc = Location.from_path("/tmp/a b")
        assert loc.url == "file:///tmp/a%20b"
        assert loc.path == "/tmp/a b"
        assert loc.scheme == "file"

    def test_from_path_undecodable_bytes(self) -> None:
        """Test surrogate-escaped names encode as their original bytes."""
        loc = Location.from_path("/tmp/bad\udcff")
        assert loc.url == "file:///tmp/bad%FF"
        assert loc.path == "/tmp/bad\udcff"
        assert loc.last_component == "bad\udcff"

    def test_from_path_accepts_pathlike(self, tmp_path: Path) -> None:
        """Test os.PathLike values are accepted."""
        assert Location.from_path(tmp_path).path == str(tmp_path)

    def test_from_url_stored_as_is(self) -> None:
        """Test from_url performs no standardization."""
        loc = Location.from_url("file:///tmp/root/")
        assert loc.url == "file:///tmp/root/"
        assert loc.path == "/tmp/root/"

    def test_from_components(self) -> None:
        """Test joining components, ignoring separator segments."""
        loc = Location.from_components(["/", "tmp", "/", "root"])
        assert loc.path == "/tmp/root"

    def test_from_components_round_trip(self) -> None:
        """Test components rebuild an equal location."""
        loc = Location.from_path("/usr/local/bin")
        assert Location.from_components(loc.components) == loc

    def test_from_system_directory_root(self) -> None:
        """Test the root directory resolves in every domain."""
        for domain in Domain:
            assert Location.from_system_directory(SystemDirectory.ROOT, domain).path == "/"

    def test_from_system_directory_home(self, temp_home: Path) -> None:
        """Test the user home directory."""
        assert Location.home().path == str(temp_home)

    def test_from_system_directory_temporary(self) -> None:
        """Test the temporary directory."""
        expected = standardize_path(tempfile.gettempdir())
        assert Location.temporary().path == expected

    def test_from_system_directory_unresolvable(self) -> None:
        """Test an unresolvable directory yields the empty location."""
        loc = Location.from_system_directory(SystemDirectory.HOME, Domain.SYSTEM)
        assert loc.path == ""
        assert loc.exists() is False
        assert loc.is_dir() is False
        assert loc.children() == []

    def test_construction_does_not_touch_filesystem(self, mock_context: LocationContext) -> None:
        """Test from_path performs no filesystem queries."""
        Location.from_path("/tmp/root", mock_context)
        assert mock_context.filesystem.method_calls == []

    def test_default_context(self) -> None:
        """Test a location gets the process context when none is given."""
        from file_locations.context import default_context

        assert Location.from_path("/tmp").context is default_context()


class TestDecomposition:
    """Tests for pure path decomposition."""

    def test_components(self) -> None:
        """Test components run from root to leaf."""
        loc = Location.from_path("/tmp/root/a.tar.gz")
        assert loc.components == ["/", "tmp", "root", "a.tar.gz"]
        assert loc.depth == 4

    def test_root_components(self) -> None:
        """Test the root has a single separator component."""
        root = Location.root()
        assert root.components == ["/"]
        assert root.last_component == "/"
        assert root.extension == ""

    def test_extension(self) -> None:
        """Test the extension is taken after the final dot."""
        loc = Location.from_path("/tmp/root/a.tar.gz")
        assert loc.extension == "gz"
        assert loc.last_component == "a.tar.gz"
        assert loc.last_component_without_extension == "a.tar"
        assert loc.display_name == "a.tar.gz"

    @pytest.mark.parametrize("name", ["README", ".bashrc", "file."])
    def test_no_extension(self, name: str) -> None:
        """Test names without a usable suffix have an empty extension."""
        loc = Location.from_path(f"/tmp/{name}")
        assert loc.extension == ""
        assert loc.last_component_without_extension == name

    def test_first_and_last_components(self) -> None:
        """Test prefix and suffix selection."""
        loc = Location.from_path("/tmp/root/sub")
        assert loc.first_components(2) == ["/", "tmp"]
        assert loc.last_components(2) == ["root", "sub"]
        assert loc.first_components(0) == []
        assert loc.last_components(0) == []

    def test_components_clamped(self) -> None:
        """Test n at or beyond the depth returns the full list in order."""
        loc = Location.from_path("/tmp/root/sub")
        assert loc.first_components(loc.depth) == loc.components
        assert loc.first_components(99) == loc.components
        assert loc.last_components(99) == loc.components

    def test_negative_components(self) -> None:
        """Test negative counts return nothing."""
        loc = Location.from_path("/tmp/root")
        assert loc.first_components(-1) == []
        assert loc.last_components(-1) == []

    def test_short_path(self, temp_home: Path) -> None:
        """Test the home prefix is stripped."""
        inside = Location.from_path(temp_home / "Documents" / "x.txt")
        assert inside.short_path() == "/Documents/x.txt"
        assert Location.from_path("/etc/hosts").short_path() == "/etc/hosts"

    def test_getitem(self) -> None:
        """Test subscripting appends segments."""
        base = Location.from_path("/tmp/root")
        assert base["a.txt"] == Location.from_path("/tmp/root/a.txt")
        assert base["sub/c.txt"] == Location.from_path("/tmp/root/sub/c.txt")
        assert base["/sub/"] == Location.from_path("/tmp/root/sub")
        assert Location.root()["tmp"] == Location.from_path("/tmp")

    def test_getitem_keeps_context(self, context: LocationContext) -> None:
        """Test derived locations share the parent's context."""
        base = Location.from_path("/tmp", context)
        assert base["x"].context is context
        assert base.parent().context is context

    def test_fspath_and_str(self) -> None:
        """Test a location works as a path and prints as its URL."""
        loc = Location.from_path("/tmp/root")
        assert os.fspath(loc) == "/tmp/root"
        assert str(loc) == "file:///tmp/root"


class TestIdentity:
    """Tests for equality and hashing."""

    def test_equal_urls_are_equal(self, context: LocationContext) -> None:
        """Test equality ignores the context."""
        a = Location.from_path("/tmp/root")
        b = Location.from_path("/tmp//root/", context)
        assert a == b
        assert hash(a) == hash(b)

    def test_equality_is_textual(self) -> None:
        """Test spellings that differ in the URL are not equal."""
        assert Location.from_url("file:///tmp/root/") != Location.from_path("/tmp/root")

    def test_equivalence_relation(self) -> None:
        """Test reflexivity, symmetry and transitivity."""
        a = Location.from_path("/tmp/x")
        b = Location.from_url("file:///tmp/x")
        c = Location.from_components(["/", "tmp", "x"])
        assert a == a
        assert a == b and b == a
        assert b == c and a == c

    def test_usable_in_sets(self) -> None:
        """Test equal locations collapse in a set."""
        locations = {Location.from_path("/tmp/x"), Location.from_path("/tmp/x/"), Location.root()}
        assert len(locations) == 2

    def test_not_equal_to_strings(self) -> None:
        """Test a location never equals its path string."""
        assert Location.from_path("/tmp") != "/tmp"

    def test_immutable(self) -> None:
        """Test the URL cannot be reassigned."""
        loc = Location.from_path("/tmp")
        with pytest.raises(dataclasses.FrozenInstanceError):
            loc.url = "file:///etc"  # type: ignore[misc]
