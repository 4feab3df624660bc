"""Tests for import specifier recognition."""

import pytest

from importgraph.specifier import (
    EntryImport,
    ImpliedImport,
    ImportKind,
    PackageImport,
    PathImport,
    PrivateImport,
    SyntheticImport,
    UnknownImport,
    URIImport,
    recognize_import,
)


class TestRecognizedSpecifiers:
    """Already recognized specifiers."""

    def test_returns_recognized_specifier_unchanged(self):
        spec = UnknownImport(spec="_path/to/file")
        assert recognize_import(spec) is spec

    def test_recognition_is_idempotent(self):
        spec = recognize_import("@scope/pkg/sub")
        assert recognize_import(spec) == recognize_import("@scope/pkg/sub")


class TestPackageImports:
    """Package and package entry specifiers."""

    def test_scoped_package(self):
        assert recognize_import("@test-scope/test-package") == PackageImport(
            spec="@test-scope/test-package",
            name="@test-scope/test-package",
            scope="@test-scope",
            local="test-package",
        )

    def test_unscoped_package(self):
        spec = recognize_import("test-package")
        assert spec == PackageImport(spec="test-package", name="test-package", scope=None, local="test-package")
        assert spec.kind is ImportKind.PACKAGE
        assert spec.subpath is None

    def test_package_ending_with_slash(self):
        assert recognize_import("test-package/") == PackageImport(
            spec="test-package",
            name="test-package",
            scope=None,
            local="test-package",
        )

    def test_scoped_entry(self):
        assert recognize_import("@scope/pkg/sub/path") == EntryImport(
            spec="@scope/pkg/sub/path",
            name="@scope/pkg",
            scope="@scope",
            local="pkg",
            subpath="/sub/path",
        )

    def test_unscoped_entry(self):
        spec = recognize_import("test-package/some/path")
        assert spec.kind is ImportKind.ENTRY
        assert spec.name == "test-package"
        assert spec.scope is None
        assert spec.subpath == "/some/path"

    @pytest.mark.parametrize("spec", ["@test", "@test/", "_test", ".test", ""])
    def test_wrong_package_names(self, spec):
        assert recognize_import(spec) == UnknownImport(spec=spec)


class TestPathImports:
    """Relative and absolute path specifiers."""

    @pytest.mark.parametrize("spec", [".", ".."])
    def test_directory_paths(self, spec):
        assert recognize_import(spec) == PathImport(spec=spec, is_relative=True, path=spec, uri=spec)

    def test_absolute_path_is_encoded(self):
        assert recognize_import("/test path") == PathImport(
            spec="/test path",
            is_relative=False,
            path="/test%20path",
            uri="/test%20path",
        )

    def test_relative_path_keeps_query(self):
        spec = recognize_import("./test path?q=a")
        assert spec.is_relative
        assert spec.path == "./test%20path?q=a"
        assert spec.uri == spec.path

    def test_relative_path_with_backslashes(self):
        spec = recognize_import("..\\dir\\file.js")
        assert spec.kind is ImportKind.PATH
        assert spec.path == "../dir/file.js"


class TestOtherImports:
    """URI, builtin, private and synthetic specifiers."""

    def test_uri(self):
        assert recognize_import("file:///test-path?query") == URIImport(
            spec="file:///test-path?query",
            scheme="file",
            path="/test-path",
        )

    @pytest.mark.parametrize("spec", ["fs", "path", "node:fs", "fs/promises", "stream/web"])
    def test_node_builtins(self, spec):
        assert recognize_import(spec) == ImpliedImport(spec=spec, from_="node")

    def test_wrong_node_builtin_is_uri(self):
        assert recognize_import("node:wrong-module") == URIImport(
            spec="node:wrong-module",
            scheme="node",
            path="wrong-module",
        )
        assert recognize_import("node:fs/wrong-sub-module").kind is ImportKind.URI

    def test_synthetic(self):
        assert recognize_import("\0file:///test-path?query") == SyntheticImport(spec="\0file:///test-path?query")

    def test_private(self):
        assert recognize_import("#/internal") == PrivateImport(spec="#/internal")
