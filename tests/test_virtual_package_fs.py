"""Tests for the in-memory package file system."""

import asyncio

import pytest

from importgraph import PackageInfo, VirtualPackageFS, resolve_root_package
from importgraph.specifier import PathImport, URIImport


@pytest.fixture
def fs():
    return VirtualPackageFS().add_root({"name": "root", "version": "1.0.0"})


def _root(fs):
    return asyncio.run(resolve_root_package(fs))


def _resolve(resolution, spec):
    return asyncio.run(resolution.resolve_import(spec))


class TestAddPackage:
    """Package registration."""

    def test_default_uri(self, fs):
        fs.add_package({"name": "dep", "version": "1.2.3"})
        info = asyncio.run(fs.load_package("package:dep/1.2.3"))
        assert info.name == "dep"

    def test_accepts_package_info(self, fs):
        info = PackageInfo({"name": "dep", "version": "1.0.0"})
        fs.add_package(info, "package:dep")
        assert asyncio.run(fs.load_package("package:dep")) is info

    def test_replaces_named_package_with_same_version(self, fs):
        fs.add_root({"name": "root", "version": "1.0.0", "dependencies": {"test": "1.0.0"}})
        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test")
        root = _root(fs)

        assert asyncio.run(fs.resolve_name(root, "test")) == "package:test"

        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test@biz")

        assert asyncio.run(fs.resolve_name(root, "test")) == "package:test@biz"
        assert asyncio.run(fs.load_package("package:test")) is None

    def test_keeps_duplicate_when_allowed(self, fs):
        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test")
        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test@biz", allow_duplicate=True)

        assert asyncio.run(fs.load_package("package:test")) is not None
        assert asyncio.run(fs.load_package("package:test@biz")) is not None

    def test_replaces_package_at_same_uri(self, fs):
        fs.add_root({"name": "root", "version": "1.0.0", "dependencies": {"test": "1.0.0", "test2": "1.0.0"}})
        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test")
        root = _root(fs)

        assert asyncio.run(fs.resolve_name(root, "test")) == "package:test"

        fs.add_package({"name": "test2", "version": "1.0.0"}, "package:test")

        assert asyncio.run(fs.resolve_name(root, "test2")) == "package:test"
        assert asyncio.run(fs.resolve_name(root, "test")) is None

    def test_replaces_root(self, fs):
        fs.add_root({"name": "new-root", "version": "2.0.0"})
        assert _root(fs).name == "new-root"


class TestFileSystemOperations:
    """URI handling and name lookup."""

    def test_resolve_name_misses_undeclared_dependency(self, fs):
        fs.add_root({"name": "root", "version": "1.0.0", "dependencies": {"test": "1.0.0"}})
        root = _root(fs)
        assert asyncio.run(fs.resolve_name(root, "test2")) is None

    def test_resolve_name_checks_all_dependency_kinds(self, fs):
        fs.add_root({"name": "root", "version": "1.0.0", "devDependencies": {"test": "^2.0.0"}})
        fs.add_package({"name": "test", "version": "1.0.0"})
        fs.add_package({"name": "test", "version": "2.1.0"})
        root = _root(fs)
        assert asyncio.run(fs.resolve_name(root, "test")) == "package:test/2.1.0"

    def test_parent_dir(self, fs):
        assert fs.parent_dir("package:some/path") == "package:some"
        assert fs.parent_dir("package:/some/path") == "package:some"
        assert fs.parent_dir("package:root") == "package:"
        assert fs.parent_dir("package:") is None

    def test_recognize_package_uri(self, fs):
        assert fs.recognize_package_uri(URIImport(spec="package:dep", scheme="package", path="dep")) == "package:dep"
        assert fs.recognize_package_uri(URIImport(spec="file:///dep", scheme="file", path="/dep")) is None

    def test_find_package_dir(self, fs):
        package_dir = asyncio.run(fs.find_package_dir("package:root/some/file.js"))
        assert package_dir.uri == "package:root"
        assert package_dir.package_info.name == "root"
        assert asyncio.run(fs.find_package_dir("package:other/file.js")) is None

    def test_custom_root(self):
        fs = VirtualPackageFS("package:custom").add_root({"name": "custom", "version": "1.0.0"})
        root = _root(fs)
        assert root.uri == "package:custom"
        assert _resolve(root, "./lib/a.js").uri == "package:custom/lib/a.js"

    def test_custom_root_with_trailing_slash(self):
        fs = VirtualPackageFS("package:custom/").add_root({"name": "custom", "version": "1.0.0"})
        root = _root(fs)
        assert root.uri == "package:custom"
        assert _resolve(root, "./lib/a.js").host is root


class TestDerefEntry:
    """Redirects of packages, entries and private imports."""

    def test_dereferences_package(self, fs):
        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test", deref={"": "./dist/index.js"})
        root = _root(fs)

        resolved = _resolve(root, "package:test")
        deref = asyncio.run(resolved.deref())

        assert deref.uri == "package:test/dist/index.js"
        assert deref.import_spec == PathImport(
            spec="./dist/index.js",
            is_relative=True,
            path="./dist/index.js",
            uri="./dist/index.js",
        )
        assert asyncio.run(resolved.deref()) is deref

    def test_dereferences_package_entry(self, fs):
        fs.add_root({"name": "root", "version": "1.0.0", "dependencies": {"test": "1.0.0"}})
        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test", deref={"/sub": "./dist/sub.js"})
        root = _root(fs)

        deref = asyncio.run(_resolve(root, "test/sub").deref())

        assert deref.uri == "package:test/dist/sub.js"
        assert deref.import_spec.spec == "./dist/sub.js"

    def test_dereferences_private_entry_to_local_file(self, fs):
        fs.add_package({"name": "test", "version": "1.0.0"}, "package:test", deref={"#private": "./dist/private.js"})
        root = _root(fs)

        host = _resolve(root, "package:test")
        deref = asyncio.run(_resolve(host, "#private").deref())

        assert deref.uri == "package:test/dist/private.js"
        assert deref.host is host

    def test_dereferences_private_entry_to_package(self, fs):
        fs.add_package(
            {"name": "test", "version": "1.0.0", "dependencies": {"other": "1.0.0"}},
            "package:test",
            deref={"#private": "other"},
        )
        fs.add_package({"name": "other", "version": "1.0.0"}, "package:other")
        root = _root(fs)

        host = _resolve(root, "package:test")
        other = _resolve(host, "other")
        deref = asyncio.run(_resolve(host, "#private").deref())

        assert deref is other

    def test_without_redirect(self, fs):
        root = _root(fs)
        assert asyncio.run(root.deref()) is root
