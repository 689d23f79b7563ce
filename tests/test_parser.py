"""Tests for import extraction and classification."""

import pytest

from auto_typings.exceptions import ResolutionInvariantError
from auto_typings.imports.models import PackagePath
from auto_typings.imports.models import RelativeInPackagePath
from auto_typings.imports.models import RelativePath
from auto_typings.imports.parser import extract_specifiers
from auto_typings.imports.parser import parse_dependencies
from auto_typings.imports.parser import resolve_path


class TestExtractSpecifiers:
    """Tests for the three textual scans."""

    def test_no_imports(self) -> None:
        """Source without imports yields nothing."""
        assert extract_specifiers("const x = 1;\nexport default x;") == []

    def test_static_import(self) -> None:
        assert extract_specifiers("import x from './a'") == ["./a"]

    def test_double_quotes(self) -> None:
        assert extract_specifiers('import { y } from "react"') == ["react"]

    def test_type_only_import(self) -> None:
        assert extract_specifiers("import type { Props } from '@scope/pkg'") == ["@scope/pkg"]

    def test_dynamic_import_requires_await(self) -> None:
        """Only awaited dynamic imports are picked up."""
        assert extract_specifiers("const m = await import('lazy');") == ["lazy"]
        assert extract_specifiers("import('not-awaited').then(() => {})") == []

    def test_require(self) -> None:
        assert extract_specifiers("const fs = require ('fs-extra');") == ["fs-extra"]

    def test_results_grouped_by_shape(self) -> None:
        """Static imports come first, then dynamic imports, then requires."""
        source = "\n".join(
            [
                "const a = require('req-pkg');",
                "const b = await import('dyn-pkg');",
                "import c from 'static-pkg';",
                "import d from 'static-two';",
            ]
        )
        assert extract_specifiers(source) == ["static-pkg", "static-two", "dyn-pkg", "req-pkg"]

    def test_re_exports_are_not_imports(self) -> None:
        """export-from is not one of the scanned shapes."""
        assert extract_specifiers("export * from './types';") == []


class TestParseDependencies:
    """Tests for classification against a top-level directory."""

    def test_relative(self) -> None:
        assert parse_dependencies("import x from './a'", "/root/") == [
            RelativePath(import_path="./a", source_path="/root/")
        ]

    def test_bare_package(self) -> None:
        assert parse_dependencies("import x from 'left-pad'", "/root/") == [
            PackagePath(package_name="left-pad", import_path="")
        ]

    def test_scoped_package_with_sub_path(self) -> None:
        assert parse_dependencies("import x from '@scope/pkg/sub'", "/root/") == [
            PackagePath(package_name="@scope/pkg", import_path="sub")
        ]

    def test_bare_package_with_nested_sub_path(self) -> None:
        assert parse_dependencies("import map from 'lodash/fp/map'", "/root/") == [
            PackagePath(package_name="lodash", import_path="fp/map")
        ]

    def test_node_builtin(self) -> None:
        assert parse_dependencies("require('node:fs')", "/root/") == [
            RelativeInPackagePath(package_name="@types/node", import_path="fs.d.ts", source_path="")
        ]

    def test_node_builtin_with_sub_path(self) -> None:
        assert parse_dependencies("import { readFile } from 'node:fs/promises'", "/root/") == [
            RelativeInPackagePath(package_name="@types/node", import_path="fs/promises.d.ts", source_path="")
        ]

    def test_no_match_is_empty(self) -> None:
        assert parse_dependencies("let answer = 42;", "/root/") == []


class TestResolvePathInPackage:
    """Tests for classification inside a package's declaration tree."""

    def test_relative_advances_source_path(self) -> None:
        """The new source path is the parent's full path, not just its directory."""
        parent = RelativeInPackagePath(package_name="p", source_path="a/b", import_path="c")
        assert resolve_path("./d", parent) == RelativeInPackagePath(
            package_name="p", source_path="a/b/c", import_path="./d"
        )

    def test_relative_from_directory_parent(self) -> None:
        parent = RelativeInPackagePath(package_name="p", source_path="lib", import_path="")
        assert resolve_path("../util", parent) == RelativeInPackagePath(
            package_name="p", source_path="lib", import_path="../util"
        )

    def test_bare_import_starts_fresh_package(self) -> None:
        parent = RelativeInPackagePath(package_name="p", source_path="lib", import_path="")
        assert resolve_path("other/sub", parent) == PackagePath(package_name="other", import_path="sub")

    def test_scoped_import_starts_fresh_package(self) -> None:
        parent = RelativeInPackagePath(package_name="p", source_path="", import_path="")
        assert resolve_path("@types/react", parent) == PackagePath(package_name="@types/react", import_path="")

    def test_node_builtin_ignores_package_context(self) -> None:
        parent = RelativeInPackagePath(package_name="p", source_path="lib", import_path="")
        assert resolve_path("node:path", parent) == RelativeInPackagePath(
            package_name="@types/node", source_path="", import_path="path.d.ts"
        )

    def test_parse_in_package(self) -> None:
        parent = RelativeInPackagePath(package_name="p", source_path="dist", import_path="")
        source = "import { A } from './a';\nimport { B } from 'b';"
        assert parse_dependencies(source, parent) == [
            RelativeInPackagePath(package_name="p", source_path="dist", import_path="./a"),
            PackagePath(package_name="b", import_path=""),
        ]


class TestUnreachableParents:
    """Package and plain relative parents are never produced by recursion."""

    def test_package_parent_fails_fast(self) -> None:
        with pytest.raises(ResolutionInvariantError):
            resolve_path("./a", PackagePath(package_name="p"))

    def test_relative_parent_fails_fast(self) -> None:
        with pytest.raises(ResolutionInvariantError):
            resolve_path("react", RelativePath(import_path="./x", source_path="/root"))

    def test_node_builtin_still_classified(self) -> None:
        """node: specifiers bypass parent handling entirely."""
        result = resolve_path("node:fs", PackagePath(package_name="p"))
        assert result.package_name == "@types/node"
