"""Recursive import resolution.

Walks the import graph of a source file depth-first: every dependency is
fetched (through the cache), injected into the type-checking host and then
expanded in turn, until the recursion budget runs out on the relevant axis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from auto_typings import progress
from auto_typings.cache.protocol import SourceCacheProtocol
from auto_typings.depth import RecursionBudget
from auto_typings.exceptions import SourceFetchError
from auto_typings.exceptions import TypingsError
from auto_typings.host.protocol import TypeCheckingHostProtocol
from auto_typings.imports.models import ImportResourcePath
from auto_typings.imports.models import PackagePath
from auto_typings.imports.models import RelativeInPackagePath
from auto_typings.imports.models import RelativePath
from auto_typings.imports.models import canonical_key
from auto_typings.imports.parser import parse_dependencies
from auto_typings.options import Options
from auto_typings.paths import dirname
from auto_typings.paths import join_path
from auto_typings.paths import strip_dot_slash
from auto_typings.sources.protocol import SourceResolverProtocol

logger = logging.getLogger(__name__)

# Probed in order when an import path names no file extension
SOURCE_EXTENSIONS = (".d.ts", "/index.d.ts", ".ts", ".tsx", "/index.ts", "/index.tsx")


@dataclass
class ResolutionContext:
    """State of one resolution pass.

    Attributes:
        resolved: Canonical keys already resolved in this pass.
        loaded: File keys of files already injected and expanded in this pass.
        new_imports_resolved: True once the host received new content.
        injected: Host paths written during this pass, in order.
    """

    resolved: set[str] = field(default_factory=set)
    loaded: set[str] = field(default_factory=set)
    new_imports_resolved: bool = False
    injected: list[str] = field(default_factory=list)


def file_key(package_name: str, version: str | None, path: str) -> str:
    """Cache key of one file inside a package."""
    package = f"{package_name}@{version}" if version else package_name
    return f"{package}/{path}"


def definitely_typed_name(package_name: str) -> str:
    """DefinitelyTyped package for a package (``@scope/name`` -> ``@types/scope__name``)."""
    if package_name.startswith("@"):
        return "@types/" + package_name[1:].replace("/", "__", 1)
    return f"@types/{package_name}"


def host_path(package_name: str, file_path: str) -> str:
    """Host location of a package file.

    DefinitelyTyped packages are placed where the typed package itself is
    looked up, so ``@types/react`` files land in ``node_modules/react``.
    """
    return join_path("node_modules", package_name, file_path).replace("@types/", "", 1)


class ImportResolver:
    """Resolves the imports of a source file into the type-checking host.

    One instance serves one editor. Each call to resolve_imports_in_file is
    a resolution pass with its own ResolutionContext; the cache outlives
    passes and may be shared with other resolvers.
    """

    def __init__(
        self,
        options: Options,
        source_cache: SourceCacheProtocol,
        source_resolver: SourceResolverProtocol,
        host: TypeCheckingHostProtocol,
    ) -> None:
        """Initialize resolver.

        Args:
            options: Resolution options (depths, gates, versions, callbacks).
            source_cache: Cache for fetched files.
            source_resolver: Fetches files that are not cached.
            host: Receives resolved declaration files.
        """
        self.options = options
        self.cache = source_cache
        self.source_resolver = source_resolver
        self.host = host
        self.versions: dict[str, str] = dict(options.versions or {})
        self.context = ResolutionContext()

    # ----- Pass state -----

    def were_new_imports_resolved(self) -> bool:
        return self.context.new_imports_resolved

    def reset_new_imports_resolved(self) -> None:
        self.context.new_imports_resolved = False

    # ----- Versions -----

    def set_versions(self, versions: dict[str, str]) -> None:
        """Replace the pinned versions and report them to on_update_versions."""
        self.versions = dict(versions)
        if self.options.on_update_versions is not None:
            self.options.on_update_versions(dict(self.versions))

    def _set_version(self, package_name: str, version: str) -> None:
        if self.versions.get(package_name) != version:
            self.set_versions({**self.versions, package_name: version})

    # ----- Resolution -----

    async def resolve_imports_in_file(
        self,
        source: str,
        parent: ImportResourcePath | str,
        budget: RecursionBudget,
    ) -> None:
        """Run one resolution pass over a source file.

        Each top-level dependency is its own branch: a TypingsError raised
        anywhere below it is handed to options.on_error when configured and
        the pass moves on to the next dependency; without on_error the error
        ends the pass and is raised to the caller.

        Args:
            source: Source text of the file.
            parent: Directory of the file, or its resolved path.
            budget: Initial recursion budget.

        Raises:
            TypingsError: If a fetch fails and no on_error is configured.
            ResolutionInvariantError: On an impossible parent/specifier pairing.
        """
        self.context = ResolutionContext()

        dependencies: list[ImportResourcePath] = []
        if self.options.preload_packages:
            dependencies.extend(PackagePath(package_name=name) for name in list(self.versions))
        dependencies.extend(parse_dependencies(source, parent))

        for dependency in dependencies:
            try:
                await self._resolve_dependency(dependency, parent, budget)
            except TypingsError as e:
                if self.options.on_error is None:
                    raise
                logger.warning(f"Failed to resolve {dependency!r}: {e}")
                self.options.on_error(str(e))

        logger.debug(
            f"Pass finished: {len(self.context.resolved)} dependencies, "
            f"{len(self.context.injected)} file(s) injected"
        )

    async def _resolve_imports(
        self,
        source: str,
        parent: RelativeInPackagePath,
        budget: RecursionBudget,
    ) -> None:
        """Resolve every dependency of fetched content, in parser order."""
        for dependency in parse_dependencies(source, parent):
            await self._resolve_dependency(dependency, parent, budget)

    async def _resolve_dependency(
        self,
        dependency: ImportResourcePath,
        parent: ImportResourcePath | str,
        budget: RecursionBudget,
    ) -> None:
        if isinstance(dependency, RelativePath):
            # Files of the edited project itself, not published anywhere
            logger.debug(f"Skipping local import {dependency.import_path} from {dependency.source_path}")
            return

        key = canonical_key(dependency, self.versions.get(dependency.package_name))
        if key in self.context.resolved:
            return

        if isinstance(dependency, PackagePath):
            if budget.package_exhausted:
                logger.debug(f"Package depth exhausted, not expanding {key}")
                return
            if dependency.import_path and self.options.preload_packages:
                await self._resolve_dependency(dependency.model_copy(update={"import_path": ""}), parent, budget)
            self.context.resolved.add(key)
            entry = await self._resolve_package_root(dependency)
            # The lookup may have pinned a version, which changes the key
            self.context.resolved.add(canonical_key(dependency, self.versions.get(dependency.package_name)))
            if entry is not None:
                self.context.resolved.add(canonical_key(entry, self.versions.get(entry.package_name)))
                await self._resolve_in_package(entry, budget.cross_package())
            return

        if isinstance(dependency, RelativeInPackagePath):
            same_package = isinstance(parent, RelativeInPackagePath) and parent.package_name == dependency.package_name
            if same_package:
                if budget.file_exhausted:
                    logger.debug(f"File depth exhausted, not expanding {key}")
                    return
                child_budget = budget.step_file()
            else:
                if budget.package_exhausted:
                    logger.debug(f"Package depth exhausted, not expanding {key}")
                    return
                child_budget = budget.cross_package()
            self.context.resolved.add(key)
            await self._resolve_in_package(dependency, child_budget)
            return

        raise TypeError(f"Not an import resource path: {dependency!r}")

    async def _resolve_in_package(self, resource: RelativeInPackagePath, budget: RecursionBudget) -> None:
        """Load one file of a package, inject it, then expand its imports."""
        loaded = await self._load_source_file(resource)
        if loaded is None:
            return

        source, at = loaded
        key = file_key(resource.package_name, self.versions.get(resource.package_name), at)
        if key in self.context.loaded:
            # Reached again through a different specifier (e.g. ./index from a sibling)
            logger.debug(f"Already expanded {key}")
            return
        self.context.loaded.add(key)

        self._inject(host_path(resource.package_name, at), source)
        parent = RelativeInPackagePath(
            package_name=resource.package_name,
            source_path=dirname(at),
            import_path="",
        )
        await self._resolve_imports(source, parent, budget)

    # ----- Package roots -----

    def _is_specified(self, package_name: str) -> bool:
        return package_name in self.versions or definitely_typed_name(package_name) in self.versions

    async def _resolve_package_root(self, resource: PackagePath) -> RelativeInPackagePath | None:
        """Find the declaration entry of a package.

        Tries the package's own typings first (from the sub-path's
        package.json, falling back to the root one), then its
        DefinitelyTyped counterpart.

        Returns:
            The entry file as a path inside the package providing the
            declarations, or None if no declarations were found.
        """
        package_name = resource.package_name
        sub_path = resource.import_path

        if self.options.only_specified_packages and not self._is_specified(package_name):
            logger.debug(f"Skipping {package_name}: not in specified versions")
            progress.invoke_update(
                self.options, progress.LOOKED_UP_PACKAGE, package=package_name, definitely_typed=False, success=False
            )
            return None

        package_json_dir = sub_path
        package_json = await self._fetch(package_name, join_path(sub_path, "package.json"))
        if package_json is None and sub_path:
            package_json_dir = ""
            package_json = await self._fetch(package_name, "package.json")

        if package_json is not None:
            entry = self._typings_entry(package_name, package_json, package_json_dir, sub_path, definitely_typed=False)
            if entry is not None:
                return entry

            typings_package = definitely_typed_name(package_name)
            typings_json = await self._fetch(typings_package, "package.json")
            if typings_json is not None:
                entry = self._typings_entry(typings_package, typings_json, "", sub_path, definitely_typed=True)
                if entry is not None:
                    return entry

        progress.invoke_update(
            self.options, progress.LOOKED_UP_PACKAGE, package=package_name, definitely_typed=False, success=False
        )
        return None

    def _typings_entry(
        self,
        package_name: str,
        package_json: str,
        package_json_dir: str,
        sub_path: str,
        definitely_typed: bool,
    ) -> RelativeInPackagePath | None:
        """Entry file named by a package.json's typings/types field, if any."""
        manifest = _load_manifest(package_name, package_json)
        typings = manifest.get("typings") or manifest.get("types")
        if not isinstance(typings, str) or not typings:
            return None

        self._inject(host_path(package_name, join_path(package_json_dir, "package.json")), package_json)
        version = manifest.get("version")
        if isinstance(version, str) and version:
            self._set_version(package_name, version)
            versioned_key = file_key(package_name, version, join_path(package_json_dir, "package.json"))
            if versioned_key not in self.cache:
                self.cache.set(versioned_key, package_json)

        progress.invoke_update(
            self.options,
            progress.LOOKED_UP_PACKAGE,
            package=package_name,
            definitely_typed=definitely_typed,
            success=True,
        )

        if sub_path and not package_json_dir:
            # Root typings describe the root entry; a sub-path import names its own file
            import_path = sub_path
        else:
            import_path = join_path(package_json_dir, strip_dot_slash(typings))
        return RelativeInPackagePath(package_name=package_name, source_path="", import_path=import_path)

    # ----- Files -----

    async def _load_source_file(self, resource: RelativeInPackagePath) -> tuple[str, str] | None:
        """Fetch the file a path inside a package refers to.

        Returns:
            ``(content, path inside package)``, or None if not found.
        """
        package_name = resource.package_name
        base = join_path(resource.source_path, resource.import_path).rstrip("/") or "."

        if base == ".." or base.startswith(("../", "/")):
            logger.warning(f"Ignoring {resource.import_path} in {package_name}: resolves outside the package root")
            self._report_type_file(package_name, base, success=False)
            return None

        if base.endswith(SOURCE_EXTENSIONS):
            source = await self._fetch(package_name, base)
            if source is not None:
                self._report_type_file(package_name, base, success=True)
                return source, base
        else:
            for suffix in SOURCE_EXTENSIONS:
                candidate = base + suffix
                source = await self._fetch(package_name, candidate)
                progress.invoke_update(
                    self.options,
                    progress.ATTEMPTED_LOOK_UP_FILE,
                    path=join_path(package_name, candidate),
                    success=source is not None,
                )
                if source is not None:
                    self._report_type_file(package_name, candidate, success=True)
                    return source, candidate

        # Directory with its own package.json (e.g. lodash/fp)
        package_json = await self._fetch(package_name, join_path(base, "package.json"))
        if package_json is not None:
            types = _load_manifest(package_name, package_json).get("types")
            if isinstance(types, str) and types:
                candidate = join_path(base, strip_dot_slash(types))
                source = await self._fetch(package_name, candidate)
                if source is not None:
                    self._report_type_file(package_name, candidate, success=True)
                    return source, candidate

        self._report_type_file(package_name, base, success=False)
        return None

    def _report_type_file(self, package_name: str, path: str, success: bool) -> None:
        progress.invoke_update(
            self.options, progress.LOOKED_UP_TYPE_FILE, path=join_path(package_name, path), success=success
        )

    async def _fetch(self, package_name: str, path: str) -> str | None:
        """Cache-or-fetch one file; None when it does not exist."""
        key = file_key(package_name, self.versions.get(package_name), path)

        cached = self.cache.get(key)
        if cached is not None:
            progress.invoke_update(self.options, progress.LOADED_FROM_CACHE, import_path=key)
            return cached

        content = await self.source_resolver.fetch(package_name, path, self.versions.get(package_name))
        if content is None:
            return None

        self.cache.set(key, content)
        progress.invoke_update(self.options, progress.STORED_TO_CACHE, import_path=key)
        return content

    def _inject(self, path: str, content: str) -> None:
        if self.host.get_file(path) == content:
            return
        self.host.set_file(path, content)
        self.context.new_imports_resolved = True
        self.context.injected.append(path)
        logger.debug(f"Injected {path}")


def _load_manifest(package_name: str, package_json: str) -> dict[str, Any]:
    try:
        manifest = json.loads(package_json)
    except json.JSONDecodeError as e:
        raise SourceFetchError(f"Invalid package.json for {package_name}: {e}") from e
    if not isinstance(manifest, dict):
        raise SourceFetchError(f"Invalid package.json for {package_name}: not an object")
    return manifest
