"""Import specifier extraction and classification."""

from __future__ import annotations

import logging
import re

from auto_typings.exceptions import ResolutionInvariantError
from auto_typings.paths import join_path

from .models import ImportResourcePath
from .models import PackagePath
from .models import RelativeInPackagePath
from .models import RelativePath

logger = logging.getLogger(__name__)

# One pattern per syntactic shape. Each is scanned independently and the
# results are concatenated in this order, so mixed sources come back grouped
# by shape rather than in source order.
_STATIC_IMPORT_PATTERN = re.compile(r"import .+ from ?['\"](?P<import_path>.+?)['\"]")
_DYNAMIC_IMPORT_PATTERN = re.compile(r"await import ?\(['\"](?P<import_path>.+?)['\"]\)")
_REQUIRE_PATTERN = re.compile(r"require ?\(['\"](?P<import_path>.+?)['\"]\)")

_SCAN_PATTERNS = (_STATIC_IMPORT_PATTERN, _DYNAMIC_IMPORT_PATTERN, _REQUIRE_PATTERN)

_NODE_MODULE_PATTERN = re.compile(r"^node:(?P<name>.+)$", re.DOTALL)

NODE_TYPES_PACKAGE = "@types/node"


def extract_specifiers(source: str) -> list[str]:
    """Extract raw import specifiers from source text.

    Finds:
    - import x from 'pkg'
    - await import('pkg')
    - require('pkg')

    Args:
        source: TypeScript or JavaScript source text.

    Returns:
        Specifiers grouped by shape (static, dynamic, require), each group
        in source order. Empty if nothing matches.
    """
    specifiers: list[str] = []
    for pattern in _SCAN_PATTERNS:
        specifiers.extend(match.group("import_path") for match in pattern.finditer(source))
    return specifiers


def parse_dependencies(source: str, parent: ImportResourcePath | str) -> list[ImportResourcePath]:
    """Extract and classify every import specifier in source text.

    Args:
        source: Source text to scan.
        parent: Directory of a top-level file, or the resolved path of the
            declaration file the source was fetched from.

    Returns:
        One resource path per extracted specifier, in scan order.
    """
    specifiers = extract_specifiers(source)
    logger.debug(f"Extracted {len(specifiers)} specifier(s): {specifiers}")
    return [resolve_path(specifier, parent) for specifier in specifiers]


def resolve_path(specifier: str, parent: ImportResourcePath | str) -> ImportResourcePath:
    """Classify one specifier against the context it was found in.

    Args:
        specifier: Raw import specifier.
        parent: Directory string for top-level files, or a resolved
            ``RelativeInPackagePath`` when inside a package.

    Returns:
        The classified resource path.

    Raises:
        ResolutionInvariantError: If parent is a package or plain relative
            path, which recursion never passes.
    """
    node_import = _NODE_MODULE_PATTERN.match(specifier)
    if node_import:
        return RelativeInPackagePath(
            package_name=NODE_TYPES_PACKAGE,
            source_path="",
            import_path=f"{node_import.group('name')}.d.ts",
        )

    if isinstance(parent, str):
        if specifier.startswith("."):
            return RelativePath(import_path=specifier, source_path=parent)
        return _package_path(specifier)

    if isinstance(parent, RelativeInPackagePath):
        if specifier.startswith("."):
            return RelativeInPackagePath(
                package_name=parent.package_name,
                source_path=join_path(parent.source_path, parent.import_path),
                import_path=specifier,
            )
        # Bare imports inside a package always start a fresh package lookup
        return _package_path(specifier)

    if isinstance(parent, (PackagePath, RelativePath)):
        raise ResolutionInvariantError(
            f"Cannot resolve '{specifier}' relative to a {parent.kind} parent: {parent!r}"
        )

    raise TypeError(f"Unsupported parent: {parent!r}")


def _package_path(specifier: str) -> PackagePath:
    """Split a bare or scoped specifier into package name and sub-path."""
    segments = specifier.split("/")
    if specifier.startswith("@"):
        return PackagePath(package_name="/".join(segments[:2]), import_path="/".join(segments[2:]))
    return PackagePath(package_name=segments[0], import_path="/".join(segments[1:]))
