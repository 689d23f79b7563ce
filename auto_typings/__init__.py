"""auto-typings - declarations for every module a piece of source imports.

Given source text, auto-typings extracts import specifiers, classifies how
each one is found, fetches declaration files from a package CDN (unpkg by
default) and injects them into a type-checking host, recursing into the
fetched declarations under a two-axis depth budget.

Philosophy: the engine is mechanism only. Where declarations come from,
where they are cached and where they end up are pluggable protocols.
"""

from __future__ import annotations

# Cache
from auto_typings.cache.disk import DiskCache
from auto_typings.cache.protocol import SourceCacheProtocol
from auto_typings.cache.registry import CacheRegistry
from auto_typings.cache.simple import SimpleCache

# Configuration
from auto_typings.config import SettingsPaths
from auto_typings.config import load_options
from auto_typings.config import load_settings
from auto_typings.options import Options

# Core
from auto_typings.debounce import Debouncer
from auto_typings.depth import RecursionBudget
from auto_typings.resolver import ImportResolver
from auto_typings.resolver import ResolutionContext
from auto_typings.session import AutoTypings

# Editors
from auto_typings.editor.file import FileSurface
from auto_typings.editor.protocol import EditorSurfaceProtocol
from auto_typings.editor.protocol import Subscription

# Exceptions
from auto_typings.exceptions import ConfigError
from auto_typings.exceptions import ResolutionInvariantError
from auto_typings.exceptions import SourceFetchError
from auto_typings.exceptions import TypingsError

# Hosts
from auto_typings.host.directory import DirectoryHost
from auto_typings.host.memory import InMemoryHost
from auto_typings.host.protocol import TypeCheckingHostProtocol

# Imports
from auto_typings.imports.models import ImportResourcePath
from auto_typings.imports.models import PackagePath
from auto_typings.imports.models import RelativeInPackagePath
from auto_typings.imports.models import RelativePath
from auto_typings.imports.models import canonical_key
from auto_typings.imports.parser import parse_dependencies
from auto_typings.imports.parser import resolve_path

# Progress
from auto_typings.progress import ProgressUpdate

# Sources
from auto_typings.sources.protocol import SourceResolverProtocol
from auto_typings.sources.unpkg import UnpkgSourceResolver

__all__ = [
    # Core
    "AutoTypings",
    "ImportResolver",
    "ResolutionContext",
    "RecursionBudget",
    "Debouncer",
    # Configuration
    "Options",
    "SettingsPaths",
    "load_options",
    "load_settings",
    # Exceptions
    "TypingsError",
    "SourceFetchError",
    "ConfigError",
    "ResolutionInvariantError",
    # Protocols
    "SourceCacheProtocol",
    "SourceResolverProtocol",
    "TypeCheckingHostProtocol",
    "EditorSurfaceProtocol",
    # Reference implementations
    "SimpleCache",
    "DiskCache",
    "CacheRegistry",
    "UnpkgSourceResolver",
    "InMemoryHost",
    "DirectoryHost",
    "FileSurface",
    "Subscription",
    # Imports
    "ImportResourcePath",
    "PackagePath",
    "RelativePath",
    "RelativeInPackagePath",
    "canonical_key",
    "parse_dependencies",
    "resolve_path",
    # Progress
    "ProgressUpdate",
]
