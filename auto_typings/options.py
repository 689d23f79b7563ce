"""Configuration model for auto-typings.

Uses Pydantic for validation, so settings read from YAML and options passed
in code go through the same checks.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from auto_typings.progress import ProgressUpdate


class Options(BaseModel):
    """Options recognized by the resolver and the editor session."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    file_root_path: str = Field(
        default="inmemory://model/",
        description="URI prefix under which injected declaration files are registered",
    )
    only_specified_packages: bool = Field(
        default=False,
        description="Only resolve packages listed in versions; others are skipped silently",
    )
    preload_packages: bool = Field(
        default=False,
        description="Resolve the full declared surface of packages instead of only imported sub-paths",
    )
    share_cache: bool = Field(
        default=False,
        description="Use the cache registry's shared cache instead of a private one",
    )
    skip_refresh_after_resolve: bool = Field(
        default=False,
        description="Do not refresh the editor after new declarations were injected",
    )
    debounce_duration: float = Field(
        default=4.0,
        description="Seconds to wait after the last edit before resolving; <= 0 resolves immediately",
    )
    file_recursion_depth: int = Field(default=10, description="Same-package relative import depth")
    package_recursion_depth: int = Field(default=3, description="Package boundary crossing depth")
    versions: dict[str, str] | None = Field(
        default=None, description="Pinned versions by package name"
    )
    on_error: Callable[[str], Any] | None = Field(default=None, exclude=True)
    on_update: Callable[[ProgressUpdate], Any] | None = Field(default=None, exclude=True)
    on_update_versions: Callable[[dict[str, str]], Any] | None = Field(default=None, exclude=True)
