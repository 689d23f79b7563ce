"""Progress updates emitted while resolving declarations.

Stable surface for callers that show resolution progress.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from auto_typings.options import Options

logger = logging.getLogger(__name__)

# Editor lifecycle
CODE_CHANGED = "CodeChanged"
RESOLVE_NEW_IMPORTS = "ResolveNewImports"

# Lookups
LOOKED_UP_TYPE_FILE = "LookedUpTypeFile"
ATTEMPTED_LOOK_UP_FILE = "AttemptedLookUpFile"
LOOKED_UP_PACKAGE = "LookedUpPackage"

# Cache
LOADED_FROM_CACHE = "LoadedFromCache"
STORED_TO_CACHE = "StoredToCache"

ALL_UPDATES = [
    CODE_CHANGED,
    RESOLVE_NEW_IMPORTS,
    LOOKED_UP_TYPE_FILE,
    ATTEMPTED_LOOK_UP_FILE,
    LOOKED_UP_PACKAGE,
    LOADED_FROM_CACHE,
    STORED_TO_CACHE,
]


@dataclass
class ProgressUpdate:
    """One progress update and its payload."""

    type: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        """Human-readable one-line description."""
        data = self.data
        if self.type == CODE_CHANGED:
            return "Changes detected"
        if self.type == RESOLVE_NEW_IMPORTS:
            return "Resolving source file imports"
        if self.type == LOOKED_UP_TYPE_FILE:
            verb = "Successfully looked up" if data.get("success") else "Could not find"
            return f"{verb} type file {data.get('path')}"
        if self.type == ATTEMPTED_LOOK_UP_FILE:
            verb = "Found" if data.get("success") else "Missed"
            return f"{verb} {data.get('path')}"
        if self.type == LOOKED_UP_PACKAGE:
            if not data.get("success"):
                return f"Could not resolve types for package {data.get('package')}"
            source = " from DefinitelyTyped" if data.get("definitely_typed") else ""
            return f"Resolved types for package {data.get('package')}{source}"
        if self.type == LOADED_FROM_CACHE:
            return f"Loaded {data.get('import_path')} from cache"
        if self.type == STORED_TO_CACHE:
            return f"Stored {data.get('import_path')} to cache"
        return self.type


def invoke_update(options: Options, update_type: str, **data: Any) -> ProgressUpdate:
    """Log an update and hand it to the configured on_update callback.

    Args:
        options: Options carrying the optional on_update callback.
        update_type: One of the update constants in this module.
        **data: Update payload.

    Returns:
        The emitted update.
    """
    update = ProgressUpdate(type=update_type, data=data)
    logger.debug(f"{update.type}: {update.message}")
    if options.on_update is not None:
        options.on_update(update)
    return update
