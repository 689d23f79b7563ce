"""Resource path model: how to find the target of one import specifier.

Each parsed specifier becomes exactly one of three variants, discriminated
by ``kind``. Values are frozen; they are created per parse, consumed once by
the resolver and then discarded.
"""

from __future__ import annotations

from typing import Annotated
from typing import Literal
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import TypeAdapter

from auto_typings.paths import join_path


class PackagePath(BaseModel):
    """Bare or scoped specifier naming an installable package."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["package"] = "package"
    package_name: str = Field(..., min_length=1, description="Package name, including @scope/ if scoped")
    import_path: str = Field(default="", description="Sub-path requested within the package")


class RelativePath(BaseModel):
    """Relative specifier resolved against a directory, outside any package."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["relative"] = "relative"
    import_path: str
    source_path: str = Field(..., description="Directory of the file containing the specifier")


class RelativeInPackagePath(BaseModel):
    """Relative specifier found inside a resolved package's declaration tree."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["relative-in-package"] = "relative-in-package"
    package_name: str = Field(..., min_length=1)
    source_path: str = Field(default="", description="Path of the containing file within the package")
    import_path: str


ImportResourcePath = Annotated[
    Union[PackagePath, RelativePath, RelativeInPackagePath],
    Field(discriminator="kind"),
]

import_resource_path_adapter: TypeAdapter[ImportResourcePath] = TypeAdapter(ImportResourcePath)


def canonical_key(path: ImportResourcePath, version: str | None = None) -> str:
    """Deterministic lookup key used for per-pass deduplication.

    Args:
        path: Resource path to key.
        version: Pinned version of the path's package, if any.

    Returns:
        ``name[@version]/import_path`` for packages, the normalized joined
        path for relative paths, and the normalized joined path prefixed
        with the package for relative paths inside a package.
    """
    if isinstance(path, PackagePath):
        return f"{_versioned(path.package_name, version)}/{path.import_path}"
    if isinstance(path, RelativePath):
        return join_path(path.source_path, path.import_path)
    if isinstance(path, RelativeInPackagePath):
        return f"{_versioned(path.package_name, version)}/{join_path(path.source_path, path.import_path)}"
    raise TypeError(f"Not an import resource path: {path!r}")


def _versioned(package_name: str, version: str | None) -> str:
    return f"{package_name}@{version}" if version else package_name
