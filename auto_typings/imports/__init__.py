"""Import extraction and the resource path model."""

from .models import ImportResourcePath
from .models import PackagePath
from .models import RelativeInPackagePath
from .models import RelativePath
from .models import canonical_key
from .models import import_resource_path_adapter
from .parser import extract_specifiers
from .parser import parse_dependencies
from .parser import resolve_path

__all__ = [
    "ImportResourcePath",
    "PackagePath",
    "RelativePath",
    "RelativeInPackagePath",
    "canonical_key",
    "import_resource_path_adapter",
    "extract_specifiers",
    "parse_dependencies",
    "resolve_path",
]
