"""Keep a .docx package consistent while media is added and the document is edited."""

from .document import MAIN_DOCUMENT_PATHS, PackageDocument
from .error_handling import (
    ContentTypeConflictError,
    MalformedPackageError,
    MalformedPartError,
    PackageClosedError,
    PackageError,
    UnsupportedMimeTypeError,
)
from .ooxml.archive import ZipArchive
from .ooxml.pack import pack_document

__all__ = [
    "MAIN_DOCUMENT_PATHS",
    "ContentTypeConflictError",
    "MalformedPackageError",
    "MalformedPartError",
    "PackageClosedError",
    "PackageDocument",
    "PackageError",
    "UnsupportedMimeTypeError",
    "ZipArchive",
    "pack_document",
]
