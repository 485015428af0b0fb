"""OOXML package parts: archive, content types, relationships and media."""

from .archive import ZipArchive
from .content_types import ContentTypeRegistry
from .media import MediaStore
from .rels import Relationship, RelationshipManifest

__all__ = [
    "ContentTypeRegistry",
    "MediaStore",
    "Relationship",
    "RelationshipManifest",
    "ZipArchive",
]
