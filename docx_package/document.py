#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DOCX package document: the main document part plus the parts that must stay
consistent with it (relationships, media and content types).
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

from .error_handling import MalformedPackageError, PackageClosedError
from .logger import get_logger
from .ooxml.archive import DEFAULT_COMPRESSION_LEVEL, ZipArchive
from .ooxml.content_types import DOCUMENT_CONTENT_TYPE, ContentTypeRegistry
from .ooxml.media import MediaStore
from .ooxml.mime_types import relationship_type_for
from .ooxml.rels import RelationshipManifest
from .utilities import extract_plain_text, parse_xml, serialize_xml

LOGGER = get_logger(__name__)

# word/document2.xml is written by some producers instead of word/document.xml
MAIN_DOCUMENT_PATHS = ("word/document.xml", "word/document2.xml")

OUTPUT_TYPES = (bytes, bytearray, memoryview, io.BytesIO)


class PackageDocument:
    """A single .docx package opened for media insertion and export."""

    COMPRESSION_LEVEL = DEFAULT_COMPRESSION_LEVEL

    def __init__(self, archive: ZipArchive):
        self.archive = archive
        self._document_path: Optional[str] = None
        self._document = None
        self._exported = False

        if not self.document_path:
            raise MalformedPackageError("docx", "no main document part")

        self._rels = RelationshipManifest(self.document_path, archive)
        self._media_files = MediaStore(archive)
        self._content_types = ContentTypeRegistry(archive)

    @classmethod
    def open(cls, source) -> "PackageDocument":
        """Open a package from a path, raw bytes or a binary file object."""
        if isinstance(source, (bytes, bytearray, memoryview)):
            archive = ZipArchive.from_bytes(source)
        elif isinstance(source, (str, Path)):
            archive = ZipArchive.from_file(source)
        elif hasattr(source, "read"):
            archive = ZipArchive.from_bytes(source.read())
        else:
            raise TypeError(f"Cannot open a package from {type(source).__name__}")
        return cls(archive)

    @property
    def document_path(self) -> Optional[str]:
        if self._document_path is None:
            for candidate in MAIN_DOCUMENT_PATHS:
                if self.archive.has_entry(candidate):
                    self._document_path = candidate
                    break
        return self._document_path

    @property
    def relationships(self) -> RelationshipManifest:
        return self._rels

    @property
    def content_types(self) -> ContentTypeRegistry:
        return self._content_types

    @property
    def media(self) -> MediaStore:
        return self._media_files

    # ------------------------------------------------------------------
    # Public API

    def get_document(self):
        """The minidom tree of the main document part, parsed once."""
        if self._document is None:
            data = self.archive.read_entry(self.document_path)
            self._document = parse_xml(data, self.document_path)
            LOGGER.debug("Parsed %s (%d bytes)", self.document_path, len(data))
        return self._document

    def get_document_text(self) -> str:
        """Plain text of the main document as currently held in memory."""
        xml = serialize_xml(self.get_document())
        return extract_plain_text(xml)

    def add_media(self, content: bytes, mime_type: str) -> str:
        """Add a media resource to the package and return the new relationship id."""
        self._check_open()

        media_path = self._media_files.add(content, mime_type)
        rel_id = self._rels.add(media_path, relationship_type_for(mime_type))
        self._content_types.ensure_content_type(mime_type)

        LOGGER.debug("Attached %s as %s", media_path, rel_id)
        return rel_id

    def export(self, output_type: type = bytes):
        """
        Save all pending changes and return the package as ``output_type``.

        Args:
            output_type: one of ``bytes``, ``bytearray``, ``memoryview`` or
                ``io.BytesIO``

        Returns:
            the zip container in the requested representation

        Raises:
            ValueError: unsupported ``output_type``
            PackageClosedError: the package was already exported
        """
        if output_type not in OUTPUT_TYPES:
            raise ValueError(f"Unsupported output type: {output_type!r}")
        self._check_open()

        self._save_changes()
        self._exported = True

        data = self.archive.serialize_all(compression_level=self.COMPRESSION_LEVEL)
        LOGGER.info("Exported %s package: %d entries, %d bytes", self.document_path, len(self.archive), len(data))
        return output_type(data)

    # ------------------------------------------------------------------
    # Internal helpers

    def _check_open(self) -> None:
        if self._exported:
            raise PackageClosedError("Package was already exported")

    def _save_changes(self) -> None:
        # main document first, the archive is serialized right after
        document = self.get_document()
        self.archive.write_entry(self.document_path, serialize_xml(document))

        if not self._content_types.has_override(self.document_path):
            self._content_types.ensure_override(self.document_path, DOCUMENT_CONTENT_TYPE)

        self._rels.save()
        self._content_types.save()
