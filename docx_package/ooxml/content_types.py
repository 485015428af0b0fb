#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Package-wide content type declarations (``[Content_Types].xml``).
"""

from __future__ import annotations

import posixpath
from typing import Dict, Optional

from ..error_handling import ContentTypeConflictError
from ..logger import get_logger
from ..utilities import XMLEditor
from .mime_types import extension_for, normalize_mime_type

LOGGER = get_logger(__name__)

CONTENT_TYPES_PATH = "[Content_Types].xml"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"

RELS_CONTENT_TYPE = "application/vnd.openxmlformats-package.relationships+xml"
XML_CONTENT_TYPE = "application/xml"
DOCUMENT_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
)

_NEW_TYPES_XML = (
    "<?xml version=\"1.0\" encoding=\"UTF-8\" standalone=\"yes\"?>"
    f"<Types xmlns=\"{CONTENT_TYPES_NS}\">"
    f"<Default Extension=\"rels\" ContentType=\"{RELS_CONTENT_TYPE}\"/>"
    f"<Default Extension=\"xml\" ContentType=\"{XML_CONTENT_TYPE}\"/>"
    "</Types>"
)


def normalize_part_name(part_name: str) -> str:
    """Return the case-folded ``/``-rooted form used to compare part names."""
    return "/" + part_name.lstrip("/").lower()


def _extension_of(part_name: str) -> str:
    # not posixpath.splitext: "_rels/.rels" has the extension "rels"
    name = posixpath.basename(part_name)
    return name.rsplit(".", 1)[1].lower() if "." in name else ""


class ContentTypeRegistry:
    """Extension defaults and part overrides declared for the whole package.

    The part is read on first use. A package without ``[Content_Types].xml``
    starts from a fresh declaration holding the ``rels`` and ``xml`` defaults.
    """

    def __init__(self, archive):
        self._archive = archive
        self._editor: Optional[XMLEditor] = None
        self._defaults: Dict[str, str] = {}
        self._overrides: Dict[str, str] = {}

    def _load(self) -> XMLEditor:
        if self._editor is not None:
            return self._editor

        editor = XMLEditor(self._archive, CONTENT_TYPES_PATH, template=_NEW_TYPES_XML)
        for node in editor.get_nodes("Default"):
            extension = node.getAttribute("Extension").lower()
            if extension:
                self._defaults[extension] = node.getAttribute("ContentType")
        for node in editor.get_nodes("Override"):
            part_name = node.getAttribute("PartName")
            if part_name:
                self._overrides[normalize_part_name(part_name)] = node.getAttribute("ContentType")

        LOGGER.debug(
            "Loaded %s: %d defaults, %d overrides%s",
            CONTENT_TYPES_PATH,
            len(self._defaults),
            len(self._overrides),
            " (new part)" if editor.is_new else "",
        )
        self._editor = editor
        return editor

    def ensure_content_type(self, mime_type: str, extension: Optional[str] = None) -> bool:
        """
        Make sure an extension default exists for ``mime_type``.

        Args:
            mime_type: declared MIME type of the content
            extension: extension to declare; derived from ``mime_type`` when omitted

        Returns:
            bool: True if a new default was added, False if it was already declared

        Raises:
            ContentTypeConflictError: the extension is declared with another type
        """
        editor = self._load()
        extension = (extension or extension_for(mime_type)).lstrip(".").lower()
        requested = normalize_mime_type(mime_type)

        existing = self._defaults.get(extension)
        if existing is not None:
            if normalize_mime_type(existing) != requested:
                raise ContentTypeConflictError(extension, existing, requested)
            return False

        editor.append_element("Default", {"Extension": extension, "ContentType": requested})
        self._defaults[extension] = requested
        LOGGER.debug("Declared content type %s for .%s", requested, extension)
        return True

    def ensure_override(self, part_name: str, content_type: str) -> bool:
        """Make sure ``part_name`` carries an explicit content type override."""
        editor = self._load()
        key = normalize_part_name(part_name)

        existing = self._overrides.get(key)
        if existing is not None:
            if normalize_mime_type(existing) != normalize_mime_type(content_type):
                raise ContentTypeConflictError(key, existing, content_type)
            return False

        editor.append_element(
            "Override", {"PartName": "/" + part_name.lstrip("/"), "ContentType": content_type}
        )
        self._overrides[key] = content_type
        return True

    def has_override(self, part_name: str) -> bool:
        self._load()
        return normalize_part_name(part_name) in self._overrides

    def content_type_for(self, part_name: str) -> Optional[str]:
        """Resolve the declared type of a part: override first, then extension default."""
        self._load()
        override = self._overrides.get(normalize_part_name(part_name))
        if override is not None:
            return override
        return self._defaults.get(_extension_of(part_name))

    def defaults(self) -> Dict[str, str]:
        self._load()
        return dict(self._defaults)

    def overrides(self) -> Dict[str, str]:
        self._load()
        return dict(self._overrides)

    def save(self) -> None:
        self._load().save()
        LOGGER.debug("Saved %s", CONTENT_TYPES_PATH)

    def __len__(self) -> int:
        self._load()
        return len(self._defaults)
