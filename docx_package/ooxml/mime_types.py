"""MIME type helpers: canonical extensions and relationship types for media."""

from __future__ import annotations

import mimetypes

from ..error_handling import UnsupportedMimeTypeError

OFFICE_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

RELTYPE_IMAGE = f"{OFFICE_REL_NS}/image"
RELTYPE_AUDIO = f"{OFFICE_REL_NS}/audio"
RELTYPE_VIDEO = f"{OFFICE_REL_NS}/video"
RELTYPE_PACKAGE = f"{OFFICE_REL_NS}/package"

# Office expects these spellings, which differ from what mimetypes may return.
_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/svg+xml": "svg",
    "image/x-emf": "emf",
    "image/x-wmf": "wmf",
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "video/mp4": "mp4",
    "application/pdf": "pdf",
}


def normalize_mime_type(mime_type: str) -> str:
    """Lower-case a MIME type and drop parameters such as ``; charset=...``."""
    return mime_type.split(";", 1)[0].strip().lower()


def extension_for(mime_type: str) -> str:
    """Return the extension (no dot) used when storing content of ``mime_type``."""
    normalized = normalize_mime_type(mime_type or "")
    if normalized in _EXTENSIONS:
        return _EXTENSIONS[normalized]

    guessed = mimetypes.guess_extension(normalized) if normalized else None
    if not guessed:
        raise UnsupportedMimeTypeError(mime_type)
    return guessed.lstrip(".").lower()


def relationship_type_for(mime_type: str) -> str:
    major = normalize_mime_type(mime_type).split("/", 1)[0]
    if major == "image":
        return RELTYPE_IMAGE
    if major == "audio":
        return RELTYPE_AUDIO
    if major == "video":
        return RELTYPE_VIDEO
    return RELTYPE_PACKAGE
