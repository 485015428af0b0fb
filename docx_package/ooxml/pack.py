#!/usr/bin/env python3
"""
Write an exported package to a .docx file, optionally validating the result.
"""

from pathlib import Path

from ..error_handling import MalformedPackageError
from ..logger import get_logger
from .archive import ZipArchive
from .validation import DOCXSchemaValidator

LOGGER = get_logger(__name__)

DOC_SUFFIXES = (".docx", ".docm", ".dotx", ".dotm")


def pack_document(document, output_file, validate: bool = False) -> bool:
    """
    Export a document and write it to disk.

    Args:
        document: an open ``PackageDocument``; it is exported (and closed) here
        output_file: path of the .docx file to write
        validate: If True, re-open the written file and run consistency checks

    Returns:
        bool: True if successful, False if validation failed (the file is removed)
    """
    output_path = Path(output_file)
    if output_path.suffix.lower() not in DOC_SUFFIXES:
        raise ValueError(f"{output_file} must be a {', '.join(DOC_SUFFIXES)} file")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(document.export(bytes))
    LOGGER.info("Wrote %s", output_path)

    if validate and not validate_document(output_path):
        output_path.unlink(missing_ok=True)
        return False

    return True


def validate_document(doc_path: Path) -> bool:
    """Re-open a written package and run the DOCX consistency checks."""
    try:
        archive = ZipArchive.from_file(doc_path)
    except MalformedPackageError as exc:
        LOGGER.error("Validation error: %s", exc)
        return False

    return DOCXSchemaValidator(archive, verbose=True).validate()
