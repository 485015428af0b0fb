"""Validator exports for lightweight OOXML checks."""

from .base import BaseValidator
from .docx import DOCXSchemaValidator


def validate_archive(archive) -> list:
    """Run the DOCX checks on ``archive`` and return the findings."""
    validator = DOCXSchemaValidator(archive)
    validator.validate()
    return validator.errors


__all__ = [
    "BaseValidator",
    "DOCXSchemaValidator",
    "validate_archive",
]
