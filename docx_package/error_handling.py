#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error types and issue formatting for DOCX package handling.

Every failure raised by this library derives from :class:`PackageError` and
propagates to the caller of the public operation that triggered it. Nothing is
retried internally and nothing is downgraded to a warning.
"""

from typing import Dict, List, Optional


# ==================== Exceptions ====================

class PackageError(Exception):
    """Base class for package consistency errors."""
    pass


class MalformedPackageError(PackageError):
    """The archive is not a usable document package."""

    def __init__(self, kind: str = "docx", reason: Optional[str] = None):
        self.kind = kind
        self.reason = reason
        message = f"Malformed {kind} package"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedPartError(PackageError):
    """An XML part of the package could not be parsed."""

    def __init__(self, part_name: str, reason: Optional[str] = None):
        self.part_name = part_name
        self.reason = reason
        message = f"Malformed XML part: {part_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ContentTypeConflictError(PackageError):
    """A content type disagrees with the one already declared for the same key."""

    def __init__(self, key: str, existing: str, requested: str):
        self.key = key
        self.existing = existing
        self.requested = requested
        super().__init__(
            f"Content type conflict for '{key}': declared as '{existing}', "
            f"requested '{requested}'"
        )


class UnsupportedMimeTypeError(PackageError, ValueError):
    """No file extension can be derived for a MIME type."""

    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(f"Unsupported MIME type: {mime_type!r}")


class PackageClosedError(PackageError):
    """The package was already exported and can no longer be changed."""
    pass


# ==================== Issue formatting ====================

def format_issue_summary(issues: List[Dict]) -> str:
    """
    Format validation issues as readable text.

    Args:
        issues: list of issues, each with ``type``, ``location`` and ``message``
            keys and an optional ``suggestion``.

    Returns:
        str: the formatted summary

    Example:
        >>> issues = [
        ...     {"type": "missing-target", "location": "word/_rels/document.xml.rels",
        ...      "message": "rId7 points at word/media/media3.png"},
        ... ]
        >>> print(format_issue_summary(issues))
    """
    if not issues:
        return "✓ No issues"

    lines = [f"✗ Found {len(issues)} issue(s):"]

    for i, issue in enumerate(issues, 1):
        lines.append(f"\n{i}. {issue.get('type', 'unknown')}")
        lines.append(f"   Location: {issue.get('location', 'N/A')}")
        lines.append(f"   Reason: {issue.get('message', 'N/A')}")

        if 'suggestion' in issue:
            lines.append(f"   Suggestion: {issue['suggestion']}")

    return '\n'.join(lines)
