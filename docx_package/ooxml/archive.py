#!/usr/bin/env python3
"""
In-memory zip archive backing a DOCX package.
"""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Dict, Optional, Set

from ..error_handling import MalformedPackageError
from ..logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_COMPRESSION_LEVEL = 6


class ZipArchive:
    """Named binary entries loaded from, and serialized back to, a zip container."""

    def __init__(self, entries: Optional[Dict[str, bytes]] = None):
        # serialize_all writes entries in insertion order
        self._entries: Dict[str, bytes] = dict(entries or {})

    @classmethod
    def from_bytes(cls, data) -> "ZipArchive":
        try:
            with zipfile.ZipFile(io.BytesIO(bytes(data)), "r") as archive:
                entries = {
                    info.filename: archive.read(info)
                    for info in archive.infolist()
                    if not info.is_dir()
                }
        except zipfile.BadZipFile as exc:
            raise MalformedPackageError("zip", str(exc)) from exc

        LOGGER.debug("Loaded %d entries from archive", len(entries))
        return cls(entries)

    @classmethod
    def from_file(cls, input_file: str | Path) -> "ZipArchive":
        input_path = Path(input_file)
        if not input_path.is_file():
            raise FileNotFoundError(f"Input file not found: {input_file}")
        return cls.from_bytes(input_path.read_bytes())

    def has_entry(self, name: str) -> bool:
        return name in self._entries

    def read_entry(self, name: str) -> bytes:
        try:
            return self._entries[name]
        except KeyError:
            raise KeyError(f"Archive entry not found: {name}") from None

    def write_entry(self, name: str, data) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._entries[name] = bytes(data)

    def list_entry_names(self) -> Set[str]:
        return set(self._entries)

    def serialize_all(self, compression_level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
        """Write every entry into a new DEFLATE-compressed zip and return its bytes."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(
            buffer, "w", zipfile.ZIP_DEFLATED, compresslevel=compression_level
        ) as archive:
            for name, data in self._entries.items():
                archive.writestr(name, data)
        return buffer.getvalue()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries
