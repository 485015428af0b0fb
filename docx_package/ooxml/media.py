"""Binary media parts stored under ``word/media``."""
from __future__ import annotations

import posixpath
from typing import List

from ..logger import get_logger
from .mime_types import extension_for

LOGGER = get_logger(__name__)

MEDIA_DIR = "word/media"


class MediaStore:
    """Writes media payloads into the archive under collision-free names."""

    MEDIA_DIR = MEDIA_DIR
    BASE_NAME = "media"

    def __init__(self, archive):
        self._archive = archive

    def add(self, content: bytes, mime_type: str) -> str:
        """Store ``content`` and return its package path, e.g. ``word/media/media1.png``."""
        extension = extension_for(mime_type)
        # OPC part names compare case-insensitively
        taken = {name.lower() for name in self._archive.list_entry_names()}

        number = 1
        while True:
            candidate = posixpath.join(self.MEDIA_DIR, f"{self.BASE_NAME}{number}.{extension}")
            if candidate.lower() not in taken:
                break
            number += 1

        self._archive.write_entry(candidate, content)
        LOGGER.debug("Stored %d bytes of %s at %s", len(content), mime_type, candidate)
        return candidate

    def paths(self) -> List[str]:
        prefix = self.MEDIA_DIR + "/"
        return sorted(name for name in self._archive.list_entry_names() if name.startswith(prefix))

    def __len__(self) -> int:
        return len(self.paths())
