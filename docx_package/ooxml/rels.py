"""Relationship parts (``_rels/*.rels``) owned by a single package part."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from ..logger import get_logger
from ..utilities import XMLEditor

LOGGER = get_logger(__name__)

RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
TARGET_MODE_EXTERNAL = "External"
RID_PREFIX = "rId"

_NEW_RELS_XML = (
    "<?xml version=\"1.0\" encoding=\"UTF-8\" standalone=\"yes\"?>"
    f"<Relationships xmlns=\"{RELS_NS}\"/>"
)


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    r_id: str
    rel_type: str
    target: str
    target_mode: Optional[str] = None
    resolved_target: Optional[str] = None

    @property
    def is_external(self) -> bool:
        return self.target_mode == TARGET_MODE_EXTERNAL


def rels_path_for(part_name: str) -> str:
    """Return the relationship part of ``part_name`` (``""`` is the package root)."""
    folder, name = posixpath.split(part_name.lstrip("/"))
    return posixpath.join(folder, "_rels", f"{name}.rels")


def source_part_for(rels_path: str) -> str:
    """Inverse of :func:`rels_path_for`: ``word/_rels/document.xml.rels`` -> ``word/document.xml``."""
    rels_dir, name = posixpath.split(rels_path.lstrip("/"))
    folder = posixpath.dirname(rels_dir)
    source = name[: -len(".rels")] if name.endswith(".rels") else name
    return posixpath.join(folder, source) if source else ""


def resolve_target(part_name: str, target: str) -> str:
    """Turn a target written relative to ``part_name`` into a package path."""
    if target.startswith("/"):
        return posixpath.normpath(target).lstrip("/")
    base_dir = posixpath.dirname(part_name.lstrip("/"))
    return posixpath.normpath(posixpath.join(base_dir, target))


def relative_target(part_name: str, package_path: str) -> str:
    """Express ``package_path`` relative to the folder of ``part_name``."""
    base_dir = posixpath.dirname(part_name.lstrip("/")) or "."
    return posixpath.relpath(package_path.lstrip("/"), base_dir)


class RelationshipManifest:
    """Relationships of one owning part, loaded lazily from its ``.rels`` part."""

    def __init__(self, part_name: str, archive):
        self.part_name = part_name.lstrip("/")
        self.rels_path = rels_path_for(part_name)
        self._archive = archive
        self._editor: Optional[XMLEditor] = None
        self._relationships: Dict[str, Relationship] = {}

    def _load(self) -> XMLEditor:
        if self._editor is not None:
            return self._editor

        editor = XMLEditor(self._archive, self.rels_path, template=_NEW_RELS_XML)
        for node in editor.get_nodes("Relationship"):
            r_id = node.getAttribute("Id")
            if not r_id:
                continue
            target = node.getAttribute("Target")
            target_mode = node.getAttribute("TargetMode") or None
            if target_mode == TARGET_MODE_EXTERNAL:
                resolved = target
            else:
                resolved = resolve_target(self.part_name, target) if target else None
            self._relationships[r_id] = Relationship(
                r_id=r_id,
                rel_type=node.getAttribute("Type"),
                target=target,
                target_mode=target_mode,
                resolved_target=resolved,
            )

        LOGGER.debug("Loaded %d relationships from %s", len(self._relationships), self.rels_path)
        self._editor = editor
        return editor

    def _next_free_id(self) -> str:
        used = set(self._relationships)
        number = 1
        while f"{RID_PREFIX}{number}" in used:
            number += 1
        return f"{RID_PREFIX}{number}"

    def next_id(self) -> str:
        """Return the id the next ``add`` call would allocate."""
        self._load()
        return self._next_free_id()

    def add(self, target_path: str, rel_type: str, target_mode: Optional[str] = None) -> str:
        """
        Register a relationship and return its freshly allocated id.

        Internal targets are given as package paths (``word/media/media1.png``)
        and stored relative to the owning part. External targets are stored
        verbatim.
        """
        editor = self._load()
        r_id = self._next_free_id()

        if target_mode == TARGET_MODE_EXTERNAL:
            target = resolved = target_path
        else:
            target = relative_target(self.part_name, target_path)
            resolved = resolve_target(self.part_name, target)

        attrs = {"Id": r_id, "Type": rel_type, "Target": target}
        if target_mode:
            attrs["TargetMode"] = target_mode
        editor.append_element("Relationship", attrs)

        self._relationships[r_id] = Relationship(
            r_id=r_id,
            rel_type=rel_type,
            target=target,
            target_mode=target_mode,
            resolved_target=resolved,
        )
        LOGGER.debug("Added %s -> %s in %s", r_id, target, self.rels_path)
        return r_id

    def get(self, r_id: str) -> Optional[Relationship]:
        self._load()
        return self._relationships.get(r_id)

    def find(self, target_path: str, rel_type: Optional[str] = None) -> Optional[str]:
        """Return the id of the first relationship pointing at ``target_path``."""
        self._load()
        wanted = target_path.lstrip("/")
        for rel in self._relationships.values():
            if rel.resolved_target != wanted:
                continue
            if rel_type is None or rel.rel_type == rel_type:
                return rel.r_id
        return None

    def ids(self) -> List[str]:
        self._load()
        return list(self._relationships)

    def save(self) -> None:
        self._load().save()
        LOGGER.debug("Saved %d relationships to %s", len(self._relationships), self.rels_path)

    def __iter__(self) -> Iterator[Relationship]:
        self._load()
        return iter(list(self._relationships.values()))

    def __len__(self) -> int:
        self._load()
        return len(self._relationships)
