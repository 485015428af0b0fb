"""DOCX validation: structure, XML well-formedness and cross-part consistency."""

from __future__ import annotations

from typing import Iterable

from ...document import MAIN_DOCUMENT_PATHS
from ..content_types import CONTENT_TYPES_PATH, ContentTypeRegistry
from ..mime_types import OFFICE_REL_NS
from ..rels import RelationshipManifest, rels_path_for, source_part_for
from .base import BaseValidator


class DOCXSchemaValidator(BaseValidator):
    required_files = (CONTENT_TYPES_PATH,)

    def _check_required_files(self, rel_paths: Iterable[str]) -> bool:
        ok = super()._check_required_files(rel_paths)
        if not any(self.archive.has_entry(path) for path in MAIN_DOCUMENT_PATHS):
            self._error("missing-part", MAIN_DOCUMENT_PATHS[0], "no main document part")
            ok = False
        return ok

    def _check_consistency(self) -> None:
        names = self.archive.list_entry_names()
        self._check_relationship_targets(names)
        self._check_declared_content_types(names)
        self._check_document_references()

    def _check_relationship_targets(self, names) -> None:
        existing = {name.lower() for name in names}
        for rels_path in sorted(n for n in names if n.endswith(".rels")):
            manifest = RelationshipManifest(source_part_for(rels_path), self.archive)
            for rel in manifest:
                if rel.is_external or not rel.resolved_target:
                    continue
                if rel.resolved_target.lower() not in existing:
                    self._error(
                        "missing-target",
                        rels_path,
                        f"{rel.r_id} points at missing part {rel.resolved_target}",
                    )

    def _check_declared_content_types(self, names) -> None:
        registry = ContentTypeRegistry(self.archive)
        for name in sorted(names):
            if name == CONTENT_TYPES_PATH:
                continue
            if registry.content_type_for(name) is None:
                self._error("undeclared-content-type", name, "no Default or Override declares this part")

    def _check_document_references(self) -> None:
        document_path = next(p for p in MAIN_DOCUMENT_PATHS if self.archive.has_entry(p))
        manifest = RelationshipManifest(document_path, self.archive)
        known = set(manifest.ids())

        dom = self._doms[document_path]
        for node in dom.getElementsByTagName("*"):
            for (namespace, local), value in node.attributes.itemsNS():
                if namespace == OFFICE_REL_NS and value not in known:
                    self._error(
                        "dangling-reference",
                        document_path,
                        f"r:{local}=\"{value}\" has no entry in {rels_path_for(document_path)}",
                    )
