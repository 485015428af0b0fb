"""Lightweight validation helpers for Office packages held in an archive."""

from __future__ import annotations

from typing import Dict, Iterable, List

from ...error_handling import MalformedPartError, format_issue_summary
from ...logger import get_logger
from ...utilities import parse_xml

LOGGER = get_logger(__name__)


class BaseValidator:
    """Structural checks: required entries exist and every XML part parses.

    Subclasses add cross-part checks in :meth:`_check_consistency`. Findings
    are collected in ``errors`` as dicts with ``type``, ``location`` and
    ``message`` keys.
    """

    required_files: Iterable[str] = ()

    def __init__(self, archive, verbose: bool = False):
        self.archive = archive
        self.verbose = verbose
        self.errors: List[Dict[str, str]] = []
        self._doms: Dict[str, object] = {}

    def validate(self) -> bool:
        self.errors = []
        self._doms = {}
        if self._check_required_files(self.required_files) and self._parse_xml_files():
            self._check_consistency()

        if self.errors and self.verbose:
            LOGGER.warning("%s", format_issue_summary(self.errors))
        return not self.errors

    def _error(self, issue_type: str, location: str, message: str) -> None:
        self.errors.append({"type": issue_type, "location": location, "message": message})

    def _check_required_files(self, rel_paths: Iterable[str]) -> bool:
        missing = [p for p in rel_paths if not self.archive.has_entry(p)]
        for name in missing:
            self._error("missing-part", name, "required part is missing")
        return not missing

    def _parse_xml_files(self) -> bool:
        ok = True
        for name in sorted(self.archive.list_entry_names()):
            if not name.endswith((".xml", ".rels")):
                continue
            try:
                self._doms[name] = parse_xml(self.archive.read_entry(name), name)
            except MalformedPartError as exc:
                self._error("invalid-xml", name, exc.reason or str(exc))
                ok = False
        return ok

    def _check_consistency(self) -> None:
        pass
