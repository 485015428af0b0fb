#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Lightweight XML helpers for OOXML parts held in an archive.
"""

from __future__ import annotations

from typing import Dict, List
from xml.dom import Node
from xml.dom.minidom import Element
from xml.parsers.expat import ExpatError

from defusedxml import DefusedXmlException, minidom

from .error_handling import MalformedPartError

_TEXT_NODE_TYPES = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)


def parse_xml(data, part_name: str = "<xml>"):
    """Parse XML bytes or text into a minidom document."""
    try:
        return minidom.parseString(data)
    except (ExpatError, DefusedXmlException) as exc:
        raise MalformedPartError(part_name, str(exc)) from exc


def serialize_xml(dom) -> bytes:
    return dom.toxml(encoding="UTF-8", standalone=True)


def text_content(node) -> str:
    """Concatenate every text descendant of ``node`` in document order."""
    if node.nodeType in _TEXT_NODE_TYPES:
        return node.data
    return "".join(text_content(child) for child in node.childNodes)


def extract_plain_text(data) -> str:
    """Flatten serialized XML into the plain text of its document element."""
    dom = parse_xml(data)
    return text_content(dom.documentElement)


def find_by_local_name(dom, local: str) -> List:
    matches = []
    for node in dom.getElementsByTagName("*"):
        if node.tagName.split(":")[-1] == local:
            matches.append(node)
    return matches


class XMLEditor:
    """Simple editor for one XML part stored in an archive.

    When the part does not exist yet, ``template`` (XML text) seeds a new tree.
    """

    def __init__(self, archive, part_name: str, template: str):
        self.archive = archive
        self.part_name = part_name
        if archive.has_entry(part_name):
            self.dom = parse_xml(archive.read_entry(part_name), part_name)
            self.is_new = False
        else:
            self.dom = parse_xml(template, part_name)
            self.is_new = True

    @property
    def root(self):
        return self.dom.documentElement

    def save(self) -> None:
        self.archive.write_entry(self.part_name, serialize_xml(self.dom))
        self.is_new = False

    def get_nodes(self, local: str) -> List[Element]:
        return find_by_local_name(self.dom, local)

    def append_element(self, tag: str, attrs: Dict[str, str], parent=None) -> Element:
        """Create ``tag`` in the parent's namespace and prefix, then append it (default: root)."""
        if parent is None:
            parent = self.root
        qname = f"{parent.prefix}:{tag}" if parent.prefix else tag
        element = self.dom.createElementNS(parent.namespaceURI, qname)
        for key, value in attrs.items():
            element.setAttribute(key, value)
        parent.appendChild(element)
        return element
