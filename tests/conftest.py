"""
Pytest configuration and shared package fixtures.
"""

import base64
import io
import logging
import sys
import zipfile

import pytest

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CT_NS = "http://schemas.openxmlformats.org/package/2006/content-types"

XML_DECL = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

DOCUMENT_XML = (
    f'{XML_DECL}<w:document xmlns:w="{W_NS}" xmlns:r="{R_NS}"><w:body>'
    "<w:p><w:r><w:t>Hello</w:t></w:r><w:r><w:t xml:space=\"preserve\"> world</w:t></w:r></w:p>"
    f'<w:p><w:r><w:drawing><a:blip xmlns:a="{A_NS}" r:embed="rId3"/></w:drawing></w:r></w:p>'
    "</w:body></w:document>"
)

EMPTY_PARAGRAPH_XML = (
    f'{XML_DECL}<w:document xmlns:w="{W_NS}" xmlns:r="{R_NS}"><w:body><w:p/></w:body></w:document>'
)

CONTENT_TYPES_XML = (
    f'{XML_DECL}<Types xmlns="{CT_NS}">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Default Extension="png" ContentType="image/png"/>'
    '<Override PartName="/word/document.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    "</Types>"
)

PACKAGE_RELS_XML = (
    f'{XML_DECL}<Relationships xmlns="{RELS_NS}">'
    f'<Relationship Id="rId1" Type="{R_NS}/officeDocument" Target="word/document.xml"/>'
    "</Relationships>"
)

DOCUMENT_RELS_XML = (
    f'{XML_DECL}<Relationships xmlns="{RELS_NS}">'
    f'<Relationship Id="rId1" Type="{R_NS}/styles" Target="styles.xml"/>'
    f'<Relationship Id="rId3" Type="{R_NS}/image" Target="media/image1.png"/>'
    "</Relationships>"
)

STYLES_XML = f'{XML_DECL}<w:styles xmlns:w="{W_NS}"/>'


def build_zip(entries):
    """Zip a mapping of entry name -> str/bytes into package bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def full_package_entries():
    return {
        "[Content_Types].xml": CONTENT_TYPES_XML,
        "_rels/.rels": PACKAGE_RELS_XML,
        "word/document.xml": DOCUMENT_XML,
        "word/_rels/document.xml.rels": DOCUMENT_RELS_XML,
        "word/styles.xml": STYLES_XML,
        "word/media/image1.png": PNG_BYTES,
    }


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep test output quiet: console-only logging at WARNING."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir(tmp_path):
    """Directory for files written by a test."""
    return tmp_path


@pytest.fixture
def package_entries():
    """Entries of a small but complete .docx package."""
    return full_package_entries()


@pytest.fixture
def package_bytes(package_entries):
    return build_zip(package_entries)


@pytest.fixture
def minimal_package_bytes():
    """A package whose only entry is word/document.xml with an empty paragraph."""
    return build_zip({"word/document.xml": EMPTY_PARAGRAPH_XML})


@pytest.fixture
def make_archive():
    """Factory building a ZipArchive from entry overrides on top of the full package."""
    from docx_package.ooxml.archive import ZipArchive

    def _make(extra=None, drop=(), base=None):
        entries = dict(full_package_entries() if base is None else base)
        for name in drop:
            entries.pop(name, None)
        for name, content in (extra or {}).items():
            entries[name] = content
        return ZipArchive.from_bytes(build_zip(entries))

    return _make
