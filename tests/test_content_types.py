"""Tests for [Content_Types].xml handling and MIME helpers."""

import pytest

from docx_package.error_handling import ContentTypeConflictError, UnsupportedMimeTypeError
from docx_package.ooxml.archive import ZipArchive
from docx_package.ooxml.content_types import (
    CONTENT_TYPES_PATH,
    DOCUMENT_CONTENT_TYPE,
    RELS_CONTENT_TYPE,
    ContentTypeRegistry,
)
from docx_package.ooxml.mime_types import (
    RELTYPE_AUDIO,
    RELTYPE_IMAGE,
    RELTYPE_PACKAGE,
    RELTYPE_VIDEO,
    extension_for,
    relationship_type_for,
)
from docx_package.utilities import find_by_local_name, parse_xml
from tests.conftest import CT_NS


class TestMimeTypes:
    @pytest.mark.parametrize(
        "mime_type, extension",
        [
            ("image/png", "png"),
            ("image/jpeg", "jpg"),
            ("IMAGE/GIF", "gif"),
            ("image/svg+xml", "svg"),
            ("image/png; charset=binary", "png"),
        ],
    )
    def test_extension_for(self, mime_type, extension):
        assert extension_for(mime_type) == extension

    def test_unknown_mime_type(self):
        with pytest.raises(UnsupportedMimeTypeError):
            extension_for("application/x-no-such-thing")
        with pytest.raises(ValueError):
            extension_for("")

    def test_relationship_type_for(self):
        assert relationship_type_for("image/png") == RELTYPE_IMAGE
        assert relationship_type_for("audio/mpeg") == RELTYPE_AUDIO
        assert relationship_type_for("video/mp4") == RELTYPE_VIDEO
        assert relationship_type_for("application/pdf") == RELTYPE_PACKAGE


class TestContentTypeRegistry:
    def test_missing_part_is_seeded(self):
        registry = ContentTypeRegistry(ZipArchive())

        assert registry.defaults() == {"rels": RELS_CONTENT_TYPE, "xml": "application/xml"}
        assert registry.overrides() == {}

    def test_loads_defaults_and_overrides(self, make_archive):
        registry = ContentTypeRegistry(make_archive())

        assert registry.defaults()["png"] == "image/png"
        assert registry.overrides() == {"/word/document.xml": DOCUMENT_CONTENT_TYPE}
        assert len(registry) == 3

    def test_ensure_adds_once(self, make_archive):
        registry = ContentTypeRegistry(make_archive())

        assert registry.ensure_content_type("image/jpeg") is True
        size = len(registry)
        assert registry.ensure_content_type("image/jpeg") is False
        assert len(registry) == size
        assert registry.defaults()["jpg"] == "image/jpeg"

    def test_ensure_existing_is_noop(self, make_archive):
        registry = ContentTypeRegistry(make_archive())

        assert registry.ensure_content_type("image/PNG") is False
        assert len(registry) == 3

    def test_ensure_with_explicit_extension(self):
        registry = ContentTypeRegistry(ZipArchive())

        assert registry.ensure_content_type("image/jpeg", extension=".JPEG") is True
        assert registry.defaults()["jpeg"] == "image/jpeg"

    def test_conflicting_type_is_reported(self, make_archive):
        registry = ContentTypeRegistry(make_archive())

        with pytest.raises(ContentTypeConflictError) as excinfo:
            registry.ensure_content_type("image/x-png", extension="png")

        error = excinfo.value
        assert (error.key, error.existing, error.requested) == ("png", "image/png", "image/x-png")
        assert registry.defaults()["png"] == "image/png"

    def test_override_takes_precedence(self, make_archive):
        registry = ContentTypeRegistry(make_archive())

        assert registry.content_type_for("word/document.xml") == DOCUMENT_CONTENT_TYPE
        assert registry.content_type_for("/WORD/Document.xml") == DOCUMENT_CONTENT_TYPE
        assert registry.content_type_for("word/styles.xml") == "application/xml"
        assert registry.content_type_for("word/media/image1.PNG") == "image/png"
        assert registry.content_type_for("word/media/clip.gif") is None

    def test_ensure_override(self):
        registry = ContentTypeRegistry(ZipArchive())

        assert registry.ensure_override("word/document2.xml", DOCUMENT_CONTENT_TYPE) is True
        assert registry.ensure_override("/word/document2.xml", DOCUMENT_CONTENT_TYPE) is False
        assert registry.has_override("word/document2.xml")
        with pytest.raises(ContentTypeConflictError):
            registry.ensure_override("word/document2.xml", "application/xml")

    def test_save_always_writes(self):
        archive = ZipArchive()
        registry = ContentTypeRegistry(archive)
        registry.ensure_content_type("image/png")
        registry.ensure_override("word/document.xml", DOCUMENT_CONTENT_TYPE)
        registry.save()

        dom = parse_xml(archive.read_entry(CONTENT_TYPES_PATH))
        assert dom.documentElement.namespaceURI == CT_NS
        defaults = {
            n.getAttribute("Extension"): n.getAttribute("ContentType")
            for n in find_by_local_name(dom, "Default")
        }
        assert defaults == {"rels": RELS_CONTENT_TYPE, "xml": "application/xml", "png": "image/png"}
        overrides = find_by_local_name(dom, "Override")
        assert [n.getAttribute("PartName") for n in overrides] == ["/word/document.xml"]

        reloaded = ContentTypeRegistry(archive)
        assert reloaded.content_type_for("word/media/media1.png") == "image/png"

    def test_prefixed_root_keeps_namespace(self):
        archive = ZipArchive({
            CONTENT_TYPES_PATH: (
                f'<ct:Types xmlns:ct="{CT_NS}">'
                '<ct:Default Extension="xml" ContentType="application/xml"/>'
                '</ct:Types>'
            ),
        })
        registry = ContentTypeRegistry(archive)
        registry.ensure_content_type("image/png")
        registry.save()

        dom = parse_xml(archive.read_entry(CONTENT_TYPES_PATH))
        defaults = dom.getElementsByTagNameNS(CT_NS, "Default")
        assert [n.getAttribute("Extension") for n in defaults] == ["xml", "png"]
        assert all(n.namespaceURI == CT_NS for n in defaults)
        assert ContentTypeRegistry(archive).content_type_for("word/media/media1.png") == "image/png"
