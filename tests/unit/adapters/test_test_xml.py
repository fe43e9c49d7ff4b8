"""Unit tests for the XML test reader/writer."""

import pytest

from storyline.adapters.test_xml import (
    XmlTestReader,
    XmlTestWriter,
    from_xml,
    to_xml,
)
from storyline.domain.hierarchy import Test
from storyline.domain.parts import Comment, Part, Step
from storyline.interfaces.test_io import TestParseError

# pylint: disable=redefined-outer-name


# ============================================================================
#                               Encoding
# ============================================================================


def test_to_xml_renders_parts_in_order():
    """Comments and steps become elements, in part order."""
    test = Test("pay by card", [Comment("Happy path"), Step("Checkout", {"amount": "10"})])

    xml = to_xml(test)

    assert xml.startswith("<?xml version='1.0' encoding='utf-8'?>\n")
    assert '<Test name="pay by card">' in xml
    assert xml.index("<Comment>Happy path</Comment>") < xml.index('<Step grammar="Checkout">')
    assert '<Cell name="amount" value="10" />' in xml


def test_to_xml_rejects_unknown_part_kind():
    """A part with no XML encoding is a programming error."""

    class Screenshot(Part):
        pass

    with pytest.raises(TypeError):
        to_xml(Test("t", [Screenshot()]))


def test_round_trip_preserves_name_and_parts():
    """Decoding the encoded document gives back an equivalent test."""
    parts = [
        Comment("a <tricky> & 'quoted' comment"),
        Step("Add", {"x": "1", "y": "2", "sum": "3"}),
        Step("Reset"),
    ]

    decoded = from_xml(to_xml(Test("adds", parts)), "/tests/adds.xml")

    assert decoded.name == "adds"
    assert decoded.parts == parts
    assert decoded.file_name == "adds.xml"


# ============================================================================
#                               Decoding errors
# ============================================================================


@pytest.mark.parametrize(
    ("document", "reason"),
    [
        ("<Test name='t'>", "malformed XML"),
        ("<Suite name='t' />", "expected <Test> root"),
        ("<Test />", "no 'name' attribute"),
        ("<Test name='t'><Picture /></Test>", "unknown part <Picture>"),
        ("<Test name='t'><Step /></Test>", "missing its 'grammar'"),
        ("<Test name='t'><Step grammar='g'><Row /></Step></Test>", "unexpected <Row>"),
        ("<Test name='../escape' />", "must not contain"),
    ],
)
def test_from_xml_rejects_malformed_documents(document, reason):
    """Each malformation is reported with the file path and a reason."""
    with pytest.raises(TestParseError) as exc:
        from_xml(document, "/tests/t.xml")

    assert reason in exc.value.reason
    assert exc.value.path == "/tests/t.xml"


# ============================================================================
#                               Reader / writer
# ============================================================================


def test_writer_then_reader(memory_fs):
    """A written test reads back with the same name, parts and file name."""
    memory_fs.make_dirs("/p/Tests")
    test = Test("Test001", [Comment("hello")])

    XmlTestWriter(memory_fs).write_to_file(test, "/p/Tests/Test001.xml")
    loaded = XmlTestReader(memory_fs).read_from_file("/p/Tests/Test001.xml")

    assert loaded.name == "Test001"
    assert loaded.parts == [Comment("hello")]
    assert loaded.file_name == "Test001.xml"


def test_reader_missing_file_is_parse_error(memory_fs):
    """Reading a file that does not exist fails with TestParseError."""
    with pytest.raises(TestParseError, match="does not exist"):
        XmlTestReader(memory_fs).read_from_file("/p/Tests/absent.xml")


def test_reader_directory_is_parse_error(memory_fs):
    """Reading a directory fails with TestParseError."""
    memory_fs.make_dirs("/p/Tests/suite.xml")

    with pytest.raises(TestParseError, match="directory"):
        XmlTestReader(memory_fs).read_from_file("/p/Tests/suite.xml")


def test_writer_propagates_missing_directory(memory_fs):
    """The writer does not create directories; that is the project's job."""
    with pytest.raises(FileNotFoundError):
        XmlTestWriter(memory_fs).write_to_file(Test("t"), "/nowhere/t.xml")
