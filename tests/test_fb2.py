import pytest

from leaderdex.fb2 import Fb2Error, segment_fb2
from leaderdex.segment import SegmentKind

SAMPLE = """<?xml version="1.0" encoding="utf-8"?>
<FictionBook xmlns="urn:example:fictionbook">
  <description>
    <title-info>
      <author>
        <first-name>William</first-name>
        <last-name>Shakespeare</last-name>
        <nickname>Bard</nickname>
      </author>
      <author><nickname>Anon</nickname></author>
      <book-title>Hamlet</book-title>
    </title-info>
  </description>
  <body>
    <section>
      <title><p>Act I</p></title>
      <section><p>Inner text</p></section>
      <p>Outer <strong>bold</strong> tail</p>
    </section>
  </body>
</FictionBook>
"""


def test_title_is_extracted():
    segments = segment_fb2(SAMPLE)
    assert segments.get(SegmentKind.TITLE) == ["Hamlet"]


def test_authors_are_extracted():
    segments = segment_fb2(SAMPLE)
    assert segments.get(SegmentKind.AUTHORS) == ["William", "Shakespeare", "Bard", "Anon"]


def test_body_text_nested_sections_first_and_styles_skipped():
    segments = segment_fb2(SAMPLE)
    body = segments.get(SegmentKind.BODY)
    assert body == ["Inner text", "Outer ", " tail"]
    assert "Act I" not in body
    assert "bold" not in body


def test_no_namespace_document():
    text = (
        "<FictionBook><description><title-info><book-title>Solo</book-title>"
        "</title-info></description></FictionBook>"
    )
    segments = segment_fb2(text)
    assert segments.get(SegmentKind.TITLE) == ["Solo"]
    assert segments.get(SegmentKind.BODY) is None


def test_missing_title_raises():
    text = "<FictionBook><description><title-info></title-info></description></FictionBook>"
    with pytest.raises(Fb2Error):
        segment_fb2(text)


def test_malformed_xml_raises_value_error():
    with pytest.raises(ValueError):
        segment_fb2("<FictionBook><description>")


def test_wrong_root_raises():
    with pytest.raises(Fb2Error):
        segment_fb2("<html><body/></html>")