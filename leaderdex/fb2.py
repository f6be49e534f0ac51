"""Splitting FictionBook (FB2) documents into segments."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from leaderdex.segment import SegmentKind, Segments


class Fb2Error(ValueError):
    """Raised when a document is not a readable FictionBook."""


def _local_name(tag: object) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    return next((child for child in element if _local_name(child.tag) == name), None)


def _required(element: ET.Element, name: str) -> ET.Element:
    found = _child(element, name)
    if found is None:
        raise Fb2Error(f"missing element <{name}>")
    return found


def _text(element: ET.Element) -> str:
    return "".join(element.itertext())


def _add_authors(title_info: ET.Element, segments: Segments) -> None:
    for author in _children(title_info, "author"):
        first_name = _child(author, "first-name")
        last_name = _child(author, "last-name")
        nickname = _child(author, "nickname")
        if first_name is not None and last_name is not None:
            segments.add(SegmentKind.AUTHORS, _text(first_name))
            segments.add(SegmentKind.AUTHORS, _text(last_name))
            middle_name = _child(author, "middle-name")
            if middle_name is not None:
                segments.add(SegmentKind.AUTHORS, _text(middle_name))
        if nickname is not None:
            segments.add(SegmentKind.AUTHORS, _text(nickname))


def _add_paragraph(paragraph: ET.Element, segments: Segments) -> None:
    pieces = [paragraph.text, *(child.tail for child in paragraph)]
    for piece in pieces:
        if piece and piece.strip():
            segments.add(SegmentKind.BODY, piece)


def _add_sections(sections: Iterable[ET.Element], segments: Segments) -> None:
    for section in sections:
        _add_sections(_children(section, "section"), segments)
        for paragraph in _children(section, "p"):
            _add_paragraph(paragraph, segments)


def segment_fb2(text: str) -> Segments:
    """Extract the title, authors and plain paragraph text of a FictionBook.

    Nested sections are visited before the paragraphs of their parent;
    styled runs inside paragraphs are left out. Raises Fb2Error if the
    document cannot be read.
    """
    try:
        root = ET.fromstring(text.encode("utf-8"))
    except ET.ParseError as err:
        raise Fb2Error("Invalid FictionBook document") from err
    if _local_name(root.tag) != "FictionBook":
        raise Fb2Error("root element is not <FictionBook>")

    title_info = _required(_required(root, "description"), "title-info")
    segments = Segments()
    segments.add(SegmentKind.TITLE, _text(_required(title_info, "book-title")))
    _add_authors(title_info, segments)

    for body in _children(root, "body"):
        _add_sections(_children(body, "section"), segments)
    return segments