"""
Streaming XML event source built on lxml.

Wraps lxml's XMLPullParser and turns it into a flat sequence of primitive
events: StartEvent, TextEvent, EndEvent and MalformedEvent. End of input
is the end of the iterator.

Key behaviors:
1. The file is fed in chunks; no full document tree is ever kept
   (elements are cleared after their end event, as with iterparse)
2. recover=True: libxml2 recovers from broken markup and reports each
   problem in the parser's error log. Every new error entry, every
   encoding warning, and every XMLSyntaxError raised while feeding
   becomes a MalformedEvent
3. An element's own text (the text before its first child, or all of it
   for a leaf) is reported once, right before the first child's
   StartEvent or the element's EndEvent. Tails are not reported.
   Entities are already decoded by libxml2
4. Element names keep their namespace prefix ('ns2:ErrorMessageTxt'),
   matching the raw tag vocabulary of IRS files. An undeclared prefix
   is recovered by libxml2 and reported as written
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

from lxml import etree

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

# Warning-level log entries that still mean the input bytes were damaged
_ENCODING_DOMAINS = (etree.ErrorDomains.I18N,)


@dataclass(frozen=True)
class StartEvent:
    """Element start."""
    name: str


@dataclass(frozen=True)
class TextEvent:
    """Text content of the innermost open element."""
    content: str


@dataclass(frozen=True)
class EndEvent:
    """Element end."""
    name: str


@dataclass(frozen=True)
class MalformedEvent:
    """A low-level parse problem the tokenizer recovered from."""
    message: str
    line: Optional[int] = None


XmlEvent = Union[StartEvent, TextEvent, EndEvent, MalformedEvent]


def qualified_name(elem: etree._Element) -> str:
    """
    Raw element name as written in the document.

    lxml reports namespaced tags in Clark notation ({uri}local). IRS tag
    vocabularies are written with prefixes, so the prefix is restored.
    Tags without a resolved namespace (including 'ns2:Foo' with an
    undeclared prefix) are already raw and returned unchanged.

    Args:
        elem: lxml Element

    Returns:
        'prefix:local' for prefixed elements, the raw tag otherwise
    """
    tag = elem.tag
    if not tag.startswith('{'):
        return tag
    local = tag.split('}', 1)[1]
    if elem.prefix:
        return f"{elem.prefix}:{local}"
    return local


def iter_events(
    path: Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    trim_text: bool = True
) -> Iterator[XmlEvent]:
    """
    Stream primitive parse events from an XML file.

    Args:
        path: XML file to read
        chunk_size: Bytes fed to the parser per read
        trim_text: Strip text content and drop whitespace-only text

    Yields:
        StartEvent / TextEvent / EndEvent / MalformedEvent in document order

    Raises:
        FileNotFoundError: If path does not exist (raised on first next())

    Example:
        >>> for event in iter_events(Path('names.xml')):
        ...     print(event)
        StartEvent(name='Form1095BUpstreamDetail')
        StartEvent(name='RecordId')
        TextEvent(content='1')
        EndEvent(name='RecordId')
        ...
    """
    parser = etree.XMLPullParser(
        events=('start', 'end'),
        recover=True,
        huge_tree=True
    )
    reported = 0
    # One flag per open element: has its own text been reported yet
    text_reported: List[bool] = []

    with open(path, 'rb') as fh:
        while True:
            chunk = fh.read(chunk_size)
            if not chunk:
                break

            try:
                parser.feed(chunk)
            except etree.XMLSyntaxError as e:
                yield MalformedEvent(message=str(e), line=_error_line(e))

            yield from _drain(parser, text_reported, trim_text)
            reported, malformed = _new_errors(parser, reported)
            yield from malformed

        try:
            parser.close()
        except etree.XMLSyntaxError as e:
            yield MalformedEvent(message=str(e), line=_error_line(e))

        yield from _drain(parser, text_reported, trim_text)
        reported, malformed = _new_errors(parser, reported)
        yield from malformed

    logger.debug(f"Finished tokenizing {path}")


def _drain(
    parser: etree.XMLPullParser,
    text_reported: List[bool],
    trim_text: bool
) -> Iterator[XmlEvent]:
    """Translate pending lxml events into primitive events."""
    for action, elem in parser.read_events():
        if not isinstance(elem.tag, str):
            continue  # comments / processing instructions

        if action == 'start':
            # Parent text is complete once its first child starts
            if text_reported and not text_reported[-1]:
                text_reported[-1] = True
                yield from _text(elem.getparent(), trim_text)
            text_reported.append(False)
            yield StartEvent(name=qualified_name(elem))
            continue

        if text_reported and not text_reported.pop():
            yield from _text(elem, trim_text)
        yield EndEvent(name=qualified_name(elem))

        # Free memory: drop this element's content and already-seen siblings
        elem.clear(keep_tail=True)
        parent = elem.getparent()
        if parent is not None:
            while elem.getprevious() is not None:
                del parent[0]


def _text(elem: Optional[etree._Element], trim_text: bool) -> Iterator[TextEvent]:
    if elem is None or elem.text is None:
        return
    text = elem.text.strip() if trim_text else elem.text
    if text:
        yield TextEvent(content=text)


def _is_malformed(entry) -> bool:
    if entry.level >= etree.ErrorLevels.ERROR:
        return True
    return entry.level == etree.ErrorLevels.WARNING and (
        entry.domain in _ENCODING_DOMAINS
        or 'ENCODING' in entry.type_name
        or 'INVALID_CHAR' in entry.type_name
    )


def _new_errors(parser: etree.XMLPullParser, reported: int):
    """Return (new reported count, MalformedEvents for unseen error log entries)."""
    entries = list(parser.error_log)
    malformed = [
        MalformedEvent(message=entry.message.strip(), line=entry.line)
        for entry in entries[reported:]
        if _is_malformed(entry)
    ]
    return len(entries), malformed


def _error_line(error: etree.XMLSyntaxError) -> Optional[int]:
    position = getattr(error, 'position', None)
    if position:
        return position[0]
    return getattr(error, 'lineno', None)
