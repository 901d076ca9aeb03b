"""
Pull-based XML token scanner for large node-set documents.

The document is read with lxml's iterparse, so only the subtree currently
being decoded is ever held in memory:
1. Iterating the scanner yields one StartEvent per element start
2. For each event the caller decodes the subtree, skips it, or does nothing
   (and the scanner descends into the element's children)
3. Finished elements are cleared and pruned from the partial tree

The scan is forward-only and not restartable; rescanning needs a fresh stream.
"""

import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Dict, Iterator, List, Optional, Tuple, TypeVar
from lxml import etree

from nodeset_extract.exceptions import DecodeError, MalformedInputError, ScannerStateError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def local_name(element: etree._Element) -> str:
    """Local part of an element tag ('{ns}UAVariable' -> 'UAVariable')."""
    return etree.QName(element).localname


def local_attributes(element: etree._Element) -> Dict[str, str]:
    """Attributes keyed by local name; namespace prefixes are dropped."""
    return {etree.QName(key).localname: value for key, value in element.attrib.items()}


@dataclass(frozen=True)
class StartEvent:
    """
    An element-start token.

    Attributes:
        local_name: Element local name
        attributes: Attribute values keyed by attribute local name
        depth: Nesting depth, 1 for the document element
        element: The partially built lxml element (children not yet read)
    """
    local_name: str
    attributes: Dict[str, str]
    depth: int
    element: etree._Element = field(repr=False, compare=False)


class TokenScanner:
    """
    Lazy sequence of StartEvents over a binary XML stream.

    Usage:
        >>> with open('nodeset.xml', 'rb') as source:
        ...     scanner = TokenScanner(source)
        ...     for event in scanner:
        ...         if event.local_name == 'UADataType':
        ...             record = scanner.decode(event, decode_record)
        ...         elif event.local_name == 'UAVariable':
        ...             scanner.skip(event)

    skip() and decode() both leave the cursor immediately after the
    element's end tag. They may only be called for the most recent start
    event, before iteration is resumed.

    Raises:
        MalformedInputError: The stream is not well-formed XML
    """

    def __init__(self, source: BinaryIO):
        self._events = etree.iterparse(
            source,
            events=('start', 'end'),
            huge_tree=True,
            remove_comments=True,
            remove_pis=True,
        )
        self._open: List[etree._Element] = []
        self._scan = self._generate()

    def __iter__(self) -> Iterator[StartEvent]:
        return self._scan

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._open)

    def _pull(self) -> Optional[Tuple[str, etree._Element]]:
        """Next raw (event, element) pair, or None at end of stream."""
        try:
            event, element = next(self._events)
        except StopIteration:
            return None
        except etree.XMLSyntaxError as e:
            raise MalformedInputError(f"XML decoder error: {e}") from e

        if event == 'start':
            self._open.append(element)
        else:
            self._open.pop()
        return event, element

    def _generate(self) -> Iterator[StartEvent]:
        while True:
            item = self._pull()
            if item is None:
                logger.debug("End of stream reached")
                return

            event, element = item
            if event == 'start':
                yield StartEvent(
                    local_name=local_name(element),
                    attributes=local_attributes(element),
                    depth=len(self._open),
                    element=element,
                )
            else:
                self._release(element)

    def _release(self, element: etree._Element) -> None:
        """Free a finished element and every earlier sibling."""
        element.clear(keep_tail=False)
        parent = element.getparent()
        if parent is not None:
            while element.getprevious() is not None:
                del parent[0]

    def _check_open(self, event: StartEvent) -> None:
        if not self._open or self._open[-1] is not event.element:
            raise ScannerStateError(
                f"<{event.local_name}> is not the element currently open at the cursor"
            )

    def _consume(self, event: StartEvent, release_children: bool) -> None:
        """Advance past the end tag of event's element."""
        boundary = len(self._open) - 1
        while len(self._open) > boundary:
            item = self._pull()
            if item is None:
                raise MalformedInputError(
                    f"End of stream inside <{event.local_name}>"
                )
            kind, element = item
            if release_children and kind == 'end' and len(self._open) > boundary:
                self._release(element)

    def skip(self, event: StartEvent) -> None:
        """
        Consume event's subtree without materializing it.

        Children are released as soon as they end, so skip cost is
        proportional to the subtree size while memory stays flat.
        """
        self._check_open(event)
        self._consume(event, release_children=True)
        self._release(event.element)

    def decode(self, event: StartEvent, mapper: Callable[[etree._Element], T]) -> T:
        """
        Materialize event's subtree and map it with mapper.

        The element is complete when mapper runs and released right after,
        so nothing of the subtree outlives the returned value.

        Raises:
            DecodeError: The subtree is not well-formed or ends prematurely
        """
        self._check_open(event)
        try:
            self._consume(event, release_children=False)
        except MalformedInputError as e:
            raise DecodeError(f"Cannot decode <{event.local_name}>: {e}") from e

        try:
            return mapper(event.element)
        finally:
            self._release(event.element)
