"""
Map a fully read node element to a NodeRecord.

Only three things are picked out of the subtree: the identifier attribute,
the display label child and the payload child path. Every other child is
ignored.
"""

from typing import List, Optional, Sequence
from lxml import etree

from nodeset_extract.config import ExtractorConfig, get_config
from nodeset_extract.models import NodeRecord
from nodeset_extract.parsers.token_scanner import local_attributes, local_name


def children_named(element: etree._Element, name: str) -> List[etree._Element]:
    """Direct children with the given local name, in document order."""
    return [
        child for child in element
        if isinstance(child.tag, str) and local_name(child) == name
    ]


def find_child(element: etree._Element, name: str) -> Optional[etree._Element]:
    """
    Last direct child with the given local name, or None.

    A repeated child overrides the earlier ones, so a node with one
    DisplayName per locale maps to the last of them.
    """
    matches = children_named(element, name)
    return matches[-1] if matches else None


def find_path(element: etree._Element, steps: Sequence[str]) -> Optional[etree._Element]:
    """
    Last element reached by following a sequence of child local names.

    Every branch is followed, so with two Value children the result is the
    last ByteString under either of them.
    """
    current = [element]
    for step in steps:
        current = [child for parent in current for child in children_named(parent, step)]
        if not current:
            return None
    return current[-1]


def character_data(element: etree._Element) -> str:
    """
    Character data directly inside element.

    Text of nested child elements is not included, but text following them
    is. Whitespace is kept as is.
    """
    parts = [element.text or '']
    parts.extend(child.tail or '' for child in element)
    return ''.join(parts)


def decode_record(
    element: etree._Element,
    config: Optional[ExtractorConfig] = None
) -> NodeRecord:
    """
    Build a NodeRecord from a complete node element.

    Args:
        element: Fully parsed node element (e.g., a UADataType)
        config: Element and attribute names. Defaults to get_config()

    Returns:
        NodeRecord with node_id, display_name and payload (None when the
        payload path is absent)

    Example:
        >>> element = etree.fromstring(
        ...     '<UADataType NodeId="ns=2;i=1001"><DisplayName>Simple</DisplayName></UADataType>'
        ... )
        >>> decode_record(element).display_name
        'Simple'
    """
    config = config or get_config()

    node_id = local_attributes(element).get(config.identifier_attribute, '')

    label = find_child(element, config.label_element)
    display_name = character_data(label) if label is not None else ''

    payload_element = find_path(element, config.payload_steps)
    payload = character_data(payload_element) if payload_element is not None else None

    return NodeRecord(node_id=node_id, display_name=display_name, payload=payload)
