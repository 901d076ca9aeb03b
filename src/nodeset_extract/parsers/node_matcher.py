"""
Node Matching Strategies

Decide, for each start event of the target kind, whether the subtree is
decoded or skipped. Events of any other kind are not offered to a matcher;
the scanner simply descends into them.

Design:
- Strategy Pattern: matchers are interchangeable
- Matching is on local names only, case-sensitive, exact string
"""

from abc import ABC, abstractmethod

from nodeset_extract.parsers.token_scanner import StartEvent


class NodeMatcher(ABC):
    """
    Abstract base class for node matching strategies.

    Attributes:
        kind: Element local name this matcher is interested in
    """

    def __init__(self, kind: str):
        self.kind = kind

    def is_candidate(self, event: StartEvent) -> bool:
        """True when the event's element is of the target kind."""
        return event.local_name == self.kind

    @abstractmethod
    def match(self, event: StartEvent) -> bool:
        """
        Decide whether a candidate element is decoded.

        Args:
            event: Start event for which is_candidate() returned True

        Returns:
            True to decode the subtree, False to skip it
        """
        pass


class KindMatcher(NodeMatcher):
    """
    Accept every element of the target kind.

    Used when scanning all data type nodes of a document.
    """

    def match(self, event: StartEvent) -> bool:
        return True

    def __repr__(self) -> str:
        return f"KindMatcher(kind='{self.kind}')"


class IdentifierMatcher(NodeMatcher):
    """
    Accept the element of the target kind whose identifier attribute equals
    a given string.

    The comparison is against the attribute value as parsed, so entity
    references in the document (`&quot;`) compare equal to the characters
    they stand for. Elements without the attribute never match.

    Args:
        kind: Element local name (e.g., 'UAVariable')
        identifier: Exact identifier to look for (e.g., 'ns=3;s="Dict"')
        attribute: Local name of the identifier attribute. Default: 'NodeId'
    """

    def __init__(self, kind: str, identifier: str, attribute: str = 'NodeId'):
        super().__init__(kind)
        self.identifier = identifier
        self.attribute = attribute

    def match(self, event: StartEvent) -> bool:
        return event.attributes.get(self.attribute) == self.identifier

    def __repr__(self) -> str:
        return (
            f"IdentifierMatcher(kind='{self.kind}', "
            f"{self.attribute}='{self.identifier}')"
        )
