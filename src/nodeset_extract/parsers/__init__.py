"""
Streaming XML parsing modules for node-set documents.

- TokenScanner: lazy start events with explicit skip/decode of subtrees
- Matchers: choose which nodes of the target kind are decoded
- decode_record: maps a decoded subtree to a NodeRecord
- Field normalizer: CSV-safe label/identifier fields
"""

from .token_scanner import TokenScanner, StartEvent, local_name, local_attributes
from .node_matcher import NodeMatcher, KindMatcher, IdentifierMatcher
from .record_decoder import decode_record, find_child, find_path, character_data
from .field_normalizer import (
    normalize_fields,
    format_csv_line,
    strip_namespace,
    quote_if_needed
)

__all__ = [
    # Scanning
    'TokenScanner',
    'StartEvent',
    'local_name',
    'local_attributes',
    # Matching Strategies
    'NodeMatcher',
    'KindMatcher',
    'IdentifierMatcher',
    # Decoding
    'decode_record',
    'find_child',
    'find_path',
    'character_data',
    # Normalization
    'normalize_fields',
    'format_csv_line',
    'strip_namespace',
    'quote_if_needed',
]
