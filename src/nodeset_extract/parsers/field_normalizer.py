"""
CSV field normalization for data type rows.

Turns a raw node identifier and display label into CSV-safe fields:
1. 'ns=<n>;i=' prefix removed (numeric ids collapse to the bare number)
2. 'ns=<n>;' prefix removed (string ids keep their 's=' marker)
3. Label quoted when the identifier has quotes and the label has none
4. Embedded double quotes doubled in both fields
5. Fields with any character outside [A-Za-z0-9_] wrapped in quotes
"""

import re

from nodeset_extract.models import FieldPair

NAMESPACE_PATTERN = re.compile(r'^ns=[0-9]+;')
NAMESPACE_AND_NUMERIC_PATTERN = re.compile(r'^ns=[0-9]+;i=')
SPECIAL_CHARS_PATTERN = re.compile(r'[^\w]', re.ASCII)

QUOTE = '"'


def strip_namespace(identifier: str) -> str:
    """
    Remove the namespace part of a node identifier.

    Example:
        >>> strip_namespace('ns=2;i=1001')
        '1001'
        >>> strip_namespace('ns=3;s="Demo"')
        's="Demo"'
    """
    identifier = NAMESPACE_AND_NUMERIC_PATTERN.sub('', identifier, count=1)
    return NAMESPACE_PATTERN.sub('', identifier, count=1)


def quote_if_needed(value: str) -> str:
    """Wrap value in double quotes when it has a non-word character."""
    if SPECIAL_CHARS_PATTERN.search(value):
        return f'{QUOTE}{value}{QUOTE}'
    return value


def normalize_fields(label: str, identifier: str) -> FieldPair:
    """
    Normalize a display label and node identifier for CSV output.

    Args:
        label: Raw display label
        identifier: Raw node identifier (e.g., 'ns=3;s="Demo"')

    Returns:
        FieldPair with both fields escaped and quoted

    Example:
        >>> normalize_fields('Simple', 'ns=2;i=1001')
        FieldPair(label='Simple', identifier='1001')
        >>> normalize_fields('Demo', 'ns=3;s="Demo"').identifier.count(QUOTE)
        6
    """
    identifier = strip_namespace(identifier)

    # Keep label quoting consistent with quoted string identifiers
    if QUOTE in identifier and QUOTE not in label:
        label = f'{QUOTE}{label}{QUOTE}'

    label = label.replace(QUOTE, QUOTE * 2)
    identifier = identifier.replace(QUOTE, QUOTE * 2)

    return FieldPair(label=quote_if_needed(label), identifier=quote_if_needed(identifier))


def format_csv_line(label: str, identifier: str, type_tag: str = 'DataType') -> str:
    """
    Normalize both fields and render one CSV row.

    Example:
        >>> format_csv_line('Simple', 'ns=2;i=1001')
        'Simple,1001,DataType\\n'
    """
    return normalize_fields(label, identifier).to_csv_line(type_tag)
