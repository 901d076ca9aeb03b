"""
Reusable field validators for Pydantic models.

Designed to be attached with Pydantic's @field_validator decorator, as in
ExtractorConfig and the request models.
"""

import re

# XML local names: no prefix separator, no Clark-notation braces, no whitespace
_LOCAL_NAME_PATTERN = re.compile(r'^[A-Za-z_][\w.\-]*$')


def validate_local_name(name: str) -> str:
    """
    Validate an XML local name used for element or attribute matching.

    Args:
        name: Local name without namespace prefix (e.g., 'UAVariable')

    Returns:
        The validated name (unchanged if valid)

    Raises:
        ValueError: If the name is empty or carries a prefix/namespace

    Example:
        >>> validate_local_name('UADataType')
        'UADataType'
        >>> validate_local_name('ua:UADataType')  # Raises ValueError
    """
    if not name or not _LOCAL_NAME_PATTERN.match(name):
        raise ValueError(
            f"Expected an XML local name without namespace prefix, got: '{name}'\n"
            f"Example: 'UAVariable'"
        )
    return name


def validate_payload_path(path: str) -> str:
    """
    Validate a slash-separated path of local names (e.g., 'Value/ByteString').

    Raises:
        ValueError: If any step is not a valid local name
    """
    if not path:
        raise ValueError("Payload path must not be empty")
    for step in path.split('/'):
        validate_local_name(step)
    return path


def validate_node_id(node_id: str) -> str:
    """
    Validate a node identifier given for exact matching.

    The identifier is compared literally, so no stripping or case folding
    is applied. Only an empty value is rejected.

    Example:
        >>> validate_node_id('ns=3;s="TypeDictionary"')
        'ns=3;s="TypeDictionary"'
    """
    if not node_id:
        raise ValueError("Node identifier must not be empty")
    return node_id
