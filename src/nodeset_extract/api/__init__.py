"""
User-facing extraction entry points for nodeset-extract.
"""

from nodeset_extract.api.pipeline import (
    PayloadExtractionPipeline,
    DataTypeTablePipeline,
    extract_type_dictionary,
    extract_type_definitions
)

__all__ = [
    'PayloadExtractionPipeline',
    'DataTypeTablePipeline',
    'extract_type_dictionary',
    'extract_type_definitions',
]
