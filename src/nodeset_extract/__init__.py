"""
nodeset-extract: streaming extraction from OPC UA node-set XML documents.

Two extractions are offered:
- extract_type_dictionary: decode the base64 payload of one UAVariable
- extract_type_definitions: append a CSV row per UADataType
"""

from nodeset_extract.api import (
    PayloadExtractionPipeline,
    DataTypeTablePipeline,
    extract_type_dictionary,
    extract_type_definitions
)
from nodeset_extract.config import ExtractorConfig, get_config
from nodeset_extract.exceptions import (
    NodeSetError,
    MalformedInputError,
    TruncatedInputError,
    DecodeError,
    PayloadDecodeError,
    SinkWriteError,
    ScannerStateError
)

__all__ = [
    'PayloadExtractionPipeline',
    'DataTypeTablePipeline',
    'extract_type_dictionary',
    'extract_type_definitions',
    'ExtractorConfig',
    'get_config',
    'NodeSetError',
    'MalformedInputError',
    'TruncatedInputError',
    'DecodeError',
    'PayloadDecodeError',
    'SinkWriteError',
    'ScannerStateError',
]
