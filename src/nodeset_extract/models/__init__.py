"""
Pydantic models for extracted records, results and run requests.
"""

from nodeset_extract.models.record import NodeRecord, FieldPair
from nodeset_extract.models.summary import ExtractionSummary
from nodeset_extract.models.requests import PayloadExtractionRequest, TypeTableRequest

__all__ = [
    'NodeRecord',
    'FieldPair',
    'ExtractionSummary',
    'PayloadExtractionRequest',
    'TypeTableRequest',
]
