"""
Output-side services for node-set extraction.

- Payload decoding: streaming base64 decoding of captured payload text
- Sink writers: append-only binary and CSV row output
"""

from nodeset_extract.services.sink_writer import BinarySink, CsvRowSink
from nodeset_extract.services.payload_decoder import (
    iter_decoded_chunks,
    decode_payload_to,
    DEFAULT_CHUNK_SIZE
)

__all__ = [
    'BinarySink',
    'CsvRowSink',
    'iter_decoded_chunks',
    'decode_payload_to',
    'DEFAULT_CHUNK_SIZE',
]
