"""
Streaming base64 decoding of captured payload text.

The payload text is decoded a chunk at a time: whitespace (line wrapping
of base64 content) is dropped, every complete 4-character quantum is
decoded with strict alphabet checking, and the leftover characters are
carried into the next chunk. The full decoded buffer is never built.
"""

import base64
import binascii
import logging
import re
from typing import Iterator

from nodeset_extract.exceptions import PayloadDecodeError
from nodeset_extract.services.sink_writer import BinarySink

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')
_PAD = '='

DEFAULT_CHUNK_SIZE = 64 * 1024


def _decode_quanta(data: str, padded: bool) -> bytes:
    """Decode whole base64 quanta, rejecting anything after padding."""
    if padded or _PAD in data.rstrip(_PAD):
        raise PayloadDecodeError("Base64 payload has data after padding")
    try:
        return base64.b64decode(data, validate=True)
    except ValueError as e:
        # binascii.Error, or non-ASCII characters in the text
        raise PayloadDecodeError(f"Invalid base64 payload: {e}") from e


def iter_decoded_chunks(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """
    Decode base64 text incrementally.

    Args:
        text: Base64 text as captured from the document (may be line-wrapped)
        chunk_size: Characters of input consumed per step (must be positive)

    Yields:
        Decoded byte chunks, in order

    Raises:
        PayloadDecodeError: Invalid alphabet, misplaced padding, or an
            incomplete final quantum

    Example:
        >>> b''.join(iter_decoded_chunks('SGVs\\nbG8='))
        b'Hello'
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    pending = ''
    padded = False
    for start in range(0, len(text), chunk_size):
        pending += _WHITESPACE.sub('', text[start:start + chunk_size])
        usable = len(pending) - len(pending) % 4
        if not usable:
            continue

        quanta, pending = pending[:usable], pending[usable:]
        decoded = _decode_quanta(quanta, padded)
        padded = quanta.endswith(_PAD)
        if decoded:
            yield decoded

    if pending:
        raise PayloadDecodeError(
            f"Base64 payload ends with an incomplete quantum ({len(pending)} chars left)"
        )


def decode_payload_to(
    text: str,
    sink: BinarySink,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """
    Decode base64 text straight into a sink.

    Returns:
        Number of decoded bytes written
    """
    written = 0
    for chunk in iter_decoded_chunks(text, chunk_size):
        sink.write(chunk)
        written += len(chunk)
    logger.debug(f"Decoded {len(text):,} base64 chars into {written:,} bytes")
    return written
