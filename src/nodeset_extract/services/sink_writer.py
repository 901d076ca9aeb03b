"""
Append-only writers for extraction output.

- BinarySink: raw decoded payload bytes, copied as is
- CsvRowSink: one UTF-8 encoded CSV row per accepted record

Write failures are fatal: the OSError is re-raised as SinkWriteError and
nothing already written is rolled back.
"""

from typing import BinaryIO

from nodeset_extract.exceptions import SinkWriteError
from nodeset_extract.models import FieldPair


class BinarySink:
    """
    Byte sink over an open binary stream.

    The stream is owned by the caller; the sink never opens or closes it.

    Usage:
        >>> with open('dictionary.bsd', 'wb') as f:
        ...     sink = BinarySink(f)
        ...     sink.write(b'...')
        ...     sink.bytes_written
        3
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.bytes_written = 0

    def write(self, data: bytes) -> None:
        """Append data to the stream."""
        try:
            self._stream.write(data)
        except OSError as e:
            raise SinkWriteError(f"Cannot write output file: {e}") from e
        self.bytes_written += len(data)

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as e:
            raise SinkWriteError(f"Cannot write output file: {e}") from e


class CsvRowSink(BinarySink):
    """
    Row sink writing normalized field pairs as `label,identifier,<tag>` lines.

    Args:
        stream: Open binary stream (append mode for type definition runs)
        type_tag: Unquoted constant third field. Default: 'DataType'
        encoding: Text encoding of the rows. Default: 'utf-8'
    """

    def __init__(self, stream: BinaryIO, type_tag: str = 'DataType', encoding: str = 'utf-8'):
        super().__init__(stream)
        self.type_tag = type_tag
        self.encoding = encoding
        self.rows_written = 0

    def write_pair(self, pair: FieldPair) -> None:
        """Append one row for an already normalized pair."""
        self.write(pair.to_csv_line(self.type_tag).encode(self.encoding))
        self.rows_written += 1
