"""
Unit tests for streaming base64 payload decoding.
"""

import base64
import io

import pytest

from nodeset_extract.exceptions import PayloadDecodeError
from nodeset_extract.services import BinarySink, decode_payload_to, iter_decoded_chunks


class TestIterDecodedChunks:
    """Test incremental decoding."""

    def test_decodes_plain_base64(self):
        assert b''.join(iter_decoded_chunks('SGVsbG8gV29ybGQ=')) == b'Hello World'

    def test_ignores_line_wrapping_and_indentation(self):
        text = '\n        SGVsbG8g\r\n        V29ybGQ=\n    '

        assert b''.join(iter_decoded_chunks(text)) == b'Hello World'

    @pytest.mark.parametrize('chunk_size', [1, 3, 4, 5, 7, 76, 1000])
    def test_result_independent_of_chunk_size(self, chunk_size, build):
        text = base64.encodebytes(build.dictionary_bytes).decode('ascii')

        decoded = b''.join(iter_decoded_chunks(text, chunk_size=chunk_size))

        assert decoded == build.dictionary_bytes

    def test_yields_multiple_chunks_for_large_input(self):
        data = bytes(range(256)) * 64
        text = base64.b64encode(data).decode('ascii')

        chunks = list(iter_decoded_chunks(text, chunk_size=1024))

        assert len(chunks) > 1
        assert b''.join(chunks) == data

    def test_empty_text_yields_nothing(self):
        assert list(iter_decoded_chunks('')) == []
        assert list(iter_decoded_chunks(' \n ')) == []

    @pytest.mark.parametrize('text', [
        'SGVs*G8=',
        'SGVsbG8',
        'SGk=SGk=',
        'SGVsbé8=',
    ])
    def test_invalid_payloads_raise(self, text):
        """Bad alphabet, truncated quantum, data after padding, non-ASCII."""
        with pytest.raises(PayloadDecodeError):
            list(iter_decoded_chunks(text))

    def test_data_after_padding_across_chunks(self):
        with pytest.raises(PayloadDecodeError):
            list(iter_decoded_chunks('SGk=SGk=', chunk_size=4))

    def test_invalid_alphabet_chains_binascii_error(self):
        import binascii

        with pytest.raises(PayloadDecodeError) as exc_info:
            list(iter_decoded_chunks('SGVs*G8='))

        assert isinstance(exc_info.value.__cause__, binascii.Error)

    def test_rejects_non_positive_chunk_size(self):
        with pytest.raises(ValueError):
            list(iter_decoded_chunks('SGk=', chunk_size=0))


class TestDecodePayloadTo:
    """Test decoding straight into a sink."""

    def test_writes_decoded_bytes(self):
        output = io.BytesIO()
        sink = BinarySink(output)

        written = decode_payload_to('SGVs\nbG8=', sink, chunk_size=2)

        assert written == 5
        assert output.getvalue() == b'Hello'
        assert sink.bytes_written == 5

    def test_error_after_partial_write_keeps_written_bytes(self):
        """No rollback: bytes decoded before the error stay in the sink."""
        output = io.BytesIO()

        with pytest.raises(PayloadDecodeError):
            decode_payload_to('SGVsbG8g*', BinarySink(output), chunk_size=8)

        assert output.getvalue() == b'Hello '
