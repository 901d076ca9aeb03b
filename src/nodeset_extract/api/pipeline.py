"""
Extraction pipelines for node-set documents.

Both pipelines share one flow:
- TokenScanner pulls start events from the source stream
- a NodeMatcher decides decode vs. skip for nodes of the target kind
- decoded subtrees become NodeRecords, consumed right away

PayloadExtractionPipeline stops at the first matching variable node and
streams its base64 payload into a binary sink. DataTypeTablePipeline runs
to end of stream and appends one CSV row per data type node.
"""

from functools import partial
from pathlib import Path
from typing import BinaryIO, Optional, Union
import logging

from nodeset_extract.config import ExtractorConfig, get_config
from nodeset_extract.exceptions import DecodeError, TruncatedInputError
from nodeset_extract.models import (
    ExtractionSummary,
    NodeRecord,
    PayloadExtractionRequest,
    TypeTableRequest
)
from nodeset_extract.parsers import (
    TokenScanner,
    IdentifierMatcher,
    KindMatcher,
    decode_record,
    normalize_fields
)
from nodeset_extract.services import BinarySink, CsvRowSink, decode_payload_to

logger = logging.getLogger(__name__)


class PayloadExtractionPipeline:
    """
    Find one variable node by identifier and decode its payload.

    Args:
        node_id: Exact identifier of the node (e.g., 'ns=3;s="TypeDictionary"')
        config: Element names and chunk size. Defaults to get_config()

    Usage:
        >>> pipeline = PayloadExtractionPipeline('ns=3;s="TypeDictionary"')
        >>> with open('nodeset.xml', 'rb') as src, open('dict.bsd', 'wb') as dst:
        ...     summary = pipeline.run(src, dst)
        >>> summary.bytes_written
        48213

    Raises:
        TruncatedInputError: No matching node before end of stream
        DecodeError: The node is not well-formed or has no payload element
        PayloadDecodeError: The payload is not valid base64
        MalformedInputError: The document is not well-formed before the match
        SinkWriteError: Writing the output failed
    """

    def __init__(self, node_id: str, config: Optional[ExtractorConfig] = None):
        self.config = config or get_config()
        self.matcher = IdentifierMatcher(
            kind=self.config.variable_element,
            identifier=node_id,
            attribute=self.config.identifier_attribute
        )

    def run(self, source: BinaryIO, output: BinaryIO) -> ExtractionSummary:
        """Scan source until the node is found and write its payload to output."""
        config = self.config
        logger.info(
            f"Searching for the {config.variable_element} with "
            f"{config.identifier_attribute} {self.matcher.identifier}"
        )

        scanner = TokenScanner(source)
        for event in scanner:
            if not self.matcher.is_candidate(event):
                continue
            if not self.matcher.match(event):
                scanner.skip(event)
                continue

            logger.info("Found! Now decoding this node")
            record = scanner.decode(event, partial(decode_record, config=config))
            logger.info(f"{config.label_element}: {record.display_name}")
            return self._write_payload(record, output)

        raise TruncatedInputError(
            f"End of file encountered before finding {config.variable_element} "
            f"{self.matcher.identifier}"
        )

    def _write_payload(self, record: NodeRecord, output: BinaryIO) -> ExtractionSummary:
        if not record.has_payload:
            raise DecodeError(
                f"{self.config.variable_element} {record.node_id} has no "
                f"{self.config.payload_path} element"
            )

        sink = BinarySink(output)
        written = decode_payload_to(record.payload, sink, self.config.payload_chunk_size)
        sink.flush()
        logger.info(f"Wrote {written:,} decoded bytes")

        return ExtractionSummary(
            bytes_written=written,
            node_id=record.node_id,
            display_name=record.display_name
        )


class DataTypeTablePipeline:
    """
    Append a CSV row for every data type node of a document.

    Nodes with an empty identifier or an empty display label are logged
    and left out; scanning carries on with the next node.

    Args:
        config: Element names and CSV type tag. Defaults to get_config()

    Usage:
        >>> pipeline = DataTypeTablePipeline()
        >>> with open('nodeset.xml', 'rb') as src, open('types.csv', 'ab') as dst:
        ...     summary = pipeline.run(src, dst)
        >>> summary.written, summary.skipped
        (42, 1)
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or get_config()
        self.matcher = KindMatcher(self.config.datatype_element)

    def run(self, source: BinaryIO, output: BinaryIO) -> ExtractionSummary:
        """Scan source to end of stream, writing accepted rows to output."""
        config = self.config
        logger.info(f"Searching for {config.datatype_element} nodes")

        sink = CsvRowSink(output, type_tag=config.csv_type_tag)
        skipped = 0

        scanner = TokenScanner(source)
        for event in scanner:
            if not self.matcher.is_candidate(event):
                continue
            if not self.matcher.match(event):
                scanner.skip(event)
                continue

            record = scanner.decode(event, partial(decode_record, config=config))
            if not self._accept(record):
                skipped += 1
                continue

            pair = normalize_fields(record.display_name, record.node_id)
            logger.debug(f"{record.node_id} -> {pair.label},{pair.identifier}")
            sink.write_pair(pair)

        sink.flush()
        logger.info(
            f"End of file encountered, done! "
            f"{sink.rows_written} rows written, {skipped} skipped"
        )
        return ExtractionSummary(written=sink.rows_written, skipped=skipped)

    def _accept(self, record: NodeRecord) -> bool:
        """Check both required fields, logging each missing one."""
        config = self.config
        accepted = True
        if not record.node_id:
            logger.warning(
                f"Found {config.datatype_element} without "
                f"{config.identifier_attribute}, skipping"
            )
            accepted = False
        if not record.display_name:
            logger.warning(
                f"Found {config.datatype_element} ({config.identifier_attribute} "
                f"{record.node_id}) without {config.label_element}, skipping"
            )
            accepted = False
        return accepted


def extract_type_dictionary(
    source_path: Union[str, Path],
    node_id: str,
    output_path: Union[str, Path],
    config: Optional[ExtractorConfig] = None
) -> ExtractionSummary:
    """
    Decode the payload of one variable node into a file.

    The output file is created (or truncated) before the scan starts, so a
    failed run leaves it empty.

    Args:
        source_path: Node-set XML document
        node_id: Exact node identifier, as parsed from the XML attribute
        output_path: Destination file
        config: Optional config override

    Returns:
        ExtractionSummary with bytes_written and the node's identity

    Raises:
        pydantic.ValidationError: Missing source file or empty node_id
        NodeSetError: Any extraction failure (see PayloadExtractionPipeline)
    """
    request = PayloadExtractionRequest(
        source_path=source_path,
        node_id=node_id,
        output_path=output_path
    )
    pipeline = PayloadExtractionPipeline(request.node_id, config=config)

    logger.info(f"Opening input file {request.source_path}")
    with open(request.source_path, 'rb') as source:
        logger.info(f"Opening output file {request.output_path}")
        with open(request.output_path, 'wb') as output:
            return pipeline.run(source, output)


def extract_type_definitions(
    source_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[ExtractorConfig] = None
) -> ExtractionSummary:
    """
    Append one CSV row per data type node to a file.

    Existing content of the output file is preserved.

    Returns:
        ExtractionSummary with written/skipped counts
    """
    request = TypeTableRequest(source_path=source_path, output_path=output_path)
    pipeline = DataTypeTablePipeline(config=config)

    logger.info(f"Opening input file {request.source_path}")
    with open(request.source_path, 'rb') as source:
        logger.info(f"Opening output file {request.output_path}")
        with open(request.output_path, 'ab') as output:
            return pipeline.run(source, output)
