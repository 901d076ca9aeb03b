"""
Command-line wrappers around the extraction pipelines.

    extract-typedictionary <source> <node-id> <output file>
    extract-typedefs <source> <output file>

A wrong number of arguments prints usage guidance and exits with status 0.
Any fatal error is logged once and exits with status 1.
"""

import logging
import sys
from typing import Callable, List, Optional

from pydantic import ValidationError
from yaml import YAMLError

from nodeset_extract.api import extract_type_definitions, extract_type_dictionary
from nodeset_extract.config import ExtractorConfig, get_config
from nodeset_extract.exceptions import NodeSetError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

TYPEDICTIONARY_USAGE = [
    "Usage:",
    "  extract-typedictionary <source> <node-id> <output file>",
    "    source: the source filename containing a UANodeSet in XML format",
    "    node-id: the node-ID of the node containing the TypeDictionary, as its",
    "             attribute value reads after XML unescaping, for example: ns=3;s=\"demoNodeName\"",
]

TYPEDEFS_USAGE = [
    "Usage:",
    "  extract-typedefs <source file> <output file>",
    "    source file: the source filename containing a UANodeSet in XML format",
    "    output file: the CSV-file to which the data types will be *appended*",
]


def configure_logging(level: str = 'INFO') -> None:
    """Send log records to stderr with timestamps."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _load_config() -> Optional[ExtractorConfig]:
    try:
        return get_config()
    except (ValueError, OSError, YAMLError) as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        return None


def _run(argv: List[str], expected: int, usage: List[str], action: Callable) -> int:
    if len(argv) != expected:
        configure_logging()
        logger.info("Invalid number of command line arguments specified")
        for line in usage:
            logger.info(line)
        return 0

    config = _load_config()
    if config is None:
        return 1
    configure_logging(config.log_level)

    try:
        action(config)
    except ValidationError as e:
        logger.error(f"Invalid arguments: {e}")
        return 1
    except (NodeSetError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


def typedictionary_main(argv: Optional[List[str]] = None) -> int:
    """Entry point of extract-typedictionary."""
    args = sys.argv[1:] if argv is None else argv

    def action(config: ExtractorConfig) -> None:
        summary = extract_type_dictionary(args[0], args[1], args[2], config=config)
        logger.info(f"Done, {summary.bytes_written:,} bytes written to {args[2]}")

    return _run(args, 3, TYPEDICTIONARY_USAGE, action)


def typedefs_main(argv: Optional[List[str]] = None) -> int:
    """Entry point of extract-typedefs."""
    args = sys.argv[1:] if argv is None else argv

    def action(config: ExtractorConfig) -> None:
        summary = extract_type_definitions(args[0], args[1], config=config)
        logger.info(
            f"Done, {summary.written} rows appended to {args[1]} "
            f"({summary.skipped} skipped)"
        )

    return _run(args, 2, TYPEDEFS_USAGE, action)
