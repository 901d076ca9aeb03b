"""
Error taxonomy for node-set extraction.

Every error raised by the library derives from NodeSetError so callers
(the CLI in particular) can report any fatal condition with one handler.
The mode-B empty-field skip is not an error and has no exception here.
"""


class NodeSetError(Exception):
    """Base class for all extraction errors."""
    pass


class MalformedInputError(NodeSetError):
    """The token stream violates XML well-formedness."""
    pass


class TruncatedInputError(NodeSetError):
    """End of stream was reached before the required node was found."""
    pass


class DecodeError(NodeSetError):
    """A matched subtree could not be mapped into a NodeRecord."""
    pass


class PayloadDecodeError(NodeSetError):
    """The captured payload text is not valid base64."""
    pass


class SinkWriteError(NodeSetError):
    """Writing to the output destination failed."""
    pass


class ScannerStateError(NodeSetError):
    """skip() or decode() was called for an event that is no longer open."""
    pass
