"""
Request models for the command-line and pipeline entry points.

These Pydantic models validate run arguments before any file is opened
or created.
"""

from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator

from nodeset_extract.validators import validate_node_id


class _SourceRequest(BaseModel):
    """Shared source/output fields."""

    source_path: Path = Field(
        ...,
        description="Readable UANodeSet XML document",
        examples=["Opc.Ua.NodeSet2.xml"]
    )

    output_path: Path = Field(
        ...,
        description="Destination file"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('source_path')
    @classmethod
    def validate_source_exists(cls, v: Path) -> Path:
        """The source document must be an existing regular file."""
        if not v.is_file():
            raise ValueError(f"Source file not found: '{v}'")
        return v


class PayloadExtractionRequest(_SourceRequest):
    """
    Arguments of a type dictionary extraction.

    Attributes:
        source_path: Node-set XML document
        node_id: Exact identifier of the variable node holding the payload
        output_path: File to create or truncate

    Example:
        >>> request = PayloadExtractionRequest(
        ...     source_path='nodeset.xml',
        ...     node_id='ns=3;s="TypeDictionary"',
        ...     output_path='dictionary.bsd'
        ... )
    """

    node_id: str = Field(
        ...,
        description="Literal node identifier as it occurs in the XML",
        examples=['ns=3;s="TypeDictionary"']
    )

    @field_validator('node_id')
    @classmethod
    def validate_node_id_value(cls, v: str) -> str:
        return validate_node_id(v)


class TypeTableRequest(_SourceRequest):
    """
    Arguments of a type definition extraction.

    The output file is opened in append mode, so it may already exist.
    """
    pass
