"""
Pydantic models for records extracted from a node-set document.

A NodeRecord is created once its element subtree has been fully decoded
and is never mutated afterwards. A FieldPair holds the CSV-safe form of a
record's label and identifier.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class NodeRecord(BaseModel):
    """
    One located node of interest.

    Attributes:
        node_id: Identifier attribute value as parsed (e.g., 'ns=2;i=1001')
        display_name: Text of the display label child, may be empty
        payload: Raw base64 text of the payload element, exactly as captured
            (embedded whitespace and line breaks included). None when the
            element has no payload child.

    Example:
        >>> record = NodeRecord(node_id='ns=2;i=1001', display_name='Simple')
        >>> record.has_payload
        False
    """

    node_id: str = Field(
        default='',
        description="Node identifier attribute",
        examples=['ns=3;s="TypeDictionary"']
    )

    display_name: str = Field(
        default='',
        description="Human-readable display label",
        examples=['Simple']
    )

    payload: Optional[str] = Field(
        default=None,
        description="Base64-encoded payload text as captured from the document"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def has_payload(self) -> bool:
        return self.payload is not None

    def __repr__(self) -> str:
        """Keep large payloads out of the terminal."""
        payload = 'None' if self.payload is None else f"<{len(self.payload):,} chars>"
        return (
            f"NodeRecord("
            f"node_id='{self.node_id}', "
            f"display_name='{self.display_name}', "
            f"payload={payload})"
        )


class FieldPair(BaseModel):
    """
    Normalized (label, identifier) pair ready for CSV emission.

    Both fields are already quoted and escaped; to_csv_line() only joins them.

    Example:
        >>> FieldPair(label='Simple', identifier='1001').to_csv_line('DataType')
        'Simple,1001,DataType\\n'
    """

    label: str
    identifier: str

    model_config = ConfigDict(frozen=True)

    def to_csv_line(self, type_tag: str) -> str:
        """Render `label,identifier,type_tag` terminated by a newline."""
        return f"{self.label},{self.identifier},{type_tag}\n"
