"""
Result models returned by the extraction pipelines.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ExtractionSummary(BaseModel):
    """
    Statistics of one extraction run.

    Type definition runs fill written/skipped; type dictionary runs fill
    bytes_written and the matched node's identity.

    Example:
        >>> summary = ExtractionSummary(written=12, skipped=1)
        >>> summary.scanned
        13
    """

    written: int = Field(default=0, ge=0, description="CSV rows appended")
    skipped: int = Field(default=0, ge=0, description="Records excluded for empty fields")
    bytes_written: int = Field(default=0, ge=0, description="Decoded payload bytes written")
    node_id: Optional[str] = Field(default=None, description="Matched node identifier")
    display_name: Optional[str] = Field(default=None, description="Matched node label")

    model_config = ConfigDict(frozen=True)

    @property
    def scanned(self) -> int:
        """Number of candidate nodes decoded."""
        return self.written + self.skipped
