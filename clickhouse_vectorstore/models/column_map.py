"""
Logical-to-physical column names for the vector table.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import List


class ColumnMap(BaseModel):
    """
    Physical column name for every logical role of a stored row.
    - id: generated row token
    - document: the text content
    - embedding: fixed-length Array(Float32)
    - metadata: JSON-encoded mapping
    - uuid: auto-generated UUID, also the MergeTree sort key

    Frozen so the names used for INSERT and SELECT can never drift apart
    on one store instance.
    """
    id: str = Field(default="id", min_length=1)
    document: str = Field(default="document", min_length=1)
    embedding: str = Field(default="embedding", min_length=1)
    metadata: str = Field(default="metadata", min_length=1)
    uuid: str = Field(default="uuid", min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def columns(self) -> List[str]:
        """Physical names in declared role order (id, document, embedding, metadata, uuid)."""
        return [self.id, self.document, self.embedding, self.metadata, self.uuid]
