from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Any, Dict


class Document(BaseModel):
    """
    A piece of text plus free-form metadata.
    This is what callers insert and what a similarity search hands back.
    """
    page_content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
