from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List


class Embeddings(ABC):
    """
    Interface for embedding providers.
    Vector stores only ever call these two methods.
    """

    @abstractmethod
    async def embed_query(self, text: str) -> List[float]:
        """Embed a single search query."""

    @abstractmethod
    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        """Embed a batch of document texts, one vector per text, same order."""
