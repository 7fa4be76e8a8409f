from __future__ import annotations
from typing import List
import logging
import httpx
from clickhouse_vectorstore.core.config import settings
from clickhouse_vectorstore.adapters.embedding_providers.base import Embeddings

logger = logging.getLogger(__name__)

COHERE_EMBED_URL = "https://api.cohere.ai/v1/embed"


class CohereProvider(Embeddings):
    """Minimal async Cohere embedder."""
    def __init__(
        self,
        api_key: str | None = None,
        model: str = "embed-english-v3.0",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key or settings.COHERE_API_KEY
        self.model = model
        self._client = client or httpx.AsyncClient(timeout=10.0)

    async def _embed(self, texts: List[str], input_type: str) -> List[List[float]]:
        if not self.api_key:
            raise ValueError("COHERE_API_KEY not configured")
        r = await self._client.post(
            COHERE_EMBED_URL,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "texts": texts,
                "model": self.model,
                "input_type": input_type,  # required for v3.0 models
            },
        )
        r.raise_for_status()
        embeddings = r.json()["embeddings"]
        logger.debug(f"Cohere returned {len(embeddings)} embeddings ({input_type})")
        return embeddings

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []
        return await self._embed(list(texts), "search_document")

    async def embed_query(self, text: str) -> List[float]:
        return (await self._embed([text], "search_query"))[0]

    async def aclose(self) -> None:
        await self._client.aclose()
