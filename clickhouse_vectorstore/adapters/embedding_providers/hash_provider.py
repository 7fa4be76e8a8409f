"""
Deterministic offline embedder.
Same text always maps to the same unit vector; handy for tests and demos
that must not call a remote model.
"""

from __future__ import annotations
from typing import List
import hashlib
import numpy as np

from clickhouse_vectorstore.adapters.embedding_providers.base import Embeddings


class DeterministicHashEmbedding(Embeddings):
    def __init__(self, dimension: int = 384) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self.dimension = dimension

    def _vector(self, text: str) -> List[float]:
        # md5 digest seeds a local generator so output is stable across runs
        seed = int(hashlib.md5(text.encode("utf-8")).hexdigest()[:8], 16)
        rng = np.random.default_rng(seed)
        v = rng.standard_normal(self.dimension)
        n = float(np.linalg.norm(v))
        if n > 0.0:
            v = v / n
        return v.astype(np.float32).tolist()

    async def embed_query(self, text: str) -> List[float]:
        return self._vector(text)

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        return [self._vector(t) for t in texts]
