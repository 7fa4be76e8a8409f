from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from clickhouse_vectorstore.adapters.embedding_providers.base import Embeddings
from clickhouse_vectorstore.models.document import Document


Metadatas = Union[Mapping[str, Any], Sequence[Dict[str, Any]], None]


def texts_to_documents(texts: Sequence[str], metadatas: Metadatas = None) -> List[Document]:
    """
    Zip texts with metadata.
    A sequence pairs by index; a single mapping is reused for every text.
    """
    docs: List[Document] = []
    for i, text in enumerate(texts):
        if metadatas is None:
            metadata: Dict[str, Any] = {}
        elif isinstance(metadatas, Mapping):
            metadata = dict(metadatas)
        else:
            metadata = metadatas[i]
        docs.append(Document(page_content=text, metadata=metadata))
    return docs


class VectorStore(ABC):
    """
    Interface for all vector stores.
    Subclasses store (vector, document) pairs and answer top-k queries;
    text-level helpers here embed through the configured provider.
    """

    def __init__(self, embeddings: Embeddings) -> None:
        self.embeddings = embeddings

    @abstractmethod
    def vectorstore_type(self) -> str:
        ...

    @abstractmethod
    async def add_vectors(self, vectors: Sequence[Sequence[float]], documents: Sequence[Document]) -> None:
        ...

    @abstractmethod
    async def add_documents(self, documents: Sequence[Document]) -> None:
        ...

    @abstractmethod
    async def similarity_search_vector_with_score(
        self,
        query: Sequence[float],
        k: int,
        filter: Optional[Any] = None,
    ) -> List[Tuple[Document, float]]:
        ...

    async def add_texts(self, texts: Sequence[str], metadatas: Metadatas = None) -> None:
        await self.add_documents(texts_to_documents(texts, metadatas))

    async def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        filter: Optional[Any] = None,
    ) -> List[Tuple[Document, float]]:
        return await self.similarity_search_vector_with_score(
            await self.embeddings.embed_query(query), k, filter
        )

    async def similarity_search(
        self,
        query: str,
        k: int = 4,
        filter: Optional[Any] = None,
    ) -> List[Document]:
        results = await self.similarity_search_with_score(query, k, filter)
        return [doc for doc, _ in results]
