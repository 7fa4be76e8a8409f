"""
ClickHouse / MyScale backed vector store.

The server does all the work: the table carries a fixed-length embedding
column with a vector index, and search is a single ORDER BY L2Distance
... LIMIT k statement. This class only sequences schema creation, batch
inserts and search statements over one client connection.
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from uuid import uuid4
import json
import logging

from clickhouse_vectorstore.adapters.clickhouse_client import close_client, create_client
from clickhouse_vectorstore.adapters.embedding_providers.base import Embeddings
from clickhouse_vectorstore.models.clickhouse_args import ClickHouseArgs, ClickHouseFilter
from clickhouse_vectorstore.models.document import Document
from clickhouse_vectorstore.sql.builders import (
    CREATE_TABLE_SETTINGS,
    build_create_table_query,
    build_insert_query,
    build_search_query,
)
from clickhouse_vectorstore.stores.base import Metadatas, VectorStore, texts_to_documents

logger = logging.getLogger(__name__)

FilterLike = Union[ClickHouseFilter, Mapping[str, Any], None]
ArgsLike = Union[ClickHouseArgs, Mapping[str, Any]]

# Embedded to discover the vector dimension when none is known yet.
DIMENSION_PROBE = "test"


def _to_filter(filter: FilterLike) -> Optional[ClickHouseFilter]:
    if filter is None or isinstance(filter, ClickHouseFilter):
        return filter
    return ClickHouseFilter.model_validate(filter)


def _to_args(args: ArgsLike) -> ClickHouseArgs:
    if isinstance(args, ClickHouseArgs):
        return args
    return ClickHouseArgs.model_validate(args)


class ClickHouseStore(VectorStore):
    """
    Vector store over one ClickHouse table.

    The table is created lazily (CREATE TABLE IF NOT EXISTS) the first time
    a write or search needs it, sized to the first vector seen. The
    `is_initialized` flag is per instance; concurrent first calls may both
    issue the DDL, which is safe because the statement is idempotent.
    """

    def __init__(self, embeddings: Embeddings, args: ArgsLike, client: Any = None) -> None:
        super().__init__(embeddings)
        self.args = _to_args(args)
        self.database = self.args.database
        self.table = self.args.table
        self.index_type = self.args.index_type
        self.index_param = dict(self.args.index_param)
        self.index_query_params = dict(self.args.index_query_params)
        self.column_map = self.args.column_map
        self.metric = self.args.metric
        self.session_id = str(uuid4())
        self.client = client
        self.is_initialized = False

        if self.metric is not None:
            logger.debug(f"metric={self.metric} accepted; search ranks by L2Distance")

    def vectorstore_type(self) -> str:
        return "clickhouse"

    async def connect(self) -> None:
        """Open the backend client. No-op when one is already attached."""
        if self.client is None:
            self.client = await create_client(self.args, session_id=self.session_id)

    async def close(self) -> None:
        if self.client is not None:
            await close_client(self.client)
            self.client = None

    async def initialize(self, dimension: Optional[int] = None) -> None:
        """
        Create the table if it does not exist.
        Without `dimension`, embed a probe string and use its length.
        The store only counts as initialized once the DDL succeeded.
        """
        dim = dimension if dimension is not None else len(await self.embeddings.embed_query(DIMENSION_PROBE))
        await self.connect()

        query = build_create_table_query(
            self.database,
            self.table,
            self.column_map,
            dim,
            self.index_type,
            self.index_param,
        )
        logger.debug(f"CREATE TABLE statement: {query}")
        await self.client.command(query, settings=dict(CREATE_TABLE_SETTINGS))
        self.is_initialized = True
        logger.info(f"Initialized table {self.database}.{self.table} (dim={dim})")

    async def add_vectors(self, vectors: Sequence[Sequence[float]], documents: Sequence[Document]) -> None:
        if len(vectors) == 0:
            return
        if len(vectors) != len(documents):
            raise ValueError(f"got {len(vectors)} vectors for {len(documents)} documents")

        await self.connect()
        if not self.is_initialized:
            await self.initialize(len(vectors[0]))

        query = build_insert_query(self.database, self.table, self.column_map, vectors, documents)
        logger.debug(f"INSERT statement: {query}")
        await self.client.command(query)
        logger.info(f"Inserted {len(documents)} rows into {self.database}.{self.table}")

    async def add_documents(self, documents: Sequence[Document]) -> None:
        vectors = await self.embeddings.embed_documents([d.page_content for d in documents])
        await self.add_vectors(vectors, documents)

    async def similarity_search_vector_with_score(
        self,
        query: Sequence[float],
        k: int,
        filter: FilterLike = None,
    ) -> List[Tuple[Document, float]]:
        if k <= 0:
            return []

        await self.connect()
        if not self.is_initialized:
            await self.initialize(len(query))

        query_str = build_search_query(
            self.database,
            self.table,
            self.column_map,
            query,
            k,
            _to_filter(filter),
            self.index_query_params,
        )
        logger.debug(f"SELECT statement: {query_str}")
        result_set = await self.client.query(query_str)

        results: List[Tuple[Document, float]] = []
        for row in result_set.named_results():
            results.append((self._row_to_document(row), float(row["dist"])))
        logger.info(f"Search returned {len(results)} rows (k={k})")
        return results

    @staticmethod
    def _row_to_document(row: Mapping[str, Any]) -> Document:
        metadata = row.get("metadata")
        if isinstance(metadata, (str, bytes)):
            metadata = json.loads(metadata) if metadata else {}
        return Document(page_content=row.get("document") or "", metadata=metadata or {})

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    async def from_texts(
        cls,
        texts: Sequence[str],
        metadatas: Metadatas,
        embeddings: Embeddings,
        args: ArgsLike,
        client: Any = None,
    ) -> "ClickHouseStore":
        docs = texts_to_documents(texts, metadatas)
        return await cls.from_documents(docs, embeddings, args, client=client)

    @classmethod
    async def from_documents(
        cls,
        docs: Sequence[Document],
        embeddings: Embeddings,
        args: ArgsLike,
        client: Any = None,
    ) -> "ClickHouseStore":
        instance = cls(embeddings, args, client=client)
        await instance.connect()
        await instance.add_documents(docs)
        return instance

    @classmethod
    async def from_existing_index(
        cls,
        embeddings: Embeddings,
        args: ArgsLike,
        client: Any = None,
    ) -> "ClickHouseStore":
        """Attach to a (possibly pre-populated) table; creates it when missing, inserts nothing."""
        instance = cls(embeddings, args, client=client)
        await instance.connect()
        await instance.initialize()
        return instance
