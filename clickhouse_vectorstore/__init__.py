"""
ClickHouse / MyScale vector store.
"""

from .adapters.embedding_providers.base import Embeddings
from .adapters.embedding_providers.cohere_provider import CohereProvider
from .adapters.embedding_providers.hash_provider import DeterministicHashEmbedding
from .models.clickhouse_args import ClickHouseArgs, ClickHouseFilter, Metric
from .models.column_map import ColumnMap
from .models.document import Document
from .stores.base import VectorStore
from .stores.clickhouse import ClickHouseStore

__all__ = [
    "Embeddings",
    "CohereProvider",
    "DeterministicHashEmbedding",
    "ClickHouseArgs",
    "ClickHouseFilter",
    "Metric",
    "ColumnMap",
    "Document",
    "VectorStore",
    "ClickHouseStore",
]
