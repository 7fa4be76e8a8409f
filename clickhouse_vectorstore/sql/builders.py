"""
SQL text builders for the ClickHouse vector table.

Every statement is plain text: content and metadata are escaped into quoted
literals, vectors are written as array literals and the search filter is
spliced in verbatim.
"""

from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Sequence, Union
from uuid import uuid4
import json
import numpy as np

from clickhouse_vectorstore.models.column_map import ColumnMap
from clickhouse_vectorstore.models.clickhouse_args import ClickHouseFilter
from clickhouse_vectorstore.models.document import Document


# Session settings the CREATE TABLE needs (JSON column + annoy index).
CREATE_TABLE_SETTINGS: Dict[str, int] = {
    "allow_experimental_object_type": 1,
    "allow_experimental_annoy_index": 1,
}

Vector = Union[Sequence[float], np.ndarray]


def escape_string(value: str) -> str:
    """Escape for a single-quoted literal. Backslashes first, then quotes."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def format_vector(vector: Vector) -> str:
    """[0.1,0.2,...] array literal."""
    arr = np.asarray(vector, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"vector must be 1-D, got shape {arr.shape}")
    return "[" + ",".join(repr(float(x)) for x in arr) + "]"


def build_index_param_str(index_param: Optional[Mapping[str, Union[int, float]]]) -> str:
    if not index_param:
        return ""
    return ", ".join(f"'{key}', {value}" for key, value in index_param.items())


def build_create_table_query(
    database: str,
    table: str,
    column_map: ColumnMap,
    dimension: int,
    index_type: str,
    index_param: Optional[Mapping[str, Union[int, float]]],
) -> str:
    cm = column_map
    index_param_str = build_index_param_str(index_param)
    return f"""
    CREATE TABLE IF NOT EXISTS {database}.{table}(
      {cm.id} Nullable(String),
      {cm.document} Nullable(String),
      {cm.embedding} Array(Float32),
      {cm.metadata} JSON,
      {cm.uuid} UUID DEFAULT generateUUIDv4(),
      CONSTRAINT cons_vec_len CHECK length({cm.embedding}) = {dimension},
      INDEX vec_idx {cm.embedding} TYPE {index_type}({index_param_str}) GRANULARITY 1000
    ) ENGINE = MergeTree ORDER BY {cm.uuid} SETTINGS index_granularity = 8192"""


def build_insert_query(
    database: str,
    table: str,
    column_map: ColumnMap,
    vectors: Sequence[Vector],
    documents: Sequence[Document],
) -> str:
    """
    One multi-row INSERT for the whole batch.
    Each tuple follows ColumnMap.columns(): id, document, embedding, metadata, uuid.
    """
    columns_str = ", ".join(column_map.columns())

    data: List[str] = []
    for vector, document in zip(vectors, documents):
        item = ", ".join(
            [
                f"'{uuid4()}'",
                f"'{escape_string(document.page_content)}'",
                format_vector(vector),
                f"'{escape_string(json.dumps(document.metadata))}'",
                f"'{uuid4()}'",
            ]
        )
        data.append(f"({item})")

    return f"""
      INSERT INTO TABLE
        {database}.{table}({columns_str})
      VALUES
        {", ".join(data)}
    """


def build_search_query(
    database: str,
    table: str,
    column_map: ColumnMap,
    query: Vector,
    k: int,
    filter: Optional[ClickHouseFilter] = None,
    index_query_params: Optional[Mapping[str, Union[str, int, float]]] = None,
) -> str:
    """
    Top-k by ascending L2 distance, computed by the server.
    Output columns are always named document, metadata and dist.
    """
    where_str = f"PREWHERE {filter.where_str}" if filter and filter.where_str.strip() else ""

    settings_str = ""
    if index_query_params:
        settings_str = "SETTINGS " + ", ".join(
            f"{key}={value}" for key, value in index_query_params.items()
        )

    return f"""
      SELECT {column_map.document} AS document, {column_map.metadata} AS metadata, dist
      FROM {database}.{table}
      {where_str}
      ORDER BY L2Distance({column_map.embedding}, {format_vector(query)}) AS dist ASC
      LIMIT {int(k)} {settings_str}
    """
