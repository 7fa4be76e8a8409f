"""
Connection and table options for ClickHouseStore, plus the search filter type.
"""

from __future__ import annotations
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Literal, Optional, Union

from clickhouse_vectorstore.core.config import Settings
from clickhouse_vectorstore.models.column_map import ColumnMap


Metric = Literal["angular", "euclidean", "manhattan", "hamming", "dot"]


class ClickHouseFilter(BaseModel):
    """
    Raw ClickHouse boolean expression used as a PREWHERE clause.
    The string is sent verbatim; nothing parses or validates it.
    """
    where_str: str = Field(validation_alias=AliasChoices("where_str", "whereStr"))

    model_config = ConfigDict(populate_by_name=True)


class ClickHouseArgs(BaseModel):
    """
    Everything ClickHouseStore needs to reach its table.
    camelCase aliases (indexType, columnMap, ...) are accepted as well.

    `metric` is recognized but not wired into the generated SQL:
    the search statement always ranks by L2Distance.
    """
    host: str = Field(min_length=1)
    port: int = 8443
    protocol: str = "https://"
    username: str = "default"
    password: str = ""
    database: str = "default"
    table: str = "vector_table"
    index_type: str = Field(
        default="annoy",
        validation_alias=AliasChoices("index_type", "indexType"),
    )
    index_param: Dict[str, Union[int, float]] = Field(
        default_factory=lambda: {"L2Distance": 100},
        validation_alias=AliasChoices("index_param", "indexParam"),
    )
    index_query_params: Dict[str, Union[str, int, float]] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("index_query_params", "indexQueryParams"),
    )
    column_map: ColumnMap = Field(
        default_factory=ColumnMap,
        validation_alias=AliasChoices("column_map", "columnMap"),
    )
    metric: Optional[Metric] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("port", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> int:
        """Ports often arrive as strings from the environment."""
        if isinstance(v, str):
            return int(v.strip())
        return v

    @property
    def interface(self) -> str:
        """clickhouse_connect interface name derived from the protocol ('https://' -> 'https')."""
        return self.protocol.split(":", 1)[0].strip().lower() or "https"

    @classmethod
    def from_settings(cls, s: Settings, **overrides: Any) -> "ClickHouseArgs":
        if not s.CLICKHOUSE_HOST:
            raise ValueError("CLICKHOUSE_HOST not configured")
        values: Dict[str, Any] = {
            "host": s.CLICKHOUSE_HOST,
            "port": s.CLICKHOUSE_PORT,
            "protocol": s.CLICKHOUSE_PROTOCOL,
            "username": s.CLICKHOUSE_USERNAME,
            "password": s.CLICKHOUSE_PASSWORD,
            "database": s.CLICKHOUSE_DATABASE,
            "table": s.CLICKHOUSE_TABLE,
        }
        values.update(overrides)
        return cls(**values)
