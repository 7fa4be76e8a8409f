"""
Shared fixtures: an in-memory stand-in for the clickhouse_connect async client.
"""

from typing import Any, Dict, List, Optional

import pytest

from clickhouse_vectorstore.adapters.embedding_providers.hash_provider import DeterministicHashEmbedding
from clickhouse_vectorstore.models.clickhouse_args import ClickHouseArgs


class FakeQueryResult:
    def __init__(self, rows: List[Dict[str, Any]]) -> None:
        self._rows = rows

    def named_results(self):
        for row in self._rows:
            yield dict(row)


class FakeClickHouseClient:
    """
    Records every statement. `rows` is what any SELECT returns.
    Set `fail_next_command` to an exception to make the next command raise it.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None) -> None:
        self.rows = rows or []
        self.commands: List[str] = []
        self.command_settings: List[Optional[Dict[str, Any]]] = []
        self.queries: List[str] = []
        self.fail_next_command: Optional[Exception] = None
        self.closed = False

    async def command(self, cmd: str, settings: Optional[Dict[str, Any]] = None):
        if self.fail_next_command is not None:
            exc, self.fail_next_command = self.fail_next_command, None
            raise exc
        self.commands.append(cmd)
        self.command_settings.append(settings)

    async def query(self, query: str):
        self.queries.append(query)
        return FakeQueryResult(self.rows)

    async def close(self) -> None:
        self.closed = True

    @property
    def ddl(self) -> List[str]:
        return [c for c in self.commands if "CREATE TABLE" in c]

    @property
    def inserts(self) -> List[str]:
        return [c for c in self.commands if "INSERT INTO" in c]


@pytest.fixture
def fake_client() -> FakeClickHouseClient:
    return FakeClickHouseClient()


@pytest.fixture
def embedder() -> DeterministicHashEmbedding:
    return DeterministicHashEmbedding(dimension=8)


@pytest.fixture
def args() -> ClickHouseArgs:
    return ClickHouseArgs(host="localhost", port=8443, username="default", password="pw")
