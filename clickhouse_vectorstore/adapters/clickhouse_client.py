"""
Factory for the clickhouse_connect async client used by ClickHouseStore.
"""

from __future__ import annotations
from uuid import uuid4
import inspect
import logging

import clickhouse_connect
from clickhouse_connect.driver.asyncclient import AsyncClient

from clickhouse_vectorstore.models.clickhouse_args import ClickHouseArgs

logger = logging.getLogger(__name__)


async def create_client(args: ClickHouseArgs, session_id: str | None = None) -> AsyncClient:
    """
    Open an HTTP(S) client for one store instance.
    Each instance gets its own session id so sessions are never shared.
    """
    session_id = session_id or str(uuid4())
    logger.info(
        f"Connecting to ClickHouse at {args.interface}://{args.host}:{args.port} "
        f"(session {session_id})"
    )
    return await clickhouse_connect.get_async_client(
        host=args.host,
        port=args.port,
        interface=args.interface,
        username=args.username,
        password=args.password,
        session_id=session_id,
    )


async def close_client(client) -> None:
    # close() is a coroutine on newer clickhouse_connect releases and sync on older ones
    result = client.close()
    if inspect.isawaitable(result):
        await result
