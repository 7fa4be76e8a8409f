#!/usr/bin/env python3
"""
Demo for the ClickHouse vector store.
Seeds a table from texts, searches it (with and without a filter), then
attaches a second store to the same table and searches again.

Needs CLICKHOUSE_HOST / CLICKHOUSE_PASSWORD (and friends) in the environment
or .env. Uses Cohere when COHERE_API_KEY is set, otherwise the offline hash
embedder.
"""

import asyncio
import logging
import sys

from clickhouse_vectorstore.core.config import settings
from clickhouse_vectorstore.adapters.embedding_providers.base import Embeddings
from clickhouse_vectorstore.adapters.embedding_providers.cohere_provider import CohereProvider
from clickhouse_vectorstore.adapters.embedding_providers.hash_provider import DeterministicHashEmbedding
from clickhouse_vectorstore.models.clickhouse_args import ClickHouseArgs
from clickhouse_vectorstore.stores.clickhouse import ClickHouseStore


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

TEXTS = ["Hello world", "Bye bye", "hello nice world"]
METADATAS = [
    {"id": 2, "name": "2"},
    {"id": 1, "name": "1"},
    {"id": 3, "name": "3"},
]


def print_section(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def print_step(step_num: int, description: str):
    """Print a formatted step."""
    print(f"Step {step_num}: {description}")


def pick_embedder() -> Embeddings:
    if settings.COHERE_API_KEY:
        print("  ✓ Using Cohere embeddings")
        return CohereProvider()
    print("  ⚠ COHERE_API_KEY not set, using deterministic hash embeddings")
    return DeterministicHashEmbedding()


async def main():
    """Run the demo."""
    print_section("ClickHouse Vector Store Demo")

    try:
        args = ClickHouseArgs.from_settings(settings)
    except ValueError as e:
        print(f"❌ ERROR: {e}")
        print("  Please set CLICKHOUSE_HOST in your .env file")
        sys.exit(1)

    embedder = pick_embedder()
    try:
        print_step(1, f"Seeding {args.database}.{args.table} from texts...")
        store = await ClickHouseStore.from_texts(TEXTS, METADATAS, embedder, args)
        print(f"✓ Inserted {len(TEXTS)} documents")

        print_step(2, "Similarity search without filter...")
        for doc, dist in await store.similarity_search_with_score("hello world", 1):
            print(f"    dist={dist:.4f} - {doc.page_content} {doc.metadata}")

        print_step(3, "Similarity search with filter metadata.name = '1'...")
        filtered = await store.similarity_search("hello world", 1, {"whereStr": "metadata.name = '1'"})
        for doc in filtered:
            print(f"    {doc.page_content} {doc.metadata}")
        await store.close()

        print_step(4, "Attaching to the existing table...")
        existing = await ClickHouseStore.from_existing_index(embedder, args)
        for doc in await existing.similarity_search("hello world", 1):
            print(f"    {doc.page_content} {doc.metadata}")
        await existing.close()
    finally:
        if isinstance(embedder, CohereProvider):
            await embedder.aclose()

    print_section("Demo Complete!")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n\nDemo interrupted by user.")
        sys.exit(0)
    except Exception as e:
        print(f"\n\n❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
