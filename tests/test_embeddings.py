"""
Tests for the embedding providers.
"""
import asyncio
import json

import httpx
import numpy as np
import pytest

from clickhouse_vectorstore.adapters.embedding_providers import cohere_provider
from clickhouse_vectorstore.adapters.embedding_providers.base import Embeddings
from clickhouse_vectorstore.adapters.embedding_providers.cohere_provider import CohereProvider
from clickhouse_vectorstore.adapters.embedding_providers.hash_provider import DeterministicHashEmbedding


class TestDeterministicHashEmbedding:
    def test_is_embeddings(self):
        assert isinstance(DeterministicHashEmbedding(), Embeddings)

    def test_same_text_same_vector(self):
        a = DeterministicHashEmbedding(dimension=16)
        b = DeterministicHashEmbedding(dimension=16)
        assert asyncio.run(a.embed_query("Hello world")) == asyncio.run(b.embed_query("Hello world"))

    def test_dimension_and_unit_norm(self):
        v = asyncio.run(DeterministicHashEmbedding(dimension=32).embed_query("x"))
        assert len(v) == 32
        assert np.linalg.norm(v) == pytest.approx(1.0, abs=1e-5)

    def test_documents_match_query(self):
        e = DeterministicHashEmbedding(dimension=4)
        docs = asyncio.run(e.embed_documents(["a", "b"]))
        assert docs[0] == asyncio.run(e.embed_query("a"))
        assert docs[0] != docs[1]

    def test_bad_dimension(self):
        with pytest.raises(ValueError):
            DeterministicHashEmbedding(dimension=0)


def _mock_cohere(seen):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append((request, body))
        return httpx.Response(200, json={"embeddings": [[float(i), 0.5] for i in range(len(body["texts"]))]})
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestCohereProvider:
    def test_embed_documents_is_one_batch_call(self):
        seen = []
        p = CohereProvider(api_key="k", client=_mock_cohere(seen))
        vectors = asyncio.run(p.embed_documents(["a", "b", "c"]))

        assert vectors == [[0.0, 0.5], [1.0, 0.5], [2.0, 0.5]]
        assert len(seen) == 1
        request, body = seen[0]
        assert request.headers["Authorization"] == "Bearer k"
        assert body["texts"] == ["a", "b", "c"]
        assert body["input_type"] == "search_document"
        assert body["model"] == "embed-english-v3.0"

    def test_embed_query(self):
        seen = []
        p = CohereProvider(api_key="k", client=_mock_cohere(seen))
        assert asyncio.run(p.embed_query("hello")) == [0.0, 0.5]
        assert seen[0][1]["input_type"] == "search_query"

    def test_empty_batch_skips_request(self):
        seen = []
        p = CohereProvider(api_key="k", client=_mock_cohere(seen))
        assert asyncio.run(p.embed_documents([])) == []
        assert seen == []

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(cohere_provider.settings, "COHERE_API_KEY", None)
        p = CohereProvider(client=_mock_cohere([]))
        with pytest.raises(ValueError):
            asyncio.run(p.embed_query("hello"))

    def test_http_error_propagates(self):
        def handler(request):
            return httpx.Response(401, json={"message": "invalid api token"})
        p = CohereProvider(api_key="bad", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(p.embed_query("hello"))

    def test_aclose_closes_http_client(self):
        client = _mock_cohere([])
        p = CohereProvider(api_key="k", client=client)
        asyncio.run(p.aclose())
        assert client.is_closed
