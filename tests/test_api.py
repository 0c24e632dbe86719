"""Tests for the HTTP adapter."""
from __future__ import annotations

import unittest
from typing import Mapping

from fastapi.testclient import TestClient

from domain.interfaces import Embedder
from infrastructure.config import Container
from infrastructure.repositories.kv_document_repository import KvDocumentRepository
from infrastructure.storage.in_memory_kv_store import InMemoryKeyValueStore
from ui.api.main import create_app


class StubEmbedder(Embedder):
    def __init__(self, vectors: Mapping[str, list[float]]) -> None:
        self._vectors = dict(vectors)

    @property
    def model_id(self) -> str:
        return "stub"

    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        if text not in self._vectors:
            raise ConnectionError("embedding service unavailable")
        return list(self._vectors[text])


class FailingWriteStore(InMemoryKeyValueStore):
    def put_if_absent(self, key: bytes, value: bytes) -> bool:
        raise OSError("disk full")


class TestApi(unittest.TestCase):
    def setUp(self) -> None:
        kv_store = InMemoryKeyValueStore()
        container = Container(
            kv_store=kv_store,
            document_store=KvDocumentRepository(kv_store),
            embedder=StubEmbedder({"The cat sat": [1.0, 0.0], "A dog ran": [0.0, 1.0], "cat": [1.0, 0.0]}),
            max_workers=2,
        )
        self.client = TestClient(create_app(container))

    def _ingest(self) -> None:
        response = self.client.post(
            "/collections/docs/documents:batch",
            json={
                "documents": [
                    {"id": "a", "text": "The cat sat", "metadata": {"source": "x"}},
                    {"id": "b", "text": "A dog ran", "metadata": {"source": "y", "page": 2, "draft": True}},
                ]
            },
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json(), {"ingested": 2})

    def test_create_collection(self):
        self.assertEqual(self.client.post("/collections", json={"name": "docs"}).status_code, 201)
        self._ingest()
        response = self.client.post("/collections", json={"name": "docs"})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "AlreadyExistsError")
        self.assertEqual(self.client.post("/collections", json={"name": "a:b"}).status_code, 400)

    def test_query_flow(self):
        self._ingest()
        response = self.client.post("/collections/docs/query", json={"text": "cat"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["match"]["id"], "a")
        self.assertAlmostEqual(body["score"], 1.0)

        body = self.client.post("/collections/docs/query", json={"text": "cat", "filter": {"source": "y"}}).json()
        self.assertEqual(body["match"]["id"], "b")
        self.assertEqual(body["match"]["metadata"], {"source": "y", "page": 2, "draft": True})

    def test_query_without_match(self):
        response = self.client.post("/collections/empty/query", json={"text": "cat"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"match": None, "score": None})

    def test_get_document(self):
        self._ingest()
        response = self.client.get("/collections/docs/documents/a")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["embedding"], [1.0, 0.0])
        self.assertEqual(self.client.get("/collections/docs/documents/zzz").status_code, 404)

    def test_error_mapping(self):
        response = self.client.post("/collections/docs/documents", json={"id": "u", "text": "unknown"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["error"], "EmbeddingFailedError")

        self.assertEqual(
            self.client.post("/collections/docs/documents", json={"id": "a", "text": "The cat sat"}).status_code,
            201,
        )
        self.assertEqual(
            self.client.post("/collections/docs/documents", json={"id": "a", "text": "The cat sat"}).status_code,
            409,
        )

    def test_batch_partial_failure(self):
        response = self.client.post(
            "/collections/docs/documents:batch",
            json={"documents": [{"id": "a", "text": "The cat sat"}, {"id": "u", "text": "unknown"}]},
        )
        self.assertEqual(response.status_code, 502)
        body = response.json()
        self.assertEqual(body["error"], "BatchIngestError")
        self.assertEqual(body["succeeded"], ["a"])
        self.assertEqual(body["failed"], ["u"])
        self.assertEqual(self.client.get("/collections/docs/documents/a").status_code, 200)

    def test_batch_storage_failure_is_internal_error(self):
        kv_store = FailingWriteStore()
        container = Container(
            kv_store=kv_store,
            document_store=KvDocumentRepository(kv_store),
            embedder=StubEmbedder({"The cat sat": [1.0, 0.0]}),
            max_workers=2,
        )
        client = TestClient(create_app(container))
        response = client.post(
            "/collections/docs/documents:batch",
            json={"documents": [{"id": "a", "text": "The cat sat"}]},
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "BatchIngestError")


if __name__ == "__main__":
    unittest.main()
