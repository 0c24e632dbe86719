"""Tests for container configuration and wiring."""
from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from infrastructure.config import ContainerConfig, build_default_container
from infrastructure.embedding.hash_embedder import HashEmbedder
from infrastructure.embedding.openai_embedder import OpenAIEmbedder
from infrastructure.repositories.kv_document_repository import KvDocumentRepository
from infrastructure.storage.in_memory_kv_store import InMemoryKeyValueStore
from infrastructure.storage.sqlite_kv_store import SqliteKeyValueStore


class TestContainerConfig(unittest.TestCase):
    def test_from_env_reads_prefixed_variables(self):
        cfg = ContainerConfig.from_env(
            {
                "VECTORKV_DB_PATH": "/tmp/x.db",
                "VECTORKV_KV_STORE": "memory",
                "VECTORKV_EMBEDDER": "hash",
                "VECTORKV_EMBEDDING_DIMENSION": "8",
                "VECTORKV_MAX_WORKERS": "3",
                "OPENAI_API_KEY": "sk-test",
            }
        )
        self.assertEqual(cfg.db_path, "/tmp/x.db")
        self.assertEqual(cfg.kv_store, "memory")
        self.assertEqual(cfg.embedder, "hash")
        self.assertEqual(cfg.embedding_dimension, 8)
        self.assertEqual(cfg.max_workers, 3)
        self.assertEqual(cfg.openai_api_key, "sk-test")

    def test_from_env_defaults(self):
        self.assertEqual(ContainerConfig.from_env({}), ContainerConfig())

    def test_from_env_rejects_bad_numbers(self):
        with self.assertRaises(ValueError):
            ContainerConfig.from_env({"VECTORKV_MAX_WORKERS": "many"})


class TestBuildDefaultContainer(unittest.TestCase):
    def test_memory_store_with_hash_embedder(self):
        container = build_default_container(ContainerConfig(kv_store="memory", embedder="hash", embedding_dimension=4))
        self.assertIsInstance(container.kv_store, InMemoryKeyValueStore)
        self.assertIsInstance(container.document_store, KvDocumentRepository)
        self.assertIsInstance(container.embedder, HashEmbedder)
        self.assertEqual(len(container.embedder.embed("hello")), 4)

    def test_sqlite_store_with_openai_embedder(self):
        with tempfile.TemporaryDirectory() as tmp:
            db_path = Path(tmp) / "nested" / "vectorkv.db"
            container = build_default_container(ContainerConfig(db_path=str(db_path), embedder="openai"))
            self.assertIsInstance(container.kv_store, SqliteKeyValueStore)
            self.assertIsInstance(container.embedder, OpenAIEmbedder)
            self.assertTrue(db_path.exists())
            container.close()

    def test_unknown_names_raise(self):
        with self.assertRaises(ValueError):
            build_default_container(ContainerConfig(kv_store="pebble"))  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            build_default_container(ContainerConfig(kv_store="memory", embedder="word2vec"))  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            build_default_container(ContainerConfig(kv_store="memory", max_workers=0))


if __name__ == "__main__":
    unittest.main()
