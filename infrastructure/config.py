"""Dependency wiring for the vectorkv store."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Mapping

from domain.interfaces import DocumentRepository, Embedder, KeyValueStore
from infrastructure.embedding.hash_embedder import HashEmbedder
from infrastructure.embedding.openai_embedder import OpenAIEmbedder, OpenAIEmbedderConfig
from infrastructure.repositories.kv_document_repository import KvDocumentRepository
from infrastructure.storage.in_memory_kv_store import InMemoryKeyValueStore
from infrastructure.storage.sqlite_kv_store import SqliteKeyValueStore

KvStoreName = Literal["sqlite", "memory"]
EmbedderName = Literal["openai", "hash", "sentence-transformers"]

ENV_PREFIX = "VECTORKV_"


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    kv_store: KeyValueStore
    document_store: DocumentRepository
    embedder: Embedder
    max_workers: int

    def close(self) -> None:
        self.kv_store.close()


@dataclass(slots=True)
class ContainerConfig:
    """Configuration for selecting the storage engine and the embedder."""

    db_path: str = "vectorkv.db"
    kv_store: KvStoreName = "sqlite"
    embedder: EmbedderName = "openai"
    embedding_dimension: int = 16
    openai_model: str = "text-embedding-ada-002"
    openai_api_key: str | None = None
    sentence_transformers_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    request_timeout: float = 60.0
    max_workers: int = 8

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ContainerConfig":
        """Build a config from ``VECTORKV_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        def _get(name: str, default: str | None) -> str | None:
            return env.get(f"{ENV_PREFIX}{name}", default)

        try:
            return cls(
                db_path=_get("DB_PATH", defaults.db_path),
                kv_store=_get("KV_STORE", defaults.kv_store),
                embedder=_get("EMBEDDER", defaults.embedder),
                embedding_dimension=int(_get("EMBEDDING_DIMENSION", str(defaults.embedding_dimension))),
                openai_model=_get("OPENAI_MODEL", defaults.openai_model),
                openai_api_key=env.get("OPENAI_API_KEY", defaults.openai_api_key),
                sentence_transformers_model=_get("ST_MODEL", defaults.sentence_transformers_model),
                request_timeout=float(_get("REQUEST_TIMEOUT", str(defaults.request_timeout))),
                max_workers=int(_get("MAX_WORKERS", str(defaults.max_workers))),
            )
        except ValueError as exc:
            raise ValueError(f"Invalid {ENV_PREFIX}* configuration: {exc}") from exc


def _build_sentence_transformers(cfg: ContainerConfig) -> Embedder:
    from infrastructure.embedding.sentence_transformers_embedder import (  # noqa: PLC0415
        SentenceTransformersConfig,
        SentenceTransformersEmbedder,
    )

    return SentenceTransformersEmbedder(SentenceTransformersConfig(model_name=cfg.sentence_transformers_model))


_KV_STORE_FACTORIES: dict[KvStoreName, Callable[[ContainerConfig], KeyValueStore]] = {
    "sqlite": lambda cfg: SqliteKeyValueStore(db_path=Path(cfg.db_path)),
    "memory": lambda cfg: InMemoryKeyValueStore(),
}

_EMBEDDER_FACTORIES: dict[EmbedderName, Callable[[ContainerConfig], Embedder]] = {
    "openai": lambda cfg: OpenAIEmbedder(
        OpenAIEmbedderConfig(model=cfg.openai_model, api_key=cfg.openai_api_key, timeout=cfg.request_timeout)
    ),
    "hash": lambda cfg: HashEmbedder(dimension=cfg.embedding_dimension),
    "sentence-transformers": _build_sentence_transformers,
}


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or ContainerConfig()
    if cfg.max_workers <= 0:
        raise ValueError("max_workers must be positive")
    try:
        kv_factory = _KV_STORE_FACTORIES[cfg.kv_store]
    except KeyError as exc:
        raise ValueError(f"Unknown kv store '{cfg.kv_store}'") from exc
    try:
        embedder_factory = _EMBEDDER_FACTORIES[cfg.embedder]
    except KeyError as exc:
        raise ValueError(f"Unknown embedder '{cfg.embedder}'") from exc

    kv_store = kv_factory(cfg)
    return Container(
        kv_store=kv_store,
        document_store=KvDocumentRepository(kv_store),
        embedder=embedder_factory(cfg),
        max_workers=cfg.max_workers,
    )


__all__ = ["Container", "ContainerConfig", "build_default_container"]
