"""FastAPI layer that exposes collection, ingest and query operations.

Run with ``uvicorn ui.api.main:create_app --factory``; the container is built
from ``VECTORKV_*`` environment variables.
"""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from application.use_cases.collections import create_collection
from application.use_cases.ingest_documents import add_document, add_documents
from application.use_cases.search import query
from domain.cancellation import CancellationToken
from domain.entities import Document, MetadataValue, NewDocument
from domain.errors import (
    AlreadyExistsError,
    BatchIngestError,
    CorruptRecordError,
    EmbeddingFailedError,
    InvalidMetadataError,
    InvalidNameError,
    NotFoundError,
    OperationCancelledError,
    VectorStoreError,
)
from infrastructure.config import Container, ContainerConfig, build_default_container
from ui.logging_utils import setup_logging


class CollectionPayload(BaseModel):
    name: str


class DocumentPayload(BaseModel):
    id: str
    text: str
    metadata: dict[str, MetadataValue] = Field(default_factory=dict)


class BatchPayload(BaseModel):
    documents: list[DocumentPayload]
    timeout: float | None = Field(default=None, gt=0)


class DocumentResponse(BaseModel):
    id: str
    text: str
    embedding: list[float]
    metadata: dict[str, MetadataValue]


class BatchResponse(BaseModel):
    ingested: int


class QueryPayload(BaseModel):
    text: str
    filter: dict[str, MetadataValue] = Field(default_factory=dict)
    timeout: float | None = Field(default=None, gt=0)


class QueryResponse(BaseModel):
    match: DocumentResponse | None = None
    score: float | None = None


_STATUS_BY_ERROR: list[tuple[type[VectorStoreError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
    (InvalidNameError, status.HTTP_400_BAD_REQUEST),
    (InvalidMetadataError, status.HTTP_400_BAD_REQUEST),
    (EmbeddingFailedError, status.HTTP_502_BAD_GATEWAY),
    (OperationCancelledError, status.HTTP_504_GATEWAY_TIMEOUT),
    (CorruptRecordError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def _status_for(exc: VectorStoreError) -> int:
    if isinstance(exc, BatchIngestError):
        # The batch reports its first failure.
        if isinstance(exc.first, VectorStoreError):
            return _status_for(exc.first)
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _to_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        text=document.text,
        embedding=document.embedding,
        metadata=document.metadata,
    )


def _token(timeout: float | None) -> CancellationToken | None:
    return CancellationToken.with_timeout(timeout) if timeout is not None else None


def create_app(container: Container | None = None) -> FastAPI:
    if container is None:
        setup_logging()
        container = build_default_container(ContainerConfig.from_env())

    app = FastAPI(title="vectorkv API")

    @app.exception_handler(VectorStoreError)
    def _handle_store_error(_request: Request, exc: VectorStoreError) -> JSONResponse:
        body: dict[str, object] = {"error": type(exc).__name__, "detail": str(exc)}
        if isinstance(exc, BatchIngestError):
            body["succeeded"] = exc.succeeded
            body["failed"] = [document_id for document_id, _ in exc.failures]
        return JSONResponse(status_code=_status_for(exc), content=body)

    @app.post("/collections", status_code=status.HTTP_201_CREATED)
    def create_collection_endpoint(payload: CollectionPayload) -> dict[str, str]:
        create_collection(payload.name, document_store=container.document_store)
        return {"name": payload.name}

    @app.post(
        "/collections/{collection}/documents",
        response_model=DocumentResponse,
        status_code=status.HTTP_201_CREATED,
    )
    def add_document_endpoint(collection: str, payload: DocumentPayload) -> DocumentResponse:
        document = add_document(
            collection,
            payload.id,
            payload.text,
            payload.metadata,
            embedder=container.embedder,
            document_store=container.document_store,
        )
        return _to_response(document)

    @app.post(
        "/collections/{collection}/documents:batch",
        response_model=BatchResponse,
        status_code=status.HTTP_201_CREATED,
    )
    def add_documents_endpoint(collection: str, payload: BatchPayload) -> BatchResponse:
        stored = add_documents(
            collection,
            [NewDocument(id=doc.id, text=doc.text, metadata=doc.metadata) for doc in payload.documents],
            embedder=container.embedder,
            document_store=container.document_store,
            max_workers=container.max_workers,
            cancellation=_token(payload.timeout),
        )
        return BatchResponse(ingested=len(stored))

    @app.get("/collections/{collection}/documents/{document_id}", response_model=DocumentResponse)
    def get_document_endpoint(collection: str, document_id: str) -> DocumentResponse:
        return _to_response(container.document_store.get(collection, document_id))

    @app.post("/collections/{collection}/query", response_model=QueryResponse)
    def query_endpoint(collection: str, payload: QueryPayload) -> QueryResponse:
        best = query(
            collection,
            payload.text,
            payload.filter,
            embedder=container.embedder,
            document_store=container.document_store,
            cancellation=_token(payload.timeout),
        )
        if best is None:
            return QueryResponse()
        return QueryResponse(match=_to_response(best.document), score=best.score)

    return app


__all__ = ["create_app"]
