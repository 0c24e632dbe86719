"""Ingest a couple of documents and run a filtered query against them."""
from __future__ import annotations

import argparse
import logging

from application.use_cases.ingest_documents import add_documents
from application.use_cases.search import query
from domain.entities import NewDocument
from domain.errors import BatchIngestError
from infrastructure.config import ContainerConfig, build_default_container
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)

DEMO_DOCUMENTS = (
    NewDocument(id="doc3", text="The Manifold on the Moonrings", metadata={"source": "Notion"}),
    NewDocument(id="doc4", text="Bettymore Bought Some MoreButter", metadata={"source": "Notion"}),
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--collection", default="MyTestCollection", help="Collection to use (default: MyTestCollection)")
    parser.add_argument("--query", default="Moon", help="Query text (default: Moon)")
    parser.add_argument("--source", default="Notion", help="Value of the 'source' metadata filter")
    parser.add_argument(
        "--embedder",
        choices=("openai", "hash", "sentence-transformers"),
        default=None,
        help="Override VECTORKV_EMBEDDER.",
    )
    return parser.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()
    config = ContainerConfig.from_env()
    if args.embedder:
        config.embedder = args.embedder
    container = build_default_container(config)

    try:
        add_documents(
            args.collection,
            list(DEMO_DOCUMENTS),
            embedder=container.embedder,
            document_store=container.document_store,
            max_workers=container.max_workers,
        )
    except BatchIngestError as exc:
        logger.error("Error adding documents: %s", exc)

    best = query(
        args.collection,
        args.query,
        {"source": args.source},
        embedder=container.embedder,
        document_store=container.document_store,
    )
    if best is None:
        print(f"No document matches query {args.query!r}")
    else:
        print(f"Nearest document to query {args.query!r} is ID: {best.document.id} : {best.document.text} (score {best.score:.4f})")
    container.close()


if __name__ == "__main__":
    main()
