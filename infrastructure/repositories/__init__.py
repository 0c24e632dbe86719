from infrastructure.repositories.kv_document_repository import KvDocumentRepository
from infrastructure.repositories.record_codec import RECORD_VERSION, decode_document, encode_document

__all__ = [
    "KvDocumentRepository",
    "RECORD_VERSION",
    "decode_document",
    "encode_document",
]
