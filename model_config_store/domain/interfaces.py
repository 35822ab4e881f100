from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import List
from .models import ModelConfig, SearchHit


class DocumentStore(ABC):
    """Port for a searchable document store (e.g., Elasticsearch).

    Every call issues one request and returns a future; failures are set on the
    future as ``DocumentStoreError`` carrying a ``StoreErrorKind``.
    """

    @abstractmethod
    def create_only_write(self, index: str, doc_id: str, payload: bytes, refresh: bool = True) -> "Future[None]":
        """Create ``doc_id`` in ``index``; fails with CONFLICT if it already exists.

        ``refresh`` requests immediate searchability of the new document.
        """
        raise NotImplementedError

    @abstractmethod
    def search(self, index_pattern: str, doc_id: str, limit: int = 1) -> "Future[List[SearchHit]]":
        """Find documents with ID ``doc_id`` across ``index_pattern``.

        Hits are ordered by index name descending and truncated to ``limit``.
        Fails with INDEX_NOT_FOUND when the pattern resolves to no index.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_by_query(
        self,
        index_pattern: str,
        doc_id: str,
        abort_on_conflict: bool = False,
        refresh: bool = True,
    ) -> "Future[int]":
        """Delete every document with ID ``doc_id`` across ``index_pattern``; returns deleted count."""
        raise NotImplementedError


class PayloadCodec(ABC):
    """Port for turning model configs into storage payloads and back."""

    @abstractmethod
    def encode(self, config: ModelConfig) -> bytes:
        """Serialize ``config``.

        Raises:
            CodecError: When the config cannot be represented.
        """
        raise NotImplementedError

    @abstractmethod
    def decode(self, payload: bytes, lenient: bool = False) -> ModelConfig:
        """Parse ``payload``; strict mode rejects unknown fields.

        Raises:
            CodecError: When the payload cannot be reconstructed.
        """
        raise NotImplementedError

    def decode_lenient(self, payload: bytes) -> ModelConfig:
        return self.decode(payload, lenient=True)
