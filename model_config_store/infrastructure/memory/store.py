from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Dict, List

from ...domain.errors import DocumentStoreError, StoreErrorKind
from ...domain.index_patterns import resolve_index_pattern
from ...domain.interfaces import DocumentStore
from ...domain.models import SearchHit


def _completed(value) -> Future:
    f: Future = Future()
    f.set_result(value)
    return f


def _failed(exc: BaseException) -> Future:
    f: Future = Future()
    f.set_exception(exc)
    return f


class InMemoryDocumentStore(DocumentStore):
    """Process-local document store for tests and local runs.

    Mirrors the semantics the provider relies on: create-only writes are atomic
    per (index, id), writes are immediately visible, patterns resolve as in
    ``domain.index_patterns`` and a pattern that resolves to no index fails
    with INDEX_NOT_FOUND. Futures are returned already completed.
    """

    def __init__(self) -> None:
        self._indices: Dict[str, Dict[str, bytes]] = {}
        self._lock = threading.Lock()

    def create_index(self, name: str) -> None:
        """Create an empty index (e.g., a new generation after rollover)."""
        with self._lock:
            self._indices.setdefault(name, {})

    def indices(self) -> List[str]:
        with self._lock:
            return sorted(self._indices)

    def count(self, index: str) -> int:
        with self._lock:
            return len(self._indices.get(index, {}))

    def create_only_write(self, index: str, doc_id: str, payload: bytes, refresh: bool = True) -> "Future[None]":
        with self._lock:
            docs = self._indices.setdefault(index, {})
            if doc_id in docs:
                return _failed(DocumentStoreError(
                    StoreErrorKind.CONFLICT, f"[{doc_id}]: version conflict, document already exists", status=409
                ))
            docs[doc_id] = bytes(payload)
        return _completed(None)

    def search(self, index_pattern: str, doc_id: str, limit: int = 1) -> "Future[List[SearchHit]]":
        with self._lock:
            names = self._resolve(index_pattern)
            if not names:
                return _failed(_index_not_found(index_pattern))
            hits = [
                SearchHit(index=n, doc_id=doc_id, source=self._indices[n][doc_id])
                for n in sorted(names, reverse=True)
                if doc_id in self._indices[n]
            ]
        return _completed(hits[: max(int(limit), 0)])

    def delete_by_query(
        self,
        index_pattern: str,
        doc_id: str,
        abort_on_conflict: bool = False,
        refresh: bool = True,
    ) -> "Future[int]":
        deleted = 0
        with self._lock:
            names = self._resolve(index_pattern)
            if not names:
                return _failed(_index_not_found(index_pattern))
            for n in names:
                if self._indices[n].pop(doc_id, None) is not None:
                    deleted += 1
        return _completed(deleted)

    def _resolve(self, index_pattern: str) -> List[str]:
        return resolve_index_pattern(index_pattern, self._indices)


def _index_not_found(index_pattern: str) -> DocumentStoreError:
    return DocumentStoreError(StoreErrorKind.INDEX_NOT_FOUND, f"no such index [{index_pattern}]", status=404)
