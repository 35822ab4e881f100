from __future__ import annotations

import json
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from ...domain.errors import DocumentStoreError, StoreErrorKind
from ...domain.interfaces import DocumentStore
from ...domain.models import SearchHit
from ..config import elasticsearch_url, http_timeout_seconds, max_workers
from ..logging import get_logger

logger = get_logger("model_config_store.infrastructure.elasticsearch")

_JSON_HEADERS = {"Content-Type": "application/json"}

_CONFLICT_TYPES = {"version_conflict_engine_exception"}
_INDEX_NOT_FOUND_TYPES = {"index_not_found_exception"}


def _error_type(body: Any) -> Optional[str]:
    """Extract ``error.type`` from an Elasticsearch error body, if present."""
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, dict):
        t = err.get("type")
        return str(t) if t else None
    return None


def error_from_response(r: requests.Response) -> DocumentStoreError:
    """Classify a failed HTTP response into a tagged ``DocumentStoreError``."""
    try:
        body = r.json()
    except ValueError:
        body = None
    etype = _error_type(body)
    if r.status_code == 409 or etype in _CONFLICT_TYPES:
        kind = StoreErrorKind.CONFLICT
    elif etype in _INDEX_NOT_FOUND_TYPES:
        kind = StoreErrorKind.INDEX_NOT_FOUND
    else:
        kind = StoreErrorKind.OTHER
    reason = body.get("error") if isinstance(body, dict) else (r.text or "")[:500]
    return DocumentStoreError(kind, f"HTTP {r.status_code} from {r.url}: {reason}", status=r.status_code)


class ElasticsearchDocumentStore(DocumentStore):
    """Document store adapter for the Elasticsearch REST API.

    Requests run on a thread pool so each call returns a future immediately.
    The pool is owned (and shut down by ``close``) unless one is injected.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._base = (base_url or elasticsearch_url()).rstrip("/")
        self._timeout = float(timeout or http_timeout_seconds())
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers(), thread_name_prefix="model-config-store"
        )

    def __enter__(self) -> "ElasticsearchDocumentStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def create_only_write(self, index: str, doc_id: str, payload: bytes, refresh: bool = True) -> "Future[None]":
        return self._executor.submit(self._create, index, doc_id, payload, refresh)

    def search(self, index_pattern: str, doc_id: str, limit: int = 1) -> "Future[List[SearchHit]]":
        return self._executor.submit(self._search, index_pattern, doc_id, limit)

    def delete_by_query(
        self,
        index_pattern: str,
        doc_id: str,
        abort_on_conflict: bool = False,
        refresh: bool = True,
    ) -> "Future[int]":
        return self._executor.submit(self._delete_by_query, index_pattern, doc_id, abort_on_conflict, refresh)

    # --- blocking request bodies, run on the pool ---
    def _create(self, index: str, doc_id: str, payload: bytes, refresh: bool) -> None:
        url = f"{self._base}/{index}/_create/{quote(doc_id, safe='')}"
        params = {"refresh": "true" if refresh else "false"}
        self._call(requests.put, url, params=params, data=payload, headers=_JSON_HEADERS)

    def _search(self, index_pattern: str, doc_id: str, limit: int) -> List[SearchHit]:
        body = {
            "query": {"constant_score": {"filter": {"ids": {"values": [doc_id]}}}},
            # latest generation first
            "sort": [{"_index": {"order": "desc"}}],
            "size": int(limit),
        }
        data = self._call(requests.post, f"{self._base}/{index_pattern}/_search", json=body)
        hits = (data.get("hits") or {}).get("hits") or []
        return [
            SearchHit(
                index=str(h.get("_index", "")),
                doc_id=str(h.get("_id", "")),
                source=json.dumps(h.get("_source") or {}).encode("utf-8"),
            )
            for h in hits
        ]

    def _delete_by_query(self, index_pattern: str, doc_id: str, abort_on_conflict: bool, refresh: bool) -> int:
        params = {
            "conflicts": "abort" if abort_on_conflict else "proceed",
            "refresh": "true" if refresh else "false",
        }
        body = {"query": {"ids": {"values": [doc_id]}}}
        data = self._call(
            requests.post, f"{self._base}/{index_pattern}/_delete_by_query", params=params, json=body
        )
        conflicts = int(data.get("version_conflicts") or 0)
        if conflicts:
            logger.warning("[%s] delete skipped %d version conflicts", doc_id, conflicts)
        return int(data.get("deleted") or 0)

    def _call(self, method: Callable[..., requests.Response], url: str, **kwargs) -> Dict[str, Any]:
        try:
            r = method(url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise DocumentStoreError(StoreErrorKind.OTHER, f"request to {url} failed: {e}") from e
        if r.status_code >= 400:
            raise error_from_response(r)
        try:
            return r.json() or {}
        except ValueError:
            return {}
