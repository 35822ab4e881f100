from __future__ import annotations

from concurrent.futures import Future

from ..completion import Completion, OnDone, future_error
from ..dto import GetModelConfigRequest
from ...domain.errors import (
    DeserializationFailed,
    NotFound,
    StorageReadFailed,
    StoreErrorKind,
    store_error_kind,
)
from ...domain.interfaces import DocumentStore, PayloadCodec
from ...domain.models import ModelConfig
from ...infrastructure.logging import get_logger

logger = get_logger("model_config_store.application.get")


class GetModelConfigUseCase:
    """Use-case: fetch the latest version of a config across the index pattern."""

    def __init__(self, store: DocumentStore, codec: PayloadCodec) -> None:
        self._store = store
        self._codec = codec

    def execute(self, req: GetModelConfigRequest, on_done: OnDone) -> None:
        """
        Searches the pattern for ``model_id`` (newest index first, one hit) and parses it leniently.

        A pattern resolving to no index is reported as ``NotFound``, same as zero hits.
        """
        done: Completion[ModelConfig] = Completion(on_done)
        model_id = req.model_id
        try:
            future = self._store.search(req.index_pattern, model_id, limit=1)
        except Exception as e:
            logger.error("[%s] failed to submit model config search", model_id, exc_info=True)
            done.fail(StorageReadFailed(model_id, e))
            return
        future.add_done_callback(lambda f: self._on_searched(f, model_id, done))

    def _on_searched(self, future: Future, model_id: str, done: Completion[ModelConfig]) -> None:
        error = future_error(future)
        if error is not None:
            if store_error_kind(error) is StoreErrorKind.INDEX_NOT_FOUND:
                done.fail(NotFound(model_id))
                return
            logger.error("[%s] failed to search for model config: %s", model_id, error)
            done.fail(StorageReadFailed(model_id, error))
            return

        hits = future.result()
        if not hits:
            done.fail(NotFound(model_id))
            return
        try:
            config = self._codec.decode_lenient(hits[0].source)
        except Exception as e:
            logger.error("[%s] failed to parse model config from [%s]", model_id, hits[0].index, exc_info=True)
            done.fail(DeserializationFailed(model_id, e))
            return
        done.succeed(config)
