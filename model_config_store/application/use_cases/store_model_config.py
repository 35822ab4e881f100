from __future__ import annotations

from concurrent.futures import Future

from ..completion import Completion, OnDone, future_error
from ..dto import StoreModelConfigRequest
from ...domain.errors import (
    AlreadyExists,
    SerializationFailed,
    StorageWriteFailed,
    StoreErrorKind,
    store_error_kind,
)
from ...domain.interfaces import DocumentStore, PayloadCodec
from ...infrastructure.logging import get_logger

logger = get_logger("model_config_store.application.store")


class StoreModelConfigUseCase:
    """Use-case: serialize a config and create it in the write index (never overwrite)."""

    def __init__(self, store: DocumentStore, codec: PayloadCodec) -> None:
        self._store = store
        self._codec = codec

    def execute(self, req: StoreModelConfigRequest, on_done: OnDone) -> None:
        """
        Issues one create-only write with immediate refresh and reports through ``on_done``.

        Outcomes:
            value ``True`` once the store confirms the write;
            ``SerializationFailed`` if encoding fails (no request is sent);
            ``AlreadyExists`` on an ID conflict;
            ``StorageWriteFailed`` for anything else.
        """
        done: Completion[bool] = Completion(on_done)
        model_id = req.config.model_id
        try:
            payload = self._codec.encode(req.config)
        except Exception as e:
            logger.error("[%s] failed to serialize model config", model_id, exc_info=True)
            done.fail(SerializationFailed(model_id, e))
            return

        try:
            future = self._store.create_only_write(req.write_index, model_id, payload, refresh=True)
        except Exception as e:
            logger.error("[%s] failed to submit model config write", model_id, exc_info=True)
            done.fail(StorageWriteFailed(model_id, e))
            return
        future.add_done_callback(lambda f: self._on_written(f, model_id, done))

    @staticmethod
    def _on_written(future: Future, model_id: str, done: Completion[bool]) -> None:
        error = future_error(future)
        if error is None:
            done.succeed(True)
            return
        logger.error("[%s] failed to store model config: %s", model_id, error)
        if store_error_kind(error) is StoreErrorKind.CONFLICT:
            done.fail(AlreadyExists(model_id))
        else:
            done.fail(StorageWriteFailed(model_id, error))
