from __future__ import annotations

from concurrent.futures import Future

from ..completion import Completion, OnDone, future_error
from ..dto import DeleteModelConfigRequest
from ...domain.errors import NotFound, StorageWriteFailed, StoreErrorKind, store_error_kind
from ...domain.interfaces import DocumentStore
from ...infrastructure.logging import get_logger

logger = get_logger("model_config_store.application.delete")


class DeleteModelConfigUseCase:
    """Use-case: delete every version of a config across the index pattern."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def execute(self, req: DeleteModelConfigRequest, on_done: OnDone) -> None:
        done: Completion[bool] = Completion(on_done)
        model_id = req.model_id
        try:
            future = self._store.delete_by_query(
                req.index_pattern, model_id, abort_on_conflict=False, refresh=True
            )
        except Exception as e:
            logger.error("[%s] failed to submit model config delete", model_id, exc_info=True)
            done.fail(StorageWriteFailed(model_id, e))
            return
        future.add_done_callback(lambda f: self._on_deleted(f, model_id, done))

    @staticmethod
    def _on_deleted(future: Future, model_id: str, done: Completion[bool]) -> None:
        error = future_error(future)
        if error is not None:
            if store_error_kind(error) is StoreErrorKind.INDEX_NOT_FOUND:
                done.fail(NotFound(model_id))
                return
            logger.error("[%s] failed to delete model config: %s", model_id, error)
            done.fail(StorageWriteFailed(model_id, error))
            return
        if future.result() == 0:
            done.fail(NotFound(model_id))
            return
        done.succeed(True)
