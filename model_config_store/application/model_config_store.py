from __future__ import annotations

from typing import Optional

from .completion import OnDone
from .dto import DeleteModelConfigRequest, GetModelConfigRequest, StoreModelConfigRequest
from .use_cases.delete_model_config import DeleteModelConfigUseCase
from .use_cases.get_model_config import GetModelConfigUseCase
from .use_cases.store_model_config import StoreModelConfigUseCase
from ..domain.errors import ContractError
from ..domain.index_patterns import matches_index_pattern
from ..domain.interfaces import DocumentStore, PayloadCodec
from ..domain.models import ModelConfig
from ..infrastructure.codec.json_codec import JsonPayloadCodec
from ..infrastructure.config import index_pattern as default_index_pattern
from ..infrastructure.config import write_index_name


class ModelConfigStore:
    """Persistence provider for model configs: store, get latest, delete.

    Each call issues exactly one request to the document store and invokes
    ``on_done`` exactly once with an ``Outcome``.
    """

    def __init__(
        self,
        documents: DocumentStore,
        codec: Optional[PayloadCodec] = None,
        write_index: Optional[str] = None,
        index_pattern: Optional[str] = None,
    ) -> None:
        self.write_index = write_index or write_index_name()
        self.index_pattern = index_pattern or default_index_pattern()
        if not matches_index_pattern(self.index_pattern, self.write_index):
            raise ContractError(
                f"write index [{self.write_index}] is not matched by index pattern [{self.index_pattern}]"
            )
        codec = codec or JsonPayloadCodec()
        self._store_uc = StoreModelConfigUseCase(documents, codec)
        self._get_uc = GetModelConfigUseCase(documents, codec)
        self._delete_uc = DeleteModelConfigUseCase(documents)

    def store(self, config: ModelConfig, on_done: OnDone) -> None:
        self._store_uc.execute(StoreModelConfigRequest(config=config, write_index=self.write_index), on_done)

    def get(self, model_id: str, on_done: OnDone) -> None:
        self._get_uc.execute(GetModelConfigRequest(model_id=model_id, index_pattern=self.index_pattern), on_done)

    def delete(self, model_id: str, on_done: OnDone) -> None:
        self._delete_uc.execute(
            DeleteModelConfigRequest(model_id=model_id, index_pattern=self.index_pattern), on_done
        )
