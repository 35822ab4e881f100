from __future__ import annotations

from dataclasses import dataclass
from ..domain.models import ModelConfig


@dataclass(frozen=True)
class StoreModelConfigRequest:
    config: ModelConfig
    write_index: str


@dataclass(frozen=True)
class GetModelConfigRequest:
    model_id: str
    index_pattern: str


@dataclass(frozen=True)
class DeleteModelConfigRequest:
    model_id: str
    index_pattern: str
