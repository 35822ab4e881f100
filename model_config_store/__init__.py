"""Persistence provider for versioned model configuration documents."""
from __future__ import annotations

from .application.completion import Outcome, completion_future
from .application.model_config_store import ModelConfigStore
from .domain.errors import (
    AlreadyExists,
    ContractError,
    DeserializationFailed,
    ErrorKind,
    ModelConfigError,
    NotFound,
    SerializationFailed,
    StorageReadFailed,
    StorageWriteFailed,
)
from .domain.models import ModelConfig
from .infrastructure.codec import JsonPayloadCodec
from .infrastructure.elasticsearch import ElasticsearchDocumentStore
from .infrastructure.memory import InMemoryDocumentStore

__all__ = [
    "AlreadyExists",
    "ContractError",
    "DeserializationFailed",
    "ElasticsearchDocumentStore",
    "ErrorKind",
    "InMemoryDocumentStore",
    "JsonPayloadCodec",
    "ModelConfig",
    "ModelConfigError",
    "ModelConfigStore",
    "NotFound",
    "Outcome",
    "SerializationFailed",
    "StorageReadFailed",
    "StorageWriteFailed",
    "completion_future",
]
