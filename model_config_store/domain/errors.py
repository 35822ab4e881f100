from __future__ import annotations

from enum import Enum
from typing import Optional


class ContractError(ValueError):
    """Raised when a request or setup violates documented contract (e.g., index naming)."""


class StoreErrorKind(str, Enum):
    """Tag carried by document store failures; used for disambiguation."""

    CONFLICT = "conflict"
    INDEX_NOT_FOUND = "index_not_found"
    OTHER = "other"


class DocumentStoreError(RuntimeError):
    """Raised (or set on a future) when the document store fails."""

    def __init__(self, kind: StoreErrorKind, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status = status


class CodecError(ValueError):
    """Raised when a payload cannot be encoded or parsed."""


def store_error_kind(exc: Optional[BaseException]) -> StoreErrorKind:
    """Return the tagged kind of ``exc``, following ``__cause__`` links."""
    seen = 0
    while exc is not None and seen < 10:
        if isinstance(exc, DocumentStoreError):
            return exc.kind
        exc = exc.__cause__
        seen += 1
    return StoreErrorKind.OTHER


class ErrorKind(str, Enum):
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    SERIALIZATION_FAILED = "serialization_failed"
    DESERIALIZATION_FAILED = "deserialization_failed"
    STORAGE_WRITE_FAILED = "storage_write_failed"
    STORAGE_READ_FAILED = "storage_read_failed"


class ModelConfigError(RuntimeError):
    """Base of the classified errors delivered to completion callbacks."""

    kind: ErrorKind
    template = "model config [{}] operation failed"

    def __init__(self, model_id: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(self.template.format(model_id))
        self.model_id = model_id
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class AlreadyExists(ModelConfigError):
    kind = ErrorKind.ALREADY_EXISTS
    template = "model config [{}] already exists"


class NotFound(ModelConfigError):
    kind = ErrorKind.NOT_FOUND
    template = "could not find model config [{}]"


class SerializationFailed(ModelConfigError):
    kind = ErrorKind.SERIALIZATION_FAILED
    template = "failed to serialize model config [{}] for storage"


class DeserializationFailed(ModelConfigError):
    kind = ErrorKind.DESERIALIZATION_FAILED
    template = "failed to parse stored model config [{}]"


class StorageWriteFailed(ModelConfigError):
    kind = ErrorKind.STORAGE_WRITE_FAILED
    template = "failed to write model config [{}]"


class StorageReadFailed(ModelConfigError):
    kind = ErrorKind.STORAGE_READ_FAILED
    template = "failed to read model config [{}]"
