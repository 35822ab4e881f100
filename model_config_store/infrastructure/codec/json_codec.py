from __future__ import annotations

import io
import json
from dataclasses import fields
from typing import Any, Dict

from ...domain.errors import CodecError
from ...domain.interfaces import PayloadCodec
from ...domain.models import ModelConfig

DOC_TYPE_FIELD = "doc_type"
DOC_TYPE = "model_config"

_FIELD_NAMES = tuple(f.name for f in fields(ModelConfig))


class JsonPayloadCodec(PayloadCodec):
    """JSON codec for model configs as stored in the document store.

    Encoding and decoding share one set of field checks, so anything ``encode``
    accepts comes back from ``decode`` equal to the original config.
    """

    def encode(self, config: ModelConfig) -> bytes:
        tags = config.tags
        if not isinstance(tags, (tuple, list)):
            raise CodecError(f"cannot encode model config [{config.model_id}]: tags must be a sequence of strings")
        doc: Dict[str, Any] = {DOC_TYPE_FIELD: DOC_TYPE}
        for name in _FIELD_NAMES:
            value = list(tags) if name == "tags" else getattr(config, name)
            if value is not None:
                doc[name] = value
        try:
            _check_fields(doc)
            for name in ("metadata", "definition"):
                _check_json_value(doc.get(name), name)
        except CodecError as e:
            raise CodecError(f"cannot encode model config [{config.model_id}]: {e}") from e

        with io.StringIO() as out:
            try:
                json.dump(doc, out, allow_nan=False, ensure_ascii=False, sort_keys=True)
            except (TypeError, ValueError) as e:
                raise CodecError(f"cannot encode model config [{config.model_id}]: {e}") from e
            return out.getvalue().encode("utf-8")

    def decode(self, payload: bytes, lenient: bool = False) -> ModelConfig:
        try:
            doc = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise CodecError(f"payload is not valid JSON: {e}") from e
        if not isinstance(doc, dict):
            raise CodecError(f"payload must be a JSON object, got {type(doc).__name__}")

        unknown = sorted(k for k in doc if k not in _FIELD_NAMES and k != DOC_TYPE_FIELD)
        if unknown and not lenient:
            raise CodecError(f"unknown fields: {', '.join(unknown)}")

        _check_fields(doc)
        return ModelConfig(
            model_id=doc["model_id"],
            created_by=doc.get("created_by"),
            version=doc.get("version"),
            description=doc.get("description"),
            create_time=doc.get("create_time"),
            tags=tuple(doc.get("tags") or ()),
            metadata=doc.get("metadata") or {},
            definition=doc.get("definition"),
        )


def _check_fields(doc: Dict[str, Any]) -> None:
    """Validate the known fields of a JSON-shaped config document."""
    model_id = doc.get("model_id")
    if not isinstance(model_id, str) or not model_id.strip():
        raise CodecError("model_id must be a non-empty string")
    for name in ("created_by", "version", "description"):
        _optional(doc, name, str)
    create_time = doc.get("create_time")
    # bool is an int subclass; reject it explicitly
    if create_time is not None and (isinstance(create_time, bool) or not isinstance(create_time, int)):
        raise CodecError("create_time must be an integer (epoch millis)")
    tags = doc.get("tags")
    if tags is not None and (not isinstance(tags, list) or not all(isinstance(t, str) for t in tags)):
        raise CodecError("tags must be a list of strings")
    _optional(doc, "metadata", dict)
    _optional(doc, "definition", dict)


def _check_json_value(value: Any, path: str) -> None:
    """Reject values JSON would convert (tuples, non-string keys) or cannot hold."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise CodecError(f"{path} has non-string key {k!r}")
            _check_json_value(v, f"{path}.{k}")
        return
    if isinstance(value, list):
        for i, v in enumerate(value):
            _check_json_value(v, f"{path}[{i}]")
        return
    raise CodecError(f"{path} holds unsupported {type(value).__name__} value")


def _optional(doc: Dict[str, Any], name: str, typ: type):
    value = doc.get(name)
    if value is not None and not isinstance(value, typ):
        raise CodecError(f"{name} must be of type {typ.__name__}")
    return value
