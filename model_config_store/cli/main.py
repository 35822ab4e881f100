from __future__ import annotations

import json
import sys
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

from ..application.completion import OnDone, Outcome, completion_future
from ..application.model_config_store import ModelConfigStore
from ..domain.errors import CodecError, ErrorKind
from ..infrastructure.codec.json_codec import JsonPayloadCodec
from ..infrastructure.config import http_timeout_seconds
from ..infrastructure.elasticsearch.client import ElasticsearchDocumentStore
from ..infrastructure.logging import get_logger
from .parsers import build_parser

logger = get_logger("model_config_store.cli")

_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.SERIALIZATION_FAILED: 400,
    ErrorKind.DESERIALIZATION_FAILED: 500,
    ErrorKind.STORAGE_WRITE_FAILED: 500,
    ErrorKind.STORAGE_READ_FAILED: 500,
}


def status_code(kind: ErrorKind) -> int:
    return _STATUS_CODES.get(kind, 500)


# requests applies its timeout to connect and to each read separately
_WAIT_MARGIN_SECONDS = 5.0


def operation_wait_seconds(http_timeout: float) -> float:
    """How long the CLI waits for an outcome, given the per-request HTTP timeout."""
    return 2 * float(http_timeout) + _WAIT_MARGIN_SECONDS


def _await(start: Callable[[OnDone], None], timeout: float) -> Outcome:
    """Start an operation with a future-backed callback and wait for its outcome."""
    future, on_done = completion_future()
    start(on_done)
    return future.result(timeout=timeout)


def _report(outcome: Outcome, ok_body: Dict[str, Any]) -> int:
    if outcome.ok:
        print(json.dumps({"status": "ok", **ok_body}, indent=2))
        return 0
    err = outcome.error
    print(json.dumps({
        "status": "error",
        "kind": err.kind.value,
        "status_code": status_code(err.kind),
        "model_id": err.model_id,
        "error": str(err),
    }))
    return 1


def _read_source(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def store_config(ns, provider: ModelConfigStore, timeout: float) -> int:
    """Read a JSON config (strictly parsed) and create it in the write index."""
    try:
        config = JsonPayloadCodec().decode(_read_source(ns.file), lenient=False)
    except (OSError, CodecError) as ex:
        print(json.dumps({"status": "error", "error": f"cannot read model config from {ns.file}: {ex}"}))
        return 2
    logger.info("CLI store | model_id=%s | index=%s", config.model_id, provider.write_index)
    outcome = _await(lambda cb: provider.store(config, cb), timeout)
    return _report(outcome, {"model_id": config.model_id, "index": provider.write_index})


def get_config(ns, provider: ModelConfigStore, timeout: float) -> int:
    outcome = _await(lambda cb: provider.get(ns.model_id, cb), timeout)
    body = {"model_id": ns.model_id}
    if outcome.ok:
        body["config"] = asdict(outcome.value)
    return _report(outcome, body)


def delete_config(ns, provider: ModelConfigStore, timeout: float) -> int:
    outcome = _await(lambda cb: provider.delete(ns.model_id, cb), timeout)
    return _report(outcome, {"model_id": ns.model_id, "deleted": True})


_COMMANDS = {
    "store": store_config,
    "get": get_config,
    "delete": delete_config,
}


def dispatch_commands(ns, provider: ModelConfigStore, timeout: float) -> int:
    """Dispatch a parsed CLI command to the provider; unknown commands return 2."""
    handler = _COMMANDS.get(ns.cmd)
    if handler is None:
        print(json.dumps({"status": "error", "error": f"Unknown cmd: {ns.cmd}"}))
        return 2
    return handler(ns, provider, timeout)


def run(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))
    timeout = float(ns.timeout or http_timeout_seconds())
    wait = operation_wait_seconds(timeout)

    try:
        with ElasticsearchDocumentStore(base_url=ns.url, timeout=timeout) as documents:
            provider = ModelConfigStore(
                documents,
                JsonPayloadCodec(),
                write_index=ns.write_index,
                index_pattern=ns.index_pattern,
            )
            return dispatch_commands(ns, provider, wait)
    except FutureTimeout:
        print(json.dumps({"status": "error", "error": f"no outcome after {wait}s; the operation may still have been applied"}))
        return 3
    except Exception as ex:  # keep CLI concise and user-friendly
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 3


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
