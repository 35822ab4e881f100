"""
Completion plumbing shared by the use cases.

Callers hand every operation an ``on_done`` callback taking one ``Outcome``.
The callback is wrapped so it fires at most once no matter how many paths try
to complete the operation.
"""
from __future__ import annotations

import threading
from concurrent.futures import CancelledError, Future
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Tuple, TypeVar

from ..domain.errors import ModelConfigError
from ..infrastructure.logging import get_logger

T = TypeVar("T")

logger = get_logger("model_config_store.application.completion")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one operation: either ``value`` or a classified ``error``."""
    value: Optional[T] = None
    error: Optional[ModelConfigError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the classified error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


OnDone = Callable[[Outcome], None]


class Completion(Generic[T]):
    """Exactly-once guard around a caller's ``on_done``."""

    def __init__(self, on_done: OnDone) -> None:
        self._on_done = on_done
        self._fired = False
        self._lock = threading.Lock()

    def succeed(self, value: T) -> None:
        self._fire(Outcome(value=value))

    def fail(self, error: ModelConfigError) -> None:
        self._fire(Outcome(error=error))

    def _fire(self, outcome: Outcome) -> None:
        with self._lock:
            if self._fired:
                logger.warning("completion already delivered; dropping %r", outcome)
                return
            self._fired = True
        self._on_done(outcome)


def future_error(future: Future) -> Optional[BaseException]:
    """Exception of a finished future; a cancelled future reports ``CancelledError``."""
    if future.cancelled():
        return CancelledError()
    return future.exception()


def completion_future() -> Tuple["Future[Outcome]", OnDone]:
    """Return a future resolved with the ``Outcome`` passed to the paired callback."""
    future: "Future[Outcome]" = Future()

    def on_done(outcome: Outcome) -> None:
        future.set_result(outcome)

    return future, on_done
