"""Single-threaded owner of one backend instance's state."""

from __future__ import annotations

import concurrent.futures
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from .errors import OperationTimeoutError, ProcessUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateOwner:
    """Serializes every access to one state value through a single worker.

    The state is only ever touched from the worker thread. Callers submit a
    function of the state and wait for its result, so each submitted
    function runs to completion before the next one starts. A compound
    operation (read then write) submitted as one function is atomic with
    respect to every other caller.

    Example:
        >>> owner = StateOwner("demo", dict)
        >>> owner.call(lambda state: state.setdefault("a", b"1"))
        b'1'
        >>> owner.stop()
    """

    def __init__(
        self,
        name: str,
        initial: Callable[[], Any],
        timeout: float | None = 5.0,
    ):
        """Create the owner and its worker.

        Args:
            name: Instance name, used for the worker thread and errors.
            initial: Factory for the initial state.
            timeout: Seconds to wait for each call. None waits forever.
        """
        self.name = name
        self.timeout = timeout
        self._state = initial()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"depotfs-{name}"
        )
        self._stopped = False

    def call(self, fun: Callable[[Any], T]) -> T:
        """Run ``fun(state)`` on the worker and return its result.

        Exceptions raised by fun propagate to the caller.

        Raises:
            ProcessUnavailableError: If the owner has been stopped.
            OperationTimeoutError: If the worker does not answer in time.
        """
        try:
            future = self._executor.submit(fun, self._state)
        except RuntimeError as e:
            raise ProcessUnavailableError(
                f"Backend instance is not running: {self.name!r}"
            ) from e
        try:
            return future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError as e:
            future.cancel()
            raise OperationTimeoutError(
                f"Backend instance {self.name!r} did not answer within "
                f"{self.timeout}s"
            ) from e

    @property
    def stopped(self) -> bool:
        return self._stopped

    def stop(self) -> None:
        """Finish queued calls and shut the worker down. Idempotent."""
        if self._stopped:
            return
        self._stopped = True
        self._executor.shutdown(wait=True)
        logger.debug("Stopped owner %r", self.name)
