"""Name-to-handle registry for running backend instances."""

from __future__ import annotations

import logging
import threading
from typing import Any, Hashable

from .errors import AlreadyStartedError, ProcessUnavailableError

logger = logging.getLogger(__name__)


def _describe(key: Hashable) -> str:
    if isinstance(key, tuple):
        return ":".join(getattr(part, "__name__", str(part)) for part in key)
    return str(key)


class Registry:
    """Maps ``(adapter, instance name)`` keys to running handles.

    Backends register themselves on start and unregister on stop. Every
    operation looks its handle up here before acting, so an operation on
    an instance that was never started (or already stopped) fails fast
    instead of hanging.
    """

    def __init__(self) -> None:
        self._handles: dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def register(self, key: Hashable, handle: Any) -> None:
        """Bind key to handle.

        Raises:
            AlreadyStartedError: If key is already registered.
        """
        with self._lock:
            if key in self._handles:
                raise AlreadyStartedError(
                    f"Backend instance already started: {_describe(key)}"
                )
            self._handles[key] = handle
        logger.debug("Registered %s", _describe(key))

    def lookup(self, key: Hashable) -> Any:
        """Return the handle bound to key.

        Raises:
            ProcessUnavailableError: If nothing is registered under key.
        """
        with self._lock:
            handle = self._handles.get(key)
        if handle is None:
            raise ProcessUnavailableError(
                f"No running backend instance: {_describe(key)}"
            )
        return handle

    def unregister(self, key: Hashable) -> Any | None:
        """Remove key and return its handle (None if it was not registered)."""
        with self._lock:
            handle = self._handles.pop(key, None)
        if handle is not None:
            logger.debug("Unregistered %s", _describe(key))
        return handle

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._handles

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)


# Default registry shared by all adapters in the process.
registry = Registry()
