"""
Bounded calls to remote adapters.

Every remote call runs on a worker thread and is raced against a timeout,
so a hung network request costs the caller at most `timeout` seconds. A
call that times out keeps running on its worker; its late result is
discarded.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional

from application.exceptions import RemoteUnavailableError

logger = logging.getLogger(__name__)


class RemoteCaller:
    """Runs remote operations with a deadline."""

    def __init__(self, max_workers: int = 4, thread_name_prefix: str = "remote_"):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )

    def call(self, fn: Callable[..., Any], *args: Any, timeout: Optional[float] = None) -> Any:
        """
        Run `fn(*args)` and wait at most `timeout` seconds for it.

        Raises:
            RemoteUnavailableError: If the call raised or did not finish in time
        """
        name = getattr(fn, "__name__", repr(fn))
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            raise RemoteUnavailableError(f"{name} timed out after {timeout}s")
        except RemoteUnavailableError:
            raise
        except Exception as e:
            raise RemoteUnavailableError(f"{name} failed: {e}") from e

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
