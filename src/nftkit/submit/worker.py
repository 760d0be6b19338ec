"""
Single-worker submitter: serialize concurrent submissions against one backend.

Submissions run one at a time on a dedicated thread in submission (FIFO) order.
Each caller waits at most `timeout` seconds; on expiry it gets a TIMEOUT failure
while the queued or running submission keeps going, so its effect is unknown.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any

from .base import Submitter
from .result import FailureReason, SubmitFailure, SubmitResult

__all__ = ["WorkerSubmitter"]

logger = logging.getLogger(__name__)


class WorkerSubmitter:
    """
    Run an inner submitter on a one-thread executor.

    Args:
        inner (Submitter): Submitter executed on the worker thread.
        timeout (float | None): Default wait bound for callers (None waits forever).
        name (str): Worker thread name prefix.

    Notes:
        Use as a context manager, or call close(), to stop the worker thread.
    """

    def __init__(self, inner: Submitter, *, timeout: float | None = None, name: str = "nftkit-submit") -> None:
        self.inner = inner
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def submit(self, payload: Any, *, timeout: float | None = None) -> SubmitResult:
        wait = timeout if timeout is not None else self.timeout
        future = self._executor.submit(self.inner.submit, payload, timeout=wait)
        try:
            return future.result(timeout=wait)
        except FutureTimeout:
            logger.warning("submission still pending after %ss; batch effect unknown", wait)
            return SubmitFailure(FailureReason.TIMEOUT, f"no result within {wait}s")
        except Exception as exc:
            logger.exception("submitter %r raised", self.inner)
            return SubmitFailure(FailureReason.BACKEND, str(exc))

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> WorkerSubmitter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
