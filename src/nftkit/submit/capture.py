"""In-memory submitter for tests and dry runs."""

from __future__ import annotations

from typing import Any

from ..core.typing import JsonDict
from .base import payload_to_map
from .result import SubmitFailure, SubmitOk, SubmitResult

__all__ = ["CaptureSubmitter"]


class CaptureSubmitter:
    """
    Record every payload instead of executing it.

    Args:
        response (Any): Response carried by the returned SubmitOk.
        failure (SubmitFailure | None): When set, returned instead of SubmitOk.

    Examples:
        >>> from nftkit.submit.capture import CaptureSubmitter
        >>> cap = CaptureSubmitter()
        >>> cap.submit([{"flush": {"ruleset": {}}}]).ok
        True
        >>> cap.payloads
        [{'nftables': [{'flush': {'ruleset': {}}}]}]
    """

    def __init__(self, response: Any = None, failure: SubmitFailure | None = None) -> None:
        self.response = response
        self.failure = failure
        self.payloads: list[JsonDict] = []
        self.timeouts: list[float | None] = []

    def submit(self, payload: Any, *, timeout: float | None = None) -> SubmitResult:
        self.payloads.append(payload_to_map(payload))
        self.timeouts.append(timeout)
        if self.failure is not None:
            return self.failure
        return SubmitOk(self.response)
