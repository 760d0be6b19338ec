"""Audit submitter: log each batch (digest and JSON) before delegating."""

from __future__ import annotations

import logging
from typing import Any

from ..core.batch import WIRE_ROOT
from ..core.hashing import hash_payload
from ..core.serde import json_dumps_wire
from .base import Submitter, payload_to_map
from .result import SubmitResult

__all__ = ["AuditSubmitter"]

logger = logging.getLogger(__name__)


class AuditSubmitter:
    """
    Wrap another submitter and log what is sent and how it went.

    Args:
        inner (Submitter): Submitter doing the actual work.
        log (logging.Logger | None): Logger to write to (default: this module's).
        level (int): Level of the audit records.
    """

    def __init__(self, inner: Submitter, *, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.inner = inner
        self.log = log or logger
        self.level = level

    def submit(self, payload: Any, *, timeout: float | None = None) -> SubmitResult:
        body = payload_to_map(payload)
        digest = hash_payload(body)
        self.log.log(
            self.level,
            "submitting batch %s (%d commands): %s",
            digest[:12],
            len(body[WIRE_ROOT]),
            json_dumps_wire(body),
        )
        result = self.inner.submit(body, timeout=timeout)
        if result.ok:
            self.log.log(self.level, "batch %s applied", digest[:12])
        else:
            self.log.warning("batch %s failed: %s %r", digest[:12], result.reason.value, result.detail)
        return result
