"""
nftkit.submit: deliver serialized batches to nftables.

Submitters
- LocalSubmitter: pipes the batch into `nft -j -f -`.
- CaptureSubmitter: records payloads (tests, dry runs).
- AuditSubmitter: logs digest and JSON, then delegates.
- WorkerSubmitter: one in-flight submission at a time, FIFO, bounded waits.

Results are SubmitOk / SubmitFailure values; failures are never raised and never
retried. Configuration is SubmitSettings (env > TOML > defaults).
"""

from __future__ import annotations

from .audit import AuditSubmitter
from .base import Submitter, payload_to_json, payload_to_map
from .capture import CaptureSubmitter
from .config import SubmitSettings
from .errors import NoSubmitterError, SubmitConfigError, SubmitError
from .local import LocalSubmitter, parse_response
from .result import FailureReason, SubmitFailure, SubmitOk, SubmitResult
from .worker import WorkerSubmitter

__all__ = [
    "Submitter",
    "LocalSubmitter",
    "CaptureSubmitter",
    "AuditSubmitter",
    "WorkerSubmitter",
    "SubmitSettings",
    "SubmitResult",
    "SubmitOk",
    "SubmitFailure",
    "FailureReason",
    "SubmitError",
    "SubmitConfigError",
    "NoSubmitterError",
    "parse_response",
    "payload_to_map",
    "payload_to_json",
]
