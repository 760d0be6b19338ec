"""
Tagged submission results.

A submitter never raises for a failed submission; it returns either SubmitOk with
the decoded backend response (None when nft printed nothing) or SubmitFailure with
a reason and detail. After a TIMEOUT failure the effect on the ruleset is unknown.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

__all__ = ["FailureReason", "SubmitOk", "SubmitFailure", "SubmitResult"]


class FailureReason(Enum):
    """Why a submission failed."""

    TIMEOUT = "timeout"  # no answer in time; effect unknown
    BACKEND = "backend"  # nft rejected the batch
    EXEC = "exec"  # nft could not be started
    DECODE = "decode"  # nft answered with something that is not JSON


@dataclass(frozen=True, slots=True)
class SubmitOk:
    response: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class SubmitFailure:
    reason: FailureReason
    detail: Any = None

    @property
    def ok(self) -> bool:
        return False


SubmitResult = Union[SubmitOk, SubmitFailure]
