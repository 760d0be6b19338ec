"""
Exceptions for the nftkit.submit layer.

Boundaries
- nftkit.core.errors covers command construction (BuilderError and subclasses).
- nftkit.submit raises only for caller mistakes around submission; outcomes of an
  actual submission (timeouts, nft errors) are returned as SubmitFailure values:
  - SubmitConfigError: invalid or unsupported submitter configuration.
  - NoSubmitterError: submit() called with no submitter configured or passed.
"""

from __future__ import annotations

__all__ = ["SubmitError", "SubmitConfigError", "NoSubmitterError"]


class SubmitError(Exception):
    """
    Base class for submission-layer errors.

    Notes:
        Distinct from nftkit.core errors; never raised for a failed submission.
    """


class SubmitConfigError(SubmitError):
    """
    Raised when submitter configuration is invalid.

    Examples:
        - Non-positive timeout
        - Empty nft executable path
    """


class NoSubmitterError(SubmitError):
    """Raised when a batch is submitted without any submitter available."""

    def __init__(self) -> None:
        super().__init__(
            "no submitter configured; pass one to submit(...) or set it with set(submitter=...)"
        )
