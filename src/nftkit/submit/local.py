"""
Local submitter: pipe the batch into `nft -j -f -`.

Notes:
    - One subprocess per submission, bounded by the timeout; a timeout kills nft and
      reports FailureReason.TIMEOUT (the kernel may already have applied the batch).
    - Empty output is success; any decoded item carrying an "error" key is a
      backend failure.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from ..core.batch import WIRE_ROOT
from ..core.serde import json_loads
from .base import payload_to_json
from .config import SubmitSettings
from .result import FailureReason, SubmitFailure, SubmitOk, SubmitResult

__all__ = ["LocalSubmitter", "parse_response"]

logger = logging.getLogger(__name__)


def parse_response(text: str) -> SubmitResult:
    """
    Interpret nft's JSON output.

    Args:
        text (str): stdout of `nft -j`.

    Returns:
        SubmitResult: SubmitOk(None) for empty output, SubmitOk(decoded) when no
        item reports an error, SubmitFailure(BACKEND, errors) otherwise, and
        SubmitFailure(DECODE, text) for non-JSON output.
    """
    if not text.strip():
        return SubmitOk(None)
    try:
        decoded = json_loads(text)
    except json.JSONDecodeError:
        return SubmitFailure(FailureReason.DECODE, text)

    items: Any = decoded.get(WIRE_ROOT, []) if isinstance(decoded, dict) else decoded
    if not isinstance(items, list):
        items = []
    errors = [item["error"] for item in items if isinstance(item, dict) and "error" in item]
    if errors:
        return SubmitFailure(FailureReason.BACKEND, errors)
    return SubmitOk(decoded)


class LocalSubmitter:
    """
    Submit batches to the local nft binary.

    Args:
        settings (SubmitSettings | None): Executable, timeout and flags
            (default: SubmitSettings.load()).
    """

    def __init__(self, settings: SubmitSettings | None = None) -> None:
        self.settings = settings or SubmitSettings.load()

    def submit(self, payload: Any, *, timeout: float | None = None) -> SubmitResult:
        argv = self.settings.command()
        wait = timeout if timeout is not None else self.settings.timeout
        text = payload_to_json(payload)
        logger.debug("running %s (timeout=%ss, %d bytes)", " ".join(argv), wait, len(text))

        try:
            proc = subprocess.run(
                argv, input=text, capture_output=True, text=True, timeout=wait, check=False
            )
        except subprocess.TimeoutExpired:
            logger.warning("nft did not answer within %ss; batch effect unknown", wait)
            return SubmitFailure(FailureReason.TIMEOUT, f"no response within {wait}s")
        except OSError as exc:
            logger.error("could not run %s: %s", argv[0], exc)
            return SubmitFailure(FailureReason.EXEC, str(exc))

        if proc.returncode != 0:
            stderr = proc.stderr.strip()
            logger.warning("nft exited with %d: %s", proc.returncode, stderr)
            return SubmitFailure(FailureReason.BACKEND, {"returncode": proc.returncode, "stderr": stderr})

        return parse_response(proc.stdout)
