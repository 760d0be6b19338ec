from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

import pytest

from nftkit.core.batch import Batch
from nftkit.core.schema import Command
from nftkit.submit.audit import AuditSubmitter
from nftkit.submit.base import payload_to_json, payload_to_map
from nftkit.submit.capture import CaptureSubmitter
from nftkit.submit.config import SubmitSettings
from nftkit.submit.local import LocalSubmitter, parse_response
from nftkit.submit.result import FailureReason, SubmitFailure, SubmitOk

PAYLOAD = {"nftables": [{"add": {"table": {"family": "inet", "name": "filter"}}}]}


class _Proc:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def test_payload_normalization() -> None:
    batch = Batch().append(Command(operation="add", kind="table", spec={"family": "inet", "name": "filter"}))
    assert payload_to_map(batch) == PAYLOAD
    assert payload_to_map(PAYLOAD["nftables"]) == PAYLOAD
    assert payload_to_json("{}") == "{}"
    assert payload_to_map(json.dumps(PAYLOAD)) == PAYLOAD
    assert payload_to_map(json.dumps(PAYLOAD["nftables"]).encode()) == PAYLOAD
    with pytest.raises(TypeError):
        payload_to_map(42)
    with pytest.raises(TypeError):
        payload_to_map("42")


@pytest.mark.parametrize(
    "text,ok,reason",
    [
        ("", True, None),
        ("  \n", True, None),
        ('{"nftables": [{"metainfo": {"json_schema_version": 1}}]}', True, None),
        ('{"nftables": [{"error": "No such file or directory"}]}', False, FailureReason.BACKEND),
        ("Error: syntax error", False, FailureReason.DECODE),
    ],
)
def test_parse_response(text: str, ok: bool, reason: FailureReason | None) -> None:
    result = parse_response(text)
    assert result.ok is ok
    if reason is not None:
        assert result.reason is reason


def test_local_submitter_pipes_json_to_nft(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []

    def fake_run(argv, **kwargs):
        calls.append({"argv": argv, **kwargs})
        return _Proc(stdout="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    sub = LocalSubmitter(SubmitSettings(nft_path="/sbin/nft", timeout=3.0))

    result = sub.submit(PAYLOAD)

    assert result == SubmitOk(None)
    assert calls[0]["argv"] == ["/sbin/nft", "-j", "-f", "-"]
    assert calls[0]["input"] == '{"nftables":[{"add":{"table":{"family":"inet","name":"filter"}}}]}'
    assert calls[0]["timeout"] == 3.0
    assert calls[0]["capture_output"] is True


def test_local_submitter_timeout_override(monkeypatch) -> None:
    def fake_run(argv, **kwargs):
        raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = LocalSubmitter(SubmitSettings()).submit(PAYLOAD, timeout=0.5)

    assert isinstance(result, SubmitFailure)
    assert result.reason is FailureReason.TIMEOUT
    assert "0.5" in result.detail


def test_local_submitter_reports_nonzero_exit(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", lambda argv, **kw: _Proc(returncode=1, stderr="Error: Could not process rule\n"))
    result = LocalSubmitter(SubmitSettings()).submit(PAYLOAD)

    assert result.reason is FailureReason.BACKEND
    assert result.detail == {"returncode": 1, "stderr": "Error: Could not process rule"}


def test_local_submitter_reports_missing_binary(monkeypatch) -> None:
    def fake_run(argv, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = LocalSubmitter(SubmitSettings(nft_path="/nope/nft")).submit(PAYLOAD)

    assert result.reason is FailureReason.EXEC


def test_capture_submitter_records_payloads() -> None:
    cap = CaptureSubmitter(response={"ok": 1})
    assert cap.submit(PAYLOAD, timeout=1.0) == SubmitOk({"ok": 1})
    assert cap.payloads == [PAYLOAD]
    assert cap.timeouts == [1.0]

    failing = CaptureSubmitter(failure=SubmitFailure(FailureReason.BACKEND, "nope"))
    assert failing.submit(PAYLOAD).ok is False


def test_audit_submitter_logs_and_delegates(caplog) -> None:
    inner = CaptureSubmitter()
    audit = AuditSubmitter(inner)

    with caplog.at_level(logging.INFO, logger="nftkit.submit.audit"):
        result = audit.submit(PAYLOAD, timeout=2.0)

    assert result.ok
    assert inner.payloads == [PAYLOAD]
    assert inner.timeouts == [2.0]
    messages = [r.getMessage() for r in caplog.records]
    assert any("1 commands" in m and '"name":"filter"' in m for m in messages)
    assert any("applied" in m for m in messages)


def test_audit_submitter_logs_failures(caplog) -> None:
    audit = AuditSubmitter(CaptureSubmitter(failure=SubmitFailure(FailureReason.BACKEND, "boom")))

    with caplog.at_level(logging.INFO, logger="nftkit.submit.audit"):
        result = audit.submit(PAYLOAD)

    assert result.reason is FailureReason.BACKEND
    assert any(r.levelno == logging.WARNING and "backend" in r.getMessage() for r in caplog.records)


def test_capture_submitter_accepts_json_text() -> None:
    cap = CaptureSubmitter()
    assert cap.submit(json.dumps(PAYLOAD)).ok
    assert cap.payloads == [PAYLOAD]


def test_audit_submitter_accepts_json_text(caplog) -> None:
    inner = CaptureSubmitter()
    with caplog.at_level(logging.INFO, logger="nftkit.submit.audit"):
        result = AuditSubmitter(inner).submit(json.dumps(PAYLOAD))
    assert result.ok
    assert inner.payloads == [PAYLOAD]
    assert any("1 commands" in r.getMessage() for r in caplog.records)


def test_local_submitter_accepts_json_text(monkeypatch) -> None:
    seen: dict[str, Any] = {}

    def fake_run(argv, **kwargs):
        seen["input"] = kwargs["input"]
        return _Proc()

    monkeypatch.setattr(subprocess, "run", fake_run)
    text = json.dumps(PAYLOAD)
    assert LocalSubmitter(SubmitSettings()).submit(text).ok
    assert json.loads(seen["input"]) == PAYLOAD
