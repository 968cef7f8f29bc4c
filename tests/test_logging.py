"""
tests.test_logging

Log lines carry no secret material.
"""

from __future__ import annotations

import logging

import pytest

from secrets_api.observability.logging import REDACTED, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _configured() -> None:
    configure_logging(service_name="secrets-api", level="INFO")


def test_sensitive_fields_are_redacted(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        get_logger("tests.redaction").info(
            "credentials_seen", secret="hunter2", token="eyJ.abc.def", user_id="user-a"
        )

    assert "hunter2" not in caplog.text
    assert "eyJ.abc.def" not in caplog.text
    assert REDACTED in caplog.text
    assert "user-a" in caplog.text


def test_tracebacks_omit_frame_locals(caplog: pytest.LogCaptureFixture) -> None:
    def encrypt(plaintext: str) -> None:
        raise RuntimeError("cipher failed")

    value = "-".join(["plaintext", "in", "a", "frame"])
    with caplog.at_level(logging.ERROR):
        try:
            encrypt(value)
        except RuntimeError as exc:
            get_logger("tests.tracebacks").error("encrypt_failed", exc_info=exc)

    assert "cipher failed" in caplog.text
    assert "plaintext-in-a-frame" not in caplog.text
