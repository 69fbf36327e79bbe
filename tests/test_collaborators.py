"""Tests for the built-in collaborator implementations and configuration."""

from __future__ import annotations

import logging

import pytest

from profile_editor.config import get_log_level, get_login_url
from profile_editor.services.collaborators import CollectingNotifier, StaticSessionProvider


def test_static_session_provider_trims_identity() -> None:
    assert StaticSessionProvider(" acct-1 ").current_identity() == "acct-1"
    assert StaticSessionProvider("").current_identity() is None
    assert StaticSessionProvider(None).current_identity() is None


def test_collecting_notifier_keeps_order_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    notifier = CollectingNotifier()

    with caplog.at_level(logging.INFO, logger="profile_editor.notifications"):
        notifier.success("saved")
        notifier.error("failed")

    assert notifier.messages == [("success", "saved"), ("error", "failed")]
    assert notifier.successes == ["saved"]
    assert notifier.errors == ["failed"]
    assert [record.levelno for record in caplog.records] == [logging.INFO, logging.ERROR]


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROFILE_EDITOR_LOGIN_URL", "/auth/sign-in")
    monkeypatch.setenv("PROFILE_EDITOR_LOG_LEVEL", "debug")

    assert get_login_url() == "/auth/sign-in"
    assert get_log_level() == "DEBUG"
