from __future__ import annotations

from pathlib import Path

import pytest

from lib_client_config.adapters.credentials.default import (
    Credentials,
    SessionCredentialsProvider,
    StaticCredentialsProvider,
    default_credentials_provider,
)
from lib_client_config.domain.errors import NotFound
from tests.support import FakeBotoCredentials, FakeSessionFactory


def test_session_credentials_are_frozen_into_value_object() -> None:
    factory = FakeSessionFactory(credentials=FakeBotoCredentials("AKIDEXAMPLE", "secret", "token"))
    provider = SessionCredentialsProvider(profile="staging", session_factory=factory)
    assert provider.resolve_credentials() == Credentials("AKIDEXAMPLE", "secret", "token")
    assert factory.profiles == ["staging"]


def test_session_without_credentials_is_not_found() -> None:
    provider = SessionCredentialsProvider(session_factory=FakeSessionFactory(credentials=None))
    with pytest.raises(NotFound):
        provider.resolve_credentials()


def test_default_provider_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDEXAMPLE")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    assert default_credentials_provider().resolve_credentials() == Credentials("AKIDEXAMPLE", "secret")


def test_default_provider_unknown_profile(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    with pytest.raises(NotFound):
        default_credentials_provider(profile="unknown").resolve_credentials()


def test_secret_is_hidden_from_repr() -> None:
    credentials = Credentials("AKIDEXAMPLE", "top-secret", "token")
    assert "top-secret" not in repr(credentials)
    assert "token" not in repr(credentials)
    assert StaticCredentialsProvider(credentials).resolve_credentials() is credentials
