"""Credentials provider adapters.

Purpose
-------
Supply the default credentials capability that the builder-specific and
global layers bind when the customer did not configure one. Resolution is
lazy: nothing is read until a downstream signer calls
:meth:`~SessionCredentialsProvider.resolve_credentials`.

Contents
--------
* :class:`Credentials` – immutable access key triple.
* :class:`StaticCredentialsProvider` – fixed credentials.
* :class:`SessionCredentialsProvider` – the ``boto3`` session credential chain
  (environment, shared files, container and instance roles).
* :func:`default_credentials_provider` – the default chain entry point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


@dataclass(frozen=True, slots=True)
class Credentials:
    """Access key pair plus optional session token; the secret is hidden from ``repr``."""

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)


class StaticCredentialsProvider:
    """Return the same :class:`Credentials` on every call."""

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    def resolve_credentials(self) -> Credentials:
        return self._credentials


class SessionCredentialsProvider:
    """Resolve credentials through ``boto3.Session().get_credentials()``.

    Each call builds a new session and freezes its credentials, so refreshed
    role credentials are observed by later calls.
    """

    def __init__(
        self,
        *,
        profile: str | None = None,
        session_factory: Callable[..., Any] = boto3.Session,
    ) -> None:
        self._profile = profile
        self._session_factory = session_factory

    def resolve_credentials(self) -> Credentials:
        try:
            resolved = self._session_factory(profile_name=self._profile).get_credentials()
        except ProfileNotFound as exc:
            raise NotFound(f"AWS profile not found: {self._profile}") from exc
        except BotoCoreError as exc:
            log_error("credentials_unavailable", layer="credentials", profile=self._profile, error=str(exc))
            raise InvalidFormat(f"Unable to load AWS credentials: {exc}") from exc
        if resolved is None:
            raise NotFound("Unable to locate AWS credentials")
        frozen = resolved.get_frozen_credentials()
        log_debug(
            "credentials_resolved",
            layer="credentials",
            profile=self._profile,
            method=getattr(resolved, "method", None),
        )
        return Credentials(frozen.access_key, frozen.secret_key, frozen.token)


def default_credentials_provider(*, profile: str | None = None) -> SessionCredentialsProvider:
    """Return the credentials provider used when the customer configured none."""

    return SessionCredentialsProvider(profile=profile)
