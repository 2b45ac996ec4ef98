"""Region provider adapters.

Purpose
-------
Implement the :class:`lib_client_config.application.ports.RegionProvider`
protocol for the ambient sources a client consults when the caller did not set
a region explicitly.

Contents
--------
* :class:`EnvironmentRegionProvider` – ``AWS_REGION`` then ``AWS_DEFAULT_REGION``.
* :class:`SessionRegionProvider` – region of a ``boto3`` session, which covers
  the environment, the active profile, and the shared config file.
* :class:`StaticRegionProvider` – fixed answer, handy for tests and embedding.
* :class:`RegionProviderChain` – first non-empty answer of an ordered list.
* :func:`default_region_provider` – environment, then session.

System Role
-----------
The composition root injects :func:`default_region_provider` into each
:class:`lib_client_config.core.ClientBuilder` that does not receive its own
provider.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Mapping

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from ...domain.errors import ConfigError, InvalidFormat, NotFound
from ...domain.region import Region
from ...observability import log_debug

REGION_ENV_VARS: tuple[str, ...] = ("AWS_REGION", "AWS_DEFAULT_REGION")

SessionFactory = Callable[..., Any]


class EnvironmentRegionProvider:
    """Read the region from environment variables.

    Examples
    --------
    >>> EnvironmentRegionProvider(environ={"AWS_DEFAULT_REGION": "eu-central-1"}).get_region()
    Region(id='eu-central-1')
    >>> EnvironmentRegionProvider(environ={}).get_region() is None
    True
    """

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def get_region(self) -> Region | None:
        for name in REGION_ENV_VARS:
            value = self._environ.get(name, "").strip()
            if value:
                log_debug("region_from_environment", layer="region", variable=name, region=value)
                return Region.of(value)
        return None


class SessionRegionProvider:
    """Answer with ``region_name`` of a freshly created ``boto3`` session.

    A new session is created on every call so changes to the profile files are
    picked up by the next finalization.

    Parameters
    ----------
    profile:
        Named profile; ``None`` lets ``boto3`` use ``$AWS_PROFILE`` or ``default``.
    session_factory:
        Callable accepting ``profile_name`` and returning a session-like object.
    """

    def __init__(self, *, profile: str | None = None, session_factory: SessionFactory = boto3.Session) -> None:
        self._profile = profile
        self._session_factory = session_factory

    def get_region(self) -> Region | None:
        try:
            value = self._session_factory(profile_name=self._profile).region_name
        except ProfileNotFound as exc:
            raise NotFound(f"AWS profile not found: {self._profile}") from exc
        except BotoCoreError as exc:
            raise InvalidFormat(f"Unable to read AWS configuration: {exc}") from exc
        if not value or not value.strip():
            return None
        log_debug("region_from_session", layer="region", profile=self._profile, region=value)
        return Region.of(value)


class StaticRegionProvider:
    """Always answer with the region given at construction (``None`` allowed)."""

    def __init__(self, region: Region | str | None) -> None:
        self._region = Region.of(region) if isinstance(region, str) else region

    def get_region(self) -> Region | None:
        return self._region


class RegionProviderChain:
    """Ask each provider in order and return the first non-empty answer.

    A provider that fails with a configuration error is logged and skipped so
    one broken source does not hide the remaining ones.

    Examples
    --------
    >>> chain = RegionProviderChain(StaticRegionProvider(None), StaticRegionProvider("ap-southeast-1"))
    >>> chain.get_region()
    Region(id='ap-southeast-1')
    """

    def __init__(self, *providers: object) -> None:
        self._providers = providers

    def get_region(self) -> Region | None:
        for provider in self._providers:
            try:
                region = provider.get_region()  # type: ignore[attr-defined]
            except (ConfigError, ValueError) as exc:
                log_debug("region_provider_failed", layer="region", provider=type(provider).__name__, error=str(exc))
                continue
            if region is not None:
                return region
        return None


def default_region_provider(
    *,
    environ: Mapping[str, str] | None = None,
    profile: str | None = None,
) -> RegionProviderChain:
    """Return the standard chain: environment variables, then the ``boto3`` session."""

    return RegionProviderChain(
        EnvironmentRegionProvider(environ=environ),
        SessionRegionProvider(profile=profile),
    )


__all__ = [
    "EnvironmentRegionProvider",
    "RegionProviderChain",
    "SessionRegionProvider",
    "StaticRegionProvider",
    "default_region_provider",
]
