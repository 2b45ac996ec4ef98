"""Fakes shared by the test-suite.

The oracles here stand in for the region provider and service metadata ports
so tests can count calls and script answers without touching the process
environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from lib_client_config import ClientBuilder, Region, ServiceIdentity
from lib_client_config.domain.errors import ServiceMetadataLookupFailure

DEMO_IDENTITY = ServiceIdentity(endpoint_prefix="demo", signing_name="demo-signing")


class ScriptedRegionProvider:
    """Return the scripted answers in order, repeating the last one once exhausted."""

    def __init__(self, *answers: str | None) -> None:
        self._answers = [Region.of(answer) if answer else None for answer in answers] or [None]
        self.calls = 0

    def get_region(self) -> Region | None:
        index = min(self.calls, len(self._answers) - 1)
        self.calls += 1
        return self._answers[index]


@dataclass
class RecordingServiceMetadata:
    """Sign in the communication region unless *overrides* says otherwise; record every lookup."""

    overrides: dict[str, str] = field(default_factory=dict)
    unknown: set[str] = field(default_factory=set)
    calls: list[tuple[str, Region]] = field(default_factory=list)

    def signing_region(self, endpoint_prefix: str, region: Region) -> Region:
        self.calls.append((endpoint_prefix, region))
        if region.id in self.unknown:
            raise ServiceMetadataLookupFailure(f"{endpoint_prefix} unknown in {region.id}")
        return Region.of(self.overrides.get(region.id, region.id))


@dataclass(frozen=True)
class FakeTransport:
    name: str


@dataclass(frozen=True)
class FakeCredentials:
    name: str

    def resolve_credentials(self) -> Any:
        return self.name


def make_builder(
    *,
    region_provider: Any = None,
    service_metadata: Any = None,
    **kwargs: Any,
) -> ClientBuilder:
    """Return a builder wired to fakes so finalization never reads the real environment."""

    return ClientBuilder(
        DEMO_IDENTITY,
        region_provider=region_provider if region_provider is not None else ScriptedRegionProvider(None),
        service_metadata=service_metadata if service_metadata is not None else RecordingServiceMetadata(),
        http_client_factory=kwargs.pop("http_client_factory", lambda: FakeTransport("sync")),
        async_http_client_factory=kwargs.pop("async_http_client_factory", lambda: FakeTransport("async")),
        environ=kwargs.pop("environ", {}),
        **kwargs,
    )


@dataclass
class FakeBotoCredentials:
    access_key: str
    secret_key: str
    token: str | None = None
    method: str = "env"

    def get_frozen_credentials(self) -> "FakeBotoCredentials":
        return self


class FakeSessionFactory:
    """Stand in for ``boto3.Session``; records the profile of every session created."""

    def __init__(self, *, region_name: str | None = None, credentials: FakeBotoCredentials | None = None) -> None:
        self.region_name = region_name
        self.credentials = credentials
        self.profiles: list[str | None] = []

    def __call__(self, *, profile_name: str | None = None) -> "FakeSessionFactory":
        self.profiles.append(profile_name)
        return self

    def get_credentials(self) -> FakeBotoCredentials | None:
        return self.credentials
