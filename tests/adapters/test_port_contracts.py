"""Adapter contract tests for the default ports implementation.

Verify the default adapters keep satisfying the application-layer protocols
in ``lib_client_config.application.ports`` so the composition root can keep
depending on abstractions only.
"""

from __future__ import annotations

from lib_client_config.adapters.credentials.default import (
    Credentials,
    SessionCredentialsProvider,
    StaticCredentialsProvider,
)
from lib_client_config.adapters.metadata.default import StaticServiceMetadata, default_service_metadata
from lib_client_config.adapters.region.default import (
    EnvironmentRegionProvider,
    RegionProviderChain,
    SessionRegionProvider,
    StaticRegionProvider,
    default_region_provider,
)
from lib_client_config.application import ports
from tests.support import RecordingServiceMetadata, ScriptedRegionProvider


def test_region_providers_satisfy_protocol() -> None:
    candidates = [
        EnvironmentRegionProvider(environ={}),
        SessionRegionProvider(profile="contract"),
        StaticRegionProvider("us-west-2"),
        RegionProviderChain(),
        default_region_provider(environ={}),
        ScriptedRegionProvider("eu-west-1"),
    ]
    for provider in candidates:
        assert isinstance(provider, ports.RegionProvider)


def test_service_metadata_satisfies_protocol() -> None:
    assert isinstance(default_service_metadata(), ports.ServiceMetadata)
    assert isinstance(StaticServiceMetadata({}), ports.ServiceMetadata)
    assert isinstance(RecordingServiceMetadata(), ports.ServiceMetadata)


def test_credentials_providers_satisfy_protocol() -> None:
    assert isinstance(SessionCredentialsProvider(), ports.CredentialsProvider)
    assert isinstance(StaticCredentialsProvider(Credentials("id", "secret")), ports.CredentialsProvider)
