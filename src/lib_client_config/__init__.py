"""Public package surface for ``lib_client_config``.

Exports the composition root (:class:`ClientBuilder`), the value objects it
produces and consumes, the error taxonomy, the default adapters, and the
observability helpers applications use to attach handlers or trace ids.
"""

from __future__ import annotations

from .adapters.credentials.default import (
    Credentials,
    SessionCredentialsProvider,
    StaticCredentialsProvider,
    default_credentials_provider,
)
from .adapters.metadata.default import (
    ServiceEntry,
    StaticServiceMetadata,
    default_service_metadata,
    load_service_metadata,
)
from .adapters.region.default import (
    EnvironmentRegionProvider,
    RegionProviderChain,
    SessionRegionProvider,
    StaticRegionProvider,
    default_region_provider,
)
from .application.defaults import NO_DEFAULTS, ClientConfigurationDefaults
from .core import ClientBuilder
from .domain.config import (
    ImmutableAsyncClientConfiguration,
    ImmutableClientConfiguration,
    MutableClientConfiguration,
    SourceInfo,
)
from .domain.errors import (
    ConfigError,
    InvalidFormat,
    Misconfiguration,
    NotFound,
    RegionUndeterminable,
    ServiceMetadataLookupFailure,
)
from .domain.options import AdvancedOption, OverrideConfiguration, OverrideConfigurationBuilder
from .domain.region import Region, ServiceIdentity
from .observability import bind_trace_id, get_logger

__all__ = [
    "AdvancedOption",
    "ClientBuilder",
    "ClientConfigurationDefaults",
    "ConfigError",
    "Credentials",
    "EnvironmentRegionProvider",
    "ImmutableAsyncClientConfiguration",
    "ImmutableClientConfiguration",
    "InvalidFormat",
    "Misconfiguration",
    "MutableClientConfiguration",
    "NO_DEFAULTS",
    "NotFound",
    "OverrideConfiguration",
    "OverrideConfigurationBuilder",
    "Region",
    "RegionProviderChain",
    "RegionUndeterminable",
    "ServiceEntry",
    "ServiceIdentity",
    "ServiceMetadataLookupFailure",
    "SessionCredentialsProvider",
    "SessionRegionProvider",
    "SourceInfo",
    "StaticCredentialsProvider",
    "StaticRegionProvider",
    "StaticServiceMetadata",
    "bind_trace_id",
    "default_credentials_provider",
    "default_region_provider",
    "default_service_metadata",
    "get_logger",
    "load_service_metadata",
]
