"""Region, endpoint, and signing-region fallback chains.

Purpose
-------
Derive the values a caller did not supply explicitly. Each resolver is a small
object composed from plain inputs and injected oracles so it can be exercised
with fakes and free of process-global state.

Contents
--------
* :class:`RegionResolver` – explicit region, else the region provider when
  detection is enabled, else ``None``.
* :class:`EndpointResolver` – explicit endpoint verbatim, else
  ``https://<prefix>.<region>.<dns suffix>``, else ``None``.
* :class:`SigningRegionResolver` – resolved region mapped through the service
  metadata oracle; raises :class:`RegionUndeterminable` without a region.
* :func:`build_endpoint` – endpoint string construction.

System Role
-----------
:mod:`lib_client_config.application.defaults` calls these resolvers from the
builder-specific layer. A finalization pins its :class:`RegionResolver` so the
region answer stays identical for endpoint derivation and signing lookups.
"""

from __future__ import annotations

from typing import Final

from ..domain.errors import Misconfiguration, RegionUndeterminable
from ..domain.options import AdvancedOption, OverrideConfiguration
from ..domain.region import Region, ServiceIdentity
from ..observability import log_debug
from .ports import RegionProvider, ServiceMetadata

DEFAULT_ENDPOINT_PROTOCOL: Final[str] = "https"

_UNRESOLVED: Final = object()


def build_endpoint(protocol: str, endpoint_prefix: str, region: Region) -> str:
    """Return ``<protocol>://<endpoint_prefix>.<region>.<dns suffix>``.

    Examples
    --------
    >>> build_endpoint("https", "dynamodb", Region.of("us-west-2"))
    'https://dynamodb.us-west-2.amazonaws.com'
    >>> build_endpoint("https", "s3", Region.of("cn-north-1"))
    'https://s3.cn-north-1.amazonaws.com.cn'
    """

    return f"{protocol}://{endpoint_prefix}.{region.id}.{region.dns_suffix}"


def region_detection_enabled(overrides: OverrideConfiguration) -> bool:
    """Return whether the region provider may be consulted; absent means enabled.

    Only booleans are accepted; any other value raises :class:`Misconfiguration`.

    Examples
    --------
    >>> region_detection_enabled(OverrideConfiguration())
    True
    >>> region_detection_enabled(OverrideConfiguration({AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION: False}))
    False
    """

    configured = overrides.advanced_option(AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION)
    if configured is None:
        return True
    if not isinstance(configured, bool):
        raise Misconfiguration(
            f"ENABLE_DEFAULT_REGION_DETECTION must be True or False, got {configured!r}"
        )
    return configured


class RegionResolver:
    """Determine the effective region.

    Parameters
    ----------
    explicit_region:
        Region set directly on the builder, if any.
    overrides:
        Customer override configuration; consulted for
        ``ENABLE_DEFAULT_REGION_DETECTION``.
    region_provider:
        Oracle queried when no explicit region exists and detection is enabled.
    pinned:
        When true the first answer (including ``None``) is remembered so every
        later call in the same finalization sees the same region.
    """

    def __init__(
        self,
        explicit_region: Region | None,
        overrides: OverrideConfiguration,
        region_provider: RegionProvider,
        *,
        pinned: bool = False,
    ) -> None:
        self._explicit_region = explicit_region
        self._overrides = overrides
        self._region_provider = region_provider
        self._pinned = pinned
        self._answer: object = _UNRESOLVED

    def resolve_region(self) -> Region | None:
        if self._explicit_region is not None:
            return self._explicit_region
        if self._pinned and self._answer is not _UNRESOLVED:
            return self._answer  # type: ignore[return-value]
        region = self._from_provider()
        if self._pinned:
            self._answer = region
        return region

    def _from_provider(self) -> Region | None:
        if not region_detection_enabled(self._overrides):
            log_debug("region_detection_disabled", layer="builder")
            return None
        region = self._region_provider.get_region()
        log_debug("region_detected", layer="builder", region=region.id if region else None)
        return region


class EndpointResolver:
    """Determine the effective endpoint; never raises when nothing resolves."""

    def __init__(
        self,
        explicit_endpoint: str | None,
        region_resolver: RegionResolver,
        identity: ServiceIdentity,
        *,
        protocol: str = DEFAULT_ENDPOINT_PROTOCOL,
    ) -> None:
        self._explicit_endpoint = explicit_endpoint
        self._region_resolver = region_resolver
        self._identity = identity
        self._protocol = protocol

    def resolve_endpoint(self) -> str | None:
        if self._explicit_endpoint is not None:
            return self._explicit_endpoint
        region = self._region_resolver.resolve_region()
        if region is None:
            return None
        return build_endpoint(self._protocol, self._identity.endpoint_prefix, region)


class SigningRegionResolver:
    """Map the resolved region to the region requests are signed for."""

    def __init__(
        self,
        region_resolver: RegionResolver,
        identity: ServiceIdentity,
        service_metadata: ServiceMetadata,
    ) -> None:
        self._region_resolver = region_resolver
        self._identity = identity
        self._service_metadata = service_metadata

    def signing_region(self) -> Region:
        region = self._region_resolver.resolve_region()
        if region is None:
            raise RegionUndeterminable("The signing region could not be determined.")
        return self._service_metadata.signing_region(self._identity.endpoint_prefix, region)
