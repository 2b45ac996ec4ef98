"""Composition root for ``lib_client_config``.

Purpose
-------
Provide :class:`ClientBuilder`, the single entry point that owns a mutable
client configuration, wires the resolvers and adapters, and finalizes the
configuration into immutable sync or async value objects.

Contents
--------
* :class:`ClientBuilder` – mutation surface, resolvers, and finalization.
* :func:`_default_async_executor` – global fallback executor factory.

System Role
-----------
This module connects adapters (region provider, service metadata, credentials,
transport) with the application-layer merge pipeline. It is the canonical
location for adjusting the layer order, which callers cannot reconfigure:
``builder → service → global → http``.

Notes
-----
A builder is not safe for concurrent mutation. Finalization works on a private
clone, so the frozen results are independent of later setter calls and may be
shared freely between threads.
"""

from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Mapping

from .adapters.credentials.default import default_credentials_provider
from .adapters.http.default import default_async_http_client, default_http_client
from .adapters.metadata.default import default_service_metadata
from .adapters.region.default import default_region_provider
from .application.defaults import (
    BUILDER_LAYER,
    GLOBAL_LAYER,
    HTTP_LAYER,
    NO_DEFAULTS,
    SERVICE_LAYER,
    ClientConfigurationDefaults,
    builder_defaults,
    global_defaults,
    http_client_defaults,
)
from .application.merge import ASYNC, SYNC, Variant, apply_layers
from .application.ports import RegionProvider, ServiceMetadata
from .application.resolvers import EndpointResolver, RegionResolver, SigningRegionResolver
from .domain.config import (
    ImmutableAsyncClientConfiguration,
    ImmutableClientConfiguration,
    MutableClientConfiguration,
)
from .domain.errors import ConfigError
from .domain.options import OverrideConfiguration
from .domain.region import Region, ServiceIdentity
from .observability import log_error, log_info

ASYNC_EXECUTOR_THREADS = 5


def _default_async_executor() -> Executor:
    """Return the executor async clients use when neither customer nor builder supplied one."""

    return ThreadPoolExecutor(max_workers=ASYNC_EXECUTOR_THREADS, thread_name_prefix="sdk-async-response")


class ClientBuilder:
    """Collect client settings and produce finalized configurations.

    Why
    ----
    Concrete service clients need a configuration in which every value has
    been decided, with customer input taking precedence over derived and
    default values.

    What
    ----
    Holds one :class:`MutableClientConfiguration` for its whole lifetime. The
    setters write into it without validation. Each finalization clones it,
    runs the layer pipeline on the clone, and freezes the result.

    Parameters
    ----------
    identity:
        Endpoint prefix and signing name of the concrete service.
    service_defaults:
        Service-specific layer; contributes nothing by default.
    region_provider:
        Region oracle; defaults to the environment, then the ``boto3`` session.
    service_metadata:
        Signing-region oracle; defaults to the built-in table.
    http_client_factory / async_http_client_factory:
        Transport factories used when the customer binds no client.
    environ:
        Environment mapping read by the default region provider; defaults to
        :data:`os.environ`.
    profile:
        Named profile for the default ``boto3`` session region and credentials.

    Examples
    --------
    >>> from lib_client_config.adapters.region.default import StaticRegionProvider
    >>> builder = ClientBuilder(ServiceIdentity("dynamodb", "dynamodb"), region_provider=StaticRegionProvider(None))
    >>> builder.set_region("us-west-2").resolve_endpoint()
    'https://dynamodb.us-west-2.amazonaws.com'
    """

    def __init__(
        self,
        identity: ServiceIdentity,
        *,
        service_defaults: ClientConfigurationDefaults = NO_DEFAULTS,
        region_provider: RegionProvider | None = None,
        service_metadata: ServiceMetadata | None = None,
        http_client_factory: Callable[[], Any] = default_http_client,
        async_http_client_factory: Callable[[], Any] = default_async_http_client,
        environ: Mapping[str, str] | None = None,
        profile: str | None = None,
    ) -> None:
        self._identity = identity
        self._service_defaults = service_defaults
        if region_provider is None:
            region_provider = default_region_provider(environ=environ, profile=profile)
        self._region_provider = region_provider
        self._service_metadata = service_metadata if service_metadata is not None else default_service_metadata()
        self._http_client_factory = http_client_factory
        self._async_http_client_factory = async_http_client_factory
        self._profile = profile
        self._configuration = MutableClientConfiguration()
        self._region: Region | str | None = None
        self._async_executor_provider: Callable[[], Executor] | None = None

    @property
    def identity(self) -> ServiceIdentity:
        return self._identity

    def set_endpoint_override(self, endpoint: str | None) -> ClientBuilder:
        self._configuration.set("endpoint", endpoint)
        return self

    def set_override_configuration(self, overrides: OverrideConfiguration | None) -> ClientBuilder:
        self._configuration.set("override_configuration", overrides)
        return self

    def set_region(self, region: Region | str | None) -> ClientBuilder:
        self._region = region
        return self

    def set_credentials_provider(self, provider: Any) -> ClientBuilder:
        self._configuration.set("credentials_provider", provider)
        return self

    def set_async_executor_provider(self, provider: Callable[[], Executor] | None) -> ClientBuilder:
        self._async_executor_provider = provider
        return self

    def set_http_client(self, client: Any) -> ClientBuilder:
        self._configuration.set("http_client", client)
        return self

    def set_async_http_client(self, client: Any) -> ClientBuilder:
        self._configuration.set("async_http_client", client)
        return self

    def resolve_region(self) -> Region | None:
        """Return the explicit region, else the provider's answer when detection is enabled."""

        return self._region_resolver().resolve_region()

    def resolve_endpoint(self) -> str | None:
        """Return the explicit endpoint, else one derived from the region, else ``None``."""

        resolver = self._region_resolver()
        return EndpointResolver(self._configuration.endpoint, resolver, self._identity).resolve_endpoint()

    def signing_region(self) -> Region:
        """Return the region requests are signed for; raises ``RegionUndeterminable`` without a region."""

        resolver = self._region_resolver()
        return SigningRegionResolver(resolver, self._identity, self._service_metadata).signing_region()

    def sync_client_configuration(self) -> ImmutableClientConfiguration:
        """Finalize into a configuration for blocking clients.

        Priority, highest first: customer values, builder-specific defaults,
        service-specific defaults, global defaults, transport-client defaults.
        """

        return self._finalize(SYNC, ImmutableClientConfiguration.freeze)

    def async_client_configuration(self) -> ImmutableAsyncClientConfiguration:
        """Finalize into a configuration for non-blocking clients (same priority order)."""

        return self._finalize(ASYNC, ImmutableAsyncClientConfiguration.freeze)

    def _finalize(self, variant: Variant, freeze: Callable[[MutableClientConfiguration], Any]) -> Any:
        configuration = self._configuration.clone()
        prefix = self._identity.endpoint_prefix
        try:
            apply_layers(configuration, self._layers(configuration), variant=variant, service=prefix)
            finalized = freeze(configuration)
        except ConfigError as exc:
            log_error("finalization_failed", layer="final", service=prefix, variant=variant, error=str(exc))
            raise
        log_info(
            "configuration_finalized",
            layer="final",
            service=prefix,
            variant=variant,
            endpoint=finalized.endpoint,
        )
        return finalized

    def _layers(self, configuration: MutableClientConfiguration) -> list[tuple[str, ClientConfigurationDefaults]]:
        """Return the fixed layer sequence for one finalization.

        A single pinned region resolver backs every resolver of the
        finalization so the region cannot change midway.
        """

        region_resolver = self._region_resolver(pinned=True)
        profile = self._profile
        return [
            (
                BUILDER_LAYER,
                builder_defaults(
                    identity=self._identity,
                    region_resolver=region_resolver,
                    endpoint_resolver=EndpointResolver(configuration.endpoint, region_resolver, self._identity),
                    signing_region_resolver=SigningRegionResolver(
                        region_resolver, self._identity, self._service_metadata
                    ),
                    credentials_provider=lambda: default_credentials_provider(profile=profile),
                    async_executor_provider=self._async_executor_provider,
                ),
            ),
            (SERVICE_LAYER, self._service_defaults),
            (
                GLOBAL_LAYER,
                global_defaults(
                    credentials_provider=lambda: default_credentials_provider(profile=profile),
                    async_executor=_default_async_executor,
                ),
            ),
            (
                HTTP_LAYER,
                http_client_defaults(
                    http_client=self._http_client_factory,
                    async_http_client=self._async_http_client_factory,
                ),
            ),
        ]

    def _explicit_region(self) -> Region | None:
        """Return the region set on the builder; a blank string counts as unset."""

        if isinstance(self._region, str):
            return Region.of(self._region) if self._region.strip() else None
        return self._region

    def _region_resolver(self, *, pinned: bool = False) -> RegionResolver:
        return RegionResolver(
            self._explicit_region(),
            self._configuration.override_configuration,
            self._region_provider,
            pinned=pinned,
        )


__all__ = ["ClientBuilder"]
