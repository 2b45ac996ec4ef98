"""Default layers applied by the merge pipeline.

Purpose
-------
Describe one configuration layer as a bundle of optional zero-argument hooks.
A layer never overwrites a value: each hook is only invoked when the field it
produces is still unset, and advanced options are backfilled only when absent.

Contents
--------
* :data:`BUILDER_LAYER` / :data:`SERVICE_LAYER` / :data:`GLOBAL_LAYER` /
  :data:`HTTP_LAYER` – layer names, in precedence order.
* :class:`ClientConfigurationDefaults` – hook bundle with
  :meth:`~ClientConfigurationDefaults.apply_sync_defaults` and
  :meth:`~ClientConfigurationDefaults.apply_async_defaults`.
* :data:`NO_DEFAULTS` – the empty layer (default service-specific hook).
* :func:`builder_defaults` – endpoint, credentials, executor, and the
  ``REGION``/``SERVICE_SIGNING_NAME``/``SIGNING_REGION`` options.
* :func:`global_defaults` – cross-service fallbacks.
* :func:`http_client_defaults` – binds transport clients.

System Role
-----------
:func:`lib_client_config.application.merge.apply_layers` runs these layers in
the fixed order chosen by :mod:`lib_client_config.core`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Final

from ..domain.config import MutableClientConfiguration
from ..domain.errors import RegionUndeterminable
from ..domain.options import AdvancedOption, OverrideConfigurationBuilder
from ..domain.region import ServiceIdentity
from .resolvers import EndpointResolver, RegionResolver, SigningRegionResolver

BUILDER_LAYER: Final[str] = "builder"
SERVICE_LAYER: Final[str] = "service"
GLOBAL_LAYER: Final[str] = "global"
HTTP_LAYER: Final[str] = "http"

Hook = Callable[[], Any]
OverrideHook = Callable[[OverrideConfigurationBuilder], None]


@dataclass(frozen=True, slots=True)
class ClientConfigurationDefaults:
    """Optional default producers for one layer.

    Each attribute is a zero-argument callable (or ``None`` when the layer has
    no opinion). ``override_defaults`` receives a fresh
    :class:`OverrideConfigurationBuilder`; writes inside one call follow
    last-write-wins, then only options absent from the working copy are kept.

    Examples
    --------
    >>> layer = ClientConfigurationDefaults(endpoint=lambda: "https://fallback.example.com")
    >>> working = MutableClientConfiguration()
    >>> layer.apply_sync_defaults(working, layer="service")
    ['endpoint']
    >>> working.origins["endpoint"]["layer"]
    'service'
    """

    endpoint: Hook | None = None
    credentials_provider: Hook | None = None
    async_executor: Hook | None = None
    http_client: Hook | None = None
    async_http_client: Hook | None = None
    override_defaults: OverrideHook | None = None

    def apply_sync_defaults(self, configuration: MutableClientConfiguration, *, layer: str) -> list[str]:
        """Fill unset blocking-client fields in *configuration*; return the names filled."""

        return self._apply(configuration, layer, ("endpoint", "credentials_provider", "http_client"))

    def apply_async_defaults(self, configuration: MutableClientConfiguration, *, layer: str) -> list[str]:
        """Fill unset non-blocking-client fields in *configuration*; return the names filled."""

        return self._apply(
            configuration,
            layer,
            ("endpoint", "credentials_provider", "async_executor", "async_http_client"),
        )

    def _apply(self, configuration: MutableClientConfiguration, layer: str, names: tuple[str, ...]) -> list[str]:
        filled = [f"override.{option.value}" for option in self._apply_overrides(configuration, layer)]
        for name in names:
            hook = getattr(self, name)
            if hook is None or getattr(configuration, name) is not None:
                continue
            if configuration.fill_default(name, hook(), layer=layer):
                filled.append(name)
        return filled

    def _apply_overrides(self, configuration: MutableClientConfiguration, layer: str) -> list[AdvancedOption]:
        if self.override_defaults is None:
            return []
        builder = OverrideConfigurationBuilder()
        self.override_defaults(builder)
        return configuration.fill_override_defaults(builder.build(), layer=layer)


NO_DEFAULTS: Final[ClientConfigurationDefaults] = ClientConfigurationDefaults()
"""Layer that contributes nothing; the default service-specific hook."""


def builder_defaults(
    *,
    identity: ServiceIdentity,
    region_resolver: RegionResolver,
    endpoint_resolver: EndpointResolver,
    signing_region_resolver: SigningRegionResolver,
    credentials_provider: Hook,
    async_executor_provider: Hook | None = None,
) -> ClientConfigurationDefaults:
    """Return the builder-specific layer.

    The ``REGION`` option is mandatory: when no region resolves the layer
    raises :class:`RegionUndeterminable`, failing the whole finalization.
    """

    def _override_defaults(builder: OverrideConfigurationBuilder) -> None:
        region = region_resolver.resolve_region()
        if region is None:
            raise RegionUndeterminable("Region not provided and none could be detected.")
        builder.advanced_option(AdvancedOption.REGION, region)
        builder.advanced_option(AdvancedOption.SERVICE_SIGNING_NAME, identity.signing_name)
        builder.advanced_option(AdvancedOption.SIGNING_REGION, signing_region_resolver.signing_region())

    return ClientConfigurationDefaults(
        endpoint=endpoint_resolver.resolve_endpoint,
        credentials_provider=credentials_provider,
        async_executor=async_executor_provider,
        override_defaults=_override_defaults,
    )


def global_defaults(*, credentials_provider: Hook, async_executor: Hook) -> ClientConfigurationDefaults:
    """Return the cross-service fallback layer."""

    return ClientConfigurationDefaults(credentials_provider=credentials_provider, async_executor=async_executor)


def http_client_defaults(*, http_client: Hook, async_http_client: Hook) -> ClientConfigurationDefaults:
    """Return the layer that binds a transport implementation when none is configured."""

    return ClientConfigurationDefaults(http_client=http_client, async_http_client=async_http_client)
