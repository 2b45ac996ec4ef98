"""Application-layer merge policy.

Purpose
-------
Apply an ordered sequence of default layers onto a mutable working copy. The
module performs no I/O and knows nothing about concrete adapters, so it can be
reused by alternative composition roots.

Contents
    - ``apply_layers``: public entry point driven by a simple loop.
    - ``SYNC`` / ``ASYNC``: the two pipeline variants.

System Role
-----------
Receives ``(layer_name, ClientConfigurationDefaults)`` tuples from
:mod:`lib_client_config.core` ordered from highest to lowest precedence
(``builder → service → global → http``). Values already present in the
working copy, whether customer-supplied or filled by an earlier layer, are
never replaced.
"""

from __future__ import annotations

from typing import Final, Iterable, Literal

from ..domain.config import MutableClientConfiguration
from ..observability import log_debug, make_event
from .defaults import ClientConfigurationDefaults

Variant = Literal["sync", "async"]

SYNC: Final[Variant] = "sync"
ASYNC: Final[Variant] = "async"


def apply_layers(
    configuration: MutableClientConfiguration,
    layers: Iterable[tuple[str, ClientConfigurationDefaults]],
    *,
    variant: Variant,
    service: str | None = None,
) -> MutableClientConfiguration:
    """Run every layer against *configuration* in the given order and return it.

    Why
    ----
    Each layer must observe the cumulative result of the layers before it so
    that it only backfills the remaining gaps.

    Parameters
    ----------
    configuration:
        Private working copy; mutated in place.
    layers:
        ``(layer_name, defaults)`` tuples, highest precedence first.
    variant:
        ``"sync"`` or ``"async"``; selects which hook set each layer applies.
    service:
        Endpoint prefix used to annotate log events.

    Returns
    -------
    MutableClientConfiguration
        The same *configuration* object, now merged.

    Side Effects
    ------------
    Emits one ``layer_applied`` debug event per layer.

    Examples
    --------
    >>> working = MutableClientConfiguration()
    >>> working.set("credentials_provider", "customer-provider")
    >>> layers = [
    ...     ("builder", ClientConfigurationDefaults(credentials_provider=lambda: "builder-provider")),
    ...     ("global", ClientConfigurationDefaults(credentials_provider=lambda: "global-provider",
    ...                                            endpoint=lambda: "https://global.example.com")),
    ... ]
    >>> merged = apply_layers(working, layers, variant="sync")
    >>> merged.credentials_provider, merged.endpoint
    ('customer-provider', 'https://global.example.com')
    """

    if variant not in (SYNC, ASYNC):
        raise ValueError(f"Unknown pipeline variant: {variant!r}")
    for layer_name, defaults in layers:
        if variant == SYNC:
            filled = defaults.apply_sync_defaults(configuration, layer=layer_name)
        else:
            filled = defaults.apply_async_defaults(configuration, layer=layer_name)
        log_debug("layer_applied", **make_event(layer_name, service, {"variant": variant, "filled": filled}))
    return configuration
