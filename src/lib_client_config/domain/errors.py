"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by resolvers, adapters, the
composition root, and consuming applications. The hierarchy lives in the
domain layer so outer layers may depend on it without creating cycles.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration failures.
* :class:`RegionUndeterminable` – a region was required but none resolved.
* :class:`ServiceMetadataLookupFailure` – the metadata oracle could not map a
  service/region pair to a signing region.
* :class:`Misconfiguration` – a required value is absent downstream.
* :class:`InvalidFormat` – a metadata file could not be parsed.
* :class:`NotFound` – a metadata file, named profile, or credentials are missing.

System Role
-----------
Every failure is raised synchronously at finalization time, never by the
setters on :class:`lib_client_config.core.ClientBuilder`. Callers catch
:class:`ConfigError` to handle all library failures uniformly.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_client_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class RegionUndeterminable(ConfigError):
    """Raised when a region is required but none could be resolved.

    Why
    ----
    Signing and the ``REGION`` advanced option cannot be produced without a
    region. Occurs when no explicit region is set and the region provider is
    disabled or returned nothing.

    Recovery
    --------
    Set a region on the builder (or enable detection) and finalize again.
    """


class ServiceMetadataLookupFailure(ConfigError):
    """Raised when the service metadata oracle cannot map a service/region pair."""


class Misconfiguration(ConfigError):
    """Signals that a required value is missing from a configuration.

    Typical Sources
    ---------------
    * :meth:`ImmutableClientConfiguration.require_advanced_option` when the
      layer pipeline was not run or ran incompletely.
    * Freezing a merged configuration that still lacks an endpoint,
      credentials, a transport client, or (async only) an executor.
    """


class InvalidFormat(ConfigError):
    """Raised when a service metadata file cannot be parsed into a table."""


class NotFound(ConfigError):
    """Raised when a metadata file, a named profile, or ambient credentials are missing."""
