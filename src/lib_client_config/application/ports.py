"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the resolution engine consumes so the
composition root can orchestrate behaviour without depending on concrete
implementations. Adapters under :mod:`lib_client_config.adapters` satisfy these
protocols; tests substitute fakes.

Contents
--------
* :class:`RegionProvider` – opaque oracle yielding a best-effort region.
* :class:`ServiceMetadata` – maps a service endpoint prefix and region to the
  signing region.
* :class:`CredentialsProvider` – capability handed to downstream signers.
* :class:`ExecutorProvider` – factory for the async completion executor.
* :class:`HttpClientFactory` / :class:`AsyncHttpClientFactory` – transport
  factories used by the transport-client default layer.
"""

from __future__ import annotations

from concurrent.futures import Executor
from typing import Any, Protocol, runtime_checkable

from ..domain.region import Region


@runtime_checkable
class RegionProvider(Protocol):
    """Yield a region from ambient sources (environment, profile, metadata service).

    The provider performs its own internal fallback and returns a single best
    answer or ``None``. It takes no arguments.
    """

    def get_region(self) -> Region | None:
        """Return the detected region or ``None``."""


@runtime_checkable
class ServiceMetadata(Protocol):
    """Map a service and communication region to the region used for signing.

    Implementations raise
    :class:`lib_client_config.domain.errors.ServiceMetadataLookupFailure` when
    the pair is unknown.
    """

    def signing_region(self, endpoint_prefix: str, region: Region) -> Region:
        """Return the signing region for *endpoint_prefix* in *region*."""


@runtime_checkable
class CredentialsProvider(Protocol):
    """Produce credentials for request signing; resolution internals are out of scope."""

    def resolve_credentials(self) -> Any:
        """Return the current credentials object."""


class ExecutorProvider(Protocol):
    """Create the executor async clients dispatch completions on."""

    def __call__(self) -> Executor:
        ...


class HttpClientFactory(Protocol):
    """Create a blocking transport client."""

    def __call__(self) -> Any:
        ...


class AsyncHttpClientFactory(Protocol):
    """Create a non-blocking transport client."""

    def __call__(self) -> Any:
        ...
