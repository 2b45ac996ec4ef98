"""Structured logging for the configuration resolution pipeline.

Purpose
    Report what each finalization did (which layer filled which value, which
    region was detected, why a finalization failed) through one package logger
    that stays silent until the host application attaches a handler.

Events
    ``layer_applied`` (debug)
        One per layer and finalization; carries ``variant`` and the ``filled``
        field names, including ``override.<OPTION>`` entries.
    ``configuration_finalized`` (info)
        A frozen configuration was produced; carries ``variant`` and the
        resulting ``endpoint``.
    ``finalization_failed`` (error)
        A :class:`~lib_client_config.domain.errors.ConfigError` left the
        pipeline; carries ``variant`` and ``error``.
    ``region_detected`` / ``region_detection_disabled`` (debug)
        Outcome of consulting the region provider.
    ``signing_region_resolved`` / ``service_metadata_missing`` /
    ``service_region_unknown``
        Outcome of a service metadata lookup.
    ``region_from_environment`` / ``region_from_session`` / ``region_provider_failed`` (debug)
        Emitted by the default region adapters.
    ``credentials_resolved`` / ``credentials_unavailable``
        Emitted when a downstream signer resolves the default credentials.
    ``metadata_file_read`` / ``metadata_file_loaded`` / ``metadata_file_invalid``
        Emitted while loading a service metadata table from disk.

Every record carries ``extra={"context": {...}}`` holding ``trace_id`` plus
the event fields; pipeline events always include ``layer`` and ``service``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_client_config_trace_id", default=None)
"""Identifier attached to every record emitted while it is bound."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_client_config")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the ``lib_client_config`` logger so applications can attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Correlate the following finalizations with *trace_id*; ``None`` clears it.

    Examples
    --------
    >>> bind_trace_id('req-42')
    >>> TRACE_ID.get()
    'req-42'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _emit(logging.ERROR, message, fields)


def make_event(
    layer: str,
    service: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the fields of a pipeline event for *layer* of the client *service*.

    ``service`` is the endpoint prefix of the client being configured.

    Examples
    --------
    >>> make_event('global', 'dynamodb', {'variant': 'sync', 'filled': ['credentials_provider']})
    {'layer': 'global', 'service': 'dynamodb', 'variant': 'sync', 'filled': ['credentials_provider']}
    """

    return {"layer": layer, "service": service, **(payload or {})}


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    _LOGGER.log(level, message, extra={"context": {"trace_id": TRACE_ID.get(), **fields}})
