from __future__ import annotations

from lib_client_config.domain.errors import (
    ConfigError,
    InvalidFormat,
    Misconfiguration,
    NotFound,
    RegionUndeterminable,
    ServiceMetadataLookupFailure,
)


def test_error_hierarchy() -> None:
    for error_cls in (RegionUndeterminable, ServiceMetadataLookupFailure, Misconfiguration, InvalidFormat, NotFound):
        assert issubclass(error_cls, ConfigError)
        assert isinstance(error_cls(""), ConfigError)
