"""Service metadata adapter.

Purpose
-------
Implement the :class:`lib_client_config.application.ports.ServiceMetadata`
protocol from a lookup table: which regions a service is available in and
which region it signs requests for. Most services sign in the region they are
addressed in; global services sign in one pinned region per partition.

Contents
--------
* :class:`ServiceEntry` – table row for one endpoint prefix.
* :class:`StaticServiceMetadata` – in-memory oracle.
* :data:`DEFAULT_SERVICES` – built-in table covering common services.
* :func:`default_service_metadata` – oracle backed by :data:`DEFAULT_SERVICES`.
* :func:`load_service_metadata` – oracle backed by a TOML/JSON/YAML file.

File format
-----------
.. code-block:: toml

    [services.iam]
    signing_regions = { aws = "us-east-1", aws-cn = "cn-north-1" }

    [services.internal-api]
    regions = ["us-west-2", "eu-west-1"]

``signing_regions`` keys are either region ids or partition names; region ids
win. ``regions`` is optional; when present, lookups for other regions fail
unless ``signing_regions`` names them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ...domain.errors import InvalidFormat, ServiceMetadataLookupFailure
from ...domain.region import Region
from ...observability import log_debug, log_error
from ..file_loaders.structured import load_mapping


@dataclass(frozen=True, slots=True)
class ServiceEntry:
    """Availability and signing rules for one endpoint prefix."""

    regions: frozenset[str] | None = None
    signing_regions: Mapping[str, str] = field(default_factory=dict)

    def signing_region(self, region: Region) -> Region | None:
        """Return the signing region for *region* or ``None`` when the service is unavailable there."""

        pinned = self.signing_regions.get(region.id) or self.signing_regions.get(region.partition)
        if pinned:
            return Region.of(pinned)
        if self.regions is not None and region.id not in self.regions:
            return None
        return region


_GLOBAL_SIGNING = {"aws": "us-east-1", "aws-cn": "cn-north-1", "aws-us-gov": "us-gov-west-1"}

DEFAULT_SERVICES: Mapping[str, ServiceEntry] = {
    "bedrock-runtime": ServiceEntry(),
    "dynamodb": ServiceEntry(),
    "ec2": ServiceEntry(),
    "kinesis": ServiceEntry(),
    "kms": ServiceEntry(),
    "lambda": ServiceEntry(),
    "logs": ServiceEntry(),
    "monitoring": ServiceEntry(),
    "s3": ServiceEntry(),
    "sns": ServiceEntry(),
    "sqs": ServiceEntry(),
    "sts": ServiceEntry(),
    "cloudfront": ServiceEntry(signing_regions={"aws": "us-east-1"}),
    "iam": ServiceEntry(signing_regions=_GLOBAL_SIGNING),
    "organizations": ServiceEntry(signing_regions=_GLOBAL_SIGNING),
    "route53": ServiceEntry(signing_regions=_GLOBAL_SIGNING),
}


class StaticServiceMetadata:
    """Answer signing-region lookups from an in-memory table.

    Examples
    --------
    >>> metadata = default_service_metadata()
    >>> metadata.signing_region("dynamodb", Region.of("eu-west-1"))
    Region(id='eu-west-1')
    >>> metadata.signing_region("iam", Region.of("eu-west-1"))
    Region(id='us-east-1')
    """

    def __init__(self, services: Mapping[str, ServiceEntry]) -> None:
        self._services = dict(services)

    def signing_region(self, endpoint_prefix: str, region: Region) -> Region:
        entry = self._services.get(endpoint_prefix)
        if entry is None:
            log_error("service_metadata_missing", layer="metadata", service=endpoint_prefix, region=region.id)
            raise ServiceMetadataLookupFailure(f"No service metadata for {endpoint_prefix!r}")
        signing = entry.signing_region(region)
        if signing is None:
            log_error("service_region_unknown", layer="metadata", service=endpoint_prefix, region=region.id)
            raise ServiceMetadataLookupFailure(f"Service {endpoint_prefix!r} is not available in region {region.id!r}")
        log_debug("signing_region_resolved", layer="metadata", service=endpoint_prefix, region=region.id, signing_region=signing.id)
        return signing

    def with_services(self, services: Mapping[str, ServiceEntry]) -> StaticServiceMetadata:
        """Return a new oracle where *services* replace same-named entries."""

        return StaticServiceMetadata({**self._services, **services})


def default_service_metadata() -> StaticServiceMetadata:
    """Return an oracle backed by the built-in :data:`DEFAULT_SERVICES` table."""

    return StaticServiceMetadata(DEFAULT_SERVICES)


def load_service_metadata(path: str, *, extend_defaults: bool = True) -> StaticServiceMetadata:
    """Build an oracle from the table stored in *path*.

    Parameters
    ----------
    path:
        TOML, JSON, or YAML file following the format in the module docstring.
    extend_defaults:
        When true, file entries are layered over :data:`DEFAULT_SERVICES`
        instead of replacing the built-in table.
    """

    services = parse_services(load_mapping(path), source=path)
    if extend_defaults:
        return default_service_metadata().with_services(services)
    return StaticServiceMetadata(services)


def parse_services(data: Mapping[str, Any], *, source: str) -> dict[str, ServiceEntry]:
    """Validate a raw table and convert it into :class:`ServiceEntry` rows.

    Examples
    --------
    >>> rows = parse_services({"services": {"iam": {"signing_regions": {"aws": "us-east-1"}}}}, source="demo")
    >>> rows["iam"].signing_region(Region.of("eu-west-1"))
    Region(id='us-east-1')
    """

    raw_services = data.get("services", {})
    if not isinstance(raw_services, Mapping):
        raise InvalidFormat(f"{source}: 'services' must be a table")
    services: dict[str, ServiceEntry] = {}
    for prefix, raw in raw_services.items():
        if not isinstance(raw, Mapping):
            raise InvalidFormat(f"{source}: service {prefix!r} must be a table")
        services[str(prefix)] = _parse_entry(str(prefix), raw, source)
    return services


def _parse_entry(prefix: str, raw: Mapping[str, Any], source: str) -> ServiceEntry:
    regions = raw.get("regions")
    if regions is not None and (isinstance(regions, str) or not isinstance(regions, (list, tuple))):
        raise InvalidFormat(f"{source}: services.{prefix}.regions must be a list")
    signing = raw.get("signing_regions", {})
    if not isinstance(signing, Mapping):
        raise InvalidFormat(f"{source}: services.{prefix}.signing_regions must be a table")
    return ServiceEntry(
        regions=frozenset(str(item).lower() for item in regions) if regions is not None else None,
        signing_regions={str(key).lower(): str(value).lower() for key, value in signing.items()},
    )
