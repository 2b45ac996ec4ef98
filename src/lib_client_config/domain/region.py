"""Region and service identity value objects.

Purpose
-------
Model the two identifiers endpoint derivation and signing depend on: the
geographic partition a client talks to (:class:`Region`) and the pair of
constants a concrete service client supplies (:class:`ServiceIdentity`).

Contents
--------
* :class:`Region` – immutable region identifier with partition helpers.
* :class:`ServiceIdentity` – endpoint prefix plus signing name.
* :data:`DEFAULT_DNS_SUFFIX` / :data:`_PARTITION_DNS_SUFFIXES` – DNS suffixes
  keyed by region-identifier prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DEFAULT_DNS_SUFFIX: Final[str] = "amazonaws.com"
"""DNS suffix used by regions that do not belong to a special partition."""

# Longest prefixes first so ``us-isob-`` is matched before ``us-iso-``.
_PARTITION_DNS_SUFFIXES: Final[tuple[tuple[str, str, str], ...]] = (
    ("us-isob-", "aws-iso-b", "sc2s.sgov.gov"),
    ("us-iso-", "aws-iso", "c2s.ic.gov"),
    ("us-gov-", "aws-us-gov", "amazonaws.com"),
    ("cn-", "aws-cn", "amazonaws.com.cn"),
)


@dataclass(frozen=True, slots=True)
class Region:
    """Opaque region identifier; two regions are equal when their ids match.

    Examples
    --------
    >>> Region.of("us-west-2") == Region("us-west-2")
    True
    >>> Region.of("cn-north-1").dns_suffix
    'amazonaws.com.cn'
    >>> str(Region.of("eu-west-1"))
    'eu-west-1'
    """

    id: str

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Region id must be a non-empty string")

    @classmethod
    def of(cls, value: str) -> Region:
        """Return a :class:`Region` for *value* after trimming and lower-casing."""

        return cls(value.strip().lower())

    @property
    def partition(self) -> str:
        """Return the partition name the region belongs to (``"aws"`` by default)."""

        for prefix, partition, _ in _PARTITION_DNS_SUFFIXES:
            if self.id.startswith(prefix):
                return partition
        return "aws"

    @property
    def dns_suffix(self) -> str:
        """Return the DNS suffix used to build endpoints in this region."""

        for prefix, _, suffix in _PARTITION_DNS_SUFFIXES:
            if self.id.startswith(prefix):
                return suffix
        return DEFAULT_DNS_SUFFIX

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True, slots=True)
class ServiceIdentity:
    """Constants a concrete client supplies to the resolution engine.

    Attributes
    ----------
    endpoint_prefix:
        First DNS label of the service endpoint (``"dynamodb"`` in
        ``dynamodb.us-east-1.amazonaws.com``).
    signing_name:
        Name the service signs requests with; often equal to the prefix.
    """

    endpoint_prefix: str
    signing_name: str
