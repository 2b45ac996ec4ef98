"""Advanced options and the override configuration that carries them.

Purpose
-------
Provide the strongly keyed side channel used to thread cross-cutting settings
(region, signing name, signing region, feature flags) through the layer
pipeline.

Contents
--------
* :class:`AdvancedOption` – the fixed, enumerable set of option keys.
* :class:`OverrideConfiguration` – immutable ``Mapping`` from option to value.
* :class:`OverrideConfigurationBuilder` – mutable builder; the last write for a
  key wins.
* :data:`EMPTY_OVERRIDES` – shared empty instance.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator


class AdvancedOption(str, Enum):
    """Keys accepted by :class:`OverrideConfiguration`."""

    REGION = "REGION"
    SERVICE_SIGNING_NAME = "SERVICE_SIGNING_NAME"
    SIGNING_REGION = "SIGNING_REGION"
    ENABLE_DEFAULT_REGION_DETECTION = "ENABLE_DEFAULT_REGION_DETECTION"


class OverrideConfiguration(Mapping[AdvancedOption, Any]):
    """Read-only mapping of advanced options.

    Instances never change after construction; use :meth:`to_builder` or
    :meth:`with_defaults` to derive new ones.

    Examples
    --------
    >>> overrides = OverrideConfiguration.builder().advanced_option(
    ...     AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION, False
    ... ).build()
    >>> overrides.advanced_option(AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION)
    False
    >>> overrides.advanced_option(AdvancedOption.REGION) is None
    True
    """

    __slots__ = ("_options",)

    def __init__(self, options: Mapping[AdvancedOption, Any] | None = None) -> None:
        self._options: Mapping[AdvancedOption, Any] = MappingProxyType(
            {AdvancedOption(key): value for key, value in (options or {}).items()}
        )

    @staticmethod
    def builder() -> OverrideConfigurationBuilder:
        return OverrideConfigurationBuilder()

    def __getitem__(self, key: AdvancedOption) -> Any:
        return self._options[key]

    def __iter__(self) -> Iterator[AdvancedOption]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        entries = ", ".join(f"{key.value}={value!r}" for key, value in self._options.items())
        return f"OverrideConfiguration({entries})"

    def advanced_option(self, key: AdvancedOption) -> Any | None:
        """Return the value stored for *key* or ``None`` when it was never set."""

        return self._options.get(key)

    def to_builder(self) -> OverrideConfigurationBuilder:
        """Return a builder pre-populated with the current options."""

        return OverrideConfigurationBuilder(self._options)

    def with_defaults(self, defaults: Mapping[AdvancedOption, Any]) -> OverrideConfiguration:
        """Return a copy where *defaults* fill only the keys not already present.

        Existing keys are never replaced, so a value placed by a
        higher-precedence layer survives every later layer.

        Examples
        --------
        >>> current = OverrideConfiguration({AdvancedOption.REGION: "eu-west-1"})
        >>> merged = current.with_defaults({AdvancedOption.REGION: "us-east-1", AdvancedOption.SERVICE_SIGNING_NAME: "s3"})
        >>> merged[AdvancedOption.REGION], merged[AdvancedOption.SERVICE_SIGNING_NAME]
        ('eu-west-1', 's3')
        """

        missing = {key: value for key, value in defaults.items() if key not in self._options}
        if not missing:
            return self
        return OverrideConfiguration({**self._options, **missing})

    def missing_keys(self, defaults: Mapping[AdvancedOption, Any]) -> list[AdvancedOption]:
        """Return the keys of *defaults* that :meth:`with_defaults` would add."""

        return [key for key in defaults if key not in self._options]


class OverrideConfigurationBuilder:
    """Collect advanced options before freezing them into an override configuration."""

    def __init__(self, options: Mapping[AdvancedOption, Any] | None = None) -> None:
        self._options: dict[AdvancedOption, Any] = dict(options or {})

    def advanced_option(self, key: AdvancedOption, value: Any) -> OverrideConfigurationBuilder:
        """Store *value* under *key*, replacing any earlier write to the same key."""

        self._options[AdvancedOption(key)] = value
        return self

    def build(self) -> OverrideConfiguration:
        return OverrideConfiguration(self._options)


EMPTY_OVERRIDES = OverrideConfiguration()
"""Shared empty override configuration; safe to reuse because it is immutable."""
