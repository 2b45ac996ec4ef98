"""Domain-level client configuration containers.

Purpose
-------
Anchor the mutable working copy owned by a builder and the immutable value
objects produced by finalization. This module belongs to the domain layer and
performs no I/O.

Contents
--------
* :class:`SourceInfo` – typed provenance record naming the layer that supplied
  a value.
* :class:`MutableClientConfiguration` – working set of values mutated only by
  its owner (a builder) or by the layer pipeline on a private clone.
* :class:`ImmutableClientConfiguration` – frozen result for blocking clients.
* :class:`ImmutableAsyncClientConfiguration` – frozen result for non-blocking
  clients, additionally carrying the resolved executor.

System Role
-----------
:class:`lib_client_config.core.ClientBuilder` clones a
:class:`MutableClientConfiguration` for every finalization, lets
:mod:`lib_client_config.application.merge` fill the gaps, and freezes the clone
with :meth:`ImmutableClientConfiguration.freeze`. Frozen instances carry no
mutation points and may be shared across threads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Final, TypedDict

from .errors import Misconfiguration
from .options import EMPTY_OVERRIDES, AdvancedOption, OverrideConfiguration

CUSTOMER_LAYER: Final[str] = "customer"
"""Layer name recorded for values written through the builder's setters."""

_OVERRIDE_PREFIX: Final[str] = "override."


class SourceInfo(TypedDict):
    """Describe which layer supplied a configuration value.

    Attributes
    ----------
    layer:
        Logical layer name (``"customer"``, ``"builder"``, ``"service"``,
        ``"global"`` or ``"http"``).
    key:
        Field name (``"endpoint"``) or ``"override.<OPTION>"`` for advanced
        options.
    """

    layer: str
    key: str


def override_key(option: AdvancedOption) -> str:
    """Return the provenance key used for *option*.

    Examples
    --------
    >>> override_key(AdvancedOption.SIGNING_REGION)
    'override.SIGNING_REGION'
    """

    return f"{_OVERRIDE_PREFIX}{AdvancedOption(option).value}"


@dataclass(slots=True)
class MutableClientConfiguration:
    """Working configuration owned by exactly one builder.

    Every attribute is optional; ``None`` means "unset" and is the only state
    the default layers are allowed to fill.

    Examples
    --------
    >>> original = MutableClientConfiguration()
    >>> original.set("endpoint", "https://custom.example.com")
    >>> clone = original.clone()
    >>> clone.fill_default("endpoint", "https://other.example.com", layer="builder")
    False
    >>> clone.fill_default("credentials_provider", object(), layer="global")
    True
    >>> original.credentials_provider is None
    True
    """

    endpoint: str | None = None
    credentials_provider: Any | None = None
    override_configuration: OverrideConfiguration = field(default_factory=lambda: EMPTY_OVERRIDES)
    async_executor: Any | None = None
    http_client: Any | None = None
    async_http_client: Any | None = None
    origins: dict[str, SourceInfo] = field(default_factory=dict)

    def set(self, name: str, value: Any, *, layer: str = CUSTOMER_LAYER) -> None:
        """Write *value* unconditionally and record *layer* as its origin."""

        _ensure_field(name)
        if name == "override_configuration":
            self._set_overrides(value if value is not None else EMPTY_OVERRIDES, layer)
            return
        setattr(self, name, value)
        if value is None:
            self.origins.pop(name, None)
        else:
            self.origins[name] = {"layer": layer, "key": name}

    def fill_default(self, name: str, value: Any, *, layer: str) -> bool:
        """Assign *value* only when the field is unset; return whether it was applied."""

        _ensure_field(name)
        if value is None or getattr(self, name) is not None:
            return False
        setattr(self, name, value)
        self.origins[name] = {"layer": layer, "key": name}
        return True

    def fill_override_defaults(
        self, defaults: Mapping[AdvancedOption, Any], *, layer: str
    ) -> list[AdvancedOption]:
        """Backfill advanced options absent from the current override configuration."""

        added = self.override_configuration.missing_keys(defaults)
        self.override_configuration = self.override_configuration.with_defaults(defaults)
        for option in added:
            self.origins[override_key(option)] = {"layer": layer, "key": override_key(option)}
        return added

    def clone(self) -> MutableClientConfiguration:
        """Return an independent copy; only the provenance map is mutable and it is copied.

        Collaborator references (credentials provider, executor, transport
        clients) are capabilities the configuration does not own, so they are
        shared rather than copied.
        """

        return replace(self, origins={key: dict(value) for key, value in self.origins.items()})  # type: ignore[misc]

    def _set_overrides(self, overrides: OverrideConfiguration, layer: str) -> None:
        self.override_configuration = overrides
        for key in [key for key in self.origins if key.startswith(_OVERRIDE_PREFIX)]:
            del self.origins[key]
        for option in overrides:
            self.origins[override_key(option)] = {"layer": layer, "key": override_key(option)}


_FIELD_NAMES: Final[frozenset[str]] = frozenset(
    item.name for item in fields(MutableClientConfiguration) if item.name != "origins"
)


def _ensure_field(name: str) -> None:
    if name not in _FIELD_NAMES:
        raise AttributeError(f"Unknown configuration field: {name}")


@dataclass(frozen=True, slots=True)
class ImmutableClientConfiguration:
    """Frozen configuration for blocking clients.

    Why
    ----
    Client instances need a read-only view they can share across threads
    without copying it first.

    What
    ----
    Holds the merged endpoint, credentials provider, advanced options, and
    the bound blocking transport client, together with read-only provenance.
    Build instances with :meth:`freeze`.
    """

    endpoint: str
    credentials_provider: Any
    override_configuration: OverrideConfiguration
    http_client: Any
    origins: Mapping[str, SourceInfo]

    def __post_init__(self) -> None:
        object.__setattr__(self, "origins", MappingProxyType(dict(self.origins)))

    @classmethod
    def freeze(cls, configuration: MutableClientConfiguration) -> ImmutableClientConfiguration:
        """Freeze a fully merged working copy, raising :class:`Misconfiguration` on gaps."""

        _require_present(configuration, ("endpoint", "credentials_provider", "http_client"))
        return cls(
            endpoint=configuration.endpoint,  # type: ignore[arg-type]
            credentials_provider=configuration.credentials_provider,
            override_configuration=configuration.override_configuration,
            http_client=configuration.http_client,
            origins=configuration.origins,
        )

    def advanced_option(self, option: AdvancedOption) -> Any | None:
        """Return the advanced option value or ``None`` when absent."""

        return self.override_configuration.advanced_option(option)

    def require_advanced_option(self, option: AdvancedOption) -> Any:
        """Return the advanced option value, raising :class:`Misconfiguration` when absent.

        Examples
        --------
        >>> cfg = ImmutableClientConfiguration("https://x", object(), EMPTY_OVERRIDES, object(), {})
        >>> cfg.require_advanced_option(AdvancedOption.REGION)
        Traceback (most recent call last):
        ...
        lib_client_config.domain.errors.Misconfiguration: Required advanced option REGION is not configured
        """

        value = self.override_configuration.advanced_option(option)
        if value is None:
            raise Misconfiguration(f"Required advanced option {AdvancedOption(option).value} is not configured")
        return value

    def origin(self, key: str) -> SourceInfo | None:
        """Return provenance for a field name or ``override.<OPTION>`` key."""

        return self.origins.get(key)

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly summary; collaborators are rendered by type name."""

        return {
            "endpoint": self.endpoint,
            "credentials_provider": _describe(self.credentials_provider),
            "http_client": _describe(self.http_client),
            "advanced_options": _describe_overrides(self.override_configuration),
        }


@dataclass(frozen=True, slots=True)
class ImmutableAsyncClientConfiguration:
    """Frozen configuration for non-blocking clients.

    Mirrors :class:`ImmutableClientConfiguration` but binds a non-blocking
    transport client and the executor async completions are dispatched on.
    """

    endpoint: str
    credentials_provider: Any
    override_configuration: OverrideConfiguration
    async_http_client: Any
    async_executor: Any
    origins: Mapping[str, SourceInfo]

    def __post_init__(self) -> None:
        object.__setattr__(self, "origins", MappingProxyType(dict(self.origins)))

    @classmethod
    def freeze(cls, configuration: MutableClientConfiguration) -> ImmutableAsyncClientConfiguration:
        """Freeze a fully merged working copy, raising :class:`Misconfiguration` on gaps."""

        _require_present(
            configuration,
            ("endpoint", "credentials_provider", "async_http_client", "async_executor"),
        )
        return cls(
            endpoint=configuration.endpoint,  # type: ignore[arg-type]
            credentials_provider=configuration.credentials_provider,
            override_configuration=configuration.override_configuration,
            async_http_client=configuration.async_http_client,
            async_executor=configuration.async_executor,
            origins=configuration.origins,
        )

    def advanced_option(self, option: AdvancedOption) -> Any | None:
        return self.override_configuration.advanced_option(option)

    def require_advanced_option(self, option: AdvancedOption) -> Any:
        value = self.override_configuration.advanced_option(option)
        if value is None:
            raise Misconfiguration(f"Required advanced option {AdvancedOption(option).value} is not configured")
        return value

    def origin(self, key: str) -> SourceInfo | None:
        return self.origins.get(key)

    def as_dict(self) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "credentials_provider": _describe(self.credentials_provider),
            "async_http_client": _describe(self.async_http_client),
            "async_executor": _describe(self.async_executor),
            "advanced_options": _describe_overrides(self.override_configuration),
        }


def _require_present(configuration: MutableClientConfiguration, names: tuple[str, ...]) -> None:
    """Raise :class:`Misconfiguration` listing every field in *names* that is still unset."""

    missing = [name for name in names if getattr(configuration, name) is None]
    if missing:
        raise Misconfiguration(f"Configuration is incomplete; missing: {', '.join(missing)}")


def _describe(value: Any) -> str | None:
    if value is None:
        return None
    return type(value).__name__


def _describe_overrides(overrides: OverrideConfiguration) -> dict[str, Any]:
    """Render advanced options with plain JSON values (regions become their id)."""

    rendered: dict[str, Any] = {}
    for option, value in overrides.items():
        rendered[option.value] = value if isinstance(value, (str, int, float, bool)) or value is None else str(value)
    return rendered
