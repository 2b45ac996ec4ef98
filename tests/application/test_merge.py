from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_client_config.application.defaults import ClientConfigurationDefaults
from lib_client_config.application.merge import apply_layers
from lib_client_config.domain.config import MutableClientConfiguration
from lib_client_config.domain.options import AdvancedOption

FIELDS = ("endpoint", "credentials_provider", "http_client")
LAYER_NAMES = ("builder", "service", "global", "http")


def _layer(values: dict[str, str]) -> ClientConfigurationDefaults:
    return ClientConfigurationDefaults(**{name: (lambda value=value: value) for name, value in values.items()})


def test_precedence_first_layer_wins() -> None:
    layers = [
        ("builder", _layer({"endpoint": "builder-endpoint"})),
        ("service", _layer({"endpoint": "service-endpoint", "credentials_provider": "service-creds"})),
        ("global", _layer({"credentials_provider": "global-creds", "http_client": "global-client"})),
    ]
    merged = apply_layers(MutableClientConfiguration(), layers, variant="sync")
    assert merged.endpoint == "builder-endpoint"
    assert merged.credentials_provider == "service-creds"
    assert merged.http_client == "global-client"
    assert merged.origins["credentials_provider"]["layer"] == "service"


def test_customer_values_survive_every_layer() -> None:
    configuration = MutableClientConfiguration()
    configuration.set("credentials_provider", "customer-creds")
    layers = [(name, _layer({"credentials_provider": f"{name}-creds"})) for name in LAYER_NAMES]
    merged = apply_layers(configuration, layers, variant="async")
    assert merged.credentials_provider == "customer-creds"
    assert merged.origins["credentials_provider"]["layer"] == "customer"


def test_later_layers_observe_earlier_results() -> None:
    seen: list[object] = []

    def _record(builder) -> None:
        seen.append(configuration.endpoint)

    configuration = MutableClientConfiguration()
    layers = [
        ("builder", _layer({"endpoint": "builder-endpoint"})),
        ("service", ClientConfigurationDefaults(override_defaults=_record)),
    ]
    apply_layers(configuration, layers, variant="sync")
    assert seen == ["builder-endpoint"]


def test_explicit_false_detection_is_never_reenabled() -> None:
    configuration = MutableClientConfiguration()
    configuration.set(
        "override_configuration",
        configuration.override_configuration.with_defaults({AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION: False}),
    )
    enable = ClientConfigurationDefaults(
        override_defaults=lambda builder: builder.advanced_option(AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION, True)
    )
    merged = apply_layers(configuration, [(name, enable) for name in LAYER_NAMES], variant="sync")
    assert merged.override_configuration[AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION] is False


def test_layer_events_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_client_config")
    apply_layers(MutableClientConfiguration(), [("global", _layer({"endpoint": "x"}))], variant="sync", service="demo")
    contexts = [getattr(record, "context") for record in caplog.records if record.getMessage() == "layer_applied"]
    assert contexts[-1]["layer"] == "global"
    assert contexts[-1]["service"] == "demo"
    assert contexts[-1]["filled"] == ["endpoint"]


def test_unknown_variant_is_rejected() -> None:
    with pytest.raises(ValueError):
        apply_layers(MutableClientConfiguration(), [], variant="threaded")  # type: ignore[arg-type]


LAYER_VALUES = st.lists(
    st.dictionaries(st.sampled_from(FIELDS), st.text(min_size=1, max_size=5), max_size=3),
    min_size=1,
    max_size=4,
)


@given(LAYER_VALUES, st.dictionaries(st.sampled_from(FIELDS), st.text(min_size=1, max_size=5), max_size=3))
def test_each_field_comes_from_highest_precedence_source(layer_values, customer) -> None:
    configuration = MutableClientConfiguration()
    for name, value in customer.items():
        configuration.set(name, value)
    layers = [(f"layer{index}", _layer(values)) for index, values in enumerate(layer_values)]
    merged = apply_layers(configuration, layers, variant="sync")
    for name in FIELDS:
        candidates = [customer] + list(layer_values)
        expected = next((source[name] for source in candidates if name in source), None)
        assert getattr(merged, name) == expected


def test_merge_is_idempotent_on_merged_state() -> None:
    layers = [("global", _layer({"endpoint": "a", "http_client": "b"}))]
    once = apply_layers(MutableClientConfiguration(), layers, variant="sync")
    twice = apply_layers(once.clone(), layers, variant="sync")
    assert (twice.endpoint, twice.http_client) == (once.endpoint, once.http_client)
    assert twice.origins == once.origins
