from __future__ import annotations

import pytest

from aws_service_clients.core.client import ClientConfiguration
from aws_service_clients.core.endpoint import (
    DefaultEndpointProvider,
    Endpoint,
    is_valid_host_label,
    partition_for_region,
    ruleset_provider,
)
from aws_service_clients.core.errors import CoreErrors


def _provider(**config) -> DefaultEndpointProvider:
    provider = DefaultEndpointProvider("iotsitewise")
    provider.init_built_in_parameters(ClientConfiguration(**config))
    return provider


@pytest.mark.parametrize(
    ("config", "expected"),
    [
        ({"region": "us-east-1"}, "https://iotsitewise.us-east-1.amazonaws.com"),
        ({"region": "cn-north-1"}, "https://iotsitewise.cn-north-1.amazonaws.com.cn"),
        ({"region": "us-west-2", "use_fips": True}, "https://iotsitewise-fips.us-west-2.amazonaws.com"),
        ({"region": "eu-west-1", "use_dualstack": True}, "https://iotsitewise.eu-west-1.api.aws"),
        ({"region": "us-east-1", "endpoint_override": "http://localhost:4566/"}, "http://localhost:4566"),
    ],
)
def test_resolve_endpoint(config, expected):
    outcome = _provider(**config).resolve_endpoint()

    assert outcome.result.url == expected


def test_resolved_endpoint_carries_signing_details():
    endpoint = _provider(region="ap-southeast-2").resolve_endpoint().result

    assert endpoint.signing_region == "ap-southeast-2"
    assert endpoint.signing_name == "iotsitewise"


def test_call_parameters_override_built_ins():
    outcome = _provider(region="us-east-1").resolve_endpoint({"Region": "eu-central-1"})

    assert outcome.result.url == "https://iotsitewise.eu-central-1.amazonaws.com"


def test_missing_region_is_an_error():
    outcome = _provider().resolve_endpoint()

    assert outcome.error.error_type is CoreErrors.ENDPOINT_RESOLUTION_FAILURE
    assert outcome.error.message == "Invalid Configuration: Missing Region"


@pytest.mark.parametrize(
    "config",
    [
        {"region": "us-east-1", "endpoint_override": "https://x.example.com", "use_fips": True},
        {"region": "us-east-1", "endpoint_override": "https://x.example.com", "use_dualstack": True},
        {"region": "US East"},
    ],
)
def test_invalid_combinations_fail(config):
    outcome = _provider(**config).resolve_endpoint()

    assert outcome.error.error_type is CoreErrors.ENDPOINT_RESOLUTION_FAILURE


def test_override_endpoint_applies_to_later_resolutions():
    provider = _provider(region="us-east-1")
    before = provider.resolve_endpoint().result

    provider.override_endpoint("https://custom.example.com")

    assert before.url == "https://iotsitewise.us-east-1.amazonaws.com"
    assert provider.resolve_endpoint().result.url == "https://custom.example.com"
    assert provider.built_in_parameters["Endpoint"] == "https://custom.example.com"


def test_add_prefix_if_missing():
    endpoint = Endpoint("https://iotsitewise.us-east-1.amazonaws.com")

    assert endpoint.add_prefix_if_missing("data.") is None
    assert endpoint.add_prefix_if_missing("data.") is None
    assert endpoint.url == "https://data.iotsitewise.us-east-1.amazonaws.com"


def test_add_prefix_rejects_invalid_label():
    endpoint = Endpoint("https://iotsitewise.us-east-1.amazonaws.com")

    error = endpoint.add_prefix_if_missing("bad_label.")

    assert error.error_type is CoreErrors.ENDPOINT_RESOLUTION_FAILURE
    assert endpoint.url == "https://iotsitewise.us-east-1.amazonaws.com"


def test_add_path_keeps_base_path():
    endpoint = Endpoint("https://gateway.example.com/stage/")

    endpoint.add_path("/assets/abc")
    endpoint.set_query_string("?a=1")

    assert endpoint.url == "https://gateway.example.com/stage/assets/abc?a=1"
    assert endpoint.path == "/stage/assets/abc"


def test_add_path_segment_escapes_slashes():
    endpoint = Endpoint("https://example.com")

    endpoint.add_path_segment("a/b")

    assert endpoint.url == "https://example.com/a%2Fb"


def test_host_label_validation():
    assert is_valid_host_label("api")
    assert is_valid_host_label("a.b-c", allow_subdomains=True)
    assert not is_valid_host_label("a.b")
    assert not is_valid_host_label("-api")


def test_partition_lookup():
    assert partition_for_region("us-gov-west-1")["name"] == "aws-us-gov"
    assert partition_for_region("us-isob-east-1")["name"] == "aws-iso-b"
    assert partition_for_region("eu-isoe-west-1")["dnsSuffix"] == "cloud.adc-e.uk"
    assert partition_for_region("eu-west-3")["name"] == "aws"


@pytest.mark.parametrize(
    ("region", "expected"),
    [
        ("eu-isoe-west-1", "https://rds.eu-isoe-west-1.cloud.adc-e.uk"),
        ("cn-northwest-1", "https://rds.cn-northwest-1.amazonaws.com.cn"),
    ],
)
def test_ruleset_covers_every_partition(region, expected):
    provider = DefaultEndpointProvider("rds")
    provider.init_built_in_parameters(ClientConfiguration(region=region))

    assert provider.resolve_endpoint().result.url == expected


def test_ruleset_name_can_differ_from_prefix():
    provider = DefaultEndpointProvider("voiceid", ruleset_name="voice-id")
    provider.init_built_in_parameters(ClientConfiguration(region="us-east-1"))

    assert ruleset_provider("voice-id") is not None
    assert provider.resolve_endpoint().result.url == "https://voiceid.us-east-1.amazonaws.com"


def test_service_without_ruleset_uses_partition_rules():
    provider = DefaultEndpointProvider("a4b")
    provider.init_built_in_parameters(ClientConfiguration(region="eu-isoe-west-1", use_fips=True))

    assert ruleset_provider("a4b") is None
    assert provider.resolve_endpoint().result.url == "https://a4b-fips.eu-isoe-west-1.cloud.adc-e.uk"


def test_service_without_ruleset_rejects_fips_with_custom_endpoint():
    provider = DefaultEndpointProvider("a4b")
    provider.init_built_in_parameters(
        ClientConfiguration(region="us-east-1", use_fips=True, endpoint_override="https://x.example.com")
    )

    outcome = provider.resolve_endpoint()

    assert outcome.error.message == "Invalid Configuration: FIPS and custom endpoint are not supported"


def test_invalid_region_name_is_rejected_before_rules():
    outcome = _provider(region="us-east-1").resolve_endpoint({"Region": "Not A Region"})

    assert outcome.error.error_type is CoreErrors.ENDPOINT_RESOLUTION_FAILURE
    assert "Not A Region" in outcome.error.message
