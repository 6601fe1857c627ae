"""Tests for execute-api ARN parsing and formatting."""

import pytest

from gateway_lambda.arn import ArnComponents, format_arn, parse_arn
from gateway_lambda.exceptions import MalformedArnError


def test_parse_method_arn():
    """Test every component is extracted."""
    arn = parse_arn("arn:aws:execute-api:us-east-1:123456789012:abc123/prod/GET/pets/42")

    assert arn.region == "us-east-1"
    assert arn.aws_account_id == "123456789012"
    assert arn.rest_api_id == "abc123"
    assert arn.stage == "prod"
    assert arn.http_method == "GET"
    assert arn.resource_path == "/pets/42"


def test_parse_root_resource():
    """Test a trailing slash gives the root resource path."""
    arn = parse_arn("arn:aws:execute-api:eu-west-1:111111111111:api/dev/POST/")
    assert arn.http_method == "POST"
    assert arn.resource_path == "/"


def test_parse_without_resource_path():
    """Test an ARN ending at the method has an empty resource path."""
    arn = parse_arn("arn:aws:execute-api:eu-west-1:111111111111:api/dev/*")
    assert arn.http_method == "*"
    assert arn.resource_path == ""


@pytest.mark.parametrize(
    "method_arn",
    [
        "arn:aws:execute-api:us-east-1:123456789012:abc123/prod/GET/pets/42",
        "arn:aws:execute-api:R:A:I/S/M/p1/p2",
        "arn:aws:execute-api:eu-west-1:111111111111:api/dev/POST/",
        "arn:aws:execute-api:*:*:*/*/*/*",
        "arn:aws:execute-api:us-east-1:123456789012:abc123/prod/GET/files/a:b",
    ],
)
def test_format_parse_roundtrip(method_arn):
    """Test format(parse(arn)) == arn for well-formed ARNs."""
    assert format_arn(parse_arn(method_arn)) == method_arn


def test_format_components():
    """Test formatting uses the fixed execute-api template."""
    components = ArnComponents(
        region="us-east-1",
        aws_account_id="123456789012",
        rest_api_id="abc123",
        stage="prod",
        http_method="DELETE",
        resource_path="/pets/1",
    )
    assert components.format() == "arn:aws:execute-api:us-east-1:123456789012:abc123/prod/DELETE/pets/1"


def test_components_are_immutable():
    """Test parsed components cannot be changed."""
    arn = parse_arn("arn:aws:execute-api:R:A:I/S/M/p")
    with pytest.raises(Exception):
        arn.region = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "method_arn",
    [
        "",
        "not-an-arn",
        "arn:aws:execute-api:us-east-1:123456789012",
        "arn:aws:execute-api:us-east-1:123456789012:abc123/prod",
        None,
    ],
)
def test_malformed_arn(method_arn):
    """Test malformed ARNs raise MalformedArnError, a ValueError."""
    with pytest.raises(MalformedArnError) as exc_info:
        parse_arn(method_arn)
    assert isinstance(exc_info.value, ValueError)
