"""Test authorization token parsing."""

import pytest

from gateway_lambda.security import AuthorizationCredentials, get_authorization_scheme_param


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Bearer secret123", ("Bearer", "secret123")),
        ("Basic dXNlcjpwYXNz", ("Basic", "dXNlcjpwYXNz")),
        ("Bearer token with spaces", ("Bearer", "token with spaces")),
        ("Bearer", ("Bearer", "")),
        ("", ("", "")),
        (None, ("", "")),
    ],
)
def test_get_authorization_scheme_param(value, expected):
    assert get_authorization_scheme_param(value) == expected


def test_bearer_credentials():
    """Test a bearer token is split into scheme and credentials."""
    credentials = AuthorizationCredentials.from_token("Bearer secret123")

    assert credentials is not None
    assert credentials.scheme == "Bearer"
    assert credentials.credentials == "secret123"
    assert credentials.is_bearer


def test_scheme_is_case_insensitive():
    credentials = AuthorizationCredentials.from_token("bearer abc")
    assert credentials is not None and credentials.is_bearer


def test_other_scheme_is_not_bearer():
    credentials = AuthorizationCredentials.from_token("Basic dXNlcjpwYXNz")
    assert credentials is not None
    assert not credentials.is_bearer


@pytest.mark.parametrize("token", [None, "", "Bearer", "secret123"])
def test_incomplete_token(token):
    """Test a token without both scheme and credentials gives None."""
    assert AuthorizationCredentials.from_token(token) is None
