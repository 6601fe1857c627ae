"""Test utilities and helper functions."""

import json
from typing import Any, Dict, Optional

from gateway_lambda.types import APIGatewayAuthorizerEvent, APIGatewayProxyEvent, HttpMethod

METHOD_ARN = "arn:aws:execute-api:us-east-1:123456789012:abc123/prod/GET/pets/42"


def make_event(
    method: HttpMethod = "GET",
    path: str = "/",
    body: Any = None,
    query: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
    path_params: Optional[Dict[str, str]] = None,
    stage_variables: Optional[Dict[str, str]] = None,
    raw_body: Optional[str] = None,
) -> APIGatewayProxyEvent:
    """Create an API Gateway proxy event. `body` is JSON-encoded, `raw_body` is used as-is."""
    if raw_body is None and body is not None:
        raw_body = json.dumps(body)
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": headers or {},
        "queryStringParameters": query,
        "pathParameters": path_params,
        "stageVariables": stage_variables,
        "body": raw_body,
        "isBase64Encoded": False,
        "requestContext": {
            "requestId": "test-request-id",
            "accountId": "123456789012",
            "stage": "prod",
            "identity": {"sourceIp": "1.2.3.4"},
        },
    }


def make_authorizer_event(
    token: Optional[str] = "Bearer allow-me",
    method_arn: Optional[str] = METHOD_ARN,
) -> APIGatewayAuthorizerEvent:
    """Create an API Gateway TOKEN authorizer event."""
    event: APIGatewayAuthorizerEvent = {"type": "TOKEN"}
    if token is not None:
        event["authorizationToken"] = token
    if method_arn is not None:
        event["methodArn"] = method_arn
    return event
