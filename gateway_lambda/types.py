"""
Lambda-native types for API Gateway events, responses and authorizer policies.

Only the fields the library actually reads or writes are declared.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from typing_extensions import NotRequired, TypedDict

HttpMethod = Literal[
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "DELETE",
    "OPTIONS",
    "PATCH",
]
"""HTTP methods supported by API Gateway."""


class APIGatewayRequestContext(TypedDict, total=False):
    """API Gateway request context (minimal, only commonly read fields)."""

    requestId: str
    accountId: str
    apiId: str
    stage: str
    identity: Dict[str, Any]
    authorizer: Dict[str, Any]


class APIGatewayProxyEvent(TypedDict, total=False):
    """
    API Gateway REST API proxy integration event (payload format 1.0).
    """

    resource: str
    path: str
    httpMethod: HttpMethod

    headers: Optional[Dict[str, str]]
    queryStringParameters: Optional[Dict[str, str]]
    pathParameters: Optional[Dict[str, str]]
    stageVariables: Optional[Dict[str, str]]
    body: Optional[str]
    isBase64Encoded: bool

    requestContext: APIGatewayRequestContext


class APIGatewayAuthorizerEvent(TypedDict, total=False):
    """API Gateway TOKEN authorizer event."""

    type: str
    authorizationToken: str
    methodArn: str


class LambdaResponse(TypedDict):
    """API Gateway proxy response format."""

    statusCode: int
    headers: Dict[str, str]
    body: Optional[str]
    isBase64Encoded: bool


class PolicyStatement(TypedDict):
    """A single IAM policy statement."""

    Action: str
    Effect: str
    Resource: Optional[str]


class PolicyDocument(TypedDict):
    Version: str
    Statement: List[PolicyStatement]


class AuthPolicy(TypedDict):
    """Authorizer response: principal plus IAM policy document."""

    principalId: Optional[str]
    policyDocument: PolicyDocument
    context: NotRequired[Dict[str, Union[str, int, bool]]]


class LambdaContext:
    """AWS Lambda context object stub for typing."""

    function_name: str
    memory_limit_in_mb: int
    invoked_function_arn: str
    aws_request_id: str
