"""
IAM policy builders for API Gateway custom authorizers.

See https://docs.aws.amazon.com/apigateway/latest/developerguide/api-gateway-lambda-authorizer-output.html
"""

from enum import Enum
from typing import Dict, Optional, Sequence, Union

from gateway_lambda.arn import ArnComponents, format_arn
from gateway_lambda.types import AuthPolicy, PolicyStatement

ALL = "*"
POLICY_VERSION = "2012-10-17"
INVOKE_ACTION = "execute-api:Invoke"

ContextValue = Union[str, int, bool]


class PolicyEffect(str, Enum):
    ALLOW = "Allow"
    DENY = "Deny"


def statement(effect: PolicyEffect, resource: Optional[str]) -> PolicyStatement:
    """Build an `execute-api:Invoke` statement for `resource`."""
    return {
        "Action": INVOKE_ACTION,
        "Effect": PolicyEffect(effect).value,
        "Resource": resource,
    }


def policy(
    principal_id: Optional[str],
    statements: Sequence[PolicyStatement],
    context: Optional[Dict[str, ContextValue]] = None,
) -> AuthPolicy:
    """
    Wrap statements in an authorizer response.

    `context` is passed through by API Gateway to the integration as
    `requestContext.authorizer`.
    """
    auth_policy: AuthPolicy = {
        "principalId": principal_id,
        "policyDocument": {
            "Version": POLICY_VERSION,
            "Statement": list(statements),
        },
    }
    if context:
        auth_policy["context"] = dict(context)
    return auth_policy


def allow(
    principal_id: Optional[str],
    resource: Optional[str],
    context: Optional[Dict[str, ContextValue]] = None,
) -> AuthPolicy:
    return policy(principal_id, [statement(PolicyEffect.ALLOW, resource)], context)


def deny(principal_id: Optional[str], resource: Optional[str]) -> AuthPolicy:
    return policy(principal_id, [statement(PolicyEffect.DENY, resource)])


def deny_all(principal_id: Optional[str]) -> AuthPolicy:
    """Deny access to every API Gateway resource."""
    wildcard = ArnComponents(
        region=ALL,
        aws_account_id=ALL,
        rest_api_id=ALL,
        stage=ALL,
        http_method=ALL,
        resource_path="/" + ALL,
    )
    return deny(principal_id, format_arn(wildcard))
