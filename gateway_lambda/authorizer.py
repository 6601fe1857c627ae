"""
API Gateway custom (TOKEN) authorizer.

API Gateway invokes the authorizer with:

    {
        "type": "TOKEN",
        "authorizationToken": "caller-supplied-token",
        "methodArn": "arn:aws:execute-api:regionId:accountId:apiId/stage/method/resourcePath"
    }

and expects an IAM policy back. An `HTTPException` raised while authorizing
results in a policy that denies the requested resource; any other exception
results in a policy that denies every resource. Either way the authorizer
returns a policy instead of failing the invocation.

See https://docs.aws.amazon.com/apigateway/latest/developerguide/apigateway-use-lambda-authorizer.html
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from gateway_lambda.arn import ArnComponents, format_arn, parse_arn
from gateway_lambda.exceptions import HTTPException
from gateway_lambda.policy import deny, deny_all
from gateway_lambda.security import AuthorizationCredentials
from gateway_lambda.types import APIGatewayAuthorizerEvent, AuthPolicy

logger = logging.getLogger(__name__)


class AuthorizationRequest(BaseModel):
    """The authorizer event merged with the parts of its method ARN."""

    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None
    authorization_token: Optional[str] = None
    method_arn: str
    region: str
    aws_account_id: str
    rest_api_id: str
    stage: str
    http_method: str
    resource: str

    @classmethod
    def from_event(cls, event: APIGatewayAuthorizerEvent, arn: ArnComponents) -> "AuthorizationRequest":
        return cls(
            type=event.get("type"),
            authorization_token=event.get("authorizationToken"),
            method_arn=event["methodArn"],
            region=arn.region,
            aws_account_id=arn.aws_account_id,
            rest_api_id=arn.rest_api_id,
            stage=arn.stage,
            http_method=arn.http_method,
            resource=arn.resource_path,
        )

    @property
    def resource_arn(self) -> str:
        """The method ARN of the requested resource."""
        return format_arn(
            ArnComponents(
                region=self.region,
                aws_account_id=self.aws_account_id,
                rest_api_id=self.rest_api_id,
                stage=self.stage,
                http_method=self.http_method,
                resource_path=self.resource,
            )
        )

    @property
    def credentials(self) -> Optional[AuthorizationCredentials]:
        """The token split into scheme and credentials, e.g. "Bearer" and "abc"."""
        return AuthorizationCredentials.from_token(self.authorization_token)


def _token_of(event: Any) -> Optional[str]:
    if isinstance(event, Mapping):
        return event.get("authorizationToken")
    return None


class APIGatewayAuthorizer(ABC):
    """
    Handles a custom authorization request from API Gateway.

    Subclasses decide: `authorize()` returns the policy, typically built with
    `gateway_lambda.policy.allow` or `deny`.
    """

    def __call__(self, event: APIGatewayAuthorizerEvent, context: Any = None) -> AuthPolicy:
        return self.handle_request(event, context)

    def handle_request(self, event: APIGatewayAuthorizerEvent, context: Any = None) -> AuthPolicy:
        """
        Lambda entry point. Always returns a policy.

        A typed error denies the full method ARN of the request (`request.resource_arn`),
        not the bare resource path, so the DENY statement names a valid IAM resource.
        """
        principal_id = _token_of(event)
        request: Optional[AuthorizationRequest] = None
        try:
            self.before(event, context)
            arn = parse_arn(event["methodArn"])
            request = AuthorizationRequest.from_event(event, arn)
            auth_policy = self.authorize(request, context)
            if auth_policy is None:
                raise TypeError(f"{type(self).__name__}.authorize() returned no policy")
            return auth_policy
        except HTTPException as exc:
            logger.warning("Authorization denied with %s: %s", exc.status_code, exc, exc_info=True)
            resource = request.resource_arn if request is not None else None
            return deny(principal_id, resource)
        except Exception:
            logger.exception("Authorizer failed, denying all resources")
            return deny_all(principal_id)

    @abstractmethod
    def before(self, event: APIGatewayAuthorizerEvent, context: Any) -> None:
        """
        Called before the method ARN is parsed.

        Raise an `HTTPException` to deny the requested resource.
        """

    @abstractmethod
    def authorize(self, request: AuthorizationRequest, context: Any) -> AuthPolicy:
        """
        Decide whether the caller may invoke the requested resource.

        Raise an `HTTPException` to deny the requested resource.
        """
