"""
gateway_lambda - request handling for API Gateway Lambda functions.
"""

from gateway_lambda import policy as policy
from gateway_lambda.arn import ArnComponents as ArnComponents
from gateway_lambda.arn import format_arn as format_arn
from gateway_lambda.arn import parse_arn as parse_arn
from gateway_lambda.authorizer import APIGatewayAuthorizer as APIGatewayAuthorizer
from gateway_lambda.authorizer import AuthorizationRequest as AuthorizationRequest
from gateway_lambda.codecs import DEFAULT_DESERIALIZERS as DEFAULT_DESERIALIZERS
from gateway_lambda.codecs import DEFAULT_SERIALIZERS as DEFAULT_SERIALIZERS
from gateway_lambda.codecs import CodecRegistry as CodecRegistry

from .exceptions import HTTPException as HTTPException
from .exceptions import MalformedArnError as MalformedArnError
from .exceptions import RequestValidationError as RequestValidationError
from .handler import RequestHandler as RequestHandler
from .handler import create_lambda_handler as create_lambda_handler
from .logging_config import configure_logging as configure_logging
from .policy import PolicyEffect as PolicyEffect
from .request import RequestState as RequestState
from .types import APIGatewayAuthorizerEvent as APIGatewayAuthorizerEvent
from .types import APIGatewayProxyEvent as APIGatewayProxyEvent

__version__ = "0.1.0"
