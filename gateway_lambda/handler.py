"""
Request lifecycle for API Gateway proxy integrations.

Subclass `RequestHandler`, implement `before()` and `execute()`, and expose the
instance to Lambda:

    class CreateItem(RequestHandler):
        def before(self, event, context):
            pass

        def execute(self, body, context):
            return {"id": save(body)}

    lambda_handler = create_lambda_handler(CreateItem(schema=Item))
"""

import json
import logging
from abc import ABC, abstractmethod
from contextvars import ContextVar
from http import HTTPStatus
from typing import Any, Callable, Optional

from typing_extensions import Protocol

from gateway_lambda.codecs import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_DESERIALIZERS,
    DEFAULT_SERIALIZERS,
    CodecRegistry,
    RequestBodyDeserializer,
    ResponseBodySerializer,
)
from gateway_lambda.exceptions import GENERIC_ERROR_MESSAGE, HTTPException
from gateway_lambda.request import RequestState
from gateway_lambda.response import LambdaResponse
from gateway_lambda.types import APIGatewayProxyEvent
from gateway_lambda.types import LambdaResponse as LambdaResponseDict
from gateway_lambda.validation import DEFAULT_VALIDATOR, RequestBodyValidator

logger = logging.getLogger(__name__)

GENERIC_ERROR_BODY = json.dumps({"message": GENERIC_ERROR_MESSAGE}, separators=(",", ":"))

_current_request: ContextVar[Optional[RequestState]] = ContextVar("gateway_lambda_request", default=None)


class RequestHandler(ABC):
    """
    Handles one API Gateway proxy invocation from event to response envelope.

    The handling process, in order:

    - copy the request attributes out of the event
    - pick a deserializer from `Content-Type` and a serializer from `Accept`
    - call `before()`
    - deserialize the request body
    - validate it against `schema`, when one is given
    - call `execute()` and serialize its return value

    An `HTTPException` raised anywhere in that sequence becomes a response with its
    status code and serialized entity. Any other exception is logged and becomes a
    500 with a generic body. `handle_request` always returns a response.
    """

    def __init__(
        self,
        schema: Any = None,
        validator: Optional[RequestBodyValidator] = None,
        deserializers: Optional[CodecRegistry[RequestBodyDeserializer]] = None,
        serializers: Optional[CodecRegistry[ResponseBodySerializer]] = None,
    ):
        self.schema = schema
        self.validator = validator or DEFAULT_VALIDATOR
        self.deserializers = deserializers if deserializers is not None else DEFAULT_DESERIALIZERS
        self.serializers = serializers if serializers is not None else DEFAULT_SERIALIZERS

    @property
    def request(self) -> RequestState:
        """State of the invocation being handled."""
        state = _current_request.get()
        if state is None:
            raise RuntimeError("No request is being handled")
        return state

    def __call__(self, event: APIGatewayProxyEvent, context: Any = None) -> LambdaResponseDict:
        return self.handle_request(event, context)

    def handle_request(self, event: APIGatewayProxyEvent, context: Any = None) -> LambdaResponseDict:
        """Lambda entry point."""
        request = RequestState(event)
        token = _current_request.set(request)
        try:
            response = self._handle(request, event, context)
        finally:
            _current_request.reset(token)
        return response.to_lambda_response()

    def _handle(self, request: RequestState, event: APIGatewayProxyEvent, context: Any) -> LambdaResponse:
        status_code = HTTPStatus.OK.value
        serializer = self.serializers.default
        output: Optional[str] = None

        try:
            content_type = request.get_header("Content-Type") or DEFAULT_CONTENT_TYPE
            accept = request.get_header("Accept") or DEFAULT_CONTENT_TYPE
            deserializer = self.resolve_request_body_deserializer(content_type)
            serializer = self.resolve_response_body_serializer(accept)
            validator = self.resolve_request_body_validator()

            self.before(event, context)

            body = None
            if self.is_request_body_deserializable(request):
                body = deserializer.deserialize(self.raw_body_or_query_string(request))

            if self.schema is not None:
                validator.validate(body, self.schema)

            result = self.execute(body, context)
            if result is not None:
                output = serializer.serialize(result)

        except HTTPException as exc:
            logger.warning(
                "Request %s failed with %s: %s",
                request.request_id,
                exc.status_code,
                exc,
                exc_info=exc.cause is not None,
            )
            if exc.headers:
                request.response_headers.update(exc.headers)
            try:
                output = None if exc.entity is None else serializer.serialize(exc.entity)
                status_code = exc.status_code
            except Exception:
                logger.exception("Unable to serialize the error entity of %r", exc)
                return self._generic_error_response(request)

        except Exception:
            logger.exception("Unable to process request %s", request.request_id)
            return self._generic_error_response(request)

        return LambdaResponse(
            body=output,
            status_code=status_code,
            headers=request.response_headers,
            media_type=serializer.media_type,
        )

    def _generic_error_response(self, request: RequestState) -> LambdaResponse:
        return LambdaResponse(
            body=GENERIC_ERROR_BODY,
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value,
            headers=request.response_headers,
            media_type=DEFAULT_CONTENT_TYPE,
        )

    def raw_body_or_query_string(self, request: RequestState) -> Optional[str]:
        """
        The raw text to deserialize.

        For GET this is the query string parameters as JSON, for any other method
        the request body.
        """
        if request.method == "GET":
            return request.query_string_json()
        return request.body()

    def is_request_body_deserializable(self, request: RequestState) -> bool:
        """
        Whether the request body should be deserialized.

        Only when a body is present and the method is not GET, so GET requests reach
        `execute()` with `None` unless a subclass overrides this.
        """
        return bool(request.raw_body) and request.method != "GET"

    def resolve_request_body_deserializer(self, content_type: str) -> RequestBodyDeserializer:
        """Deserializer for `content_type`, JSON when none is registered."""
        return self.deserializers.resolve(content_type)

    def resolve_response_body_serializer(self, accept: str) -> ResponseBodySerializer:
        """Serializer for `accept`, JSON when none is registered."""
        return self.serializers.resolve(accept)

    def resolve_request_body_validator(self) -> RequestBodyValidator:
        return self.validator

    @abstractmethod
    def before(self, event: APIGatewayProxyEvent, context: Any) -> None:
        """
        Called before the request body is deserialized and validated.

        Raise an `HTTPException` to stop handling and respond with it.
        """

    @abstractmethod
    def execute(self, body: Any, context: Any) -> Any:
        """
        Handle the validated request body.

        The return value, unless `None`, is serialized as the response body with a
        200 status. Raise an `HTTPException` for any other outcome.
        """


class LambdaHandler(Protocol):
    def handle_request(self, event: Any, context: Any = None) -> Any: ...


def create_lambda_handler(handler: LambdaHandler) -> Callable[[Any, Any], Any]:
    """
    Create a Lambda handler function for a request handler or authorizer.

    Usage:
        lambda_handler = create_lambda_handler(GetItem())
    """

    def lambda_handler(event: Any, context: Any = None) -> Any:
        return handler.handle_request(event, context)

    return lambda_handler
