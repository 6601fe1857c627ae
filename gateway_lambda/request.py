"""
Per-invocation request state built from an API Gateway proxy event.
"""

import base64
import binascii
import json
from http import HTTPStatus
from typing import Any, Dict, Optional

from gateway_lambda.exceptions import HTTPException
from gateway_lambda.types import APIGatewayProxyEvent


class RequestState:
    """
    Request attributes copied from the Lambda event, plus the response headers
    accumulated while the request is handled.

    One instance per invocation; it is discarded once the response is built.
    """

    def __init__(self, event: APIGatewayProxyEvent):
        self.path: Optional[str] = event.get("path")
        self.http_method: Optional[str] = event.get("httpMethod")
        self.resource: Optional[str] = event.get("resource")
        self.headers: Dict[str, str] = dict(event.get("headers") or {})
        self.path_parameters: Dict[str, str] = dict(event.get("pathParameters") or {})
        self.query_string_parameters: Dict[str, str] = dict(event.get("queryStringParameters") or {})
        self.stage_variables: Dict[str, str] = dict(event.get("stageVariables") or {})
        self.request_context: Dict[str, Any] = dict(event.get("requestContext") or {})
        self.raw_body: Optional[str] = event.get("body")
        self.is_base64_encoded: bool = bool(event.get("isBase64Encoded", False))
        self.response_headers: Dict[str, str] = {}

    @property
    def method(self) -> str:
        """Upper-cased HTTP method, empty if the event carries none."""
        return (self.http_method or "").upper()

    @property
    def request_id(self) -> str:
        """API Gateway request ID."""
        return self.request_context.get("requestId", "")

    def get_header(self, name: str) -> Optional[str]:
        """
        Header value by name.

        Exact match first, then case-insensitive: REST APIs keep the client's
        casing while HTTP APIs lowercase every header name.
        """
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def get_path_parameter(self, name: str) -> Optional[str]:
        return self.path_parameters.get(name)

    def get_query_string_parameter(self, name: str) -> Optional[str]:
        return self.query_string_parameters.get(name)

    def get_stage_variable(self, name: str) -> Optional[str]:
        return self.stage_variables.get(name)

    def get_request_context_parameter(self, name: str) -> Any:
        return self.request_context.get(name)

    def body(self) -> Optional[str]:
        """Request body as text, base64-decoded when the gateway encoded it."""
        if self.raw_body is None or not self.is_base64_encoded:
            return self.raw_body
        try:
            return base64.b64decode(self.raw_body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise HTTPException(HTTPStatus.BAD_REQUEST, {"message": "Invalid base64 body"}, cause=exc)

    def query_string_json(self) -> str:
        """Query string parameters as a JSON document."""
        return json.dumps(self.query_string_parameters)

    def add_response_header(self, name: str, value: str) -> None:
        self.response_headers[name] = value

    def cors(self, allowed_origin: str) -> None:
        """Allow cross-origin requests from `allowed_origin` ("*" for any)."""
        self.add_response_header("Access-Control-Allow-Origin", allowed_origin)
