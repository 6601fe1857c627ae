"""
API Gateway proxy response envelope.
"""

from typing import Dict, Optional

from gateway_lambda.types import LambdaResponse as LambdaResponseDict


class LambdaResponse:
    """
    An already-serialized response that converts to the API Gateway proxy
    response format.
    """

    def __init__(
        self,
        body: Optional[str] = None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        media_type: Optional[str] = None,
    ):
        self.body = body
        self.status_code = status_code
        self.media_type = media_type
        self.headers = dict(headers or {})

        # Set content-type if there is a body and the handler did not set one
        if body is not None and media_type and "content-type" not in {k.lower() for k in self.headers}:
            self.headers["Content-Type"] = media_type

    def to_lambda_response(self) -> LambdaResponseDict:
        """Convert to API Gateway Lambda response format."""
        return {
            "statusCode": self.status_code,
            "headers": self.headers,
            "body": self.body,
            "isBase64Encoded": False,
        }
