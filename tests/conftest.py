"""Pytest configuration and shared fixtures."""

import json
import logging
from typing import Any, Dict, Tuple, Union

import pytest

from gateway_lambda.logging_config import LOGGER_NAME, CustomJsonFormatter
from gateway_lambda.types import LambdaContext, LambdaResponse


@pytest.fixture(autouse=True)
def package_logger():
    """Run each test against an unconfigured gateway_lambda logger.

    Importing a Lambda module that calls configure_logging() (the examples do)
    turns propagation off, which hides records from caplog.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level, handlers, propagate = logger.level, list(logger.handlers), logger.propagate
    logger.handlers = [h for h in handlers if not isinstance(h.formatter, CustomJsonFormatter)]
    logger.propagate = True
    yield logger
    logger.handlers = handlers
    logger.propagate = propagate
    logger.setLevel(level)


class MockLambdaContext(LambdaContext):
    """Mock Lambda context for testing."""

    function_name = "gateway-lambda-test"
    memory_limit_in_mb = 128
    invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:gateway-lambda-test"
    aws_request_id = "test-request-id-12345"


@pytest.fixture
def lambda_context() -> LambdaContext:
    """Provide mock Lambda context."""
    return MockLambdaContext()


def parse_response(response: Union[Dict[str, Any], LambdaResponse]) -> Tuple[int, Dict[str, Any]]:
    """Parse Lambda response into status code and body dict."""
    status_code = response["statusCode"]
    body = json.loads(response["body"]) if response.get("body") else {}
    return status_code, body
