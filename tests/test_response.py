"""Test the response envelope."""

from gateway_lambda.response import LambdaResponse


def test_to_lambda_response():
    """Test the API Gateway proxy response shape."""
    response = LambdaResponse('{"ok":true}', status_code=201, headers={"X-Custom": "v"}, media_type="application/json")

    assert response.to_lambda_response() == {
        "statusCode": 201,
        "headers": {"X-Custom": "v", "Content-Type": "application/json"},
        "body": '{"ok":true}',
        "isBase64Encoded": False,
    }


def test_none_body():
    """Test an absent body stays absent and sets no content type."""
    response = LambdaResponse(None, status_code=204, media_type="application/json")

    assert response.to_lambda_response() == {
        "statusCode": 204,
        "headers": {},
        "body": None,
        "isBase64Encoded": False,
    }


def test_existing_content_type_kept():
    """Test a content type set by the handler is not overwritten."""
    response = LambdaResponse("<xml/>", headers={"content-type": "application/xml"}, media_type="application/json")
    assert response.headers == {"content-type": "application/xml"}


def test_headers_are_copied():
    headers = {"X-A": "1"}
    response = LambdaResponse("x", headers=headers, media_type="text/plain")
    assert headers == {"X-A": "1"}
    assert response.headers["Content-Type"] == "text/plain"
