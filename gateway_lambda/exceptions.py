import http
from typing import Any, Dict, List, Optional, Sequence, Union

from typing_extensions import Annotated, Doc

GENERIC_ERROR_MESSAGE = "Unable to process the request"


def status_phrase(status_code: int) -> str:
    """Reason phrase for `status_code`, or a generic one for unregistered codes."""
    try:
        return http.HTTPStatus(status_code).phrase
    except ValueError:
        return "HTTP error"


class HTTPException(Exception):
    """
    An HTTP error you can raise from `before()`, `execute()` or a codec to shape the
    response sent back through API Gateway.

    The `entity` is serialized with the serializer negotiated from the `Accept`
    header and becomes the response body as-is. With no entity the response has no
    body.

    Inside an authorizer, raising an `HTTPException` denies access to the requested
    resource only; any other exception denies access to every resource.

    ## Example

    ```python
    from http import HTTPStatus

    from gateway_lambda import HTTPException, RequestHandler


    class GetItem(RequestHandler):
        def before(self, event, context):
            pass

        def execute(self, body, context):
            item_id = self.request.get_path_parameter("item_id")
            if item_id not in ITEMS:
                raise HTTPException(HTTPStatus.NOT_FOUND, {"message": "Item not found"})
            return ITEMS[item_id]
    ```
    """

    def __init__(
        self,
        status_code: Annotated[
            Union[int, http.HTTPStatus],
            Doc(
                """
                HTTP status code to send to the client, from 100 to 599. Codes
                missing from `http.HTTPStatus` (499, 520, ...) are accepted.
                """
            ),
        ],
        entity: Annotated[
            Any,
            Doc(
                """
                The object to be serialized as the response body.
                """
            ),
        ] = None,
        *,
        cause: Annotated[
            Optional[BaseException],
            Doc(
                """
                The underlying error, if any. Also recorded as `__cause__`.
                """
            ),
        ] = None,
        headers: Annotated[
            Optional[Dict[str, str]],
            Doc(
                """
                Any headers to send to the client in the response.
                """
            ),
        ] = None,
    ) -> None:
        status_code = int(status_code)
        if not 100 <= status_code <= 599:
            raise ValueError(f"{status_code} is not a valid HTTP status code")
        self.status_code = status_code
        self.entity = entity
        self.cause = cause
        self.headers = headers
        message = str(cause) if cause is not None else status_phrase(status_code)
        super().__init__(f"{self.status_code}: {message}")
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        return f"{class_name}(status_code={self.status_code!r}, entity={self.entity!r})"


class RequestValidationError(HTTPException):
    """The request body violates the handler's schema (422)."""

    def __init__(
        self,
        errors: Sequence[Any],
        *,
        message: str = "Unprocessable entity",
        cause: Optional[BaseException] = None,
    ) -> None:
        self._errors: List[Any] = list(errors)
        super().__init__(
            http.HTTPStatus.UNPROCESSABLE_ENTITY,
            {"message": message, "errors": self._errors},
            cause=cause,
        )

    def errors(self) -> List[Any]:
        return self._errors


class MalformedArnError(ValueError):
    """
    A method ARN that does not have the `execute-api` shape.

    Not an `HTTPException`, so an authorizer that cannot read the ARN denies every
    resource.
    """

    def __init__(self, arn: Any) -> None:
        self.arn = arn
        super().__init__(f"Malformed execute-api ARN: {arn!r}")
