"""
Request body validation.

A validator is anything with `validate(entity, schema)` that returns quietly when
`entity` satisfies `schema` and raises an `HTTPException` otherwise. Schemas are
opaque to the request handler; the default validator hands them to pydantic, so
a schema can be a `BaseModel` subclass, any type pydantic understands
(`Dict[str, int]`, a `TypedDict`, a dataclass, `Annotated[...]`) or a
`TypeAdapter`.
"""

import json
import logging
from functools import lru_cache
from http import HTTPStatus
from typing import Any

from pydantic import TypeAdapter, ValidationError
from typing_extensions import Protocol, runtime_checkable

from gateway_lambda.exceptions import GENERIC_ERROR_MESSAGE, HTTPException, RequestValidationError

logger = logging.getLogger(__name__)


@runtime_checkable
class RequestBodyValidator(Protocol):
    def validate(self, entity: Any, schema: Any) -> None:
        """Raise an HTTPException if `entity` violates `schema`."""
        ...


@lru_cache(maxsize=128)
def _cached_type_adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def get_type_adapter(schema: Any) -> TypeAdapter:
    if isinstance(schema, TypeAdapter):
        return schema
    try:
        hash(schema)
    except TypeError:
        # Unhashable schema
        return TypeAdapter(schema)
    return _cached_type_adapter(schema)


class PydanticRequestBodyValidator:
    """
    Validates request bodies with pydantic.

    Constraint violations raise a `RequestValidationError` (422) whose body lists
    every violation. A schema pydantic cannot build a validator for raises a 500.
    """

    def validate(self, entity: Any, schema: Any) -> None:
        try:
            adapter = get_type_adapter(schema)
            adapter.validate_python(entity)
        except ValidationError as exc:
            errors = json.loads(exc.json(include_url=False))
            raise RequestValidationError(errors, cause=exc)
        except Exception as exc:
            logger.exception("Request body validator failed for schema %r", schema)
            raise HTTPException(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"message": GENERIC_ERROR_MESSAGE},
                cause=exc,
            )


DEFAULT_VALIDATOR = PydanticRequestBodyValidator()
