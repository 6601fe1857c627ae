"""
Request body deserializers and response body serializers, keyed by media type.

The request handler picks a deserializer from the `Content-Type` header and a
serializer from the `Accept` header. Lookups are exact string matches; an
unregistered media type falls back to JSON.
"""

import json
import logging
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Dict, Generic, Iterator, Mapping, Optional, TypeVar
from urllib.parse import parse_qs

from pydantic import BaseModel
from pydantic_core import to_jsonable_python
from typing_extensions import Protocol, runtime_checkable

from gateway_lambda.exceptions import HTTPException

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
TEXT_CONTENT_TYPE = "text/plain"


@runtime_checkable
class RequestBodyDeserializer(Protocol):
    def deserialize(self, body: str) -> Any:
        """Turn a raw request body into a value, or raise an HTTPException."""
        ...


@runtime_checkable
class ResponseBodySerializer(Protocol):
    media_type: str

    def serialize(self, entity: Any) -> str:
        """Turn a value into a response body, or raise an HTTPException."""
        ...


class JSONDeserializer:
    def deserialize(self, body: str) -> Any:
        try:
            return json.loads(body)
        except ValueError as exc:
            raise HTTPException(HTTPStatus.BAD_REQUEST, {"message": "Invalid JSON Object"}, cause=exc)


class JSONSerializer:
    """
    JSON serializer.

    Anything pydantic can dump in JSON mode is accepted: models, dataclasses,
    datetimes, UUIDs, enums and so on.
    """

    media_type = DEFAULT_CONTENT_TYPE

    def serialize(self, entity: Any) -> str:
        try:
            return json.dumps(
                to_jsonable_python(entity),
                ensure_ascii=False,
                indent=None,
                separators=(",", ":"),
            )
        except (TypeError, ValueError) as exc:
            raise HTTPException(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"message": "Unable to serialize the response body"},
                cause=exc,
            )


class FormDeserializer:
    """
    application/x-www-form-urlencoded deserializer.

    Keys given once map to a string, repeated keys map to the list of their values.
    """

    def deserialize(self, body: str) -> Dict[str, Any]:
        try:
            parsed = parse_qs(body, keep_blank_values=True)
        except ValueError as exc:
            raise HTTPException(HTTPStatus.BAD_REQUEST, {"message": "Invalid form body"}, cause=exc)
        return {k: v[0] if len(v) == 1 else v for k, v in parsed.items()}


class PlainTextDeserializer:
    def deserialize(self, body: str) -> str:
        return body


class PlainTextSerializer:
    """
    text/plain serializer.

    Scalars are rendered with `str()`. Mappings, lists and models, such as the
    `{"message": ...}` error entities, are rendered as JSON.
    """

    media_type = TEXT_CONTENT_TYPE

    def serialize(self, entity: Any) -> str:
        if isinstance(entity, bytes):
            return entity.decode("utf-8")
        if isinstance(entity, (Mapping, list, tuple, BaseModel)):
            return _json_serializer.serialize(entity)
        return str(entity)


T = TypeVar("T")


class CodecRegistry(Mapping[str, T], Generic[T]):
    """
    Read-only lookup table from media type to codec.

    Built once and never mutated; `with_codec` returns a new registry.
    """

    def __init__(self, codecs: Mapping[str, T], default: T) -> None:
        self._codecs: Mapping[str, T] = MappingProxyType(dict(codecs))
        self.default = default

    def __getitem__(self, media_type: str) -> T:
        return self._codecs[media_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._codecs)

    def __len__(self) -> int:
        return len(self._codecs)

    def __repr__(self) -> str:
        return f"CodecRegistry({sorted(self._codecs)!r})"

    def resolve(self, media_type: Optional[str]) -> T:
        """Return the codec registered for `media_type`, or the default."""
        if media_type is None:
            return self.default
        codec = self._codecs.get(media_type)
        if codec is None:
            logger.debug("No codec registered for %r, using default", media_type)
            return self.default
        return codec

    def with_codec(self, media_type: str, codec: T) -> "CodecRegistry[T]":
        codecs = dict(self._codecs)
        codecs[media_type] = codec
        return CodecRegistry(codecs, self.default)


_json_deserializer = JSONDeserializer()
_json_serializer = JSONSerializer()

DEFAULT_DESERIALIZERS: CodecRegistry[RequestBodyDeserializer] = CodecRegistry(
    {
        DEFAULT_CONTENT_TYPE: _json_deserializer,
        FORM_CONTENT_TYPE: FormDeserializer(),
        TEXT_CONTENT_TYPE: PlainTextDeserializer(),
    },
    default=_json_deserializer,
)

DEFAULT_SERIALIZERS: CodecRegistry[ResponseBodySerializer] = CodecRegistry(
    {
        DEFAULT_CONTENT_TYPE: _json_serializer,
        TEXT_CONTENT_TYPE: PlainTextSerializer(),
    },
    default=_json_serializer,
)
