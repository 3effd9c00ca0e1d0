"""JSON schemas and codecs for Duration values

Durations travel through JSON as strings in the compact notation, e.g.
``{"timeout": "90s"}``. Annotate model fields with ``DurationStr`` to get
parsing on validation and formatting on serialization, in both python and
json modes, so dumped documents always validate back into the same model.
"""

import json
from typing import Annotated, Any, Union

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler, TypeAdapter
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import PydanticKnownError, core_schema

from jsonutil.domain.value_objects.duration import (
    DURATION_REGEX,
    Duration,
    format_duration,
    parse_duration,
)


def _validate_python(value: Any) -> Duration:
    """Accept Duration instances as-is and parse strings"""
    if isinstance(value, Duration):
        return value
    if not isinstance(value, str):
        raise PydanticKnownError("string_type")
    return parse_duration(value)


class _DurationPydanticAnnotation:
    """Registers parse/format for Duration with pydantic"""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, _source_type: Any, _handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # JSON input must already be a string; numbers fail with string_type
        from_json_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(strict=True),
                core_schema.no_info_plain_validator_function(parse_duration),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_json_schema,
            python_schema=core_schema.no_info_plain_validator_function(_validate_python),
            serialization=core_schema.plain_serializer_function_ser_schema(format_duration),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: core_schema.CoreSchema, _handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "pattern": DURATION_REGEX, "examples": ["90s", "2h", "1500ms"]}


DurationStr = Annotated[Duration, _DurationPydanticAnnotation]

duration_adapter: TypeAdapter[Duration] = TypeAdapter(DurationStr)


def encode_duration(duration: Duration) -> bytes:
    """Encode a duration as a JSON string document, e.g. b'"5s"'"""
    return duration_adapter.dump_json(duration)


def decode_duration(data: Union[str, bytes]) -> Duration:
    """Decode a JSON string document into a Duration.

    Raises:
        pydantic.ValidationError: If the document is not a JSON string
            (error type ``string_type``) or the string is not a valid
            duration (error type ``value_error``, original error in ctx).
        OverflowError: If the duration does not fit in a timedelta.
    """
    return duration_adapter.validate_json(data)


class DurationJSONEncoder(json.JSONEncoder):
    """json.JSONEncoder that writes Duration values in compact notation"""

    def default(self, o: Any) -> Any:
        if isinstance(o, Duration):
            return format_duration(o)
        return super().default(o)
