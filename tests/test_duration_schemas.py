"""Tests for Duration JSON encoding and decoding"""

import json
from typing import Optional

import pytest
from pydantic import BaseModel, ValidationError

from jsonutil.domain.exceptions import MalformedDurationTextError
from jsonutil.domain.value_objects.duration import DURATION_REGEX, Duration
from jsonutil.presentation.schemas.duration_schemas import (
    DurationJSONEncoder,
    DurationStr,
    decode_duration,
    encode_duration,
)


class RetentionConfig(BaseModel):
    """Document embedding duration fields"""

    name: str
    retention: DurationStr
    grace_period: Optional[DurationStr] = None


def test_encode_duration() -> None:
    """Test a duration encodes as a JSON string"""
    assert encode_duration(Duration(5000)) == b'"5s"'
    assert encode_duration(Duration(1500)) == b'"1500ms"'


def test_decode_duration() -> None:
    """Test a JSON string decodes into a duration"""
    assert decode_duration('"5s"') == Duration(5000)
    assert decode_duration(b'"2h"') == Duration(7200000)


def test_decode_duration_rejects_number() -> None:
    """Test a JSON number is a type mismatch"""
    with pytest.raises(ValidationError) as exc_info:
        decode_duration("5000")

    assert exc_info.value.errors()[0]["type"] == "string_type"


def test_decode_duration_rejects_malformed_text() -> None:
    """Test malformed text keeps its message and original error"""
    with pytest.raises(ValidationError) as exc_info:
        decode_duration('"7x"')

    error = exc_info.value.errors()[0]
    assert error["type"] == "value_error"
    assert '"7x"' in error["msg"]
    assert isinstance(error["ctx"]["error"], MalformedDurationTextError)


def test_decode_duration_overflow_propagates() -> None:
    """Test overflow is raised unchanged through the decoder"""
    with pytest.raises(OverflowError):
        decode_duration('"999999999999y"')


def test_model_round_trip() -> None:
    """Test durations inside a larger document"""
    config = RetentionConfig.model_validate_json(
        '{"name": "metrics", "retention": "15d", "grace_period": "90s"}'
    )

    assert config.retention == Duration(15 * 86400000)
    assert config.grace_period == Duration(90000)
    assert json.loads(config.model_dump_json()) == {
        "name": "metrics",
        "retention": "15d",
        "grace_period": "90s",
    }


def test_model_dump_modes() -> None:
    """Test both dump modes render durations as compact text"""
    config = RetentionConfig(name="logs", retention=Duration(604800000))

    assert config.model_dump() == {
        "name": "logs",
        "retention": "1w",
        "grace_period": None,
    }
    assert config.model_dump(mode="json")["retention"] == "1w"


def test_model_dump_validates_back() -> None:
    """Test dumped documents validate into an equal model"""
    config = RetentionConfig(name="logs", retention=Duration(1500), grace_period=Duration(0))

    assert RetentionConfig.model_validate(config.model_dump()) == config
    assert RetentionConfig.model_validate(config.model_dump(mode="json")) == config
    assert RetentionConfig.model_validate_json(config.model_dump_json()) == config


def test_model_rejects_number() -> None:
    """Test a number in the document aborts decoding with a type error"""
    with pytest.raises(ValidationError) as exc_info:
        RetentionConfig.model_validate_json('{"name": "metrics", "retention": 5}')

    errors = exc_info.value.errors()
    assert len(errors) == 1
    assert errors[0]["loc"] == ("retention",)
    assert errors[0]["type"] == "string_type"


def test_model_rejects_malformed_text() -> None:
    """Test the offending literal appears in the validation error"""
    with pytest.raises(ValidationError) as exc_info:
        RetentionConfig.model_validate_json('{"name": "metrics", "retention": "1h30m"}')

    assert '"1h30m"' in str(exc_info.value)


def test_model_accepts_python_values() -> None:
    """Test Duration instances and strings are accepted from Python"""
    assert RetentionConfig(name="a", retention=Duration(1)).retention == Duration(1)
    assert RetentionConfig(name="a", retention="2h").retention == Duration(7200000)

    with pytest.raises(ValidationError) as exc_info:
        RetentionConfig(name="a", retention=5000)

    assert exc_info.value.errors()[0]["type"] == "string_type"


def test_model_json_schema() -> None:
    """Test the JSON schema describes the duration grammar"""
    schema = RetentionConfig.model_json_schema()
    retention = schema["properties"]["retention"]

    assert retention["type"] == "string"
    assert retention["pattern"] == DURATION_REGEX
    assert "retention" in schema["required"]


def test_stdlib_json_encoder() -> None:
    """Test json.dumps renders durations through the encoder"""
    payload = {"timeout": Duration(5000), "tags": ["a"], "interval": Duration(60000)}

    assert json.dumps(payload, cls=DurationJSONEncoder) == (
        '{"timeout": "5s", "tags": ["a"], "interval": "1m"}'
    )

    with pytest.raises(TypeError):
        json.dumps({"value": object()}, cls=DurationJSONEncoder)
