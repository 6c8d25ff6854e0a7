"""
Tests for schema coercion.
"""

import pytest
from pydantic import BaseModel

from roundtrip import (
    Codec,
    Failure,
    Success,
    boolean,
    decode,
    integer,
    null,
    number,
    string,
    to_codec,
    unknown,
)


class Tag(BaseModel):
    label: str


class TestToCodec:
    def test_codec_passes_through(self):
        assert to_codec(string) is string

    @pytest.mark.parametrize(
        "schema, expected",
        [
            (str, string),
            (int, integer),
            (float, number),
            (bool, boolean),
            (type(None), null),
            (None, null),
            (object, unknown),
        ],
    )
    def test_primitive_types(self, schema, expected):
        assert to_codec(schema) is expected

    def test_dict(self):
        codec = to_codec({"name": str})
        assert isinstance(codec, Codec)
        assert codec.decode({"name": "a"}) == Success({"name": "a"})

    def test_list(self):
        codec = to_codec([int])
        assert codec.decode([1, 2]) == Success([1, 2])
        assert isinstance(codec.decode([1, "2"]), Failure)

    def test_list_of_many_is_union(self):
        codec = to_codec([int, str])
        assert codec.decode([1, "2"]) == Success([1, "2"])
        assert isinstance(codec.decode([1.5]), Failure)

    def test_tuple(self):
        codec = to_codec((str, int))
        assert codec.decode(["a", 1]) == Success(("a", 1))

    def test_pydantic_model(self):
        codec = to_codec(Tag)
        assert codec.decode({"label": "x"}) == Success(Tag(label="x"))

    def test_empty_list(self):
        with pytest.raises(ValueError):
            to_codec([])

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            to_codec(bytes)

    def test_unsupported_value(self):
        with pytest.raises(TypeError):
            to_codec(42)


class TestDecode:
    def test_nested_schema(self):
        schema = {"user": {"name": str, "tags": [str]}}
        assert isinstance(decode({"user": {"name": "A", "tags": []}}, schema), Success)

    def test_error_paths(self):
        schema = {"user": {"name": str}}
        result = decode({"user": {"name": None}}, schema)
        assert isinstance(result, Failure)
        assert len(result.errors) == 1
        assert result.errors[0].path == ("user", "name")
