# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for JsonCodec."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, TypedDict

import pytest
from pydantic import BaseModel

from kvfly.storage import codec as codec_module
from kvfly.storage.codec import Codec, JsonCodec


@dataclass
class Point:
    x: int
    y: int


class User(BaseModel):
    name: str
    age: int


class Settings(TypedDict):
    theme: str


class Color(Enum):
    RED = "red"


class Opaque:
    pass


class TestJsonCodec:
    def test_implements_codec(self):
        assert isinstance(JsonCodec(), Codec)

    def test_encodes_compact_json(self):
        assert JsonCodec().encode({"a": [1, 2]}, dict) == '{"a":[1,2]}'

    def test_dataclass(self):
        codec = JsonCodec()
        data = codec.encode(Point(1, 2), Point)
        assert codec.decode(data, Point) == Point(1, 2)

    def test_pydantic_model(self):
        codec = JsonCodec()
        data = codec.encode(User(name="Ada", age=36), User)
        assert codec.decode(data, User) == User(name="Ada", age=36)

    def test_typed_dict(self):
        codec = JsonCodec()
        assert codec.decode(codec.encode({"theme": "dark"}, Settings), Settings) == {"theme": "dark"}

    def test_decode_any_returns_plain_json(self):
        assert JsonCodec().decode('{"x":1,"y":2}', Any) == {"x": 1, "y": 2}

    def test_decode_invalid_json_raises_value_error(self):
        with pytest.raises(ValueError):
            JsonCodec().decode("{not json", dict)

    def test_decode_mismatched_type_raises_value_error(self):
        with pytest.raises(ValueError):
            JsonCodec().decode('{"name":"Ada"}', User)

    def test_encode_unserializable_raises_value_error(self):
        with pytest.raises(ValueError):
            JsonCodec().encode({"handle": object()}, dict)

    def test_string_is_not_coerced_to_int(self):
        with pytest.raises(ValueError):
            JsonCodec().decode('"42"', int)

    def test_int_is_not_coerced_to_bool(self):
        with pytest.raises(ValueError):
            JsonCodec().decode("1", bool)

    def test_float_is_not_coerced_to_int(self):
        with pytest.raises(ValueError):
            JsonCodec().decode("3.0", int)

    def test_json_native_encodings_still_decode(self):
        codec = JsonCodec()
        when = datetime(2026, 1, 2, 3, 4, 5)
        assert codec.decode(codec.encode(when, datetime), datetime) == when
        assert codec.decode(codec.encode(Color.RED, Color), Color) is Color.RED
        assert codec.decode(codec.encode([Point(1, 2)], list[Point]), list[Point]) == [Point(1, 2)]

    def test_unhashable_annotation_is_supported(self):
        assert JsonCodec().decode("5", Annotated[int, {"unit": "s"}]) == 5

    def test_unsupported_type_builds_adapter_once(self, monkeypatch):
        built: list[Any] = []
        real_adapter = codec_module.TypeAdapter

        def counting_adapter(value_type):
            built.append(value_type)
            return real_adapter(value_type)

        monkeypatch.setattr(codec_module, "TypeAdapter", counting_adapter)
        codec_module._adapter_for.cache_clear()
        with pytest.raises(TypeError):
            JsonCodec().decode("{}", Opaque)
        assert built == [Opaque]
