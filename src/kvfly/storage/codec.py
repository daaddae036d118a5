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
"""Value codecs — turn typed values into stored strings and back."""

from __future__ import annotations

import functools
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter

T = TypeVar("T")


@runtime_checkable
class Codec(Protocol):
    """Pluggable encode/decode pair producing and consuming strings.

    Implementations raise ``ValueError`` or ``TypeError`` on failure; storage
    adapters translate those into serialize/deserialize errors.
    """

    def encode(self, value: Any, value_type: Any = Any) -> str: ...

    def decode(self, data: str, value_type: type[T] | Any = Any) -> T: ...


@functools.lru_cache(maxsize=256)
def _adapter_for(value_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(value_type)


class JsonCodec:
    """JSON codec backed by pydantic's ``TypeAdapter``.

    Handles builtins, dataclasses, TypedDicts and pydantic models. Decoding
    validates the payload against *value_type* in strict mode: a stored
    string that does not fit the requested type fails instead of being
    coerced (``"42"`` is not an ``int``, ``1`` is not a ``bool``).
    """

    def encode(self, value: Any, value_type: Any = Any) -> str:
        return _adapter(value_type).dump_json(value).decode("utf-8")

    def decode(self, data: str, value_type: type[T] | Any = Any) -> T:
        return _adapter(value_type).validate_json(data, strict=True)  # type: ignore[no-any-return]


def _adapter(value_type: Any) -> TypeAdapter[Any]:
    try:
        hash(value_type)
    except TypeError:
        # unhashable annotations (e.g. Annotated with dict metadata)
        return TypeAdapter(value_type)
    return _adapter_for(value_type)
