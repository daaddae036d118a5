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
"""In-memory storage adapter."""

from __future__ import annotations

import math
import threading
import time
from datetime import timedelta
from typing import Any, TypeVar

from kvfly.kernel.exceptions import DeserializeException, SerializeException
from kvfly.storage.codec import Codec, JsonCodec

T = TypeVar("T")

_MISSING_TTL = -2
_NO_EXPIRY_TTL = -1


class InMemoryStorage:
    """In-memory storage with the same contracts as :class:`RedisStorage`.

    Suitable for development, testing, and single-process applications.
    Values are kept as encoded strings so codec failures behave exactly as
    they do against a server. Expired entries are dropped lazily on access.
    """

    def __init__(self, ttl: timedelta | None = None, codec: Codec | None = None) -> None:
        self._ttl = ttl
        self._codec: Codec = codec if codec is not None else JsonCodec()
        self._store: dict[str, tuple[str, float | None]] = {}
        self._lock = threading.Lock()

    @property
    def default_ttl(self) -> timedelta | None:
        return self._ttl

    def _live_entry(self, key: str) -> tuple[str, float | None] | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._store[key]
            return None
        return entry

    def _get(self, key: str, value_type: Any) -> Any | None:
        with self._lock:
            entry = self._live_entry(key)
        if entry is None:
            return None
        try:
            return self._codec.decode(entry[0], value_type)
        except (ValueError, TypeError) as exc:
            raise DeserializeException(key, str(exc)) from exc

    def get(self, key: Any, value_type: type[T] | Any = Any) -> T | None:
        return self._get(str(key), value_type)  # type: ignore[no-any-return]

    def exists(self, key: Any) -> bool:
        with self._lock:
            return self._live_entry(str(key)) is not None

    def insert(self, key: Any, value: T, value_type: type[T] | Any | None = None) -> T | None:
        key = str(key)
        if value is None:
            raise SerializeException(key, "None cannot be stored, it would read back as an absent key")
        if value_type is None:
            value_type = type(value)
        previous = self._get(key, value_type)
        try:
            encoded = self._codec.encode(value, value_type)
        except (ValueError, TypeError) as exc:
            raise SerializeException(key, str(exc)) from exc
        expires_at = None
        if self._ttl is not None:
            expires_at = time.monotonic() + self._ttl.total_seconds()
        with self._lock:
            self._store[key] = (encoded, expires_at)
        return previous  # type: ignore[no-any-return]

    def remove(self, key: Any, value_type: type[T] | Any = Any) -> T | None:
        key = str(key)
        previous = self._get(key, value_type)
        with self._lock:
            self._store.pop(key, None)
        return previous  # type: ignore[no-any-return]

    def ttl(self, key: Any) -> timedelta:
        """Remaining TTL in whole seconds; ``-2`` if missing, ``-1`` if the key never expires."""
        with self._lock:
            entry = self._live_entry(str(key))
        if entry is None:
            return timedelta(seconds=_MISSING_TTL)
        expires_at = entry[1]
        if expires_at is None:
            return timedelta(seconds=_NO_EXPIRY_TTL)
        # Redis rounds the remaining milliseconds to the nearest second
        return timedelta(seconds=max(0, math.floor(expires_at - time.monotonic() + 0.5)))

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._store.clear()
