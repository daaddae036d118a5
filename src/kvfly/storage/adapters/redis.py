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
"""Redis-backed storage adapter."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from datetime import timedelta
from typing import Any, TypeVar

import redis
from redis.exceptions import RedisError

from kvfly.kernel.exceptions import (
    DeserializeException,
    QueryException,
    SerializeException,
    StorageConnectionException,
)
from kvfly.storage.codec import Codec, JsonCodec
from kvfly.storage.commands import Command

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_OPTIONAL_STR = str | None


class RedisStorage:
    """Storage adapter that talks to a Redis server one connection at a time.

    The adapter holds a ``redis.ConnectionPool`` purely as a connection
    factory: every operation creates a fresh connection with
    ``make_connection()``, uses it for exactly one command and disconnects it
    on every exit path. Values are encoded to strings with a :class:`Codec`
    (JSON by default) and every write carries the adapter's default TTL.

    ``insert`` and ``remove`` read the current value in a separate round trip
    before writing, so the previous value they return is not atomic with the
    write.
    """

    def __init__(self, pool: Any, ttl: timedelta, codec: Codec | None = None) -> None:
        if ttl.total_seconds() < 1:
            raise ValueError(f"TTL must be at least one second, got {ttl!r}")
        self._pool = pool
        self._ttl = ttl
        self._codec: Codec = codec if codec is not None else JsonCodec()

    @classmethod
    def from_url(cls, url: str, ttl: timedelta, codec: Codec | None = None) -> RedisStorage:
        """Build an adapter from a ``redis://[:password@]host:port[/db]`` URL.

        Only the URL is validated here; an unreachable server surfaces as a
        :class:`StorageConnectionException` on first use.
        """
        try:
            pool = redis.ConnectionPool.from_url(url, decode_responses=True)
        except (ValueError, RedisError) as exc:
            raise StorageConnectionException(str(exc)) from exc
        return cls(pool, ttl, codec)

    @property
    def default_ttl(self) -> timedelta:
        return self._ttl

    # -- execution port -------------------------------------------------

    @contextlib.contextmanager
    def _connection(self) -> Iterator[Any]:
        connection = None
        try:
            connection = self._pool.make_connection()
            connection.connect()
        except RedisError as exc:
            if connection is not None:
                connection.disconnect()
            raise StorageConnectionException(str(exc)) from exc
        try:
            yield connection
        finally:
            connection.disconnect()

    def execute_command(self, command: Command, result_type: type[T] | Any) -> T:
        """Send *command* over a fresh connection and convert the reply."""
        _logger.debug("Executing %s for key '%s'", command.kind, command.key)
        with self._connection() as connection:
            try:
                connection.send_command(*command.args())
                reply = connection.read_response()
            except RedisError as exc:
                raise QueryException(str(exc)) from exc
        return _convert_reply(reply, result_type)  # type: ignore[no-any-return]

    # -- capabilities ---------------------------------------------------

    def _get(self, key: str, value_type: Any) -> Any | None:
        data = self.execute_command(Command.get(key), _OPTIONAL_STR)
        if data is None:
            return None
        try:
            return self._codec.decode(data, value_type)
        except (ValueError, TypeError) as exc:
            _logger.warning("Failed to deserialize stored value for key '%s'", key)
            raise DeserializeException(key, str(exc)) from exc

    def get(self, key: Any, value_type: type[T] | Any = Any) -> T | None:
        """Read and decode the value stored under *key*, or ``None`` if absent."""
        return self._get(str(key), value_type)  # type: ignore[no-any-return]

    def exists(self, key: Any) -> bool:
        return self.execute_command(Command.exists(str(key)), bool)  # type: ignore[no-any-return]

    def insert(self, key: Any, value: T, value_type: type[T] | Any | None = None) -> T | None:
        """Store *value* under *key* with the default TTL; return the previous value."""
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
        self.execute_command(Command.set(key, encoded, self._ttl), None)
        return previous  # type: ignore[no-any-return]

    def remove(self, key: Any, value_type: type[T] | Any = Any) -> T | None:
        """Delete *key* and return the value it held, if any."""
        key = str(key)
        previous = self._get(key, value_type)
        self.execute_command(Command.delete(key), None)
        return previous  # type: ignore[no-any-return]

    def ttl(self, key: Any) -> timedelta:
        """Remaining time-to-live as reported by the server, in whole seconds.

        Redis answers ``-2`` for a missing key and ``-1`` for a key without
        expiry; those are returned as negative durations.
        """
        seconds = self.execute_command(Command.ttl(str(key)), int)
        return timedelta(seconds=seconds)


def _convert_reply(reply: Any, result_type: Any) -> Any:
    """Convert a raw RESP reply into *result_type*."""
    if result_type is None or result_type is type(None):
        return None
    if isinstance(reply, bytes):
        reply = reply.decode("utf-8")
    if result_type == _OPTIONAL_STR:
        if reply is None or isinstance(reply, str):
            return reply
    elif result_type is bool:
        if isinstance(reply, int):
            return reply > 0
    elif result_type is int:
        if isinstance(reply, int) and not isinstance(reply, bool):
            return reply
    else:
        raise QueryException(f"Unsupported result type {result_type!r}")
    raise QueryException(f"Unexpected reply {reply!r} for result type {result_type!r}")
