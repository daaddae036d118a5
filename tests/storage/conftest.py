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
"""In-memory stand-ins for the redis connection layer used by RedisStorage."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from kvfly.storage.adapters.redis import RedisStorage


class FakeServer:
    """Minimal server answering GET/SET/DEL/EXISTS/TTL like Redis does."""

    def __init__(self) -> None:
        self.data: dict[str, tuple[str, float | None]] = {}
        self.commands: list[tuple[Any, ...]] = []
        self.opened = 0
        self.closed = 0
        self.down = False
        self.max_connections: int | None = None
        self.error: str | None = None
        self.reply_override: Any = None
        self.before_get: Callable[[str], None] | None = None
        self._lock = threading.Lock()

    def _live(self, key: str) -> tuple[str, float | None] | None:
        entry = self.data.get(key)
        if entry is not None and entry[1] is not None and time.monotonic() >= entry[1]:
            del self.data[key]
            return None
        return entry

    def execute(self, *args: Any) -> Any:
        name, key = args[0], args[1]
        if name == "GET" and self.before_get is not None:
            self.before_get(key)
        with self._lock:
            self.commands.append(args)
            if self.error is not None:
                return ResponseError(self.error)
            if self.reply_override is not None:
                return self.reply_override
            if name == "GET":
                entry = self._live(key)
                return None if entry is None else entry[0]
            if name == "SET":
                _, _, value, option, seconds = args
                assert option == "EX"
                if seconds <= 0:
                    return ResponseError("ERR invalid expire time in 'set' command")
                self.data[key] = (value, time.monotonic() + seconds)
                return "OK"
            if name == "DEL":
                return 1 if self.data.pop(key, None) is not None else 0
            if name == "EXISTS":
                return 1 if self._live(key) is not None else 0
            if name == "TTL":
                entry = self._live(key)
                if entry is None:
                    return -2
                if entry[1] is None:
                    return -1
                return round(entry[1] - time.monotonic())
            return ResponseError(f"ERR unknown command '{name}'")


class FakeConnection:
    def __init__(self, server: FakeServer) -> None:
        self._server = server
        self._connected = False
        self._pending: tuple[Any, ...] | None = None

    def connect(self) -> None:
        if self._server.down:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")
        self._connected = True
        self._server.opened += 1

    def send_command(self, *args: Any) -> None:
        assert self._connected
        self._pending = args

    def read_response(self) -> Any:
        assert self._pending is not None
        reply = self._server.execute(*self._pending)
        self._pending = None
        if isinstance(reply, ResponseError):
            raise reply
        return reply

    def disconnect(self) -> None:
        if self._connected:
            self._connected = False
            self._server.closed += 1


class FakePool:
    """Connection factory matching ``redis.ConnectionPool.make_connection``."""

    def __init__(self, server: FakeServer) -> None:
        self._server = server

    def make_connection(self) -> FakeConnection:
        cap = self._server.max_connections
        if cap is not None and self._server.opened - self._server.closed >= cap:
            raise RedisConnectionError("Too many connections")
        return FakeConnection(self._server)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def storage(server: FakeServer) -> RedisStorage:
    return RedisStorage(FakePool(server), timedelta(seconds=60))


@pytest.fixture
def make_storage(server: FakeServer) -> Callable[[timedelta], RedisStorage]:
    def _make(ttl: timedelta) -> RedisStorage:
        return RedisStorage(FakePool(server), ttl)

    return _make
