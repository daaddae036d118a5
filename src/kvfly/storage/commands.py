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
"""Wire command descriptors for the cache server."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum


class CommandKind(StrEnum):
    """The five primitive operations issued to the cache server."""

    GET = "GET"
    SET = "SET"
    DEL = "DEL"
    EXISTS = "EXISTS"
    TTL = "TTL"


@dataclass(frozen=True)
class Command:
    """One store operation, built per call and consumed by an executor."""

    kind: CommandKind
    key: str
    value: str | None = None
    expire: timedelta | None = None

    @classmethod
    def get(cls, key: str) -> Command:
        return cls(CommandKind.GET, key)

    @classmethod
    def exists(cls, key: str) -> Command:
        return cls(CommandKind.EXISTS, key)

    @classmethod
    def set(cls, key: str, value: str, ttl: timedelta) -> Command:
        """Store *value* under *key*, expiring after *ttl* (single atomic SET ... EX)."""
        return cls(CommandKind.SET, key, value=value, expire=ttl)

    @classmethod
    def delete(cls, key: str) -> Command:
        return cls(CommandKind.DEL, key)

    @classmethod
    def ttl(cls, key: str) -> Command:
        return cls(CommandKind.TTL, key)

    def args(self) -> tuple[str | int, ...]:
        """Render the command as positional wire arguments."""
        if self.kind is CommandKind.SET:
            seconds = int(self.expire.total_seconds()) if self.expire is not None else 0
            return (self.kind.value, self.key, self.value or "", "EX", seconds)
        return (self.kind.value, self.key)
